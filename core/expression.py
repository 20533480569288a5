"""core/expression.py - 以扁平Token序列表示的数学表达式"""
from core.token_system import RPNValidator, Token


class Expression:
    """不可变的Token序列，标记为中缀或后缀

    所有操作都返回新的Expression，不修改输入。
    """

    __slots__ = ('_tokens', '_postfix')

    def __init__(self, tokens=(), postfix=True):
        tokens = tuple(tokens)
        for token in tokens:
            if not isinstance(token, Token):
                raise TypeError(f"Expression items must be Token, got {type(token).__name__}")
        self._tokens = tokens
        self._postfix = bool(postfix)

    @property
    def tokens(self):
        return self._tokens

    @property
    def postfix(self):
        """True 表示后缀表达式，False 表示中缀表达式"""
        return self._postfix

    def is_well_formed(self):
        """检查后缀不变量（中缀表达式总是返回False）"""
        return self._postfix and RPNValidator.is_valid_expression(self._tokens)

    # 序列接口

    def __len__(self):
        return len(self._tokens)

    def __iter__(self):
        return iter(self._tokens)

    def __getitem__(self, index):
        # 切片返回Token元组（片段不一定是完整表达式）
        return self._tokens[index]

    def __eq__(self, other):
        if not isinstance(other, Expression):
            return NotImplemented
        return self._postfix == other._postfix and self._tokens == other._tokens

    def __hash__(self):
        return hash((self._postfix, self._tokens))

    def __repr__(self):
        form = 'postfix' if self._postfix else 'infix'
        return f"Expression({self}, {form})"

    def __str__(self):
        from utils.render import render
        return render(self)

    # 便捷方法

    def to_postfix(self):
        from parsing.shunting_yard import to_postfix
        return to_postfix(self)

    def evaluate(self, z=0j):
        from core.rpn_evaluator import RPNEvaluator
        return RPNEvaluator.evaluate(self, z)

    def differentiate(self):
        from calculus.differentiator import differentiate
        return differentiate(self.to_postfix())
