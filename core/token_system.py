"""core/token_system.py"""
from enum import Enum
from types import MappingProxyType

from core.errors import OperationNotFound, UnknownDerivative
from core.operators import Operators


class TokenType(Enum):
    VARIABLE = "variable"  # 自由变量 z
    CONSTANT = "constant"  # 复数常数
    BINARY_OP = "binary_op"  # 二元操作符
    UNARY_FUNC = "unary_func"  # 一元函数（包括取负）
    BRACKET = "bracket"  # 括号，只出现在中缀表达式中


class Operation(Enum):
    L_BRACKET = "l_bracket"
    R_BRACKET = "r_bracket"
    ADD = "add"
    SUB = "sub"
    NEG = "neg"
    MUL = "mul"
    DIV = "div"
    POW = "pow"
    RE = "re"
    IM = "im"
    ABS = "abs"
    ARG = "arg"
    CONJ = "conj"
    EXP = "exp"
    LOG = "log"
    COS = "cos"
    SIN = "sin"
    TAN = "tan"
    SEC = "sec"
    CSC = "csc"
    COT = "cot"
    ACOS = "acos"
    ASIN = "asin"
    ATAN = "atan"
    COSH = "cosh"
    SINH = "sinh"
    TANH = "tanh"
    ACOSH = "acosh"
    ASINH = "asinh"
    ATANH = "atanh"
    DERIV = "deriv"


class Token:
    """表达式中的单个元素：变量、常数、操作符或括号

    operation 仅对操作符和括号有值；value 仅对常数有意义（变量约定为0）。
    Token 创建后不可修改，表达式和导数片段表之间会共享同一个Token对象。
    """

    __slots__ = ('type', 'operation', 'value')

    def __init__(self, token_type, operation=None, value=0j):
        object.__setattr__(self, 'type', token_type)
        object.__setattr__(self, 'operation', operation)
        object.__setattr__(self, 'value', complex(value))

    def __setattr__(self, name, value):
        raise AttributeError(f"Token is immutable, cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Token is immutable, cannot delete {name!r}")

    @classmethod
    def variable(cls):
        return cls(TokenType.VARIABLE)

    @classmethod
    def constant(cls, value):
        return cls(TokenType.CONSTANT, value=value)

    @classmethod
    def operator(cls, operation):
        return cls(get_token_type(operation), operation)

    @property
    def is_operand(self):
        return self.type in (TokenType.VARIABLE, TokenType.CONSTANT)

    @property
    def arity(self):
        """需要的操作数个数"""
        if self.type == TokenType.BINARY_OP:
            return 2
        if self.type == TokenType.UNARY_FUNC:
            return 1
        return 0

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        if self.type != other.type or self.operation != other.operation:
            return False
        # 变量的value没有意义，不参与比较
        return self.type != TokenType.CONSTANT or self.value == other.value

    def __hash__(self):
        if self.type == TokenType.CONSTANT:
            return hash((self.type, self.value))
        return hash((self.type, self.operation))

    def __repr__(self):
        if self.type == TokenType.CONSTANT:
            return f"Token(CONSTANT, {self.value!r})"
        if self.type == TokenType.VARIABLE:
            return "Token(VARIABLE)"
        return f"Token({self.type.name}, {self.operation.name})"


class OperationInfo:
    """操作符表中的一项"""

    def __init__(self, token_type, precedence, symbol, evaluator=None, derivative=None):
        self.type = token_type
        self.precedence = precedence
        self.symbol = symbol
        self.evaluator = evaluator
        # 导数片段：以变量z作为参数占位符的后缀Token元组
        self.derivative = derivative


# 构造导数片段用的简写
_Z = Token(TokenType.VARIABLE)


def _c(value):
    return Token(TokenType.CONSTANT, value=value)


def _f(operation):
    return Token(TokenType.UNARY_FUNC, operation)


def _b(operation):
    return Token(TokenType.BINARY_OP, operation)


_ADD, _SUB, _MUL, _DIV, _POW = (_b(Operation.ADD), _b(Operation.SUB), _b(Operation.MUL),
                                _b(Operation.DIV), _b(Operation.POW))
_NEG = _f(Operation.NEG)
_HALF, _ONE, _TWO = _c(0.5), _c(1.0), _c(2.0)

# 1 - z^2
_ONE_MINUS_Z_SQUARED = (_ONE, _Z, _TWO, _POW, _SUB)

# 已知导数的函数：f'(z) 的后缀形式
DERIVATIVE_FRAGMENTS = MappingProxyType({
    Operation.NEG: (_c(-1.0),),
    Operation.EXP: (_Z, _f(Operation.EXP)),
    Operation.LOG: (_ONE, _Z, _DIV),
    Operation.SIN: (_Z, _f(Operation.COS)),
    Operation.COS: (_Z, _f(Operation.SIN), _NEG),
    Operation.TAN: (_Z, _f(Operation.SEC), _TWO, _POW),
    Operation.SEC: (_Z, _f(Operation.SEC), _Z, _f(Operation.TAN), _MUL),
    Operation.CSC: (_Z, _f(Operation.CSC), _Z, _f(Operation.COT), _MUL, _NEG),
    Operation.COT: (_Z, _f(Operation.CSC), _TWO, _POW, _NEG),
    Operation.ASIN: (_ONE,) + _ONE_MINUS_Z_SQUARED + (_HALF, _POW, _DIV),
    Operation.ACOS: (_ONE,) + _ONE_MINUS_Z_SQUARED + (_HALF, _POW, _DIV, _NEG),
    Operation.ATAN: (_ONE, _ONE, _Z, _TWO, _POW, _ADD, _DIV),
    Operation.SINH: (_Z, _f(Operation.COSH)),
    Operation.COSH: (_Z, _f(Operation.SINH)),
    Operation.TANH: (_ONE, _Z, _f(Operation.COSH), _TWO, _POW, _DIV),
    Operation.ASINH: (_ONE, _Z, _TWO, _POW, _ONE, _ADD, _HALF, _POW, _DIV),
    Operation.ACOSH: (_ONE, _Z, _ONE, _SUB, _HALF, _POW, _Z, _ONE, _ADD, _HALF, _POW, _MUL, _DIV),
    Operation.ATANH: (_ONE,) + _ONE_MINUS_Z_SQUARED + (_DIV,),
})


def _function(name, evaluator):
    return OperationInfo(TokenType.UNARY_FUNC, 3, name, evaluator,
                         DERIVATIVE_FRAGMENTS.get(Operation(name)))


# 操作符定义字典（只读）
OPERATION_DEFINITIONS = MappingProxyType({
    # 括号
    Operation.L_BRACKET: OperationInfo(TokenType.BRACKET, 4, '('),
    Operation.R_BRACKET: OperationInfo(TokenType.BRACKET, 4, ')'),

    # 二元操作符
    Operation.ADD: OperationInfo(TokenType.BINARY_OP, 0, '+', Operators.add),
    Operation.SUB: OperationInfo(TokenType.BINARY_OP, 0, '-', Operators.sub),
    Operation.MUL: OperationInfo(TokenType.BINARY_OP, 1, '*', Operators.mul),
    Operation.DIV: OperationInfo(TokenType.BINARY_OP, 1, '/', Operators.div),
    Operation.POW: OperationInfo(TokenType.BINARY_OP, 2, '^', Operators.pow),

    # 取负与乘除同级，所以 -z^2 = -(z^2)，-z*2 = (-z)*2
    Operation.NEG: OperationInfo(TokenType.UNARY_FUNC, 1, '~', Operators.neg,
                                 DERIVATIVE_FRAGMENTS[Operation.NEG]),

    # 一元函数
    Operation.RE: _function('re', Operators.re),
    Operation.IM: _function('im', Operators.im),
    Operation.ABS: _function('abs', Operators.abs),
    Operation.ARG: _function('arg', Operators.arg),
    Operation.CONJ: _function('conj', Operators.conj),
    Operation.EXP: _function('exp', Operators.exp),
    Operation.LOG: _function('log', Operators.log),
    Operation.COS: _function('cos', Operators.cos),
    Operation.SIN: _function('sin', Operators.sin),
    Operation.TAN: _function('tan', Operators.tan),
    Operation.SEC: _function('sec', Operators.sec),
    Operation.CSC: _function('csc', Operators.csc),
    Operation.COT: _function('cot', Operators.cot),
    Operation.ACOS: _function('acos', Operators.acos),
    Operation.ASIN: _function('asin', Operators.asin),
    Operation.ATAN: _function('atan', Operators.atan),
    Operation.COSH: _function('cosh', Operators.cosh),
    Operation.SINH: _function('sinh', Operators.sinh),
    Operation.TANH: _function('tanh', Operators.tanh),
    Operation.ACOSH: _function('acosh', Operators.acosh),
    Operation.ASINH: _function('asinh', Operators.asinh),
    Operation.ATANH: _function('atanh', Operators.atanh),

    # 求导标记：没有数值实现，需先展开（calculus.expand_derivatives）
    Operation.DERIV: _function('deriv', None),
})

# 输入符号 -> 操作符
SYMBOL_TO_OPERATION = MappingProxyType({
    '(': Operation.L_BRACKET,
    '{': Operation.L_BRACKET,
    ')': Operation.R_BRACKET,
    '}': Operation.R_BRACKET,
    '+': Operation.ADD,
    '-': Operation.SUB,
    '*': Operation.MUL,
    '/': Operation.DIV,
    '^': Operation.POW,
    'ln': Operation.LOG,
    **{info.symbol: op for op, info in OPERATION_DEFINITIONS.items()
       if info.type == TokenType.UNARY_FUNC and op != Operation.NEG},
})


def _info(operation):
    try:
        return OPERATION_DEFINITIONS[operation]
    except KeyError:
        raise OperationNotFound(f"Operation not found: {operation!r}") from None


def get_operation(symbol):
    """符号（小写函数名或单个字符）-> Operation"""
    try:
        return SYMBOL_TO_OPERATION[symbol]
    except KeyError:
        raise OperationNotFound(f"Operation not found: {symbol!r}") from None


def get_token_type(operation):
    return _info(operation).type


def get_precedence(operation):
    return _info(operation).precedence


def get_symbol(operation):
    return _info(operation).symbol


def get_evaluator(operation):
    evaluator = _info(operation).evaluator
    if evaluator is None:
        raise OperationNotFound(f"No numeric evaluator for operation: {operation.name}")
    return evaluator


def get_derivative(operation):
    """返回 f'(z) 的后缀Token元组"""
    fragment = _info(operation).derivative
    if fragment is None:
        raise UnknownDerivative(f"Derivative not found for operation: {operation.name}")
    return fragment


def is_zero(tokens):
    """结构零：恰好一个等于0的常数Token"""
    return len(tokens) == 1 and tokens[0].type == TokenType.CONSTANT and tokens[0].value == 0


def is_one(tokens):
    """结构一：恰好一个等于1的常数Token"""
    return len(tokens) == 1 and tokens[0].type == TokenType.CONSTANT and tokens[0].value == 1


class RPNValidator:
    """后缀序列的结构检查"""

    @staticmethod
    def calculate_stack_size(token_sequence):
        """计算当前栈中的元素数量；遇到操作数不足时返回None"""
        stack_size = 0
        for token in token_sequence:
            if token.type == TokenType.BRACKET:
                return None
            if token.is_operand:
                stack_size += 1
                continue
            if stack_size < token.arity:
                return None
            stack_size = stack_size - token.arity + 1
        return stack_size

    @staticmethod
    def is_valid_expression(token_sequence):
        """完整的后缀表达式：栈从不下溢，最后恰好剩一个元素"""
        return RPNValidator.calculate_stack_size(token_sequence) == 1
