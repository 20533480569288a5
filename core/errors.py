"""core/errors.py - 表达式处理过程中的异常类型"""


class ExpressionError(ValueError):
    """所有表达式错误的基类"""


class LexError(ExpressionError):
    """输入字符串无法切分为Token（未结束的转义名、错误的数字格式、未知字符）"""


class MismatchedBrackets(ExpressionError):
    """中缀转后缀时括号不匹配"""


class OperationNotFound(ExpressionError, KeyError):
    """操作符表中找不到对应的条目"""

    def __str__(self):
        # KeyError会给消息加引号，这里保持与ValueError一致
        return ExpressionError.__str__(self)


class UnknownDerivative(OperationNotFound):
    """函数没有已知的求导规则"""


class InvalidExpression(ExpressionError):
    """后缀表达式结构不合法（求值结束时栈中不是恰好一个元素）"""


class InvalidDifferentiation(ExpressionError):
    """不支持的求导操作，或子表达式切分失败"""
