"""calculus/locator.py - 在扁平后缀序列中定位子表达式的边界"""
from core.errors import InvalidDifferentiation
from core.token_system import TokenType


def locate_start(token_sequence, end):
    """
    找到以 end 之前一个Token结尾的最小完整子表达式的起始位置

    例如在 [5 3 4 * -] 中，以 '*' 结尾的最小子表达式是 [3 4 *]，
    而 [4 *] 不是完整的表达式。

    从 end 向前扫描，k 记录还需要多少个操作数：变量/常数自身完整，
    一元函数还需要一个，二元操作符还需要两个。k 降为0时停止。

    Args:
        token_sequence: Expression 或任意Token序列（需支持下标访问）
        end: 子表达式最后一个Token之后的位置
    Returns:
        子表达式第一个Token的位置
    Raises:
        InvalidDifferentiation: 序列在到达开头之前仍未完整
    """
    start = end
    k = 1
    while k > 0:
        start -= 1
        if start < 0:
            raise InvalidDifferentiation(f"No complete subexpression ends at position {end}")

        token = token_sequence[start]
        if token.type == TokenType.BINARY_OP:
            k += 2
        elif token.type == TokenType.UNARY_FUNC:
            k += 1
        elif token.type == TokenType.BRACKET:
            raise InvalidDifferentiation("Brackets cannot appear in a postfix expression")

        k -= 1

    return start


def split_operands(token_sequence, end):
    """
    返回 end-1 位置操作符的操作数区间列表 [(start, stop), ...]，按从左到右排列
    """
    operator = token_sequence[end - 1]
    operands = []
    stop = end - 1
    for _ in range(operator.arity):
        start = locate_start(token_sequence, stop)
        operands.append((start, stop))
        stop = start
    operands.reverse()
    return operands
