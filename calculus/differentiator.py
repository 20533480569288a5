"""calculus/differentiator.py - 后缀表达式的符号求导

导数直接在扁平后缀序列上拼接得到，不构造语法树。子表达式的边界由
locate_start 通过计数操作数恢复。唯一的化简是单Token的0/1消去：
导数恰好是常数0时整项去掉，恰好是常数1时省略这个因子。
"""
import logging

from calculus.locator import split_operands, locate_start
from core.errors import InvalidDifferentiation
from core.expression import Expression
from core.operators import Operators
from core.token_system import (
    Operation, Token, TokenType, get_derivative, is_one, is_zero
)

logger = logging.getLogger(__name__)

_ZERO = (Token.constant(0.0),)
_ONE = (Token.constant(1.0),)

_ADD = Token(TokenType.BINARY_OP, Operation.ADD)
_SUB = Token(TokenType.BINARY_OP, Operation.SUB)
_MUL = Token(TokenType.BINARY_OP, Operation.MUL)
_DIV = Token(TokenType.BINARY_OP, Operation.DIV)
_POW = Token(TokenType.BINARY_OP, Operation.POW)
_NEG = Token(TokenType.UNARY_FUNC, Operation.NEG)
_LOG = Token(TokenType.UNARY_FUNC, Operation.LOG)


def _is_constant(tokens):
    return len(tokens) == 1 and tokens[0].type == TokenType.CONSTANT


def _is_variable(tokens):
    return len(tokens) == 1 and tokens[0].type == TokenType.VARIABLE


def _negate(tokens):
    if _is_constant(tokens):
        value = tokens[0].value
        return _ZERO if value == 0 else (Token.constant(-value),)
    return tokens + (_NEG,)


def _product_term(derivative, other):
    """[d] [other] *，d为0时整项为0，d为1时只剩other"""
    if is_zero(derivative):
        return _ZERO
    if is_one(derivative):
        return other
    return derivative + other + (_MUL,)


def _add_terms(p1, p2):
    if is_zero(p1):
        return p2
    if is_zero(p2):
        return p1
    return p1 + p2 + (_ADD,)


def _substitute(fragment, argument):
    """把导数片段中的占位变量替换为参数子表达式"""
    result = []
    for token in fragment:
        if token.type == TokenType.VARIABLE:
            result.extend(argument)
        else:
            result.append(token)
    return tuple(result)


def _operands(seq, begin, end):
    operands = split_operands(seq, end)
    if operands[0][0] != begin:
        raise InvalidDifferentiation(
            f"Malformed postfix slice [{begin}, {end}): operands start at {operands[0][0]}")
    return [seq[start:stop] for start, stop in operands]


def _derive(seq, begin, end):
    """
    对 seq[begin:end] 求导，返回Token元组

    每条求导规则是一个生成器：需要子表达式的导数时 yield (seq, begin, end)，
    由这里的显式栈负责求值后再 send 回去。嵌套深度因此不受解释器递归深度限制。
    """
    stack = [_rule(seq, begin, end)]
    result = None
    while stack:
        try:
            request = stack[-1].send(result)
        except StopIteration as stop:
            stack.pop()
            result = stop.value
        else:
            stack.append(_rule(*request))
            result = None
    return result


def _rule(seq, begin, end):
    last = seq[end - 1]

    if last.type == TokenType.VARIABLE:
        if end - begin != 1:
            raise InvalidDifferentiation(f"Malformed postfix slice [{begin}, {end})")
        return _ONE
    elif last.type == TokenType.CONSTANT:
        if end - begin != 1:
            raise InvalidDifferentiation(f"Malformed postfix slice [{begin}, {end})")
        return _ZERO
    elif last.type == TokenType.UNARY_FUNC:
        return (yield from _differentiate_func(seq, begin, end))
    elif last.type == TokenType.BINARY_OP:
        return (yield from _differentiate_bin_op(seq, begin, end))
    else:
        raise InvalidDifferentiation(f"Unrecognized token to differentiate: {last!r}")


def _differentiate_func(seq, begin, end):
    """f(g(z)) 的导数：[g'] [f'(g)] *"""
    operation = seq[end - 1].operation
    (g,) = _operands(seq, begin, end)
    g_begin = end - 1 - len(g)

    if operation == Operation.DERIV:
        # deriv(g) 的导数是 g 的二阶导数
        g_deriv = yield (seq, g_begin, end - 1)
        return (yield (g_deriv, 0, len(g_deriv)))

    if _is_constant(g):
        return _ZERO

    fragment = get_derivative(operation)
    if _is_variable(g):
        return fragment

    g_deriv = yield (seq, g_begin, end - 1)
    return _product_term(g_deriv, _substitute(fragment, g))


def _differentiate_bin_op(seq, begin, end):
    operation = seq[end - 1].operation

    if operation in (Operation.ADD, Operation.SUB):
        return (yield from _differentiate_add_sub(seq, begin, end))
    elif operation == Operation.MUL:
        return (yield from _differentiate_mul(seq, begin, end))
    elif operation == Operation.DIV:
        return (yield from _differentiate_div(seq, begin, end))
    elif operation == Operation.POW:
        return (yield from _differentiate_pow(seq, begin, end))
    else:
        raise InvalidDifferentiation(f"Unrecognized/unimplemented binary operator: {operation!r}")


def _split(seq, begin, end):
    """返回 f, g 以及各自在seq中的区间"""
    f, g = _operands(seq, begin, end)
    f_span = (seq, begin, begin + len(f))
    g_span = (seq, begin + len(f), end - 1)
    return f, g, f_span, g_span


def _differentiate_add_sub(seq, begin, end):
    """[f'] [g'] ±"""
    operator = seq[end - 1]
    f, g, f_span, g_span = _split(seq, begin, end)

    if _is_constant(f):
        g_deriv = yield g_span
        return g_deriv if operator.operation == Operation.ADD else _negate(g_deriv)
    if _is_constant(g):
        return (yield f_span)

    f_deriv = yield f_span
    g_deriv = yield g_span
    if is_zero(g_deriv):
        return f_deriv
    if is_zero(f_deriv):
        return g_deriv if operator.operation == Operation.ADD else _negate(g_deriv)
    return f_deriv + g_deriv + (operator,)


def _differentiate_mul(seq, begin, end):
    """p1 = [f'][g]*, p2 = [g'][f]*, 结果 p1 p2 +"""
    f, g, f_span, g_span = _split(seq, begin, end)

    p1 = _product_term((yield f_span), g)
    p2 = _product_term((yield g_span), f)
    return _add_terms(p1, p2)


def _differentiate_div(seq, begin, end):
    """(p1 - p2) / p3，p3 = [g][g]*"""
    f, g, f_span, g_span = _split(seq, begin, end)
    f_deriv = yield f_span

    if _is_constant(g):
        # f' * (1/g)，1/g 直接折叠为常数
        reciprocal = (Token.constant(complex(Operators.div(1.0, g[0].value))),)
        return _product_term(f_deriv, reciprocal)

    p1 = _product_term(f_deriv, g)
    p2 = _product_term((yield g_span), f)

    if is_zero(p1) and is_zero(p2):
        return _ZERO
    if is_zero(p2):
        numerator = p1
    elif is_zero(p1):
        numerator = p2 + (_NEG,)
    else:
        numerator = p1 + p2 + (_SUB,)
    return numerator + g + g + (_MUL, _DIV)


def _differentiate_pow(seq, begin, end):
    """
    p1 = [f'][g][f][g-1]^**   (f' * g * f^(g-1))
    p2 = [g'][f]log[f][g]^**  (g' * log f * f^g)
    """
    f, g, f_span, g_span = _split(seq, begin, end)

    if _is_constant(f) and f[0].value == 0:
        return _ZERO

    if _is_constant(f):
        p1 = _ZERO
    else:
        if _is_constant(g):
            g_minus_one = (Token.constant(g[0].value - 1),)
        else:
            g_minus_one = g + _ONE + (_SUB,)
        power = g + f + g_minus_one + (_POW, _MUL)
        p1 = _product_term((yield f_span), power)

    if _is_constant(g):
        p2 = _ZERO
    else:
        log_power = f + (_LOG,) + f + g + (_POW, _MUL)
        p2 = _product_term((yield g_span), log_power)

    return _add_terms(p1, p2)


def differentiate(expression):
    """
    对后缀表达式关于 z 求导
    Args:
        expression: 后缀Expression
    Returns:
        导数的后缀Expression
    Raises:
        UnknownDerivative: 函数没有求导规则
        InvalidDifferentiation: 不支持的操作符或结构不完整的表达式
    """
    if not expression.postfix:
        raise InvalidDifferentiation("Expression must be converted to postfix before differentiation")
    if len(expression) == 0:
        raise InvalidDifferentiation("Cannot differentiate an empty expression")

    tokens = expression.tokens
    result = _derive(tokens, 0, len(tokens))
    logger.debug(f"Differentiated {len(tokens)} tokens into {len(result)} tokens")
    return Expression(result, postfix=True)


def expand_derivatives(expression):
    """把表达式中所有 [g] deriv 替换为 g 的导数（由内向外）"""
    if not expression.postfix:
        raise InvalidDifferentiation("Expression must be converted to postfix before expanding derivatives")
    if not any(token.operation == Operation.DERIV for token in expression):
        return expression

    output = []
    for token in expression:
        if token.operation != Operation.DERIV:
            output.append(token)
            continue
        # 内层的 deriv 已经展开，参数就是输出末尾的完整子表达式
        start = locate_start(output, len(output))
        argument = tuple(output[start:])
        del output[start:]
        output.extend(_derive(argument, 0, len(argument)))

    logger.debug(f"Expanded derivatives: {len(expression)} -> {len(output)} tokens")
    return Expression(output, postfix=True)
