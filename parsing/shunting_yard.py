"""parsing/shunting_yard.py - 中缀Token序列 -> 后缀Token序列"""
import logging

from core.errors import MismatchedBrackets
from core.expression import Expression
from core.token_system import Operation, TokenType, get_precedence

logger = logging.getLogger(__name__)


def to_postfix(expression):
    """
    调度场算法
    Args:
        expression: 中缀Expression（已经是后缀时原样返回）
    Returns:
        后缀Expression
    Raises:
        MismatchedBrackets: 括号不匹配
    """
    if expression.postfix:
        return expression

    output = []
    stack = []

    for token in expression:
        if token.is_operand:
            output.append(token)

        elif token.type == TokenType.UNARY_FUNC:
            stack.append(token)

        elif token.type == TokenType.BINARY_OP:
            precedence = get_precedence(token.operation)
            # 左结合：同级也弹出
            while (stack and stack[-1].operation != Operation.L_BRACKET
                   and get_precedence(stack[-1].operation) >= precedence):
                output.append(stack.pop())
            stack.append(token)

        elif token.operation == Operation.L_BRACKET:
            stack.append(token)

        elif token.operation == Operation.R_BRACKET:
            while stack and stack[-1].operation != Operation.L_BRACKET:
                output.append(stack.pop())
            if not stack:
                raise MismatchedBrackets("Mismatched brackets in infix expression: unmatched ')'")
            stack.pop()
            # \sin(expr) -> [expr] sin
            if stack and stack[-1].type == TokenType.UNARY_FUNC:
                output.append(stack.pop())

    while stack:
        token = stack.pop()
        if token.operation == Operation.L_BRACKET:
            raise MismatchedBrackets("Mismatched brackets in infix expression: unmatched '('")
        output.append(token)

    logger.debug(f"Converted {len(expression)} infix tokens to {len(output)} postfix tokens")
    return Expression(output, postfix=True)
