"""RPN表达式求值器 - 调用统一的操作符表"""
import numpy as np
import logging

from core.errors import InvalidExpression
from core.token_system import TokenType, get_evaluator
from core.operators import COMPLEX_DTYPE

logger = logging.getLogger(__name__)


class RPNEvaluator:
    """评估RPN表达式的值"""

    @staticmethod
    def _ensure_postfix(expression):
        if getattr(expression, 'postfix', True):
            return expression
        from parsing.shunting_yard import to_postfix
        return to_postfix(expression)

    @staticmethod
    def _run(token_sequence, z):
        """栈式求值；z 可以是标量或numpy数组"""
        stack = []

        for token in token_sequence:
            if token.type == TokenType.CONSTANT:
                stack.append(token.value)

            elif token.type == TokenType.VARIABLE:
                stack.append(z)

            # ================== 一元函数 ==================
            elif token.type == TokenType.UNARY_FUNC:
                if len(stack) < 1:
                    raise InvalidExpression(f"Insufficient operands for {token.operation.name}")
                operand = stack.pop()
                stack.append(get_evaluator(token.operation)(operand))

            # ================== 二元操作符 ==================
            elif token.type == TokenType.BINARY_OP:
                if len(stack) < 2:
                    raise InvalidExpression(f"Insufficient operands for {token.operation.name}")
                # 先弹出的是右操作数
                operand2 = stack.pop()
                operand1 = stack.pop()
                stack.append(get_evaluator(token.operation)(operand1, operand2))

            else:
                raise InvalidExpression(f"Unexpected token in postfix expression: {token!r}")

        if len(stack) != 1:
            logger.debug(f"Stack has {len(stack)} elements after evaluation, expected 1")
            raise InvalidExpression(f"Stack has {len(stack)} elements after evaluation, expected 1")

        return stack[0]

    @staticmethod
    def evaluate(expression, z=0j):
        """
        在单个点上求值
        Args:
            expression: 后缀Expression（中缀会先转换）
            z: 变量z的取值
        Returns:
            complex
        """
        expression = RPNEvaluator._ensure_postfix(expression)
        result = RPNEvaluator._run(expression, complex(z))
        return complex(result)

    @staticmethod
    def evaluate_many(expression, points):
        """
        在多个点上同时求值（numpy广播）
        Args:
            expression: 后缀Expression
            points: 可迭代的复数或numpy数组
        Returns:
            与points形状相同的复数数组（类型由 EVALUATION_CONFIG 决定）
        """
        expression = RPNEvaluator._ensure_postfix(expression)
        points = np.asarray(points, dtype=COMPLEX_DTYPE)
        result = RPNEvaluator._run(expression, points)
        # 不含z的表达式得到标量，扩展到points的形状
        return np.broadcast_to(np.asarray(result, dtype=COMPLEX_DTYPE), points.shape).copy()


def evaluate(expression, z=0j):
    return RPNEvaluator.evaluate(expression, z)


def evaluate_many(expression, points):
    return RPNEvaluator.evaluate_many(expression, points)
