"""核心模块 - Token系统、表达式、RPN评估器和操作符"""
from .errors import (
    ExpressionError, LexError, MismatchedBrackets, OperationNotFound,
    UnknownDerivative, InvalidExpression, InvalidDifferentiation
)
from .token_system import (
    TokenType, Operation, Token, OPERATION_DEFINITIONS, SYMBOL_TO_OPERATION,
    DERIVATIVE_FRAGMENTS, RPNValidator, get_operation, get_precedence,
    get_token_type, get_symbol, get_evaluator, get_derivative
)
from .expression import Expression
from .rpn_evaluator import RPNEvaluator, evaluate, evaluate_many
from .operators import Operators

__all__ = [
    'ExpressionError', 'LexError', 'MismatchedBrackets', 'OperationNotFound',
    'UnknownDerivative', 'InvalidExpression', 'InvalidDifferentiation',
    'TokenType', 'Operation', 'Token', 'OPERATION_DEFINITIONS', 'SYMBOL_TO_OPERATION',
    'DERIVATIVE_FRAGMENTS', 'RPNValidator', 'get_operation', 'get_precedence',
    'get_token_type', 'get_symbol', 'get_evaluator', 'get_derivative',
    'Expression', 'RPNEvaluator', 'evaluate', 'evaluate_many', 'Operators'
]
