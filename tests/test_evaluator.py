import cmath
import math

import numpy as np
import pytest

from config.config import EVALUATION_CONFIG
from core import (
    Expression,
    InvalidExpression,
    Operation,
    OperationNotFound,
    RPNEvaluator,
    Token,
    evaluate,
    evaluate_many,
)
from core.operators import COMPLEX_DTYPE
from parsing import parse

Z = Token.variable()


class TestEvaluate:
    def test_precedence(self, postfix):
        assert evaluate(postfix("3+4*2"), 0) == pytest.approx(11)
        assert evaluate(postfix("(3+4)*2"), 0) == pytest.approx(14)

    @pytest.mark.parametrize("text, expected", [
        ("8-3", 5),
        ("8/2", 4),
        ("2^3", 8),
        ("10-4-3", 3),
        ("-2^2", -4),
    ])
    def test_left_and_right_operands(self, postfix, text, expected):
        assert evaluate(postfix(text), 0) == pytest.approx(expected)

    def test_variable_is_the_argument(self, postfix):
        assert evaluate(postfix("z*z"), 1 + 1j) == pytest.approx(2j)
        assert evaluate(postfix("z"), 3 - 2j) == 3 - 2j

    def test_returns_python_complex(self, postfix):
        result = evaluate(postfix("z+1"), 2)
        assert type(result) is complex

    @pytest.mark.parametrize("text, z, expected", [
        ("\\exp(i*pi)", 0, -1),
        ("\\sec(z)", 0.3, 1 / math.cos(0.3)),
        ("\\cot(z)", 0.3 + 0.1j, 1 / cmath.tan(0.3 + 0.1j)),
        ("\\log(z)", -1, 1j * math.pi),
        ("\\conj(z)*z", 3 + 4j, 25),
        ("\\arg(i)", 0, math.pi / 2),
        ("\\acosh(z)", 2 + 1j, cmath.acosh(2 + 1j)),
        ("[1,2]*2i", 0, -4 + 2j),
    ])
    def test_functions(self, postfix, text, z, expected):
        assert evaluate(postfix(text), z) == pytest.approx(complex(expected))

    def test_division_by_zero_does_not_raise(self, postfix):
        result = evaluate(postfix("1/z"), 0)
        assert not np.isfinite(result)

    def test_infix_is_converted_first(self):
        assert evaluate(parse("(1+2)*z"), 2) == pytest.approx(6)

    def test_expression_method(self, postfix):
        assert postfix("z^2").evaluate(3) == pytest.approx(9)

    def test_deriv_must_be_expanded_first(self, postfix):
        with pytest.raises(OperationNotFound):
            evaluate(postfix("\\deriv(z)"), 1)

    @pytest.mark.parametrize("tokens", [
        [],
        [Z, Z],
        [Token.operator(Operation.MUL)],
        [Z, Token.operator(Operation.L_BRACKET)],
    ])
    def test_malformed_postfix(self, tokens):
        with pytest.raises(InvalidExpression):
            RPNEvaluator.evaluate(Expression(tokens), 1)


class TestEvaluateMany:
    def test_matches_pointwise_evaluation(self, postfix):
        expr = postfix("z^2*\\sin(z)+1")
        points = [0.5, 1 + 1j, -2j]

        values = evaluate_many(expr, points)

        assert values.dtype == np.complex128
        for point, value in zip(points, values):
            assert value == pytest.approx(evaluate(expr, point))

    def test_dtype_follows_configuration(self, postfix):
        values = evaluate_many(postfix("z+1"), [1, 2])

        assert COMPLEX_DTYPE is np.dtype(EVALUATION_CONFIG["dtype"]).type
        assert values.dtype == np.dtype(EVALUATION_CONFIG["dtype"])

    def test_constant_expression_is_broadcast(self, postfix):
        values = evaluate_many(postfix("5"), [1, 2, 3])

        assert values.shape == (3,)
        assert np.all(values == 5)

    def test_keeps_shape_of_points(self, postfix):
        grid = np.array([[0, 1], [2, 3]])
        values = evaluate_many(postfix("z+1"), grid)

        assert values.shape == (2, 2)
        assert values[1, 1] == 4
