import math

import pytest

from calculus import differentiate, expand_derivatives
from core import (
    Expression,
    InvalidDifferentiation,
    Operation,
    Token,
    UnknownDerivative,
    evaluate,
)
from parsing import parse
from utils.metrics import derivative_matches
from utils.render import render

Z = Token.variable()


def d(postfix, text):
    return differentiate(postfix(text))


class TestLeaves:
    def test_variable(self):
        assert differentiate(Expression([Z])) == Expression([Token.constant(1)])

    def test_constant(self):
        assert differentiate(Expression([Token.constant(5)])) == Expression([Token.constant(0)])

    def test_result_is_new_postfix_expression(self, postfix):
        expr = postfix("z*z")
        before = list(expr)

        result = differentiate(expr)

        assert result.postfix
        assert result.is_well_formed()
        assert list(expr) == before


class TestChainRule:
    def test_cos(self, postfix):
        result = d(postfix, "\\cos(z)")

        assert render(result) == "[z sin ~]"
        assert evaluate(result, 0) == pytest.approx(0)
        assert evaluate(result, math.pi / 2) == pytest.approx(-1)

    def test_constant_argument(self, postfix):
        assert render(d(postfix, "\\sin(3)")) == "[0]"
        # holds even without a derivative rule
        assert render(d(postfix, "\\abs(3)")) == "[0]"

    def test_variable_argument_uses_fragment(self, postfix):
        assert render(d(postfix, "\\exp(z)")) == "[z exp]"
        assert render(d(postfix, "\\log(z)")) == "[1 z /]"

    def test_nested_argument(self, postfix):
        result = d(postfix, "\\sin(z^2)")

        assert render(result) == "[2 z 1 ^ * z 2 ^ cos *]"
        assert evaluate(result, 1.5) == pytest.approx(3 * math.cos(2.25))

    def test_argument_with_zero_derivative(self, postfix):
        assert render(d(postfix, "\\exp(\\sin(2))")) == "[0]"

    def test_negation(self, postfix):
        result = d(postfix, "-(z^2)")
        assert evaluate(result, 3) == pytest.approx(-6)

    def test_unknown_derivative(self, postfix):
        with pytest.raises(UnknownDerivative):
            d(postfix, "\\abs(z)")
        with pytest.raises(UnknownDerivative):
            d(postfix, "\\re(z^2)")

    def test_deriv_inside_expression(self, postfix):
        # derivative of (z^3)' is the second derivative 6z
        result = d(postfix, "\\deriv(z^3)")
        assert evaluate(result, 2) == pytest.approx(12)


class TestAddSub:
    def test_constant_left_operand(self, postfix):
        assert render(d(postfix, "3+z")) == "[1]"
        assert render(d(postfix, "3-z")) == "[-1]"
        assert render(d(postfix, "3-z^2")) == "[2 z 1 ^ * ~]"

    def test_constant_right_operand(self, postfix):
        assert render(d(postfix, "z-3")) == "[1]"
        assert render(d(postfix, "\\sin(z)+3")) == "[z cos]"

    def test_general(self, postfix):
        assert render(d(postfix, "z^2+\\sin(z)")) == "[2 z 1 ^ * z cos +]"
        assert render(d(postfix, "\\exp(z)-\\sin(z)")) == "[z exp z cos -]"

    def test_zero_derivative_term_is_dropped(self, postfix):
        assert render(d(postfix, "z+\\sin(2)")) == "[1]"
        assert render(d(postfix, "\\sin(2)-z")) == "[-1]"


class TestMul:
    def test_square(self, postfix):
        result = d(postfix, "z*z")

        assert render(result) == "[z z +]"
        assert evaluate(result, 3) == pytest.approx(6)
        assert evaluate(result, 1 + 1j) == pytest.approx(2 + 2j)

    def test_constant_factor(self, postfix):
        assert render(d(postfix, "3*z")) == "[3]"
        assert render(d(postfix, "z*3")) == "[3]"
        assert render(d(postfix, "2*\\sin(z)")) == "[z cos 2 *]"

    def test_general_product(self, postfix):
        result = d(postfix, "\\sin(z)*\\exp(z)")

        assert render(result) == "[z cos z exp * z exp z sin * +]"
        z = 0.7
        expected = math.cos(z) * math.exp(z) + math.exp(z) * math.sin(z)
        assert evaluate(result, z) == pytest.approx(expected)

    def test_constant_times_constant(self, postfix):
        assert render(d(postfix, "2*3")) == "[0]"


class TestDiv:
    def test_constant_denominator(self, postfix):
        assert render(d(postfix, "z/2")) == "[0.5]"
        assert render(d(postfix, "\\sin(z)/2")) == "[z cos 0.5 *]"

    def test_constant_numerator(self, postfix):
        result = d(postfix, "1/z")

        assert render(result) == "[1 ~ z z * /]"
        assert evaluate(result, 2) == pytest.approx(-0.25)

    def test_general_quotient(self, postfix):
        result = d(postfix, "z/(z+1)")

        assert render(result) == "[z 1 + z - z 1 + z 1 + * /]"
        assert evaluate(result, 1) == pytest.approx(0.25)

    def test_numerator_with_zero_derivative(self, postfix):
        assert render(d(postfix, "\\sin(1)/\\sin(2)")) == "[0]"

    def test_denominator_with_zero_derivative(self, postfix):
        result = d(postfix, "z/\\exp(2)")
        assert evaluate(result, 5) == pytest.approx(math.exp(-2))


class TestPow:
    def test_constant_exponent(self, postfix):
        result = d(postfix, "z^3")

        assert render(result) == "[3 z 2 ^ *]"
        assert evaluate(result, 2) == pytest.approx(12)

    def test_zero_base(self, postfix):
        assert render(d(postfix, "0^z")) == "[0]"

    def test_constant_base(self, postfix):
        result = d(postfix, "4.5^z")

        assert render(result) == "[4.5 log 4.5 z ^ *]"
        assert evaluate(result, 1) == pytest.approx(4.5 * math.log(4.5))

    def test_variable_base_and_exponent(self, postfix):
        result = d(postfix, "z^z")

        assert render(result) == "[z z z 1 - ^ * z log z z ^ * +]"
        assert evaluate(result, 1) == pytest.approx(1)
        assert evaluate(result, 2) == pytest.approx(4 * (math.log(2) + 1))

    def test_constant_base_and_exponent(self, postfix):
        assert render(d(postfix, "2^3")) == "[0]"

    def test_general_power(self, postfix):
        result = d(postfix, "(z+1)^(z-1)")
        z = 1.5
        expected = (z + 1) ** (z - 1) * ((z - 1) / (z + 1) + math.log(z + 1))
        assert evaluate(result, z) == pytest.approx(expected)

    def test_nested_base(self, postfix):
        result = d(postfix, "\\sin(z)^2")
        z = 0.4
        assert evaluate(result, z) == pytest.approx(2 * math.sin(z) * math.cos(z))


class TestLargeExpressions:
    def test_long_sum(self, postfix):
        result = d(postfix, "z" + "+z" * 1000)

        assert result.is_well_formed()
        assert evaluate(result, 0.5) == pytest.approx(1001)

    def test_long_polynomial(self, postfix):
        text = "+".join(f"{n}*z^{n}" for n in range(1, 401))
        result = d(postfix, text)

        expected = sum(n * n * 0.5 ** (n - 1) for n in range(1, 401))
        assert evaluate(result, 0.5) == pytest.approx(expected)

    def test_deep_nesting(self, postfix):
        depth = 500
        result = d(postfix, "\\sin(" * depth + "z" + ")" * depth)

        assert result.is_well_formed()
        assert evaluate(result, 0) == pytest.approx(1)


class TestNumericalAgreement:
    @pytest.mark.parametrize("name", [
        "exp", "log", "sin", "cos", "tan", "sec", "csc", "cot", "asin",
        "acos", "atan", "sinh", "cosh", "tanh", "asinh", "acosh", "atanh",
    ])
    def test_function_rules(self, postfix, sample_points, name):
        expr = postfix(f"\\{name}(0.5*z+0.1)")

        assert derivative_matches(expr, differentiate(expr), sample_points)

    @pytest.mark.parametrize("text", [
        "z^2*\\sin(z)/(z+1)",
        "\\exp(z)^z",
        "-z^3+2*z-7",
        "\\log(z*z+[1,2])/\\cos(z)",
        "\\tanh(\\sin(z)*z)-1/(z-3)",
    ])
    def test_composite_expressions(self, postfix, sample_points, text):
        expr = postfix(text)

        assert derivative_matches(expr, differentiate(expr), sample_points)

    def test_second_derivative(self, postfix, sample_points):
        expr = postfix("\\sin(z)*z^3")
        first = differentiate(expr)

        assert derivative_matches(first, differentiate(first), sample_points)


class TestErrors:
    def test_infix_input(self):
        with pytest.raises(InvalidDifferentiation):
            differentiate(parse("z*z"))

    def test_empty_expression(self):
        with pytest.raises(InvalidDifferentiation):
            differentiate(Expression([]))

    @pytest.mark.parametrize("tokens", [
        [Z, Z],
        [Z, Z, Z, Token.operator(Operation.MUL)],
        [Token.operator(Operation.ADD)],
    ])
    def test_malformed_postfix(self, tokens):
        with pytest.raises(InvalidDifferentiation):
            differentiate(Expression(tokens))

    def test_bracket_in_postfix(self):
        with pytest.raises(InvalidDifferentiation):
            differentiate(Expression([Z, Token.operator(Operation.R_BRACKET)]))


class TestExpandDerivatives:
    def test_without_deriv_returns_input(self, postfix):
        expr = postfix("z^2+1")
        assert expand_derivatives(expr) is expr

    def test_single_deriv(self, postfix):
        expanded = expand_derivatives(postfix("\\deriv(z^2)+1"))

        assert all(token.operation != Operation.DERIV for token in expanded)
        assert evaluate(expanded, 3) == pytest.approx(7)

    def test_nested_deriv(self, postfix):
        expanded = expand_derivatives(postfix("\\deriv(\\deriv(z^3))"))
        assert evaluate(expanded, 1) == pytest.approx(6)

    def test_expression_method_converts_infix(self):
        assert evaluate(parse("z*z").differentiate(), 4) == pytest.approx(8)
