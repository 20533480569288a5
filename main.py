"""主程序入口 - 解析、求值和求导复数表达式"""
import argparse
import logging
import sys

from config.config import LOGGING_CONFIG, CHECK_CONFIG, validate_config
from core import ExpressionError, RPNEvaluator
from parsing import parse, to_postfix
from calculus import differentiate, expand_derivatives
from utils.metrics import derivative_error
from utils.render import render

logger = logging.getLogger(__name__)


def run(text, points=(), order=0, check=False):
    """
    Args:
        text: 中缀表达式字符串
        points: 求值点
        order: 求导次数
        check: 是否用数值差分校验最后一次求导
    Returns:
        (postfix, derivatives, values)：后缀表达式、各阶导数列表、
        {z: 最高阶表达式的值}
    """
    infix = parse(text)
    logger.info(f"Infix:   {render(infix)}")

    postfix = expand_derivatives(to_postfix(infix))
    logger.info(f"Postfix: {render(postfix)}")

    derivatives = []
    current = postfix
    for n in range(1, order + 1):
        previous, current = current, differentiate(current)
        derivatives.append(current)
        logger.info(f"Derivative {n}: {render(current)}")

        if check and n == order:
            table = derivative_error(previous, current, points or CHECK_CONFIG["sample_points"])
            logger.info(f"Finite difference check:\n{table.to_string(index=False)}")

    values = {}
    for z in points:
        values[z] = RPNEvaluator.evaluate(current, z)
        logger.info(f"f({z}) = {values[z]}")

    return postfix, derivatives, values


def main(args):
    validate_config()
    try:
        postfix, derivatives, values = run(
            args.expression,
            points=args.point,
            order=args.order,
            check=args.check,
        )
    except ExpressionError as e:
        logger.error(f"Failed to process expression {args.expression!r}: {e}")
        return 1

    print(render(derivatives[-1] if derivatives else postfix))
    for z, value in values.items():
        print(f"{z}\t{value}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Complex expression parser and differentiator")

    parser.add_argument(
        "expression",
        type=str,
        help="Infix expression in z, e.g. '\\sin(z)*z^2'"
    )
    parser.add_argument(
        "--point",
        type=complex,
        action="append",
        default=[],
        help="Point to evaluate at (Python complex syntax, e.g. 1+2j); repeatable"
    )
    parser.add_argument(
        "--derivative",
        dest="order",
        action="store_const",
        const=1,
        default=0,
        help="Differentiate once"
    )
    parser.add_argument(
        "--order",
        dest="order",
        type=int,
        default=0,
        help="Number of times to differentiate"
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Compare the last derivative against a finite difference"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=LOGGING_CONFIG["level"],
        help="Logging level (default: INFO)"
    )
    return parser


if __name__ == "__main__":
    args = build_parser().parse_args()

    # 设置日志
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format=LOGGING_CONFIG["format"]
    )
    sys.exit(main(args))
