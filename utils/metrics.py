"""utils/metrics.py - 用数值差分校验符号导数"""
import numpy as np
import pandas as pd

from config.config import CHECK_CONFIG
from core.operators import COMPLEX_DTYPE
from core.rpn_evaluator import RPNEvaluator


def finite_difference(expression, z, step=None):
    """中心差分 (f(z+h) - f(z-h)) / 2h；全纯函数沿实轴方向即可"""
    step = CHECK_CONFIG["step"] if step is None else step
    z = np.asarray(z, dtype=COMPLEX_DTYPE)
    with np.errstate(all='ignore'):
        forward = RPNEvaluator.evaluate_many(expression, z + step)
        backward = RPNEvaluator.evaluate_many(expression, z - step)
        return (forward - backward) / (2.0 * step)


def derivative_error(expression, derivative, points=None, step=None):
    """
    在采样点上比较符号导数和数值导数
    Returns:
        DataFrame，列为 z / symbolic / numeric / abs_error
    """
    points = CHECK_CONFIG["sample_points"] if points is None else points
    z = np.asarray(points, dtype=COMPLEX_DTYPE).ravel()

    symbolic = RPNEvaluator.evaluate_many(derivative, z)
    numeric = finite_difference(expression, z, step)

    return pd.DataFrame({
        'z': z,
        'symbolic': symbolic,
        'numeric': numeric,
        'abs_error': np.abs(symbolic - numeric),
    })


def max_abs_error(expression, derivative, points=None, step=None):
    """最大绝对误差；含 nan 的点（例如极点）不参与比较"""
    errors = derivative_error(expression, derivative, points, step)['abs_error']
    errors = errors[np.isfinite(errors)]
    if len(errors) == 0:
        return float('nan')
    return float(errors.max())


def derivative_matches(expression, derivative, points=None, tolerance=None):
    tolerance = CHECK_CONFIG["tolerance"] if tolerance is None else tolerance
    error = max_abs_error(expression, derivative, points)
    return bool(np.isfinite(error) and error <= tolerance)
