"""工具模块"""
from .render import render, render_token
from .metrics import finite_difference, derivative_error, max_abs_error, derivative_matches

__all__ = ['render', 'render_token', 'finite_difference', 'derivative_error',
           'max_abs_error', 'derivative_matches']
