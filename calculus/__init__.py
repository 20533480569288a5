"""求导模块 - 子表达式定位和符号求导"""
from .locator import locate_start, split_operands
from .differentiator import differentiate, expand_derivatives

__all__ = ['locate_start', 'split_operands', 'differentiate', 'expand_derivatives']
