"""core/operators.py"""
import numpy as np
import logging

from config.config import EVALUATION_CONFIG

logger = logging.getLogger(__name__)

COMPLEX_DTYPE = np.dtype(EVALUATION_CONFIG["dtype"]).type


def _as_complex(operand):
    """统一转换为配置的复数类型（标量得到0维数组，数组保持形状）"""
    return np.asarray(operand, dtype=COMPLEX_DTYPE)


class Operators:
    """所有操作符的静态方法集合（复数版本，支持标量和numpy数组）"""

    # 一元操作符====================

    @staticmethod
    def neg(operand):
        """取负"""
        return -_as_complex(operand)

    @staticmethod
    def re(operand):
        """实部（结果仍为复数类型）"""
        return _as_complex(np.real(_as_complex(operand)))

    @staticmethod
    def im(operand):
        """虚部"""
        return _as_complex(np.imag(_as_complex(operand)))

    @staticmethod
    def abs(operand):
        """模"""
        return _as_complex(np.abs(_as_complex(operand)))

    @staticmethod
    def arg(operand):
        """辐角，范围(-pi, pi]"""
        return _as_complex(np.angle(_as_complex(operand)))

    @staticmethod
    def conj(operand):
        return np.conj(_as_complex(operand))

    @staticmethod
    def exp(operand):
        with np.errstate(over='ignore', invalid='ignore'):
            return np.exp(_as_complex(operand))

    @staticmethod
    def log(operand):
        """自然对数（主值分支），log(0) 得到 -inf"""
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.log(_as_complex(operand))

    @staticmethod
    def cos(operand):
        with np.errstate(over='ignore', invalid='ignore'):
            return np.cos(_as_complex(operand))

    @staticmethod
    def sin(operand):
        with np.errstate(over='ignore', invalid='ignore'):
            return np.sin(_as_complex(operand))

    @staticmethod
    def tan(operand):
        with np.errstate(over='ignore', invalid='ignore'):
            return np.tan(_as_complex(operand))

    @staticmethod
    def sec(operand):
        """1 / cos"""
        return Operators.div(1.0, Operators.cos(operand))

    @staticmethod
    def csc(operand):
        """1 / sin"""
        return Operators.div(1.0, Operators.sin(operand))

    @staticmethod
    def cot(operand):
        """1 / tan"""
        return Operators.div(1.0, Operators.tan(operand))

    @staticmethod
    def acos(operand):
        with np.errstate(invalid='ignore'):
            return np.arccos(_as_complex(operand))

    @staticmethod
    def asin(operand):
        with np.errstate(invalid='ignore'):
            return np.arcsin(_as_complex(operand))

    @staticmethod
    def atan(operand):
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.arctan(_as_complex(operand))

    @staticmethod
    def cosh(operand):
        with np.errstate(over='ignore', invalid='ignore'):
            return np.cosh(_as_complex(operand))

    @staticmethod
    def sinh(operand):
        with np.errstate(over='ignore', invalid='ignore'):
            return np.sinh(_as_complex(operand))

    @staticmethod
    def tanh(operand):
        with np.errstate(over='ignore', invalid='ignore'):
            return np.tanh(_as_complex(operand))

    @staticmethod
    def acosh(operand):
        with np.errstate(invalid='ignore'):
            return np.arccosh(_as_complex(operand))

    @staticmethod
    def asinh(operand):
        with np.errstate(invalid='ignore'):
            return np.arcsinh(_as_complex(operand))

    @staticmethod
    def atanh(operand):
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.arctanh(_as_complex(operand))

    # 二元操作符========================================

    @staticmethod
    def add(operand1, operand2):
        """加法操作符"""
        return _as_complex(operand1) + _as_complex(operand2)

    @staticmethod
    def sub(operand1, operand2):
        """减法操作符"""
        return _as_complex(operand1) - _as_complex(operand2)

    @staticmethod
    def mul(operand1, operand2):
        """乘法操作符"""
        with np.errstate(over='ignore', invalid='ignore'):
            return _as_complex(operand1) * _as_complex(operand2)

    @staticmethod
    def div(operand1, operand2):
        """除法操作符；除零不抛异常，得到 inf/nan"""
        with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
            return np.divide(_as_complex(operand1), _as_complex(operand2))

    @staticmethod
    def pow(operand1, operand2):
        """幂运算（主值分支）"""
        with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
            return np.power(_as_complex(operand1), _as_complex(operand2))
