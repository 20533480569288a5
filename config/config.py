"""配置文件"""
import math

import numpy as np

# 解析参数
PARSER_CONFIG = {
    "escape_char": "\\",  # 函数名转义符，例如 \sin
    "imaginary_marker": "i",  # 数字后缀，例如 2i
    "variable_name": "z",  # 唯一的自由变量
    # 函数名结束的位置（遇到这些字符即结束）
    "name_terminators": ("\\", "-", "+", "*", "/", "^", "{", "(", "["),
    "open_brackets": ("(", "{"),
    # 命名常数
    "named_constants": {
        "pi": complex(math.pi, 0.0),
        "e": complex(math.e, 0.0),
        "i": complex(0.0, 1.0),
    },
}

# 数值求值参数
EVALUATION_CONFIG = {
    "dtype": "complex128",
}

# 数值导数校验参数
CHECK_CONFIG = {
    "step": 1e-6,  # 中心差分步长
    "tolerance": 1e-5,  # 可接受的绝对误差
    "sample_points": [0.5 + 0.0j, 1.0 + 1.0j, 2.0 - 0.5j, -1.5 + 0.25j],
}

# 日志参数（与main.py的basicConfig保持一致）
LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert len(PARSER_CONFIG["escape_char"]) == 1, "escape character must be a single character"
    assert len(PARSER_CONFIG["imaginary_marker"]) == 1, "imaginary marker must be a single character"
    assert PARSER_CONFIG["escape_char"] in PARSER_CONFIG["name_terminators"], \
        "escape character must terminate a function name"
    assert np.dtype(EVALUATION_CONFIG["dtype"]).kind == "c", "evaluation dtype must be a complex type"
    assert CHECK_CONFIG["step"] > 0, "finite difference step must be positive"
    assert CHECK_CONFIG["tolerance"] > 0, "tolerance must be positive"
    assert len(CHECK_CONFIG["sample_points"]) > 0, "at least one sample point is required"
    return True
