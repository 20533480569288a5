"""utils/render.py - Token和表达式的文本表示"""
from core.token_system import Token, TokenType, get_symbol


def _format_number(number):
    # 去掉无意义的小数点：3.0 -> 3
    text = f"{number:g}"
    return "0" if text == "-0" else text


def render_token(token):
    if token.type == TokenType.VARIABLE:
        return "z"
    if token.type == TokenType.CONSTANT:
        value = token.value
        if value.imag == 0:
            return _format_number(value.real)
        # 与输入的复数字面量格式一致
        return f"[{_format_number(value.real)},{_format_number(value.imag)}]"
    return get_symbol(token.operation)


def render(expression):
    """[t1 t2 ...]，空格分隔"""
    if isinstance(expression, Token):
        return render_token(expression)
    return "[" + " ".join(render_token(token) for token in expression) + "]"
