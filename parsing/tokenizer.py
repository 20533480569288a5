"""parsing/tokenizer.py - 字符串 -> 中缀Token序列"""
import logging

from config.config import PARSER_CONFIG
from core.errors import LexError, OperationNotFound
from core.expression import Expression
from core.token_system import Operation, Token, TokenType, get_operation, get_token_type

logger = logging.getLogger(__name__)


class Tokenizer:
    """把中缀字符串切分为Token

    规则（按顺序）：
    - \\name 转义的函数名，直到下一个操作符/括号/转义符为止
    - 输入开头或左括号后的 '-' 是取负，而不是减法
    - 数字（最多一个小数点），后缀 i 表示纯虚数
    - [re,im] 复数字面量
    - 命名常数 pi / e / i，变量 z
    - 其他单个字符按操作符或括号查表
    """

    def __init__(self, config=None):
        config = config or PARSER_CONFIG
        self.escape_char = config["escape_char"]
        self.imaginary_marker = config["imaginary_marker"]
        self.variable_name = config["variable_name"]
        self.name_terminators = frozenset(config["name_terminators"])
        self.open_brackets = frozenset(config["open_brackets"])
        # 长的名字优先匹配（pi 先于 i）
        self.named_constants = sorted(config["named_constants"].items(),
                                      key=lambda item: len(item[0]), reverse=True)

    def _escaped_name_end(self, text, start):
        """返回转义函数名之后第一个结束字符的位置"""
        for index in range(start + 1, len(text)):
            if text[index] in self.name_terminators:
                return index
        raise LexError(f"Unterminated function name at position {start}: {text[start:]!r}")

    @staticmethod
    def _number_end(text, start):
        period_found = False
        index = start
        while index < len(text) and (text[index].isdigit() or text[index] == '.'):
            if text[index] == '.':
                if period_found:
                    raise LexError(f"Invalid number formatting at position {start}: "
                                   f"{text[start:index + 1]!r}")
                period_found = True
            index += 1
        if text[start:index] == '.':
            raise LexError(f"Invalid number formatting at position {start}: '.'")
        return index

    @staticmethod
    def _complex_literal(text, start):
        """解析 [re,im]，返回 (值, 结束位置)"""
        comma = text.find(',', start)
        close = text.find(']', comma + 1) if comma != -1 else -1
        if comma == -1 or close == -1:
            raise LexError(f"Unterminated complex literal at position {start}")
        try:
            value = complex(float(text[start + 1:comma]), float(text[comma + 1:close]))
        except ValueError:
            raise LexError(f"Invalid complex literal: {text[start:close + 1]!r}") from None
        return value, close + 1

    def tokenize(self, text):
        # 空白没有语义
        cleaned = ''.join(text.split())
        tokens = []
        i = 0

        while i < len(cleaned):
            char = cleaned[i]

            if char == self.escape_char:
                end = self._escaped_name_end(cleaned, i)
                name = cleaned[i + 1:end]
                if not name:
                    raise LexError(f"Empty function name at position {i}")
                operation = get_operation(name)
                if get_token_type(operation) != TokenType.UNARY_FUNC:
                    raise OperationNotFound(f"Not a function name at position {i}: {name!r}")
                tokens.append(Token.operator(operation))
                i = end
                continue

            if char == '-' and (i == 0 or cleaned[i - 1] in self.open_brackets):
                tokens.append(Token(TokenType.UNARY_FUNC, Operation.NEG))
                i += 1
                continue

            if char.isdigit() or char == '.':
                end = self._number_end(cleaned, i)
                number = float(cleaned[i:end])
                if cleaned.startswith(self.imaginary_marker, end):
                    tokens.append(Token.constant(complex(0.0, number)))
                    end += len(self.imaginary_marker)
                else:
                    tokens.append(Token.constant(number))
                i = end
                continue

            if char == '[':
                value, i = self._complex_literal(cleaned, i)
                tokens.append(Token.constant(value))
                continue

            named = next(((name, value) for name, value in self.named_constants
                          if cleaned.startswith(name, i)), None)
            if named is not None:
                tokens.append(Token.constant(named[1]))
                i += len(named[0])
                continue

            if char == self.variable_name:
                tokens.append(Token.variable())
                i += 1
                continue

            try:
                operation = get_operation(char)
            except OperationNotFound:
                raise LexError(f"Unrecognized character at position {i}: {char!r}") from None
            tokens.append(Token.operator(operation))
            i += 1

        logger.debug(f"Tokenized {text!r} into {len(tokens)} tokens")
        return Expression(tokens, postfix=False)


_DEFAULT_TOKENIZER = Tokenizer()


def parse(text):
    """字符串 -> 中缀Expression"""
    return _DEFAULT_TOKENIZER.tokenize(text)
