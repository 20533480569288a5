"""解析模块 - 词法切分和中缀转后缀"""
from .tokenizer import Tokenizer, parse
from .shunting_yard import to_postfix

__all__ = ['Tokenizer', 'parse', 'to_postfix']
