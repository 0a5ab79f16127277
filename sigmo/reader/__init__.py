from sigmo.reader.lexer import lex, tokenize
from sigmo.reader.parser import categorize, parse, read

__all__ = ["lex", "tokenize", "categorize", "parse", "read"]
