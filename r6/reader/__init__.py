from .lexer import Lexer, Token, TokenKind, PositionedToken, lex
from .parser import Parser, read, read_all

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "PositionedToken",
    "lex",
    "Parser",
    "read",
    "read_all",
]
