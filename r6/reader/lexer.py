"""
  r6 Lexer

- Reads one character at a time from a str or a text stream
- Keeps exactly one character of lookahead
- Tracks 1-based line/column of every consumed character
- Emits positioned tokens; end of input is the EOF token, never an error

Token grammar:

    identifier   initial subsequent* | '+' | '-' | '->' subsequent*
    initial      letter | ! $ % & * / : < = > ? ^ _ ~
    subsequent   initial | digit | + - . @
    boolean      #t #T #f #F
    character    #\\ any-char alphanumeric*
    numeric      digit+
    structural   (  )  .
    comment      ; to end of line
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional, TextIO, Union

from r6.errors import R6LexError


class TokenKind(Enum):
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    DOT = "."
    IDENTIFIER = "identifier"
    TRUE = "#t"
    FALSE = "#f"
    CHARACTER = "character"
    NUMERIC = "numeric"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str | None = None

    def __str__(self) -> str:
        if self.kind is TokenKind.IDENTIFIER:
            return f"Identifier({self.text})"
        if self.kind is TokenKind.CHARACTER:
            return f"#\\{self.text}"
        if self.kind is TokenKind.NUMERIC:
            return str(self.text)
        return self.kind.value


@dataclass(frozen=True)
class PositionedToken:
    line: int
    column: int
    token: Token

    @property
    def kind(self) -> TokenKind:
        return self.token.kind


WHITESPACE = frozenset("\t\n\x0b\x0c\r ")
DIGITS = frozenset("0123456789")
_INITIAL_SYMBOLS = frozenset("!$%&*/:<=>?^_~")
_SUBSEQUENT_EXTRA = frozenset("+-.@")


def is_whitespace(c: Optional[str]) -> bool:
    return c is not None and c in WHITESPACE


def is_initial(c: Optional[str]) -> bool:
    if c is None:
        return False
    return ("a" <= c <= "z") or ("A" <= c <= "Z") or c in _INITIAL_SYMBOLS


def is_subsequent(c: Optional[str]) -> bool:
    return is_initial(c) or (c is not None and (c in DIGITS or c in _SUBSEQUENT_EXTRA))


def is_digit(c: Optional[str]) -> bool:
    return c is not None and c in DIGITS


Source = Union[str, TextIO]


class Lexer:
    """Transforms a character stream into a stream of positioned tokens."""

    def __init__(self, source: Source):
        self._stream: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._lookahead_buf: Optional[str] = None
        self._at_eof = False
        self.line = 1
        self.column = 1

    # --- Character level ---
    def _read_char(self) -> Optional[str]:
        if self._at_eof:
            return None
        try:
            c = self._stream.read(1)
        except (OSError, UnicodeDecodeError) as ex:
            raise self._error(f"Read failure: {ex}") from ex
        if not c:
            self._at_eof = True
            return None
        return c

    def _lookahead(self) -> Optional[str]:
        if self._lookahead_buf is None:
            self._lookahead_buf = self._read_char()
        return self._lookahead_buf

    def _advance(self, c: str) -> None:
        if c == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

    def _consume(self) -> Optional[str]:
        c = self._lookahead()
        self._lookahead_buf = None
        if c is not None:
            self._advance(c)
        return c

    def _read_while(self, pred: Callable[[str], bool]) -> str:
        chars: list[str] = []
        while True:
            c = self._lookahead()
            if c is None or not pred(c):
                return "".join(chars)
            self._consume()
            chars.append(c)

    def _skip_atmosphere(self) -> None:
        """Skip whitespace and comments until neither applies."""
        while True:
            self._read_while(is_whitespace)
            if self._lookahead() != ";":
                return
            self._read_while(lambda c: c != "\n")

    def _at_delimiter(self) -> bool:
        c = self._lookahead()
        return c is None or is_whitespace(c)

    def _error(self, message: str, line: int | None = None, column: int | None = None) -> R6LexError:
        return R6LexError(message,
                          self.line if line is None else line,
                          self.column if column is None else column)

    # --- Token level ---
    def next_token(self) -> PositionedToken:
        """Return the next token, or an EOF token once the input is exhausted."""
        self._skip_atmosphere()

        line, column = self.line, self.column

        def wrap(kind: TokenKind, text: str | None = None) -> PositionedToken:
            return PositionedToken(line, column, Token(kind, text))

        c = self._consume()
        if c is None:
            return wrap(TokenKind.EOF)

        if is_initial(c):
            return wrap(TokenKind.IDENTIFIER, c + self._read_while(is_subsequent))
        if c == "+":
            if self._at_delimiter():
                return wrap(TokenKind.IDENTIFIER, "+")
            raise self._error("Invalid character '+'", line, column)
        if c == "-":
            if self._at_delimiter():
                return wrap(TokenKind.IDENTIFIER, "-")
            nxt = self._lookahead()
            if nxt == ">":
                return wrap(TokenKind.IDENTIFIER, "-" + self._read_while(is_subsequent))
            raise self._error(f"Invalid character {nxt!r} after '-'")
        if c == "(":
            return wrap(TokenKind.OPEN_PAREN)
        if c == ")":
            return wrap(TokenKind.CLOSE_PAREN)
        if c == "." and self._at_delimiter():
            return wrap(TokenKind.DOT)
        if c == "#":
            return wrap(*self._lex_hash())
        if is_digit(c):
            return wrap(TokenKind.NUMERIC, c + self._read_while(is_digit))
        raise self._error(f"Invalid character {c!r}", line, column)

    def _lex_hash(self) -> tuple[TokenKind, str | None]:
        line, column = self.line, self.column
        c = self._consume()
        if c is None:
            raise self._error("Unexpected end of input after '#'")
        if c in "tT":
            return TokenKind.TRUE, None
        if c in "fF":
            return TokenKind.FALSE, None
        if c == "\\":
            first = self._consume()
            if first is None:
                raise self._error("Unexpected end of input in character literal")
            return TokenKind.CHARACTER, first + self._read_while(str.isalnum)
        raise self._error(f"Invalid character {c!r} after '#'", line, column)

    def __iter__(self) -> Iterator[PositionedToken]:
        while (tok := self.next_token()).kind is not TokenKind.EOF:
            yield tok


def lex(source: Source) -> Iterator[PositionedToken]:
    """Token generator: yields positioned tokens up to (not including) EOF."""
    return iter(Lexer(source))
