"""
  r6 Datum Parser

Recursive descent over positioned tokens with one token of lookahead:

    - identifiers -> Symbol
    - #t / #f     -> bool
    - #\\x        -> Character
    - digits      -> Number (text kept verbatim)
    - ( ... )     -> Pair chain ending in Nil
    - ( ... . d ) -> Pair chain ending in d
"""

from __future__ import annotations

from typing import Iterator, Optional, Union

from r6 import Datum
from r6.errors import R6LexError, R6ParseError
from r6.reader.lexer import Lexer, PositionedToken, Source, TokenKind
from r6.types.datum import Character, Number
from r6.types.nil import Nil
from r6.types.pair import make_list
from r6.types.symbol import Symbol


class Parser:
    def __init__(self, source: Union[Source, Lexer]):
        self.lexer = source if isinstance(source, Lexer) else Lexer(source)
        self.buffer: Optional[PositionedToken] = None

    # --- Token stream ---
    def peek(self) -> PositionedToken:
        if self.buffer is None:
            try:
                self.buffer = self.lexer.next_token()
            except R6LexError as ex:
                raise R6ParseError(ex.message, ex.line, ex.column) from ex
        return self.buffer

    def advance(self) -> PositionedToken:
        tok = self.peek()
        self.buffer = None
        return tok

    # --- Data ---
    def parse_datum(self) -> Datum:
        """Parse exactly one datum. End of input here is an error."""
        start = self.peek()
        try:
            return self._parse_datum()
        except RecursionError:
            raise R6ParseError("Datum nested too deeply", start.line, start.column) from None

    def _parse_datum(self) -> Datum:
        tok = self.advance()
        kind = tok.kind

        if kind is TokenKind.IDENTIFIER:
            return Symbol(tok.token.text)
        if kind is TokenKind.NUMERIC:
            return Number(tok.token.text)
        if kind is TokenKind.TRUE:
            return True
        if kind is TokenKind.FALSE:
            return False
        if kind is TokenKind.CHARACTER:
            return Character(tok.token.text)
        if kind is TokenKind.OPEN_PAREN:
            return self._parse_list(tok)
        if kind is TokenKind.EOF:
            raise R6ParseError("Unexpected end of input, expected a datum", tok.line, tok.column)
        raise R6ParseError(f"Unexpected '{tok.token}'", tok.line, tok.column)

    def _parse_list(self, open_tok: PositionedToken) -> Datum:
        items: list[Datum] = []
        while True:
            tok = self.peek()
            if tok.kind is TokenKind.CLOSE_PAREN:
                self.advance()
                return make_list(items)
            if tok.kind is TokenKind.EOF:
                raise R6ParseError(
                    f"Unexpected end of input, unmatched '(' at line {open_tok.line}, column {open_tok.column}",
                    tok.line, tok.column)
            if tok.kind is TokenKind.DOT:
                self.advance()
                if not items:
                    raise R6ParseError("Expected a datum before '.'", tok.line, tok.column)
                tail = self._parse_datum()
                close = self.advance()
                if close.kind is not TokenKind.CLOSE_PAREN:
                    raise R6ParseError("Expected ')' after dotted tail", close.line, close.column)
                return make_list(items, tail)
            items.append(self._parse_datum())

    def at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def parse_all(self) -> Iterator[Datum]:
        """Yield data until a clean end of input."""
        while not self.at_end():
            yield self.parse_datum()


def read(source: Source) -> Datum:
    """Parse a source containing exactly one datum."""
    parser = Parser(source)
    datum = parser.parse_datum()
    if not parser.at_end():
        tok = parser.peek()
        raise R6ParseError(f"Unexpected '{tok.token}' after datum", tok.line, tok.column)
    return datum


def read_all(source: Source) -> list[Datum]:
    return list(Parser(source).parse_all())
