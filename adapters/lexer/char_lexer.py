"""
Adapter: CharLexer
Implementuje port Lexer — skaner znak po znaku z jednym znakiem podglądu.

Alfabet:
  ' '           — pomijana spacja (tabulator NIE jest spacją)
  0-9           — ciąg cyfr ASCII → INTEGER (zera wiodące zachowane)
  + - * / ( )   — jednoznakowe operatory i nawiasy
  '\\n'          — koniec wejścia; reszta linii jest ignorowana
Każdy inny znak → UnknownCharacterError.

Kursor tylko się przesuwa — gramatyka nie wymaga cofania.
"""
from __future__ import annotations

import logging
from typing import Iterator

from contracts import Token, TokenType, UnknownCharacterError

logger = logging.getLogger("intcalc.lexer")

_DIGITS = frozenset("0123456789")

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


class CharLexer:
    """Leniwy skaner jednej linii wyrażenia."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._current: str | None = text[0] if text else None

    @property
    def pos(self) -> int:
        return self._pos

    # -- Lexer protocol ----------------------------------------------------

    def get_next_token(self) -> Token:
        while self._current is not None:
            ch = self._current

            if ch == " ":
                self._skip_spaces()
                continue

            if ch in _DIGITS:
                start = self._pos
                return Token(type=TokenType.INTEGER, value=self._integer(), pos=start)

            if ch == "\n":
                # Nowa linia kończy wejście na stałe
                self._current = None
                break

            token_type = _SINGLE_CHAR_TOKENS.get(ch)
            if token_type is None:
                raise UnknownCharacterError(ch, self._pos)

            token = Token(type=token_type, value=ch, pos=self._pos)
            self._advance()
            return token

        return Token(type=TokenType.EOF, value="", pos=self._pos)

    def tokens(self) -> Iterator[Token]:
        while True:
            token = self.get_next_token()
            logger.debug("token %s %r @%d", token.type.value, token.value, token.pos)
            yield token
            if token.type == TokenType.EOF:
                return

    __iter__ = tokens

    # -- Prywatne ----------------------------------------------------------

    def _advance(self) -> None:
        self._pos += 1
        if self._pos >= len(self._text):
            self._current = None
        else:
            self._current = self._text[self._pos]

    def _skip_spaces(self) -> None:
        while self._current == " ":
            self._advance()

    def _integer(self) -> str:
        start = self._pos
        while self._current is not None and self._current in _DIGITS:
            self._advance()
        return self._text[start:self._pos]
