"""
Port: Lexer
Odpowiedzialność: zamiana tekstu jednej linii na leniwy strumień tokenów.
"""
from typing import Iterator, Protocol, runtime_checkable

from contracts import Token


@runtime_checkable
class Lexer(Protocol):
    def get_next_token(self) -> Token:
        """
        Scans and returns the next Token, advancing past it.
        Spaces are skipped; a newline ends the input.
        Once the input is exhausted every call returns an EOF token.
        Raises UnknownCharacterError for a character outside the alphabet.
        """
        ...

    def tokens(self) -> Iterator[Token]:
        """
        Lazily yields tokens up to and including the first EOF token.
        """
        ...
