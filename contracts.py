"""
contracts.py — Jedyne źródło prawdy dla wszystkich typów danych w IntCalc.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.
"""
from __future__ import annotations

import sys
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.1.0"


# ─────────────────────────── Liczby ──────────────────────────────────────

# Poniżej minimalnej wartości sys.set_int_max_str_digits (640), więc
# konwersja int <-> str działa dla dowolnie długich liczb
_DIGIT_CHUNK = 500
_CHUNK_BASE = 10 ** _DIGIT_CHUNK

# Maksymalne zagnieżdżenie nawiasów i głębokość drzewa przy zrzucie do JSON
MAX_TREE_DEPTH = 200


def int_from_digits(text: str) -> int:
    """Ciąg cyfr ASCII → int, kawałkami po _DIGIT_CHUNK cyfr."""
    value = 0
    for start in range(0, len(text), _DIGIT_CHUNK):
        chunk = text[start:start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def int_to_digits(value: int) -> str:
    """int → zapis dziesiętny, bez limitu długości."""
    if -_CHUNK_BASE < value < _CHUNK_BASE:
        return str(value)
    sign = "-" if value < 0 else ""
    value = abs(value)
    chunks: list[int] = []
    while value:
        value, rem = divmod(value, _CHUNK_BASE)
        chunks.append(rem)
    head = str(chunks.pop())
    return sign + head + "".join(f"{c:0{_DIGIT_CHUNK}d}" for c in reversed(chunks))


# ─────────────────────────── Lexer ───────────────────────────────────────

class TokenType(str, Enum):
    INTEGER = "INTEGER"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MUL = "MUL"
    DIV = "DIV"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: TokenType
    value: str = ""   # dosłowny tekst; cyfry dla INTEGER, pusty dla EOF
    pos: int = 0      # kolumna (od 0), w której zaczyna się token


# ─────────────────────────── AST ─────────────────────────────────────────

BinOp = Literal["+", "-", "*", "/"]


class NumberNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["number"] = "number"
    value: int


class BinOpNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["binop"] = "binop"
    op: BinOp
    left: "ExprAST"
    right: "ExprAST"


# Zamknięty zbiór wariantów: ewaluator obsługuje dokładnie te dwa
ExprAST = Union[NumberNode, BinOpNode]
BinOpNode.model_rebuild()


# ─────────────────────────── Evaluator ───────────────────────────────────

class EvalResult(BaseModel):
    value: int
    steps: list[str] = Field(default_factory=list)  # czytelne kroki, np. "3 * 4 = 12"


# ─────────────────────────── Błędy ───────────────────────────────────────

class CalcError(Exception):
    """Bazowy błąd kalkulatora. Każdy błąd przerywa całe obliczenie."""

    kind = "calc_error"


class UnknownCharacterError(CalcError):
    kind = "unknown_character"

    def __init__(self, char: str, pos: int) -> None:
        self.char = char
        self.pos = pos
        super().__init__(f"Unknown character {char!r} at position {pos}")


class UnexpectedTokenError(CalcError, SyntaxError):
    kind = "syntax_error"

    def __init__(self, expected: tuple[TokenType, ...], actual: Token) -> None:
        self.expected = expected
        self.actual = actual
        wanted = " or ".join(t.value for t in expected)
        if actual.type == TokenType.EOF:
            got = "end of input"
        else:
            got = f"{actual.type.value} {actual.value!r}"
        super().__init__(f"Expected {wanted}, got {got} at position {actual.pos}")


class MalformedLiteralError(CalcError):
    kind = "malformed_literal"

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Malformed integer literal {text!r}")


class DivisionByZeroError(CalcError, ZeroDivisionError):
    kind = "division_by_zero"

    def __init__(self, left: int) -> None:
        self.left = left
        super().__init__(f"Division by zero: {int_to_digits(left)} / 0")


class NestingTooDeepError(CalcError):
    kind = "nesting_too_deep"

    def __init__(self, depth: int, limit: int = MAX_TREE_DEPTH) -> None:
        self.depth = depth
        self.limit = limit
        super().__init__(f"Expression nested {depth} levels deep, limit is {limit}")


class NumberTooLargeError(CalcError):
    """Liczba nie mieści się w liczbie JSON (limit konwersji int → str)."""

    kind = "number_too_large"

    def __init__(self, bits: int, limit: int) -> None:
        self.bits = bits
        self.limit = limit
        super().__init__(f"Number of {bits} bits exceeds the {limit}-digit limit for JSON output")


def ensure_json_int(value: int) -> int:
    """Przepuszcza int, który json.dumps potrafi zapisać."""
    limit = getattr(sys, "get_int_max_str_digits", lambda: 0)()
    if limit and abs(value) >= 10 ** limit:
        raise NumberTooLargeError(value.bit_length(), limit)
    return value
