"""
Adapter: RecursiveDescentParser
Implementuje port Parser — zejście rekurencyjne, jedna procedura na regułę:

  expr   = term (('+'|'-') term)*
  term   = factor (('*'|'/') factor)*
  factor = INTEGER | '(' expr ')'

Drzewo budowane od dołu: akumulator staje się lewym dzieckiem nowego
BinOpNode (łączność lewostronna). '*' i '/' wiążą mocniej niż '+' i '-'.
Po wyrażeniu wymagany jest EOF; nadmiarowe tokeny to błąd składni.
"""
from __future__ import annotations

import logging

from contracts import (
    BinOpNode,
    ExprAST,
    MAX_TREE_DEPTH,
    MalformedLiteralError,
    NestingTooDeepError,
    NumberNode,
    Token,
    TokenType,
    UnexpectedTokenError,
    int_from_digits,
)
from ports.lexer import Lexer

logger = logging.getLogger("intcalc.parser")

_EXPR_OPS: dict[TokenType, str] = {TokenType.PLUS: "+", TokenType.MINUS: "-"}
_TERM_OPS: dict[TokenType, str] = {TokenType.MUL: "*", TokenType.DIV: "/"}


class RecursiveDescentParser:
    """Parser z jednym tokenem podglądu; bez odtwarzania po błędzie."""

    def __init__(self, lexer: Lexer, max_depth: int = MAX_TREE_DEPTH) -> None:
        self._lexer = lexer
        self._max_depth = max_depth
        self._depth = 0  # bieżące zagnieżdżenie nawiasów
        self._current: Token = lexer.get_next_token()

    @property
    def current_token(self) -> Token:
        return self._current

    # -- Parser protocol ---------------------------------------------------

    def parse(self) -> ExprAST:
        node = self.expr()
        self.eat(TokenType.EOF)
        logger.debug("parsed %d chars", self._current.pos)
        return node

    # -- Reguły gramatyki --------------------------------------------------

    def eat(self, expected: TokenType) -> None:
        """Jedyne miejsce konsumpcji tokenów."""
        if self._current.type != expected:
            raise UnexpectedTokenError((expected,), self._current)
        self._current = self._lexer.get_next_token()

    def expr(self) -> ExprAST:
        node = self.term()
        while self._current.type in _EXPR_OPS:
            op = _EXPR_OPS[self._current.type]
            self.eat(self._current.type)
            node = BinOpNode(op=op, left=node, right=self.term())  # type: ignore[arg-type]
        return node

    def term(self) -> ExprAST:
        node = self.factor()
        while self._current.type in _TERM_OPS:
            op = _TERM_OPS[self._current.type]
            self.eat(self._current.type)
            node = BinOpNode(op=op, left=node, right=self.factor())  # type: ignore[arg-type]
        return node

    def factor(self) -> ExprAST:
        token = self._current
        if token.type == TokenType.INTEGER:
            self.eat(TokenType.INTEGER)
            return NumberNode(value=_to_int(token.value))
        if token.type == TokenType.LPAREN:
            self.eat(TokenType.LPAREN)
            # Każdy poziom nawiasów to kilka ramek stosu (expr → term → factor)
            self._depth += 1
            if self._depth > self._max_depth:
                raise NestingTooDeepError(self._depth, self._max_depth)
            node = self.expr()
            self.eat(TokenType.RPAREN)
            self._depth -= 1
            return node
        raise UnexpectedTokenError((TokenType.INTEGER, TokenType.LPAREN), token)


def _to_int(text: str) -> int:
    # Lekser gwarantuje same cyfry ASCII; int() przyjąłby też '_' i cyfry Unicode
    if not text or not text.isascii() or not text.isdigit():
        raise MalformedLiteralError(text)
    return int_from_digits(text)
