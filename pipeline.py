"""
pipeline.py — punkt wejścia rdzenia: tekst → Lexer → Parser → AST → Evaluator.

Każde wywołanie tworzy świeże instancje adapterów; żaden stan nie
przechodzi z jednej linii do następnej.
"""
from __future__ import annotations

import logging

from adapters.evaluator.ast_evaluator import ASTEvaluator
from adapters.lexer.char_lexer import CharLexer
from adapters.parser.recursive_descent_parser import RecursiveDescentParser
from contracts import CalcError, EvalResult, ExprAST, Token

logger = logging.getLogger("intcalc.pipeline")


def _strip_cr(line: str) -> str:
    # "\r\n" ze stdin na Windows: '\r' przed nową linią traktujemy jak jej część
    return line.replace("\r\n", "\n").removesuffix("\r")


def tokenize(line: str) -> list[Token]:
    return list(CharLexer(_strip_cr(line)).tokens())


def parse(line: str) -> ExprAST:
    return RecursiveDescentParser(CharLexer(_strip_cr(line))).parse()


def evaluate_with_steps(line: str, with_steps: bool = True) -> EvalResult:
    try:
        result = ASTEvaluator().eval_expr(parse(line), with_steps=with_steps)
    except CalcError as exc:
        logger.debug("evaluation of %r failed: %s (%s)", line, exc, exc.kind)
        raise
    logger.debug("%r evaluated (%d bits)", line, result.value.bit_length())
    return result


def evaluate(line: str) -> int:
    """Oblicza jedną linię; rzuca CalcError przy pierwszym błędzie."""
    try:
        value = ASTEvaluator().evaluate(parse(line))
    except CalcError as exc:
        logger.debug("evaluation of %r failed: %s (%s)", line, exc, exc.kind)
        raise
    return value
