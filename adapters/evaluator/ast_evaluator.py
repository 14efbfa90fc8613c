"""
Adapter: ASTEvaluator
Implementuje port Evaluator — przejście post-order ExprAST na liczbach całkowitych.

Przejście używa jawnego stosu: parser buduje `1 + 1 + ... + 1` jako drzewo
lewostronnie głębokie, więc rekurencja po węzłach wyczerpałaby stos Pythona.

Dzielenie obcina wynik w stronę zera (7 / 2 = 3, (1 - 8) / 2 = -3),
dzielenie przez zero → DivisionByZeroError.

eval_expr()  — oblicza wartość; kroki tylko gdy with_steps=True
evaluate()   — sama wartość
render()     — postać infiksowa z pełnymi nawiasami
ensure_dumpable() — drzewo nie za głębokie i bez liczb za długich dla JSON
"""
from __future__ import annotations

import logging
import operator
from typing import Callable

from contracts import (
    BinOpNode,
    MAX_TREE_DEPTH,
    DivisionByZeroError,
    EvalResult,
    ExprAST,
    NestingTooDeepError,
    NumberNode,
    ensure_json_int,
    int_to_digits,
)

logger = logging.getLogger("intcalc.evaluator")


def _trunc_div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZeroError(a)
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


# Mapowanie symboli operatorów na operacje
_OP_FUNCS: dict[str, Callable[[int, int], int]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _trunc_div,
}


class ASTEvaluator:
    """Ewaluator wyrażeń całkowitoliczbowych oparty na AST."""

    # -- Evaluator protocol ------------------------------------------------

    def eval_expr(self, ast: ExprAST, with_steps: bool = True) -> EvalResult:
        steps: list[str] | None = [] if with_steps else None
        value = self._walk(ast, steps)
        logger.debug("evaluated, %d steps recorded", len(steps or []))
        return EvalResult(value=value, steps=steps or [])

    def evaluate(self, ast: ExprAST) -> int:
        return self._walk(ast, None)

    # -- Prywatne ----------------------------------------------------------

    def _walk(self, root: ExprAST, steps: list[str] | None) -> int:
        """Post-order: lewe poddrzewo, prawe, potem operator."""
        values: list[int] = []
        stack: list[tuple[ExprAST, bool]] = [(root, False)]

        while stack:
            node, reduced = stack.pop()

            if isinstance(node, NumberNode):
                values.append(node.value)
            elif isinstance(node, BinOpNode):
                if not reduced:
                    stack.append((node, True))
                    stack.append((node.right, False))
                    stack.append((node.left, False))
                    continue
                right = values.pop()
                left = values.pop()
                result = _OP_FUNCS[node.op](left, right)
                if steps is not None:
                    steps.append(
                        f"{int_to_digits(left)} {node.op} {int_to_digits(right)}"
                        f" = {int_to_digits(result)}"
                    )
                values.append(result)
            else:
                raise TypeError(f"Unknown AST node type: {type(node).__name__}")

        return values.pop()


def render(root: ExprAST) -> str:
    """Czytelna reprezentacja drzewa; każdy BinOpNode w nawiasach."""
    parts: list[str] = []
    stack: list[tuple[ExprAST, bool]] = [(root, False)]

    while stack:
        node, reduced = stack.pop()
        if isinstance(node, NumberNode):
            parts.append(int_to_digits(node.value))
        elif isinstance(node, BinOpNode):
            if not reduced:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
                continue
            right = parts.pop()
            left = parts.pop()
            parts.append(f"({left} {node.op} {right})")
        else:
            raise TypeError(f"Unknown AST node type: {type(node).__name__}")

    return parts.pop()


def ensure_dumpable(root: ExprAST, max_depth: int = MAX_TREE_DEPTH) -> ExprAST:
    """Sprawdza, czy zrzut drzewa do JSON (zagnieżdżony jak drzewo) się powiedzie."""
    stack: list[tuple[ExprAST, int]] = [(root, 1)]
    while stack:
        node, level = stack.pop()
        if level > max_depth:
            raise NestingTooDeepError(level, max_depth)
        if isinstance(node, BinOpNode):
            stack.append((node.left, level + 1))
            stack.append((node.right, level + 1))
        else:
            ensure_json_int(node.value)
    return root
