"""
Port: Evaluator
Odpowiedzialność: deterministyczne liczenie wyrażeń AST na liczbach całkowitych.
"""
from typing import Protocol, runtime_checkable

from contracts import EvalResult, ExprAST


@runtime_checkable
class Evaluator(Protocol):
    def eval_expr(self, ast: ExprAST, with_steps: bool = True) -> EvalResult:
        """
        Evaluates an arithmetic AST to an integer.
        Returns EvalResult with:
          - value: int
          - steps: human-readable computation steps (empty unless with_steps)
        Must not recurse per node: left-deep trees can be arbitrarily deep.
        Division truncates toward zero.
        Raises DivisionByZeroError when the right operand of '/' is 0.
        """
        ...

    def evaluate(self, ast: ExprAST) -> int:
        """Value only; builds no step text."""
        ...
