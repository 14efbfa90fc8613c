from __future__ import annotations

import pytest

from adapters.evaluator.ast_evaluator import ASTEvaluator, ensure_dumpable, render
from contracts import (
    BinOpNode,
    DivisionByZeroError,
    NestingTooDeepError,
    NumberNode,
    NumberTooLargeError,
)
from ports.evaluator import Evaluator


def _bin(op: str, left, right) -> BinOpNode:
    def _node(v):
        return NumberNode(value=v) if isinstance(v, int) else v

    return BinOpNode(op=op, left=_node(left), right=_node(right))


def test_ast_evaluator_implements_evaluator_port():
    assert isinstance(ASTEvaluator(), Evaluator)


def test_ast_evaluator_returns_literal_value():
    assert ASTEvaluator().evaluate(NumberNode(value=7)) == 7


def test_ast_evaluator_combines_all_operators():
    evaluator = ASTEvaluator()

    assert evaluator.evaluate(_bin("+", 2, 3)) == 5
    assert evaluator.evaluate(_bin("-", 2, 3)) == -1
    assert evaluator.evaluate(_bin("*", 2, 3)) == 6
    assert evaluator.evaluate(_bin("/", 7, 2)) == 3


def test_ast_evaluator_truncates_negative_quotient_toward_zero():
    # (1 - 8) / 2 = -3.5 → -3, nie -4
    ast = _bin("/", _bin("-", 1, 8), 2)

    assert ASTEvaluator().evaluate(ast) == -3


def test_ast_evaluator_raises_on_division_by_zero():
    ast = _bin("/", 7, _bin("-", 2, 2))

    with pytest.raises(DivisionByZeroError) as exc_info:
        ASTEvaluator().evaluate(ast)

    assert exc_info.value.left == 7
    assert exc_info.value.kind == "division_by_zero"
    assert isinstance(exc_info.value, ZeroDivisionError)


def test_ast_evaluator_records_steps_in_evaluation_order():
    ast = _bin("+", 2, _bin("*", 3, 4))

    result = ASTEvaluator().eval_expr(ast)

    assert result.value == 14
    assert result.steps == ["3 * 4 = 12", "2 + 12 = 14"]


def test_ast_evaluator_rejects_foreign_node():
    with pytest.raises(TypeError):
        ASTEvaluator().evaluate("1 + 2")  # type: ignore[arg-type]


def test_render_parenthesizes_every_binop():
    ast = _bin("-", _bin("-", 8, 3), 2)

    assert render(ast) == "((8 - 3) - 2)"
    assert render(NumberNode(value=5)) == "5"


def _left_deep_sum(n: int):
    node = NumberNode(value=1)
    for _ in range(n - 1):
        node = BinOpNode(op="+", left=node, right=NumberNode(value=1))
    return node


def test_ast_evaluator_handles_left_deep_tree_without_recursion():
    ast = _left_deep_sum(5000)

    assert ASTEvaluator().evaluate(ast) == 5000
    result = ASTEvaluator().eval_expr(ast)
    assert len(result.steps) == 4999
    assert result.steps[-1] == "4999 + 1 = 5000"


def test_ast_evaluator_skips_steps_when_not_requested():
    result = ASTEvaluator().eval_expr(_bin("*", 3, 4), with_steps=False)

    assert result.value == 12
    assert result.steps == []


def test_ast_evaluator_writes_steps_for_results_past_int_str_limit():
    big = 10 ** 5000
    ast = _bin("*", NumberNode(value=big), 3)

    result = ASTEvaluator().eval_expr(ast)

    assert result.value == 3 * big
    assert result.steps == [f"1{'0' * 5000} * 3 = 3{'0' * 5000}"]


def test_division_by_zero_message_with_huge_dividend():
    ast = _bin("/", NumberNode(value=10 ** 5000), 0)

    with pytest.raises(DivisionByZeroError, match=r"^Division by zero: 10+ / 0$"):
        ASTEvaluator().evaluate(ast)


def test_render_handles_left_deep_tree():
    rendered = render(_left_deep_sum(3000))

    assert rendered.startswith("(" * 2999 + "1 + 1)")
    assert rendered.endswith(" + 1)")


def test_ensure_dumpable_rejects_deep_tree():
    assert ensure_dumpable(_left_deep_sum(200)) is not None

    with pytest.raises(NestingTooDeepError) as exc_info:
        ensure_dumpable(_left_deep_sum(250))

    assert exc_info.value.limit == 200


def test_ensure_dumpable_rejects_number_too_long_for_json(monkeypatch):
    monkeypatch.setattr("contracts.sys.get_int_max_str_digits", lambda: 1000, raising=False)

    ensure_dumpable(NumberNode(value=10 ** 999))
    with pytest.raises(NumberTooLargeError):
        ensure_dumpable(_bin("+", 1, NumberNode(value=10 ** 1000)))
