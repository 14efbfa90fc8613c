from __future__ import annotations

import io
import json

import pytest

import intcalc
from config import Settings
from contracts import int_to_digits


def test_repl_evaluates_lines_until_eof(capsys):
    stdin = io.StringIO("2 + 3 * 4\n7 / 0\n\n(2 + 3) * 4\n")
    stdout = io.StringIO()

    intcalc.repl(Settings(prompt="calc> "), stdin=stdin, stdout=stdout)

    out = stdout.getvalue()
    assert out.count("calc> ") == 5
    assert "14\n" in out
    assert "20\n" in out
    assert "Error: Division by zero" in capsys.readouterr().err


def test_repl_prints_steps(capsys):
    stdin = io.StringIO("8 - 3 - 2\n")
    stdout = io.StringIO()

    intcalc.repl(Settings(prompt="> "), show_steps=True, stdin=stdin, stdout=stdout)

    assert "  1. 8 - 3 = 5\n  2. 5 - 2 = 3\n3\n" in stdout.getvalue()


def test_repl_keeps_going_after_syntax_error(capsys):
    stdin = io.StringIO("(2 + 3\n2 # 3\n1 + 1\n")
    stdout = io.StringIO()

    intcalc.repl(Settings(), stdin=stdin, stdout=stdout)

    err = capsys.readouterr().err
    assert "Expected RPAREN" in err
    assert "Unknown character '#'" in err
    assert "2\n" in stdout.getvalue()


def test_eval_command_prints_result(capsys):
    intcalc.main(["eval", "--text", "2 + 3 * 4"])

    assert capsys.readouterr().out.strip() == "14"


def test_eval_command_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("(2 + 3) * 4\n"))

    intcalc.main(["eval", "--steps"])

    assert capsys.readouterr().out.splitlines() == [
        "  1. 2 + 3 = 5",
        "  2. 5 * 4 = 20",
        "20",
    ]


def test_eval_command_exits_with_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        intcalc.main(["eval", "--text", "7 / 0"])

    assert exc_info.value.code == 1
    assert "Division by zero" in capsys.readouterr().err


def test_tokens_command_lists_tokens(capsys):
    intcalc.main(["tokens", "--text", "8 / 4"])

    out = capsys.readouterr().out
    assert "Tokens [4]" in out
    assert "INTEGER" in out
    assert "DIV" in out
    assert "EOF" in out


def test_ast_command_dumps_json(capsys):
    intcalc.main(["ast", "--json", "--text", "1 + 2"])

    dumped = json.loads(capsys.readouterr().out)
    assert dumped == {
        "node_type": "binop",
        "op": "+",
        "left": {"node_type": "number", "value": 1},
        "right": {"node_type": "number", "value": 2},
    }


def test_ast_command_renders_tree(capsys):
    intcalc.main(["ast", "--text", "8 - 3 - 2"])

    out = capsys.readouterr().out
    assert "((8 - 3) - 2)" in out


def test_repl_survives_long_and_huge_lines(capsys):
    product = " * ".join(["9999999999"] * 450)
    stdin = io.StringIO(
        "+".join(["1"] * 1500) + "\n"
        + "9" * 5000 + "\n"
        + product + "\n"
        + "(" * 5000 + "1" + ")" * 5000 + "\n"
        + "1 + 1\n"
    )
    stdout = io.StringIO()

    intcalc.repl(Settings(prompt=""), stdin=stdin, stdout=stdout)

    assert stdout.getvalue().splitlines() == [
        "1500",
        "9" * 5000,
        int_to_digits(9999999999 ** 450),
        "2",
        "",
    ]
    assert "nested 201 levels deep" in capsys.readouterr().err


def test_eval_command_prints_huge_result(capsys):
    intcalc.main(["eval", "--text", " * ".join(["9999999999"] * 450)])

    assert capsys.readouterr().out.strip() == int_to_digits(9999999999 ** 450)


def test_ast_command_renders_long_flat_chain(capsys):
    intcalc.main(["ast", "--text", "+".join(["1"] * 1500)])

    out = capsys.readouterr().out
    assert "(" * 1499 + "1 + 1)" in out


def test_ast_command_rejects_json_dump_of_deep_tree(capsys):
    with pytest.raises(SystemExit) as exc_info:
        intcalc.main(["ast", "--json", "--text", "+".join(["1"] * 300)])

    assert exc_info.value.code == 1
    assert "limit is 200" in capsys.readouterr().err
