#!/usr/bin/env python3
"""
intcalc.py — CLI narzędzie IntCalc.

Działa całkowicie lokalnie, nie wymaga uruchomionego serwera API.

Konfiguracja: zmienne środowiskowe z prefiksem INTCALC_
lub plik .env (np. INTCALC_PROMPT="> ").

Podkomendy:
    repl    — interaktywna pętla: prompt, linia, wynik (do EOF / Ctrl-C)
    eval    — oblicz jedno wyrażenie
    tokens  — pokaż strumień tokenów
    ast     — pokaż drzewo składniowe

Użycie:
    python intcalc.py repl
    python intcalc.py eval --text "2 + 3 * 4"
    echo "(2 + 3) * 4" | python intcalc.py eval --steps
    python intcalc.py tokens --text "8 / 4 / 2"
    python intcalc.py ast --json --text "8 - 3 - 2"
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, TextIO

from rich import box
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from config import Settings


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _safe_terminal_text(value: Any) -> str:
    s = str(value).replace("→", "->")
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding)
        return s
    except UnicodeEncodeError:
        return s.encode(encoding, errors="replace").decode(encoding, errors="replace")


def _read_text(args: argparse.Namespace) -> str:
    text = getattr(args, "text", None) or sys.stdin.readline()
    if not text.strip():
        print("Błąd: podaj wyrażenie przez --text lub stdin", file=sys.stderr)
        sys.exit(1)
    return text


def _print_error(exc: Exception) -> None:
    print(f"Error: {exc}", file=sys.stderr)


def _print_steps(steps: list[str]) -> None:
    for idx, step in enumerate(steps, 1):
        print(f"  {idx}. {step}")


def _ast_tree(root: Any) -> Tree:
    from contracts import BinOpNode, int_to_digits

    top: Tree | None = None
    stack: list[tuple[Any, Tree | None]] = [(root, None)]
    while stack:
        node, parent = stack.pop()
        if isinstance(node, BinOpNode):
            label = node.op
        else:
            label = int_to_digits(node.value)
        branch = Tree(label) if parent is None else parent.add(label)
        if top is None:
            top = branch
        if isinstance(node, BinOpNode):
            # lewe dziecko zdejmowane pierwsze, więc dodane jako pierwsze
            stack.append((node.right, branch))
            stack.append((node.left, branch))
    return top


def _tree_depth(root: Any) -> int:
    from contracts import BinOpNode

    depth = 0
    stack: list[tuple[Any, int]] = [(root, 1)]
    while stack:
        node, level = stack.pop()
        depth = max(depth, level)
        if isinstance(node, BinOpNode):
            stack.append((node.left, level + 1))
            stack.append((node.right, level + 1))
    return depth


# -- podkomendy ------------------------------------------------------------

def repl(
    settings: Settings,
    show_steps: bool = False,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Pętla read-eval-print; każdy błąd kończy tylko bieżącą linię."""
    from contracts import CalcError, int_to_digits
    from pipeline import evaluate_with_steps

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    while True:
        stdout.write(settings.prompt)
        stdout.flush()
        try:
            line = stdin.readline()
        except KeyboardInterrupt:
            stdout.write("\n")
            return
        if not line:
            # EOF
            stdout.write("\n")
            return
        if not line.strip():
            continue

        try:
            result = evaluate_with_steps(line, with_steps=show_steps)
        except CalcError as exc:
            _print_error(exc)
            continue

        for idx, step in enumerate(result.steps, 1):
            stdout.write(f"  {idx}. {step}\n")
        stdout.write(f"{int_to_digits(result.value)}\n")


def _repl(args: argparse.Namespace, settings: Settings) -> None:
    repl(settings, show_steps=args.steps or settings.show_steps)


def _eval(args: argparse.Namespace, settings: Settings) -> None:
    from contracts import CalcError, int_to_digits
    from pipeline import evaluate_with_steps

    text = _read_text(args)
    try:
        result = evaluate_with_steps(text, with_steps=args.steps or settings.show_steps)
    except CalcError as exc:
        _print_error(exc)
        sys.exit(1)

    _print_steps(result.steps)
    print(int_to_digits(result.value))


def _tokens(args: argparse.Namespace, settings: Settings) -> None:
    from contracts import CalcError
    from pipeline import tokenize

    text = _read_text(args)
    try:
        tokens = tokenize(text)
    except CalcError as exc:
        _print_error(exc)
        sys.exit(1)

    table = Table(title=f"Tokens [{len(tokens)}]", box=box.ASCII, show_lines=False)
    table.add_column("Pos", justify="right", no_wrap=True, style="cyan")
    table.add_column("Type", no_wrap=True)
    table.add_column("Value")
    for tok in tokens:
        table.add_row(str(tok.pos), tok.type.value, _safe_terminal_text(tok.value))
    _console().print(table)


def _ast(args: argparse.Namespace, settings: Settings) -> None:
    from adapters.evaluator.ast_evaluator import ensure_dumpable, render
    from contracts import CalcError
    from pipeline import parse

    text = _read_text(args)
    try:
        tree = parse(text)
        if args.json:
            ensure_dumpable(tree)
    except CalcError as exc:
        _print_error(exc)
        sys.exit(1)

    if args.json:
        print(json.dumps(tree.model_dump(), ensure_ascii=False, indent=2))
        return
    # Każdy poziom drzewa rich to 4 kolumny wcięcia
    if _tree_depth(tree) * 4 < _console().width:
        _console().print(_ast_tree(tree))
    print(render(tree))


# -- main ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="intcalc",
        description="IntCalc — kalkulator wyrażeń całkowitoliczbowych",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # repl
    p = sub.add_parser("repl", help="Interaktywna pętla read-eval-print")
    p.add_argument("--steps", "-s", action="store_true",
                   help="Wyświetl kroki obliczeń")

    # eval
    p = sub.add_parser("eval", help="Oblicz jedno wyrażenie")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")
    p.add_argument("--steps", "-s", action="store_true",
                   help="Wyświetl kroki obliczeń")

    # tokens
    p = sub.add_parser("tokens", help="Pokaż strumień tokenów")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")

    # ast
    p = sub.add_parser("ast", help="Pokaż drzewo składniowe")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")
    p.add_argument("--json", action="store_true", help="Zrzut AST jako JSON")

    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())

    cmds = {
        "repl":   _repl,
        "eval":   _eval,
        "tokens": _tokens,
        "ast":    _ast,
    }
    cmds[args.command](args, settings)


if __name__ == "__main__":
    main()
