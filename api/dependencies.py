"""
dependencies.py — FastAPI Dependency Injection.
Każda zależność zwraca odpowiedni adapter przez Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.evaluator.ast_evaluator import ASTEvaluator


def get_evaluator(request: Request) -> ASTEvaluator:
    return request.app.state.evaluator
