"""
schemas.py — Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from pydantic import BaseModel, Field

from contracts import ExprAST


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    text: str
    steps: bool = False   # dołącz kroki obliczeń do odpowiedzi


class EvaluateResponse(BaseModel):
    text: str
    result: int
    steps: list[str] = Field(default_factory=list)


# ─────────────────────────── /parse ──────────────────────────────

class ParseRequest(BaseModel):
    text: str


class ParseResponse(BaseModel):
    text: str
    ast: ExprAST
    rendered: str


# ─────────────────────────── błędy / health ──────────────────────

class ErrorResponse(BaseModel):
    error: str    # CalcError.kind, np. "division_by_zero"
    detail: str


class HealthResponse(BaseModel):
    status: str
    version: str
