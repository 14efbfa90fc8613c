"""
Router: POST /parse
Zwraca AST wyrażenia bez obliczania. Drzewa głębsze niż MAX_TREE_DEPTH
albo z liczbami za długimi dla JSON → 400.
"""
from fastapi import APIRouter

from adapters.evaluator.ast_evaluator import ensure_dumpable, render
from api.schemas import ErrorResponse, ParseRequest, ParseResponse
from pipeline import parse as parse_line

router = APIRouter(prefix="/parse", tags=["parse"])


@router.post("", response_model=ParseResponse, responses={400: {"model": ErrorResponse}})
def parse(body: ParseRequest):
    tree = ensure_dumpable(parse_line(body.text))
    return ParseResponse(text=body.text, ast=tree, rendered=render(tree))
