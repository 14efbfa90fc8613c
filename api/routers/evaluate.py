"""
Router: POST /evaluate
Oblicza jedną linię wyrażenia; błędy kalkulatora obsługuje handler w api/main.py.
"""
from fastapi import APIRouter, Depends

from adapters.evaluator.ast_evaluator import ASTEvaluator
from api.dependencies import get_evaluator
from api.schemas import ErrorResponse, EvaluateRequest, EvaluateResponse
from contracts import ensure_json_int
from pipeline import parse

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse, responses={400: {"model": ErrorResponse}})
def evaluate(
    body: EvaluateRequest,
    evaluator: ASTEvaluator = Depends(get_evaluator),
):
    result = evaluator.eval_expr(parse(body.text), with_steps=body.steps)
    return EvaluateResponse(
        text=body.text,
        result=ensure_json_int(result.value),
        steps=result.steps,
    )
