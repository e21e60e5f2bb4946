from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from voice_interview.api.v1.schemas import (
    IdealAnswerSchema,
    ScoreRequestSchema,
    ScoreResponseSchema,
)
from voice_interview.application.exceptions import InvalidInputError
from voice_interview.application.ports.answer_store import AnswerStorePort
from voice_interview.application.use_cases.score_answers import ScoreAnswersUseCase
from voice_interview.wiring.dependencies import get_answer_store, get_score_use_case

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/score", response_model=ScoreResponseSchema)
async def score(
    req: ScoreRequestSchema,
    uc: ScoreAnswersUseCase = Depends(get_score_use_case),
):
    try:
        result = await uc.execute(questions=req.questions, answers=req.answers)
    except InvalidInputError as e:
        logger.info("Rejected scoring request", extra={"reason": e.reason})
        return JSONResponse(status_code=400, content={"message": e.message})
    except Exception as e:
        logger.exception("Scoring error", extra={"error": str(e)})
        return JSONResponse(
            status_code=500,
            content={"message": "Error processing scoring request", "error": str(e)},
        )

    return ScoreResponseSchema.from_result(result)


@router.get("/ideal-answers", response_model=IdealAnswerSchema)
def ideal_answer(
    question: str = Query(..., min_length=1),
    store: AnswerStorePort = Depends(get_answer_store),
):
    answer = store.get_stored_answer(question)
    if answer is None:
        return JSONResponse(status_code=404, content={"message": "No stored answer for this question"})
    return IdealAnswerSchema(question=question, idealAnswer=answer)
