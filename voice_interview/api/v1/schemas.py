import math
from typing import Any

from pydantic import BaseModel, Field

from voice_interview.domain.entities.evaluation import BatchResult


class ScoreRequestSchema(BaseModel):
    # Shape is validated by the use case so failures map to {"message": ...}.
    questions: Any = None
    answers: Any = None


class AnalysisSchema(BaseModel):
    score: float
    feedback: str
    correctAnswer: str


class ScoredItemSchema(BaseModel):
    question: str
    userAnswer: str
    analysis: AnalysisSchema


class BatchSummarySchema(BaseModel):
    totalQuestions: int
    averageScore: float | None = Field(
        default=None,
        description="Mean score of the scored items; null when no item was scored (NaN).",
    )


class ScoreResponseSchema(BaseModel):
    results: list[ScoredItemSchema]
    summary: BatchSummarySchema

    @staticmethod
    def from_result(result: BatchResult) -> "ScoreResponseSchema":
        average = result.summary.average_score
        return ScoreResponseSchema(
            results=[
                ScoredItemSchema(
                    question=item.question,
                    userAnswer=item.user_answer,
                    analysis=AnalysisSchema(
                        score=item.analysis.score,
                        feedback=item.analysis.feedback,
                        correctAnswer=item.analysis.correct_answer,
                    ),
                )
                for item in result.results
            ],
            summary=BatchSummarySchema(
                totalQuestions=result.summary.total_questions,
                averageScore=None if math.isnan(average) else average,
            ),
        )


class IdealAnswerSchema(BaseModel):
    question: str
    idealAnswer: str


class MessageSchema(BaseModel):
    message: str
    error: str | None = None
