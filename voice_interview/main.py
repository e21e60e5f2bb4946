from fastapi import FastAPI

from voice_interview.api.v1.scoring import router as scoring_router
from voice_interview.core.config import settings
from voice_interview.core.logging import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Voice Interview Scoring", version="1.0.0")

app.include_router(scoring_router, prefix="/api/v1", tags=["scoring"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
