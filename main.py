"""
Quran recitation checker API.
Compares a recognized transcript with the canonical ayah text and returns word-level
results, mistakes, Tajweed annotations, scores and feedback. Keeps a session history
of recorded attempts for progress charts.
"""
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from config import HISTORY_LIMIT, HOST, LOG_LEVEL, PORT, get_cors_origins
from core.metrics import wer, cer
from core.scoring import compare_recitation
from history.session_history import SessionHistory, attempt_from_result
from tajweed.annotator import annotate_verse, summarize_tajweed
from tajweed.rules import TAJWEED_RULES, TajweedRule

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Quran Recitation Checker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.history = SessionHistory(limit=HISTORY_LIMIT)


class CompareRequest(BaseModel):
    verse_text: str = Field(..., description="Canonical ayah text (Uthmani, diacritics allowed)")
    spoken_text: str = Field("", description="Transcript from speech recognition")
    surah: Optional[int] = Field(None, ge=1, le=114, description="Surah number (1-114)")
    ayah: Optional[int] = Field(None, ge=1, description="Ayah number")
    surah_name: str = Field("", description="Surah display name")
    duration: float = Field(0.0, ge=0, description="Recitation length in seconds")
    record: bool = Field(False, description="Store the attempt in the session history")


class TajweedRequest(BaseModel):
    verse_text: str = Field(..., description="Canonical ayah text")


def _history(request: Request) -> SessionHistory:
    return request.app.state.history


@app.get("/")
def health_check(request: Request):
    return {
        "status": "ok",
        "message": "Quran Recitation Checker API is running",
        "attempts_recorded": len(_history(request)),
    }


@app.post("/compare")
def compare(body: CompareRequest, request: Request):
    if body.record and (body.surah is None or body.ayah is None):
        logger.warning("Rejected /compare: record requested without surah/ayah")
        raise HTTPException(status_code=400, detail="surah and ayah are required to record an attempt")

    result = compare_recitation(body.verse_text, body.spoken_text)
    response = result.to_dict()
    spoken = body.spoken_text.strip()
    response["wer"] = round(wer(body.verse_text, spoken), 4) if spoken else None
    response["cer"] = round(cer(body.verse_text, spoken), 4) if spoken else None

    if body.record:
        attempt = attempt_from_result(
            result,
            surah_number=body.surah,
            ayah_number=body.ayah,
            surah_name=body.surah_name,
            ayah_text=body.verse_text,
            spoken_text=body.spoken_text,
            duration=body.duration,
        )
        response["attempt_id"] = _history(request).add_attempt(attempt).id
    return response


@app.post("/tajweed")
def tajweed(body: TajweedRequest):
    annotations = annotate_verse(body.verse_text)
    return {
        "annotations": [a.to_dict() for a in annotations],
        "summary": [s.to_dict() for s in summarize_tajweed(annotations)],
    }


@app.get("/tajweed/rules")
def tajweed_rules():
    return [info.to_dict() for info in TAJWEED_RULES.values()]


@app.get("/tajweed/rules/{name}")
def tajweed_rule(name: str):
    try:
        rule = TajweedRule(name)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Tajweed rule '{name}' not found")
    return TAJWEED_RULES[rule].to_dict()


@app.get("/history")
def get_history(request: Request):
    return [a.to_dict() for a in _history(request).get_history()]


@app.get("/history/trend")
def get_trend(request: Request, limit: int = Query(10, ge=1, le=100, description="Number of recent attempts")):
    return _history(request).get_score_trend(limit)


@app.get("/history/mistakes")
def get_mistakes(request: Request):
    return _history(request).get_mistake_frequencies()


@app.get("/history/ayahs")
def get_ayahs(request: Request):
    return _history(request).get_ayah_stats()


@app.delete("/history")
def clear_history(request: Request):
    _history(request).clear()
    return {"status": "cleared"}


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
