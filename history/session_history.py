"""
Session history of recitation attempts, with chart-ready analytics.

Thread-safe store owned by whoever creates it (the API keeps one on app.state).
Attempts are kept newest first and capped at `limit` entries.
"""
import logging
import threading
import time
import uuid
from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from core.metrics import round_half_up
from core.scoring import RecitationResult

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_TREND_LIMIT = 10
# Newest-vs-oldest score difference beyond which an ayah counts as improving / declining
TREND_THRESHOLD = 5

DEFAULT_MISTAKE_COLOR = "#6b7280"

MISTAKE_LABELS: Dict[str, Dict[str, str]] = {
    "wrong_word": {"label": "Wrong Word", "color": "#ef4444"},
    "missed_word": {"label": "Missed Word", "color": "#6b7280"},
    "extra_word": {"label": "Extra Word", "color": "#f97316"},
    "wrong_letter": {"label": "Wrong Letter", "color": "#dc2626"},
    "missing_letter": {"label": "Missing Letter", "color": "#b91c1c"},
    "extra_letter": {"label": "Extra Letter", "color": "#ea580c"},
    "similar_letter": {"label": "Similar Letter", "color": "#d97706"},
    "wrong_haraka": {"label": "Wrong Vowel", "color": "#7c3aed"},
    "wrong_madd": {"label": "Wrong Elongation", "color": "#2563eb"},
    "missing_madd": {"label": "Missing Elongation", "color": "#1d4ed8"},
    "extra_madd": {"label": "Extra Elongation", "color": "#3b82f6"},
    "missing_shaddah": {"label": "Missing Shaddah", "color": "#be185d"},
    "wrong_ending": {"label": "Wrong Ending", "color": "#9f1239"},
    "missing_ending": {"label": "Cut-off Ending", "color": "#881337"},
    "hamza_error": {"label": "Hamza", "color": "#0d9488"},
}


@dataclass
class SessionAttempt:
    """One recorded attempt: a flattened RecitationResult plus the verse reference."""
    surah_number: int
    ayah_number: int
    overall_score: int
    grade: str
    correct_count: int
    partial_count: int
    wrong_count: int
    missed_count: int
    extra_count: int
    total_words: int
    letter_score: int
    madd_score: int
    haraka_score: int
    completeness_score: int
    surah_name: str = ""
    ayah_text: str = ""
    spoken_text: str = ""
    mistake_types: Dict[str, int] = field(default_factory=dict)
    duration: float = 0.0  # seconds
    id: str = ""
    timestamp: float = 0.0  # epoch ms

    @property
    def label(self) -> str:
        return f"S{self.surah_number}:{self.ayah_number}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def attempt_from_result(
    result: RecitationResult,
    surah_number: int = 0,
    ayah_number: int = 0,
    surah_name: str = "",
    ayah_text: str = "",
    spoken_text: str = "",
    duration: float = 0.0,
) -> SessionAttempt:
    return SessionAttempt(
        surah_number=surah_number,
        ayah_number=ayah_number,
        surah_name=surah_name,
        ayah_text=ayah_text,
        spoken_text=spoken_text,
        overall_score=result.overall_score,
        grade=result.grade,
        correct_count=result.correct_count,
        partial_count=result.partial_count,
        wrong_count=result.wrong_count,
        missed_count=result.missed_count,
        extra_count=result.extra_count,
        total_words=result.total_original_words,
        letter_score=result.letter_score,
        madd_score=result.madd_score,
        haraka_score=result.haraka_score,
        completeness_score=result.completeness_score,
        mistake_types=result.mistake_histogram(),
        duration=duration,
    )


class SessionHistory:
    """In-memory attempt store, newest first."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError(f"history limit must be positive, got {limit}")
        self.limit = limit
        self._lock = threading.Lock()
        self._attempts: deque = deque(maxlen=limit)

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts)

    def add_attempt(self, attempt: SessionAttempt) -> SessionAttempt:
        """Stamp the attempt with an id and timestamp and store it as the newest entry."""
        now_ms = time.time() * 1000
        if not attempt.id:
            attempt.id = f"{int(now_ms)}-{uuid.uuid4().hex[:5]}"
        if not attempt.timestamp:
            attempt.timestamp = now_ms
        with self._lock:
            self._attempts.appendleft(attempt)
            size = len(self._attempts)
        logger.info("Recorded attempt %s (%s, score=%d); %d in history",
                    attempt.id, attempt.label, attempt.overall_score, size)
        return attempt

    def get_history(self) -> List[SessionAttempt]:
        with self._lock:
            return list(self._attempts)

    def clear(self) -> None:
        with self._lock:
            self._attempts.clear()
        logger.info("Session history cleared")

    def get_score_trend(self, limit: int = DEFAULT_TREND_LIMIT) -> List[Dict[str, Any]]:
        """Most recent `limit` attempts as chart points, oldest → newest."""
        recent = self.get_history()[:max(limit, 0)]
        recent.reverse()
        return [
            {
                "index": i,
                "label": a.label,
                "score": a.overall_score,
                "grade": a.grade,
                "correct": a.correct_count,
                "wrong": a.wrong_count,
                "missed": a.missed_count,
            }
            for i, a in enumerate(recent)
        ]

    def get_mistake_frequencies(self) -> List[Dict[str, Any]]:
        """Mistake kinds summed over all attempts, most frequent first."""
        totals: Dict[str, int] = {}
        for a in self.get_history():
            for kind, n in a.mistake_types.items():
                totals[kind] = totals.get(kind, 0) + n
        rows = []
        for kind, n in totals.items():
            meta: Optional[Dict[str, str]] = MISTAKE_LABELS.get(kind)
            rows.append({
                "type": kind,
                "label": meta["label"] if meta else kind,
                "count": n,
                "color": meta["color"] if meta else DEFAULT_MISTAKE_COLOR,
            })
        rows.sort(key=lambda r: r["count"], reverse=True)
        return rows

    def get_ayah_stats(self) -> List[Dict[str, Any]]:
        """
        Per-ayah attempts, best and mean score, and trend.

        trend compares the newest and oldest attempt of the ayah:
        "up" above +TREND_THRESHOLD, "down" below -TREND_THRESHOLD, else "stable".
        """
        groups: Dict[str, List[int]] = {}
        for a in self.get_history():
            groups.setdefault(a.label, []).append(a.overall_score)
        stats = []
        for label, scores in groups.items():
            arr = np.asarray(scores, dtype=float)
            trend = "stable"
            if len(scores) >= 2:
                diff = scores[0] - scores[-1]
                if diff > TREND_THRESHOLD:
                    trend = "up"
                elif diff < -TREND_THRESHOLD:
                    trend = "down"
            stats.append({
                "label": label,
                "attempts": len(scores),
                "best_score": int(arr.max()),
                "avg_score": round_half_up(float(arr.mean())),
                "trend": trend,
            })
        return stats
