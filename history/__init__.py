"""
Session history: recorded recitation attempts and progress analytics.
"""

from history.session_history import (
    MISTAKE_LABELS,
    SessionAttempt,
    SessionHistory,
    attempt_from_result,
)

__all__ = [
    "MISTAKE_LABELS",
    "SessionAttempt",
    "SessionHistory",
    "attempt_from_result",
]
