"""
Mistake taxonomy: 24 mistake kinds, each with a fixed severity level and penalty.

The severity table is built once at import and never written to.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class MistakeKind(str, Enum):
    # Word-level
    MISSED_WORD = "missed_word"
    EXTRA_WORD = "extra_word"
    WORD_ORDER = "word_order"
    WRONG_WORD = "wrong_word"
    # Letter-level
    WRONG_LETTER = "wrong_letter"
    SIMILAR_LETTER = "similar_letter"  # confused a phonetically similar letter (e.g. س/ص)
    MISSING_LETTER = "missing_letter"
    EXTRA_LETTER = "extra_letter"
    # Vowel-level (haraka)
    WRONG_HARAKA = "wrong_haraka"
    MISSING_HARAKA = "missing_haraka"
    EXTRA_HARAKA = "extra_haraka"
    # Elongation (madd)
    WRONG_MADD = "wrong_madd"
    MISSING_MADD = "missing_madd"
    EXTRA_MADD = "extra_madd"
    # Gemination (shaddah)
    MISSING_SHADDAH = "missing_shaddah"
    EXTRA_SHADDAH = "extra_shaddah"
    # Nasalization / tanwin / sukoon
    WRONG_GHUNNA = "wrong_ghunna"
    MISSING_GHUNNA = "missing_ghunna"
    TANWIN_ERROR = "tanwin_error"
    SUKOON_ERROR = "sukoon_error"
    # Ending
    WRONG_ENDING = "wrong_ending"
    MISSING_ENDING = "missing_ending"
    # Hamza
    HAMZA_ERROR = "hamza_error"
    # Close enough, minor deviation
    PRONUNCIATION_CLOSE = "pronunciation_close"


CRITICAL = "critical"
MAJOR = "major"
MINOR = "minor"
COSMETIC = "cosmetic"


@dataclass(frozen=True)
class MistakeSeverity:
    level: str  # "critical" | "major" | "minor" | "cosmetic"
    score: int  # penalty 0–100

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "score": self.score}


MISTAKE_SEVERITY: Mapping[MistakeKind, MistakeSeverity] = MappingProxyType({
    MistakeKind.MISSED_WORD: MistakeSeverity(CRITICAL, 100),
    MistakeKind.EXTRA_WORD: MistakeSeverity(MAJOR, 60),
    MistakeKind.WORD_ORDER: MistakeSeverity(MAJOR, 70),
    MistakeKind.WRONG_WORD: MistakeSeverity(CRITICAL, 85),
    MistakeKind.WRONG_LETTER: MistakeSeverity(CRITICAL, 90),
    MistakeKind.SIMILAR_LETTER: MistakeSeverity(MAJOR, 50),
    MistakeKind.MISSING_LETTER: MistakeSeverity(MAJOR, 65),
    MistakeKind.EXTRA_LETTER: MistakeSeverity(MINOR, 35),
    MistakeKind.WRONG_HARAKA: MistakeSeverity(MAJOR, 55),
    MistakeKind.MISSING_HARAKA: MistakeSeverity(MINOR, 30),
    MistakeKind.EXTRA_HARAKA: MistakeSeverity(MINOR, 20),
    MistakeKind.WRONG_MADD: MistakeSeverity(MAJOR, 60),
    MistakeKind.MISSING_MADD: MistakeSeverity(MAJOR, 65),
    MistakeKind.EXTRA_MADD: MistakeSeverity(MINOR, 30),
    MistakeKind.MISSING_SHADDAH: MistakeSeverity(MAJOR, 60),
    MistakeKind.EXTRA_SHADDAH: MistakeSeverity(MINOR, 30),
    MistakeKind.WRONG_GHUNNA: MistakeSeverity(MAJOR, 55),
    MistakeKind.MISSING_GHUNNA: MistakeSeverity(MAJOR, 55),
    MistakeKind.TANWIN_ERROR: MistakeSeverity(MINOR, 35),
    MistakeKind.SUKOON_ERROR: MistakeSeverity(MINOR, 30),
    MistakeKind.WRONG_ENDING: MistakeSeverity(MAJOR, 55),
    MistakeKind.MISSING_ENDING: MistakeSeverity(MAJOR, 50),
    MistakeKind.HAMZA_ERROR: MistakeSeverity(MINOR, 25),
    MistakeKind.PRONUNCIATION_CLOSE: MistakeSeverity(COSMETIC, 10),
})


@dataclass(frozen=True)
class Mistake:
    """A single classified mistake on one word."""
    kind: MistakeKind
    severity: MistakeSeverity
    description: str
    tip: str
    original_part: Optional[str] = None
    spoken_part: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": self.kind.value,
            "severity": self.severity.to_dict(),
            "description": self.description,
            "tip": self.tip,
        }
        if self.original_part is not None:
            out["original_part"] = self.original_part
        if self.spoken_part is not None:
            out["spoken_part"] = self.spoken_part
        return out


def make_mistake(
    kind: MistakeKind,
    description: str,
    tip: str,
    original_part: Optional[str] = None,
    spoken_part: Optional[str] = None,
) -> Mistake:
    """Build a Mistake with the severity looked up from the static table."""
    return Mistake(
        kind=kind,
        severity=MISTAKE_SEVERITY[kind],
        description=description,
        tip=tip,
        original_part=original_part,
        spoken_part=spoken_part,
    )
