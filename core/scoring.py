"""
Recitation scoring: canonical verse vs spoken transcript.

Pipeline: tokenize → Tajweed annotation of the verse → word alignment → per-word
mistake analysis → aggregation into category scores, grade and feedback.

- completeness = 100 * (correct + 0.5 * partial) / canonical words
- letter / madd / haraka = mean of the per-word scores (extra words excluded)
- overall = 0.45 * completeness + 0.30 * letter + 0.15 * madd + 0.10 * haraka

Two degenerate inputs return well-formed zero results instead of raising:
an empty verse ("No ayah selected.") and an empty transcript (every word missed).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from alignment.sequence_alignment import align_sequences
from core.mistakes import CRITICAL, MAJOR, Mistake, MistakeKind
from core.metrics import round_half_up
from core.normalization import tokenize
from core.word_analysis import CORRECT, EXTRA, MISSED, PARTIAL, WRONG, analyze_word_mistakes
from tajweed.annotator import TajweedSummary, WordTajweed, annotate_verse, summarize_tajweed

logger = logging.getLogger(__name__)

# Overall score weights, in percent
WEIGHT_COMPLETENESS = 45
WEIGHT_LETTER = 30
WEIGHT_MADD = 15
WEIGHT_HARAKA = 10

# (min score, grade, Arabic grade, banner icon, banner text, banner severity), highest first
GRADE_BANDS: Tuple[Tuple[int, str, str, str, str, str], ...] = (
    (95, "Excellent", "ممتاز", "🌟",
     "MashaAllah! Near-perfect recitation! Keep it up!", "success"),
    (85, "Very Good", "جيد جداً", "👍",
     "Very good recitation! Just a few refinements needed.", "success"),
    (72, "Good", "جيد", "💪",
     "Good effort! Review the highlighted mistakes and practice again.", "info"),
    (55, "Fair", "مقبول", "📖",
     "Fair attempt. Listen to a reciter first, then try again.", "warning"),
    (35, "Needs Practice", "يحتاج تدريب", "🎧",
     "Needs more practice. Recite slowly, word by word, after a master reciter.", "error"),
    (0, "Keep Trying", "استمر في المحاولة", "🤲",
     "Keep practicing! Listen carefully to master reciters and repeat daily.", "error"),
)

MISSED_PREVIEW = 4
RULES_PREVIEW = 3

# (mistake kinds, icon, tip) scanned in this order, each tip emitted at most once
MISTAKE_PATTERN_TIPS = (
    ((MistakeKind.MISSING_MADD, MistakeKind.WRONG_MADD), "〰️",
     "Pay close attention to elongation (مد) letters: ا و ي must be pronounced correctly."),
    ((MistakeKind.SIMILAR_LETTER,), "🔤",
     "Some similar-sounding letters were confused (e.g. س/ص, ح/ه, ط/ت). "
     "Learn their مخارج (articulation points)."),
    ((MistakeKind.WRONG_ENDING,), "🔚",
     "Word endings (إعراب) need attention: the last letter of each word affects meaning."),
    ((MistakeKind.MISSING_SHADDAH,), "🎵",
     "Shaddah (ّ) was not applied clearly on some words. Double the stressed letter."),
)


@dataclass(frozen=True)
class FeedbackItem:
    icon: str
    text: str
    severity: str  # "success" | "warning" | "error" | "info"

    def to_dict(self) -> Dict[str, Any]:
        return {"icon": self.icon, "text": self.text, "severity": self.severity}


@dataclass(frozen=True)
class WordResult:
    """One aligned word: canonical word (or "" for extras), what was said, scores, mistakes."""
    original: str
    original_index: int  # -1 for extra words
    spoken: str
    status: str          # correct | partial | wrong | missed | extra
    similarity: int
    letter_match: int
    madd_match: int
    haraka_match: int
    mistakes: List[Mistake]
    tajweed: WordTajweed

    @property
    def has_critical(self) -> bool:
        return any(m.severity.level == CRITICAL for m in self.mistakes)

    @property
    def has_major(self) -> bool:
        return any(m.severity.level in (CRITICAL, MAJOR) for m in self.mistakes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "original_index": self.original_index,
            "spoken": self.spoken,
            "status": self.status,
            "similarity": self.similarity,
            "letter_match": self.letter_match,
            "madd_match": self.madd_match,
            "haraka_match": self.haraka_match,
            "mistakes": [m.to_dict() for m in self.mistakes],
            "has_critical": self.has_critical,
            "has_major": self.has_major,
            "tajweed": self.tajweed.to_dict(),
        }


@dataclass
class RecitationResult:
    overall_score: int
    grade: str
    grade_arabic: str
    word_results: List[WordResult] = field(default_factory=list)
    total_original_words: int = 0
    total_spoken_words: int = 0
    correct_count: int = 0
    partial_count: int = 0
    wrong_count: int = 0
    missed_count: int = 0
    extra_count: int = 0
    missed_words: List[str] = field(default_factory=list)
    extra_words: List[str] = field(default_factory=list)
    tajweed_annotations: List[WordTajweed] = field(default_factory=list)
    tajweed_summary: List[TajweedSummary] = field(default_factory=list)
    feedback: List[FeedbackItem] = field(default_factory=list)
    letter_score: int = 0
    madd_score: int = 0
    haraka_score: int = 0
    completeness_score: int = 0

    def mistake_histogram(self) -> Dict[str, int]:
        """Count of each mistake kind across all words."""
        counts: Dict[str, int] = {}
        for wr in self.word_results:
            for m in wr.mistakes:
                counts[m.kind.value] = counts.get(m.kind.value, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "grade": self.grade,
            "grade_arabic": self.grade_arabic,
            "word_results": [w.to_dict() for w in self.word_results],
            "total_original_words": self.total_original_words,
            "total_spoken_words": self.total_spoken_words,
            "correct_count": self.correct_count,
            "partial_count": self.partial_count,
            "wrong_count": self.wrong_count,
            "missed_count": self.missed_count,
            "extra_count": self.extra_count,
            "missed_words": list(self.missed_words),
            "extra_words": list(self.extra_words),
            "tajweed_annotations": [t.to_dict() for t in self.tajweed_annotations],
            "tajweed_summary": [s.to_dict() for s in self.tajweed_summary],
            "feedback": [f.to_dict() for f in self.feedback],
            "letter_score": self.letter_score,
            "madd_score": self.madd_score,
            "haraka_score": self.haraka_score,
            "completeness_score": self.completeness_score,
        }


def _grade_band(score: int) -> Tuple[int, str, str, str, str, str]:
    for band in GRADE_BANDS:
        if score >= band[0]:
            return band
    return GRADE_BANDS[-1]


def grade_score(score: int) -> Tuple[str, str]:
    """Return (grade, Arabic grade) for a 0–100 overall score."""
    _, grade, grade_arabic, _, _, _ = _grade_band(score)
    return grade, grade_arabic


def build_feedback(result: RecitationResult) -> List[FeedbackItem]:
    """Ordered, deterministic feedback for a scored recitation."""
    items: List[FeedbackItem] = []

    _, _, _, icon, text, severity = _grade_band(result.overall_score)
    items.append(FeedbackItem(icon, text, severity))

    if result.missed_count > 0:
        missed = [w.original for w in result.word_results if w.status == MISSED]
        preview = " ، ".join(missed[:MISSED_PREVIEW])
        ellipsis = "…" if len(missed) > MISSED_PREVIEW else ""
        items.append(FeedbackItem(
            "⬜", f"{result.missed_count} word(s) were missed: {preview}{ellipsis}", "error",
        ))

    if result.wrong_count > 0:
        items.append(FeedbackItem(
            "❌", f"{result.wrong_count} word(s) were incorrect. Review pronunciation carefully.", "error",
        ))

    if result.partial_count > 0:
        items.append(FeedbackItem(
            "🔶", f"{result.partial_count} word(s) were close but not exact. Fine-tune them.", "warning",
        ))

    if result.correct_count == result.total_original_words:
        items.append(FeedbackItem("✅", "All words recited correctly! Excellent accuracy.", "success"))

    kinds = {m.kind for w in result.word_results for m in w.mistakes}
    for pattern_kinds, icon, tip in MISTAKE_PATTERN_TIPS:
        if any(k in kinds for k in pattern_kinds):
            items.append(FeedbackItem(icon, tip, "warning"))

    summary = result.tajweed_summary
    if summary:
        rules = ", ".join(s.rule.value for s in summary[:RULES_PREVIEW])
        more = f" +{len(summary) - RULES_PREVIEW} more" if len(summary) > RULES_PREVIEW else ""
        items.append(FeedbackItem(
            "📚", f"Tajweed rules in this ayah: {rules}{more}. See details below.", "info",
        ))

    return items


def _empty_result(annotations: List[WordTajweed], summary: List[TajweedSummary]) -> RecitationResult:
    grade, grade_arabic = grade_score(0)
    return RecitationResult(
        overall_score=0,
        grade=grade,
        grade_arabic=grade_arabic,
        tajweed_annotations=annotations,
        tajweed_summary=summary,
        feedback=[FeedbackItem("⚠️", "No ayah selected.", "error")],
    )


def _all_missed_result(
    original_words: List[str],
    annotations: List[WordTajweed],
    summary: List[TajweedSummary],
) -> RecitationResult:
    word_results = []
    for i, word in enumerate(original_words):
        analysis = analyze_word_mistakes(word, None)
        word_results.append(WordResult(
            original=word,
            original_index=i,
            spoken="",
            status=MISSED,
            similarity=0,
            letter_match=0,
            madd_match=0,
            haraka_match=0,
            mistakes=analysis.mistakes,
            tajweed=annotations[i],
        ))
    grade, grade_arabic = grade_score(0)
    return RecitationResult(
        overall_score=0,
        grade=grade,
        grade_arabic=grade_arabic,
        word_results=word_results,
        total_original_words=len(original_words),
        missed_count=len(original_words),
        missed_words=list(original_words),
        tajweed_annotations=annotations,
        tajweed_summary=summary,
        feedback=[
            FeedbackItem("🎤", "No recitation detected. Allow microphone access and try again.", "error"),
            FeedbackItem("💡", "Tip: Use Chrome or Edge for best Arabic speech recognition results.", "info"),
        ],
    )


def _mean(values: List[int]) -> float:
    return sum(values) / max(len(values), 1)


def compare_recitation(original_text: str, spoken_text: str) -> RecitationResult:
    """
    Score a spoken transcript against the canonical verse text.

    Args:
        original_text: Canonical verse, words separated by whitespace, diacritics allowed.
        spoken_text: Transcript from speech recognition, usually undiacritized.

    Returns:
        RecitationResult with one WordResult per alignment pair (canonical order, extra
        words in the position where they were spoken).
    """
    original_words = tokenize(original_text)
    spoken_words = tokenize(spoken_text)

    annotations = annotate_verse(original_text or "")
    summary = summarize_tajweed(annotations)

    if not original_words:
        logger.info("Empty verse text; returning empty result")
        return _empty_result(annotations, summary)

    if not spoken_words:
        logger.info("Empty transcript; all %d words marked missed", len(original_words))
        return _all_missed_result(original_words, annotations, summary)

    word_results: List[WordResult] = []
    missed_words: List[str] = []
    extra_words: List[str] = []
    orig_idx = 0

    for pair in align_sequences(original_words, spoken_words):
        analysis = analyze_word_mistakes(pair.original, pair.spoken)
        if pair.original is not None:
            if pair.spoken is None:
                missed_words.append(pair.original)
            word_results.append(WordResult(
                original=pair.original,
                original_index=orig_idx,
                spoken=pair.spoken or "",
                status=analysis.status,
                similarity=analysis.similarity,
                letter_match=analysis.letter_match,
                madd_match=analysis.madd_match,
                haraka_match=analysis.haraka_match,
                mistakes=analysis.mistakes,
                tajweed=annotations[orig_idx],
            ))
            orig_idx += 1
        else:
            extra_words.append(pair.spoken)
            word_results.append(WordResult(
                original="",
                original_index=-1,
                spoken=pair.spoken,
                status=EXTRA,
                similarity=0,
                letter_match=0,
                madd_match=0,
                haraka_match=0,
                mistakes=analysis.mistakes,
                tajweed=WordTajweed(word="", word_index=-1),
            ))

    def count(status: str) -> int:
        return sum(1 for w in word_results if w.status == status)

    total = len(original_words)
    correct_count = count(CORRECT)
    partial_count = count(PARTIAL)

    completeness = round_half_up((correct_count + partial_count * 0.5) * 100 / max(total, 1))
    with_original = [w for w in word_results if w.original]
    letter = _mean([w.letter_match for w in with_original])
    madd = _mean([w.madd_match for w in with_original])
    haraka = _mean([w.haraka_match for w in with_original])

    overall = round_half_up(
        (completeness * WEIGHT_COMPLETENESS
         + letter * WEIGHT_LETTER
         + madd * WEIGHT_MADD
         + haraka * WEIGHT_HARAKA) / 100
    )
    grade, grade_arabic = grade_score(overall)

    result = RecitationResult(
        overall_score=overall,
        grade=grade,
        grade_arabic=grade_arabic,
        word_results=word_results,
        total_original_words=total,
        total_spoken_words=len(spoken_words),
        correct_count=correct_count,
        partial_count=partial_count,
        wrong_count=count(WRONG),
        missed_count=count(MISSED),
        extra_count=count(EXTRA),
        missed_words=missed_words,
        extra_words=extra_words,
        tajweed_annotations=annotations,
        tajweed_summary=summary,
        letter_score=round_half_up(letter),
        madd_score=round_half_up(madd),
        haraka_score=round_half_up(haraka),
        completeness_score=completeness,
    )
    result.feedback = build_feedback(result)

    logger.debug(
        "Scored recitation: overall=%d grade=%s correct=%d partial=%d wrong=%d missed=%d extra=%d",
        overall, grade, correct_count, partial_count, result.wrong_count,
        result.missed_count, result.extra_count,
    )
    return result
