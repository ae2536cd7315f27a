"""
Edit-distance metrics shared by the aligners, the word analyzer and the API.

- levenshtein / string_similarity: 0–100 normalized similarity used for scoring
- wer / cer: Word and Character Error Rate over surface-normalized text
"""
import math
from typing import Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from core.normalization import normalize_surface


def round_half_up(value: float) -> int:
    """Round .5 away from zero (browser Math.round semantics for non-negative scores)."""
    return int(math.floor(value + 0.5))


def levenshtein(a: Sequence, b: Sequence) -> int:
    """Classic unit-cost edit distance between two strings (or token lists)."""
    return Levenshtein.distance(a, b)


def string_similarity(a: str, b: str) -> int:
    """
    100 * (1 - distance / max_len), clamped at 0.
    100 when equal, 0 when either side is empty.
    """
    if a == b:
        return 100
    if not a or not b:
        return 0
    dist = levenshtein(a, b)
    max_len = max(len(a), len(b))
    return max(0, round_half_up((1 - dist / max_len) * 100))


def wer(reference: str, hypothesis: str, normalize: bool = True) -> float:
    """
    Word Error Rate: (S + D + I) / N where N = number of reference words.
    Returns value in [0, +inf); 0 = perfect match.
    """
    ref_norm = normalize_surface(reference) if normalize else (reference or "")
    hyp_norm = normalize_surface(hypothesis) if normalize else (hypothesis or "")
    ref_words = ref_norm.split()
    hyp_words = hyp_norm.split()
    if not ref_words:
        return 0.0 if not hyp_words else 1.0
    return levenshtein(ref_words, hyp_words) / len(ref_words)


def cer(reference: str, hypothesis: str, normalize: bool = True, remove_spaces: bool = True) -> float:
    """
    Character Error Rate: (S + D + I) / N where N = number of reference characters.
    remove_spaces: if True, compare without spaces (standard for Arabic).
    """
    ref_norm = normalize_surface(reference) if normalize else (reference or "")
    hyp_norm = normalize_surface(hypothesis) if normalize else (hypothesis or "")
    if remove_spaces:
        ref_norm = ref_norm.replace(" ", "")
        hyp_norm = hyp_norm.replace(" ", "")
    if not ref_norm:
        return 0.0 if not hyp_norm else 1.0
    return levenshtein(ref_norm, hyp_norm) / len(ref_norm)


def wer_cer(reference: str, hypothesis: str, normalize: bool = True) -> Tuple[float, float]:
    """Compute both WER and CER for reference vs hypothesis. Returns (wer, cer)."""
    return wer(reference, hypothesis, normalize=normalize), cer(
        reference, hypothesis, normalize=normalize
    )
