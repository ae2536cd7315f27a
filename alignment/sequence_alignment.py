"""
Word-level global alignment (Needleman–Wunsch, maximizing) between the canonical verse
and the spoken transcript.

Match reward is the 0–100 surface similarity of the two words. Skipping a canonical
word (missed) costs more than skipping a spoken word (filler / repeat), so unexplained
spoken words become insertions instead of forced low-quality matches.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.metrics import string_similarity
from core.normalization import normalize_surface

logger = logging.getLogger(__name__)

GAP_ORIGINAL = -25  # canonical word skipped (missed)
GAP_SPOKEN = -12    # spoken word skipped (extra)


@dataclass(frozen=True)
class WordAlignmentPair:
    """original is None for an extra spoken word; spoken is None for a missed word."""
    original: Optional[str]
    spoken: Optional[str]

    @property
    def is_missed(self) -> bool:
        return self.original is not None and self.spoken is None

    @property
    def is_extra(self) -> bool:
        return self.original is None and self.spoken is not None

    def to_dict(self) -> Dict[str, Any]:
        return {"original": self.original, "spoken": self.spoken}


def align_sequences(original_words: List[str], spoken_words: List[str]) -> List[WordAlignmentPair]:
    """
    Align canonical words to spoken words.

    Every input word appears in exactly one pair and relative order is preserved on
    both sides. Ties in traceback prefer the diagonal, then a canonical skip, then a
    spoken skip.
    """
    n, m = len(original_words), len(spoken_words)
    orig_surface = [normalize_surface(w) for w in original_words]
    spoken_surface = [normalize_surface(w) for w in spoken_words]
    sim = [[string_similarity(o, s) for s in spoken_surface] for o in orig_surface]

    dp = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(1, n + 1):
        dp[i][0] = dp[i - 1][0] + GAP_ORIGINAL
    for j in range(1, m + 1):
        dp[0][j] = dp[0][j - 1] + GAP_SPOKEN

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            dp[i][j] = max(
                dp[i - 1][j - 1] + sim[i - 1][j - 1],
                dp[i - 1][j] + GAP_ORIGINAL,
                dp[i][j - 1] + GAP_SPOKEN,
            )

    pairs: List[WordAlignmentPair] = []
    i, j = n, m
    while i > 0 or j > 0:
        if i > 0 and j > 0 and dp[i][j] == dp[i - 1][j - 1] + sim[i - 1][j - 1]:
            pairs.append(WordAlignmentPair(original_words[i - 1], spoken_words[j - 1]))
            i -= 1
            j -= 1
        elif i > 0 and (j == 0 or dp[i][j] == dp[i - 1][j] + GAP_ORIGINAL):
            pairs.append(WordAlignmentPair(original_words[i - 1], None))
            i -= 1
        else:
            pairs.append(WordAlignmentPair(None, spoken_words[j - 1]))
            j -= 1
    pairs.reverse()

    logger.debug(
        "Aligned %d canonical / %d spoken words into %d pairs (score=%d)",
        n, m, len(pairs), dp[n][m],
    )
    return pairs
