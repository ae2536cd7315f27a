"""
Character-level alignment between a canonical word and a spoken word.

Both words are reduced to their consonant skeleton (diacritics stripped, alef/ya
variants unified), so vowel marks are invisible here. A unit-cost Levenshtein table is
built bottom-up and traced back from (m, n), preferring match, then substitution, then
insertion, then deletion, so ties always resolve the same way.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.normalization import are_letters_phonetically_similar, consonant_skeleton

MATCH = "match"
SUBSTITUTE = "substitute"
INSERT = "insert"
DELETE = "delete"


@dataclass(frozen=True)
class CharDiff:
    """One aligned position: original letter, spoken letter, or both."""
    type: str  # "match" | "substitute" | "insert" | "delete"
    original: Optional[str] = None
    spoken: Optional[str] = None
    is_similar: bool = False

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.original is not None:
            out["original"] = self.original
        if self.spoken is not None:
            out["spoken"] = self.spoken
        if self.type == SUBSTITUTE:
            out["is_similar"] = self.is_similar
        return out


def _edit_table(a: str, b: str) -> List[List[int]]:
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = 1 + min(dp[i - 1][j], dp[i][j - 1], dp[i - 1][j - 1])
    return dp


def char_diff(original: str, spoken: str) -> List[CharDiff]:
    """
    Align two words letter by letter.

    Args:
        original: Canonical word (diacritics allowed).
        spoken: Spoken word (usually undiacritized).

    Returns:
        Left-to-right list of CharDiff entries. Empty original gives only inserts,
        empty spoken gives only deletes, both empty gives [].
    """
    a = consonant_skeleton(original)
    b = consonant_skeleton(spoken)
    dp = _edit_table(a, b)

    diffs: List[CharDiff] = []
    i, j = len(a), len(b)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and a[i - 1] == b[j - 1]:
            diffs.append(CharDiff(MATCH, original=a[i - 1], spoken=b[j - 1]))
            i -= 1
            j -= 1
        elif i > 0 and j > 0 and dp[i][j] == dp[i - 1][j - 1] + 1:
            diffs.append(CharDiff(
                SUBSTITUTE,
                original=a[i - 1],
                spoken=b[j - 1],
                is_similar=are_letters_phonetically_similar(a[i - 1], b[j - 1]),
            ))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j] == dp[i][j - 1] + 1):
            diffs.append(CharDiff(INSERT, spoken=b[j - 1]))
            j -= 1
        else:
            diffs.append(CharDiff(DELETE, original=a[i - 1]))
            i -= 1
    diffs.reverse()
    return diffs


def diff_cost(diffs: List[CharDiff]) -> int:
    """Number of non-match entries (equals the edit distance of the two skeletons)."""
    return sum(1 for d in diffs if d.type != MATCH)
