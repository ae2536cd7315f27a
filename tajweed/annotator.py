"""
Rule-based Tajweed annotation of a canonical verse.

Two passes over the tokenized verse:
- word pass: patterns inside a single word (shaddah, ghunna, lam of the article,
  qalqalah, madd family, tafkhim/tarqiq, hamzat wasl, waqf marks)
- junction pass: the boundary between word i and word i+1 (noon sakin / tanwin,
  meem sakin, madd jaiz / arid, idgham of same and close articulation points)

Junction rules are attached to the first word of the pair. A rule is never attached
twice to the same word. Detection is heuristic and pattern-based.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from core.normalization import DIACRITIC_RANGE, SHADDA, strip_diacritics, tokenize
from tajweed.rules import TAJWEED_RULES, TajweedRule, TajweedRuleInfo

logger = logging.getLogger(__name__)

FATHA = "\u064E"
DAMMA = "\u064F"
KASRA = "\u0650"
# Uthmani script writes sukoon as a small high dotless head of khah
SUKUN_MARKS = {"\u0652", "\u06E1"}
# Small high meem: iqlab sign written on noon in Uthmani script
IQLAB_MARK = "\u06E2"
TANWIN_MARKS = {"\u064B", "\u064C", "\u064D"}
TATWEEL = "\u0640"

SUN_LETTERS = frozenset("تثدذرزسشصضطظلن")
MOON_LETTERS = frozenset("ابجحخعغفقكمهوي")
THROAT_LETTERS = frozenset("ءهعحغخ")
QALQALAH_LETTERS = frozenset("قطبجد")
HEAVY_LETTERS = frozenset("صضطظغخق")
MADD_LETTERS = frozenset("اوي")
HAMZA_STARTS = frozenset("أإآءؤئ")

# Noon sakin / tanwin junction buckets, checked in this order
IKHFA_LETTERS = frozenset("تثجدذزسشصضطظفقك")
IDGHAM_GHUNNA_LETTERS = frozenset("ينمو")
IDGHAM_NO_GHUNNA_LETTERS = frozenset("لر")

# Pause (waqf) marks: small high sad-lam-alef, qaf-lam-alef, meem, lam-alef, jeem; sajdah sign
PAUSE_MARKS = re.compile(r'[\u06D6-\u06DA\u06E9]')

MUTAJANISAYN_PAIRS = frozenset([
    ("ت", "د"), ("ت", "ط"), ("د", "ت"), ("ط", "ت"),
    ("ذ", "ظ"), ("ظ", "ذ"), ("ث", "ذ"), ("ذ", "ث"),
])
MUTAQARIBAYN_PAIRS = frozenset([("ل", "ر"), ("ق", "ك")])

WORD = "word"
JUNCTION = "junction"


@dataclass(frozen=True)
class RuleAnnotation:
    rule: TajweedRule
    at_junction: bool = False

    @property
    def info(self) -> TajweedRuleInfo:
        return TAJWEED_RULES[self.rule]

    @property
    def position(self) -> str:
        return JUNCTION if self.at_junction else WORD

    def to_dict(self) -> Dict[str, Any]:
        info = self.info
        return {
            "rule": self.rule.value,
            "name_arabic": info.name_arabic,
            "color": info.color,
            "position": self.position,
        }


@dataclass
class WordTajweed:
    """Rule annotations of one canonical word."""
    word: str
    word_index: int
    annotations: List[RuleAnnotation] = field(default_factory=list)

    @property
    def rules(self) -> List[TajweedRule]:
        return [a.rule for a in self.annotations]

    def has_rule(self, rule: TajweedRule) -> bool:
        return any(a.rule == rule for a in self.annotations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "word_index": self.word_index,
            "annotations": [a.to_dict() for a in self.annotations],
        }


@dataclass
class TajweedSummary:
    """Where one rule occurs in the verse."""
    rule: TajweedRule
    word_indices: List[int] = field(default_factory=list)
    words: List[str] = field(default_factory=list)

    @property
    def info(self) -> TajweedRuleInfo:
        return TAJWEED_RULES[self.rule]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule": self.rule.value,
            "info": self.info.to_dict(),
            "word_indices": list(self.word_indices),
            "words": list(self.words),
        }


def _letter_clusters(word: str) -> List[Tuple[str, str]]:
    """Split a word into (letter, marks-on-that-letter) pairs; tatweel is transparent."""
    clusters: List[Tuple[str, str]] = []
    for ch in word:
        if DIACRITIC_RANGE.match(ch):
            if clusters:
                letter, marks = clusters[-1]
                clusters[-1] = (letter, marks + ch)
        elif ch != TATWEEL and not ch.isspace():
            clusters.append((ch, ""))
    return clusters


def _ends_with_noon_sakin(clusters: List[Tuple[str, str]]) -> bool:
    if not clusters:
        return False
    letter, marks = clusters[-1]
    return letter == "ن" and any(m in SUKUN_MARKS or m == IQLAB_MARK for m in marks)


def _ends_with_tanwin(clusters: List[Tuple[str, str]]) -> bool:
    if not clusters:
        return False
    letter, marks = clusters[-1]
    if any(m in TANWIN_MARKS for m in marks):
        return True
    # Fathatan sits on the letter before a seat alef / alef maksura
    if letter in ("ا", "ى") and len(clusters) > 1:
        return any(m in TANWIN_MARKS for m in clusters[-2][1])
    return False


def _ends_with_meem_sakin(clusters: List[Tuple[str, str]]) -> bool:
    if not clusters:
        return False
    letter, marks = clusters[-1]
    return letter == "م" and any(m in SUKUN_MARKS for m in marks)


def detect_word_tajweed(word: str) -> List[RuleAnnotation]:
    """Rules that apply inside a single word, in detection order, without duplicates."""
    annotations: List[RuleAnnotation] = []
    bare = strip_diacritics(word)
    clusters = _letter_clusters(word)

    def add(rule: TajweedRule) -> None:
        if not any(a.rule == rule for a in annotations):
            annotations.append(RuleAnnotation(rule))

    if SHADDA in word:
        add(TajweedRule.SHADDAH)

    if any(letter in ("ن", "م") and SHADDA in marks for letter, marks in clusters):
        add(TajweedRule.GHUNNA)

    # Definite article, written with plain alef or alef wasla
    if len(bare) > 2 and bare[0] in ("ا", "ٱ") and bare[1] == "ل":
        after_lam = bare[2]
        if after_lam in SUN_LETTERS:
            add(TajweedRule.LAM_SHAMSIYYAH)
        elif after_lam in MOON_LETTERS:
            add(TajweedRule.LAM_QAMARIYYAH)

    # Qalqalah Sughra: echo letter with sukoon before the last letter
    for letter, marks in clusters[:-1]:
        if letter in QALQALAH_LETTERS and any(m in SUKUN_MARKS for m in marks):
            add(TajweedRule.QALQALAH_SUGHRA)
            break

    if bare and bare[-1] in QALQALAH_LETTERS:
        add(TajweedRule.QALQALAH_KUBRA)

    if re.search(FATHA + "ا|" + DAMMA + "و|" + KASRA + "ي", word):
        add(TajweedRule.MADD_TABII)

    if re.search(r'[اوي][أإءؤئ]', bare) or re.search(r'[اوي][\u0654\u0655]', word):
        add(TajweedRule.MADD_WAJIB)

    if re.search(r'[اوي][\u0652\u0651]', word):
        add(TajweedRule.MADD_LAZIM)

    if any(ch in HEAVY_LETTERS for ch in bare):
        add(TajweedRule.TAFKHIM)
    if "الله" in bare:
        add(TajweedRule.TAFKHIM)
    if re.search(r'ر\u0651?[\u064E\u064F]', word):
        add(TajweedRule.TAFKHIM)

    if re.search(r'ر\u0651?\u0650', word) or re.search(r'\u0650ر', word):
        add(TajweedRule.TARQIQ)

    if word.startswith("ٱ") or word.startswith("ا" + KASRA):
        add(TajweedRule.HAMZAT_WASL)

    if PAUSE_MARKS.search(word):
        add(TajweedRule.WAQF)

    return annotations


def detect_junction_tajweed(prev_word: str, next_word: str) -> List[RuleAnnotation]:
    """Rules triggered by the boundary between two consecutive words."""
    annotations: List[RuleAnnotation] = []

    def add(rule: TajweedRule) -> None:
        annotations.append(RuleAnnotation(rule, at_junction=True))

    prev_clusters = _letter_clusters(prev_word)
    prev_bare = strip_diacritics(prev_word)
    next_bare = strip_diacritics(next_word)
    prev_last = prev_bare[-1] if prev_bare else ""
    next_first = next_bare[0] if next_bare else ""

    if not next_first:
        return annotations

    if _ends_with_noon_sakin(prev_clusters) or _ends_with_tanwin(prev_clusters):
        if next_first in THROAT_LETTERS:
            add(TajweedRule.IZHAR_HALQI)
        elif next_first in IDGHAM_GHUNNA_LETTERS:
            add(TajweedRule.IDGHAM_BIGHUNNA)
        elif next_first in IDGHAM_NO_GHUNNA_LETTERS:
            add(TajweedRule.IDGHAM_BILAGHUNNA)
        elif next_first == "ب":
            add(TajweedRule.IQLAB)
        elif next_first in IKHFA_LETTERS:
            add(TajweedRule.IKHFA_HAQIQI)

    if _ends_with_meem_sakin(prev_clusters):
        if next_first == "ب":
            add(TajweedRule.IKHFA_SHAFAWI)
        elif next_first == "م":
            add(TajweedRule.IDGHAM_BIGHUNNA)
        else:
            add(TajweedRule.IZHAR_SHAFAWI)

    if prev_last in MADD_LETTERS and next_first in HAMZA_STARTS:
        add(TajweedRule.MADD_JAIZ)

    # Applied at every junction, not only where the reciter actually stops
    if prev_last in MADD_LETTERS:
        add(TajweedRule.MADD_ARID)

    if (prev_last, next_first) in MUTAJANISAYN_PAIRS:
        add(TajweedRule.IDGHAM_MUTAJANISAYN)

    if (prev_last, next_first) in MUTAQARIBAYN_PAIRS:
        add(TajweedRule.IDGHAM_MUTAQARIBAYN)

    return annotations


def annotate_verse(verse_text: str) -> List[WordTajweed]:
    """
    Annotate every word of a verse.

    Returns one WordTajweed per token (empty list for empty input). Junction rules go
    on the earlier word and are skipped when that word already carries the rule.
    """
    words = tokenize(verse_text)
    results = [
        WordTajweed(word=word, word_index=i, annotations=detect_word_tajweed(word))
        for i, word in enumerate(words)
    ]
    for i in range(len(words) - 1):
        for ann in detect_junction_tajweed(words[i], words[i + 1]):
            if not results[i].has_rule(ann.rule):
                results[i].annotations.append(ann)

    logger.debug(
        "Annotated %d words with %d rule occurrences",
        len(results), sum(len(r.annotations) for r in results),
    )
    return results


def summarize_tajweed(annotated: List[WordTajweed]) -> List[TajweedSummary]:
    """Group annotations by rule, in first-seen order."""
    summary: Dict[TajweedRule, TajweedSummary] = {}
    for wt in annotated:
        for ann in wt.annotations:
            entry = summary.setdefault(ann.rule, TajweedSummary(rule=ann.rule))
            entry.word_indices.append(wt.word_index)
            entry.words.append(wt.word)
    return list(summary.values())
