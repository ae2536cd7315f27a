"""
Tajweed rule catalog and rule-based verse annotation.
Per-word annotations: rule, position (word | junction), Arabic name, colour.
"""
from tajweed.annotator import (
    RuleAnnotation,
    TajweedSummary,
    WordTajweed,
    annotate_verse,
    detect_junction_tajweed,
    detect_word_tajweed,
    summarize_tajweed,
)
from tajweed.rules import TAJWEED_RULES, TajweedRule, TajweedRuleInfo, get_rule_info

__all__ = [
    "RuleAnnotation",
    "TajweedSummary",
    "WordTajweed",
    "annotate_verse",
    "detect_junction_tajweed",
    "detect_word_tajweed",
    "summarize_tajweed",
    "TAJWEED_RULES",
    "TajweedRule",
    "TajweedRuleInfo",
    "get_rule_info",
]
