"""
Per-word mistake analysis: letter diff, vowel marks, shaddah, madd, ending and hamza checks.

Word similarity = 0.50 * letter_match + 0.35 * surface_similarity + 0.15 * phonetic_match
- correct: similarity >= 90
- partial: 65 <= similarity < 90
- wrong:   similarity < 65
Missed and extra words short-circuit with a single word-level mistake and zero scores.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from alignment.char_alignment import DELETE, INSERT, MATCH, SUBSTITUTE, char_diff
from core.metrics import round_half_up, string_similarity
from core.mistakes import Mistake, MistakeKind, make_mistake
from core.normalization import (
    are_letters_phonetically_similar,
    consonant_skeleton,
    count_elongation_letters,
    count_gemination_marks,
    extract_diacritic_marks,
    normalize_surface,
)

SIMILARITY_CORRECT = 90
SIMILARITY_PARTIAL = 65

# Similarity weights, in percent
WEIGHT_LETTER = 50
WEIGHT_SURFACE = 35
WEIGHT_PHONETIC = 15

# Speech recognition returns undiacritized text, so vowels cannot be verified
UNOBSERVABLE_HARAKA_SCORE = 85

HAMZA_FORMS = re.compile(r'[أإآءؤئٱ]')

CORRECT = "correct"
PARTIAL = "partial"
WRONG = "wrong"
MISSED = "missed"
EXTRA = "extra"


@dataclass(frozen=True)
class WordMistakeAnalysis:
    mistakes: List[Mistake] = field(default_factory=list)
    similarity: int = 0        # 0–100 overall
    status: str = WRONG        # correct | partial | wrong | missed | extra
    letter_match: int = 0      # 0–100
    madd_match: int = 0        # 0–100
    haraka_match: int = 0      # 0–100
    phonetic_match: int = 0    # 0–100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mistakes": [m.to_dict() for m in self.mistakes],
            "similarity": self.similarity,
            "status": self.status,
            "letter_match": self.letter_match,
            "madd_match": self.madd_match,
            "haraka_match": self.haraka_match,
            "phonetic_match": self.phonetic_match,
        }


def status_from_similarity(similarity: int) -> str:
    if similarity >= SIMILARITY_CORRECT:
        return CORRECT
    if similarity >= SIMILARITY_PARTIAL:
        return PARTIAL
    return WRONG


def _letter_mistake(orig: str, spoken: str, is_similar: bool) -> Mistake:
    if is_similar:
        return make_mistake(
            MistakeKind.SIMILAR_LETTER,
            f'Confused similar-sounding letter: said "{spoken}" instead of "{orig}"',
            f'The letters "{orig}" and "{spoken}" sound alike but are distinct in Arabic. '
            'Focus on the exact articulation point (مخرج).',
            original_part=orig,
            spoken_part=spoken,
        )
    return make_mistake(
        MistakeKind.WRONG_LETTER,
        f'Wrong letter: said "{spoken}" instead of "{orig}"',
        f'This is a letter substitution error. Learn the correct articulation (مخرج) for "{orig}".',
        original_part=orig,
        spoken_part=spoken,
    )


def _haraka_match(original: str, spoken: str) -> int:
    orig_marks = extract_diacritic_marks(original)
    spoken_marks = extract_diacritic_marks(spoken)
    if not orig_marks:
        return 100
    if not spoken_marks:
        return UNOBSERVABLE_HARAKA_SCORE
    common = sum(1 for o, s in zip(orig_marks, spoken_marks) if o == s)
    return round_half_up(common / len(orig_marks) * 100)


def analyze_word_mistakes(original: Optional[str], spoken: Optional[str]) -> WordMistakeAnalysis:
    """
    Classify the mistakes made when `spoken` was recited for the canonical `original`.

    Never raises; an empty or None side is treated as absent.
    """
    if not spoken:
        return WordMistakeAnalysis(
            mistakes=[make_mistake(
                MistakeKind.MISSED_WORD,
                "Word was not recited",
                "This word was completely skipped. Practice it in isolation first.",
            )],
            status=MISSED,
        )
    if not original:
        return WordMistakeAnalysis(
            mistakes=[make_mistake(
                MistakeKind.EXTRA_WORD,
                "Extra word added that is not in the ayah",
                "You said a word that does not exist in this ayah. Stay focused on the text.",
            )],
            status=EXTRA,
        )

    mistakes: List[Mistake] = []
    orig_surface = normalize_surface(original)
    spoken_surface = normalize_surface(spoken)
    orig_skeleton = consonant_skeleton(original)
    spoken_skeleton = consonant_skeleton(spoken)

    # 1. Letter-level diff
    diffs = char_diff(original, spoken)
    matches = 0
    for d in diffs:
        if d.type == MATCH:
            matches += 1
        elif d.type == SUBSTITUTE:
            mistakes.append(_letter_mistake(d.original, d.spoken, d.is_similar))
        elif d.type == DELETE:
            mistakes.append(make_mistake(
                MistakeKind.MISSING_LETTER,
                f'Missing letter "{d.original}" in recitation',
                f'The letter "{d.original}" was dropped. Make sure to articulate every letter clearly.',
                original_part=d.original,
            ))
        elif d.type == INSERT:
            mistakes.append(make_mistake(
                MistakeKind.EXTRA_LETTER,
                f'Extra letter "{d.spoken}" added',
                f'You added "{d.spoken}" which is not in this word. Be careful not to insert extra sounds.',
                spoken_part=d.spoken,
            ))
    letter_match = round_half_up(matches / len(diffs) * 100) if diffs else 100

    # 2. Haraka (vowel marks); no mistake is emitted for unobservable vowels
    haraka_match = _haraka_match(original, spoken)

    # 3. Shaddah: a shorter spoken surface form is the only text-level proxy for a dropped stress
    orig_shaddah = count_gemination_marks(original)
    if orig_shaddah > 0 and len(spoken_surface) < len(orig_surface):
        mistakes.append(make_mistake(
            MistakeKind.MISSING_SHADDAH,
            f"Missing shaddah (ّ) — the word has {orig_shaddah} shaddah(s) that must be stressed",
            "Hold the shaddah letter for an extra beat — as if saying it twice.",
        ))

    # 4. Madd (elongation letters)
    orig_madd = count_elongation_letters(original)
    spoken_madd = count_elongation_letters(spoken)
    madd_match = 100
    if orig_madd != spoken_madd:
        madd_match = round_half_up(min(orig_madd, spoken_madd) / orig_madd * 100) if orig_madd > 0 else 50
        if orig_madd > spoken_madd:
            mistakes.append(make_mistake(
                MistakeKind.MISSING_MADD,
                f"Missing elongation letter — original has {orig_madd} madd letter(s), you had {spoken_madd}",
                "Elongation letters (ا و ي) are important in Arabic. Dropping them changes the word meaning.",
            ))
        else:
            mistakes.append(make_mistake(
                MistakeKind.EXTRA_MADD,
                "Extra elongation — you elongated where it should not be",
                "Be careful not to add elongation that is not present in the original word.",
            ))

    # 5. Ending
    if len(orig_surface) > 1 and len(spoken_surface) > 1:
        orig_last = orig_surface[-1]
        spoken_last = spoken_surface[-1]
        if orig_last != spoken_last and not are_letters_phonetically_similar(orig_last, spoken_last):
            mistakes.append(make_mistake(
                MistakeKind.WRONG_ENDING,
                f'Wrong ending: word should end with "{orig_last}" but you ended with "{spoken_last}"',
                "The ending of an Arabic word determines its grammatical case (إعراب). "
                "Recite each word ending carefully.",
                original_part=orig_last,
                spoken_part=spoken_last,
            ))
        elif len(orig_surface) > len(spoken_surface) + 1:
            mistakes.append(make_mistake(
                MistakeKind.MISSING_ENDING,
                "Word ending was cut short",
                "Complete the full pronunciation of this word — do not stop mid-word.",
            ))

    # 6. Hamza presence
    orig_hamza = bool(HAMZA_FORMS.search(original))
    spoken_hamza = bool(HAMZA_FORMS.search(spoken))
    if orig_hamza != spoken_hamza:
        mistakes.append(make_mistake(
            MistakeKind.HAMZA_ERROR,
            "Hamza not pronounced clearly" if orig_hamza else "Extra hamza added",
            "Hamza (ء) requires a clear glottal stop sound. It is not the same as alef (ا).",
        ))

    # 7–9. Similarity and status
    surface_sim = string_similarity(orig_surface, spoken_surface)
    phonetic_match = string_similarity(orig_skeleton, spoken_skeleton)
    similarity = round_half_up(
        (letter_match * WEIGHT_LETTER + surface_sim * WEIGHT_SURFACE + phonetic_match * WEIGHT_PHONETIC) / 100
    )

    return WordMistakeAnalysis(
        mistakes=mistakes,
        similarity=similarity,
        status=status_from_similarity(similarity),
        letter_match=letter_match,
        madd_match=madd_match,
        haraka_match=haraka_match,
        phonetic_match=phonetic_match,
    )
