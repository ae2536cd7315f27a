"""
Arabic text normalization tiers for recitation comparison.

- surface: diacritics removed, letter variants unified (display-level matching)
- phonetic: surface with hamza, shaddah, madd letters and trailing ha dropped (max tolerance)
- consonant skeleton: diacritics stripped, alef/ya variants unified, hamza seats kept

All functions are total over any string and never raise.
"""
import re
from typing import Dict, List, Optional

# Harakat, tanwin, shadda, sukun, Quranic annotation marks, superscript alef
DIACRITIC_RANGE = re.compile(r'[\u064B-\u065F\u0610-\u061A\u06D6-\u06ED\u0670]')
# RLM, LRM, zero-width space, BOM
_INVISIBLE = re.compile(r'[\u200F\u200E\u200B\uFEFF]')

SHADDA = "\u0651"
SUKUN = "\u0652"
TANWIN_MARKS = ("\u064B", "\u064C", "\u064D")

ELONGATION_LETTERS = ("ا", "و", "ي")


def strip_diacritics(text: Optional[str]) -> str:
    """Remove every diacritic and invisible directionality mark."""
    if not text:
        return ""
    text = DIACRITIC_RANGE.sub('', text)
    text = _INVISIBLE.sub('', text)
    return text.strip()


def _unify_alef_ya(text: str) -> str:
    # Alef / hamza-on-alef / alef wasla → ا
    text = re.sub(r'[أإآٱ]', 'ا', text)
    # Alef maksura and Persian ya → ي
    text = re.sub(r'[ىی]', 'ي', text)
    return text


def _unify_letters(text: str) -> str:
    text = _unify_alef_ya(text)
    # Hamza seats on waw / ya
    text = re.sub(r'ؤ', 'و', text)
    text = re.sub(r'ئ', 'ي', text)
    return text


def normalize_surface(text: Optional[str]) -> str:
    """
    Surface tier: diacritics removed, letter variants unified, ta marbuta → ha.
    Used for display-level matching and word alignment.
    """
    text = _unify_letters(strip_diacritics(text))
    text = re.sub(r'ة', 'ه', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def normalize_phonetic(text: Optional[str]) -> str:
    """
    Phonetic tier: surface form without standalone hamza, shaddah, madd letters
    (length is compared separately) and the trailing (often silent) ha.

    The whole trailing ha run of each word is dropped, not a single letter, so that
    the tier is idempotent (e.g. "وجهه").
    """
    text = normalize_surface(text)
    text = re.sub(r'ء', '', text)
    text = text.replace(SHADDA, '')
    text = re.sub(r'[اوي]', '', text)
    text = re.sub(r'ه+(?=\s|$)', '', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def consonant_skeleton(text: Optional[str]) -> str:
    """
    Consonant skeleton: diacritics stripped, alef and ya variants unified.
    Hamza seats (ؤ ئ) are kept so a seat read as a plain letter shows up in the letter diff.
    """
    return _unify_alef_ya(strip_diacritics(text))


def extract_diacritic_marks(text: Optional[str]) -> str:
    """Diacritic marks of a word, in order, as one string."""
    if not text:
        return ""
    return ''.join(DIACRITIC_RANGE.findall(text))


def count_elongation_letters(text: Optional[str]) -> int:
    """Number of madd letters (ا و ي) in the bare word."""
    bare = strip_diacritics(text)
    return sum(1 for ch in bare if ch in ELONGATION_LETTERS)


def count_gemination_marks(text: Optional[str]) -> int:
    return (text or "").count(SHADDA)


def has_tanwin_mark(text: Optional[str]) -> bool:
    return any(mark in (text or "") for mark in TANWIN_MARKS)


def has_sukoon_mark(text: Optional[str]) -> bool:
    return SUKUN in (text or "")


def tokenize(text: Optional[str]) -> List[str]:
    """Split on whitespace runs, dropping empty tokens."""
    return (text or "").split()


# Letters that sound alike and are commonly confused by learners
PHONEME_GROUPS: Dict[str, tuple] = {
    "emphatic": ("ص", "س", "ز"),
    "emphatic_dental": ("ط", "ت", "د"),
    "interdental": ("ظ", "ذ", "ث", "ز"),
    "heavy_pair": ("ض", "ظ"),
    "throat": ("ح", "ه", "خ", "ع", "غ"),
    "throat_glottal": ("ع", "أ", "ا"),
    "alef": ("ا", "أ", "إ", "آ", "ٱ"),
    "ya": ("ي", "ى", "ئ"),
    "waw": ("و", "ؤ"),
    "nasal": ("ن", "م"),
    "velar": ("ق", "ك"),
    "liquid": ("ر", "ل"),
    "sibilant": ("ش", "س"),
    "labial": ("ف", "ب", "م", "و"),
}


def are_letters_phonetically_similar(a: str, b: str) -> bool:
    """True if the letters are identical or share a confusion group."""
    if a == b:
        return True
    return any(a in group and b in group for group in PHONEME_GROUPS.values())
