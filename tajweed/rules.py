"""
Tajweed rule catalog: 25 named recitation rules and their static metadata.

Each rule carries its Arabic name, display colours, a description, how to apply it,
the most common learner mistake and, for the madd family, the required beat count.
The catalog is built once at import and is read-only.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional


class TajweedRule(str, Enum):
    GHUNNA = "Ghunna"
    IKHFA_HAQIQI = "Ikhfa Haqiqi"
    IKHFA_SHAFAWI = "Ikhfa Shafawi"
    IDGHAM_BIGHUNNA = "Idgham Bighunna"
    IDGHAM_BILAGHUNNA = "Idgham Bilaghunna"
    IDGHAM_MUTAJANISAYN = "Idgham Mutajanisayn"
    IDGHAM_MUTAQARIBAYN = "Idgham Mutaqaribayn"
    IQLAB = "Iqlab"
    IZHAR_HALQI = "Izhar Halqi"
    IZHAR_SHAFAWI = "Izhar Shafawi"
    QALQALAH_SUGHRA = "Qalqalah Sughra"
    QALQALAH_KUBRA = "Qalqalah Kubra"
    MADD_TABII = "Madd Tabii"
    MADD_WAJIB = "Madd Wajib"
    MADD_JAIZ = "Madd Jaiz"
    MADD_LAZIM = "Madd Lazim"
    MADD_ARID = "Madd Arid"
    SHADDAH = "Shaddah"
    LAM_SHAMSIYYAH = "Lam Shamsiyyah"
    LAM_QAMARIYYAH = "Lam Qamariyyah"
    TAFKHIM = "Tafkhim"
    TARQIQ = "Tarqiq"
    WAQF = "Waqf"
    HAMZAT_WASL = "Hamzat Wasl"
    SAKT = "Sakt"


@dataclass(frozen=True)
class TajweedRuleInfo:
    """Static description of one rule."""
    rule: TajweedRule
    name_arabic: str
    color: str
    bg_color: str
    text_color: str
    description: str
    how_to: str
    common_mistake: str
    counts: Optional[int] = None  # beat counts for madd

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "rule": self.rule.value,
            "name_arabic": self.name_arabic,
            "color": self.color,
            "bg_color": self.bg_color,
            "text_color": self.text_color,
            "description": self.description,
            "how_to": self.how_to,
            "common_mistake": self.common_mistake,
        }
        if self.counts is not None:
            out["counts"] = self.counts
        return out


_RULE_DEFINITIONS: List[TajweedRuleInfo] = [
    TajweedRuleInfo(
        rule=TajweedRule.GHUNNA,
        name_arabic="غُنَّة",
        color="#059669", bg_color="#d1fae5", text_color="#065f46",
        description="Nasalization on ن or م with Shaddah, 2 counts through the nose",
        how_to="Close your mouth, block airflow at the letters م or ن, and let the sound "
               "resonate through your nose for 2 counts.",
        common_mistake="Not nasalizing enough, or holding for only 1 count instead of 2.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.IKHFA_HAQIQI,
        name_arabic="إخفاء حقيقي",
        color="#3b82f6", bg_color="#dbeafe", text_color="#1e40af",
        description="Concealing ن sakin/tanwin before 15 letters with ghunna",
        how_to="Do not fully pronounce the nun. Hold it in the nasal passage and glide into "
               "the next letter. Duration: 2 counts.",
        common_mistake="Either pronouncing the nun too clearly (Izhar mistake) or merging it "
                       "fully (Idgham mistake).",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.IKHFA_SHAFAWI,
        name_arabic="إخفاء شفوي",
        color="#60a5fa", bg_color="#eff6ff", text_color="#1d4ed8",
        description="Concealing م sakin before ب with ghunna",
        how_to="Hold م in nasal resonance without closing lips fully before ب. 2 counts.",
        common_mistake="Closing lips too strongly, turning it into a clear م sound.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.IDGHAM_BIGHUNNA,
        name_arabic="إدغام بغنة",
        color="#8b5cf6", bg_color="#ede9fe", text_color="#5b21b6",
        description="Merging ن/م sakin into ي ن م و with ghunna (2 counts)",
        how_to="The nun/meem disappears completely into the next letter while maintaining a "
               "2-count nasal resonance.",
        common_mistake="Pronouncing the nun before merging, or skipping the ghunna.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.IDGHAM_BILAGHUNNA,
        name_arabic="إدغام بلا غنة",
        color="#6d28d9", bg_color="#f5f3ff", text_color="#4c1d95",
        description="Merging ن sakin into ل ر without ghunna",
        how_to="The nun merges completely into ل or ر with no nasal sound. The following "
               "letter gets a strong emphasis.",
        common_mistake="Adding a ghunna sound after the nun.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.IDGHAM_MUTAJANISAYN,
        name_arabic="إدغام متجانسين",
        color="#7c3aed", bg_color="#f3e8ff", text_color="#581c87",
        description="Two letters of the same articulation point merging (e.g. ت+د, ذ+ظ)",
        how_to="When same-origin letters meet, the first merges fully into the second. "
               "Do not separate them.",
        common_mistake="Pronouncing both letters separately.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.IDGHAM_MUTAQARIBAYN,
        name_arabic="إدغام متقاربين",
        color="#a855f7", bg_color="#faf5ff", text_color="#6b21a8",
        description="Two close-origin letters merging (e.g. ل+ر, ق+ك)",
        how_to="The first of the two close-origin letters merges partially into the second.",
        common_mistake="Fully separating the two letters instead of merging.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.IQLAB,
        name_arabic="إقلاب",
        color="#f59e0b", bg_color="#fef3c7", text_color="#92400e",
        description="Converting ن sakin/tanwin into a م sound before ب, with ghunna",
        how_to="When ن or tanwin appears before ب, convert it to a م sound with lips slightly "
               "apart, maintaining 2 counts ghunna.",
        common_mistake="Pronouncing a full nun before ب instead of converting it to meem.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.IZHAR_HALQI,
        name_arabic="إظهار حلقي",
        color="#06b6d4", bg_color="#cffafe", text_color="#164e63",
        description="Clear ن sakin/tanwin before the throat letters ء ه ع ح غ خ",
        how_to="Pronounce the nun clearly and completely with no ghunna before throat letters.",
        common_mistake="Adding ghunna or slight nasalization before these throat letters.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.IZHAR_SHAFAWI,
        name_arabic="إظهار شفوي",
        color="#0891b2", bg_color="#e0f7fa", text_color="#0c4a6e",
        description="Clear م sakin before all letters except م and ب",
        how_to="Pronounce م clearly and completely without any nasal sound before "
               "letters other than م and ب.",
        common_mistake="Adding a hidden ghunna to the meem when it should be clear.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.QALQALAH_SUGHRA,
        name_arabic="قلقلة صغرى",
        color="#ef4444", bg_color="#fee2e2", text_color="#991b1b",
        description="Minor echo on ق ط ب ج د with sukoon in the middle of a word",
        how_to="After pronouncing the Qalqalah letter with sukoon, release with a very slight "
               "bounce. The echo should be subtle.",
        common_mistake="Making the bounce too strong (Kubra) or not bouncing at all.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.QALQALAH_KUBRA,
        name_arabic="قلقلة كبرى",
        color="#dc2626", bg_color="#fecaca", text_color="#7f1d1d",
        description="Major echo on ق ط ب ج د at the end of a word (waqf)",
        how_to="At the stopping point, the Qalqalah letter gets a strong, clear bounce. "
               "Exaggerate it more than Sughra.",
        common_mistake="Stopping without any bounce, or not giving enough bounce energy.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.MADD_TABII,
        name_arabic="مدّ طبيعي",
        color="#ec4899", bg_color="#fce7f3", text_color="#9d174d",
        description="Natural elongation: ا after fatha, و after damma, ي after kasra (2 counts)",
        how_to="Stretch the vowel sound for exactly 2 counts. Do not shorten or over-lengthen.",
        common_mistake="Shortening to 1 count or over-extending beyond 2 counts.",
        counts=2,
    ),
    TajweedRuleInfo(
        rule=TajweedRule.MADD_WAJIB,
        name_arabic="مدّ واجب متصل",
        color="#f97316", bg_color="#ffedd5", text_color="#9a3412",
        description="Obligatory elongation of 4-5 counts: madd letter + hamza in the same word",
        how_to="When a madd letter is followed by hamza in the same word, extend for 4 to 5 "
               "counts. This is obligatory.",
        common_mistake="Only extending for 2 counts (treating it like Madd Tabii).",
        counts=5,
    ),
    TajweedRuleInfo(
        rule=TajweedRule.MADD_JAIZ,
        name_arabic="مدّ جائز منفصل",
        color="#fb923c", bg_color="#fff7ed", text_color="#7c2d12",
        description="Permissible elongation of 2-4 counts: madd letter + hamza in the next word",
        how_to="When the madd letter ends one word and hamza starts the next, you may extend "
               "2 or 4 counts.",
        common_mistake="Inconsistently applying it; choose one length and keep it.",
        counts=4,
    ),
    TajweedRuleInfo(
        rule=TajweedRule.MADD_LAZIM,
        name_arabic="مدّ لازم",
        color="#dc2626", bg_color="#fff1f2", text_color="#881337",
        description="Compulsory 6-count elongation: madd letter followed by sukoon or shaddah",
        how_to="Hold the elongation for exactly 6 counts whenever a madd letter is followed "
               "by a letter with sukoon or shaddah.",
        common_mistake="Extending only 4 counts instead of the required 6.",
        counts=6,
    ),
    TajweedRuleInfo(
        rule=TajweedRule.MADD_ARID,
        name_arabic="مدّ عارض",
        color="#e11d48", bg_color="#ffe4e6", text_color="#9f1239",
        description="Elongation of 2-6 counts when stopping on a word with natural madd",
        how_to="When stopping at a word that ends with a madd letter, you may extend 2, 4, or "
               "6 counts. Most commonly 4 or 6.",
        common_mistake="Not elongating at all when stopping.",
        counts=6,
    ),
    TajweedRuleInfo(
        rule=TajweedRule.SHADDAH,
        name_arabic="شدّة",
        color="#7c3aed", bg_color="#ede9fe", text_color="#4c1d95",
        description="Doubled letter: stress and hold it as if saying the letter twice",
        how_to="Hold your tongue or lips in position for an extra count before releasing.",
        common_mistake="Not holding long enough, making the shaddah sound like a single letter.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.LAM_SHAMSIYYAH,
        name_arabic="لام شمسية",
        color="#0ea5e9", bg_color="#e0f2fe", text_color="#075985",
        description="The ل of ال merges into the sun letters ت ث د ذ ر ز س ش ص ض ط ظ ل ن",
        how_to="Do not pronounce the ل. Go directly to the next letter and give it a "
               "shaddah-like emphasis.",
        common_mistake="Pronouncing the ل clearly before sun letters.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.LAM_QAMARIYYAH,
        name_arabic="لام قمرية",
        color="#14b8a6", bg_color="#ccfbf1", text_color="#134e4a",
        description="The ل of ال is pronounced before the moon letters ا ب ج ح خ ع غ ف ق ك م ه و ي",
        how_to="Pronounce the ل clearly and distinctly before moon letters.",
        common_mistake="Swallowing the ل sound or making it too soft.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.TAFKHIM,
        name_arabic="تفخيم",
        color="#b45309", bg_color="#fef3c7", text_color="#78350f",
        description="Heavy pronunciation: ص ض ط ظ غ خ ق, and Allah/Ra in certain contexts",
        how_to="Raise the back of the tongue toward the soft palate, fill the mouth, and give "
               "these letters a deep, heavy sound.",
        common_mistake="Pronouncing heavy letters with a thin, light voice (Tarqiq mistake).",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.TARQIQ,
        name_arabic="ترقيق",
        color="#65a30d", bg_color="#ecfccb", text_color="#3f6212",
        description="Light pronunciation: most letters, Ra with kasra, Lam of Allah after kasra",
        how_to="Keep the tongue flat and forward. Produce a thin, light sound without "
               "filling the mouth.",
        common_mistake="Adding heaviness (Tafkhim) to letters that should be light.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.WAQF,
        name_arabic="وقف",
        color="#64748b", bg_color="#f1f5f9", text_color="#1e293b",
        description="Stopping: a full breath pause at the end of an ayah or at waqf marks",
        how_to="Stop and drop the final vowel (if any), holding the last consonant. Restart "
               "with a fresh breath.",
        common_mistake="Not stopping at waqf marks, or keeping the wrong vowel at the stop.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.HAMZAT_WASL,
        name_arabic="همزة وصل",
        color="#0f766e", bg_color="#ccfbf1", text_color="#134e4a",
        description="Connecting hamza: pronounced when starting, silent when continuing",
        how_to="When beginning recitation, pronounce the hamzat wasl. When connecting from a "
               "previous word, skip it entirely.",
        common_mistake="Pronouncing the hamzat wasl even when connecting it to the previous word.",
    ),
    TajweedRuleInfo(
        rule=TajweedRule.SAKT,
        name_arabic="سكت",
        color="#475569", bg_color="#f8fafc", text_color="#0f172a",
        description="Brief pause without breath at specific places in the Quran",
        how_to="Stop your voice briefly without taking a breath. Only in marked positions.",
        common_mistake="Taking a breath during Sakt.",
    ),
]


TAJWEED_RULES: Mapping[TajweedRule, TajweedRuleInfo] = MappingProxyType({
    definition.rule: definition for definition in _RULE_DEFINITIONS
})


def get_rule_info(rule: TajweedRule) -> TajweedRuleInfo:
    return TAJWEED_RULES[rule]
