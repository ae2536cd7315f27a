"""
Unit tests for text-based Tajweed annotation (tajweed/annotator.py) and the rule catalog (tajweed/rules.py).

No audio required: rules are detected from the diacritized Uthmani text.
Run: python -m pytest tests/test_tajweed_rules.py -v
"""

import unittest
from tajweed import (
    TAJWEED_RULES,
    TajweedRule,
    annotate_verse,
    detect_junction_tajweed,
    detect_word_tajweed,
    get_rule_info,
    summarize_tajweed,
)


def _rules(annotations):
    return [a.rule for a in annotations]


class TestRuleCatalog(unittest.TestCase):
    """Static metadata table."""

    def test_every_rule_has_metadata(self):
        self.assertEqual(len(TajweedRule), 25)
        for rule in TajweedRule:
            info = get_rule_info(rule)
            self.assertEqual(info.rule, rule)
            self.assertTrue(info.name_arabic)
            self.assertTrue(info.color.startswith("#"))

    def test_madd_beat_counts(self):
        self.assertEqual(TAJWEED_RULES[TajweedRule.MADD_TABII].counts, 2)
        self.assertEqual(TAJWEED_RULES[TajweedRule.MADD_JAIZ].counts, 4)
        self.assertEqual(TAJWEED_RULES[TajweedRule.MADD_WAJIB].counts, 5)
        self.assertEqual(TAJWEED_RULES[TajweedRule.MADD_LAZIM].counts, 6)
        self.assertIsNone(TAJWEED_RULES[TajweedRule.GHUNNA].counts)

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            TAJWEED_RULES[TajweedRule.GHUNNA] = None

    def test_to_dict_uses_display_name(self):
        d = get_rule_info(TajweedRule.IKHFA_HAQIQI).to_dict()
        self.assertEqual(d["rule"], "Ikhfa Haqiqi")
        self.assertNotIn("counts", d)
        self.assertEqual(get_rule_info(TajweedRule.MADD_ARID).to_dict()["counts"], 6)


class TestWordRules(unittest.TestCase):
    """Rules found inside a single word."""

    def test_lam_shamsiyyah(self):
        self.assertIn(TajweedRule.LAM_SHAMSIYYAH, _rules(detect_word_tajweed("الشَّمْسُ")))

    def test_lam_qamariyyah(self):
        rules = _rules(detect_word_tajweed("الْقَمَرُ"))
        self.assertIn(TajweedRule.LAM_QAMARIYYAH, rules)
        self.assertNotIn(TajweedRule.LAM_SHAMSIYYAH, rules)

    def test_alef_wasla_article(self):
        rules = _rules(detect_word_tajweed("ٱلْحَمْدُ"))
        self.assertIn(TajweedRule.LAM_QAMARIYYAH, rules)
        self.assertIn(TajweedRule.HAMZAT_WASL, rules)

    def test_ghunna_on_doubled_noon(self):
        rules = _rules(detect_word_tajweed("إِنَّ"))
        self.assertEqual(rules[:2], [TajweedRule.SHADDAH, TajweedRule.GHUNNA])

    def test_qalqalah(self):
        self.assertIn(TajweedRule.QALQALAH_SUGHRA, _rules(detect_word_tajweed("يَقْطَعُونَ")))
        self.assertIn(TajweedRule.QALQALAH_KUBRA, _rules(detect_word_tajweed("أَحَدٌ")))

    def test_madd_tabii(self):
        self.assertIn(TajweedRule.MADD_TABII, _rules(detect_word_tajweed("قَالَ")))

    def test_madd_wajib(self):
        self.assertIn(TajweedRule.MADD_WAJIB, _rules(detect_word_tajweed("جَاءَ")))

    def test_tafkhim_and_tarqiq(self):
        self.assertIn(TajweedRule.TAFKHIM, _rules(detect_word_tajweed("اللَّهِ")))
        self.assertIn(TajweedRule.TAFKHIM, _rules(detect_word_tajweed("الصِّرَاطَ")))
        self.assertIn(TajweedRule.TARQIQ, _rules(detect_word_tajweed("رِجَالٌ")))

    def test_waqf_mark(self):
        self.assertIn(TajweedRule.WAQF, _rules(detect_word_tajweed("الْعَالَمِينَ\u06D6")))
        self.assertIn(TajweedRule.WAQF, _rules(detect_word_tajweed("يَعْلَمُونَ\u06DA")))
        self.assertNotIn(TajweedRule.WAQF, _rules(detect_word_tajweed("الْعَالَمِينَ")))

    def test_no_duplicates_within_word(self):
        for word in ("الرَّحْمَٰنِ", "الصِّرَاطَ", "الْمُسْتَقِيمَ", "إِنَّ"):
            rules = _rules(detect_word_tajweed(word))
            self.assertEqual(len(rules), len(set(rules)))

    def test_empty_word(self):
        self.assertEqual(detect_word_tajweed(""), [])


class TestJunctionRules(unittest.TestCase):
    """Rules at the boundary between two words."""

    def test_iqlab_noon_sakin_before_ba(self):
        anns = detect_junction_tajweed("مِنْ", "بَعْدِ")
        self.assertEqual(_rules(anns), [TajweedRule.IQLAB])
        self.assertTrue(anns[0].at_junction)
        self.assertEqual(anns[0].position, "junction")

    def test_uthmani_iqlab_mark_counts_as_noon_sakin(self):
        # small meem above the noon instead of a sukoon
        anns = detect_junction_tajweed("مِنۢ", "بَعْدِ")
        self.assertEqual(_rules(anns), [TajweedRule.IQLAB])

    def test_noon_sakin_buckets(self):
        self.assertIn(TajweedRule.IZHAR_HALQI, _rules(detect_junction_tajweed("مِنْ", "عِلْمٍ")))
        self.assertIn(TajweedRule.IZHAR_HALQI, _rules(detect_junction_tajweed("عَذَابٌ", "حَمِيمٌ")))
        self.assertIn(TajweedRule.IDGHAM_BIGHUNNA, _rules(detect_junction_tajweed("مَنْ", "يَقُولُ")))
        self.assertIn(TajweedRule.IDGHAM_BILAGHUNNA, _rules(detect_junction_tajweed("مِنْ", "رَبِّهِمْ")))
        self.assertIn(TajweedRule.IKHFA_HAQIQI, _rules(detect_junction_tajweed("مِنْ", "قَبْلِ")))

    def test_hamza_seat_start_is_not_izhar(self):
        # Only the six throat letters open the izhar bucket
        self.assertEqual(detect_junction_tajweed("مَنْ", "آمَنَ"), [])
        self.assertEqual(detect_junction_tajweed("مِنْ", "أَمْرِ"), [])

    def test_tanwin(self):
        self.assertIn(TajweedRule.IQLAB, _rules(detect_junction_tajweed("عَلِيمٌ", "بِذَاتِ")))
        # fathatan on the letter before the seat alef
        self.assertIn(TajweedRule.IKHFA_HAQIQI, _rules(detect_junction_tajweed("خَيْرًا", "كَثِيرًا")))

    def test_meem_sakin(self):
        self.assertIn(TajweedRule.IKHFA_SHAFAWI, _rules(detect_junction_tajweed("لَهُمْ", "بِهِ")))
        self.assertIn(TajweedRule.IDGHAM_BIGHUNNA, _rules(detect_junction_tajweed("لَهُمْ", "مَا")))
        self.assertIn(TajweedRule.IZHAR_SHAFAWI, _rules(detect_junction_tajweed("عَلَيْهِمْ", "غَيْرِ")))

    def test_madd_jaiz_and_arid(self):
        rules = _rules(detect_junction_tajweed("فِي", "أَنْفُسِكُمْ"))
        self.assertIn(TajweedRule.MADD_JAIZ, rules)
        self.assertIn(TajweedRule.MADD_ARID, rules)

    def test_plain_alef_start_is_not_madd_jaiz(self):
        self.assertNotIn(TajweedRule.MADD_JAIZ, _rules(detect_junction_tajweed("فِي", "الْأَرْضِ")))

    def test_close_articulation_idgham(self):
        self.assertIn(TajweedRule.IDGHAM_MUTAJANISAYN, _rules(detect_junction_tajweed("قَالَت", "طَّائِفَةٌ")))
        self.assertIn(TajweedRule.IDGHAM_MUTAQARIBAYN, _rules(detect_junction_tajweed("قُل", "رَّبِّ")))

    def test_empty_next_word(self):
        self.assertEqual(detect_junction_tajweed("مِنْ", ""), [])


class TestAnnotateVerse(unittest.TestCase):
    """Whole-verse annotation and summary."""

    BISMILLAH = "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ"

    def test_one_entry_per_word(self):
        annotated = annotate_verse(self.BISMILLAH)
        self.assertEqual([a.word_index for a in annotated], [0, 1, 2, 3])
        self.assertEqual(annotated[0].annotations, [])
        self.assertEqual(
            annotated[1].rules,
            [TajweedRule.SHADDAH, TajweedRule.LAM_SHAMSIYYAH, TajweedRule.TAFKHIM],
        )

    def test_iqlab_attached_to_first_word(self):
        annotated = annotate_verse("مِنْ بَعْدِ")
        self.assertTrue(annotated[0].has_rule(TajweedRule.IQLAB))
        self.assertFalse(annotated[1].has_rule(TajweedRule.IQLAB))
        self.assertIn(TajweedRule.QALQALAH_KUBRA, annotated[1].rules)

    def test_no_rule_twice_per_word(self):
        verse = "إِنَّ الَّذِينَ كَفَرُوا سَوَاءٌ عَلَيْهِمْ أَأَنْذَرْتَهُمْ أَمْ لَمْ تُنْذِرْهُمْ لَا يُؤْمِنُونَ"
        for wt in annotate_verse(verse):
            self.assertEqual(len(wt.rules), len(set(wt.rules)))

    def test_empty_verse(self):
        self.assertEqual(annotate_verse(""), [])
        self.assertEqual(annotate_verse("   "), [])
        self.assertEqual(summarize_tajweed([]), [])

    def test_summary_first_seen_order(self):
        summary = summarize_tajweed(annotate_verse(self.BISMILLAH))
        self.assertEqual(
            [s.rule for s in summary],
            [TajweedRule.SHADDAH, TajweedRule.LAM_SHAMSIYYAH, TajweedRule.TAFKHIM, TajweedRule.MADD_TABII],
        )
        self.assertEqual(summary[0].word_indices, [1, 2, 3])
        self.assertEqual(summary[-1].words, ["الرَّحِيمِ"])

    def test_to_dict(self):
        d = annotate_verse("مِنْ بَعْدِ")[0].to_dict()
        self.assertEqual(d["word_index"], 0)
        self.assertEqual(d["annotations"][-1]["rule"], "Iqlab")
        self.assertEqual(d["annotations"][-1]["position"], "junction")


if __name__ == "__main__":
    unittest.main()
