"""
Unit tests for recitation comparison and scoring (core/scoring.py).

Covers compare_recitation end to end, grade bands and the feedback builder.
Run: python -m pytest tests/test_scoring.py -v
"""

import json
import unittest
from core.mistakes import MistakeKind
from core.scoring import GRADE_BANDS, build_feedback, compare_recitation, grade_score
from core.word_analysis import CORRECT, EXTRA, MISSED

BISMILLAH = "بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ"
BISMILLAH_SPOKEN = "بسم الله الرحمن الرحيم"
HAMD = "الْحَمْدُ لِلَّهِ رَبِّ الْعَالَمِينَ"


class TestGrades(unittest.TestCase):
    """Six grade bands, monotonic in the score."""

    def test_band_edges(self):
        self.assertEqual(grade_score(100), ("Excellent", "ممتاز"))
        self.assertEqual(grade_score(95), ("Excellent", "ممتاز"))
        self.assertEqual(grade_score(94)[0], "Very Good")
        self.assertEqual(grade_score(85)[0], "Very Good")
        self.assertEqual(grade_score(84)[0], "Good")
        self.assertEqual(grade_score(72)[0], "Good")
        self.assertEqual(grade_score(71)[0], "Fair")
        self.assertEqual(grade_score(55)[0], "Fair")
        self.assertEqual(grade_score(54)[0], "Needs Practice")
        self.assertEqual(grade_score(35)[0], "Needs Practice")
        self.assertEqual(grade_score(34), ("Keep Trying", "استمر في المحاولة"))
        self.assertEqual(grade_score(0)[0], "Keep Trying")

    def test_monotonic(self):
        order = [band[1] for band in reversed(GRADE_BANDS)]
        previous = 0
        for score in range(0, 101):
            rank = order.index(grade_score(score)[0])
            self.assertGreaterEqual(rank, previous)
            previous = rank


class TestCompareBismillah(unittest.TestCase):
    """Diacritized verse vs plain speech-recognition transcript."""

    def setUp(self):
        self.result = compare_recitation(BISMILLAH, BISMILLAH_SPOKEN)

    def test_all_words_correct(self):
        self.assertEqual(self.result.correct_count, 4)
        self.assertTrue(all(w.status == CORRECT for w in self.result.word_results))
        self.assertEqual([w.original_index for w in self.result.word_results], [0, 1, 2, 3])

    def test_scores(self):
        r = self.result
        self.assertEqual(r.completeness_score, 100)
        self.assertEqual(r.letter_score, 100)
        self.assertEqual(r.madd_score, 100)
        self.assertEqual(r.haraka_score, 85)
        self.assertEqual(r.overall_score, 99)
        self.assertEqual(r.grade, "Excellent")

    def test_feedback(self):
        fb = self.result.feedback
        self.assertEqual(fb[0].severity, "success")
        self.assertIn("Near-perfect", fb[0].text)
        self.assertEqual(fb[1].text, "All words recited correctly! Excellent accuracy.")
        self.assertEqual(
            fb[-1].text,
            "Tajweed rules in this ayah: Shaddah, Lam Shamsiyyah, Tafkhim +1 more. See details below.",
        )

    def test_tajweed_attached_to_words(self):
        self.assertEqual(len(self.result.tajweed_annotations), 4)
        self.assertEqual(self.result.word_results[1].tajweed.word, "اللَّهِ")


class TestCompareMissingWord(unittest.TestCase):
    def setUp(self):
        self.result = compare_recitation("الْحَمْدُ لِلَّهِ", "الحمد")

    def test_counts(self):
        r = self.result
        self.assertEqual((r.correct_count, r.missed_count, r.extra_count), (1, 1, 0))
        self.assertEqual(r.missed_words, ["لِلَّهِ"])
        self.assertEqual(r.word_results[1].status, MISSED)
        self.assertTrue(r.word_results[1].has_critical)
        self.assertTrue(r.word_results[1].has_major)
        self.assertFalse(r.word_results[0].has_major)

    def test_scores(self):
        r = self.result
        self.assertEqual(r.completeness_score, 50)
        self.assertEqual(r.letter_score, 50)
        self.assertEqual(r.haraka_score, 43)
        self.assertEqual(r.overall_score, 49)
        self.assertEqual(r.grade, "Needs Practice")

    def test_feedback_lists_missed_word(self):
        texts = [f.text for f in self.result.feedback]
        self.assertIn("1 word(s) were missed: لِلَّهِ", texts)

    def test_mistake_histogram(self):
        self.assertEqual(self.result.mistake_histogram(), {"missed_word": 1})


class TestCompareExtraWord(unittest.TestCase):
    def test_extra_word_placed_where_spoken(self):
        r = compare_recitation("بسم الله", "بسم يا الله")
        self.assertEqual(r.extra_count, 1)
        self.assertEqual(r.extra_words, ["يا"])
        self.assertEqual([w.status for w in r.word_results], [CORRECT, EXTRA, CORRECT])
        extra = r.word_results[1]
        self.assertEqual(extra.original, "")
        self.assertEqual(extra.original_index, -1)
        self.assertEqual(extra.tajweed.word_index, -1)
        self.assertEqual(extra.mistakes[0].kind, MistakeKind.EXTRA_WORD)
        self.assertEqual(r.total_spoken_words, 3)
        self.assertEqual(r.overall_score, 100)


class TestCompareMistakes(unittest.TestCase):
    def test_similar_letter_tip(self):
        r = compare_recitation("الصراط المستقيم", "السراط المستقيم")
        self.assertEqual(r.partial_count, 1)
        self.assertTrue(any("similar-sounding letters" in f.text for f in r.feedback))
        self.assertTrue(any("close but not exact" in f.text for f in r.feedback))

    def test_hamza_seat_slip_gets_similar_letter_tip(self):
        r = compare_recitation("يُؤْمِنُونَ", "يومنون")
        self.assertEqual(r.partial_count, 1)
        self.assertLess(r.letter_score, 100)
        self.assertTrue(any("similar-sounding letters" in f.text for f in r.feedback))

    def test_missed_preview_truncated(self):
        r = compare_recitation("قل هو الله احد الله الصمد", "قل")
        self.assertEqual(r.missed_count, 5)
        missed = [f.text for f in r.feedback if "were missed" in f.text][0]
        self.assertEqual(missed, "5 word(s) were missed: هو ، الله ، احد ، الله…")

    def test_feedback_is_deterministic(self):
        a = compare_recitation(HAMD, "الحمد لله رب")
        b = compare_recitation(HAMD, "الحمد لله رب")
        self.assertEqual(a.feedback, b.feedback)
        self.assertEqual(build_feedback(a), a.feedback)


class TestDegenerateInputs(unittest.TestCase):
    def test_empty_verse(self):
        r = compare_recitation("", "بسم")
        self.assertEqual(r.overall_score, 0)
        self.assertEqual(r.grade, "Keep Trying")
        self.assertEqual(r.word_results, [])
        self.assertEqual([(f.text, f.severity) for f in r.feedback], [("No ayah selected.", "error")])

    def test_empty_transcript(self):
        r = compare_recitation(BISMILLAH, "   ")
        self.assertEqual(r.overall_score, 0)
        self.assertEqual(r.missed_count, 4)
        self.assertTrue(all(w.status == MISSED for w in r.word_results))
        self.assertEqual(len(r.tajweed_annotations), 4)
        self.assertEqual(
            [f.text for f in r.feedback],
            [
                "No recitation detected. Allow microphone access and try again.",
                "Tip: Use Chrome or Edge for best Arabic speech recognition results.",
            ],
        )

    def test_none_inputs(self):
        self.assertEqual(compare_recitation(None, None).overall_score, 0)


class TestRoundTrip(unittest.TestCase):
    def test_identical_text_scores_100(self):
        for verse in (BISMILLAH, HAMD, "قُلْ هُوَ اللَّهُ أَحَدٌ"):
            with self.subTest(verse=verse):
                r = compare_recitation(verse, verse)
                self.assertEqual(r.overall_score, 100)
                self.assertEqual(r.correct_count, r.total_original_words)
                self.assertEqual(r.grade, "Excellent")

    def test_scores_bounded(self):
        for spoken in ("", "الحمد", "رب العالمين الحمد", "كلام اخر تماما هنا", HAMD + " " + HAMD):
            with self.subTest(spoken=spoken):
                r = compare_recitation(HAMD, spoken)
                for value in (r.overall_score, r.letter_score, r.madd_score, r.haraka_score,
                              r.completeness_score):
                    self.assertIsInstance(value, int)
                    self.assertGreaterEqual(value, 0)
                    self.assertLessEqual(value, 100)
                self.assertEqual(
                    r.correct_count + r.partial_count + r.wrong_count + r.missed_count,
                    r.total_original_words,
                )

    def test_to_dict_is_json_serializable(self):
        d = compare_recitation(HAMD, "الحمد لله").to_dict()
        json.dumps(d, ensure_ascii=False)
        self.assertEqual(d["word_results"][0]["status"], CORRECT)
        self.assertEqual(d["word_results"][-1]["mistakes"][0]["type"], "missed_word")


if __name__ == "__main__":
    unittest.main()
