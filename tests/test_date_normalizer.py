import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import DateNormalizer


class DateNormalizerTestCase(unittest.TestCase):
    def test_separators_and_padding(self) -> None:
        self.assertEqual(DateNormalizer.normalize("2025/1/5"), "2025-01-05")
        self.assertEqual(DateNormalizer.normalize("2025.12.31"), "2025-12-31")
        self.assertEqual(DateNormalizer.normalize("2025-8-26"), "2025-08-26")
        self.assertEqual(DateNormalizer.normalize("2025/08.6"), "2025-08-06")

    def test_trims_whitespace(self) -> None:
        self.assertEqual(DateNormalizer.normalize("  2025/1/5\n"), "2025-01-05")

    def test_idempotent(self) -> None:
        for text in ["2025/1/5", "2024.02.29", "2023-11-3", " 2020/10/10 "]:
            once = DateNormalizer.normalize(text)
            self.assertEqual(DateNormalizer.normalize(once), once)

    def test_unmatched_passes_through(self) -> None:
        self.assertEqual(DateNormalizer.normalize(" 25/1/5 "), "25/1/5")
        self.assertEqual(DateNormalizer.normalize("2025/1/5/7"), "2025/1/5/7")
        self.assertEqual(DateNormalizer.normalize("yesterday"), "yesterday")
        self.assertEqual(DateNormalizer.normalize(""), "")

    def test_unmatched_sorts_as_text(self) -> None:
        dates = [DateNormalizer.normalize(d) for d in ["2025/1/5", "2025年1月4日"]]
        self.assertEqual(max(dates), "2025年1月4日")

    def test_strict_rejects_unmatched(self) -> None:
        with self.assertRaises(ValueError):
            DateNormalizer.normalize("2025/13", strict=True)
        self.assertEqual(DateNormalizer.normalize("2025/3/1", strict=True), "2025-03-01")

    def test_non_ascii_digits_do_not_match(self) -> None:
        self.assertEqual(DateNormalizer.normalize("２０２５/1/5"), "２０２５/1/5")

    def test_is_iso(self) -> None:
        self.assertTrue(DateNormalizer.is_iso("2025-01-05"))
        self.assertFalse(DateNormalizer.is_iso("2025-1-5"))
        self.assertFalse(DateNormalizer.is_iso("2025/01/05"))
        self.assertEqual(DateNormalizer.normalize(" 2025-01-05 "), "2025-01-05")


if __name__ == "__main__":
    unittest.main()
