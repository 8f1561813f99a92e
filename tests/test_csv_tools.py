import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from csv_tools import CSV_HEADER, CsvTools
from models import LoggedSet

HEADER = ",".join(CSV_HEADER)


class CsvToolsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.records = [
            LoggedSet(id=1, date="2025-08-26", weight=57, exercise="ダンベルチェストプレス", load=35, reps=13, sets=2, comment="good"),
            LoggedSet(id=2, date="2025-08-26", weight=57, exercise="懸垂", load=0, reps=8, sets=3, comment="grip, then lats"),
        ]

    def test_export(self) -> None:
        lines = CsvTools.export_sets(self.records).splitlines()
        self.assertEqual(lines[0], HEADER)
        self.assertEqual(lines[1], "2025-08-26,57.0,ダンベルチェストプレス,35.0,13,2,good")
        self.assertEqual(lines[2], '2025-08-26,57.0,懸垂,0.0,8,3,"grip, then lats"')

    def test_export_empty(self) -> None:
        self.assertEqual(CsvTools.export_sets([]), HEADER + "\n")

    def test_round_trip(self) -> None:
        records, skipped = CsvTools.import_sets(CsvTools.export_sets(self.records))
        self.assertEqual(skipped, 0)
        self.assertEqual([r.to_row() for r in records], [r.to_row() for r in self.records])

    def test_import_defaults_and_blank_lines(self) -> None:
        text = "\ufeff" + HEADER + "\n2025/1/5,,press,35,13,2,\n\n2025/1/6,58,press,40,10,1\n"
        records, skipped = CsvTools.import_sets(text, default_bodyweight=60.0)
        self.assertEqual(skipped, 0)
        self.assertEqual(len(records), 2)
        self.assertEqual(records[0].bodyweight, 60.0)
        self.assertEqual(records[0].comment, "")
        self.assertEqual(records[1].bodyweight, 58.0)
        self.assertEqual(records[1].comment, "")

    def test_unquoted_commas_join_comment(self) -> None:
        text = HEADER + "\n2025-01-05,57,press,35,13,2,slow, controlled\n"
        records, _ = CsvTools.import_sets(text)
        self.assertEqual(records[0].comment, "slow, controlled")

    def test_invalid_rows_are_skipped(self) -> None:
        text = (
            HEADER
            + "\n2025-01-05,57,press,heavy,13,2,"
            + "\n2025-01-05,57,press,35,13,0,"
            + "\n2025-01-05,57,,35,13,2,"
            + "\n2025-01-05,57,press,35,13,2,ok\n"
        )
        records, skipped = CsvTools.import_sets(text)
        self.assertEqual(skipped, 3)
        self.assertEqual([r.comment for r in records], ["ok"])

    def test_non_finite_rows_are_skipped(self) -> None:
        text = (
            HEADER
            + "\n2025-01-05,57,press,inf,13,2,"
            + "\n2025-01-05,nan,press,35,13,2,"
            + "\n2025-01-05,57,press,35,13,2,ok\n"
        )
        records, skipped = CsvTools.import_sets(text)
        self.assertEqual(skipped, 2)
        self.assertEqual([r.comment for r in records], ["ok"])

    def test_missing_columns(self) -> None:
        with self.assertRaises(ValueError):
            CsvTools.import_sets("date,exercise,load\n2025-01-05,press,35\n")


if __name__ == "__main__":
    unittest.main()
