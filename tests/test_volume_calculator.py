import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import VolumeCalculator, WeightConverter
from models import LoggedSet


def make_set(exercise: str, load: float = 50.0, reps: int = 10, sets: int = 3, bodyweight: float = 60.0) -> LoggedSet:
    return LoggedSet(
        date="2025-08-26",
        bodyweight=bodyweight,
        exercise=exercise,
        load=load,
        reps=reps,
        set_count=sets,
    )


class VolumeCalculatorTestCase(unittest.TestCase):
    def test_constants(self) -> None:
        self.assertEqual(WeightConverter.KG_TO_LB, 2.20462)
        self.assertEqual(VolumeCalculator.KNEELING_FACTOR, 0.6)
        self.assertEqual(VolumeCalculator.STANDING_FACTOR, 0.9)
        self.assertEqual(VolumeCalculator.SPLIT_SQUAT_FACTOR, 4)
        self.assertEqual(VolumeCalculator.DEFAULT_FACTOR, 2)

    def test_default_rule(self) -> None:
        self.assertEqual(VolumeCalculator.volume(make_set("anything else")), 3000)
        self.assertEqual(
            VolumeCalculator.volume(make_set("ダンベルチェストプレス", 35, 13, 2, 57)),
            1820,
        )

    def test_pull_up_adds_bodyweight(self) -> None:
        record = make_set("懸垂", load=10, reps=8, sets=3, bodyweight=57)
        self.assertEqual(VolumeCalculator.volume(record), (57 * 2.20462 + 10) * 8 * 3)

    def test_pull_up_is_exact_match(self) -> None:
        record = make_set("懸垂(ワイド)", load=10, reps=8, sets=3, bodyweight=57)
        self.assertEqual(VolumeCalculator.volume(record), 10 * 8 * 3 * 2)

    def test_ab_wheel_variants(self) -> None:
        kneeling = make_set("アブローラー(膝コロ)", load=0, reps=15, sets=2, bodyweight=57)
        standing = make_set("朝のアブローラー(立ちコロ)", load=0, reps=5, sets=3, bodyweight=57)
        self.assertEqual(VolumeCalculator.volume(kneeling), 57 * 2.20462 * 15 * 2 * 0.6)
        self.assertEqual(VolumeCalculator.volume(standing), 57 * 2.20462 * 5 * 3 * 0.9)

    def test_ab_wheel_ignores_load(self) -> None:
        light = make_set("アブローラー(膝コロ)", load=0)
        heavy = make_set("アブローラー(膝コロ)", load=100)
        self.assertEqual(VolumeCalculator.volume(light), VolumeCalculator.volume(heavy))

    def test_bulgarian_split_squat(self) -> None:
        record = make_set("ブルガリアンスクワット(左右)", load=20, reps=10, sets=2)
        self.assertEqual(VolumeCalculator.volume(record), 20 * 10 * 2 * 4)

    def test_both_sides_marker(self) -> None:
        record = make_set("ダンベルカール(左右)", load=15, reps=12, sets=3)
        self.assertEqual(VolumeCalculator.volume(record), 15 * 12 * 3 * 2)

    def test_zero_reps(self) -> None:
        self.assertEqual(VolumeCalculator.volume(make_set("懸垂", reps=0)), 0)

    def test_deterministic(self) -> None:
        record = make_set("懸垂", load=2.5, reps=7, sets=4, bodyweight=63.3)
        self.assertEqual(VolumeCalculator.volume(record), VolumeCalculator.volume(record))

    def test_total(self) -> None:
        records = [make_set("a", 35, 13, 2), make_set("a", 40, 10, 1)]
        self.assertEqual(VolumeCalculator.total(records), 1820 + 800)
        self.assertEqual(VolumeCalculator.total([]), 0.0)


if __name__ == "__main__":
    unittest.main()
