from typing import Iterable

from .weight_converter import WeightConverter


class VolumeCalculator:
    """Convert logged sets into volume using exercise-specific rules.

    Rules are checked in order and the first match wins. Body weight
    exercises use the lifter's weight in pounds, everything else uses the
    logged load. Products are evaluated left to right so the floating point
    results match volumes already stored by earlier versions of the tracker.
    """

    PULL_UP = "懸垂"
    AB_WHEEL_KNEELING = "アブローラー(膝コロ)"
    AB_WHEEL_STANDING = "アブローラー(立ちコロ)"
    BULGARIAN_SPLIT_SQUAT = "ブルガリアンスクワット(左右)"
    BOTH_SIDES = "(左右)"

    KNEELING_FACTOR = 0.6
    STANDING_FACTOR = 0.9
    SPLIT_SQUAT_FACTOR = 4
    BOTH_SIDES_FACTOR = 2
    DEFAULT_FACTOR = 2

    @classmethod
    def volume(cls, record) -> float:
        """Return the volume of one logged set."""
        name = record.exercise
        load = record.load
        reps = record.reps
        sets = record.set_count
        bodyweight_lb = WeightConverter.kg_to_lb(record.bodyweight, precision=None)
        if name == cls.PULL_UP:
            return (bodyweight_lb + load) * reps * sets
        if cls.AB_WHEEL_KNEELING in name:
            return bodyweight_lb * reps * sets * cls.KNEELING_FACTOR
        if cls.AB_WHEEL_STANDING in name:
            return bodyweight_lb * reps * sets * cls.STANDING_FACTOR
        if name == cls.BULGARIAN_SPLIT_SQUAT:
            return load * reps * sets * cls.SPLIT_SQUAT_FACTOR
        if cls.BOTH_SIDES in name:
            return load * reps * sets * cls.BOTH_SIDES_FACTOR
        return load * reps * sets * cls.DEFAULT_FACTOR

    @classmethod
    def total(cls, records: Iterable) -> float:
        vol = 0.0
        for record in records:
            vol += cls.volume(record)
        return vol
