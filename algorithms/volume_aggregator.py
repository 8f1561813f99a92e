from __future__ import annotations

import unicodedata
from typing import Dict, Iterable, List, Tuple

from models import ExerciseStat, LoggedSet, SeriesPoint, VolumeEntry
from .date_normalizer import DateNormalizer
from .volume_calculator import VolumeCalculator


class VolumeAggregator:
    """Fold logged sets into volume tables, series and per-exercise stats.

    Every method is a pure function of its arguments: the input is never
    modified and results are rebuilt on each call.
    """

    # katakana collates with the matching hiragana
    _KANA_FOLD = {code: code - 0x60 for code in range(0x30A1, 0x30F7)}

    @classmethod
    def _collation_key(cls, name: str) -> Tuple[str, str]:
        folded = unicodedata.normalize("NFKC", name).casefold()
        return folded.translate(cls._KANA_FOLD), name

    @classmethod
    def _group(
        cls, sets: Iterable[LoggedSet]
    ) -> Dict[Tuple[str, str], VolumeEntry]:
        grouped: Dict[Tuple[str, str], dict] = {}
        for record in sets:
            date = DateNormalizer.normalize(record.date)
            key = (date, record.exercise)
            item = grouped.setdefault(
                key,
                {
                    "date": date,
                    "exercise": record.exercise,
                    "volume": 0.0,
                    "bodyweight": record.bodyweight,
                    "sets": [],
                },
            )
            item["volume"] += VolumeCalculator.volume(record)
            item["sets"].append(record)
        return {key: VolumeEntry(**item) for key, item in grouped.items()}

    @classmethod
    def aggregate_volume(cls, sets: Iterable[LoggedSet]) -> List[VolumeEntry]:
        """Return per (date, exercise) volume totals, newest date first."""
        entries = list(cls._group(sets).values())
        return sorted(entries, key=lambda e: e.date, reverse=True)

    @classmethod
    def time_series(
        cls, sets: Iterable[LoggedSet], exercise: str
    ) -> List[SeriesPoint]:
        """Return daily volume and heaviest load for ``exercise``, oldest first."""
        selected = [s for s in sets if s.exercise == exercise]
        points = []
        for entry in cls._group(selected).values():
            points.append(
                SeriesPoint(
                    date=entry.date,
                    volume=entry.volume,
                    max_load=max([s.load for s in entry.sets], default=0.0),
                )
            )
        return sorted(points, key=lambda p: p.date)

    @classmethod
    def exercise_stats(cls, sets: Iterable[LoggedSet]) -> List[ExerciseStat]:
        records = list(sets)
        by_exercise: Dict[str, List[VolumeEntry]] = {}
        for entry in cls._group(records).values():
            by_exercise.setdefault(entry.exercise, []).append(entry)
        stats = []
        for name, entries in by_exercise.items():
            loads = [s.load for s in records if s.exercise == name]
            stats.append(
                ExerciseStat(
                    exercise=name,
                    last_date=max(e.date for e in entries),
                    max_daily_volume=max([e.volume for e in entries], default=0.0),
                    max_load=max(loads, default=0.0),
                    workout_days=len({e.date for e in entries}),
                )
            )
        return sorted(stats, key=lambda s: cls._collation_key(s.exercise))

    @classmethod
    def exercise_names(cls, sets: Iterable[LoggedSet]) -> List[str]:
        return sorted({s.exercise for s in sets}, key=cls._collation_key)

    @classmethod
    def previous_best(
        cls, sets: Iterable[LoggedSet], exercise: str
    ) -> Dict[str, float]:
        """Heaviest load and best day volume logged so far for ``exercise``."""
        series = cls.time_series(sets, exercise)
        return {
            "max_load": max([p.max_load for p in series], default=0.0),
            "max_daily_volume": max([p.volume for p in series], default=0.0),
        }
