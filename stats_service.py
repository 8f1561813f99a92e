from __future__ import annotations

from typing import Dict, List

import pandas as pd

from algorithms import VolumeAggregator, VolumeCalculator
from models import ExerciseStat, LoggedSet, SeriesPoint, VolumeEntry


class StatisticsService:
    """Compute volume views over the sets held by a store.

    ``store`` is anything with a ``fetch_sets()`` method, either the local
    SQLite repository or the hosted store client. Nothing is cached; every
    call reads a fresh snapshot and recomputes.
    """

    def __init__(self, store) -> None:
        self.store = store

    def logged_sets(self) -> List[LoggedSet]:
        return self.store.fetch_sets()

    def volume_table(self) -> List[VolumeEntry]:
        return VolumeAggregator.aggregate_volume(self.logged_sets())

    def exercise_stats(self) -> List[ExerciseStat]:
        return VolumeAggregator.exercise_stats(self.logged_sets())

    def time_series(self, exercise: str) -> List[SeriesPoint]:
        return VolumeAggregator.time_series(self.logged_sets(), exercise)

    def exercise_names(self) -> List[str]:
        return VolumeAggregator.exercise_names(self.logged_sets())

    def previous_best(self, exercise: str) -> Dict[str, float]:
        return VolumeAggregator.previous_best(self.logged_sets(), exercise)

    def raw_frame(self) -> pd.DataFrame:
        rows = [
            {
                "id": s.id,
                "date": s.date,
                "weight": s.bodyweight,
                "exercise": s.exercise,
                "load": s.load,
                "reps": s.reps,
                "sets": s.set_count,
                "volume": VolumeCalculator.volume(s),
                "comment": s.comment,
            }
            for s in self.logged_sets()
        ]
        return pd.DataFrame(
            rows,
            columns=["id", "date", "weight", "exercise", "load", "reps", "sets", "volume", "comment"],
        )

    def volume_frame(self) -> pd.DataFrame:
        rows = [
            {
                "date": e.date,
                "exercise": e.exercise,
                "weight": e.bodyweight,
                "volume": round(e.volume, 1),
                "sets": " / ".join(
                    f"{s.load:g}lb x {s.reps} x {s.set_count}" for s in e.sets
                ),
            }
            for e in self.volume_table()
        ]
        return pd.DataFrame(rows, columns=["date", "exercise", "weight", "volume", "sets"])

    def stats_frame(self) -> pd.DataFrame:
        rows = []
        for s in self.exercise_stats():
            row = s.model_dump()
            row["max_daily_volume"] = round(s.max_daily_volume, 1)
            rows.append(row)
        return pd.DataFrame(
            rows,
            columns=["exercise", "last_date", "max_daily_volume", "max_load", "workout_days"],
        )

    def series_frame(self, exercise: str) -> pd.DataFrame:
        rows = [p.model_dump() for p in self.time_series(exercise)]
        return pd.DataFrame(rows, columns=["date", "volume", "max_load"])
