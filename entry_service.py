from __future__ import annotations

import math
from typing import List

from loguru import logger
from pydantic import ValidationError

from algorithms import DateNormalizer, VolumeAggregator, VolumeCalculator
from db import SettingsRepository
from models import EntryForm, LoggedSet


class EntryService:
    """Turn entry form input into logged sets and write them to a store."""

    DEFAULT_BODYWEIGHT = 60.0

    def __init__(self, store, settings: SettingsRepository | None = None) -> None:
        self.store = store
        self.settings = settings

    def _default_bodyweight(self) -> float:
        if self.settings is not None:
            return self.settings.get_float("default_bodyweight", self.DEFAULT_BODYWEIGHT)
        return self.DEFAULT_BODYWEIGHT

    def _bodyweight(self, text: str) -> float:
        # blank, unparseable and zero all fall back to the default
        return _as_float(text) or self._default_bodyweight()

    def build_sets(self, form: EntryForm) -> List[LoggedSet]:
        """Validate ``form`` and return one LoggedSet per detail row."""
        if not form.date or not form.exercise or not form.details:
            raise ValueError("date, exercise and at least one set are required")
        if any(not d.load or not d.reps or not d.sets for d in form.details):
            raise ValueError("load, reps and sets are required for every row")
        date = DateNormalizer.normalize(form.date, strict=True)
        bodyweight = self._bodyweight(form.bodyweight)
        records = []
        for detail in form.details:
            try:
                records.append(
                    LoggedSet(
                        date=date,
                        bodyweight=bodyweight,
                        exercise=form.exercise,
                        load=float(detail.load),
                        reps=_as_count(detail.reps),
                        set_count=_as_count(detail.sets),
                        comment=form.comment,
                    )
                )
            except ValidationError as e:
                raise ValueError(str(e)) from e
        return records

    def submit(self, form: EntryForm) -> List[LoggedSet]:
        records = self.build_sets(form)
        added = self.store.add_many(records)
        logger.info("Logged {} sets of {}", len(added), form.exercise)
        return added

    def preview_volume(self, form: EntryForm) -> float:
        """Total volume of the form as it would be saved; blank fields count as 0."""
        bodyweight = self._bodyweight(form.bodyweight)
        records = []
        for detail in form.details:
            try:
                records.append(
                    LoggedSet(
                        date=form.date or "-",
                        bodyweight=bodyweight,
                        exercise=form.exercise or "-",
                        load=_as_float(detail.load),
                        reps=int(_as_float(detail.reps)),
                        set_count=int(_as_float(detail.sets)),
                    )
                )
            except ValidationError:
                # rows without a set count add nothing yet
                continue
        return VolumeCalculator.total(records)

    def previous_best(self, exercise: str) -> dict:
        return VolumeAggregator.previous_best(self.store.fetch_sets(), exercise)

    def step_load(self, value: str | float, direction: int) -> float:
        step = 5.0
        if self.settings is not None:
            step = self.settings.get_float("load_step", step)
        current = _as_float(value)
        return max(0.0, current + step * direction)

    def step_reps(self, value: str | int, direction: int) -> int:
        step = 1
        if self.settings is not None:
            step = self.settings.get_int("reps_step", step)
        current = int(_as_float(value))
        return max(0, current + step * direction)

    def step_sets(self, value: str | int, direction: int) -> int:
        upper = 10
        if self.settings is not None:
            upper = self.settings.get_int("max_set_count", upper)
        current = int(_as_float(value)) or 1
        return min(upper, max(1, current + direction))


def _as_float(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _as_count(text: str) -> int:
    """Parse a rep or set count, dropping any fractional part."""
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {text!r}")
    return int(number)
