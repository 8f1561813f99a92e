from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoggedSet(BaseModel):
    """One logged entry: ``load`` x ``reps`` x ``set_count`` of an exercise.

    Store rows call body weight ``weight`` and the set count ``sets``; the
    aliases map those names so the rest of the code never sees them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    id: Optional[Union[int, str]] = None
    date: str
    bodyweight: float = Field(alias="weight", ge=0)
    exercise: str = Field(min_length=1)
    load: float = Field(ge=0)
    reps: int = Field(ge=0)
    set_count: int = Field(alias="sets", ge=1)
    comment: str = ""
    created_at: Optional[str] = None

    @field_validator("date", "exercise")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("comment", mode="before")
    @classmethod
    def _comment_default(cls, value):
        return "" if value is None else value

    def to_row(self) -> dict:
        """Return the store representation without the store-owned fields."""
        return self.model_dump(
            by_alias=True, exclude={"id", "created_at"}
        )


class VolumeEntry(BaseModel):
    date: str
    exercise: str
    volume: float
    bodyweight: float
    sets: List[LoggedSet] = []


class SeriesPoint(BaseModel):
    date: str
    volume: float
    max_load: float


class ExerciseStat(BaseModel):
    exercise: str
    last_date: str
    max_daily_volume: float
    max_load: float
    workout_days: int


class SetDetail(BaseModel):
    """One row of the entry form, kept as entered."""

    load: str = ""
    reps: str = ""
    sets: str = ""

    @field_validator("load", "reps", "sets", mode="before")
    @classmethod
    def _as_text(cls, value) -> str:
        return "" if value is None else str(value).strip()


class EntryForm(BaseModel):
    date: str = ""
    bodyweight: str = ""
    exercise: str = ""
    comment: str = ""
    details: List[SetDetail] = Field(default_factory=lambda: [SetDetail()])

    @field_validator("date", "bodyweight", "exercise", "comment", mode="before")
    @classmethod
    def _as_text(cls, value) -> str:
        return "" if value is None else str(value).strip()
