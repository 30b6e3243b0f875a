from __future__ import annotations
import uuid
from typing import Callable, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


IdFactory = Callable[[], str]


def new_id() -> str:
    """Return a random unique identifier."""
    return str(uuid.uuid4())


class SetEntry(BaseModel):
    reps: int = 0
    weight: float = 0.0

    @field_validator("reps", "weight", mode="before")
    @classmethod
    def _none_as_zero(cls, value):
        return 0 if value is None else value


class ExerciseEntry(BaseModel):
    id: str
    name: str = ""
    sets: List[SetEntry] = Field(min_length=1)


class Workout(BaseModel):
    """A committed training session as persisted in the store."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    date: str
    workout_name: str = Field(alias="workoutName")
    exercises: List[ExerciseEntry] = Field(min_length=1)
    created_at: str = Field(alias="createdAt")

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)
