from __future__ import annotations
import datetime
from typing import List, Optional

from pydantic import BaseModel

from models import ExerciseEntry, IdFactory, SetEntry, new_id


class DraftValidationError(ValueError):
    """Raised when a draft cannot be committed as a workout."""


class Draft(BaseModel):
    """The workout currently being edited in the log form."""

    date: str
    workout_name: str = ""
    exercises: List[ExerciseEntry]


def coerce_number(raw, fallback: float = 0) -> float:
    """Return ``raw`` as a non-negative number or ``fallback``."""
    if raw is None or raw == "":
        return 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return fallback
    if value != value or value < 0:
        return fallback
    return value


class DraftEditor:
    """Produce edited copies of a ``Draft``.

    Every operation returns a new draft and leaves its argument untouched.
    Removing the last exercise of a draft or the last set of an exercise is
    ignored so a draft always holds at least one of each.
    """

    SET_FIELDS = ("reps", "weight")

    def __init__(
        self,
        id_factory: IdFactory = new_id,
        default_reps: int = 10,
        default_weight: float = 0.0,
    ) -> None:
        self.id_factory = id_factory
        self.default_reps = default_reps
        self.default_weight = default_weight

    def _new_set(self) -> SetEntry:
        return SetEntry(reps=self.default_reps, weight=self.default_weight)

    def _new_exercise(self) -> ExerciseEntry:
        return ExerciseEntry(id=self.id_factory(), name="", sets=[self._new_set()])

    def _replace_exercise(
        self, draft: Draft, exercise_id: str, **changes
    ) -> Draft:
        exercises = [
            ex.model_copy(update=changes) if ex.id == exercise_id else ex
            for ex in draft.exercises
        ]
        return draft.model_copy(update={"exercises": exercises})

    def _find(self, draft: Draft, exercise_id: str) -> Optional[ExerciseEntry]:
        for ex in draft.exercises:
            if ex.id == exercise_id:
                return ex
        return None

    def new_draft(self, date: Optional[str] = None) -> Draft:
        if date is None:
            date = datetime.date.today().isoformat()
        return Draft(date=date, exercises=[self._new_exercise()])

    def set_date(self, draft: Draft, date: str) -> Draft:
        return draft.model_copy(update={"date": date})

    def set_workout_name(self, draft: Draft, name: str) -> Draft:
        return draft.model_copy(update={"workout_name": name})

    def add_exercise(self, draft: Draft) -> Draft:
        return draft.model_copy(
            update={"exercises": [*draft.exercises, self._new_exercise()]}
        )

    def remove_exercise(self, draft: Draft, exercise_id: str) -> Draft:
        if len(draft.exercises) == 1:
            return draft
        exercises = [ex for ex in draft.exercises if ex.id != exercise_id]
        return draft.model_copy(update={"exercises": exercises})

    def rename_exercise(self, draft: Draft, exercise_id: str, name: str) -> Draft:
        return self._replace_exercise(draft, exercise_id, name=name)

    def add_set(self, draft: Draft, exercise_id: str) -> Draft:
        ex = self._find(draft, exercise_id)
        if ex is None:
            return draft
        return self._replace_exercise(
            draft, exercise_id, sets=[*ex.sets, self._new_set()]
        )

    def remove_set(self, draft: Draft, exercise_id: str, index: int) -> Draft:
        ex = self._find(draft, exercise_id)
        if ex is None or len(ex.sets) == 1:
            return draft
        sets = [s for i, s in enumerate(ex.sets) if i != index]
        return self._replace_exercise(draft, exercise_id, sets=sets)

    def update_set(
        self, draft: Draft, exercise_id: str, index: int, field: str, value: float
    ) -> Draft:
        if field not in self.SET_FIELDS:
            raise ValueError(f"Unknown set field: {field}")
        ex = self._find(draft, exercise_id)
        if ex is None:
            return draft
        if field == "reps":
            value = int(value)
        sets = [
            s.model_copy(update={field: value}) if i == index else s
            for i, s in enumerate(ex.sets)
        ]
        return self._replace_exercise(draft, exercise_id, sets=sets)

    @staticmethod
    def validate(draft: Draft) -> None:
        if not draft.workout_name.strip():
            raise DraftValidationError("Please enter a workout name.")
        if any(not ex.name.strip() for ex in draft.exercises):
            raise DraftValidationError("Please enter all exercise names.")
