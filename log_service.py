from __future__ import annotations
import datetime
import logging
from typing import Callable, List, Optional

from db import WorkoutStore
from draft_service import Draft, DraftEditor
from models import Workout
from stats_service import StatisticsService

logger = logging.getLogger(__name__)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class WorkoutLogService:
    """Own the in-memory workout list and persist it after every change."""

    def __init__(
        self,
        store: WorkoutStore,
        editor: Optional[DraftEditor] = None,
        clock: Optional[Callable[[], datetime.datetime]] = None,
    ) -> None:
        self.store = store
        self.editor = editor or DraftEditor()
        self.clock = clock or utc_now
        self.workouts: List[Workout] = store.load()

    def commit(self, draft: Draft) -> Workout:
        """Validate ``draft`` and store it as the newest workout.

        Raises ``DraftValidationError`` before any state changes when the
        workout name or an exercise name is blank.
        """
        self.editor.validate(draft)
        created = self.clock().isoformat(timespec="milliseconds")
        workout = Workout(
            id=self.editor.id_factory(),
            date=draft.date,
            workout_name=draft.workout_name.strip(),
            exercises=list(draft.exercises),
            created_at=created.replace("+00:00", "Z"),
        )
        self.workouts = [workout, *self.workouts]
        self.store.save(self.workouts)
        logger.info("Saved workout %s (%s) on %s", workout.id, workout.workout_name, workout.date)
        return workout

    def delete(self, workout_id: str) -> None:
        self.workouts = [w for w in self.workouts if w.id != workout_id]
        self.store.save(self.workouts)
        logger.info("Deleted workout %s", workout_id)

    def history(self) -> List[Workout]:
        return StatisticsService.sorted_by_date_descending(self.workouts)
