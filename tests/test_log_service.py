import os
import sys
import json
import datetime
import itertools
import unittest
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import MemoryKeyValueStore, WorkoutStore, STORAGE_KEY
from draft_service import DraftEditor, DraftValidationError
from log_service import WorkoutLogService
from stats_service import StatisticsService


class WorkoutLogServiceTest(unittest.TestCase):
    def setUp(self) -> None:
        counter = itertools.count(1)
        self.kv = MemoryKeyValueStore()
        self.store = WorkoutStore(self.kv)
        self.editor = DraftEditor(id_factory=lambda: f"id{next(counter)}")
        self.clock = lambda: datetime.datetime(
            2024, 1, 1, 9, 30, tzinfo=datetime.timezone.utc
        )
        self.log = WorkoutLogService(self.store, self.editor, clock=self.clock)
        self.stats = StatisticsService()

    def _draft(self, date: str, name: str, exercise: str, sets):
        draft = self.editor.new_draft(date)
        draft = self.editor.set_workout_name(draft, name)
        ex_id = draft.exercises[0].id
        draft = self.editor.rename_exercise(draft, ex_id, exercise)
        for i, (reps, weight) in enumerate(sets):
            if i > 0:
                draft = self.editor.add_set(draft, ex_id)
            draft = self.editor.update_set(draft, ex_id, i, "reps", reps)
            draft = self.editor.update_set(draft, ex_id, i, "weight", weight)
        return draft

    def test_push_day_scenario(self) -> None:
        self.assertEqual(self.log.workouts, [])
        draft = self._draft("2024-01-01", "Push Day", "Bench Press", [(10, 40), (8, 45)])
        workout = self.log.commit(draft)

        self.assertEqual(workout.workout_name, "Push Day")
        self.assertEqual(workout.created_at, "2024-01-01T09:30:00.000Z")
        self.assertEqual(self.stats.workout_volume(workout), 760)
        self.assertEqual(self.stats.workout_reps(workout), 18)
        self.assertEqual(len(self.log.history()), 1)
        self.assertEqual(
            self.stats.time_series(self.log.workouts),
            [{"date": "Jan 1", "volume": 760, "reps": 18}],
        )
        self.assertEqual(
            self.stats.top_exercises_by_volume(self.log.workouts),
            [{"exercise": "Bench Press", "volume": 760, "reps": 18}],
        )
        self.assertEqual([w.id for w in self.store.load()], [workout.id])

    def test_commit_trims_workout_name(self) -> None:
        draft = self._draft("2024-01-01", "  Legs ", "Squat", [(5, 100)])
        self.assertEqual(self.log.commit(draft).workout_name, "Legs")

    def test_blank_name_commit_is_rejected(self) -> None:
        existing = self.log.commit(self._draft("2024-01-01", "A", "Row", [(5, 5)]))
        before = self.kv.get(STORAGE_KEY)
        draft = self._draft("2024-01-02", "   ", "Squat", [(5, 100)])
        with self.assertRaises(DraftValidationError):
            self.log.commit(draft)
        self.assertEqual(self.kv.get(STORAGE_KEY), before)
        self.assertEqual([w.id for w in self.log.workouts], [existing.id])
        self.assertEqual(draft.workout_name, "   ")
        self.assertEqual(draft.exercises[0].name, "Squat")

    def test_blank_exercise_name_commit_is_rejected(self) -> None:
        draft = self._draft("2024-01-02", "Legs", " ", [(5, 100)])
        with self.assertRaises(DraftValidationError):
            self.log.commit(draft)
        self.assertIsNone(self.kv.get(STORAGE_KEY))

    def test_commit_prepends(self) -> None:
        first = self.log.commit(self._draft("2024-01-05", "A", "Row", [(5, 5)]))
        second = self.log.commit(self._draft("2024-01-01", "B", "Row", [(5, 5)]))
        self.assertEqual([w.id for w in self.log.workouts], [second.id, first.id])
        stored = json.loads(self.kv.get(STORAGE_KEY))
        self.assertEqual([w["id"] for w in stored], [second.id, first.id])
        self.assertEqual([w.id for w in self.log.history()], [first.id, second.id])

    def test_same_date_workouts_both_listed(self) -> None:
        a = self.log.commit(self._draft("2024-01-01", "AM", "Row", [(5, 5)]))
        b = self.log.commit(self._draft("2024-01-01", "PM", "Row", [(5, 5)]))
        ids = [w.id for w in self.log.history()]
        self.assertEqual(sorted(ids), sorted([a.id, b.id]))

    def test_delete(self) -> None:
        a = self.log.commit(self._draft("2024-01-01", "A", "Row", [(5, 5)]))
        b = self.log.commit(self._draft("2024-01-02", "B", "Row", [(5, 5)]))
        self.log.delete(a.id)
        self.assertEqual([w.id for w in self.log.workouts], [b.id])
        self.assertEqual([w.id for w in self.store.load()], [b.id])
        self.log.delete("missing")
        self.assertEqual([w.id for w in self.store.load()], [b.id])

    def test_loads_existing_collection(self) -> None:
        self.log.commit(self._draft("2024-01-01", "A", "Row", [(5, 5)]))
        reopened = WorkoutLogService(self.store)
        self.assertEqual(len(reopened.workouts), 1)

    def test_corrupt_store_starts_empty(self) -> None:
        self.kv.set(STORAGE_KEY, "{oops")
        log = WorkoutLogService(self.store)
        self.assertEqual(log.workouts, [])


if __name__ == "__main__":
    unittest.main()
