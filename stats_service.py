from __future__ import annotations
import datetime
from typing import Dict, Iterable, List, Optional

from models import ExerciseEntry, Workout


class StatisticsService:
    """Compute workout statistics for analysis."""

    def __init__(self, top_limit: int = 10) -> None:
        self.top_limit = top_limit

    @staticmethod
    def _parse_date(value: str) -> Optional[datetime.date]:
        try:
            return datetime.date.fromisoformat(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def exercise_volume(exercise: ExerciseEntry) -> float:
        return sum((s.reps or 0) * (s.weight or 0) for s in exercise.sets)

    @staticmethod
    def exercise_reps(exercise: ExerciseEntry) -> int:
        return sum(s.reps or 0 for s in exercise.sets)

    @classmethod
    def workout_volume(cls, workout: Workout) -> float:
        """Return the sum of reps times weight over every set."""
        return sum(cls.exercise_volume(ex) for ex in workout.exercises)

    @classmethod
    def workout_reps(cls, workout: Workout) -> int:
        return sum(cls.exercise_reps(ex) for ex in workout.exercises)

    @staticmethod
    def sorted_by_date_descending(workouts: Iterable[Workout]) -> List[Workout]:
        # ISO dates order lexically; sorted() keeps stored order for equal dates
        return sorted(workouts, key=lambda w: w.date, reverse=True)

    @classmethod
    def display_date(cls, value: str) -> str:
        """Return ``value`` formatted like ``Jan 1``."""
        day = cls._parse_date(value)
        if day is None:
            return value
        return f"{day:%b} {day.day}"

    @classmethod
    def history_date(cls, value: str) -> str:
        """Return ``value`` formatted like ``Mon, Jan 1, 2024``."""
        day = cls._parse_date(value)
        if day is None:
            return value
        return f"{day:%a, %b} {day.day}, {day.year}"

    def time_series(self, workouts: Iterable[Workout]) -> List[Dict[str, float]]:
        """Return per-workout totals in chronological order."""
        ordered = self.sorted_by_date_descending(workouts)
        ordered.reverse()
        return [
            {
                "date": self.display_date(w.date),
                "volume": self.workout_volume(w),
                "reps": self.workout_reps(w),
            }
            for w in ordered
        ]

    def top_exercises_by_volume(
        self, workouts: Iterable[Workout], limit: Optional[int] = None
    ) -> List[Dict[str, float]]:
        """Rank exercises by lifetime volume.

        Names are grouped case-insensitively after trimming, keeping the
        first spelling seen for display. Blank names are skipped.
        """
        if limit is None:
            limit = self.top_limit
        groups: Dict[str, Dict[str, float]] = {}
        for workout in workouts:
            for ex in workout.exercises:
                name = ex.name.strip()
                key = name.lower()
                if not key:
                    continue
                group = groups.setdefault(
                    key, {"exercise": name, "volume": 0, "reps": 0}
                )
                group["volume"] += self.exercise_volume(ex)
                group["reps"] += self.exercise_reps(ex)
        ranked = sorted(groups.values(), key=lambda g: g["volume"], reverse=True)
        return ranked[:limit]

    def overview(self, workouts: Iterable[Workout]) -> Dict[str, float]:
        workouts = list(workouts)
        names = {
            ex.name.strip().lower()
            for w in workouts
            for ex in w.exercises
            if ex.name.strip()
        }
        return {
            "workouts": len(workouts),
            "volume": sum(self.workout_volume(w) for w in workouts),
            "reps": sum(self.workout_reps(w) for w in workouts),
            "exercises": len(names),
        }
