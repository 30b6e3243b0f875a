import argparse
import datetime
import logging
import os

from config import YamlConfig
from db import KeyValueStore, WorkoutStore
from draft_service import DraftEditor
from log_service import WorkoutLogService
from stats_service import StatisticsService


def _open_log(db_path: str, yaml_path: str) -> tuple[WorkoutLogService, StatisticsService]:
    settings = YamlConfig(yaml_path).settings()
    store = WorkoutStore(KeyValueStore(db_path), key=settings.storage_key)
    editor = DraftEditor(
        default_reps=settings.default_reps, default_weight=settings.default_weight
    )
    stats = StatisticsService(top_limit=settings.top_exercise_limit)
    return WorkoutLogService(store, editor), stats


def demo_data(db_path: str, yaml_path: str) -> None:
    """Populate the log with a demo workout if empty."""
    log, _stats = _open_log(db_path, yaml_path)
    if log.workouts:
        print("Log already contains workouts")
        return
    editor = log.editor
    draft = editor.new_draft(datetime.date.today().isoformat())
    draft = editor.set_workout_name(draft, "Demo session")
    ex_id = draft.exercises[0].id
    draft = editor.rename_exercise(draft, ex_id, "Bench Press")
    draft = editor.update_set(draft, ex_id, 0, "reps", 10)
    draft = editor.update_set(draft, ex_id, 0, "weight", 40.0)
    draft = editor.add_set(draft, ex_id)
    draft = editor.update_set(draft, ex_id, 1, "reps", 8)
    draft = editor.update_set(draft, ex_id, 1, "weight", 45.0)
    log.commit(draft)
    print("Demo data inserted")


def summary(db_path: str, yaml_path: str, limit: int | None = None) -> None:
    log, stats = _open_log(db_path, yaml_path)
    totals = stats.overview(log.workouts)
    print(f"Workouts: {totals['workouts']}")
    print(f"Total volume: {totals['volume']:g}")
    print(f"Total reps: {totals['reps']}")
    for row in stats.top_exercises_by_volume(log.workouts, limit):
        print(f"{row['exercise']}: {row['volume']:g} volume, {row['reps']} reps")


def history(db_path: str, yaml_path: str) -> None:
    log, stats = _open_log(db_path, yaml_path)
    for w in log.history():
        print(
            f"{w.date}  {w.workout_name}  "
            f"volume={stats.workout_volume(w):g} reps={stats.workout_reps(w)}"
        )


def main() -> None:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
    db_default = os.environ.get("DB_PATH", "workout.db")
    yaml_default = os.environ.get("YAML_PATH", "settings.yaml")
    parser = argparse.ArgumentParser(description="Utility commands")
    sub = parser.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo")
    demo.add_argument("--db", default=db_default)
    demo.add_argument("--yaml", default=yaml_default)

    summ = sub.add_parser("summary")
    summ.add_argument("--db", default=db_default)
    summ.add_argument("--yaml", default=yaml_default)
    summ.add_argument("--limit", type=int, default=None)

    hist = sub.add_parser("history")
    hist.add_argument("--db", default=db_default)
    hist.add_argument("--yaml", default=yaml_default)

    args = parser.parse_args()

    if args.cmd == "demo":
        demo_data(args.db, args.yaml)
    elif args.cmd == "summary":
        summary(args.db, args.yaml, args.limit)
    elif args.cmd == "history":
        history(args.db, args.yaml)


if __name__ == "__main__":
    main()
