import datetime
import logging
import os
import warnings
from typing import Optional

import pandas as pd
import streamlit as st
import altair as alt
from altair.utils.deprecation import AltairDeprecationWarning

warnings.filterwarnings("ignore", category=AltairDeprecationWarning)
from config import YamlConfig
from db import KeyValueStore, WorkoutStore
from draft_service import Draft, DraftEditor, DraftValidationError, coerce_number
from localization import translator
from log_service import WorkoutLogService
from stats_service import StatisticsService

t = translator.gettext


class GymApp:
    """Streamlit application for workout logging."""

    def __init__(
        self, db_path: str = "workout.db", yaml_path: str = "settings.yaml"
    ) -> None:
        self.settings = YamlConfig(yaml_path).settings()
        translator.set_language(self.settings.language)
        self.weight_unit = self.settings.weight_unit
        self.editor = DraftEditor(
            default_reps=self.settings.default_reps,
            default_weight=self.settings.default_weight,
        )
        self.stats = StatisticsService(top_limit=self.settings.top_exercise_limit)
        session_key = f"workout_log:{db_path}:{self.settings.storage_key}"
        if session_key not in st.session_state:
            store = WorkoutStore(KeyValueStore(db_path), key=self.settings.storage_key)
            st.session_state[session_key] = WorkoutLogService(store, self.editor)
        self.log: WorkoutLogService = st.session_state[session_key]
        if "draft" not in st.session_state:
            st.session_state.draft = self.editor.new_draft()

    @property
    def draft(self) -> Draft:
        return st.session_state.draft

    @draft.setter
    def draft(self, value: Draft) -> None:
        st.session_state.draft = value

    @staticmethod
    def _to_date(value: str) -> datetime.date:
        try:
            return datetime.date.fromisoformat(value)
        except ValueError:
            return datetime.date.today()

    @staticmethod
    def _clear_widgets(prefix: str) -> None:
        for key in [k for k in st.session_state.keys() if str(k).startswith(prefix)]:
            del st.session_state[key]

    def _reset_draft(self) -> None:
        self.draft = self.editor.new_draft()
        self._clear_widgets("log_")

    def run(self) -> None:
        st.caption("Gym Tracker")
        st.title("Sets & Reps Log")
        log_tab, history_tab, analytics_tab = st.tabs(
            [t("Log"), t("History"), t("Analytics")]
        )
        with log_tab:
            self._log_tab()
        with history_tab:
            self._history_tab()
        with analytics_tab:
            self._analytics_tab()

    def _log_tab(self) -> None:
        st.header(t("New Workout Session"))
        draft = self.draft
        cols = st.columns(2)
        with cols[0]:
            day = st.date_input(
                t("Date"), value=self._to_date(draft.date), key="log_date"
            )
        with cols[1]:
            name = st.text_input(
                t("Workout Name"),
                value=draft.workout_name,
                placeholder="Push Day / Legs / Pull",
                key="log_workout_name",
            )
        draft = self.editor.set_date(draft, day.isoformat())
        draft = self.editor.set_workout_name(draft, name)

        action: Optional[tuple] = None
        for idx, ex in enumerate(draft.exercises):
            prefix = f"log_set_{ex.id}_"
            with st.container(border=True):
                head = st.columns([4, 1])
                head[0].subheader(f"Exercise {idx + 1}")
                if head[1].button(t("Remove"), key=f"log_rm_ex_{ex.id}"):
                    action = ("remove_exercise", ex.id)
                ex_name = st.text_input(
                    "Exercise Name",
                    value=ex.name,
                    placeholder="e.g. Barbell Squat",
                    key=f"log_ex_name_{ex.id}",
                )
                draft = self.editor.rename_exercise(draft, ex.id, ex_name)
                for i, s in enumerate(ex.sets):
                    row = st.columns([1, 3, 3, 1])
                    row[0].write(str(i + 1))
                    reps = row[1].number_input(
                        "Reps",
                        min_value=0,
                        step=1,
                        value=int(s.reps),
                        key=f"{prefix}reps_{i}",
                    )
                    weight = row[2].number_input(
                        f"Weight ({self.weight_unit})",
                        min_value=0.0,
                        step=0.5,
                        value=float(s.weight),
                        key=f"{prefix}weight_{i}",
                    )
                    draft = self.editor.update_set(
                        draft, ex.id, i, "reps", coerce_number(reps, s.reps)
                    )
                    draft = self.editor.update_set(
                        draft, ex.id, i, "weight", coerce_number(weight, s.weight)
                    )
                    if row[3].button("✕", key=f"log_rm_set_{ex.id}_{i}"):
                        action = ("remove_set", ex.id, i)
                if st.button(t("+ Add Set"), key=f"log_add_set_{ex.id}"):
                    action = ("add_set", ex.id)

        actions = st.columns(2)
        if actions[0].button(t("+ Add Exercise"), key="add_exercise"):
            action = ("add_exercise",)
        save = actions[1].button(t("Save Workout"), type="primary", key="save_workout")
        self.draft = draft

        if action is not None:
            self._apply_action(action)
            st.rerun()
        if save:
            try:
                self.log.commit(draft)
            except DraftValidationError as e:
                st.error(str(e))
            else:
                self._reset_draft()
                st.rerun()

    def _apply_action(self, action: tuple) -> None:
        name, *args = action
        draft = self.draft
        if name == "add_exercise":
            draft = self.editor.add_exercise(draft)
        elif name == "remove_exercise":
            draft = self.editor.remove_exercise(draft, *args)
        elif name == "add_set":
            draft = self.editor.add_set(draft, *args)
        elif name == "remove_set":
            exercise_id, index = args
            draft = self.editor.remove_set(draft, exercise_id, index)
            self._clear_widgets(f"log_set_{exercise_id}_")
        self.draft = draft

    def _history_tab(self) -> None:
        st.header(t("Workout History"))
        history = self.log.history()
        if not history:
            st.write(t("No workouts logged yet."))
            return
        for workout in history:
            with st.container(border=True):
                head = st.columns([4, 1])
                head[0].subheader(workout.workout_name)
                head[0].caption(self.stats.history_date(workout.date))
                if head[1].button(t("Delete"), key=f"hist_del_{workout.id}"):
                    self.log.delete(workout.id)
                    st.rerun()
                for ex in workout.exercises:
                    st.markdown(f"**{ex.name}**")
                    lines = [
                        f"- Set {i + 1}: {s.reps} reps × {s.weight:g} {self.weight_unit}"
                        for i, s in enumerate(ex.sets)
                    ]
                    st.markdown("\n".join(lines))

    def _metric_grid(self, metrics: list[tuple[str, str]]) -> None:
        cols = st.columns(len(metrics))
        for col, (label, val) in zip(cols, metrics):
            col.metric(label, val)

    def _chart(
        self,
        rows: list[dict],
        x: str,
        series: dict[str, str],
        *,
        mark: str,
        hide_x: bool = False,
    ) -> None:
        """Render ``series`` columns of ``rows`` against ``x`` as one chart."""
        df = pd.DataFrame(rows).rename(columns=series)
        df["order"] = range(len(df))
        long_df = df.melt(
            id_vars=[x, "order"],
            value_vars=list(series.values()),
            var_name="series",
            value_name="value",
        )
        x_axis = alt.Axis(labels=False, ticks=False) if hide_x else alt.Axis()
        chart = alt.Chart(long_df)
        chart = chart.mark_line(point=True) if mark == "line" else chart.mark_bar()
        encoding = {
            "x": alt.X(
                f"{x}:N",
                sort=alt.EncodingSortField(field="order", op="min"),
                title=None,
                axis=x_axis,
            ),
            "y": alt.Y("value:Q", title=None),
            "color": alt.Color(
                "series:N",
                scale=alt.Scale(range=["#0ea5e9", "#22c55e"]),
                legend=alt.Legend(title=None),
            ),
            "tooltip": [f"{x}:N", "series:N", "value:Q"],
        }
        if mark == "bar":
            encoding["xOffset"] = "series:N"
        st.altair_chart(chart.encode(**encoding), use_container_width=True)

    def _analytics_tab(self) -> None:
        st.header(t("Progress Dashboard"))
        workouts = self.log.workouts
        if len(workouts) < 1:
            st.write(t("Log workouts to see analytics."))
            return
        summary = self.stats.overview(workouts)
        self._metric_grid(
            [
                ("Workouts", str(summary["workouts"])),
                (f"Volume ({self.weight_unit})", f"{summary['volume']:g}"),
                ("Reps", str(summary["reps"])),
                ("Exercises", str(summary["exercises"])),
            ]
        )
        st.subheader(t("Total Volume Over Time"))
        self._chart(
            self.stats.time_series(workouts),
            "date",
            {"volume": "Volume", "reps": "Total Reps"},
            mark="line",
        )
        st.subheader(t("Top Exercises by Volume"))
        bars = self.stats.top_exercises_by_volume(workouts)
        self._chart(
            bars,
            "exercise",
            {"volume": "Volume", "reps": "Reps"},
            mark="bar",
            hide_x=len(bars) > 6,
        )


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
    db_path = os.environ.get("DB_PATH", "workout.db")
    yaml_path = os.environ.get("YAML_PATH", "settings.yaml")
    GymApp(db_path=db_path, yaml_path=yaml_path).run()
