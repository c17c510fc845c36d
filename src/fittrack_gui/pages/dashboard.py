"""
Pages available to a logged-in user.

Dashboard holds the behavior shared by those pages: the user header and
logout. WorkoutLogPage lets a client log workouts and body metrics;
TrainerPanelPage lets a trainer create and delete client plans.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from fittrack_core.api_client import ApiResult
from fittrack_core.threading import RequestController
from fittrack_gui.app_context import AppContext
from fittrack_gui.forms import METRIC, PLAN, WORKOUT, FormOrchestrator
from fittrack_gui.forms.orchestrator import RequestFunction
from fittrack_gui.navigation import Route
from fittrack_gui.widgets.form_view import FormView

LOGGED_OUT_MESSAGE = "You have been logged out"

Formatter = Callable[[dict[str, Any]], str]


class Dashboard(QObject):
    """Logged-in user display and logout."""

    def __init__(self, context: AppContext, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self.context = context

    @property
    def user(self) -> dict[str, Any] | None:
        return self.context.current_user

    def display_name(self) -> str:
        user = self.user or {}
        return f"👤 {user.get('fullname', '')}"

    def logout(self) -> None:
        """Forget the stored user and return to the landing page after the redirect delay."""
        self._logger.info("Logging out")
        self.context.logout()
        self.context.toasts.info(LOGGED_OUT_MESSAGE)
        self.context.navigator.navigate_later(Route.HOME, self.context.redirect_delay_ms)


class UserHeader(QWidget):
    """Top bar with the user's name and a logout button."""

    def __init__(self, dashboard: Dashboard, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.dashboard = dashboard
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.name_label = QLabel()
        self.name_label.setObjectName("user-name-display")
        self.logout_button = QPushButton("Logout")
        self.logout_button.setObjectName("logout-btn")
        self.logout_button.clicked.connect(dashboard.logout)

        layout.addStretch(1)
        layout.addWidget(self.name_label)
        layout.addWidget(self.logout_button)

    def refresh(self) -> None:
        self.name_label.setText(self.dashboard.display_name())
        if self.dashboard.user:
            self.name_label.setToolTip(str(self.dashboard.user.get("fullname", "")))


def _records(data: Any, key: str) -> list[dict[str, Any]]:
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    if isinstance(data, dict) and isinstance(data.get(key), list):
        return [item for item in data[key] if isinstance(item, dict)]
    return []


def format_workout(workout: dict[str, Any]) -> str:
    text = (
        f"{workout.get('date', '')}  {workout.get('type', '')}: "
        f"{workout.get('duration', '')} min, {workout.get('calories', '')} kcal"
    )
    if workout.get("notes"):
        text += f" ({workout['notes']})"
    return text


def format_metric(metric: dict[str, Any]) -> str:
    text = f"{metric.get('date', '')}  Weight {metric.get('weight', '')} kg, BMI {metric.get('bmi', '')}"
    if metric.get("fat") is not None:
        text += f", Body fat {metric['fat']}%"
    return text


def format_plan(plan: dict[str, Any]) -> str:
    return f"{plan.get('client', '')}: {plan.get('plan', '')}"


class RecordList(QWidget):
    """
    List of records fetched from the backend for the current user.

    Signals:
        loaded(int): Number of records shown after a refresh
    """

    loaded = Signal(int)

    def __init__(
        self,
        title: str,
        key: str,
        formatter: Formatter,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._key = key
        self._formatter = formatter
        self.records: list[dict[str, Any]] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        heading = QLabel(title)
        heading.setStyleSheet("font-weight: bold;")
        self.status_label = QLabel()
        self.list_widget = QListWidget()
        layout.addWidget(heading)
        layout.addWidget(self.status_label)
        layout.addWidget(self.list_widget)

        self._controller = RequestController(self)
        self._controller.requestCompleted.connect(self._on_loaded)
        self._controller.requestError.connect(self._on_error)

    def refresh(self, fetch: Callable[[], ApiResult]) -> bool:
        """
        Fetch the records again on a worker thread.

        ``fetch`` must not hold on to a widget; the worker keeps it until the
        worker is deleted.

        Returns:
            False if a fetch is already running
        """
        self.status_label.setText("Loading...")
        return self._controller.start(fetch, label=f"fetch-{self._key}")

    def _on_loaded(self, result: ApiResult) -> None:
        if not result.success:
            self._logger.warning(f"Could not load {self._key}: {result.error}")
            self.status_label.setText(result.error or f"Could not load {self._key}")
            return
        self.set_records(_records(result.data, self._key))

    def _on_error(self, error_type: str, message: str) -> None:
        self._logger.error(f"Loading {self._key} raised {error_type}: {message}")
        self.status_label.setText(f"Could not load {self._key}")

    def set_records(self, records: list[dict[str, Any]]) -> None:
        self.records = records
        self.list_widget.clear()
        for record in records:
            item = QListWidgetItem(self._formatter(record))
            item.setData(Qt.ItemDataRole.UserRole, record)
            self.list_widget.addItem(item)
        self.status_label.setText("" if records else f"No {self._key} yet")
        self.loaded.emit(len(records))

    def selected_record(self) -> dict[str, Any] | None:
        item = self.list_widget.currentItem()
        return item.data(Qt.ItemDataRole.UserRole) if item is not None else None

    def shutdown(self) -> None:
        self._controller.shutdown()


class WorkoutLogPage(QWidget):
    """Workout and metric forms with the user's history."""

    def __init__(
        self,
        context: AppContext,
        request: RequestFunction | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.context = context
        self.dashboard = Dashboard(context, self)

        self.workout_form = FormOrchestrator(WORKOUT, context, request=request, parent=self)
        self.metric_form = FormOrchestrator(METRIC, context, request=request, parent=self)

        layout = QVBoxLayout(self)
        self.header = UserHeader(self.dashboard, self)
        layout.addWidget(self.header)

        columns = QHBoxLayout()
        forms_column = QVBoxLayout()
        forms_column.addWidget(QLabel("Log a Workout"))
        self.workout_view = FormView(self.workout_form, "Log Workout", self)
        forms_column.addWidget(self.workout_view)
        forms_column.addWidget(QLabel("Track Your Metrics"))
        self.metric_view = FormView(self.metric_form, "Save Metrics", self)
        forms_column.addWidget(self.metric_view)
        columns.addLayout(forms_column, 1)

        lists_column = QVBoxLayout()
        self.workout_list = RecordList("Recent Workouts", "workouts", format_workout, self)
        self.metric_list = RecordList("Metrics History", "metrics", format_metric, self)
        lists_column.addWidget(self.workout_list)
        lists_column.addWidget(self.metric_list)
        columns.addLayout(lists_column, 1)
        layout.addLayout(columns)

        self.workout_form.submissionSucceeded.connect(self.refresh_workouts)
        self.metric_form.submissionSucceeded.connect(self.refresh_metrics)

    def _email(self) -> str:
        return str((self.context.current_user or {}).get("email", ""))

    def refresh_workouts(self, _data: object = None) -> bool:
        get_workouts, email = self.context.api.get_workouts, self._email()
        return self.workout_list.refresh(lambda: get_workouts(email))

    def refresh_metrics(self, _data: object = None) -> bool:
        get_metrics, email = self.context.api.get_metrics, self._email()
        return self.metric_list.refresh(lambda: get_metrics(email))

    def on_enter(self) -> None:
        self.header.refresh()
        if self.context.current_user:
            self.refresh_workouts()
            self.refresh_metrics()

    def shutdown(self) -> None:
        for part in (self.workout_form, self.metric_form, self.workout_list, self.metric_list):
            part.shutdown()


class TrainerPanelPage(QWidget):
    """Plan form and the trainer's plans, with delete."""

    def __init__(
        self,
        context: AppContext,
        request: RequestFunction | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self.context = context
        self.dashboard = Dashboard(context, self)
        self.plan_form = FormOrchestrator(PLAN, context, request=request, parent=self)

        layout = QVBoxLayout(self)
        self.header = UserHeader(self.dashboard, self)
        layout.addWidget(self.header)
        layout.addWidget(QLabel("Create a Plan"))
        self.plan_view = FormView(self.plan_form, "Create Plan", self)
        layout.addWidget(self.plan_view)

        self.plan_list = RecordList("Your Plans", "plans", format_plan, self)
        layout.addWidget(self.plan_list)
        self.delete_button = QPushButton("Delete Selected Plan")
        self.delete_button.clicked.connect(self.delete_selected)
        layout.addWidget(self.delete_button)

        self._delete_controller = RequestController(self)
        self._delete_controller.requestCompleted.connect(self._on_deleted)
        self._delete_controller.requestError.connect(self._on_delete_error)
        self._delete_controller.requestFinished.connect(self._on_delete_finished)

        self.plan_form.submissionSucceeded.connect(self.refresh_plans)

    def refresh_plans(self, _data: object = None) -> bool:
        get_plans = self.context.api.get_plans
        email = str((self.context.current_user or {}).get("email", ""))
        return self.plan_list.refresh(lambda: get_plans(email))

    def delete_selected(self) -> bool:
        """Delete the selected plan. Returns False if nothing is selected or a delete is running."""
        plan = self.plan_list.selected_record()
        plan_id = (plan or {}).get("_id") or (plan or {}).get("id")
        if not plan_id:
            self.context.toasts.warning("Select a plan to delete")
            return False

        self.delete_button.setEnabled(False)
        delete_plan, target = self.context.api.delete_plan, str(plan_id)
        started = self._delete_controller.start(lambda: delete_plan(target), label="delete-plan")
        if not started:
            self.delete_button.setEnabled(True)
        return started

    def _on_deleted(self, result: ApiResult) -> None:
        if result.success:
            self.context.toasts.success("Plan deleted")
            self.refresh_plans()
        else:
            self.context.toasts.error(result.error or "Failed to delete plan")

    def _on_delete_finished(self) -> None:
        self.delete_button.setEnabled(True)

    def _on_delete_error(self, error_type: str, message: str) -> None:
        self._logger.error(f"Deleting plan raised {error_type}: {message}")
        self.context.toasts.error("An unexpected error occurred")

    def on_enter(self) -> None:
        self.header.refresh()
        if self.context.current_user:
            self.refresh_plans()

    def shutdown(self) -> None:
        self.plan_form.shutdown()
        self.plan_list.shutdown()
        self._delete_controller.shutdown()
