"""
Static form declarations.

Each FormDefinition lists a form's fields with their rule sets, the endpoint its
submission goes to and how the submission payload is assembled. The rule
sets never change at runtime.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fittrack_gui.validation.field import FieldKind, FormField, FormModel

GOAL_OPTIONS = ("", "Weight Loss", "Muscle Gain", "Endurance", "Flexibility", "General Fitness")
SPECIALIZATION_OPTIONS = ("", "Weight Training", "Cardio", "Yoga", "CrossFit", "Nutrition", "Rehabilitation")
EXPERIENCE_OPTIONS = ("", "Beginner", "Intermediate", "Advanced", "Expert")
ROLE_OPTIONS = ("", "client", "trainer")
WORKOUT_TYPE_OPTIONS = ("", "Running", "Cycling", "Swimming", "Strength Training", "Yoga", "HIIT", "Walking", "Other")

PayloadBuilder = Callable[[dict[str, str], dict[str, Any] | None], dict[str, Any]]


@dataclass(frozen=True)
class FormDefinition:
    """Everything the orchestrator needs to know about one form variant."""

    name: str
    fields: Callable[[], list[FormField]]
    endpoint: str
    build_payload: PayloadBuilder
    role: str | None = None
    success_message: str = "Saved successfully"
    failure_message: str = "Request failed"
    invalid_message: str = "Please fix the errors in the form"
    live_validation: bool = True
    reset_on_success: bool = True
    show_success_modal: bool = False
    requires_user: bool = False
    stores_user: bool = False

    def create_model(self) -> FormModel:
        return FormModel(self.name, self.fields())


@dataclass
class FormSubmission:
    """Payload assembled at submit time and handed whole to the request collaborator."""

    endpoint: str
    payload: dict[str, Any]
    role: str | None = None


def _number(value: str) -> int | float:
    number = float(value.strip())
    return int(number) if number.is_integer() else number


def _user_email(user: dict[str, Any] | None) -> str:
    if not user or not user.get("email"):
        raise ValueError("No logged-in user")
    return str(user["email"])


def _registration_fields(prefix: str) -> list[FormField]:
    return [
        FormField(f"{prefix}-fullname", rules=("required", "minLength:2"), placeholder="Enter your full name"),
        FormField(f"{prefix}-email", FieldKind.EMAIL, rules=("required", "email"), placeholder="Enter your email"),
        FormField(
            f"{prefix}-password",
            FieldKind.PASSWORD,
            rules=("required", "password"),
            placeholder="Create a password",
        ),
        FormField(
            f"{prefix}-confirm-password",
            FieldKind.PASSWORD,
            rules=("required", "confirmPassword"),
            reference_key=f"{prefix}-password",
            placeholder="Confirm your password",
        ),
    ]


def client_fields() -> list[FormField]:
    return [
        *_registration_fields("client"),
        FormField("client-goal", FieldKind.SELECT, rules=("required",), options=GOAL_OPTIONS),
    ]


def trainer_fields() -> list[FormField]:
    return [
        *_registration_fields("trainer"),
        FormField("trainer-specialization", FieldKind.SELECT, rules=("required",), options=SPECIALIZATION_OPTIONS),
        FormField("trainer-experience", FieldKind.SELECT, rules=("required",), options=EXPERIENCE_OPTIONS),
        FormField("trainer-certification", placeholder="e.g. NASM-CPT (optional)"),
    ]


def login_fields() -> list[FormField]:
    return [
        FormField("email-login", FieldKind.EMAIL, rules=("required", "email"), placeholder="Enter your email"),
        FormField("password-login", FieldKind.PASSWORD, rules=("required",), placeholder="Enter your password"),
        FormField("role-login", FieldKind.SELECT, rules=("required",), options=ROLE_OPTIONS),
    ]


def workout_fields() -> list[FormField]:
    return [
        FormField("workout-type", FieldKind.SELECT, rules=("required",), label="Workout Type", options=WORKOUT_TYPE_OPTIONS),
        FormField(
            "workout-duration",
            FieldKind.NUMBER,
            rules=("required", "number", "min:1"),
            label="Duration (minutes)",
        ),
        FormField("workout-calories", FieldKind.NUMBER, rules=("required", "number", "min:0"), label="Calories Burned"),
        FormField("workout-date", FieldKind.DATE, rules=("required", "date"), label="Date", placeholder="YYYY-MM-DD"),
        FormField("workout-notes", FieldKind.TEXTAREA, label="Notes"),
    ]


def metric_fields() -> list[FormField]:
    return [
        FormField("metric-date", FieldKind.DATE, rules=("required", "date"), label="Date", placeholder="YYYY-MM-DD"),
        FormField("metric-weight", FieldKind.NUMBER, rules=("required", "number", "min:0"), label="Weight (kg)"),
        FormField("metric-bmi", FieldKind.NUMBER, rules=("required", "number", "min:0"), label="BMI"),
        FormField("metric-fat", FieldKind.NUMBER, rules=("number", "min:0", "max:100"), label="Body Fat (%)"),
    ]


def plan_fields() -> list[FormField]:
    return [
        FormField("plan-client", FieldKind.EMAIL, rules=("required", "email"), label="Client Email"),
        FormField("plan-text", FieldKind.TEXTAREA, rules=("required", "minLength:10"), label="Plan"),
    ]


def build_client_payload(values: dict[str, str], user: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "fullname": values["client-fullname"].strip(),
        "email": values["client-email"].strip().lower(),
        "password": values["client-password"],
        "goal": values["client-goal"],
        "role": "client",
    }


def build_trainer_payload(values: dict[str, str], user: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "fullname": values["trainer-fullname"].strip(),
        "email": values["trainer-email"].strip().lower(),
        "password": values["trainer-password"],
        "specialization": values["trainer-specialization"],
        "experience": values["trainer-experience"],
        "certification": values.get("trainer-certification") or "",
        "role": "trainer",
    }


def build_login_payload(values: dict[str, str], user: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "email": values["email-login"].strip(),
        "password": values["password-login"],
        "role": values["role-login"],
    }


def build_workout_payload(values: dict[str, str], user: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "email": _user_email(user),
        "type": values["workout-type"],
        "duration": _number(values["workout-duration"]),
        "calories": _number(values["workout-calories"]),
        "date": values["workout-date"].strip(),
    }
    if values.get("workout-notes", "").strip():
        payload["notes"] = values["workout-notes"].strip()
    return payload


def build_metric_payload(values: dict[str, str], user: dict[str, Any] | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "email": _user_email(user),
        "date": values["metric-date"].strip(),
        "weight": _number(values["metric-weight"]),
        "bmi": _number(values["metric-bmi"]),
    }
    if values.get("metric-fat", "").strip():
        payload["fat"] = _number(values["metric-fat"])
    return payload


def build_plan_payload(values: dict[str, str], user: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "trainer": _user_email(user),
        "client": values["plan-client"].strip().lower(),
        "plan": values["plan-text"].strip(),
    }


CLIENT_REGISTRATION = FormDefinition(
    name="client-form",
    fields=client_fields,
    endpoint="/register",
    build_payload=build_client_payload,
    role="client",
    success_message="Account created successfully! Please log in.",
    failure_message="Registration failed",
    show_success_modal=True,
)

TRAINER_REGISTRATION = FormDefinition(
    name="trainer-form",
    fields=trainer_fields,
    endpoint="/register",
    build_payload=build_trainer_payload,
    role="trainer",
    success_message="Account created successfully! Please log in.",
    failure_message="Registration failed",
    show_success_modal=True,
)

LOGIN = FormDefinition(
    name="login-form",
    fields=login_fields,
    endpoint="/login",
    build_payload=build_login_payload,
    failure_message="Invalid credentials",
    invalid_message="Please fill in all fields correctly",
    live_validation=False,
    reset_on_success=False,
    stores_user=True,
)

WORKOUT = FormDefinition(
    name="workout-form",
    fields=workout_fields,
    endpoint="/log-workout",
    build_payload=build_workout_payload,
    success_message="Workout logged successfully!",
    failure_message="Failed to log workout",
    requires_user=True,
)

METRIC = FormDefinition(
    name="metric-form",
    fields=metric_fields,
    endpoint="/metrics",
    build_payload=build_metric_payload,
    success_message="Metrics saved successfully!",
    failure_message="Failed to save metrics",
    requires_user=True,
)

PLAN = FormDefinition(
    name="plan-form",
    fields=plan_fields,
    endpoint="/plans",
    build_payload=build_plan_payload,
    role="trainer",
    success_message="Plan created successfully!",
    failure_message="Failed to create plan",
    requires_user=True,
)
