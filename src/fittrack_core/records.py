"""
JSON schemas for the records the FitTrack backend stores.

The backend keeps four collections (users, workouts, metrics, plans) and
rejects documents that do not match these shapes. Checking payloads here
lets the client report a bad payload without a round trip.
"""

import logging
from typing import Any

import jsonschema

logger = logging.getLogger(__name__)

ROLES = ("client", "trainer")

USER_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "User",
    "type": "object",
    "required": ["fullname", "email", "password", "role"],
    "properties": {
        "fullname": {"type": "string", "description": "Full name is required and must be a string"},
        "email": {
            "type": "string",
            "pattern": r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$",
            "description": "Valid email address is required",
        },
        "password": {"type": "string", "minLength": 6, "description": "Password must be at least 6 characters"},
        "role": {"enum": list(ROLES), "description": "Role must be either client or trainer"},
        "goal": {"type": "string", "description": "Fitness goal for clients"},
        "specialization": {"type": "string", "description": "Specialization for trainers"},
        "experience": {"type": "string", "description": "Experience level for trainers"},
        "certification": {"type": "string", "description": "Certification for trainers"},
    },
}

WORKOUT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Workout",
    "type": "object",
    "required": ["email", "type", "duration", "calories", "date"],
    "properties": {
        "email": {"type": "string", "description": "User email is required"},
        "type": {"type": "string", "description": "Workout type is required"},
        "duration": {"type": "number", "minimum": 1, "description": "Duration must be a positive number"},
        "calories": {"type": "number", "minimum": 0, "description": "Calories must be a non-negative number"},
        "date": {"type": "string", "description": "Date is required"},
        "notes": {"type": "string", "description": "Optional workout notes"},
    },
}

METRIC_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Metric",
    "type": "object",
    "required": ["email", "date", "weight", "bmi"],
    "properties": {
        "email": {"type": "string", "description": "User email is required"},
        "date": {"type": "string", "description": "Date is required"},
        "weight": {"type": "number", "minimum": 0, "description": "Weight must be a positive number"},
        "bmi": {"type": "number", "minimum": 0, "description": "BMI must be a positive number"},
        "fat": {"type": "number", "minimum": 0, "maximum": 100, "description": "Body fat percentage between 0-100"},
    },
}

PLAN_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Plan",
    "type": "object",
    "required": ["trainer", "client", "plan"],
    "properties": {
        "trainer": {"type": "string", "description": "Trainer email is required"},
        "client": {"type": "string", "description": "Client email is required"},
        "plan": {"type": "string", "description": "Plan description is required"},
    },
}

RECORD_SCHEMAS: dict[str, dict[str, Any]] = {
    "user": USER_SCHEMA,
    "workout": WORKOUT_SCHEMA,
    "metric": METRIC_SCHEMA,
    "plan": PLAN_SCHEMA,
}

# String formats are left to the form rules and the backend
FORMAT_KEYWORDS = ("pattern", "minLength")


def structural_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Copy of a record schema without its string format constraints."""
    properties = {
        name: {keyword: value for keyword, value in prop.items() if keyword not in FORMAT_KEYWORDS}
        for name, prop in schema["properties"].items()
    }
    return {**schema, "properties": properties}


STRUCTURAL_SCHEMAS: dict[str, dict[str, Any]] = {kind: structural_schema(s) for kind, s in RECORD_SCHEMAS.items()}


class RecordValidationError(Exception):
    """Raised when a payload does not match its record schema."""

    def __init__(self, kind: str, message: str, path: str = ""):
        self.kind = kind
        self.message = message
        self.path = path
        super().__init__(f"Invalid {kind} record at '{path}': {message}" if path else f"Invalid {kind} record: {message}")


def validate_record(kind: str, data: dict[str, Any], structure_only: bool = False) -> None:
    """
    Validate a payload against the schema of a record kind.

    Args:
        kind: One of "user", "workout", "metric", "plan"
        data: Payload to check
        structure_only: Check keys, types, enums and numeric ranges but not
            string formats such as the email pattern

    Raises:
        KeyError: If the record kind is unknown
        RecordValidationError: If the payload does not match the schema
    """
    schema = (STRUCTURAL_SCHEMAS if structure_only else RECORD_SCHEMAS)[kind]
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(part) for part in e.absolute_path)
        message = e.schema.get("description", e.message) if isinstance(e.schema, dict) else e.message
        logger.debug(f"{kind} payload rejected at '{path}': {e.message}")
        raise RecordValidationError(kind, message, path) from e
