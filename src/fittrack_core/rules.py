"""
Validation rules for FitTrack Pro form fields.

Each rule is a pure function from a field value (and, for confirmPassword,
the value of the field it must match) to a RuleResult. Rules are declared
per field as strings such as ``"required"`` or ``"minLength:2"`` and parsed
into an immutable FieldRuleSet.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from .errors import ErrorCode

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
DIGIT_PATTERN = re.compile(r"[0-9]")
LETTER_PATTERN = re.compile(r"[a-zA-Z]")
ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

PASSWORD_MIN_LENGTH = 6

FRIENDLY_FIELD_NAMES: dict[str, str] = {
    "client-fullname": "Full Name",
    "client-email": "Email Address",
    "client-password": "Password",
    "client-confirm-password": "Confirm Password",
    "client-goal": "Fitness Goal",
    "trainer-fullname": "Full Name",
    "trainer-email": "Email Address",
    "trainer-password": "Password",
    "trainer-confirm-password": "Confirm Password",
    "trainer-specialization": "Specialization",
    "trainer-experience": "Years of Experience",
    "trainer-certification": "Certifications",
    "email-login": "Email Address",
    "password-login": "Password",
    "role-login": "Account Type",
    "fullname": "Full Name",
    "email": "Email Address",
    "password": "Password",
    "confirm-password": "Confirm Password",
    "goal": "Fitness Goal",
    "specialization": "Specialization",
    "experience": "Years of Experience",
}


def friendly_field_name(key: str) -> str:
    """Return the display name for a field key, title-casing unknown keys."""
    if key in FRIENDLY_FIELD_NAMES:
        return FRIENDLY_FIELD_NAMES[key]
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), key.replace("-", " "))


@dataclass(frozen=True)
class Rule:
    """A named constraint with an optional numeric argument."""

    name: str
    argument: float | None = None

    @classmethod
    def parse(cls, text: str) -> Rule:
        """
        Parse a rule from its ``name[:argument]`` form.

        Raises:
            ValueError: If the rule name is unknown or its argument is missing or malformed
        """
        name, _, raw_argument = text.partition(":")
        name = name.strip()
        if name not in RULES:
            raise ValueError(f"Unknown validation rule: {name!r}")

        if name in ARGUMENT_RULES:
            if not raw_argument:
                raise ValueError(f"Rule {name!r} requires an argument")
            try:
                argument = float(raw_argument)
            except ValueError as e:
                raise ValueError(f"Invalid argument for rule {name!r}: {raw_argument!r}") from e
            return cls(name, argument)

        if raw_argument:
            raise ValueError(f"Rule {name!r} does not take an argument")
        return cls(name)

    def __str__(self) -> str:
        if self.argument is None:
            return self.name
        return f"{self.name}:{_format_number(self.argument)}"


@dataclass(frozen=True)
class RuleResult:
    """Outcome of evaluating one rule against one value."""

    passed: bool
    message: str = ""
    code: ErrorCode | None = None

    @classmethod
    def ok(cls) -> RuleResult:
        return cls(True)

    @classmethod
    def fail(cls, message: str, code: ErrorCode = ErrorCode.INVALID_INPUT) -> RuleResult:
        return cls(False, message, code)


class FieldRuleSet(tuple[Rule, ...]):
    """Ordered, immutable collection of rules declared for one field."""

    def __new__(cls, rules: Iterable[Rule | str] = ()) -> FieldRuleSet:
        parsed = tuple(rule if isinstance(rule, Rule) else Rule.parse(rule) for rule in rules)
        return super().__new__(cls, parsed)

    @property
    def required(self) -> bool:
        return any(rule.name == "required" for rule in self)

    def without_required(self) -> tuple[Rule, ...]:
        return tuple(rule for rule in self if rule.name != "required")

    def names(self) -> list[str]:
        return [rule.name for rule in self]


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _parse_number(value: str) -> float | None:
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def check_required(value: str, field_label: str) -> RuleResult:
    if not value.strip():
        return RuleResult.fail(f"{field_label} is required", ErrorCode.REQUIRED_FIELD_MISSING)
    return RuleResult.ok()


def check_email(value: str) -> RuleResult:
    if EMAIL_PATTERN.fullmatch(value.strip()):
        return RuleResult.ok()
    return RuleResult.fail("Please enter a valid email address", ErrorCode.INVALID_FORMAT)


def password_strength(password: str) -> dict[str, bool]:
    """Report which password criteria the value meets."""
    min_length = len(password) >= PASSWORD_MIN_LENGTH
    has_number = bool(DIGIT_PATTERN.search(password))
    has_letter = bool(LETTER_PATTERN.search(password))
    return {
        "is_valid": min_length and has_number and has_letter,
        "min_length": min_length,
        "has_number": has_number,
        "has_letter": has_letter,
    }


def check_password(value: str) -> RuleResult:
    strength = password_strength(value.strip())
    if strength["is_valid"]:
        return RuleResult.ok()

    message = f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
    if not strength["has_number"]:
        message += " and contain a number"
    if not strength["has_letter"]:
        message += " and contain a letter"
    return RuleResult.fail(message, ErrorCode.WEAK_PASSWORD)


def check_confirm_password(value: str, reference: str | None) -> RuleResult:
    if reference is not None and value.strip() != reference:
        return RuleResult.fail("Passwords do not match", ErrorCode.PASSWORD_MISMATCH)
    return RuleResult.ok()


def check_min_length(value: str, minimum: float) -> RuleResult:
    if len(value.strip()) < minimum:
        return RuleResult.fail(f"Minimum {_format_number(minimum)} characters required", ErrorCode.VALUE_OUT_OF_RANGE)
    return RuleResult.ok()


def check_number(value: str) -> RuleResult:
    if _parse_number(value) is None:
        return RuleResult.fail("Please enter a valid number", ErrorCode.INVALID_FORMAT)
    return RuleResult.ok()


def check_min(value: str, minimum: float) -> RuleResult:
    number = _parse_number(value)
    if number is None:
        return check_number(value)
    if number < minimum:
        return RuleResult.fail(f"Value must be at least {_format_number(minimum)}", ErrorCode.VALUE_OUT_OF_RANGE)
    return RuleResult.ok()


def check_max(value: str, maximum: float) -> RuleResult:
    number = _parse_number(value)
    if number is None:
        return check_number(value)
    if number > maximum:
        return RuleResult.fail(f"Value must be at most {_format_number(maximum)}", ErrorCode.VALUE_OUT_OF_RANGE)
    return RuleResult.ok()


def check_date(value: str) -> RuleResult:
    text = value.strip()
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        parsed = None
    if parsed is None or not ISO_DATE_PATTERN.fullmatch(text):
        return RuleResult.fail("Please enter a valid date (YYYY-MM-DD)", ErrorCode.INVALID_FORMAT)
    return RuleResult.ok()


# name -> evaluator(value, rule, reference, field_label)
RULES: dict[str, Callable[[str, Rule, str | None, str], RuleResult]] = {
    "required": lambda value, rule, reference, label: check_required(value, label),
    "email": lambda value, rule, reference, label: check_email(value),
    "password": lambda value, rule, reference, label: check_password(value),
    "confirmPassword": lambda value, rule, reference, label: check_confirm_password(value, reference),
    "minLength": lambda value, rule, reference, label: check_min_length(value, rule.argument or 0),
    "number": lambda value, rule, reference, label: check_number(value),
    "min": lambda value, rule, reference, label: check_min(value, rule.argument or 0),
    "max": lambda value, rule, reference, label: check_max(value, rule.argument or 0),
    "date": lambda value, rule, reference, label: check_date(value),
}

ARGUMENT_RULES = frozenset({"minLength", "min", "max"})


def evaluate_rule(rule: Rule | str, value: str, reference: str | None = None, field_label: str = "Field") -> RuleResult:
    """
    Evaluate a single rule against a value.

    Every rule except ``required`` passes on an empty value, so optional
    fields are only checked once the user types something.

    Args:
        rule: Rule instance or its string form
        value: Current field value
        reference: Value of the field a confirmPassword rule must match
        field_label: Display name used in the ``required`` message

    Returns:
        RuleResult describing pass or failure
    """
    if isinstance(rule, str):
        rule = Rule.parse(rule)

    if rule.name != "required" and not value.strip():
        return RuleResult.ok()

    return RULES[rule.name](value, rule, reference, field_label)
