"""
Form declarations and the submission pipeline.
"""

from .definitions import (
    CLIENT_REGISTRATION,
    LOGIN,
    METRIC,
    PLAN,
    TRAINER_REGISTRATION,
    WORKOUT,
    FormDefinition,
    FormSubmission,
)
from .orchestrator import SUCCESS_MODAL, FormOrchestrator
from .registration import RegistrationFlow

__all__ = [
    "CLIENT_REGISTRATION",
    "LOGIN",
    "METRIC",
    "PLAN",
    "SUCCESS_MODAL",
    "TRAINER_REGISTRATION",
    "WORKOUT",
    "FormOrchestrator",
    "FormDefinition",
    "FormSubmission",
    "RegistrationFlow",
]
