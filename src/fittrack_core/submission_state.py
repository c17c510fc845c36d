"""
Submission state management for FitTrack Pro forms.

Every form moves through the same lifecycle:
IDLE -> VALIDATING -> (REJECTED | SUBMITTING -> (SUCCEEDED | FAILED)) -> IDLE
"""

from enum import Enum, auto


class SubmissionState(Enum):
    """
    Enumeration of form submission states.

    REJECTED, SUCCEEDED and FAILED are terminal outcomes reported for a
    single submit; the form is back to IDLE as soon as one is reached.
    """

    IDLE = auto()  # Ready to submit
    VALIDATING = auto()  # Re-validating every visible field
    REJECTED = auto()  # At least one field failed, nothing was sent
    SUBMITTING = auto()  # Request in flight, submit control disabled
    SUCCEEDED = auto()  # Backend accepted the submission
    FAILED = auto()  # Backend refused or could not be reached

    @property
    def is_terminal(self) -> bool:
        return self in (SubmissionState.REJECTED, SubmissionState.SUCCEEDED, SubmissionState.FAILED)
