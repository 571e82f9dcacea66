"""Exceptions raised by the assessment engine and its collaborators."""

from __future__ import annotations


class AssessmentError(Exception):
    """Base class for assessment failures."""


class EmptyQuestionSetError(AssessmentError):
    """Raised when a session is started without any questions."""

    def __init__(self) -> None:
        super().__init__("Cannot start an assessment without questions.")


class InvalidOptionError(AssessmentError):
    """Raised when the chosen option does not belong to the current question."""

    def __init__(self, question_id: int, option_id: str) -> None:
        super().__init__(f"Option '{option_id}' is not valid for question {question_id}.")
        self.question_id = question_id
        self.option_id = option_id


class InvalidTransitionError(AssessmentError):
    """Raised when an operation is not allowed in the current session status."""

    def __init__(self, operation: str, status: object) -> None:
        status_name = getattr(status, "value", status)
        super().__init__(f"Cannot {operation} while the session is '{status_name}'.")
        self.operation = operation
        self.status = status


class SubmissionError(AssessmentError):
    """Raised by result sinks when a finished session could not be stored."""


class NotAuthenticatedError(SubmissionError):
    """Raised when a result is submitted without a user to attach it to."""

    def __init__(self) -> None:
        super().__init__("User not authenticated.")
