"""Domain models for the assessment engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from assessment_app.core.scoring import ResultTier, percentage, tier_for_percentage


class SessionStatus(Enum):
    """Lifecycle states of an assessment session."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    AWAITING_ADVANCE = "awaiting_advance"
    FINISHED = "finished"


@dataclass(frozen=True, slots=True)
class QuestionOption:
    """A single selectable option of a question."""

    option_id: str
    text: str


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice scenario question with an explanation shown after answering."""

    id: int
    prompt: str
    options: tuple[QuestionOption, ...]
    correct_option_id: str
    explanation: str = ""

    def option_ids(self) -> tuple[str, ...]:
        return tuple(option.option_id for option in self.options)

    def has_option(self, option_id: str) -> bool:
        return any(option.option_id == option_id for option in self.options)


@dataclass(frozen=True, slots=True)
class AnswerRecord:
    """Immutable capture of how a single question was resolved."""

    question_id: int
    selected_option_id: str
    correct_option_id: str
    time_spent_seconds: float

    @property
    def is_correct(self) -> bool:
        return self.selected_option_id == self.correct_option_id

    def to_payload(self) -> dict[str, object]:
        return {
            "question_id": self.question_id,
            "selected_option_id": self.selected_option_id,
            "correct_option_id": self.correct_option_id,
            "is_correct": self.is_correct,
            "time_spent_seconds": self.time_spent_seconds,
        }


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only view of the live session returned by every engine operation."""

    status: SessionStatus
    current_index: int
    current_question: Question | None
    score: int
    elapsed_total_seconds: float
    answers: tuple[AnswerRecord, ...]
    total_questions: int
    last_answer: AnswerRecord | None = None

    @property
    def is_finished(self) -> bool:
        return self.status is SessionStatus.FINISHED

    @property
    def progress_percent(self) -> float:
        if self.status is SessionStatus.IDLE or self.total_questions == 0:
            return 0.0
        if self.is_finished:
            return 100.0
        return (self.current_index + 1) / self.total_questions * 100


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Finished-session result handed to the result sink."""

    score: int
    total_questions: int
    answers: tuple[AnswerRecord, ...]
    elapsed_total_seconds: float

    @property
    def percentage(self) -> float:
        return percentage(self.score, self.total_questions)

    @property
    def tier(self) -> ResultTier:
        return tier_for_percentage(self.percentage)

    def to_payload(self) -> dict[str, object]:
        """Shape stored by result sinks."""
        return {
            "score": self.score,
            "total_questions": self.total_questions,
            "answers": [answer.to_payload() for answer in self.answers],
            "time_seconds": self.elapsed_total_seconds,
        }


@dataclass(frozen=True, slots=True)
class ResultRecord:
    """A persisted session result belonging to a user."""

    result_id: str
    user_id: str
    score: int
    total_questions: int
    time_seconds: float
    completed_at: datetime
    answers: tuple[AnswerRecord, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.result_id,
            "user_id": self.user_id,
            "score": self.score,
            "total_questions": self.total_questions,
            "answers": [answer.to_payload() for answer in self.answers],
            "time_seconds": self.time_seconds,
            "completed_at": self.completed_at.isoformat(),
        }
