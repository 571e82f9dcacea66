"""Engine driving a single timed, scored assessment session."""

from __future__ import annotations

from typing import Sequence

from assessment_app.core.clock import Clock, MonotonicClock
from assessment_app.core.errors import (
    EmptyQuestionSetError,
    InvalidOptionError,
    InvalidTransitionError,
)
from assessment_app.core.models import (
    AnswerRecord,
    Question,
    SessionSnapshot,
    SessionStatus,
    SessionSummary,
)
from assessment_app.utils.state_machine import AssessmentStateMachine


class AssessmentEngine:
    """Owns the question set and the live session state.

    Callers drive the session with :meth:`start`, :meth:`answer` and
    :meth:`advance`; every operation either fully applies or raises without
    touching the session. Elapsed time is derived from clock readings, so no
    background timer is involved.
    """

    def __init__(self, questions: Sequence[Question], clock: Clock | None = None) -> None:
        self._questions: tuple[Question, ...] = tuple(questions)
        self._clock: Clock = clock or MonotonicClock()
        self._state = AssessmentStateMachine()
        self._current_index: int = 0
        self._answers: list[AnswerRecord] = []
        self._score: int = 0
        self._started_at: float | None = None
        self._finished_at: float | None = None
        self._question_started_at: float | None = None

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def status(self) -> SessionStatus:
        return self._state.get_state()

    def start(self) -> SessionSnapshot:
        """Begin a fresh session, discarding any previous one."""
        if not self._questions:
            raise EmptyQuestionSetError()

        now = self._clock.now()
        self._current_index = 0
        self._answers = []
        self._score = 0
        self._started_at = now
        self._finished_at = None
        self._question_started_at = now
        self._state.reset()
        return self.get_snapshot()

    def answer(self, option_id: str) -> SessionSnapshot:
        """Commit a choice for the current question."""
        self._state.require("answer", SessionStatus.IN_PROGRESS)
        question = self._questions[self._current_index]
        if not question.has_option(option_id):
            raise InvalidOptionError(question.id, option_id)

        time_spent = max(0.0, self._clock.now() - self._question_started_at)
        record = AnswerRecord(
            question_id=question.id,
            selected_option_id=option_id,
            correct_option_id=question.correct_option_id,
            time_spent_seconds=time_spent,
        )

        self._state.transition(SessionStatus.AWAITING_ADVANCE)
        self._answers.append(record)
        if record.is_correct:
            self._score += 1
        return self.get_snapshot()

    def advance(self) -> SessionSnapshot:
        """Move past the answered question, finishing after the last one."""
        self._state.require("advance", SessionStatus.AWAITING_ADVANCE)
        now = self._clock.now()

        if self._current_index >= len(self._questions) - 1:
            self._state.transition(SessionStatus.FINISHED)
            self._finished_at = now
        else:
            self._state.transition(SessionStatus.IN_PROGRESS)
            self._current_index += 1
            self._question_started_at = now
        return self.get_snapshot()

    def get_snapshot(self) -> SessionSnapshot:
        status = self.status
        current_question = None
        last_answer = None
        if status in (SessionStatus.IN_PROGRESS, SessionStatus.AWAITING_ADVANCE):
            current_question = self._questions[self._current_index]
        if status is SessionStatus.AWAITING_ADVANCE:
            last_answer = self._answers[-1]

        return SessionSnapshot(
            status=status,
            current_index=self._current_index,
            current_question=current_question,
            score=self._score,
            elapsed_total_seconds=self.elapsed_total_seconds(),
            answers=tuple(self._answers),
            total_questions=len(self._questions),
            last_answer=last_answer,
        )

    def get_summary(self) -> SessionSummary:
        """Return the finished-session summary; re-derivable until the next start."""
        if self.status is not SessionStatus.FINISHED:
            raise InvalidTransitionError("summarize", self.status)
        return SessionSummary(
            score=self._score,
            total_questions=len(self._questions),
            answers=tuple(self._answers),
            elapsed_total_seconds=self.elapsed_total_seconds(),
        )

    def elapsed_total_seconds(self) -> float:
        if self._started_at is None:
            return 0.0
        # Frozen once finished.
        end = self._finished_at if self._finished_at is not None else self._clock.now()
        return max(0.0, end - self._started_at)
