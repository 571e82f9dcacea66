"""Business logic shared between the API layer and the assessment services."""

from __future__ import annotations

from collections import OrderedDict
import logging
from threading import Lock

from assessment_app.constants.assessment_constants import MAX_ACTIVE_SESSIONS
from assessment_app.core.clock import Clock, MonotonicClock
from assessment_app.core.errors import InvalidTransitionError, SubmissionError
from assessment_app.core.models import (
    Question,
    ResultRecord,
    SessionSnapshot,
    SessionStatus,
    SessionSummary,
)
from assessment_app.core.services.assessment_engine import AssessmentEngine
from assessment_app.core.services.question_repository import QuestionSource
from assessment_app.core.services.result_store import ResultSink

logger = logging.getLogger(__name__)


class AssessmentManager:
    """Facade over the engine, the question source and the result sink.

    Each browser session key gets its own engine, created only by
    :meth:`start`. At most ``max_sessions`` engines are kept; starting one
    more evicts the least recently used session. Session state is guarded by
    a single lock because the API layer runs handlers on a thread pool; the
    result sink is called outside of it.
    """

    def __init__(
        self,
        question_source: QuestionSource,
        result_sink: ResultSink,
        clock: Clock | None = None,
        max_sessions: int = MAX_ACTIVE_SESSIONS,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self._lock = Lock()
        self._clock: Clock = clock or MonotonicClock()
        self._result_sink = result_sink
        self._max_sessions = max_sessions
        self._questions: tuple[Question, ...] = tuple(question_source.get_questions())
        self._engines: OrderedDict[str, AssessmentEngine] = OrderedDict()
        self._submitted: dict[str, ResultRecord] = {}
        self._pending_submissions: set[str] = set()

    def get_questions(self) -> list[Question]:
        return list(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_session_count(self) -> int:
        with self._lock:
            return len(self._engines)

    # --- Session transitions ---

    def start(self, session_key: str) -> SessionSnapshot:
        with self._lock:
            engine = self._engines.get(session_key)
            if engine is None:
                engine = AssessmentEngine(self._questions, clock=self._clock)
                snapshot = engine.start()
                self._engines[session_key] = engine
                self._evict_overflow()
            else:
                snapshot = engine.start()
                self._engines.move_to_end(session_key)
            self._submitted.pop(session_key, None)
            logger.info("Session %s started with %d questions", session_key, snapshot.total_questions)
            return snapshot

    def answer(self, session_key: str | None, option_id: str) -> SessionSnapshot:
        with self._lock:
            return self._existing_engine(session_key, "answer").answer(option_id)

    def advance(self, session_key: str | None) -> SessionSnapshot:
        with self._lock:
            snapshot = self._existing_engine(session_key, "advance").advance()
            if snapshot.is_finished:
                logger.info(
                    "Session %s finished: %d/%d in %.1fs",
                    session_key,
                    snapshot.score,
                    snapshot.total_questions,
                    snapshot.elapsed_total_seconds,
                )
            return snapshot

    def get_snapshot(self, session_key: str | None) -> SessionSnapshot:
        with self._lock:
            engine = self._engines.get(session_key) if session_key else None
            if engine is None:
                return SessionSnapshot(
                    status=SessionStatus.IDLE,
                    current_index=0,
                    current_question=None,
                    score=0,
                    elapsed_total_seconds=0.0,
                    answers=(),
                    total_questions=len(self._questions),
                )
            return engine.get_snapshot()

    def get_summary(self, session_key: str | None) -> SessionSummary:
        with self._lock:
            return self._existing_engine(session_key, "summarize").get_summary()

    def discard(self, session_key: str | None) -> None:
        """Abandon a session; unknown keys are ignored."""
        with self._lock:
            if session_key:
                self._forget(session_key)

    # --- Results ---

    def submit_result(self, session_key: str | None, user_id: str | None) -> ResultRecord:
        """Forward the finished summary to the result sink.

        A successful submission is remembered so retries return the stored
        record instead of saving a duplicate. On failure the summary stays in
        the engine and the call can simply be repeated.
        """
        with self._lock:
            existing = self._submitted.get(session_key) if session_key else None
            if existing is not None:
                return existing
            engine = self._existing_engine(session_key, "submit a result")
            summary = engine.get_summary()
            if session_key in self._pending_submissions:
                raise SubmissionError("A result for this session is already being saved.")
            self._pending_submissions.add(session_key)

        try:
            record = self._result_sink.submit(summary, user_id)
        except SubmissionError as exc:
            logger.warning("Saving result for session %s failed: %s", session_key, exc)
            raise
        finally:
            with self._lock:
                self._pending_submissions.discard(session_key)

        with self._lock:
            # A restart during the save belongs to a new run; do not mark it submitted.
            if self._engines.get(session_key) is engine and engine.status is SessionStatus.FINISHED:
                self._submitted[session_key] = record
        logger.info("Saved result %s for user %s", record.result_id, record.user_id)
        return record

    def get_submitted_result(self, session_key: str | None) -> ResultRecord | None:
        with self._lock:
            return self._submitted.get(session_key) if session_key else None

    def list_results(self, user_id: str) -> list[ResultRecord]:
        return self._result_sink.list_results(user_id)

    def _existing_engine(self, session_key: str | None, operation: str) -> AssessmentEngine:
        engine = self._engines.get(session_key) if session_key else None
        if engine is None:
            raise InvalidTransitionError(operation, SessionStatus.IDLE)
        self._engines.move_to_end(session_key)
        return engine

    def _evict_overflow(self) -> None:
        while len(self._engines) > self._max_sessions:
            oldest_key = next(iter(self._engines))
            self._forget(oldest_key)
            logger.info("Evicted idle session %s", oldest_key)

    def _forget(self, session_key: str) -> None:
        self._engines.pop(session_key, None)
        self._submitted.pop(session_key, None)
