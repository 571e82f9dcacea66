"""Result sinks that store finished assessment sessions per user."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from threading import Lock
from typing import Protocol
from uuid import uuid4

from assessment_app.core.errors import NotAuthenticatedError, SubmissionError
from assessment_app.core.models import AnswerRecord, ResultRecord, SessionSummary

logger = logging.getLogger(__name__)


class ResultSink(Protocol):
    def submit(self, summary: SessionSummary, user_id: str | None) -> ResultRecord:
        """Persist a finished session, raising SubmissionError on failure."""

    def list_results(self, user_id: str) -> list[ResultRecord]:
        """Return the user's past results, newest first."""


def _build_record(summary: SessionSummary, user_id: str | None) -> ResultRecord:
    if not user_id:
        raise NotAuthenticatedError()
    return ResultRecord(
        result_id=uuid4().hex,
        user_id=user_id,
        score=summary.score,
        total_questions=summary.total_questions,
        time_seconds=summary.elapsed_total_seconds,
        completed_at=datetime.now(timezone.utc),
        answers=summary.answers,
    )


def _newest_first(records: list[ResultRecord]) -> list[ResultRecord]:
    # Submission order breaks ties between identical timestamps.
    ordered = sorted(enumerate(records), key=lambda item: (item[1].completed_at, item[0]), reverse=True)
    return [record for _, record in ordered]


class InMemoryResultStore:
    """Keeps results for the lifetime of the process."""

    def __init__(self) -> None:
        self._results: dict[str, list[ResultRecord]] = {}

    def submit(self, summary: SessionSummary, user_id: str | None) -> ResultRecord:
        record = _build_record(summary, user_id)
        self._results.setdefault(record.user_id, []).append(record)
        return record

    def list_results(self, user_id: str) -> list[ResultRecord]:
        return _newest_first(list(self._results.get(user_id, [])))


class JsonFileResultStore:
    """Stores every result as one entry of a JSON document on disk."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = Lock()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def submit(self, summary: SessionSummary, user_id: str | None) -> ResultRecord:
        record = _build_record(summary, user_id)
        with self._lock:
            entries = self._read_entries()
            entries.append(record.to_payload())
            self._write_entries(entries)
        return record

    def list_results(self, user_id: str) -> list[ResultRecord]:
        with self._lock:
            entries = self._read_entries()
        records = [_record_from_payload(entry) for entry in entries if entry.get("user_id") == user_id]
        return _newest_first(records)

    def _read_entries(self) -> list[dict]:
        if not self._file_path.exists():
            return []
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Could not read results from %s: %s", self._file_path, exc)
            raise SubmissionError(f"Results file {self._file_path} is unreadable.") from exc
        if not isinstance(data, list):
            raise SubmissionError(f"Results file {self._file_path} must contain a list.")
        return data

    def _write_entries(self, entries: list[dict]) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
            tmp_path.replace(self._file_path)
        except OSError as exc:
            logger.error("Could not write results to %s: %s", self._file_path, exc)
            raise SubmissionError(f"Could not save result to {self._file_path}.") from exc


def _record_from_payload(payload: dict) -> ResultRecord:
    return ResultRecord(
        result_id=payload["id"],
        user_id=payload["user_id"],
        score=int(payload["score"]),
        total_questions=int(payload["total_questions"]),
        time_seconds=float(payload["time_seconds"]),
        completed_at=datetime.fromisoformat(payload["completed_at"]),
        answers=tuple(
            AnswerRecord(
                question_id=int(answer["question_id"]),
                selected_option_id=answer["selected_option_id"],
                correct_option_id=answer["correct_option_id"],
                time_spent_seconds=float(answer["time_spent_seconds"]),
            )
            for answer in payload.get("answers", [])
        ),
    )
