import json

import pytest

from assessment_app.core.errors import NotAuthenticatedError, SubmissionError
from assessment_app.core.models import AnswerRecord, SessionSummary
from assessment_app.core.services.result_store import InMemoryResultStore, JsonFileResultStore


def _summary(score: int = 1) -> SessionSummary:
    answers = (
        AnswerRecord(question_id=1, selected_option_id="a", correct_option_id="a", time_spent_seconds=4.0),
        AnswerRecord(question_id=2, selected_option_id="b", correct_option_id="c", time_spent_seconds=6.5),
    )
    return SessionSummary(score=score, total_questions=2, answers=answers, elapsed_total_seconds=12.0)


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryResultStore()
    return JsonFileResultStore(tmp_path / "results.json")


def test_submit_builds_record(store):
    record = store.submit(_summary(), "user-1")

    assert record.user_id == "user-1"
    assert record.score == 1
    assert record.total_questions == 2
    assert record.time_seconds == 12.0
    assert record.answers == _summary().answers
    assert record.completed_at.tzinfo is not None


def test_list_results_filters_by_user_newest_first(store):
    first = store.submit(_summary(score=0), "user-1")
    store.submit(_summary(), "user-2")
    second = store.submit(_summary(score=2), "user-1")

    results = store.list_results("user-1")

    assert [r.result_id for r in results] == [second.result_id, first.result_id]
    assert results[0] == second
    assert store.list_results("nobody") == []


@pytest.mark.parametrize("user_id", [None, ""])
def test_submit_without_user_is_rejected(store, user_id):
    with pytest.raises(NotAuthenticatedError):
        store.submit(_summary(), user_id)


def test_json_store_writes_persistence_shape(tmp_path):
    path = tmp_path / "data" / "results.json"
    store = JsonFileResultStore(path)

    record = store.submit(_summary(), "user-1")

    entries = json.loads(path.read_text(encoding="utf-8"))
    assert entries == [record.to_payload()]
    assert entries[0]["answers"][1]["is_correct"] is False
    assert JsonFileResultStore(path).list_results("user-1") == [record]


def test_json_store_unreadable_file_raises_submission_error(tmp_path):
    path = tmp_path / "results.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileResultStore(path)

    with pytest.raises(SubmissionError):
        store.submit(_summary(), "user-1")
    assert path.read_text(encoding="utf-8") == "{not json"
