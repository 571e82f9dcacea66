import pytest

from app_main import build_arg_parser, build_manager, main
from assessment_app.core.default_questions import DEFAULT_QUESTIONS
from assessment_app.core.errors import InvalidTransitionError
from assessment_app.core.models import SessionStatus
from assessment_app.core.question_exporter import save_questions_to_file
from assessment_app.core.question_importer import load_questions_from_file
from assessment_app.utils.state_machine import AssessmentStateMachine


def test_state_machine_allows_only_forward_flow():
    machine = AssessmentStateMachine()
    assert machine.get_state() is SessionStatus.IDLE
    assert not machine.can_transition(SessionStatus.IN_PROGRESS)

    machine.reset()
    machine.transition(SessionStatus.AWAITING_ADVANCE)
    assert machine.can_transition(SessionStatus.FINISHED)
    assert machine.can_transition(SessionStatus.IN_PROGRESS)

    machine.transition(SessionStatus.FINISHED)
    with pytest.raises(InvalidTransitionError):
        machine.transition(SessionStatus.IN_PROGRESS)


def test_require_reports_operation_and_status():
    machine = AssessmentStateMachine()

    with pytest.raises(InvalidTransitionError) as excinfo:
        machine.require("advance", SessionStatus.AWAITING_ADVANCE)

    assert excinfo.value.operation == "advance"
    assert excinfo.value.status is SessionStatus.IDLE
    assert "idle" in str(excinfo.value)


def test_arg_parser_defaults():
    args = build_arg_parser().parse_args([])

    assert args.port == 8000
    assert args.questions is None
    assert args.results is None
    assert args.export_questions is None


def test_build_manager_uses_default_questions():
    manager = build_manager(None, None)

    assert manager.get_question_count() == len(DEFAULT_QUESTIONS)


def test_build_manager_loads_question_file(tmp_path):
    questions_path = tmp_path / "questions.txt"
    save_questions_to_file(questions_path, DEFAULT_QUESTIONS[:2])

    manager = build_manager(questions_path, tmp_path / "results.json")

    assert manager.get_question_count() == 2
    assert manager.start("key").status is SessionStatus.IN_PROGRESS


def test_main_exports_questions_without_serving(tmp_path, monkeypatch):
    served = []
    monkeypatch.setattr("app_main.run_api_server", lambda *args, **kwargs: served.append(args))
    export_path = tmp_path / "exported.txt"

    main(["--export-questions", str(export_path)])

    assert served == []
    assert load_questions_from_file(export_path).questions == list(DEFAULT_QUESTIONS)
