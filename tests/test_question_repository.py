import pytest

from assessment_app.core.default_questions import DEFAULT_QUESTIONS
from assessment_app.core.models import Question, QuestionOption
from assessment_app.core.services.question_repository import QuestionRepository

from conftest import make_question


def test_load_renumbers_ids_in_order():
    repository = QuestionRepository([make_question(7), make_question(3)])

    assert [q.id for q in repository.get_questions()] == [1, 2]
    assert repository.get_questions()[1].prompt == "Scenario 3"


def test_reload_restarts_numbering():
    repository = QuestionRepository([make_question(1), make_question(2)])
    repository.load_questions([make_question(9)])

    assert [q.id for q in repository.get_questions()] == [1]


def test_get_questions_returns_copy():
    repository = QuestionRepository(DEFAULT_QUESTIONS)
    questions = repository.get_questions()
    questions.clear()

    assert len(repository.get_questions()) == len(DEFAULT_QUESTIONS)


def test_empty_set_is_rejected():
    with pytest.raises(ValueError):
        QuestionRepository().load_questions([])


def test_empty_repository_supplies_nothing():
    repository = QuestionRepository()

    assert repository.get_questions() == []


def test_correct_option_must_be_an_option():
    with pytest.raises(ValueError, match="Correct option"):
        QuestionRepository([make_question(1, correct="z")])


def test_duplicate_option_ids_are_rejected():
    question = Question(
        id=1,
        prompt="Pick one",
        options=(QuestionOption("a", "One"), QuestionOption("a", "Two")),
        correct_option_id="a",
    )

    with pytest.raises(ValueError, match="unique"):
        QuestionRepository([question])


def test_blank_prompt_is_rejected():
    question = Question(
        id=1,
        prompt="   ",
        options=(QuestionOption("a", "One"), QuestionOption("b", "Two")),
        correct_option_id="a",
    )

    with pytest.raises(ValueError):
        QuestionRepository([question])


def test_single_option_is_rejected():
    with pytest.raises(ValueError, match="at least two"):
        QuestionRepository([make_question(1, option_ids="a")])


def test_default_questions_are_valid():
    repository = QuestionRepository(DEFAULT_QUESTIONS)

    assert repository.get_questions() == list(DEFAULT_QUESTIONS)
