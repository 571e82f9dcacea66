"""
Pytest configuration and shared fixtures for assessment tests.
"""

import pytest

from assessment_app.core.clock import ManualClock
from assessment_app.core.default_questions import DEFAULT_QUESTIONS
from assessment_app.core.models import Question, QuestionOption
from assessment_app.core.services.assessment_engine import AssessmentEngine


def make_question(question_id: int, correct: str = "a", option_ids: str = "abcd") -> Question:
    return Question(
        id=question_id,
        prompt=f"Scenario {question_id}",
        options=tuple(
            QuestionOption(option_id=option_id, text=f"Option {option_id.upper()}")
            for option_id in option_ids
        ),
        correct_option_id=correct,
        explanation=f"Because {correct}.",
    )


def wrong_option(question: Question) -> str:
    return next(o.option_id for o in question.options if o.option_id != question.correct_option_id)


@pytest.fixture
def clock():
    """Fixture providing a manual clock starting at zero."""
    return ManualClock()


@pytest.fixture
def questions():
    return list(DEFAULT_QUESTIONS)


@pytest.fixture
def engine(questions, clock):
    return AssessmentEngine(questions, clock=clock)
