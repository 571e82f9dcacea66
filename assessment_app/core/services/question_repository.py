"""Service for validating and supplying the ordered question set."""

from __future__ import annotations

from typing import Protocol, Sequence

from assessment_app.core.models import Question, QuestionOption


class QuestionSource(Protocol):
    def get_questions(self) -> list[Question]:
        """Return the ordered, fixed question sequence."""


class QuestionRepository:
    """Holds a validated question set and hands out copies of it."""

    def __init__(self, questions: Sequence[Question] = ()) -> None:
        self._questions: list[Question] = []
        self._question_counter: int = 0
        if questions:
            self.load_questions(questions)

    def load_questions(self, questions: Sequence[Question]) -> None:
        """Replace the current set; ids are renumbered in presentation order."""
        if not questions:
            raise ValueError("Question set must contain at least one question.")

        self._question_counter = 0
        self._questions = [self._prepare_question(q) for q in questions]

    def get_questions(self) -> list[Question]:
        """Return a copy of all loaded questions."""
        return list(self._questions)

    def _prepare_question(self, question: Question) -> Question:
        """Validate and normalize a question before storage."""
        options = self._validate_options(question.options)

        cleaned_prompt = question.prompt.strip()
        if not cleaned_prompt:
            raise ValueError("Question prompt must not be empty.")

        correct_option_id = question.correct_option_id.strip()
        if correct_option_id not in {option.option_id for option in options}:
            raise ValueError(
                f"Correct option '{correct_option_id}' is not one of the question's options."
            )

        return Question(
            id=self._next_question_id(),
            prompt=cleaned_prompt,
            options=options,
            correct_option_id=correct_option_id,
            explanation=question.explanation.strip(),
        )

    def _next_question_id(self) -> int:
        self._question_counter += 1
        return self._question_counter

    @staticmethod
    def _validate_options(options: Sequence[QuestionOption]) -> tuple[QuestionOption, ...]:
        if len(options) < 2:
            raise ValueError("Each question must have at least two options.")

        cleaned = tuple(
            QuestionOption(option_id=option.option_id.strip(), text=option.text.strip())
            for option in options
        )
        if any(not option.option_id for option in cleaned):
            raise ValueError("Option id cannot be empty.")
        if any(not option.text for option in cleaned):
            raise ValueError("Option text cannot be empty.")

        ids = [option.option_id for option in cleaned]
        if len(set(ids)) != len(ids):
            raise ValueError("Option ids must be unique within a question.")
        return cleaned
