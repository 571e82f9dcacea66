"""Utilities for exporting questions to the plain-text format used for imports."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from assessment_app.core.models import Question
from assessment_app.core.question_importer import OPTION_LETTERS


class QuestionExportError(ValueError):
    """Raised when a question cannot be written in the text format."""


def save_questions_to_file(file_path: Path, questions: Sequence[Question]) -> None:
    """Persist the provided questions to disk in the text import format."""

    if not questions:
        raise QuestionExportError("Cannot export an empty question set.")

    document = serialize_questions(questions)
    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(document, encoding="utf-8")


def serialize_questions(questions: Sequence[Question]) -> str:
    blocks = [_serialize_question(question) for question in questions]
    return "\n\n---\n\n".join(blocks) + "\n"


def _serialize_question(question: Question) -> str:
    letters = _letters_for(question)
    lines: list[str] = []
    _append_section(lines, "Q", question.prompt)

    for letter, option in zip(letters, question.options):
        _append_section(lines, letter, option.text)

    correct_index = question.option_ids().index(question.correct_option_id)
    lines.append(f"CORRECT: {letters[correct_index]}")

    if question.explanation:
        _append_section(lines, "EXPLANATION", question.explanation)

    return "\n".join(lines)


def _letters_for(question: Question) -> list[str]:
    """Return the option letters, refusing ids the import format would rename."""
    if len(question.options) > len(OPTION_LETTERS):
        raise QuestionExportError(
            f"Question {question.id} has {len(question.options)} options; "
            f"the file format supports at most {len(OPTION_LETTERS)}."
        )
    letters = OPTION_LETTERS[: len(question.options)]
    expected_ids = tuple(letter.lower() for letter in letters)
    if question.option_ids() != expected_ids:
        raise QuestionExportError(
            f"Question {question.id} option ids {question.option_ids()} must be "
            f"{expected_ids} to be exported."
        )
    return letters


def _append_section(lines: list[str], marker: str, text: str) -> None:
    text_lines = text.splitlines() or [text]
    lines.append(f"{marker}: {text_lines[0]}")
    lines.extend(text_lines[1:])
