"""Utilities for importing assessment questions from a plain-text file.

File format (repeat blocks separated by blank lines or '---'):

    Q: Scenario text (markdown). Additional lines until the next marker are
       treated as part of the prompt.
    A: First option text
    B: Second option text
    ...                (up to F; at least two options)
    CORRECT: A-F
    EXPLANATION: Text shown after answering. May continue on following lines.

Option letters become lowercase option ids, so ``B:`` is option ``"b"``.

Example:

    Q: A "Save" button gives no feedback when clicked. What is the problem?
    A: Missing trigger
    B: Missing feedback
    CORRECT: B
    EXPLANATION: Feedback confirms the action was processed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from assessment_app.core.models import Question, QuestionOption


class QuestionImportError(Exception):
    """Raised when a question file cannot be parsed."""


@dataclass(slots=True)
class ImportedQuestionSet:
    """Container for imported questions and where they came from."""

    source_path: Path
    questions: list[Question]


OPTION_LETTERS = ["A", "B", "C", "D", "E", "F"]


def load_questions_from_file(file_path: Path) -> ImportedQuestionSet:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_questions_text(text)
    if not questions:
        raise QuestionImportError("Question file did not contain any questions.")
    return ImportedQuestionSet(source_path=file_path, questions=questions)


def parse_questions_text(text: str) -> list[Question]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    return [
        _parse_block(block, question_id=index)
        for index, block in enumerate((b for b in blocks if b), start=1)
    ]


def _parse_block(block: str, question_id: int) -> Question:
    prompt_lines: list[str] = []
    explanation_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letter: str | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            prompt_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = line.split(":", 1)[1].strip().upper()
            current_section = None
            continue

        if upper.startswith("EXPLANATION:"):
            explanation_lines = [line.split(":", 1)[1].strip()]
            current_section = "EXPLANATION"
            continue

        if len(line) >= 2 and line[0].upper() in OPTION_LETTERS and line[1] == ":":
            letter = line[0].upper()
            if letter in options:
                raise QuestionImportError(f"Option {letter} is defined twice.")
            option_text = line[2:].strip()
            if not option_text:
                raise QuestionImportError(f"Option {letter} text cannot be empty.")
            options[letter] = option_text
            current_section = letter
            continue

        if current_section == "Q":
            prompt_lines.append(line)
        elif current_section == "EXPLANATION":
            explanation_lines.append(line)
        elif current_section in OPTION_LETTERS:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuestionImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    prompt = "\n".join(prompt_lines).strip()
    if not prompt:
        raise QuestionImportError("Question text missing (Q: ...)")

    letters = [letter for letter in OPTION_LETTERS if letter in options]
    if len(letters) < 2:
        raise QuestionImportError("Each question must define at least two options.")
    if letters != OPTION_LETTERS[: len(letters)]:
        raise QuestionImportError("Option letters must be consecutive starting at A.")

    if correct_letter is None:
        raise QuestionImportError("CORRECT is required for every question.")
    if correct_letter not in letters:
        raise QuestionImportError(
            f"CORRECT must be one of {', '.join(letters)}."
        )

    return Question(
        id=question_id,
        prompt=prompt,
        options=tuple(
            QuestionOption(option_id=letter.lower(), text=options[letter].strip())
            for letter in letters
        ),
        correct_option_id=correct_letter.lower(),
        explanation="\n".join(explanation_lines).strip(),
    )
