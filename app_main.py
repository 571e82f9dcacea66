"""Application entry point for the assessment API."""

from __future__ import annotations

import argparse
from pathlib import Path

from assessment_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from assessment_app.core.assessment_manager import AssessmentManager
from assessment_app.core.default_questions import DEFAULT_QUESTIONS
from assessment_app.core.question_exporter import save_questions_to_file
from assessment_app.core.question_importer import load_questions_from_file
from assessment_app.core.services.question_repository import QuestionRepository
from assessment_app.core.services.result_store import (
    InMemoryResultStore,
    JsonFileResultStore,
    ResultSink,
)
from assessment_app.server.api_server import run_api_server
from assessment_app.utils.logging_config import configure_logging


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the microinteraction assessment API.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--questions",
        type=Path,
        default=None,
        help="Question file in the text import format (default: built-in set).",
    )
    parser.add_argument(
        "--results",
        type=Path,
        default=None,
        help="JSON file to store results in (default: in memory).",
    )
    parser.add_argument(
        "--export-questions",
        type=Path,
        default=None,
        help="Write the active question set to this file in the import format and exit.",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser


def build_manager(questions_path: Path | None, results_path: Path | None) -> AssessmentManager:
    """Wire the question source and result sink selected on the command line."""
    if questions_path is not None:
        questions = load_questions_from_file(questions_path).questions
    else:
        questions = list(DEFAULT_QUESTIONS)
    repository = QuestionRepository(questions)

    result_sink: ResultSink
    if results_path is not None:
        result_sink = JsonFileResultStore(results_path)
    else:
        result_sink = InMemoryResultStore()
    return AssessmentManager(question_source=repository, result_sink=result_sink)


def main(argv: list[str] | None = None) -> None:
    """Initialize logging, load the questions and serve the API."""
    args = build_arg_parser().parse_args(argv)
    logger = configure_logging(args.log_level.upper())
    logger.info("Starting assessment API…")

    manager = build_manager(args.questions, args.results)
    if args.export_questions is not None:
        save_questions_to_file(args.export_questions, manager.get_questions())
        logger.info("Exported %d questions to %s", manager.get_question_count(), args.export_questions)
        return

    logger.info("Serving %d questions on http://%s:%d/", manager.get_question_count(), args.host, args.port)
    run_api_server(manager, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
