"""FastAPI server that lets a browser client drive assessment sessions."""

from __future__ import annotations

from uuid import uuid4

from fastapi import Depends, FastAPI, Header, HTTPException, Request, Response
from pydantic import BaseModel
import uvicorn

from assessment_app.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION
from assessment_app.constants.assessment_constants import (
    SESSION_COOKIE_MAX_AGE_SECONDS,
    SESSION_COOKIE_NAME,
    USER_ID_HEADER,
)
from assessment_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from assessment_app.core.assessment_manager import AssessmentManager
from assessment_app.core.errors import (
    EmptyQuestionSetError,
    InvalidOptionError,
    InvalidTransitionError,
    NotAuthenticatedError,
    SubmissionError,
)
from assessment_app.core.markdown_renderer import renderer
from assessment_app.core.models import (
    AnswerRecord,
    Question,
    ResultRecord,
    SessionSnapshot,
    SessionSummary,
)
from assessment_app.core.scoring import format_elapsed


class AnswerPayload(BaseModel):
    """Payload schema for a committed answer."""

    option_id: str


def _read_session_key(request: Request) -> str | None:
    return request.cookies.get(SESSION_COOKIE_NAME) or None


def _ensure_session_key(request: Request, response: Response) -> str:
    session_key = _read_session_key(request)
    if session_key:
        return session_key
    session_key = uuid4().hex
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_key,
        max_age=SESSION_COOKIE_MAX_AGE_SECONDS,
        samesite="lax",
        httponly=True,
    )
    return session_key


def _question_payload(question: Question, reveal_answer: bool) -> dict[str, object]:
    rendered = renderer.render_question(question)
    payload: dict[str, object] = {
        "id": question.id,
        "prompt": question.prompt,
        "prompt_html": rendered["prompt_html"],
        "options": [
            {"option_id": option.option_id, "text": option.text}
            for option in question.options
        ],
        "correct_option_id": None,
        "explanation": None,
        "explanation_html": None,
    }
    # The correct option is only revealed once the question was answered.
    if reveal_answer:
        payload["correct_option_id"] = question.correct_option_id
        payload["explanation"] = question.explanation
        payload["explanation_html"] = rendered["explanation_html"]
    return payload


def _answer_payload(answer: AnswerRecord | None) -> dict[str, object] | None:
    if answer is None:
        return None
    return answer.to_payload()


def _snapshot_payload(snapshot: SessionSnapshot) -> dict[str, object]:
    question = snapshot.current_question
    return {
        "status": snapshot.status.value,
        "current_index": snapshot.current_index,
        "total_questions": snapshot.total_questions,
        "current_question": (
            _question_payload(question, reveal_answer=snapshot.last_answer is not None)
            if question is not None
            else None
        ),
        "score": snapshot.score,
        "elapsed_total_seconds": snapshot.elapsed_total_seconds,
        "elapsed_display": format_elapsed(snapshot.elapsed_total_seconds),
        "progress_percent": snapshot.progress_percent,
        "answers": [answer.to_payload() for answer in snapshot.answers],
        "last_answer": _answer_payload(snapshot.last_answer),
        "is_finished": snapshot.is_finished,
    }


def _summary_payload(summary: SessionSummary) -> dict[str, object]:
    payload = summary.to_payload()
    payload.update(
        {
            "percentage": summary.percentage,
            "tier": summary.tier.value,
            "tier_label": summary.tier.label,
            "elapsed_display": format_elapsed(summary.elapsed_total_seconds),
        }
    )
    return payload


def _result_payload(record: ResultRecord) -> dict[str, object]:
    return record.to_payload()


def _get_assessment_manager_dependency(manager: AssessmentManager):
    def dependency() -> AssessmentManager:
        return manager

    return dependency


def create_api_app(assessment_manager: AssessmentManager) -> FastAPI:
    """Create a FastAPI application wired to the provided assessment manager."""
    app = FastAPI(title=f"{APP_NAME} API", description=APP_ABOUT_TEXT, version=APP_VERSION)
    manager_dep = _get_assessment_manager_dependency(assessment_manager)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get("/assessment")
    def get_assessment(
        request: Request,
        manager: AssessmentManager = Depends(manager_dep),
    ) -> dict[str, object]:
        return _snapshot_payload(manager.get_snapshot(_read_session_key(request)))

    @app.delete("/assessment", status_code=204)
    def abandon_assessment(
        request: Request,
        response: Response,
        manager: AssessmentManager = Depends(manager_dep),
    ) -> None:
        manager.discard(_read_session_key(request))
        response.delete_cookie(SESSION_COOKIE_NAME)

    @app.post("/assessment/start")
    def start_assessment(
        request: Request,
        response: Response,
        manager: AssessmentManager = Depends(manager_dep),
    ) -> dict[str, object]:
        session_key = _ensure_session_key(request, response)
        try:
            snapshot = manager.start(session_key)
        except EmptyQuestionSetError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return _snapshot_payload(snapshot)

    @app.post("/assessment/answer")
    def answer_question(
        payload: AnswerPayload,
        request: Request,
        manager: AssessmentManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            snapshot = manager.answer(_read_session_key(request), payload.option_id)
        except InvalidOptionError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except InvalidTransitionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _snapshot_payload(snapshot)

    @app.post("/assessment/advance")
    def advance_question(
        request: Request,
        manager: AssessmentManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            snapshot = manager.advance(_read_session_key(request))
        except InvalidTransitionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _snapshot_payload(snapshot)

    @app.get("/assessment/summary")
    def get_summary(
        request: Request,
        manager: AssessmentManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            summary = manager.get_summary(_read_session_key(request))
        except InvalidTransitionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _summary_payload(summary)

    @app.get("/assessment/result")
    def get_submitted_result(
        request: Request,
        manager: AssessmentManager = Depends(manager_dep),
    ) -> dict[str, object]:
        record = manager.get_submitted_result(_read_session_key(request))
        if record is None:
            raise HTTPException(status_code=404, detail="No result saved for this session.")
        return _result_payload(record)

    @app.post("/assessment/result", status_code=201)
    def submit_result(
        request: Request,
        user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
        manager: AssessmentManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            record = manager.submit_result(_read_session_key(request), user_id)
        except InvalidTransitionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except NotAuthenticatedError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc
        except SubmissionError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return _result_payload(record)

    @app.get("/results")
    def list_results(
        user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
        manager: AssessmentManager = Depends(manager_dep),
    ) -> dict[str, object]:
        if not user_id:
            return {"results": []}
        try:
            records = manager.list_results(user_id)
        except SubmissionError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return {"results": [_result_payload(record) for record in records]}

    return app


def run_api_server(
    assessment_manager: AssessmentManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    log_level: str = "info",
) -> None:
    """Serve the API until interrupted."""
    app = create_api_app(assessment_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level=log_level)
    server = uvicorn.Server(config)
    server.run()
