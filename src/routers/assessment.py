from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response
import logging

from services.assessment_engine.models import (
    IncompleteQuizError,
    InvalidAnswerError,
    QuizDefinition,
    ReportGenerationError,
    UnknownQuestionError,
    UserAnswer,
)
from services.assessment_engine.session import QuizSession
from src.core.session_state import load_quiz_session
from src.reports.service import ReportService
from src.schemas.assessment import AnswerRequest, ResultsResponse, SessionState

router = APIRouter()
logger = logging.getLogger(__name__)

def get_quiz_session(request: Request) -> QuizSession:
    session = getattr(request.app.state, "quiz_session", None)
    if session is None:
        detail = getattr(request.app.state, "definition_error", None) or "Quiz data not loaded"
        raise HTTPException(status_code=503, detail=detail)
    return session

def get_report_service(request: Request) -> ReportService:
    service = getattr(request.app.state, "report_service", None)
    if service is None:
        service = ReportService()
        request.app.state.report_service = service
    return service

@router.get("/assessment/definition", response_model=QuizDefinition)
async def get_definition(session: QuizSession = Depends(get_quiz_session)):
    return session.definition

@router.post("/assessment/definition/reload", response_model=SessionState)
async def reload_definition(request: Request):
    """Retries loading the quiz definition. Any in-progress answers are discarded."""
    session = load_quiz_session(request.app.state, request.app.state.settings)
    if session is None:
        raise HTTPException(status_code=503, detail=request.app.state.definition_error)
    return SessionState.from_session(session)

@router.get("/assessment/state", response_model=SessionState)
async def get_state(session: QuizSession = Depends(get_quiz_session)):
    return SessionState.from_session(session)

@router.post("/assessment/start", response_model=SessionState)
async def start_quiz(session: QuizSession = Depends(get_quiz_session)):
    session.start()
    return SessionState.from_session(session)

@router.post("/assessment/answers", response_model=UserAnswer)
async def select_answer(request: AnswerRequest, session: QuizSession = Depends(get_quiz_session)):
    try:
        return session.select_answer(request.question_id, request.option)
    except UnknownQuestionError as e:
        logger.warning(f"Answer for unknown question: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidAnswerError as e:
        logger.error(f"Invalid answer: {e}")
        raise HTTPException(status_code=422, detail=str(e))

@router.post("/assessment/next", response_model=SessionState)
async def next_question(session: QuizSession = Depends(get_quiz_session)):
    session.next_question()
    return SessionState.from_session(session)

@router.post("/assessment/previous", response_model=SessionState)
async def previous_question(session: QuizSession = Depends(get_quiz_session)):
    session.previous_question()
    return SessionState.from_session(session)

@router.post("/assessment/sections/{index}", response_model=SessionState)
async def go_to_section(index: int, session: QuizSession = Depends(get_quiz_session)):
    session.go_to_section(index)
    return SessionState.from_session(session)

def _results_or_409(session: QuizSession):
    try:
        return session.results()
    except IncompleteQuizError as e:
        logger.info(f"Results requested early: {e}")
        raise HTTPException(status_code=409, detail=str(e))

@router.get("/assessment/results", response_model=ResultsResponse)
async def get_results(session: QuizSession = Depends(get_quiz_session)):
    return ResultsResponse.from_results(_results_or_409(session))

@router.get("/assessment/results/text", response_class=PlainTextResponse)
async def get_text_report(
    session: QuizSession = Depends(get_quiz_session),
    reports: ReportService = Depends(get_report_service),
):
    return reports.render_text(_results_or_409(session))

@router.get("/assessment/results/share", response_class=PlainTextResponse)
async def get_share_text(
    session: QuizSession = Depends(get_quiz_session),
    reports: ReportService = Depends(get_report_service),
):
    return reports.share_text(_results_or_409(session))

# Blocking reportlab render, so this handler runs in the threadpool
@router.get("/assessment/results/pdf")
def download_pdf(
    session: QuizSession = Depends(get_quiz_session),
    reports: ReportService = Depends(get_report_service),
):
    results = _results_or_409(session)
    try:
        pdf_bytes = reports.render_pdf(results, session.definition.brand_colors)
    except ReportGenerationError as e:
        logger.error(f"Error generating PDF: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate PDF. Please try again.")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{reports.filename(results)}"'},
    )

@router.post("/assessment/reset", response_model=SessionState)
async def reset_quiz(session: QuizSession = Depends(get_quiz_session)):
    session.restart()
    return SessionState.from_session(session)
