import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config import AssessmentSettings, settings
from src.core.logging_config import setup_logging
from src.core.session_state import load_quiz_session
from src.reports.service import ReportService
from src.routers import assessment as assessment_router

logger = logging.getLogger(__name__)

def create_app(app_settings: Optional[AssessmentSettings] = None) -> FastAPI:
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(app_settings.log_level, app_settings.json_logs)
        app.state.settings = app_settings
        app.state.report_service = ReportService(title=app_settings.report_title)
        # A failed load keeps the app up; session endpoints answer 503 until a reload succeeds
        load_quiz_session(app.state, app_settings)
        yield
        app.state.quiz_session = None
        logger.info("Quiz session closed")

    app = FastAPI(title="RAG Assessment API", lifespan=lifespan)

    # Allows hosting the quiz inside a third-party page frame
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(assessment_router.router, prefix="/api/v1", tags=["assessment"])

    @app.get("/health", tags=["Health Check"])
    async def health():
        loaded = getattr(app.state, "quiz_session", None) is not None
        return {
            "status": "ok" if loaded else "degraded",
            "definition_loaded": loaded,
            "definition_error": getattr(app.state, "definition_error", None),
        }

    return app

app = create_app()
