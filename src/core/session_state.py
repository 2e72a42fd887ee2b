import logging
from typing import Any, Optional

from services.assessment_engine.loader import load_quiz_definition_from_file
from services.assessment_engine.models import DefinitionLoadError
from services.assessment_engine.session import QuizSession
from src.core.config import AssessmentSettings

logger = logging.getLogger(__name__)

def load_quiz_session(state: Any, settings: AssessmentSettings) -> Optional[QuizSession]:
    """
    Loads the quiz definition and attaches a fresh QuizSession to the given
    application state. On failure the session is cleared and the error message
    is kept on the state so requests can report it until a reload succeeds.
    """
    try:
        definition = load_quiz_definition_from_file(
            settings.definition_path,
            expected_sections=settings.expected_sections,
            questions_per_section=settings.questions_per_section,
        )
    except DefinitionLoadError as e:
        logger.error(f"Error loading quiz data from {settings.definition_path}: {e}")
        state.quiz_session = None
        state.definition_error = str(e)
        return None

    session = QuizSession(definition)
    state.quiz_session = session
    state.definition_error = None
    logger.info(f"Quiz session ready ({definition.question_count} questions from {settings.definition_path})")
    return session
