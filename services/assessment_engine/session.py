import logging
from typing import Literal, Optional

from services.assessment_engine import scorer
from services.assessment_engine.ledger import AnswerLedger
from services.assessment_engine.models import (
    IncompleteQuizError,
    InvalidAnswerError,
    Question,
    QuizDefinition,
    QuizProgress,
    QuizResults,
    RagOption,
    Section,
    UnknownQuestionError,
    UserAnswer,
)
from services.assessment_engine.navigator import QuizNavigator
from services.assessment_engine.results import build_results

logger = logging.getLogger(__name__)

SessionView = Literal["start", "quiz", "results"]

class QuizSession:
    """
    State of a single assessment run: the loaded definition, the answers given
    so far, the navigation cursor and which of the start/quiz/results views is
    showing. One instance is created per session and passed to whoever needs it.
    """
    def __init__(self, definition: QuizDefinition):
        self.definition = definition
        self.ledger = AnswerLedger()
        self.navigator = QuizNavigator.for_definition(definition)
        self.view: SessionView = "start"

    # --- Current position ---

    @property
    def current_section(self) -> Section:
        return self.definition.sections[self.navigator.section_index]

    @property
    def current_question(self) -> Question:
        return self.current_section.questions[self.navigator.question_index]

    @property
    def current_answer(self) -> Optional[UserAnswer]:
        return self.ledger.answer_for_question(self.current_question.id)

    @property
    def can_go_previous(self) -> bool:
        return self.navigator.can_retreat

    @property
    def can_go_next(self) -> bool:
        return self.current_answer is not None

    @property
    def is_complete(self) -> bool:
        return self.ledger.is_complete(self.definition.question_count)

    def progress(self) -> QuizProgress:
        return scorer.quiz_progress(self.ledger.answers, self.definition.question_count)

    def section_progress(self) -> QuizProgress:
        section = self.current_section
        return scorer.quiz_progress(self.ledger.answers_for_section(section.id), len(section.questions))

    # --- Actions ---

    def start(self) -> None:
        self.reset()
        self.view = "quiz"
        logger.info("Quiz session started")

    def select_answer(self, question_id: int, option: RagOption) -> UserAnswer:
        """Records the option chosen for a question, replacing any earlier choice."""
        section = self.definition.section_for_question(question_id)
        if section is None:
            raise UnknownQuestionError(f"Unknown question ID: {question_id}")
        question = self.definition.question_by_id(question_id)
        try:
            chosen = question.option_for(RagOption(option))
        except ValueError:
            chosen = None
        if chosen is None:
            raise InvalidAnswerError(f"Question {question_id} has no '{option}' answer")

        answer = UserAnswer(
            question_id=question.id,
            section_id=section.id,
            selected_option=chosen.option,
            score=chosen.score,
            tip=chosen.tip,
        )
        self.ledger.record_answer(answer)
        logger.info(
            "Answer selected",
            extra={"view": self.view, "question_id": answer.question_id,
                   "section_id": answer.section_id, "option": answer.selected_option.value},
        )
        return answer

    def next_question(self) -> bool:
        """
        Moves forward once the current question is answered. On the last
        question this switches to the results view instead, provided every
        question has been answered. Returns whether anything changed.
        """
        if not self.can_go_next:
            logger.debug(f"Next blocked: question {self.current_question.id} has no answer")
            return False
        if self.navigator.is_last_question:
            if not self.is_complete:
                logger.info(f"Results blocked: {len(self.ledger)} of {self.definition.question_count} answered")
                return False
            self.view = "results"
            logger.info("Quiz completed", extra={"view": self.view})
            return True
        self.navigator.advance()
        logger.debug("Moved to next question", extra={"view": self.view, "question_id": self.current_question.id})
        return True

    def previous_question(self) -> bool:
        if not self.can_go_previous:
            return False
        self.navigator.retreat()
        return True

    def go_to_section(self, index: int) -> bool:
        return self.navigator.jump_to_section(index)

    def results(self) -> QuizResults:
        """
        Builds the results snapshot. An incomplete quiz sends the session back
        to the quiz view before the error propagates.
        """
        try:
            results = build_results(self.ledger.answers, self.definition)
        except IncompleteQuizError:
            self.view = "quiz"
            raise
        self.view = "results"
        return results

    def reset(self) -> None:
        self.ledger.reset()
        self.navigator.reset()

    def restart(self) -> None:
        self.reset()
        self.view = "start"
        logger.info("Quiz session reset")
