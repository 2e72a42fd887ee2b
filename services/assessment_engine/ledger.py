import logging
from typing import Iterator, List, Optional

from services.assessment_engine.models import UserAnswer

logger = logging.getLogger(__name__)

class AnswerLedger:
    """
    Ordered store of the answers recorded during a quiz session, unique by
    question id. Re-answering a question replaces the earlier answer in place.
    """
    def __init__(self):
        self._answers: List[UserAnswer] = []

    def record_answer(self, answer: UserAnswer) -> None:
        for index, existing in enumerate(self._answers):
            if existing.question_id == answer.question_id:
                self._answers[index] = answer
                logger.debug(f"Replaced answer for question {answer.question_id} at position {index}")
                return
        self._answers.append(answer)
        logger.debug(f"Recorded answer for question {answer.question_id} ({len(self._answers)} total)")

    def answers_for_section(self, section_id: int) -> List[UserAnswer]:
        return [a for a in self._answers if a.section_id == section_id]

    def answer_for_question(self, question_id: int) -> Optional[UserAnswer]:
        return next((a for a in self._answers if a.question_id == question_id), None)

    def is_complete(self, expected_count: int = 40) -> bool:
        return len(self._answers) == expected_count

    def reset(self) -> None:
        self._answers.clear()

    @property
    def answers(self) -> List[UserAnswer]:
        return list(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def __iter__(self) -> Iterator[UserAnswer]:
        return iter(list(self._answers))
