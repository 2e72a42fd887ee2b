import logging
from typing import List, Sequence

from services.assessment_engine.models import NavigationPosition, QuizDefinition

logger = logging.getLogger(__name__)

class QuizNavigator:
    """
    Cursor over the (section, question) grid of a quiz definition.

    The navigator does not know about answers. Callers are expected to gate
    advance() on the current question having a recorded answer, and to switch
    to the results view instead of advancing past the last question.
    """
    def __init__(self, question_counts: Sequence[int]):
        """
        Args:
            question_counts: Number of questions in each section, in section order.
        """
        if not question_counts:
            raise ValueError("Navigator needs at least one section")
        self._question_counts: List[int] = list(question_counts)
        self.section_index = 0
        self.question_index = 0

    @classmethod
    def for_definition(cls, definition: QuizDefinition) -> "QuizNavigator":
        return cls([len(s.questions) for s in definition.sections])

    @property
    def section_count(self) -> int:
        return len(self._question_counts)

    @property
    def position(self) -> NavigationPosition:
        return NavigationPosition(section_index=self.section_index, question_index=self.question_index)

    def _last_question_index(self, section_index: int) -> int:
        return self._question_counts[section_index] - 1

    @property
    def can_retreat(self) -> bool:
        return self.section_index > 0 or self.question_index > 0

    @property
    def is_last_question(self) -> bool:
        return (self.section_index == self.section_count - 1
                and self.question_index == self._last_question_index(self.section_index))

    def advance(self) -> None:
        if self.question_index < self._last_question_index(self.section_index):
            self.question_index += 1
        elif self.section_index < self.section_count - 1:
            self.section_index += 1
            self.question_index = 0
        # Last question of the last section: stay put

    def retreat(self) -> None:
        if self.question_index > 0:
            self.question_index -= 1
        elif self.section_index > 0:
            self.section_index -= 1
            self.question_index = self._last_question_index(self.section_index)

    def jump_to_section(self, index: int) -> bool:
        """
        Moves to the first question of the given section. Out-of-range indexes
        leave the position unchanged and return False.
        """
        if index < 0 or index >= self.section_count:
            logger.debug(f"Ignoring jump to out-of-range section index {index}")
            return False
        self.section_index = index
        self.question_index = 0
        return True

    def reset(self) -> None:
        self.section_index = 0
        self.question_index = 0
