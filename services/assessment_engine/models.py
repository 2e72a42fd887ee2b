from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SECTION_MAX_SCORE = 100 # 10 questions x 10 points
OVERALL_MAX_SCORE = 400 # 4 sections x SECTION_MAX_SCORE

class RagOption(str, Enum):
    RED = "Red"
    AMBER = "Amber"
    GREEN = "Green"

ScoreBand = Literal["red", "amber", "green", "default"]

class AnswerOption(BaseModel):
    option: RagOption
    score: int # Convention: Red=0, Amber=5, Green=10
    tip: str

class Question(BaseModel):
    id: int
    text: str
    answers: List[AnswerOption]

    def option_for(self, option: RagOption) -> Optional[AnswerOption]:
        return next((a for a in self.answers if a.option == option), None)

class InsightRange(BaseModel):
    """A single inclusive score range mapped to its insight text."""
    min: int
    max: int
    text: str

    def contains(self, score: int) -> bool:
        return self.min <= score <= self.max

class Section(BaseModel):
    id: int
    title: str
    description: str
    questions: List[Question]
    insight_statements: List[InsightRange] = Field(..., alias='insightStatements')

    model_config = ConfigDict(populate_by_name=True)

class BrandColors(BaseModel):
    primary: str = "#1e3a5f"
    secondary: str = "#3b82f6"
    red: str = "#dc2626"
    amber: str = "#f59e0b"
    green: str = "#16a34a"

class QuizDefinition(BaseModel):
    brand_colors: BrandColors = Field(default_factory=BrandColors, alias='brandColors')
    sections: List[Section]
    overall_insights: List[InsightRange] = Field(..., alias='overallInsights')

    model_config = ConfigDict(populate_by_name=True)

    @property
    def question_count(self) -> int:
        return sum(len(s.questions) for s in self.sections)

    def section_by_id(self, section_id: int) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)

    def question_by_id(self, question_id: int) -> Optional[Question]:
        for section in self.sections:
            for question in section.questions:
                if question.id == question_id:
                    return question
        return None

    def section_for_question(self, question_id: int) -> Optional[Section]:
        for section in self.sections:
            if any(q.id == question_id for q in section.questions):
                return section
        return None

class UserAnswer(BaseModel):
    """Snapshot of the chosen option plus its parent references."""
    question_id: int
    section_id: int
    selected_option: RagOption
    score: int
    tip: str

    model_config = ConfigDict(frozen=True)

class NavigationPosition(BaseModel):
    section_index: int = 0
    question_index: int = 0

class SectionScore(BaseModel):
    section_id: int
    section_title: str
    score: int
    max_score: int = SECTION_MAX_SCORE
    insight: str
    tips: List[str]

class QuizResults(BaseModel):
    overall_score: int
    overall_max_score: int = OVERALL_MAX_SCORE
    overall_insight: str
    section_scores: List[SectionScore]
    all_tips: List[str]
    completed_at: datetime

class QuizProgress(BaseModel):
    answered: int
    total: int
    percentage: int

# Custom Error Classes
class DefinitionLoadError(ValueError):
    """Raised when the quiz definition cannot be read or fails shape validation."""
    pass

class IncompleteQuizError(ValueError):
    """Raised when results are requested before every question is answered."""
    pass

class InvalidAnswerError(ValueError):
    """Raised when an answer references an unknown question or option."""
    pass

class UnknownQuestionError(InvalidAnswerError):
    """Raised when an answer references a question id the definition does not have."""
    pass

class ReportGenerationError(RuntimeError):
    """Raised when rendering a results document fails."""
    pass
