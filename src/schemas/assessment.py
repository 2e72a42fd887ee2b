from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from services.assessment_engine.models import (
    Question,
    QuizProgress,
    QuizResults,
    RagOption,
    ScoreBand,
    SectionScore,
    UserAnswer,
)
from services.assessment_engine.scorer import percentage, score_band
from services.assessment_engine.session import QuizSession, SessionView

class AnswerRequest(BaseModel):
    question_id: int
    option: RagOption

class SectionInfo(BaseModel):
    id: int
    title: str
    description: str
    question_count: int

class SessionState(BaseModel):
    view: SessionView
    section_index: int
    question_index: int
    section: SectionInfo
    question: Question
    current_answer: Optional[UserAnswer] = None
    can_go_previous: bool
    can_go_next: bool
    is_last_question: bool
    is_complete: bool
    progress: QuizProgress
    section_progress: QuizProgress

    @classmethod
    def from_session(cls, session: QuizSession) -> "SessionState":
        section = session.current_section
        return cls(
            view=session.view,
            section_index=session.navigator.section_index,
            question_index=session.navigator.question_index,
            section=SectionInfo(
                id=section.id,
                title=section.title,
                description=section.description,
                question_count=len(section.questions),
            ),
            question=session.current_question,
            current_answer=session.current_answer,
            can_go_previous=session.can_go_previous,
            can_go_next=session.can_go_next,
            is_last_question=session.navigator.is_last_question,
            is_complete=session.is_complete,
            progress=session.progress(),
            section_progress=session.section_progress(),
        )

class SectionResult(SectionScore):
    percentage: int
    band: ScoreBand

class ResultsResponse(BaseModel):
    overall_score: int
    overall_max_score: int
    overall_percentage: int
    overall_band: ScoreBand
    overall_insight: str
    section_scores: List[SectionResult]
    all_tips: List[str]
    completed_at: datetime

    @classmethod
    def from_results(cls, results: QuizResults) -> "ResultsResponse":
        overall_percentage = percentage(results.overall_score, results.overall_max_score)
        sections = []
        for section in results.section_scores:
            section_percentage = percentage(section.score, section.max_score)
            sections.append(SectionResult(
                **section.model_dump(),
                percentage=section_percentage,
                band=score_band(section_percentage),
            ))
        return cls(
            overall_score=results.overall_score,
            overall_max_score=results.overall_max_score,
            overall_percentage=overall_percentage,
            overall_band=score_band(overall_percentage),
            overall_insight=results.overall_insight,
            section_scores=sections,
            all_tips=results.all_tips,
            completed_at=results.completed_at,
        )
