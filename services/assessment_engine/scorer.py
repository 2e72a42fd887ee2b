# services/assessment_engine/scorer.py
# Scoring helpers for the RAG assessment: sums, insight lookup and banding.

import logging
import math
from typing import Iterable, List, Sequence

from services.assessment_engine.models import InsightRange, QuizProgress, ScoreBand, UserAnswer

logger = logging.getLogger(__name__)

NO_MATCHING_INSIGHT = "Unable to determine insight for this score."

# Lower bounds (inclusive) for the display bands, checked top-down
GREEN_THRESHOLD = 70
AMBER_THRESHOLD = 40

def section_score(section_id: int, answers: Iterable[UserAnswer]) -> int:
    """Total score of the answers belonging to one section. Not clamped."""
    return sum(a.score for a in answers if a.section_id == section_id)

def overall_score(answers: Iterable[UserAnswer]) -> int:
    return sum(a.score for a in answers)

def insight_for_score(score: int, table: Sequence[InsightRange]) -> str:
    """
    Returns the text of the first range containing the score.

    Ranges are expected to be disjoint and exhaustive; this is not checked, so
    with overlapping ranges the one declared first wins.
    """
    for insight_range in table:
        if insight_range.contains(score):
            return insight_range.text
    logger.warning(f"No insight range matches score {score}")
    return NO_MATCHING_INSIGHT

def percentage(score: int, max_score: int) -> int:
    if max_score == 0:
        return 0
    # Half-up rounding; round() would use banker's rounding
    return int(math.floor(score / max_score * 100 + 0.5))

def score_band(percent: int) -> ScoreBand:
    if percent >= GREEN_THRESHOLD:
        return "green"
    if percent >= AMBER_THRESHOLD:
        return "amber"
    if percent > 0:
        return "red"
    return "default" # Zero is kept apart from a poor score

def section_tips(section_id: int, answers: Iterable[UserAnswer]) -> List[str]:
    return [a.tip for a in answers if a.section_id == section_id]

def all_tips(answers: Iterable[UserAnswer]) -> List[str]:
    return [a.tip for a in answers]

def quiz_progress(answers: Sequence[UserAnswer], total_questions: int = 40) -> QuizProgress:
    answered = len(answers)
    return QuizProgress(
        answered=answered,
        total=total_questions,
        percentage=percentage(answered, total_questions),
    )
