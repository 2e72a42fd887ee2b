# services/assessment_engine/results.py
# Assembles the results snapshot shown at the end of the assessment.

import logging
from datetime import datetime, timezone
from typing import Sequence

from services.assessment_engine import scorer
from services.assessment_engine.models import (
    IncompleteQuizError,
    OVERALL_MAX_SCORE,
    QuizDefinition,
    QuizResults,
    SECTION_MAX_SCORE,
    SectionScore,
    UserAnswer,
)

logger = logging.getLogger(__name__)

def build_results(answers: Sequence[UserAnswer], definition: QuizDefinition) -> QuizResults:
    """
    Builds a fresh QuizResults from a complete set of answers.

    Args:
        answers: Answers in ledger order, exactly one per question.
        definition: The quiz definition the answers belong to.

    Returns:
        A new QuizResults stamped with the current UTC time. Nothing is cached,
        so two calls differ only in completed_at.

    Raises:
        IncompleteQuizError: If the number of answers does not match the
            number of questions in the definition.
    """
    expected = definition.question_count
    if len(answers) != expected:
        raise IncompleteQuizError(
            f"cannot compute results for an incomplete quiz ({len(answers)} of {expected} answered)"
        )

    section_scores = []
    for section in definition.sections:
        score = scorer.section_score(section.id, answers)
        section_scores.append(SectionScore(
            section_id=section.id,
            section_title=section.title,
            score=score,
            max_score=SECTION_MAX_SCORE,
            insight=scorer.insight_for_score(score, section.insight_statements),
            tips=scorer.section_tips(section.id, answers),
        ))

    total = scorer.overall_score(answers)
    results = QuizResults(
        overall_score=total,
        overall_max_score=OVERALL_MAX_SCORE,
        overall_insight=scorer.insight_for_score(total, definition.overall_insights),
        section_scores=section_scores,
        all_tips=scorer.all_tips(answers),
        completed_at=datetime.now(timezone.utc),
    )
    logger.info(f"Results assembled: overall {total}/{OVERALL_MAX_SCORE}, sections {[s.score for s in section_scores]}")
    return results
