import copy

import pytest

from services.assessment_engine.loader import load_quiz_definition_data
from services.assessment_engine.models import RagOption, UserAnswer

OPTION_SCORES = {"Red": 0, "Amber": 5, "Green": 10}

SECTION_INSIGHTS = {
    "0-30": "Section needs attention",
    "31-60": "Section is developing",
    "61-100": "Section is strong",
}

OVERALL_INSIGHTS = {
    "0-120": "Early stage overall",
    "121-240": "Developing overall",
    "241-400": "Strong overall",
}

def _build_definition_data(section_count: int = 4, questions_per_section: int = 10) -> dict:
    sections = []
    question_id = 1
    for section_id in range(1, section_count + 1):
        questions = []
        for _ in range(questions_per_section):
            questions.append({
                "id": question_id,
                "text": f"Question {question_id}?",
                "answers": [
                    {"option": option, "score": score, "tip": f"tip-{question_id}-{option.lower()}"}
                    for option, score in OPTION_SCORES.items()
                ],
            })
            question_id += 1
        sections.append({
            "id": section_id,
            "title": f"Section {section_id}",
            "description": f"Description {section_id}",
            "questions": questions,
            "insightStatements": dict(SECTION_INSIGHTS),
        })
    return {
        "brandColors": {"primary": "#112233", "secondary": "#445566", "red": "#ff0000",
                        "amber": "#ffbf00", "green": "#00ff00"},
        "sections": sections,
        "overallInsights": dict(OVERALL_INSIGHTS),
    }

@pytest.fixture
def definition_data():
    """Raw definition dict in the on-disk format (range-keyed insight mappings)."""
    return _build_definition_data()

@pytest.fixture
def definition(definition_data):
    return load_quiz_definition_data(copy.deepcopy(definition_data))

@pytest.fixture
def make_answer():
    """Builds a UserAnswer the way the session would for a given option."""
    def _make(question_id: int, section_id: int, option: str = "Green", score: int = None) -> UserAnswer:
        return UserAnswer(
            question_id=question_id,
            section_id=section_id,
            selected_option=RagOption(option),
            score=OPTION_SCORES[option] if score is None else score,
            tip=f"tip-{question_id}-{option.lower()}",
        )
    return _make

@pytest.fixture
def answers_for(definition, make_answer):
    """Returns a function producing one answer per question, all with the same option."""
    def _answers(option: str = "Green"):
        return [
            make_answer(q.id, s.id, option)
            for s in definition.sections
            for q in s.questions
        ]
    return _answers
