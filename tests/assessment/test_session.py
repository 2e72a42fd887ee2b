import logging

import pytest

from services.assessment_engine.models import (
    IncompleteQuizError,
    InvalidAnswerError,
    RagOption,
    UnknownQuestionError,
)
from services.assessment_engine.session import QuizSession

@pytest.fixture
def session(definition):
    quiz = QuizSession(definition)
    quiz.start()
    return quiz

def answer_current(session, option=RagOption.GREEN):
    return session.select_answer(session.current_question.id, option)

def complete_quiz(session, option=RagOption.GREEN):
    for _ in range(session.definition.question_count):
        answer_current(session, option)
        session.next_question()

def test_new_session_shows_start_view(definition):
    quiz = QuizSession(definition)
    assert quiz.view == "start"
    assert quiz.current_question.id == 1

def test_start_enters_quiz_view_with_clean_state(session):
    answer_current(session)
    session.next_question()
    session.start()
    assert session.view == "quiz"
    assert len(session.ledger) == 0
    assert session.navigator.position.model_dump() == {"section_index": 0, "question_index": 0}

def test_select_answer_builds_snapshot_from_definition(session):
    answer = session.select_answer(12, RagOption.AMBER)
    assert answer.question_id == 12
    assert answer.section_id == 2
    assert answer.selected_option == RagOption.AMBER
    assert answer.score == 5
    assert answer.tip == "tip-12-amber"
    assert session.ledger.answer_for_question(12) == answer

def test_select_answer_accepts_plain_strings(session):
    answer = session.select_answer(1, "Red")
    assert answer.score == 0

def test_reanswering_replaces_previous_choice(session):
    session.select_answer(1, RagOption.RED)
    session.select_answer(1, RagOption.GREEN)
    assert len(session.ledger) == 1
    assert session.current_answer.score == 10

def test_select_answer_unknown_question(session):
    with pytest.raises(UnknownQuestionError, match="Unknown question ID: 99"):
        session.select_answer(99, RagOption.GREEN)

def test_select_answer_unknown_option(session):
    with pytest.raises(InvalidAnswerError, match="has no 'Purple' answer"):
        session.select_answer(1, "Purple")
    assert len(session.ledger) == 0

def test_next_is_gated_on_current_answer(session):
    assert not session.can_go_next
    assert session.next_question() is False
    assert session.current_question.id == 1

    answer_current(session)
    assert session.can_go_next
    assert session.next_question() is True
    assert session.current_question.id == 2

def test_previous_from_start_does_nothing(session):
    assert not session.can_go_previous
    assert session.previous_question() is False

def test_back_navigation_shows_existing_answer(session):
    answer_current(session, RagOption.AMBER)
    session.next_question()
    session.previous_question()
    assert session.current_answer.selected_option == RagOption.AMBER

def test_section_progress_and_overall_progress(session):
    for _ in range(3):
        answer_current(session)
        session.next_question()
    assert session.progress().answered == 3
    assert session.progress().percentage == 8  # 3/40 = 7.5 rounds up
    assert session.section_progress().total == 10
    assert session.section_progress().answered == 3

def test_go_to_section(session):
    assert session.go_to_section(2) is True
    assert session.current_section.id == 3
    assert session.current_question.id == 21
    assert session.go_to_section(7) is False
    assert session.current_section.id == 3

def test_completing_last_question_shows_results(session):
    complete_quiz(session)
    assert session.navigator.is_last_question
    assert session.is_complete
    assert session.view == "results"

def test_last_question_without_full_ledger_stays_in_quiz(session):
    session.go_to_section(3)
    for _ in range(9):
        session.navigator.advance()
    answer_current(session)
    assert session.next_question() is False
    assert session.view == "quiz"

def test_results_for_incomplete_quiz_returns_to_quiz_view(session):
    session.view = "results"
    with pytest.raises(IncompleteQuizError):
        session.results()
    assert session.view == "quiz"

def test_results_after_completion(session):
    complete_quiz(session, RagOption.AMBER)
    results = session.results()
    assert results.overall_score == 200
    assert [s.score for s in results.section_scores] == [50, 50, 50, 50]

def test_restart_returns_to_start_view(session):
    complete_quiz(session)
    session.restart()
    assert session.view == "start"
    assert len(session.ledger) == 0
    assert session.current_question.id == 1

def test_select_answer_logs_quiz_context(session, caplog):
    caplog.set_level(logging.INFO, logger="services.assessment_engine.session")
    session.select_answer(12, RagOption.AMBER)
    record = next(r for r in caplog.records if r.getMessage() == "Answer selected")
    assert (record.view, record.question_id, record.section_id, record.option) == ("quiz", 12, 2, "Amber")
