import pytest

from services.assessment_engine.navigator import QuizNavigator

@pytest.fixture
def navigator():
    return QuizNavigator([10, 10, 10, 10])

def move_to(navigator, section_index, question_index):
    navigator.section_index = section_index
    navigator.question_index = question_index

def test_starts_at_first_question(navigator):
    assert (navigator.section_index, navigator.question_index) == (0, 0)
    assert navigator.position.section_index == 0
    assert not navigator.can_retreat

def test_for_definition_uses_section_sizes(definition):
    navigator = QuizNavigator.for_definition(definition)
    assert navigator.section_count == 4
    move_to(navigator, 3, 9)
    assert navigator.is_last_question

def test_empty_definition_rejected():
    with pytest.raises(ValueError):
        QuizNavigator([])

def test_advance_within_section(navigator):
    navigator.advance()
    assert (navigator.section_index, navigator.question_index) == (0, 1)

def test_advance_crosses_section_boundary(navigator):
    move_to(navigator, 0, 9)
    navigator.advance()
    assert (navigator.section_index, navigator.question_index) == (1, 0)

def test_advance_at_last_question_is_noop(navigator):
    move_to(navigator, 3, 9)
    for _ in range(5):
        navigator.advance()
    assert (navigator.section_index, navigator.question_index) == (3, 9)

def test_retreat_at_first_question_is_noop(navigator):
    navigator.retreat()
    navigator.retreat()
    assert (navigator.section_index, navigator.question_index) == (0, 0)

def test_retreat_crosses_to_last_question_of_previous_section():
    navigator = QuizNavigator([3, 7, 10])
    move_to(navigator, 2, 0)
    navigator.retreat()
    assert (navigator.section_index, navigator.question_index) == (1, 6)
    move_to(navigator, 1, 0)
    navigator.retreat()
    assert (navigator.section_index, navigator.question_index) == (0, 2)

def test_uneven_sections_advance():
    navigator = QuizNavigator([2, 1, 3])
    visited = [navigator.position.model_dump()]
    for _ in range(6):
        navigator.advance()
        visited.append(navigator.position.model_dump())
    assert [(p["section_index"], p["question_index"]) for p in visited] == [
        (0, 0), (0, 1), (1, 0), (2, 0), (2, 1), (2, 2), (2, 2),
    ]

@pytest.mark.parametrize("start", [(0, 1), (0, 9), (1, 0), (1, 5), (2, 9), (3, 8)])
def test_advance_then_retreat_round_trips(navigator, start):
    move_to(navigator, *start)
    navigator.advance()
    navigator.retreat()
    assert (navigator.section_index, navigator.question_index) == start

def test_jump_to_section(navigator):
    move_to(navigator, 0, 7)
    assert navigator.jump_to_section(2) is True
    assert (navigator.section_index, navigator.question_index) == (2, 0)

@pytest.mark.parametrize("index", [-1, 4, 10])
def test_jump_out_of_range_is_silent_noop(navigator, index):
    move_to(navigator, 1, 3)
    assert navigator.jump_to_section(index) is False
    assert (navigator.section_index, navigator.question_index) == (1, 3)

def test_reset(navigator):
    move_to(navigator, 2, 4)
    navigator.reset()
    assert (navigator.section_index, navigator.question_index) == (0, 0)

def test_is_last_question_only_at_end(navigator):
    move_to(navigator, 2, 9)
    assert not navigator.is_last_question
    move_to(navigator, 3, 9)
    assert navigator.is_last_question
