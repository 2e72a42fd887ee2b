from datetime import datetime, timezone

import pytest

from services.assessment_engine.results import build_results
from src.reports.text_report import generate_share_text, generate_text_report, report_filename

@pytest.fixture
def results(definition, answers_for):
    answers = answers_for("Green")[:10] + answers_for("Amber")[10:]
    snapshot = build_results(answers, definition)
    return snapshot.model_copy(update={"completed_at": datetime(2026, 3, 4, 9, 30, tzinfo=timezone.utc)})

def test_text_report_header_and_overall(results):
    report = generate_text_report(results)
    lines = report.splitlines()
    assert lines[0] == "=" * 50
    assert lines[1] == "RAG ASSESSMENT RESULTS"
    assert "Date: 2026-03-04" in lines
    assert "250 out of 400 points (63%)" in report
    assert results.overall_insight in report

def test_text_report_lists_every_section_with_numbered_tips(results):
    report = generate_text_report(results)
    for section in results.section_scores:
        assert section.section_title in report
        assert f"Score: {section.score}/{section.max_score}" in report
    assert "  1. tip-1-green" in report
    assert "  10. tip-10-green" in report
    assert "  1. tip-31-amber" in report
    assert report.count("Recommendations:") == 4

def test_text_report_custom_title(results):
    assert "TEAM HEALTH CHECK" in generate_text_report(results, title="Team health check")

def test_share_text(results):
    text = generate_share_text(results)
    assert text.startswith("I completed the RAG Assessment Quiz!")
    assert "My Score: 250/400 (63%)" in text
    assert text.endswith(results.overall_insight)

def test_report_filename(results):
    assert report_filename(results) == "RAG-Assessment-Results-2026-03-04.pdf"
    assert report_filename(results, "txt") == "RAG-Assessment-Results-2026-03-04.txt"
