# src/reports/text_report.py
# Plain-text renderings of the assessment results for copying and sharing.

from services.assessment_engine.models import QuizResults
from services.assessment_engine.scorer import percentage

RULE_WIDTH = 50

def generate_text_report(results: QuizResults, title: str = "RAG Assessment Results") -> str:
    """
    Renders the same content as the PDF report without formatting: the overall
    score and insight, then each section with its score, insight and numbered
    recommendations.
    """
    lines = [
        "=" * RULE_WIDTH,
        title.upper(),
        "=" * RULE_WIDTH,
        "",
        f"Date: {results.completed_at.date().isoformat()}",
        "",
        "OVERALL SCORE",
        "-" * RULE_WIDTH,
        f"{results.overall_score} out of {results.overall_max_score} points "
        f"({percentage(results.overall_score, results.overall_max_score)}%)",
        "",
        results.overall_insight,
        "",
        "SECTION BREAKDOWN",
        "=" * RULE_WIDTH,
        "",
    ]

    for section in results.section_scores:
        lines.extend([
            section.section_title,
            "-" * RULE_WIDTH,
            f"Score: {section.score}/{section.max_score} ({percentage(section.score, section.max_score)}%)",
            "",
            section.insight,
            "",
            "Recommendations:",
        ])
        lines.extend(f"  {index}. {tip}" for index, tip in enumerate(section.tips, start=1))
        lines.append("")

    return "\n".join(lines) + "\n"

def generate_share_text(results: QuizResults) -> str:
    """Short summary used when sharing results or copying them to the clipboard."""
    return (
        "I completed the RAG Assessment Quiz!\n\n"
        f"My Score: {results.overall_score}/{results.overall_max_score} "
        f"({percentage(results.overall_score, results.overall_max_score)}%)\n\n"
        f"{results.overall_insight}"
    )

def report_filename(results: QuizResults, extension: str = "pdf") -> str:
    return f"RAG-Assessment-Results-{results.completed_at.date().isoformat()}.{extension}"
