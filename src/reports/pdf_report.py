# src/reports/pdf_report.py
# Builds the downloadable PDF report with reportlab.
# Imported lazily through src.reports.service; nothing else should import it directly.

import logging
from io import BytesIO
from typing import Dict, List

from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.flowables import Flowable, HRFlowable
from xml.sax.saxutils import escape

from services.assessment_engine.models import BrandColors, QuizResults, SectionScore
from services.assessment_engine.scorer import percentage, score_band

logger = logging.getLogger(__name__)

GREY_TEXT = HexColor("#666666")
LIGHT_BG = HexColor("#f8f9fa")
FOOTER_TEXT = "RAG Assessment Quiz - Page {page}"

def make_styles(brand_colors: BrandColors) -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    primary = HexColor(brand_colors.primary)
    return {
        "title": ParagraphStyle("ReportTitle", parent=base["Title"], fontSize=24, leading=30,
                                textColor=primary, alignment=0),
        "subtitle": ParagraphStyle("ReportSubtitle", parent=base["Normal"], fontSize=11, textColor=GREY_TEXT),
        "score": ParagraphStyle("ScoreDisplay", parent=base["Title"], fontSize=44, leading=52, textColor=primary),
        "score_sub": ParagraphStyle("ScoreSub", parent=base["Normal"], fontSize=14, leading=18,
                                    textColor=GREY_TEXT, alignment=1),
        "heading": ParagraphStyle("SectionHeading", parent=base["Heading2"], textColor=primary,
                                  spaceBefore=12, spaceAfter=8),
        "insight": ParagraphStyle("Insight", parent=base["Normal"], fontSize=10.5, leading=16,
                                  textColor=HexColor("#333333")),
        "summary_insight": ParagraphStyle("SummaryInsight", parent=base["Normal"], fontSize=9, leading=12,
                                          textColor=GREY_TEXT, spaceBefore=2),
        "tip": ParagraphStyle("Tip", parent=base["Normal"], fontSize=10, leading=15, leftIndent=12,
                              spaceAfter=4, textColor=HexColor("#444444")),
    }

def _band_colour(brand_colors: BrandColors, percent: int):
    band = score_band(percent)
    if band == "default":
        return colors.grey
    return HexColor(getattr(brand_colors, band))

def _insight_box(text: str, styles: Dict[str, ParagraphStyle], accent) -> Table:
    box = Table([[Paragraph(escape(text), styles["insight"])]], colWidths=["100%"])
    box.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), colors.white),
        ("LINEBEFORE", (0, 0), (0, -1), 3, accent),
        ("LEFTPADDING", (0, 0), (-1, -1), 10),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    return box

def _section_summary_table(sections: List[SectionScore], brand_colors: BrandColors,
                           styles: Dict[str, ParagraphStyle]) -> Table:
    data = [["Section", "Score", "%"]]
    band_styles = []
    for row, section in enumerate(sections, start=1):
        percent = percentage(section.score, section.max_score)
        data.append([
            [
                Paragraph(f"<b>{escape(section.section_title)}</b>", styles["insight"]),
                Paragraph(escape(section.insight), styles["summary_insight"]),
            ],
            f"{section.score}/{section.max_score}",
            f"{percent}%",
        ])
        band_styles.append(("TEXTCOLOR", (2, row), (2, row), _band_colour(brand_colors, percent)))

    table = Table(data, colWidths=[100 * mm, 30 * mm, 30 * mm], hAlign="LEFT")
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HexColor(brand_colors.primary)),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, LIGHT_BG]),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ("ALIGN", (1, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("FONTNAME", (2, 1), (2, -1), "Helvetica-Bold"),
    ] + band_styles))
    return table

def build_story(results: QuizResults, brand_colors: BrandColors,
                title: str = "RAG Assessment Results") -> List[Flowable]:
    """
    Lays out the report: a summary page with every section condensed, then one
    page per section with its insight and full recommendation list.
    """
    styles = make_styles(brand_colors)
    primary = HexColor(brand_colors.primary)
    secondary = HexColor(brand_colors.secondary)
    overall_percent = percentage(results.overall_score, results.overall_max_score)

    story: List[Flowable] = [
        Paragraph(escape(title), styles["title"]),
        Paragraph(f"Generated on {results.completed_at.date().isoformat()}", styles["subtitle"]),
        HRFlowable(width="100%", thickness=2, color=primary, spaceBefore=6, spaceAfter=12),
        Paragraph(str(results.overall_score), styles["score"]),
        Paragraph(f"out of {results.overall_max_score} points ({overall_percent}%)", styles["score_sub"]),
        Spacer(1, 6 * mm),
        _insight_box(results.overall_insight, styles, secondary),
        Paragraph("Section Breakdown", styles["heading"]),
        _section_summary_table(results.section_scores, brand_colors, styles),
    ]

    for section in results.section_scores:
        percent = percentage(section.score, section.max_score)
        story.extend([
            PageBreak(),
            Paragraph(escape(f"Section {section.section_id}: {section.section_title}"), styles["title"]),
            Paragraph(f"Score: {section.score}/{section.max_score} ({percent}%)", styles["subtitle"]),
            HRFlowable(width="100%", thickness=2, color=primary, spaceBefore=6, spaceAfter=12),
            _insight_box(section.insight, styles, _band_colour(brand_colors, percent)),
            Paragraph("Recommendations", styles["heading"]),
        ])
        story.extend(
            Paragraph(f"{index}. {escape(tip)}", styles["tip"])
            for index, tip in enumerate(section.tips, start=1)
        )

    return story

def _draw_footer(canvas, doc):
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    canvas.setFillColor(colors.grey)
    canvas.drawCentredString(A4[0] / 2, 15 * mm, FOOTER_TEXT.format(page=doc.page))
    canvas.restoreState()

def render_pdf(results: QuizResults, brand_colors: BrandColors,
               title: str = "RAG Assessment Results") -> bytes:
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=20 * mm, rightMargin=20 * mm,
        topMargin=20 * mm, bottomMargin=25 * mm,
        title=title,
    )
    doc.build(build_story(results, brand_colors, title),
              onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    logger.info(f"PDF report rendered ({len(results.section_scores) + 1} pages)")
    return buf.getvalue()
