import importlib
import logging
from types import ModuleType
from typing import Optional

from services.assessment_engine.models import BrandColors, QuizResults, ReportGenerationError
from src.reports.text_report import generate_share_text, generate_text_report, report_filename

logger = logging.getLogger(__name__)

PDF_RENDERER_MODULE = "src.reports.pdf_report"

class ReportService:
    """
    Produces report documents from a results snapshot.

    The PDF renderer (and reportlab with it) is only imported the first time a
    PDF is requested. It does not touch session state, so a failed render
    leaves the quiz exactly as it was.
    """
    def __init__(self, title: str = "RAG Assessment Results", renderer_module: str = PDF_RENDERER_MODULE):
        self.title = title
        self._renderer_module = renderer_module
        self._renderer: Optional[ModuleType] = None

    @property
    def renderer_loaded(self) -> bool:
        return self._renderer is not None

    def _get_renderer(self) -> ModuleType:
        if self._renderer is None:
            logger.info(f"Loading PDF renderer '{self._renderer_module}'")
            try:
                self._renderer = importlib.import_module(self._renderer_module)
            except ImportError as e:
                raise ReportGenerationError(f"PDF renderer unavailable: {e}") from e
        return self._renderer

    def render_pdf(self, results: QuizResults, brand_colors: BrandColors) -> bytes:
        renderer = self._get_renderer()
        try:
            return renderer.render_pdf(results, brand_colors, self.title)
        except ReportGenerationError:
            raise
        except Exception as e:
            logger.exception(f"PDF generation failed: {e}")
            raise ReportGenerationError(f"Failed to generate PDF: {e}") from e

    def render_text(self, results: QuizResults) -> str:
        return generate_text_report(results, self.title)

    def share_text(self, results: QuizResults) -> str:
        return generate_share_text(results)

    def filename(self, results: QuizResults, extension: str = "pdf") -> str:
        return report_filename(results, extension)
