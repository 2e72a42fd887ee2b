import logging
import sys
from datetime import datetime, timezone

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "rag-assessment"

# Keys callers pass through `extra` to tie a record to a point in the quiz
QUIZ_CONTEXT_FIELDS = ("view", "question_id", "section_id", "option")

class AssessmentJsonFormatter(jsonlogger.JsonFormatter):
    """
    One JSON object per record. Quiz context given through ``extra`` is
    grouped under a ``quiz`` key so answer and navigation logs can be filtered
    on it.
    """
    def add_fields(self, log_record, record, message_dict):
        super(AssessmentJsonFormatter, self).add_fields(log_record, record, message_dict)
        log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['service'] = SERVICE_NAME
        log_record['location'] = f"{record.module}:{record.lineno}"

        quiz = {}
        for field in QUIZ_CONTEXT_FIELDS:
            if field in log_record:
                quiz[field] = log_record.pop(field)
        if quiz:
            log_record['quiz'] = quiz


def setup_logging(log_level_str: str = "INFO", json_logs: bool = True):
    """
    Configures logging for the assessment API. JSON output by default,
    plain text when json_logs is False (handy when running locally).
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Called from the app lifespan, which may run more than once per process in tests
    if any(getattr(h, "_rag_assessment_handler", False) for h in root_logger.handlers):
        root_logger.debug(f"Logging already configured. Current level: {logging.getLevelName(root_logger.getEffectiveLevel())}")
        return

    log_handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        formatter = AssessmentJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
    else:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    log_handler.setFormatter(formatter)
    log_handler._rag_assessment_handler = True
    root_logger.addHandler(log_handler)
    root_logger.info(f"Logging configured with level: {logging.getLevelName(log_level)}")
