import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

import yaml
from pydantic import ValidationError

from services.assessment_engine.models import (
    DefinitionLoadError,
    QuizDefinition,
    RagOption,
)

logger = logging.getLogger(__name__)

EXPECTED_SECTIONS = 4
QUESTIONS_PER_SECTION = 10

def parse_insight_table(table: Union[Mapping[str, str], List[Any]]) -> List[Dict[str, Any]]:
    """
    Converts a range-keyed mapping such as {"0-30": "...", "31-60": "..."} into
    an ordered list of {min, max, text} entries. Declaration order is kept so
    lookups stay first-match-wins.
    """
    if isinstance(table, list):
        return table # Already in parsed form
    if not isinstance(table, Mapping):
        raise DefinitionLoadError(f"Insight table must be a mapping of 'min-max' keys, got {type(table).__name__}")

    entries = []
    for key, text in table.items():
        min_part, sep, max_part = str(key).partition("-")
        try:
            if not sep:
                raise ValueError(key)
            entries.append({"min": int(min_part), "max": int(max_part), "text": text})
        except ValueError:
            raise DefinitionLoadError(f"Invalid insight range key '{key}', expected 'min-max'")
    return entries

def _normalise_insight_tables(data: Dict[str, Any]) -> Dict[str, Any]:
    normalised = dict(data)
    if "overallInsights" in normalised:
        normalised["overallInsights"] = parse_insight_table(normalised["overallInsights"])
    sections = []
    for section in normalised.get("sections") or []:
        if not isinstance(section, Mapping):
            sections.append(section) # Left for pydantic to reject
            continue
        section = dict(section)
        if "insightStatements" in section:
            section["insightStatements"] = parse_insight_table(section["insightStatements"])
        sections.append(section)
    normalised["sections"] = sections
    return normalised

def load_quiz_definition_data(
    data: Dict[str, Any],
    expected_sections: int = EXPECTED_SECTIONS,
    questions_per_section: int = QUESTIONS_PER_SECTION,
) -> QuizDefinition:
    """
    Validates raw definition data against the QuizDefinition model and performs
    the shape checks pydantic cannot express.
    """
    if not isinstance(data, Mapping):
        raise DefinitionLoadError("Quiz definition must be a mapping at the top level")

    try:
        definition = QuizDefinition.model_validate(_normalise_insight_tables(data))
    except ValidationError as e:
        raise DefinitionLoadError(f"Invalid quiz data: {e}")

    if len(definition.sections) != expected_sections:
        raise DefinitionLoadError(f"Invalid quiz data: Must have exactly {expected_sections} sections")

    question_ids = set()
    for index, section in enumerate(definition.sections):
        if section.id != index + 1:
            raise DefinitionLoadError(
                f"Invalid quiz data: Section at position {index + 1} has id {section.id}, expected {index + 1}"
            )
        if len(section.questions) != questions_per_section:
            raise DefinitionLoadError(
                f"Invalid quiz data: Section {index + 1} must have exactly {questions_per_section} questions"
            )

        for question in section.questions:
            if question.id in question_ids:
                raise DefinitionLoadError(f"Duplicate question ID found: {question.id}")
            question_ids.add(question.id)

            tags = [a.option for a in question.answers]
            if sorted(tags) != sorted(RagOption):
                raise DefinitionLoadError(
                    f"Question {question.id} must have exactly one Red, Amber and Green answer"
                )

    logger.info(
        f"Quiz definition validated: {len(definition.sections)} sections, {definition.question_count} questions"
    )
    return definition

def load_quiz_definition_from_file(
    file_path: Union[str, Path],
    expected_sections: int = EXPECTED_SECTIONS,
    questions_per_section: int = QUESTIONS_PER_SECTION,
) -> QuizDefinition:
    """
    Loads a quiz definition from a YAML or JSON file, validates it,
    and returns a QuizDefinition object.
    """
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except FileNotFoundError:
        raise DefinitionLoadError(f"File not found: {file_path}")
    except OSError as e:
        raise DefinitionLoadError(f"Cannot read definition file {file_path}: {e}")
    except UnicodeDecodeError as e:
        raise DefinitionLoadError(f"Definition file {file_path} is not valid UTF-8: {e}")
    except json.JSONDecodeError as e:
        raise DefinitionLoadError(f"Error parsing JSON file {file_path}: {e}")
    except yaml.YAMLError as e:
        raise DefinitionLoadError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise DefinitionLoadError(f"Definition file is empty or invalid: {file_path}")

    return load_quiz_definition_data(data, expected_sections, questions_per_section)
