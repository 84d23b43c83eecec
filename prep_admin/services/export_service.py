# prep_admin/services/export_service.py
"""
Snapshot exports of a (filtered) question list.

JSON keeps the records as the API returns them, tag ids included. The
spreadsheet flattens each question into one row: variant fields get their
own columns and tag ids are resolved to names.
"""
import io
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd

from prep_admin.schemas.question import QuestionBase

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


LEADING_COLUMNS = (
    "questionText",
    "questionType",
    "difficulty",
    "subject",
    "subjectId",
    "lessonId",
    "tags",
    "isSane",
    "sanityExplanation",
)
TRAILING_COLUMNS = (
    "correctOptionText",
    "correctOptionId",
    "correctAnswers",
    "modelAnswer",
    "createdAt",
    "updatedAt",
)


class EmptyExportError(Exception):
    pass


def spreadsheet_columns(option_count: int) -> List[str]:
    options = [f"option{i + 1}" for i in range(option_count)]
    return [*LEADING_COLUMNS, *options, *TRAILING_COLUMNS]


def _iso(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value


def questions_to_json(questions: Sequence[QuestionBase]) -> bytes:
    if not questions:
        raise EmptyExportError("no data to export")
    records = [q.model_dump(mode="json", by_alias=True) for q in questions]
    return json.dumps(records, ensure_ascii=False, indent=2).encode("utf-8")


def flatten_question(
    q: QuestionBase,
    subject_names: Mapping[str, str],
    tag_names: Mapping[str, str],
) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "questionText": q.question_text,
        "questionType": q.question_type,
        "difficulty": q.difficulty,
        "subject": subject_names.get(q.subject_id or "", q.subject),
        "subjectId": q.subject_id,
        "lessonId": q.lesson_id,
        "tags": ", ".join(tag_names.get(tag_id, tag_id) for tag_id in q.tag_ids),
        "isSane": q.is_sane,
        "sanityExplanation": q.sanity_explanation,
    }

    options = getattr(q, "options", None)
    correct_option_id = getattr(q, "correct_option_id", None)
    if options:
        for index, opt in enumerate(options):
            row[f"option{index + 1}"] = opt.text
        correct = next((opt for opt in options if opt.id == correct_option_id), None)
        row["correctOptionText"] = correct.text if correct else "N/A"
    row["correctOptionId"] = correct_option_id

    answers = getattr(q, "correct_answers", None)
    row["correctAnswers"] = " | ".join(answers) if answers else None
    row["modelAnswer"] = getattr(q, "model_answer", None)
    row["createdAt"] = _iso(q.created_at)
    row["updatedAt"] = _iso(q.updated_at)
    return row


def questions_to_xlsx(
    questions: Sequence[QuestionBase],
    subject_names: Mapping[str, str],
    tag_names: Mapping[str, str],
) -> bytes:
    if not questions:
        raise EmptyExportError("no data to export")

    rows: List[Dict[str, Any]] = [flatten_question(q, subject_names, tag_names) for q in questions]
    option_count = max(len(getattr(q, "options", None) or []) for q in questions)
    df = pd.DataFrame(rows, columns=spreadsheet_columns(option_count))

    buffer = io.BytesIO()
    df.to_excel(buffer, sheet_name="Sheet1", index=False, engine="openpyxl")
    logger.info(f"Exported {len(rows)} questions to XLSX")
    return buffer.getvalue()
