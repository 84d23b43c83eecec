# prep_admin/services/question_service.py
import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from prep_admin.core.errors import NotImplementedBackendError, db_errors
from prep_admin.models.question import Question
from prep_admin.schemas.question import (
    QUESTION_ADAPTER,
    QuestionBase,
    QuestionRead,
    true_false_options,
)
from prep_admin.services.mapping import (
    EntityMapping,
    FieldMap,
    apply_row,
    empty_list,
    id_field,
    map_rows,
    timestamps,
)

logger = logging.getLogger(__name__)


BASE_MAPPING = EntityMapping((
    id_field(),
    FieldMap("question_type"),
    FieldMap("question_text"),
    FieldMap("difficulty"),
    FieldMap("subject_id", blank_to_none=True),
    FieldMap("subject", blank_to_none=True),
    FieldMap("lesson_id", blank_to_none=True),
    FieldMap("image", blank_to_none=True),
    FieldMap("image_hint", blank_to_none=True),
    FieldMap("tag_ids", default=empty_list, read_default=empty_list),
    FieldMap("is_sane"),
    FieldMap("sanity_explanation"),
    FieldMap("is_locked", default=True),
    *timestamps(),
))

VARIANT_MAPPINGS = {
    "mcq": EntityMapping((
        FieldMap("options"),
        FieldMap("correct_option_id"),
    )),
    "true_false": EntityMapping((
        FieldMap("options", read_default=lambda: [o.model_dump() for o in true_false_options()]),
        FieldMap("correct_option_id"),
    )),
    "fill_in_the_blanks": EntityMapping((
        FieldMap("correct_answers", read_default=empty_list),
    )),
    "short_answer": EntityMapping((
        FieldMap("model_answer", blank_to_none=True),
    )),
}

VARIANT_COLUMNS = ("options", "correct_option_id", "correct_answers", "model_answer")


# --- mapping ---

def question_to_row(data: dict, *, partial: bool = False, stored_type: Optional[str] = None) -> dict:
    """
    Flatten a question (domain dict, snake_case keys) into one row.

    On insert, and whenever the type is written, the columns of the other
    variants are set to null. A partial update without a type resolves the
    variant columns against ``stored_type``.
    """
    row = BASE_MAPPING.to_row(data, partial=partial)
    question_type = data.get("question_type") or stored_type
    variant = VARIANT_MAPPINGS.get(question_type)

    if variant is None:
        logger.warning(f"question_to_row: unknown question type {question_type!r}")
        return row

    if not partial or "question_type" in data:
        row.update({column: None for column in VARIANT_COLUMNS})
        row.update(variant.to_row(data))
    else:
        row.update(variant.to_row(data, partial=True))
    return row


def row_to_question(db_obj: Optional[Question]) -> Optional[QuestionRead]:
    """
    Rebuild the tagged union from a flat row.

    Unknown types, and rows that no longer satisfy their variant, fall back
    to the base shape with a warning instead of failing the whole fetch.
    """
    if db_obj is None or not db_obj.id:
        return None

    base = BASE_MAPPING.from_row(db_obj)
    variant = VARIANT_MAPPINGS.get(db_obj.question_type)
    if variant is None:
        logger.warning(
            f"row_to_question: unknown question type {db_obj.question_type!r} "
            f"for question ID {db_obj.id}"
        )
        return QuestionBase.model_validate(base)

    try:
        return QUESTION_ADAPTER.validate_python({**base, **variant.from_row(db_obj)})
    except ValidationError as e:
        logger.warning(f"row_to_question: question {db_obj.id} does not match its type: {e}")
        return QuestionBase.model_validate(base)


# --- CRUD ---

def add_question(db: Session, *, data: dict) -> QuestionRead:
    """
    Insert a question from its domain dict (``model_dump()`` of a variant).
    """
    db_obj = Question(**question_to_row(data))
    with db_errors(db, "add_question"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return row_to_question(db_obj)


def get_question_row(db: Session, question_id: str) -> Optional[Question]:
    with db_errors(db, "get_question_by_id"):
        return db.get(Question, question_id)


def get_question_by_id(db: Session, question_id: str) -> Optional[QuestionRead]:
    return row_to_question(get_question_row(db, question_id))


def list_questions(db: Session, *, skip: int = 0, limit: Optional[int] = None) -> List[QuestionRead]:
    with db_errors(db, "list_questions"):
        query = db.query(Question).order_by(Question.created_at.desc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        rows = query.all()
    return map_rows(rows, row_to_question)


def list_questions_for_lesson(db: Session, lesson_id: str) -> List[QuestionRead]:
    with db_errors(db, "list_questions_for_lesson"):
        rows = (
            db.query(Question)
            .filter(Question.lesson_id == lesson_id)
            .order_by(Question.created_at.asc())
            .all()
        )
    return map_rows(rows, row_to_question)


class InvalidQuestionError(ValueError):
    """An update would leave the question in a shape its type does not allow."""

    def __init__(self, errors: list):
        self.errors = errors
        super().__init__(f"invalid question: {errors}")


def _merged_question(db_obj: Question, data: dict) -> dict:
    """
    Stored question with ``data`` applied on top. When the type changes the
    stored variant fields are left out, so the new type must be complete
    from ``data`` alone.
    """
    question_type = data.get("question_type", db_obj.question_type)
    merged = BASE_MAPPING.from_row(db_obj)
    variant = VARIANT_MAPPINGS.get(db_obj.question_type)
    if variant is not None and question_type == db_obj.question_type:
        merged.update(variant.from_row(db_obj))
    merged.update(data)
    merged["question_type"] = question_type
    return merged


def validate_update(db_obj: Question, data: dict) -> None:
    merged = _merged_question(db_obj, data)
    try:
        if merged["question_type"] in VARIANT_MAPPINGS:
            QUESTION_ADAPTER.validate_python(merged)
        else:
            QuestionBase.model_validate(merged)
    except ValidationError as e:
        raise InvalidQuestionError(e.errors(include_url=False))


def update_question(db: Session, *, db_obj: Question, data: dict) -> QuestionRead:
    """
    Write the given fields only. Sending ``question_type`` replaces the
    variant columns as a whole.

    The stored question merged with ``data`` must still be a valid question
    of its type, otherwise InvalidQuestionError is raised and nothing is
    written.
    """
    validate_update(db_obj, data)
    row = question_to_row(data, partial=True, stored_type=db_obj.question_type)
    if not row:
        logger.warning(f"update_question called with no data to update for id: {db_obj.id}")
        return row_to_question(db_obj)

    apply_row(db_obj, row)
    with db_errors(db, "update_question"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return row_to_question(db_obj)


def delete_question(db: Session, *, db_obj: Question) -> None:
    with db_errors(db, "delete_question"):
        db.delete(db_obj)
        db.commit()


def import_questions_batch(db: Session, questions: List[dict]) -> None:
    raise NotImplementedBackendError("import_questions_batch")


def unlink_question_from_lesson(db: Session, question_id: str) -> None:
    raise NotImplementedBackendError("unlink_question_from_lesson")
