# prep_admin/services/exam_service.py
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from prep_admin.core.errors import NotImplementedBackendError, db_errors
from prep_admin.models.exam import Exam, ExamQuestion
from prep_admin.models.question import Question
from prep_admin.schemas.exam import (
    ExamCreate,
    ExamDetail,
    ExamPublic,
    ExamQuestionLink,
    ExamUpdate,
)
from prep_admin.services.mapping import EntityMapping, FieldMap, apply_row, id_field, timestamps
from prep_admin.services.question_service import row_to_question

logger = logging.getLogger(__name__)


EXAM_MAPPING = EntityMapping((
    id_field(),
    FieldMap("title"),
    FieldMap("description", blank_to_none=True),
    FieldMap("subject_id", blank_to_none=True),
    FieldMap("published", default=False),
    FieldMap("image", blank_to_none=True),
    FieldMap("image_hint", blank_to_none=True),
    FieldMap("teacher_name", blank_to_none=True),
    FieldMap("teacher_id", blank_to_none=True),
    FieldMap("duration_in_minutes", column="duration"),
    *timestamps(),
))


def _link_rows(exam_id: str, question_ids: List[str]) -> List[ExamQuestion]:
    return [
        ExamQuestion(exam_id=exam_id, question_id=question_id, order_number=index + 1)
        for index, question_id in enumerate(question_ids)
    ]


def _question_counts(db: Session) -> dict:
    rows = (
        db.query(ExamQuestion.exam_id, func.count(ExamQuestion.question_id))
        .group_by(ExamQuestion.exam_id)
        .all()
    )
    return dict(rows)


def add_exam(db: Session, *, obj_in: ExamCreate) -> ExamPublic:
    """
    Insert the exam, then its ordered question links. If linking fails the
    exam row is removed again.
    """
    db_obj = Exam(**EXAM_MAPPING.to_row(obj_in.model_dump(exclude={"question_ids"})))
    with db_errors(db, "add_exam"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)

    if obj_in.question_ids:
        try:
            with db_errors(db, "add_exam_question_links"):
                db.add_all(_link_rows(db_obj.id, obj_in.question_ids))
                db.commit()
        except Exception:
            db.delete(db_obj)
            db.commit()
            raise

    exam = EXAM_MAPPING.to_model(db_obj, ExamPublic)
    exam.question_count = len(obj_in.question_ids)
    return exam


def list_exams(db: Session) -> List[ExamPublic]:
    with db_errors(db, "list_exams"):
        rows = db.query(Exam).order_by(Exam.created_at.desc()).all()
        counts = _question_counts(db)

    exams = []
    for row in rows:
        exam = EXAM_MAPPING.to_model(row, ExamPublic)
        exam.question_count = counts.get(row.id, 0)
        exams.append(exam)
    return exams


def get_exam_row(db: Session, exam_id: str) -> Optional[Exam]:
    with db_errors(db, "get_exam_by_id"):
        return db.get(Exam, exam_id)


def get_exam_by_id(db: Session, exam_id: str) -> Optional[ExamDetail]:
    db_obj = get_exam_row(db, exam_id)
    if db_obj is None:
        return None

    with db_errors(db, "get_exam_questions"):
        links = (
            db.query(ExamQuestion, Question)
            .join(Question, Question.id == ExamQuestion.question_id)
            .filter(ExamQuestion.exam_id == exam_id)
            .order_by(ExamQuestion.order_number.is_(None), ExamQuestion.order_number.asc())
            .all()
        )

    questions = []
    for link, question_row in links:
        question = row_to_question(question_row)
        if question is None:
            continue
        questions.append(ExamQuestionLink(
            question_id=link.question_id,
            order_number=link.order_number,
            points=link.points,
            question=question,
        ))

    exam = EXAM_MAPPING.to_model(db_obj, ExamDetail)
    exam.questions = questions
    exam.question_count = len(questions)
    return exam


def update_exam(db: Session, *, db_obj: Exam, obj_in: ExamUpdate) -> ExamDetail:
    """
    Writes the given fields. ``question_ids`` (when sent) replaces every
    link with the new ordered list.
    """
    data = obj_in.model_dump(exclude_unset=True)
    question_ids = data.pop("question_ids", None)

    row = EXAM_MAPPING.to_row(data, partial=True)
    if row:
        apply_row(db_obj, row)
        with db_errors(db, "update_exam"):
            db.add(db_obj)
            db.commit()

    if question_ids is not None:
        with db_errors(db, "update_exam_question_links"):
            db.query(ExamQuestion).filter(ExamQuestion.exam_id == db_obj.id).delete()
            db.add_all(_link_rows(db_obj.id, question_ids))
            db.commit()

    return get_exam_by_id(db, db_obj.id)


def delete_exam(db: Session, *, db_obj: Exam) -> None:
    with db_errors(db, "delete_exam"):
        db.query(ExamQuestion).filter(ExamQuestion.exam_id == db_obj.id).delete()
        db.delete(db_obj)
        db.commit()


def get_exam_title_by_id(db: Session, exam_id: str) -> Optional[str]:
    raise NotImplementedBackendError("get_exam_title_by_id")


def add_exams_batch(db: Session, exams: List[ExamCreate]) -> None:
    raise NotImplementedBackendError("add_exams_batch")
