# prep_admin/services/subject_service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from prep_admin.core.errors import NotImplementedBackendError, db_errors
from prep_admin.models.subject import Lesson, Subject, SubjectSection
from prep_admin.schemas.subject import (
    LessonCreate,
    LessonPublic,
    LessonUpdate,
    SectionCreate,
    SectionPublic,
    SectionUpdate,
    SubjectCreate,
    SubjectPublic,
    SubjectUpdate,
)
from prep_admin.services.mapping import (
    EntityMapping,
    FieldMap,
    apply_row,
    empty_list,
    id_field,
    timestamps,
)

logger = logging.getLogger(__name__)


def _none_if_empty(value):
    # empty lists are stored as null, read back as []
    return value or None


SUBJECT_MAPPING = EntityMapping((
    id_field(),
    FieldMap("name"),
    FieldMap("branch"),
    FieldMap("description", blank_to_none=True),
    FieldMap("image", blank_to_none=True),
    FieldMap("icon_name", blank_to_none=True),
    FieldMap("image_hint", blank_to_none=True),
    FieldMap("order"),
    *timestamps(),
))

SECTION_MAPPING = EntityMapping((
    id_field(),
    FieldMap("subject_id", writable=False),
    FieldMap("title"),
    FieldMap("type"),
    FieldMap("order"),
    FieldMap("is_locked", default=False),
    *timestamps(),
))

LESSON_MAPPING = EntityMapping((
    id_field(),
    FieldMap("subject_id", writable=False),
    FieldMap("section_id", writable=False),
    FieldMap("title"),
    FieldMap("video_url", blank_to_none=True),
    FieldMap("content", blank_to_none=True),
    FieldMap("files", read_default=empty_list),
    FieldMap("teachers", read_default=empty_list),
    FieldMap("linked_exam_ids", read_default=empty_list),
    FieldMap("notes", blank_to_none=True),
    FieldMap("order"),
    FieldMap("is_locked", default=True),
    *timestamps(),
))

_LESSON_LIST_COLUMNS = ("files", "teachers", "linked_exam_ids")


def _lesson_row(data: dict, *, partial: bool = False) -> dict:
    row = LESSON_MAPPING.to_row(data, partial=partial)
    for column in _LESSON_LIST_COLUMNS:
        if column in row:
            row[column] = _none_if_empty(row[column])
    return row


# --- Subjects ---

def add_subject(db: Session, *, obj_in: SubjectCreate) -> SubjectPublic:
    db_obj = Subject(**SUBJECT_MAPPING.to_row(obj_in.model_dump()))
    with db_errors(db, "add_subject"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return SUBJECT_MAPPING.to_model(db_obj, SubjectPublic)


def list_subjects(db: Session) -> List[SubjectPublic]:
    """
    Ordered by ``order`` (unordered subjects last), then by name.
    """
    with db_errors(db, "list_subjects"):
        rows = (
            db.query(Subject)
            .order_by(Subject.order.is_(None), Subject.order.asc(), Subject.name.asc())
            .all()
        )
    return [SUBJECT_MAPPING.to_model(row, SubjectPublic) for row in rows]


def get_subject_row(db: Session, subject_id: str) -> Optional[Subject]:
    with db_errors(db, "get_subject_by_id"):
        return db.get(Subject, subject_id)


def get_subject_by_id(db: Session, subject_id: str) -> Optional[SubjectPublic]:
    db_obj = get_subject_row(db, subject_id)
    if db_obj is None:
        return None
    return SUBJECT_MAPPING.to_model(db_obj, SubjectPublic)


def update_subject(db: Session, *, db_obj: Subject, obj_in: SubjectUpdate) -> SubjectPublic:
    apply_row(db_obj, SUBJECT_MAPPING.to_row(obj_in.model_dump(exclude_unset=True), partial=True))
    with db_errors(db, "update_subject"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return SUBJECT_MAPPING.to_model(db_obj, SubjectPublic)


def delete_subject(db: Session, *, db_obj: Subject) -> None:
    with db_errors(db, "delete_subject"):
        db.delete(db_obj)
        db.commit()


def list_subjects_with_details(db: Session) -> List[dict]:
    raise NotImplementedBackendError("list_subjects_with_details")


def add_subjects_batch(db: Session, subjects: List[SubjectCreate]) -> None:
    raise NotImplementedBackendError("add_subjects_batch")


# --- Subject sections ---

def add_subject_section(db: Session, *, subject_id: str, obj_in: SectionCreate) -> SectionPublic:
    db_obj = SubjectSection(subject_id=subject_id, **SECTION_MAPPING.to_row(obj_in.model_dump()))
    with db_errors(db, "add_subject_section"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return SECTION_MAPPING.to_model(db_obj, SectionPublic)


def list_subject_sections(db: Session, subject_id: str) -> List[SectionPublic]:
    with db_errors(db, "list_subject_sections"):
        rows = (
            db.query(SubjectSection)
            .filter(SubjectSection.subject_id == subject_id)
            .order_by(
                SubjectSection.order.is_(None),
                SubjectSection.order.asc(),
                SubjectSection.title.asc(),
            )
            .all()
        )
    return [SECTION_MAPPING.to_model(row, SectionPublic) for row in rows]


def get_section_row(db: Session, subject_id: str, section_id: str) -> Optional[SubjectSection]:
    with db_errors(db, "get_subject_section"):
        db_obj = db.get(SubjectSection, section_id)
    if db_obj is None or db_obj.subject_id != subject_id:
        return None
    return db_obj


def update_subject_section(db: Session, *, db_obj: SubjectSection, obj_in: SectionUpdate) -> SectionPublic:
    raise NotImplementedBackendError("update_subject_section")


def delete_subject_section(db: Session, *, db_obj: SubjectSection) -> None:
    with db_errors(db, "delete_subject_section"):
        db.delete(db_obj)
        db.commit()


# --- Lessons ---

def add_lesson(db: Session, *, section: SubjectSection, obj_in: LessonCreate) -> LessonPublic:
    db_obj = Lesson(
        subject_id=section.subject_id,
        section_id=section.id,
        **_lesson_row(obj_in.model_dump()),
    )
    with db_errors(db, "add_lesson"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return LESSON_MAPPING.to_model(db_obj, LessonPublic)


def list_lessons_in_section(db: Session, section_id: str) -> List[LessonPublic]:
    with db_errors(db, "list_lessons_in_section"):
        rows = (
            db.query(Lesson)
            .filter(Lesson.section_id == section_id)
            .order_by(Lesson.order.is_(None), Lesson.order.asc(), Lesson.title.asc())
            .all()
        )
    return [LESSON_MAPPING.to_model(row, LessonPublic) for row in rows]


def get_lesson_row(db: Session, section_id: str, lesson_id: str) -> Optional[Lesson]:
    with db_errors(db, "get_lesson_by_id"):
        db_obj = db.get(Lesson, lesson_id)
    if db_obj is None or db_obj.section_id != section_id:
        return None
    return db_obj


def get_lesson_by_id(db: Session, section_id: str, lesson_id: str) -> Optional[LessonPublic]:
    db_obj = get_lesson_row(db, section_id, lesson_id)
    if db_obj is None:
        return None
    return LESSON_MAPPING.to_model(db_obj, LessonPublic)


def update_lesson(db: Session, *, db_obj: Lesson, obj_in: LessonUpdate) -> LessonPublic:
    apply_row(db_obj, _lesson_row(obj_in.model_dump(exclude_unset=True), partial=True))
    with db_errors(db, "update_lesson"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return LESSON_MAPPING.to_model(db_obj, LessonPublic)


def delete_lesson(db: Session, *, db_obj: Lesson) -> None:
    """
    Questions linked to the lesson keep their lesson_id; nothing cascades.
    """
    with db_errors(db, "delete_lesson"):
        db.delete(db_obj)
        db.commit()
