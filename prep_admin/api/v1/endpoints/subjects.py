# prep_admin/api/v1/endpoints/subjects.py
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prep_admin.api.deps import validate_question_form
from prep_admin.db.session import get_db
from prep_admin.models.subject import Lesson, Subject, SubjectSection
from prep_admin.schemas.question import QuestionRead
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
from prep_admin.services import question_service, subject_service
from prep_admin.services.question_form import build_question_payload

router = APIRouter(prefix="/subjects", tags=["subjects"])


def _get_subject_or_404(db: Session, subject_id: str) -> Subject:
    db_obj = subject_service.get_subject_row(db, subject_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    return db_obj


def _get_section_or_404(db: Session, subject_id: str, section_id: str) -> SubjectSection:
    db_obj = subject_service.get_section_row(db, subject_id, section_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Section not found")
    return db_obj


def _get_lesson_or_404(db: Session, subject_id: str, section_id: str, lesson_id: str) -> Lesson:
    _get_section_or_404(db, subject_id, section_id)
    db_obj = subject_service.get_lesson_row(db, section_id, lesson_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")
    return db_obj


# --- subjects ---

@router.post("/", response_model=SubjectPublic, status_code=status.HTTP_201_CREATED)
def create_subject(obj_in: SubjectCreate, db: Session = Depends(get_db)):
    return subject_service.add_subject(db, obj_in=obj_in)


@router.get("/", response_model=List[SubjectPublic])
def list_subjects(db: Session = Depends(get_db)):
    return subject_service.list_subjects(db)


@router.get("/details")
def list_subjects_with_details(db: Session = Depends(get_db)):
    return subject_service.list_subjects_with_details(db)


@router.post("/batch", status_code=status.HTTP_201_CREATED)
def create_subjects_batch(subjects: List[SubjectCreate], db: Session = Depends(get_db)):
    subject_service.add_subjects_batch(db, subjects)


@router.get("/{subject_id}", response_model=SubjectPublic)
def get_subject(subject_id: str, db: Session = Depends(get_db)):
    subject = subject_service.get_subject_by_id(db, subject_id)
    if not subject:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    return subject


@router.patch("/{subject_id}", response_model=SubjectPublic)
def update_subject(subject_id: str, obj_in: SubjectUpdate, db: Session = Depends(get_db)):
    db_obj = _get_subject_or_404(db, subject_id)
    return subject_service.update_subject(db, db_obj=db_obj, obj_in=obj_in)


@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subject(subject_id: str, db: Session = Depends(get_db)):
    db_obj = _get_subject_or_404(db, subject_id)
    subject_service.delete_subject(db, db_obj=db_obj)
    return None


# --- sections ---

@router.post(
    "/{subject_id}/sections",
    response_model=SectionPublic,
    status_code=status.HTTP_201_CREATED,
)
def create_section(subject_id: str, obj_in: SectionCreate, db: Session = Depends(get_db)):
    _get_subject_or_404(db, subject_id)
    return subject_service.add_subject_section(db, subject_id=subject_id, obj_in=obj_in)


@router.get("/{subject_id}/sections", response_model=List[SectionPublic])
def list_sections(subject_id: str, db: Session = Depends(get_db)):
    return subject_service.list_subject_sections(db, subject_id)


@router.patch("/{subject_id}/sections/{section_id}", response_model=SectionPublic)
def update_section(
    subject_id: str,
    section_id: str,
    obj_in: SectionUpdate,
    db: Session = Depends(get_db),
):
    db_obj = _get_section_or_404(db, subject_id, section_id)
    return subject_service.update_subject_section(db, db_obj=db_obj, obj_in=obj_in)


@router.delete("/{subject_id}/sections/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_section(subject_id: str, section_id: str, db: Session = Depends(get_db)):
    db_obj = _get_section_or_404(db, subject_id, section_id)
    subject_service.delete_subject_section(db, db_obj=db_obj)
    return None


# --- lessons ---

@router.post(
    "/{subject_id}/sections/{section_id}/lessons",
    response_model=LessonPublic,
    status_code=status.HTTP_201_CREATED,
)
def create_lesson(
    subject_id: str,
    section_id: str,
    obj_in: LessonCreate,
    db: Session = Depends(get_db),
):
    section = _get_section_or_404(db, subject_id, section_id)
    return subject_service.add_lesson(db, section=section, obj_in=obj_in)


@router.get("/{subject_id}/sections/{section_id}/lessons", response_model=List[LessonPublic])
def list_lessons(subject_id: str, section_id: str, db: Session = Depends(get_db)):
    _get_section_or_404(db, subject_id, section_id)
    return subject_service.list_lessons_in_section(db, section_id)


@router.get(
    "/{subject_id}/sections/{section_id}/lessons/{lesson_id}",
    response_model=LessonPublic,
)
def get_lesson(subject_id: str, section_id: str, lesson_id: str, db: Session = Depends(get_db)):
    _get_lesson_or_404(db, subject_id, section_id, lesson_id)
    return subject_service.get_lesson_by_id(db, section_id, lesson_id)


@router.patch(
    "/{subject_id}/sections/{section_id}/lessons/{lesson_id}",
    response_model=LessonPublic,
)
def update_lesson(
    subject_id: str,
    section_id: str,
    lesson_id: str,
    obj_in: LessonUpdate,
    db: Session = Depends(get_db),
):
    db_obj = _get_lesson_or_404(db, subject_id, section_id, lesson_id)
    return subject_service.update_lesson(db, db_obj=db_obj, obj_in=obj_in)


@router.delete(
    "/{subject_id}/sections/{section_id}/lessons/{lesson_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_lesson(subject_id: str, section_id: str, lesson_id: str, db: Session = Depends(get_db)):
    db_obj = _get_lesson_or_404(db, subject_id, section_id, lesson_id)
    subject_service.delete_lesson(db, db_obj=db_obj)
    return None


# --- lesson questions ---

@router.get(
    "/{subject_id}/sections/{section_id}/lessons/{lesson_id}/questions",
    response_model=List[QuestionRead],
)
def list_lesson_questions(
    subject_id: str,
    section_id: str,
    lesson_id: str,
    db: Session = Depends(get_db),
):
    _get_lesson_or_404(db, subject_id, section_id, lesson_id)
    return question_service.list_questions_for_lesson(db, lesson_id)


@router.post(
    "/{subject_id}/sections/{section_id}/lessons/{lesson_id}/questions",
    response_model=QuestionRead,
    status_code=status.HTTP_201_CREATED,
)
def add_lesson_question(
    subject_id: str,
    section_id: str,
    lesson_id: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
):
    """
    Inline question form of the lesson page. Subject and lesson come from
    the URL; anything the body says about them is ignored.
    """
    _get_lesson_or_404(db, subject_id, section_id, lesson_id)
    subject = _get_subject_or_404(db, subject_id)

    form = validate_question_form(payload, overrides={"subjectId": subject_id, "lessonId": lesson_id})
    question = build_question_payload(form, overrides={"subject": subject.name})
    return question_service.add_question(db, data=question.model_dump())
