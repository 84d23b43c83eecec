# prep_admin/api/deps.py
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from prep_admin.db.session import get_db
from prep_admin.schemas.question import QuestionRead
from prep_admin.schemas.question_form import QUESTION_FORM_ADAPTER, QuestionFormBase
from prep_admin.services import question_listing, question_service, subject_service, tag_service


def validate_question_form(payload: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None) -> QuestionFormBase:
    """
    Validate a raw question form body. ``overrides`` (camelCase keys) are
    applied before validation, so ids taken from the URL win over the body.
    """
    data = dict(payload)
    data.update(overrides or {})
    try:
        return QUESTION_FORM_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


def question_form(payload: Dict[str, Any] = Body(...)) -> QuestionFormBase:
    return validate_question_form(payload)


def subject_names(db: Session = Depends(get_db)) -> Dict[str, str]:
    return {s.id: s.name for s in subject_service.list_subjects(db)}


def tag_names(db: Session = Depends(get_db)) -> Dict[str, str]:
    return {t.id: t.name for t in tag_service.list_tags(db)}


def filtered_questions(
    q: Optional[str] = None,
    db: Session = Depends(get_db),
    subjects: Dict[str, str] = Depends(subject_names),
    tags: Dict[str, str] = Depends(tag_names),
) -> List[QuestionRead]:
    """All questions, narrowed by the ``q`` search box when given."""
    questions = question_service.list_questions(db)
    return question_listing.filter_questions(questions, q, subjects, tags)
