# prep_admin/api/v1/endpoints/questions.py
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from prep_admin.api.deps import filtered_questions, question_form, subject_names, tag_names
from prep_admin.db.session import get_db
from prep_admin.models.question import Question
from prep_admin.schemas.ai import TagMergeResult
from prep_admin.schemas.question import QuestionGroup, QuestionRead, QuestionTagsUpdate, QuestionUpdate
from prep_admin.schemas.question_form import QuestionFormBase
from prep_admin.services import (
    ai_flows,
    export_service,
    question_listing,
    question_service,
    subject_service,
    tag_service,
)
from prep_admin.services.question_form import QuestionFormState, build_question_payload

router = APIRouter(prefix="/questions", tags=["questions"])


def _get_question_or_404(db: Session, question_id: str) -> Question:
    db_obj = question_service.get_question_row(db, question_id)
    if not db_obj:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Question not found",
        )
    return db_obj


def _subject_name(db: Session, subject_id: Optional[str]) -> Optional[str]:
    if not subject_id:
        return None
    subject = subject_service.get_subject_row(db, subject_id)
    return subject.name if subject else None


@router.post("/", response_model=QuestionRead, status_code=status.HTTP_201_CREATED)
def create_question(
    form: QuestionFormBase = Depends(question_form),
    db: Session = Depends(get_db),
):
    payload = build_question_payload(
        form, overrides={"subject": _subject_name(db, form.subject_id)}
    )
    return question_service.add_question(db, data=payload.model_dump())


@router.get("/", response_model=List[QuestionRead])
def list_questions(questions: List[QuestionRead] = Depends(filtered_questions)):
    """
    Newest first. ``q`` filters on question text, subject name and tag names.
    """
    return questions


@router.get("/grouped", response_model=List[QuestionGroup])
def list_questions_grouped(
    questions: List[QuestionRead] = Depends(filtered_questions),
    subjects: Dict[str, str] = Depends(subject_names),
):
    return question_listing.grouped_questions(questions, subjects)


@router.get("/export")
def export_questions(
    format: Literal["json", "xlsx"] = "json",
    questions: List[QuestionRead] = Depends(filtered_questions),
    subjects: Dict[str, str] = Depends(subject_names),
    tags: Dict[str, str] = Depends(tag_names),
):
    """
    Download the (filtered) list. JSON keeps tag ids, the spreadsheet shows
    tag names.
    """
    try:
        if format == "xlsx":
            content = export_service.questions_to_xlsx(questions, subjects, tags)
            media_type = export_service.XLSX_MEDIA_TYPE
        else:
            content = export_service.questions_to_json(questions)
            media_type = export_service.JSON_MEDIA_TYPE
    except export_service.EmptyExportError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="questions.{format}"'},
    )


@router.get("/{question_id}", response_model=QuestionRead)
def get_question(question_id: str, db: Session = Depends(get_db)):
    return question_service.row_to_question(_get_question_or_404(db, question_id))


@router.get("/{question_id}/form")
def get_question_form(question_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Prefilled edit-form values."""
    question = question_service.row_to_question(_get_question_or_404(db, question_id))
    state = QuestionFormState.from_question(question)
    return {to_camel(key): value for key, value in state.values().items()}


@router.put("/{question_id}", response_model=QuestionRead)
def edit_question(
    question_id: str,
    form: QuestionFormBase = Depends(question_form),
    db: Session = Depends(get_db),
):
    """
    Save the edit form. The type's columns are rewritten as a whole;
    shared fields the form did not send keep their stored values.
    """
    db_obj = _get_question_or_404(db, question_id)
    payload = build_question_payload(
        form, overrides={"subject": _subject_name(db, form.subject_id)}
    )
    return question_service.update_question(
        db, db_obj=db_obj, data=payload.model_dump(exclude_unset=True)
    )


@router.patch("/{question_id}", response_model=QuestionRead)
def patch_question(
    question_id: str,
    obj_in: QuestionUpdate,
    db: Session = Depends(get_db),
):
    db_obj = _get_question_or_404(db, question_id)
    return question_service.update_question(
        db, db_obj=db_obj, data=obj_in.model_dump(exclude_unset=True)
    )


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(question_id: str, db: Session = Depends(get_db)):
    db_obj = _get_question_or_404(db, question_id)
    question_service.delete_question(db, db_obj=db_obj)
    return None


@router.put("/{question_id}/tags", response_model=QuestionRead)
def set_question_tags(
    question_id: str,
    obj_in: QuestionTagsUpdate,
    db: Session = Depends(get_db),
):
    """
    Replace the question's tags with ``tagIds`` plus ``newTagNames``; names
    select existing tags case-insensitively or create them.
    """
    db_obj = _get_question_or_404(db, question_id)
    merged = tag_service.merge_tag_names(
        db, selected_tag_ids=obj_in.tag_ids, names=obj_in.new_tag_names
    )
    return question_service.update_question(
        db, db_obj=db_obj, data={"tag_ids": merged.selected_tag_ids}
    )


@router.post("/{question_id}/sanity-check", response_model=QuestionRead)
def sanity_check_question(question_id: str, db: Session = Depends(get_db)):
    db_obj = _get_question_or_404(db, question_id)
    result = ai_flows.arabic_question_sanity_check(db_obj.question_text)
    return question_service.update_question(
        db,
        db_obj=db_obj,
        data={"is_sane": result.is_sane, "sanity_explanation": result.explanation},
    )


@router.post("/{question_id}/suggest-tags", response_model=TagMergeResult)
def suggest_tags_for_question(question_id: str, db: Session = Depends(get_db)):
    """Only tag_ids are written back to the question."""
    db_obj = _get_question_or_404(db, question_id)
    suggestion = ai_flows.suggest_question_tags(db_obj.question_text)
    merged = tag_service.merge_tag_names(
        db,
        selected_tag_ids=db_obj.tag_ids or [],
        names=suggestion.suggested_tags,
    )
    question_service.update_question(db, db_obj=db_obj, data={"tag_ids": merged.selected_tag_ids})
    return merged
