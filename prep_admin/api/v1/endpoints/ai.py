# prep_admin/api/v1/endpoints/ai.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from prep_admin.db.session import get_db
from prep_admin.schemas.ai import (
    SanityCheckRequest,
    SanityCheckResult,
    TagMergeResult,
    TagSuggestionRequest,
)
from prep_admin.services import ai_flows, tag_service

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/sanity-check", response_model=SanityCheckResult)
def sanity_check(obj_in: SanityCheckRequest):
    """Sanity check for a form that is not saved yet."""
    return ai_flows.arabic_question_sanity_check(obj_in.question)


@router.post("/suggest-tags", response_model=TagMergeResult)
def suggest_tags(obj_in: TagSuggestionRequest, db: Session = Depends(get_db)):
    """
    Suggested names are merged into ``selectedTagIds``; unknown names are
    created as tags right away.
    """
    suggestion = ai_flows.suggest_question_tags(obj_in.question_text)
    return tag_service.merge_tag_names(
        db,
        selected_tag_ids=obj_in.selected_tag_ids,
        names=suggestion.suggested_tags,
    )
