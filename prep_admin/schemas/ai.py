# prep_admin/schemas/ai.py
from typing import List

from pydantic import Field

from prep_admin.schemas.common import CamelModel
from prep_admin.schemas.tag import TagPublic


class SanityCheckRequest(CamelModel):
    question: str = Field(min_length=1)


class SanityCheckResult(CamelModel):
    is_sane: bool
    explanation: str = ""


class TagSuggestionRequest(CamelModel):
    question_text: str = Field(min_length=1)
    # tags already selected on the form
    selected_tag_ids: List[str] = Field(default_factory=list)


class TagSuggestion(CamelModel):
    suggested_tags: List[str] = Field(default_factory=list)


class TagMergeResult(CamelModel):
    suggested_tags: List[str] = Field(default_factory=list)
    selected_tag_ids: List[str] = Field(default_factory=list)
    created_tags: List[TagPublic] = Field(default_factory=list)
