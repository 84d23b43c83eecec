# prep_admin/schemas/exam.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from prep_admin.schemas.common import CamelModel
from prep_admin.schemas.question import QuestionRead


class ExamBase(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    subject_id: Optional[str] = None
    published: bool = False
    image: Optional[str] = None
    image_hint: Optional[str] = None
    teacher_name: Optional[str] = None
    teacher_id: Optional[str] = None
    duration_in_minutes: Optional[int] = None


class ExamCreate(ExamBase):
    question_ids: List[str] = Field(default_factory=list)


class ExamUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    subject_id: Optional[str] = None
    published: Optional[bool] = None
    image: Optional[str] = None
    image_hint: Optional[str] = None
    teacher_name: Optional[str] = None
    teacher_id: Optional[str] = None
    duration_in_minutes: Optional[int] = None
    # None leaves the links alone, [] removes them all
    question_ids: Optional[List[str]] = None


class ExamQuestionLink(CamelModel):
    question_id: str
    order_number: Optional[int] = None
    points: Optional[int] = None
    question: QuestionRead


class ExamPublic(ExamBase):
    id: str
    question_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ExamDetail(ExamPublic):
    questions: List[ExamQuestionLink] = Field(default_factory=list)
