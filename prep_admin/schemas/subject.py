# prep_admin/schemas/subject.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from prep_admin.schemas.common import CamelModel

Branch = Literal["scientific", "literary", "general"]
SectionType = Literal["theory", "practical"]


class SubjectBase(CamelModel):
    name: str = Field(min_length=1)
    branch: Branch
    description: Optional[str] = None
    image: Optional[str] = None
    icon_name: Optional[str] = None
    image_hint: Optional[str] = None
    order: Optional[int] = None


class SubjectCreate(SubjectBase):
    pass


class SubjectUpdate(CamelModel):
    name: Optional[str] = None
    branch: Optional[Branch] = None
    description: Optional[str] = None
    image: Optional[str] = None
    icon_name: Optional[str] = None
    image_hint: Optional[str] = None
    order: Optional[int] = None


class SubjectPublic(SubjectBase):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SectionCreate(CamelModel):
    title: str = Field(min_length=1)
    type: SectionType
    order: Optional[int] = None
    is_locked: bool = False


class SectionUpdate(CamelModel):
    title: Optional[str] = None
    type: Optional[SectionType] = None
    order: Optional[int] = None
    is_locked: Optional[bool] = None


class SectionPublic(SectionCreate):
    id: str
    subject_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LessonFile(CamelModel):
    name: str
    url: str
    type: Optional[str] = None


class LessonTeacher(CamelModel):
    name: str
    youtube_channel_url: Optional[str] = None


class LessonBase(CamelModel):
    title: str = Field(min_length=1)
    video_url: Optional[str] = None
    # rich text, may embed $...$ / $$...$$ math
    content: Optional[str] = None
    files: List[LessonFile] = Field(default_factory=list)
    teachers: List[LessonTeacher] = Field(default_factory=list)
    linked_exam_ids: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    order: Optional[int] = None
    is_locked: bool = True


class LessonCreate(LessonBase):
    pass


class LessonUpdate(CamelModel):
    title: Optional[str] = None
    video_url: Optional[str] = None
    content: Optional[str] = None
    files: Optional[List[LessonFile]] = None
    teachers: Optional[List[LessonTeacher]] = None
    linked_exam_ids: Optional[List[str]] = None
    notes: Optional[str] = None
    order: Optional[int] = None
    is_locked: Optional[bool] = None


class LessonPublic(LessonBase):
    id: str
    subject_id: str
    section_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
