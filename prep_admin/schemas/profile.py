# prep_admin/schemas/profile.py
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import Field

from prep_admin.schemas.common import CamelModel

Role = Literal["admin", "student", "teacher"]


class ProfileFields(CamelModel):
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[Role] = None
    avatar_url: Optional[str] = None
    avatar_hint: Optional[str] = None
    points: Optional[int] = None
    level: Optional[int] = None
    progress_to_next_level: Optional[int] = None
    badges: Optional[Any] = None
    rewards: Optional[Any] = None
    student_goals: Optional[str] = None
    branch: Optional[str] = None
    university: Optional[str] = None
    major: Optional[str] = None
    active_subscription: Optional[Any] = None
    youtube_channel_url: Optional[str] = None
    subjects_taught_ids: Optional[str] = None


class ProfileCreate(ProfileFields):
    id: Optional[str] = None


class ProfileUpdate(ProfileFields):
    pass


class ProfilePublic(ProfileFields):
    id: str
    points: int = 0
    level: int = 1
    progress_to_next_level: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TeacherSubjectAssignment(CamelModel):
    subject_id: Optional[str] = Field(default=None)
