# prep_admin/schemas/activation_code.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from prep_admin.schemas.common import CamelModel


class ActivationCodeCreate(CamelModel):
    name: str = Field(min_length=1)
    encoded_value: str = Field(min_length=1)
    type: str
    subject_id: Optional[str] = None
    subject_name: Optional[str] = None
    valid_from: datetime
    valid_until: datetime
    is_active: bool = True
    is_used: bool = False
    used_at: Optional[datetime] = None
    used_by_user_id: Optional[str] = None


class ActivationCodeUpdate(CamelModel):
    name: Optional[str] = None
    encoded_value: Optional[str] = None
    type: Optional[str] = None
    subject_id: Optional[str] = None
    subject_name: Optional[str] = None
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    is_active: Optional[bool] = None
    is_used: Optional[bool] = None
    used_at: Optional[datetime] = None
    used_by_user_id: Optional[str] = None


class ActivationCodePublic(ActivationCodeCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
