# prep_admin/schemas/tag.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from prep_admin.schemas.common import CamelModel


class TagCreate(CamelModel):
    name: str = Field(min_length=1)


class TagUpdate(CamelModel):
    name: Optional[str] = None


class TagPublic(TagCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
