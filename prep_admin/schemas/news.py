# prep_admin/schemas/news.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from prep_admin.schemas.common import CamelModel

AnnouncementType = Literal["info", "warning", "success", "error"]


class NewsArticleCreate(CamelModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    image_url: Optional[str] = None


class NewsArticleUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None


class NewsArticlePublic(NewsArticleCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AnnouncementCreate(CamelModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    type: AnnouncementType = "info"
    is_active: bool = True


class AnnouncementUpdate(CamelModel):
    title: Optional[str] = None
    message: Optional[str] = None
    type: Optional[AnnouncementType] = None
    is_active: Optional[bool] = None


class AnnouncementPublic(AnnouncementCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
