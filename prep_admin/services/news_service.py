# prep_admin/services/news_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from prep_admin.core.errors import NotImplementedBackendError, db_errors
from prep_admin.models.news import Announcement, NewsArticle
from prep_admin.schemas.news import (
    AnnouncementCreate,
    AnnouncementPublic,
    AnnouncementUpdate,
    NewsArticleCreate,
    NewsArticlePublic,
    NewsArticleUpdate,
)
from prep_admin.services.mapping import EntityMapping, FieldMap, apply_row, id_field, timestamps


NEWS_MAPPING = EntityMapping((
    id_field(),
    FieldMap("title"),
    FieldMap("content"),
    FieldMap("image_url", blank_to_none=True),
    *timestamps(),
))

ANNOUNCEMENT_MAPPING = EntityMapping((
    id_field(),
    FieldMap("title"),
    FieldMap("message"),
    FieldMap("type", default="info"),
    FieldMap("is_active", default=True),
    *timestamps(),
))


# --- News articles ---

def add_news_article(db: Session, *, obj_in: NewsArticleCreate) -> NewsArticlePublic:
    db_obj = NewsArticle(**NEWS_MAPPING.to_row(obj_in.model_dump()))
    with db_errors(db, "add_news_article"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return NEWS_MAPPING.to_model(db_obj, NewsArticlePublic)


def list_news_articles(db: Session) -> List[NewsArticlePublic]:
    with db_errors(db, "list_news_articles"):
        rows = db.query(NewsArticle).order_by(NewsArticle.created_at.desc()).all()
    return [NEWS_MAPPING.to_model(row, NewsArticlePublic) for row in rows]


def get_news_article_row(db: Session, article_id: str) -> Optional[NewsArticle]:
    with db_errors(db, "get_news_article_by_id"):
        return db.get(NewsArticle, article_id)


def update_news_article(db: Session, *, db_obj: NewsArticle, obj_in: NewsArticleUpdate) -> NewsArticlePublic:
    apply_row(db_obj, NEWS_MAPPING.to_row(obj_in.model_dump(exclude_unset=True), partial=True))
    with db_errors(db, "update_news_article"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return NEWS_MAPPING.to_model(db_obj, NewsArticlePublic)


def delete_news_article(db: Session, *, db_obj: NewsArticle) -> None:
    with db_errors(db, "delete_news_article"):
        db.delete(db_obj)
        db.commit()


def add_news_articles_batch(db: Session, articles: List[NewsArticleCreate]) -> None:
    raise NotImplementedBackendError("add_news_articles_batch")


# --- Announcements ---

def add_announcement(db: Session, *, obj_in: AnnouncementCreate) -> AnnouncementPublic:
    db_obj = Announcement(**ANNOUNCEMENT_MAPPING.to_row(obj_in.model_dump()))
    with db_errors(db, "add_announcement"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return ANNOUNCEMENT_MAPPING.to_model(db_obj, AnnouncementPublic)


def list_announcements(db: Session) -> List[AnnouncementPublic]:
    with db_errors(db, "list_announcements"):
        rows = db.query(Announcement).order_by(Announcement.created_at.desc()).all()
    return [ANNOUNCEMENT_MAPPING.to_model(row, AnnouncementPublic) for row in rows]


def get_announcement_by_id(db: Session, announcement_id: str) -> Optional[AnnouncementPublic]:
    raise NotImplementedBackendError("get_announcement_by_id")


def update_announcement(db: Session, announcement_id: str, obj_in: AnnouncementUpdate) -> None:
    raise NotImplementedBackendError("update_announcement")


def delete_announcement(db: Session, announcement_id: str) -> None:
    raise NotImplementedBackendError("delete_announcement")
