# prep_admin/api/v1/endpoints/news.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prep_admin.db.session import get_db
from prep_admin.models.news import NewsArticle
from prep_admin.schemas.news import NewsArticleCreate, NewsArticlePublic, NewsArticleUpdate
from prep_admin.services import news_service

router = APIRouter(prefix="/news", tags=["news"])


def _get_article_or_404(db: Session, article_id: str) -> NewsArticle:
    db_obj = news_service.get_news_article_row(db, article_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="News article not found")
    return db_obj


@router.post("/", response_model=NewsArticlePublic, status_code=status.HTTP_201_CREATED)
def create_news_article(obj_in: NewsArticleCreate, db: Session = Depends(get_db)):
    return news_service.add_news_article(db, obj_in=obj_in)


@router.get("/", response_model=List[NewsArticlePublic])
def list_news_articles(db: Session = Depends(get_db)):
    return news_service.list_news_articles(db)


@router.post("/batch", status_code=status.HTTP_201_CREATED)
def create_news_articles_batch(articles: List[NewsArticleCreate], db: Session = Depends(get_db)):
    news_service.add_news_articles_batch(db, articles)


@router.get("/{article_id}", response_model=NewsArticlePublic)
def get_news_article(article_id: str, db: Session = Depends(get_db)):
    return news_service.NEWS_MAPPING.to_model(_get_article_or_404(db, article_id), NewsArticlePublic)


@router.patch("/{article_id}", response_model=NewsArticlePublic)
def update_news_article(article_id: str, obj_in: NewsArticleUpdate, db: Session = Depends(get_db)):
    db_obj = _get_article_or_404(db, article_id)
    return news_service.update_news_article(db, db_obj=db_obj, obj_in=obj_in)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_news_article(article_id: str, db: Session = Depends(get_db)):
    db_obj = _get_article_or_404(db, article_id)
    news_service.delete_news_article(db, db_obj=db_obj)
    return None
