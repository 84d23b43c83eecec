# prep_admin/api/v1/endpoints/announcements.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from prep_admin.db.session import get_db
from prep_admin.schemas.news import AnnouncementCreate, AnnouncementPublic, AnnouncementUpdate
from prep_admin.services import news_service

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.post("/", response_model=AnnouncementPublic, status_code=status.HTTP_201_CREATED)
def create_announcement(obj_in: AnnouncementCreate, db: Session = Depends(get_db)):
    return news_service.add_announcement(db, obj_in=obj_in)


@router.get("/", response_model=List[AnnouncementPublic])
def list_announcements(db: Session = Depends(get_db)):
    return news_service.list_announcements(db)


@router.get("/{announcement_id}", response_model=AnnouncementPublic)
def get_announcement(announcement_id: str, db: Session = Depends(get_db)):
    return news_service.get_announcement_by_id(db, announcement_id)


@router.patch("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_announcement(announcement_id: str, obj_in: AnnouncementUpdate, db: Session = Depends(get_db)):
    news_service.update_announcement(db, announcement_id, obj_in)


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_announcement(announcement_id: str, db: Session = Depends(get_db)):
    news_service.delete_announcement(db, announcement_id)
