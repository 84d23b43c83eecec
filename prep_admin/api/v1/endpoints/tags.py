# prep_admin/api/v1/endpoints/tags.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prep_admin.db.session import get_db
from prep_admin.schemas.tag import TagCreate, TagPublic, TagUpdate
from prep_admin.services import tag_service

router = APIRouter(prefix="/tags", tags=["tags"])


@router.post("/", response_model=TagPublic, status_code=status.HTTP_201_CREATED)
def create_tag(obj_in: TagCreate, db: Session = Depends(get_db)):
    return tag_service.add_tag(db, obj_in=obj_in)


@router.get("/", response_model=List[TagPublic])
def list_tags(db: Session = Depends(get_db)):
    return tag_service.list_tags(db)


@router.get("/{tag_id}", response_model=TagPublic)
def get_tag(tag_id: str, db: Session = Depends(get_db)):
    tag = tag_service.get_tag_by_id(db, tag_id)
    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")
    return tag


@router.patch("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_tag(tag_id: str, obj_in: TagUpdate, db: Session = Depends(get_db)):
    tag_service.update_tag(db, tag_id, obj_in)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag(tag_id: str, db: Session = Depends(get_db)):
    tag_service.delete_tag(db, tag_id)
