# prep_admin/api/v1/endpoints/users.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prep_admin.db.session import get_db
from prep_admin.schemas.profile import (
    ProfileCreate,
    ProfilePublic,
    ProfileUpdate,
    TeacherSubjectAssignment,
)
from prep_admin.services import profile_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=List[ProfilePublic])
def list_users(db: Session = Depends(get_db)):
    return profile_service.list_profiles(db)


@router.get("/teachers", response_model=List[ProfilePublic])
def list_teachers(db: Session = Depends(get_db)):
    return profile_service.list_teachers(db)


@router.get("/by-email", response_model=ProfilePublic)
def get_user_by_email(email: str, db: Session = Depends(get_db)):
    profile = profile_service.get_profile_by_email(db, email)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return profile


@router.post("/batch", status_code=status.HTTP_201_CREATED)
def create_users_batch(profiles: List[ProfileCreate], db: Session = Depends(get_db)):
    count = profile_service.add_profiles_batch(db, profiles=profiles)
    return {"created": count}


@router.patch("/{user_id}", response_model=ProfilePublic)
def update_user(user_id: str, obj_in: ProfileUpdate, db: Session = Depends(get_db)):
    db_obj = profile_service.get_profile_row(db, user_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return profile_service.update_profile(db, db_obj=db_obj, obj_in=obj_in)


@router.put("/{user_id}/subject", status_code=status.HTTP_204_NO_CONTENT)
def assign_teacher_subject(
    user_id: str,
    obj_in: TeacherSubjectAssignment,
    db: Session = Depends(get_db),
):
    """Set (or clear, with a null subjectId) the subject a teacher teaches."""
    count = profile_service.assign_teacher_subject(db, teacher_id=user_id, subject_id=obj_in.subject_id)
    if count == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    return None
