# prep_admin/api/v1/endpoints/exams.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prep_admin.db.session import get_db
from prep_admin.models.exam import Exam
from prep_admin.schemas.exam import ExamCreate, ExamDetail, ExamPublic, ExamUpdate
from prep_admin.services import exam_service

router = APIRouter(prefix="/exams", tags=["exams"])


def _get_exam_or_404(db: Session, exam_id: str) -> Exam:
    db_obj = exam_service.get_exam_row(db, exam_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exam not found")
    return db_obj


@router.post("/", response_model=ExamPublic, status_code=status.HTTP_201_CREATED)
def create_exam(obj_in: ExamCreate, db: Session = Depends(get_db)):
    """
    Creates the exam and links ``questionIds`` in the given order.
    """
    return exam_service.add_exam(db, obj_in=obj_in)


@router.get("/", response_model=List[ExamPublic])
def list_exams(db: Session = Depends(get_db)):
    return exam_service.list_exams(db)


@router.post("/batch", status_code=status.HTTP_201_CREATED)
def create_exams_batch(exams: List[ExamCreate], db: Session = Depends(get_db)):
    exam_service.add_exams_batch(db, exams)


@router.get("/{exam_id}", response_model=ExamDetail)
def get_exam(exam_id: str, db: Session = Depends(get_db)):
    exam = exam_service.get_exam_by_id(db, exam_id)
    if not exam:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exam not found")
    return exam


@router.get("/{exam_id}/title")
def get_exam_title(exam_id: str, db: Session = Depends(get_db)):
    return {"title": exam_service.get_exam_title_by_id(db, exam_id)}


@router.patch("/{exam_id}", response_model=ExamDetail)
def update_exam(exam_id: str, obj_in: ExamUpdate, db: Session = Depends(get_db)):
    db_obj = _get_exam_or_404(db, exam_id)
    return exam_service.update_exam(db, db_obj=db_obj, obj_in=obj_in)


@router.delete("/{exam_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exam(exam_id: str, db: Session = Depends(get_db)):
    db_obj = _get_exam_or_404(db, exam_id)
    exam_service.delete_exam(db, db_obj=db_obj)
    return None
