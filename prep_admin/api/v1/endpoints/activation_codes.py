# prep_admin/api/v1/endpoints/activation_codes.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from prep_admin.db.session import get_db
from prep_admin.models.activation_code import ActivationCode
from prep_admin.schemas.activation_code import (
    ActivationCodeCreate,
    ActivationCodePublic,
    ActivationCodeUpdate,
)
from prep_admin.services import activation_code_service

router = APIRouter(prefix="/activation-codes", tags=["activation-codes"])


def _get_code_or_404(db: Session, code_id: str) -> ActivationCode:
    db_obj = activation_code_service.get_activation_code_row(db, code_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activation code not found")
    return db_obj


@router.post("/", response_model=ActivationCodePublic, status_code=status.HTTP_201_CREATED)
def create_activation_code(obj_in: ActivationCodeCreate, db: Session = Depends(get_db)):
    return activation_code_service.add_activation_code(db, obj_in=obj_in)


@router.post("/batch", status_code=status.HTTP_201_CREATED)
def create_activation_codes_batch(codes: List[ActivationCodeCreate], db: Session = Depends(get_db)):
    count = activation_code_service.add_activation_codes_batch(db, codes=codes)
    return {"created": count}


@router.get("/", response_model=List[ActivationCodePublic])
def list_activation_codes(db: Session = Depends(get_db)):
    return activation_code_service.list_activation_codes(db)


@router.get("/{code_id}", response_model=ActivationCodePublic)
def get_activation_code(code_id: str, db: Session = Depends(get_db)):
    db_obj = _get_code_or_404(db, code_id)
    return activation_code_service.ACTIVATION_CODE_MAPPING.to_model(db_obj, ActivationCodePublic)


@router.patch("/{code_id}", response_model=ActivationCodePublic)
def update_activation_code(code_id: str, obj_in: ActivationCodeUpdate, db: Session = Depends(get_db)):
    db_obj = _get_code_or_404(db, code_id)
    return activation_code_service.update_activation_code(db, db_obj=db_obj, obj_in=obj_in)


@router.delete("/{code_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_activation_code(code_id: str, db: Session = Depends(get_db)):
    db_obj = _get_code_or_404(db, code_id)
    activation_code_service.delete_activation_code(db, db_obj=db_obj)
    return None
