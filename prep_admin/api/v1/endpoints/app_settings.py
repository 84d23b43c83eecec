# prep_admin/api/v1/endpoints/app_settings.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from prep_admin.db.session import get_db
from prep_admin.services import app_settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/")
def get_app_settings(db: Session = Depends(get_db)):
    return app_settings_service.get_app_settings(db)


@router.put("/", status_code=status.HTTP_204_NO_CONTENT)
def update_app_settings(values: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    app_settings_service.update_app_settings(db, values)
