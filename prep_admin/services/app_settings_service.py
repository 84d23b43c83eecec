# prep_admin/services/app_settings_service.py
from sqlalchemy.orm import Session

from prep_admin.core.errors import NotImplementedBackendError


def get_app_settings(db: Session) -> dict:
    raise NotImplementedBackendError("get_app_settings")


def update_app_settings(db: Session, values: dict) -> None:
    raise NotImplementedBackendError("update_app_settings")
