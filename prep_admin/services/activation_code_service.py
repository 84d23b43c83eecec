# prep_admin/services/activation_code_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from prep_admin.core.errors import db_errors
from prep_admin.models.activation_code import ActivationCode
from prep_admin.schemas.activation_code import (
    ActivationCodeCreate,
    ActivationCodePublic,
    ActivationCodeUpdate,
)
from prep_admin.services.mapping import EntityMapping, FieldMap, apply_row, id_field, timestamps


ACTIVATION_CODE_MAPPING = EntityMapping((
    id_field(),
    FieldMap("name"),
    FieldMap("encoded_value"),
    FieldMap("type"),
    FieldMap("subject_id", blank_to_none=True),
    FieldMap("subject_name", blank_to_none=True),
    FieldMap("valid_from"),
    FieldMap("valid_until"),
    FieldMap("is_active", default=True),
    FieldMap("is_used", default=False),
    FieldMap("used_at"),
    FieldMap("used_by_user_id", blank_to_none=True),
    *timestamps(),
))


def add_activation_code(db: Session, *, obj_in: ActivationCodeCreate) -> ActivationCodePublic:
    db_obj = ActivationCode(**ACTIVATION_CODE_MAPPING.to_row(obj_in.model_dump()))
    with db_errors(db, "add_activation_code"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return ACTIVATION_CODE_MAPPING.to_model(db_obj, ActivationCodePublic)


def add_activation_codes_batch(db: Session, *, codes: List[ActivationCodeCreate]) -> int:
    rows = [ActivationCode(**ACTIVATION_CODE_MAPPING.to_row(c.model_dump())) for c in codes]
    with db_errors(db, "add_activation_codes_batch"):
        db.add_all(rows)
        db.commit()
    return len(rows)


def list_activation_codes(db: Session) -> List[ActivationCodePublic]:
    with db_errors(db, "list_activation_codes"):
        rows = db.query(ActivationCode).order_by(ActivationCode.created_at.desc()).all()
    return [ACTIVATION_CODE_MAPPING.to_model(row, ActivationCodePublic) for row in rows]


def get_activation_code_row(db: Session, code_id: str) -> Optional[ActivationCode]:
    with db_errors(db, "get_activation_code_by_id"):
        return db.get(ActivationCode, code_id)


def update_activation_code(
    db: Session,
    *,
    db_obj: ActivationCode,
    obj_in: ActivationCodeUpdate,
) -> ActivationCodePublic:
    apply_row(db_obj, ACTIVATION_CODE_MAPPING.to_row(obj_in.model_dump(exclude_unset=True), partial=True))
    with db_errors(db, "update_activation_code"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return ACTIVATION_CODE_MAPPING.to_model(db_obj, ActivationCodePublic)


def delete_activation_code(db: Session, *, db_obj: ActivationCode) -> None:
    with db_errors(db, "delete_activation_code"):
        db.delete(db_obj)
        db.commit()
