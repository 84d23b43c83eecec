# prep_admin/services/profile_service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from prep_admin.core.errors import db_errors
from prep_admin.models.profile import Profile
from prep_admin.schemas.profile import ProfileCreate, ProfilePublic, ProfileUpdate
from prep_admin.services.mapping import EntityMapping, FieldMap, apply_row, id_field, timestamps

logger = logging.getLogger(__name__)


PROFILE_MAPPING = EntityMapping((
    id_field(),
    FieldMap("email"),
    FieldMap("name"),
    FieldMap("role"),
    FieldMap("avatar_url", blank_to_none=True),
    FieldMap("avatar_hint", blank_to_none=True),
    FieldMap("points"),
    FieldMap("level"),
    FieldMap("progress_to_next_level"),
    FieldMap("badges"),
    FieldMap("rewards"),
    FieldMap("student_goals"),
    FieldMap("branch"),
    FieldMap("university"),
    FieldMap("major"),
    FieldMap("active_subscription"),
    FieldMap("youtube_channel_url", blank_to_none=True),
    FieldMap("subjects_taught_ids", blank_to_none=True),
    *timestamps(),
))


def _to_public(db_obj: Profile) -> ProfilePublic:
    return PROFILE_MAPPING.to_model(db_obj, ProfilePublic)


def list_profiles(db: Session) -> List[ProfilePublic]:
    with db_errors(db, "list_profiles"):
        rows = db.query(Profile).all()
    return [_to_public(row) for row in rows]


def get_profile_row(db: Session, profile_id: str) -> Optional[Profile]:
    with db_errors(db, "get_profile_by_id"):
        return db.get(Profile, profile_id)


def get_profile_by_email(db: Session, email: str) -> Optional[ProfilePublic]:
    with db_errors(db, "get_profile_by_email"):
        db_obj = db.query(Profile).filter(Profile.email == email).first()
    return _to_public(db_obj) if db_obj else None


def update_profile(db: Session, *, db_obj: Profile, obj_in: ProfileUpdate) -> ProfilePublic:
    row = PROFILE_MAPPING.to_row(obj_in.model_dump(exclude_unset=True), partial=True)
    if not row:
        logger.warning(f"update_profile called with no data to update for id: {db_obj.id}")
        return _to_public(db_obj)

    apply_row(db_obj, row)
    with db_errors(db, "update_profile"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return _to_public(db_obj)


def list_teachers(db: Session) -> List[ProfilePublic]:
    with db_errors(db, "list_teachers"):
        rows = db.query(Profile).filter(Profile.role == "teacher").all()
    return [_to_public(row) for row in rows]


def assign_teacher_subject(db: Session, *, teacher_id: str, subject_id: Optional[str]) -> int:
    """
    Returns the number of rows touched; 0 when the id is not a teacher.
    """
    with db_errors(db, "assign_teacher_subject"):
        count = (
            db.query(Profile)
            .filter(Profile.id == teacher_id, Profile.role == "teacher")
            .update({Profile.subjects_taught_ids: subject_id or None})
        )
        db.commit()
    return count


def add_profiles_batch(db: Session, *, profiles: List[ProfileCreate]) -> int:
    rows = []
    for p in profiles:
        row = PROFILE_MAPPING.to_row(p.model_dump(exclude_unset=True), partial=True)
        if p.id:
            row["id"] = p.id
        rows.append(Profile(**row))
    with db_errors(db, "add_profiles_batch"):
        db.add_all(rows)
        db.commit()
    return len(rows)
