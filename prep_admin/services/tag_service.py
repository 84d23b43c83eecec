# prep_admin/services/tag_service.py
import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from prep_admin.core.errors import NotImplementedBackendError, db_errors
from prep_admin.models.tag import Tag
from prep_admin.schemas.ai import TagMergeResult
from prep_admin.schemas.tag import TagCreate, TagPublic, TagUpdate
from prep_admin.services.mapping import EntityMapping, FieldMap, id_field, timestamps

logger = logging.getLogger(__name__)


TAG_MAPPING = EntityMapping((
    id_field(),
    FieldMap("name"),
    *timestamps(),
))


def _tag_key(name: str) -> str:
    return name.strip().casefold()


def add_tag(db: Session, *, obj_in: TagCreate) -> TagPublic:
    db_obj = Tag(**TAG_MAPPING.to_row({"name": obj_in.name.strip()}))
    with db_errors(db, "add_tag"):
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
    return TAG_MAPPING.to_model(db_obj, TagPublic)


def list_tags(db: Session) -> List[TagPublic]:
    with db_errors(db, "list_tags"):
        rows = db.query(Tag).order_by(Tag.name.asc()).all()
    return [TAG_MAPPING.to_model(row, TagPublic) for row in rows]


def get_tag_by_id(db: Session, tag_id: str) -> Optional[TagPublic]:
    with db_errors(db, "get_tag_by_id"):
        db_obj = db.get(Tag, tag_id)
    if db_obj is None:
        return None
    return TAG_MAPPING.to_model(db_obj, TagPublic)


def update_tag(db: Session, tag_id: str, obj_in: TagUpdate) -> None:
    raise NotImplementedBackendError("update_tag")


def delete_tag(db: Session, tag_id: str) -> None:
    raise NotImplementedBackendError("delete_tag")


def merge_tag_names(
    db: Session,
    *,
    selected_tag_ids: Iterable[str],
    names: Iterable[str],
    existing_tags: Optional[List[TagPublic]] = None,
) -> TagMergeResult:
    """
    Add tags by name to a selection of tag ids.

    A name matching an existing tag (trimmed, case-insensitive) selects that
    tag; any other name creates a new tag and selects it. Ids already in the
    selection are never repeated and a name is never created twice, so
    merging the same names again changes nothing.

    There is no rollback: tags created before a later failure stay created.
    """
    names = list(names)
    if existing_tags is None:
        existing_tags = list_tags(db)

    by_name = {}
    for tag in existing_tags:
        by_name.setdefault(_tag_key(tag.name), tag)

    selected = []
    for tag_id in selected_tag_ids:
        if tag_id not in selected:
            selected.append(tag_id)

    created = []
    for name in names:
        key = _tag_key(name)
        if not key:
            continue
        tag = by_name.get(key)
        if tag is None:
            tag = add_tag(db, obj_in=TagCreate(name=name.strip()))
            logger.info(f"Created tag {tag.name!r} ({tag.id})")
            by_name[key] = tag
            created.append(tag)
        if tag.id not in selected:
            selected.append(tag.id)

    return TagMergeResult(
        suggested_tags=[n for n in names if n.strip()],
        selected_tag_ids=selected,
        created_tags=created,
    )
