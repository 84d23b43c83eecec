# prep_admin/services/mapping.py
"""
Declarative field mapping between domain models and table rows.

Every entity declares one ``EntityMapping``: a tuple of ``FieldMap`` entries
naming the domain attribute, the column it is stored in, what to write when
the attribute is missing, and what to read back when the column is null.
Services never rename fields inline; they call ``to_row`` / ``from_row``.

The domain models are pydantic models with snake_case attributes and
camelCase aliases, so the API speaks camelCase while rows stay snake_case.
"""
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)

_MISSING = object()


@dataclass(frozen=True)
class FieldMap:
    name: str
    column: Optional[str] = None
    # written on create when the payload does not carry the field
    default: Any = None
    # read back when the column is null (callable for fresh containers)
    read_default: Any = None
    blank_to_none: bool = False
    writable: bool = True

    @property
    def column_name(self) -> str:
        return self.column or self.name

    def write_value(self, value: Any) -> Any:
        if self.blank_to_none and isinstance(value, str) and value.strip() == "":
            return None
        return value

    def default_value(self) -> Any:
        return self.default() if callable(self.default) else self.default

    def read_value(self, value: Any) -> Any:
        if value is None and self.read_default is not None:
            return self.read_default() if callable(self.read_default) else self.read_default
        return value


class EntityMapping:
    def __init__(self, fields: Iterable[FieldMap]):
        self.fields = tuple(fields)

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(f.column_name for f in self.fields if f.writable)

    def to_row(self, data: dict, *, partial: bool = False) -> dict:
        """
        Domain dict -> column dict.

        ``partial=True`` only maps the keys present in ``data`` (update);
        otherwise missing fields get their declared default (insert).
        """
        row = {}
        for f in self.fields:
            if not f.writable:
                continue
            value = data.get(f.name, _MISSING)
            if value is _MISSING:
                if partial:
                    continue
                value = f.default_value()
            row[f.column_name] = f.write_value(value)
        return row

    def from_row(self, db_obj: Any) -> dict:
        return {
            f.name: f.read_value(getattr(db_obj, f.column_name, None))
            for f in self.fields
        }

    def to_model(self, db_obj: Any, model: Type[ModelT]) -> ModelT:
        return model.model_validate(self.from_row(db_obj))


def apply_row(db_obj: Any, row: dict) -> Any:
    for column, value in row.items():
        setattr(db_obj, column, value)
    return db_obj


def timestamps() -> tuple[FieldMap, ...]:
    return (
        FieldMap("created_at", writable=False),
        FieldMap("updated_at", writable=False),
    )


def id_field() -> FieldMap:
    return FieldMap("id", writable=False)


def empty_list() -> list:
    return []


def map_rows(rows: Iterable[Any], convert: Callable[[Any], Optional[ModelT]]) -> list[ModelT]:
    result = []
    for row in rows:
        item = convert(row)
        if item is not None:
            result.append(item)
    return result
