from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from ..models.ad import Ad
from .registry import FieldKind, FieldSchema, schema_for

logger = logging.getLogger(__name__)


def _feature_model(schema: FieldSchema, relation: str):
    return getattr(schema.model, relation).property.mapper.class_


def find_row(db: Session, category, ad_id: int):
    schema = schema_for(category)
    return db.execute(
        select(schema.model).where(schema.model.ad_id == ad_id)
    ).scalar_one_or_none()


# Записать строку спецификации (+ фичи лодки). Коммит: на вызывающем (unit of work).
def save_specification(db: Session, ad: Ad, values: dict):
    schema = schema_for(ad.category)
    row = schema.model(ad_id=ad.id)
    for spec in schema.fields:
        value = values.get(spec.name)
        if spec.relation:
            continue
        if spec.is_list:
            value = ",".join(value) if value else None
        setattr(row, spec.attr, value)
    db.add(row)
    db.flush()

    # фичи: отдельные строки со ссылкой на строку спецификации
    for spec in schema.fields:
        if not spec.relation:
            continue
        model = _feature_model(schema, spec.relation)
        for tag in values.get(spec.name) or []:
            getattr(row, spec.relation).append(model(boat_spec_id=row.id, feature=tag))
    db.flush()
    return row


def row_to_dict(schema: FieldSchema, row) -> dict:
    out: dict = {}
    for spec in schema.fields:
        if spec.relation:
            out[spec.name] = [f.feature for f in getattr(row, spec.relation)]
            continue
        value = getattr(row, spec.attr)
        if spec.is_list:
            value = [v for v in (value or "").split(",") if v]
        out[spec.name] = value
    return out


def load_specification(db: Session, category, ad_id: int) -> Optional[dict]:
    schema = schema_for(category)
    row = find_row(db, schema.category, ad_id)
    if row is None:
        return None
    return row_to_dict(schema, row)


def delete_specification(db: Session, category, ad_id: int) -> bool:
    row = find_row(db, category, ad_id)
    if row is None:
        logger.warning("no specification row to delete: category=%s ad_id=%s", category, ad_id)
        return False
    db.delete(row)   # фичи уходят каскадом (delete-orphan)
    db.flush()
    return True


def distinct_values(db: Session, category, field_name: str) -> list[str]:
    """Уникальные значения строкового поля (brand/model) среди активных объявлений категории."""
    schema = schema_for(category)
    spec = schema.field(field_name)
    if spec is None or spec.kind is not FieldKind.STRING:
        return []
    column = getattr(schema.model, spec.attr)
    rows = db.execute(
        select(column)
        .join(Ad, Ad.id == schema.model.ad_id)
        .where(Ad.active.is_(True), column.is_not(None), func.length(column) > 0)
        .distinct()
        .order_by(column)
    ).scalars().all()
    return list(rows)
