"""
Расширенный поиск.

Один предикат: категория (обязательно) + общие поля + поля спецификации,
которые учитываются только если схема запрошенной категории их объявляет.
Сортировка: одним проходом в памяти после выборки.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, Iterator

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..errors import InvalidSearchCriteriaError
from ..models.ad import Ad
from ..models.enums import AdType, ItemCondition, PriceType
from ..schemas import SearchFilter
from .registry import FieldSchema, schema_for

logger = logging.getLogger(__name__)

SORT_PRICE_ASC = "PRICE_LOW_TO_HIGH"
SORT_PRICE_DESC = "PRICE_HIGH_TO_LOW"
SORT_OLDEST = "OLDEST"
SORT_MOST_VIEWED = "MOST_VIEWED"
SORT_NEWEST = "NEWEST"

SORT_KEYS = (SORT_PRICE_ASC, SORT_PRICE_DESC, SORT_OLDEST, SORT_MOST_VIEWED, SORT_NEWEST)

_SORT_ALIASES = {
    "PRICE_ASC": SORT_PRICE_ASC,
    "PRICE_DESC": SORT_PRICE_DESC,
    "OLDEST_FIRST": SORT_OLDEST,
    "NEWEST_FIRST": SORT_NEWEST,
}

# фильтр -> (поле схемы категории, как сравниваем)
_SPEC_FILTERS = (
    ("brand", "brand", "ieq"),
    ("model", "model", "ieq"),
    ("condition", "condition", "eq"),
    ("electronics_type", "electronics_type", "eq"),
    ("screen_size", "screen_size", "eq"),
    ("gps_integrated", "gps_integrated", "eq"),
    ("fishing_type", "fishing_type", "eq"),
    ("fishing_technique", "fishing_technique", "eq"),
    ("target_fish", "target_fish", "eq"),
    ("part_type", "part_type", "eq"),
    ("service_type", "service_type", "eq"),
    ("authorized_service", "is_authorized_service", "eq"),
    ("supported_brand", "supported_brands", "contains"),
)


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _contains(value: str) -> str:
    # подстрока буквально: % и _ от клиента не шаблоны
    escaped = value.strip().lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _check_enum(name: str, value, enum_cls) -> str:
    try:
        return enum_cls(str(value).strip().upper()).value
    except ValueError:
        raise InvalidSearchCriteriaError(f"Недопустимое значение {name}: {value}", field=name)


def validate_filter(f: SearchFilter) -> tuple[FieldSchema, dict]:
    """
    Проверка до обращения к базе. Возвращает схему категории и
    нормализованные значения фильтров, которые к ней относятся.
    """
    if _blank(f.category):
        raise InvalidSearchCriteriaError("Для поиска нужна категория", field="category")
    schema = schema_for(f.category)

    if f.min_price is not None and f.max_price is not None and f.min_price > f.max_price:
        raise InvalidSearchCriteriaError("Минимальная цена больше максимальной", field="min_price")
    if f.min_year is not None and f.max_year is not None and f.min_year > f.max_year:
        raise InvalidSearchCriteriaError("Минимальный год больше максимального", field="min_year")

    crit: dict = {}
    if not _blank(f.price_type):
        crit["price_type"] = _check_enum("price_type", f.price_type, PriceType)
    if not _blank(f.ad_type):
        crit["ad_type"] = _check_enum("ad_type", f.ad_type, AdType)
    if not _blank(f.condition):
        # общий фильтр, но само поле живёт в спецификации
        crit["condition"] = _check_enum("condition", f.condition, ItemCondition)

    for filter_name, field_name, _how in _SPEC_FILTERS:
        value = getattr(f, filter_name)
        spec = schema.field(field_name)
        if _blank(value) or spec is None:
            continue  # чужие для категории поля игнорируем
        if filter_name in crit:
            continue
        if spec.choices is not None and isinstance(value, str):
            value = _check_enum(filter_name, value, spec.choices)
        elif isinstance(value, str):
            value = value.strip()
        crit[filter_name] = value

    if schema.field("condition") is None:
        crit.pop("condition", None)
    return schema, crit


def build_query(schema: FieldSchema, f: SearchFilter, crit: dict):
    stmt = select(Ad).where(Ad.category == schema.category.value, Ad.active.is_(True))

    if not _blank(f.query):
        like = _contains(f.query)
        stmt = stmt.where(or_(
            func.lower(Ad.title).like(like, escape="\\"),
            func.lower(Ad.description).like(like, escape="\\"),
        ))
    if not _blank(f.location):
        stmt = stmt.where(func.lower(Ad.location).like(_contains(f.location), escape="\\"))
    if "price_type" in crit:
        stmt = stmt.where(Ad.price_type == crit["price_type"])
    if f.min_price is not None:
        stmt = stmt.where(Ad.price_amount >= f.min_price)
    if f.max_price is not None:
        stmt = stmt.where(Ad.price_amount <= f.max_price)
    if "ad_type" in crit:
        stmt = stmt.where(Ad.ad_type == crit["ad_type"])

    spec_model = schema.model
    clauses = []
    for filter_name, field_name, how in _SPEC_FILTERS:
        if filter_name not in crit:
            continue
        col = getattr(spec_model, schema.field(field_name).attr)
        value = crit[filter_name]
        if how == "ieq":
            clauses.append(func.lower(col) == value.lower())
        elif how == "contains":
            clauses.append(func.lower(col).like(_contains(value), escape="\\"))
        else:
            clauses.append(col == value)

    year = schema.field("year")
    if year is not None:
        if f.min_year is not None:
            clauses.append(getattr(spec_model, year.attr) >= f.min_year)
        if f.max_year is not None:
            clauses.append(getattr(spec_model, year.attr) <= f.max_year)

    if clauses:
        stmt = stmt.where(Ad.id.in_(select(spec_model.ad_id).where(*clauses)))
    return stmt


# ---------- сортировка ----------

def normalize_sort_key(sort_by: str | None) -> str:
    if not sort_by:
        return SORT_NEWEST
    key = sort_by.strip().upper()
    key = _SORT_ALIASES.get(key, key)
    return key if key in SORT_KEYS else SORT_NEWEST


def _ts(value: dt.datetime) -> dt.datetime:
    # sqlite отдаёт naive, свежесозданные объекты: aware; сравниваем в naive UTC
    if value.tzinfo is not None:
        return value.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return value


def sort_ads(ads: Iterable[Ad], sort_by: str | None = None) -> list[Ad]:
    """
    Цена null всегда в конце, в любом направлении.
    При равенстве ключа: сначала новые.
    """
    key = normalize_sort_key(sort_by)
    newest = sorted(ads, key=lambda a: (_ts(a.created_at), a.id), reverse=True)

    if key == SORT_OLDEST:
        return sorted(newest, key=lambda a: (_ts(a.created_at), a.id))
    if key == SORT_PRICE_ASC:
        return sorted(newest, key=lambda a: (a.price_amount is None, a.price_amount or 0))
    if key == SORT_PRICE_DESC:
        return sorted(newest, key=lambda a: (a.price_amount is None, -(a.price_amount or 0)))
    if key == SORT_MOST_VIEWED:
        return sorted(newest, key=lambda a: -(a.views_count or 0))
    return newest


def _stream(db: Session, stmt, sort_by: str | None, category: str) -> Iterator[Ad]:
    rows = db.execute(stmt).scalars().all()
    ordered = sort_ads(rows, sort_by)
    logger.info(
        "search category=%s sort=%s results=%d", category, normalize_sort_key(sort_by), len(ordered)
    )
    yield from ordered


def search(db: Session, f: SearchFilter) -> Iterator[Ad]:
    """
    Валидация: сразу при вызове; запрос к базе: при первом next().
    Потребитель может бросить поток в любой момент.
    """
    schema, crit = validate_filter(f)
    logger.debug("search filters category=%s %s", schema.category.value, crit)
    stmt = build_query(schema, f, crit)
    return _stream(db, stmt, f.sort_by, schema.category.value)
