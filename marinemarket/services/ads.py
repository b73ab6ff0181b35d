from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ..db import unit_of_work
from ..errors import (
    AdNotFoundError,
    CategoryMismatchError,
    InvalidPriceError,
    MandatoryFieldMissingError,
    NotAdOwnerError,
    UserNotFoundError,
)
from ..models.ad import Ad, utcnow
from ..models.enums import Category, PriceType
from ..schemas import (
    AdCreateRequest,
    AdUpdateRequest,
    CategoryCount,
    MarketStats,
    PriceInfo,
    UserAdStats,
    UserAdSummary,
)
from .identity import IdentityClient
from .registry import PAYLOAD_KEYS, parse_category, schema_for, validate
from .search import sort_ads
from .spec_store import delete_specification, save_specification

logger = logging.getLogger(__name__)


def _check_price(price: PriceInfo) -> None:
    if price.type is PriceType.FIXED_PRICE:
        if price.amount is None:
            raise InvalidPriceError("Для фиксированной цены укажите сумму")
        if price.amount <= 0:
            raise InvalidPriceError("Цена должна быть положительной")
    elif price.amount is not None:
        raise InvalidPriceError("Сумма указывается только для фиксированной цены")


# Проверки без побочных эффектов: категория, спецификация, цена
def validate_request(request: AdCreateRequest) -> dict:
    schema = schema_for(request.category)
    for key in PAYLOAD_KEYS:
        if key != schema.payload_key and getattr(request, key) is not None:
            raise CategoryMismatchError(schema.category.value, key)
    values = validate(schema.category, getattr(request, schema.payload_key)).raise_for_error()
    _check_price(request.price)
    if not (request.user_email or "").strip():
        raise MandatoryFieldMissingError(schema.category.value, "user_email")
    return values


# Создать объявление: валидация -> пользователь -> ad + спецификация одной транзакцией
def create_ad(db: Session, identity: IdentityClient, request: AdCreateRequest, credential: str) -> Ad:
    logger.info("create ad start: category=%s user=%s", request.category, request.user_email)
    try:
        values = validate_request(request)
    except ValueError as e:
        logger.info("create ad rejected: category=%s error=%s", request.category, e)
        raise

    email = request.user_email.strip()
    user = identity.validate_user(email, credential)
    if not user.exists:
        logger.warning("create ad: user not found %s", email)
        raise UserNotFoundError(email)

    schema = schema_for(request.category)
    price = request.price
    with unit_of_work(db):
        ad = Ad(
            title=request.title.strip(),
            description=request.description.strip(),
            quick_description=(request.quick_description or "").strip() or None,
            category=schema.category.value,
            price_amount=price.amount,
            price_type=price.type.value,
            including_vat=price.including_vat,
            location=request.location.strip(),
            ad_type=request.ad_type.value,
            user_email=user.email,
            user_id=user.user_id,
            user_first_name=user.first_name,
            user_last_name=user.last_name,
            active=True,
            views_count=0,
            featured=False,
        )
        db.add(ad)
        db.flush()
        save_specification(db, ad, values)

    logger.info("create ad ok: id=%s category=%s user=%s", ad.id, ad.category, ad.user_email)
    return ad


# Карточка объявления; каждый успешный просмотр +1 к счётчику
def get_ad(db: Session, ad_id: int) -> Ad:
    ad = db.get(Ad, ad_id)
    if not ad:
        raise AdNotFoundError(ad_id)
    with unit_of_work(db):
        db.execute(
            update(Ad).where(Ad.id == ad_id).values(views_count=Ad.views_count + 1)
        )
    db.refresh(ad)
    return ad


def _get_owned(db: Session, ad_id: int, email: str) -> Ad:
    ad = db.get(Ad, ad_id)
    if not ad:
        raise AdNotFoundError(ad_id)
    if (ad.user_email or "").lower() != (email or "").lower():
        raise NotAdOwnerError("Можно изменять только свои объявления")
    return ad


# Обновить общие поля (категория и спецификация не меняются)
def update_ad(db: Session, ad_id: int, request: AdUpdateRequest, email: str) -> Ad:
    ad = _get_owned(db, ad_id, email)
    if request.price is not None:
        _check_price(request.price)
    with unit_of_work(db):
        if request.title is not None:
            ad.title = request.title.strip()
        if request.description is not None:
            ad.description = request.description.strip()
        if request.quick_description is not None:
            ad.quick_description = request.quick_description.strip() or None
        if request.price is not None:
            ad.price_amount = request.price.amount
            ad.price_type = request.price.type.value
            ad.including_vat = request.price.including_vat
        if request.location is not None:
            ad.location = request.location.strip()
        if request.ad_type is not None:
            ad.ad_type = request.ad_type.value
        ad.updated_at = utcnow()
    return ad


def set_status(db: Session, ad_id: int, active: bool, email: str) -> Ad:
    ad = _get_owned(db, ad_id, email)
    with unit_of_work(db):
        ad.active = active
        ad.updated_at = utcnow()
    return ad


# Удаление: объявление + спецификация + фичи: одним коммитом
def delete_ad(db: Session, ad_id: int, email: str) -> None:
    ad = _get_owned(db, ad_id, email)
    with unit_of_work(db):
        delete_specification(db, ad.category, ad.id)
        db.delete(ad)
    logger.info("ad %s deleted by %s", ad_id, email)


# Мои (любые)
def list_user_ads(db: Session, email: str) -> List[Ad]:
    rows = db.execute(select(Ad).where(Ad.user_email == email)).scalars().all()
    return sort_ads(rows)


def user_stats(db: Session, email: str) -> UserAdStats:
    ads = list_user_ads(db, email)
    active = [a for a in ads if a.active]
    prices = [Decimal(a.price_amount) for a in ads if a.price_amount is not None]
    total = sum(prices, Decimal("0"))
    latest = ads[0] if ads else None
    full = None
    if latest:
        full = " ".join(p for p in (latest.user_first_name, latest.user_last_name) if p) or None
    return UserAdStats(
        user_id=latest.user_id if latest else None,
        user_email=email,
        user_full_name=full,
        total_ads=len(ads),
        active_ads=len(active),
        inactive_ads=len(ads) - len(active),
        total_value=total,
        average_price=(total / len(prices)).quantize(Decimal("0.01")) if prices else None,
    )


# Публичные ленты (только активные)
def _active(db: Session, *where) -> List[Ad]:
    return db.execute(select(Ad).where(Ad.active.is_(True), *where)).scalars().all()


def recent_ads(db: Session, limit: int = 20) -> List[Ad]:
    return sort_ads(_active(db))[:limit]


def popular_ads(db: Session, limit: int = 20) -> List[Ad]:
    return sort_ads(_active(db), "MOST_VIEWED")[:limit]


def featured_ads(db: Session, limit: int = 10) -> List[Ad]:
    return sort_ads(_active(db, Ad.featured.is_(True)))[:limit]


def ads_by_category(db: Session, category, limit: int | None = None) -> List[Ad]:
    cat = parse_category(category)
    rows = sort_ads(_active(db, Ad.category == cat.value))
    return rows[:limit] if limit else rows


# Чужие объявления по email: пользователь должен существовать в сервисе авторизации
def public_user_ads(db: Session, identity: IdentityClient, email: str, credential: str) -> List[Ad]:
    user = identity.validate_user(email.strip(), credential)
    if not user.exists:
        raise UserNotFoundError(email)
    return sort_ads(_active(db, func.lower(Ad.user_email) == user.email.lower()))


def user_summary(db: Session, identity: IdentityClient, email: str, credential: str) -> UserAdSummary:
    user = identity.validate_user(email.strip(), credential)
    if not user.exists:
        raise UserNotFoundError(email)
    total = db.execute(
        select(func.count(Ad.id)).where(func.lower(Ad.user_email) == user.email.lower())
    ).scalar_one()
    return UserAdSummary(
        user_id=user.user_id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        total_ads=total,
    )


def _money(value) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(Decimal("0.01"))


# Сводка по всему маркетплейсу
def general_stats(db: Session) -> MarketStats:
    total, active = db.execute(
        select(func.count(Ad.id), func.count(Ad.id).filter(Ad.active.is_(True)))
    ).one()
    avg_, min_, max_ = db.execute(
        select(func.avg(Ad.price_amount), func.min(Ad.price_amount), func.max(Ad.price_amount))
        .where(
            Ad.active.is_(True),
            Ad.price_type == PriceType.FIXED_PRICE.value,
            Ad.price_amount.is_not(None),
        )
    ).one()
    return MarketStats(
        total_ads=total,
        active_ads=active,
        inactive_ads=total - active,
        average_price=_money(avg_),
        min_price=_money(min_),
        max_price=_money(max_),
    )


# Категории с числом активных объявлений, самые заполненные первыми
def category_counts(db: Session) -> List[CategoryCount]:
    n = func.count(Ad.id).label("n")
    rows = db.execute(
        select(Ad.category, n)
        .where(Ad.active.is_(True))
        .group_by(Ad.category)
        .order_by(n.desc(), Ad.category)
    ).all()
    out = []
    for category, count in rows:
        try:
            name = Category(category).display_name
        except ValueError:
            logger.warning("unknown category in ads table: %s", category)
            continue
        out.append(CategoryCount(category=category, display_name=name, ad_count=count))
    return out
