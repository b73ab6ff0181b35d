from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from ..models.ad import Ad
from ..models.enums import Category, PriceType
from ..schemas import AdWithSpecification, PriceInfo
from .spec_store import load_specification

logger = logging.getLogger(__name__)


def _price_type(ad: Ad) -> PriceType | None:
    try:
        return PriceType(ad.price_type)
    except ValueError:
        return None


def format_price(ad: Ad) -> str:
    pt = _price_type(ad)
    if pt is None:
        return ""
    if pt is not PriceType.FIXED_PRICE or ad.price_amount is None:
        return pt.display_name
    amount = Decimal(ad.price_amount).quantize(Decimal("0.01"))
    s = f"{amount} лв"
    if ad.including_vat is not None:
        s += " с ДДС" if ad.including_vat else " без ДДС"
    return s


def full_name(ad: Ad) -> str:
    name = " ".join(p for p in (ad.user_first_name, ad.user_last_name) if p)
    return name or ad.user_email


def to_response(db: Session, ad: Ad) -> AdWithSpecification:
    category = Category(ad.category)
    spec = load_specification(db, category, ad.id)
    if spec is None:
        # не должно случаться (создаём вместе с объявлением), но ответ не роняем
        logger.warning("ad %s (%s) has no specification row", ad.id, ad.category)

    pt = _price_type(ad)
    return AdWithSpecification(
        id=ad.id,
        title=ad.title,
        description=ad.description,
        quick_description=ad.quick_description,
        category=category.value,
        category_display_name=category.display_name,
        price=PriceInfo(amount=ad.price_amount, type=pt, including_vat=ad.including_vat) if pt else None,
        formatted_price=format_price(ad),
        location=ad.location,
        ad_type=ad.ad_type,
        user_email=ad.user_email,
        user_id=ad.user_id,
        user_first_name=ad.user_first_name,
        user_last_name=ad.user_last_name,
        user_full_name=full_name(ad),
        created_at=ad.created_at,
        updated_at=ad.updated_at,
        active=ad.active,
        views_count=ad.views_count or 0,
        featured=ad.featured,
        specification=spec,
        specification_missing=spec is None,
    )
