from __future__ import annotations

from itertools import islice
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..deps import get_bearer_token, get_current_email, get_identity_client
from ..errors import (
    IdentityRejectedError,
    IdentityServiceUnavailableError,
    MarketplaceError,
    PersistenceError,
)
from ..models.enums import AdType, Category, PriceType
from ..schemas import AdCreateRequest, AdStatusUpdate, AdUpdateRequest, SearchFilter
from ..services import ads as ads_service
from ..services.assembler import to_response
from ..services.identity import IdentityClient
from ..services.registry import filter_options
from ..services.search import SORT_KEYS, search
from ..services.spec_store import distinct_values

router = APIRouter(prefix="/api/ads", tags=["ads"])


def _http_error(e: MarketplaceError) -> HTTPException:
    if isinstance(e, IdentityRejectedError):
        code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(e, IdentityServiceUnavailableError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(e, PersistenceError):
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    elif isinstance(e, LookupError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(e, PermissionError):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=e.to_dict())


def _public(db: Session, ad) -> dict:
    return to_response(db, ad).model_dump(mode="json")


def _items(db: Session, rows) -> dict:
    return {"ok": True, "items": [_public(db, x) for x in rows]}


# ---------- создание ----------
@router.post("", status_code=status.HTTP_201_CREATED)
def api_create_ad(
    payload: AdCreateRequest,
    token: str = Depends(get_bearer_token),
    email: str = Depends(get_current_email),
    identity: IdentityClient = Depends(get_identity_client),
    db: Session = Depends(get_db),
):
    # email берём из токена, а не из тела
    payload = payload.model_copy(update={"user_email": email})
    try:
        ad = ads_service.create_ad(db, identity, payload, token)
    except MarketplaceError as e:
        raise _http_error(e)
    return {"ok": True, "ad": _public(db, ad)}


# ---------- поиск ----------
def _run_search(db: Session, f: SearchFilter, limit: Optional[int]) -> dict:
    try:
        stream = search(db, f)
    except MarketplaceError as e:
        raise _http_error(e)
    # сортировка уже сделана; берём только первые limit
    return _items(db, islice(stream, limit) if limit else stream)


@router.post("/search")
def api_search(
    f: SearchFilter,
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return _run_search(db, f, limit)


@router.get("/search")
def api_quick_search(
    f: SearchFilter = Depends(),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return _run_search(db, f, limit)


# ---------- справочники ----------
@router.get("/filters")
def api_filters():
    return {
        "ok": True,
        "categories": [{"value": c.value, "name": c.display_name} for c in Category],
        "price_types": [{"value": p.value, "name": p.display_name} for p in PriceType],
        "ad_types": [a.value for a in AdType],
        "sort_by": list(SORT_KEYS),
        "specifications": filter_options(),
    }


@router.get("/brands")
def api_brands(category: str, db: Session = Depends(get_db)):
    try:
        return {"ok": True, "items": distinct_values(db, category, "brand")}
    except MarketplaceError as e:
        raise _http_error(e)


@router.get("/models")
def api_models(category: str, db: Session = Depends(get_db)):
    try:
        return {"ok": True, "items": distinct_values(db, category, "model")}
    except MarketplaceError as e:
        raise _http_error(e)


# ---------- ленты ----------
@router.get("/my-ads")
def api_my_ads(email: str = Depends(get_current_email), db: Session = Depends(get_db)):
    return _items(db, ads_service.list_user_ads(db, email))


@router.get("/my-stats")
def api_my_stats(email: str = Depends(get_current_email), db: Session = Depends(get_db)):
    return {"ok": True, "stats": ads_service.user_stats(db, email).model_dump(mode="json")}


@router.get("/recent")
def api_recent(limit: int = Query(settings.RECENT_LIMIT, ge=1, le=100), db: Session = Depends(get_db)):
    return _items(db, ads_service.recent_ads(db, limit))


@router.get("/popular")
def api_popular(limit: int = Query(settings.RECENT_LIMIT, ge=1, le=100), db: Session = Depends(get_db)):
    return _items(db, ads_service.popular_ads(db, limit))


@router.get("/featured")
def api_featured(limit: int = Query(settings.FEATURED_LIMIT, ge=1, le=100), db: Session = Depends(get_db)):
    return _items(db, ads_service.featured_ads(db, limit))


@router.get("/category/{category}")
def api_by_category(
    category: str,
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    try:
        return _items(db, ads_service.ads_by_category(db, category, limit))
    except MarketplaceError as e:
        raise _http_error(e)


# ---------- статистика ----------
@router.get("/stats")
def api_stats(db: Session = Depends(get_db)):
    return {"ok": True, "stats": ads_service.general_stats(db).model_dump(mode="json")}


@router.get("/categories")
def api_categories(db: Session = Depends(get_db)):
    return {
        "ok": True,
        "items": [c.model_dump() for c in ads_service.category_counts(db)],
    }


# ---------- объявления другого пользователя ----------
@router.get("/user/{email}")
def api_user_ads(
    email: str,
    token: str = Depends(get_bearer_token),
    identity: IdentityClient = Depends(get_identity_client),
    db: Session = Depends(get_db),
):
    try:
        rows = ads_service.public_user_ads(db, identity, email, token)
    except MarketplaceError as e:
        raise _http_error(e)
    return _items(db, rows)


@router.get("/user/{email}/summary")
def api_user_summary(
    email: str,
    token: str = Depends(get_bearer_token),
    identity: IdentityClient = Depends(get_identity_client),
    db: Session = Depends(get_db),
):
    try:
        summary = ads_service.user_summary(db, identity, email, token)
    except MarketplaceError as e:
        raise _http_error(e)
    return {"ok": True, "summary": summary.model_dump(mode="json")}


# ---------- одно объявление ----------
@router.get("/{ad_id}")
def api_get_ad(ad_id: int, db: Session = Depends(get_db)):
    try:
        ad = ads_service.get_ad(db, ad_id)
    except MarketplaceError as e:
        raise _http_error(e)
    return {"ok": True, "ad": _public(db, ad)}


@router.put("/{ad_id}")
def api_update_ad(
    ad_id: int,
    payload: AdUpdateRequest,
    email: str = Depends(get_current_email),
    db: Session = Depends(get_db),
):
    try:
        ad = ads_service.update_ad(db, ad_id, payload, email)
    except MarketplaceError as e:
        raise _http_error(e)
    return {"ok": True, "ad": _public(db, ad)}


@router.patch("/{ad_id}/status")
def api_set_status(
    ad_id: int,
    payload: AdStatusUpdate,
    email: str = Depends(get_current_email),
    db: Session = Depends(get_db),
):
    try:
        ad = ads_service.set_status(db, ad_id, payload.active, email)
    except MarketplaceError as e:
        raise _http_error(e)
    return {"ok": True, "id": ad.id, "active": ad.active}


@router.delete("/{ad_id}")
def api_delete_ad(
    ad_id: int,
    email: str = Depends(get_current_email),
    db: Session = Depends(get_db),
):
    try:
        ads_service.delete_ad(db, ad_id, email)
    except MarketplaceError as e:
        raise _http_error(e)
    return {"ok": True, "deleted": ad_id}
