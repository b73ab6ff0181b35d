"""
Pydantic-схемы запросов и ответов.

Общие поля объявления проверяет pydantic; блок спецификации категории
приходит как сырой dict и проверяется реестром (services.registry).
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .models.enums import AdType, PriceType


class PriceInfo(BaseModel):
    amount: Optional[Decimal] = Field(None, description="Only for FIXED_PRICE")
    type: PriceType
    including_vat: Optional[bool] = None


class AdCreateRequest(BaseModel):
    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=20, max_length=2000)
    quick_description: Optional[str] = Field(None, max_length=210)
    # строка, а не enum: неизвестную категорию отклоняет реестр своей ошибкой
    category: str
    price: PriceInfo
    location: str = Field(..., min_length=1, max_length=200)
    ad_type: AdType
    user_email: Optional[str] = Field(None, description="Set from the authenticated principal")

    # ровно одна спецификация: та, что соответствует category
    boat_spec: Optional[Dict[str, Any]] = None
    jet_ski_spec: Optional[Dict[str, Any]] = None
    trailer_spec: Optional[Dict[str, Any]] = None
    engine_spec: Optional[Dict[str, Any]] = None
    marine_electronics_spec: Optional[Dict[str, Any]] = None
    fishing_spec: Optional[Dict[str, Any]] = None
    parts_spec: Optional[Dict[str, Any]] = None
    services_spec: Optional[Dict[str, Any]] = None


class AdUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=5, max_length=100)
    description: Optional[str] = Field(None, min_length=20, max_length=2000)
    quick_description: Optional[str] = Field(None, max_length=210)
    price: Optional[PriceInfo] = None
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    ad_type: Optional[AdType] = None


class AdStatusUpdate(BaseModel):
    active: bool


class SearchFilter(BaseModel):
    # enum-поля: строки: недопустимые значения отклоняет движок поиска
    category: Optional[str] = None
    query: Optional[str] = None
    location: Optional[str] = None
    price_type: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    min_year: Optional[int] = None
    max_year: Optional[int] = None
    condition: Optional[str] = None
    ad_type: Optional[str] = None
    sort_by: Optional[str] = None

    # поля категорий: учитываются только для своей категории
    brand: Optional[str] = None
    model: Optional[str] = None
    electronics_type: Optional[str] = None
    screen_size: Optional[str] = None
    gps_integrated: Optional[bool] = None
    fishing_type: Optional[str] = None
    fishing_technique: Optional[str] = None
    target_fish: Optional[str] = None
    part_type: Optional[str] = None
    service_type: Optional[str] = None
    authorized_service: Optional[bool] = None
    supported_brand: Optional[str] = None


class AdWithSpecification(BaseModel):
    id: int
    title: str
    description: str
    quick_description: Optional[str] = None
    category: str
    category_display_name: str
    price: Optional[PriceInfo] = None
    formatted_price: str
    location: str
    ad_type: str
    user_email: str
    user_id: str
    user_first_name: Optional[str] = None
    user_last_name: Optional[str] = None
    user_full_name: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    active: bool
    views_count: int
    featured: bool

    # None: строки спецификации нет (не путать с пустой спецификацией)
    specification: Optional[Dict[str, Any]] = None
    specification_missing: bool = False


class UserAdStats(BaseModel):
    user_id: Optional[str] = None
    user_email: str
    user_full_name: Optional[str] = None
    total_ads: int
    active_ads: int
    inactive_ads: int
    total_value: Decimal
    average_price: Optional[Decimal] = None


class MarketStats(BaseModel):
    total_ads: int
    active_ads: int
    inactive_ads: int
    # по активным объявлениям с фиксированной ценой; None, если таких нет
    average_price: Optional[Decimal] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None


class CategoryCount(BaseModel):
    category: str
    display_name: str
    ad_count: int


class UserAdSummary(BaseModel):
    user_id: Optional[str] = None
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    total_ads: int
