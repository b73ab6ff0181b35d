from __future__ import annotations
import datetime as dt
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Numeric, Index

from .base import Base


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Ad(Base):
    __tablename__ = "ads"

    id = Column(Integer, primary_key=True)

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    quick_description = Column(String(210), nullable=True)

    # категория задаёт таблицу спецификации, после создания не меняется
    category = Column(String(32), nullable=False)

    price_amount = Column(Numeric(12, 2), nullable=True)   # null: не фиксированная цена
    price_type = Column(String(32), nullable=False)
    including_vat = Column(Boolean, nullable=True)

    location = Column(String(200), nullable=False)
    ad_type = Column(String(16), nullable=False)

    # владелец: из сервиса авторизации
    user_email = Column(String(255), nullable=False, index=True)
    user_id = Column(String(255), nullable=False)
    user_first_name = Column(String(100), nullable=True)
    user_last_name = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    active = Column(Boolean, default=True, nullable=False)
    views_count = Column(Integer, default=0, nullable=False)
    featured = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        Index("ix_ads_category_active", "category", "active"),
        Index("ix_ads_created_at", "created_at"),
    )
