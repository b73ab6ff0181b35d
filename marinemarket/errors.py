"""
Ошибки маркетплейса.

Каждая ошибка наследует ещё и встроенное исключение, по которому её
разбирает HTTP-слой: ValueError -> 400, LookupError -> 404,
PermissionError -> 403, RuntimeError -> 5xx.
"""
from __future__ import annotations


class MarketplaceError(Exception):
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


# ---------- (a) validation ----------

class SpecValidationError(MarketplaceError, ValueError):
    code = "validation_error"
    rule = "invalid"

    def __init__(self, category: str, field: str, message: str, rule: str | None = None):
        super().__init__(message)
        self.category = category
        self.field = field
        if rule:
            self.rule = rule

    def to_dict(self) -> dict:
        return {**super().to_dict(), "field": self.field, "category": self.category, "rule": self.rule}


class MandatoryFieldMissingError(SpecValidationError):
    code = "missing_field"
    rule = "missing"

    def __init__(self, category: str, field: str):
        super().__init__(category, field, f"Не указано обязательное поле '{field}' ({category})")


class InvalidFieldValueError(SpecValidationError):
    code = "invalid_field"


class UnsupportedCategoryError(MarketplaceError, ValueError):
    code = "unsupported_category"

    def __init__(self, category):
        super().__init__(f"Категория не поддерживается: {category}")
        self.category = category

    def to_dict(self) -> dict:
        return {**super().to_dict(), "category": str(self.category)}


class CategoryMismatchError(MarketplaceError, ValueError):
    code = "category_mismatch"

    def __init__(self, category: str, payload_key: str):
        super().__init__(f"Спецификация '{payload_key}' не относится к категории {category}")
        self.category = category
        self.field = payload_key

    def to_dict(self) -> dict:
        return {**super().to_dict(), "field": self.field, "category": self.category}


class InvalidPriceError(MarketplaceError, ValueError):
    code = "invalid_price"


class InvalidSearchCriteriaError(MarketplaceError, ValueError):
    code = "invalid_search"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        return {**super().to_dict(), "field": self.field}


# ---------- (b) not found ----------

class UserNotFoundError(MarketplaceError, LookupError):
    code = "user_not_found"

    def __init__(self, email: str):
        super().__init__(f"Пользователь не найден: {email}")
        self.email = email


class AdNotFoundError(MarketplaceError, LookupError):
    code = "ad_not_found"

    def __init__(self, ad_id: int):
        super().__init__(f"Объявление не найдено: {ad_id}")
        self.ad_id = ad_id


# ---------- (c) ownership ----------

class NotAdOwnerError(MarketplaceError, PermissionError):
    code = "not_owner"


# ---------- (d) upstream ----------

class IdentityRejectedError(MarketplaceError, PermissionError):
    code = "credential_rejected"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class IdentityServiceUnavailableError(MarketplaceError, RuntimeError):
    code = "service_unavailable"


# ---------- (e) persistence ----------

class PersistenceError(MarketplaceError, RuntimeError):
    code = "persistence_error"
