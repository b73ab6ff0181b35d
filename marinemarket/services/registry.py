"""
Реестр спецификаций: категория -> схема полей.

Одна таблица на все восемь категорий. Схема знает поля (тип, обязательность,
домен), ключ payload'а в запросе и модель, в которую пишется строка.
Валидация, хранение и сборка ответа ходят через эту таблицу, а не через switch.
"""
from __future__ import annotations

import datetime as dt
import enum
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Union

from ..errors import (
    InvalidFieldValueError,
    MandatoryFieldMissingError,
    MarketplaceError,
    UnsupportedCategoryError,
)
from ..models import enums as E
from ..models.enums import Category
from ..models.specifications import (
    BoatSpecification,
    EngineSpecification,
    FishingSpecification,
    JetSkiSpecification,
    MarineElectronicsSpecification,
    PartsSpecification,
    ServicesSpecification,
    TrailerSpecification,
)

MIN_YEAR = 1900


def max_year() -> int:
    return dt.date.today().year + 5


class FieldKind(str, enum.Enum):
    STRING      = "string"
    INTEGER     = "integer"
    DECIMAL     = "decimal"
    BOOLEAN     = "boolean"
    ENUM        = "enum"
    ENUM_LIST   = "enum_list"
    STRING_LIST = "string_list"


Bound = Union[int, Decimal, Callable[[], int], None]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    required: bool = True
    choices: Optional[type] = None      # enum-класс для ENUM / ENUM_LIST
    min: Bound = None
    max: Bound = None
    max_length: Optional[int] = None
    column: Optional[str] = None        # если колонка называется иначе, чем поле
    relation: Optional[str] = None      # список хранится в отдельной таблице (фичи лодок)

    @property
    def attr(self) -> str:
        return self.column or self.name

    @property
    def is_list(self) -> bool:
        return self.kind in (FieldKind.ENUM_LIST, FieldKind.STRING_LIST)

    def lower(self):
        return self.min() if callable(self.min) else self.min

    def upper(self):
        return self.max() if callable(self.max) else self.max

    def domain(self) -> Optional[list[str]]:
        if self.choices is None:
            return None
        return [c.value for c in self.choices]


@dataclass(frozen=True)
class FieldSchema:
    category: Category
    payload_key: str
    model: type
    fields: tuple

    def field(self, name: str) -> Optional[FieldSpec]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fields]

    def domains(self) -> dict[str, list[str]]:
        return {f.name: f.domain() for f in self.fields if f.choices is not None}


@dataclass
class ValidationResult:
    category: str
    values: dict = field(default_factory=dict)
    error: Optional[MarketplaceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> dict:
        if self.error is not None:
            raise self.error
        return self.values


# ---------- короткие конструкторы полей ----------

def _s(name, required=True, max_length=100, **kw):
    return FieldSpec(name, FieldKind.STRING, required, max_length=max_length, **kw)

def _i(name, required=True, min=None, max=None, **kw):
    return FieldSpec(name, FieldKind.INTEGER, required, min=min, max=max, **kw)

def _d(name, required=True, min=None, max=None, **kw):
    lo = Decimal(str(min)) if min is not None else None
    hi = Decimal(str(max)) if max is not None else None
    return FieldSpec(name, FieldKind.DECIMAL, required, min=lo, max=hi, **kw)

def _b(name, required=True, **kw):
    return FieldSpec(name, FieldKind.BOOLEAN, required, **kw)

def _e(name, choices, required=True, **kw):
    return FieldSpec(name, FieldKind.ENUM, required, choices=choices, **kw)

def _year(required=True):
    return FieldSpec("year", FieldKind.INTEGER, required, min=MIN_YEAR, max=max_year)

def _condition():
    return _e("condition", E.ItemCondition)


# ---------- таблица категорий (порядок полей = порядок проверки) ----------

REGISTRY: dict[Category, FieldSchema] = {
    Category.BOATS_AND_YACHTS: FieldSchema(
        Category.BOATS_AND_YACHTS, "boat_spec", BoatSpecification, (
            _e("type", E.BoatType, column="boat_type"),
            _s("brand"),
            _s("model"),
            _e("engine_type", E.BoatEngineType),
            _b("engine_included"),
            _s("engine_brand_model", required=False, max_length=200),
            _i("horsepower", min=1, max=10000),
            _d("length", min="0.1", max="500"),
            _d("width", min="0.1", max="100"),
            _d("draft", required=False, min="0", max="50"),
            _i("max_people", min=1, max=1000),
            _year(),
            _b("in_warranty"),
            _d("weight", min="0.1", max="1000000"),
            _d("fuel_capacity", min="0", max="100000"),
            _b("has_water_tank"),
            _i("number_of_engines", min=0, max=10),
            _b("has_auxiliary_engine"),
            _e("console_type", E.ConsoleType),
            _e("fuel_type", E.FuelType),
            _e("material", E.MaterialType),
            _b("is_registered"),
            _b("has_commercial_fishing_license", required=False),
            _condition(),
            FieldSpec("interior_features", FieldKind.ENUM_LIST, False,
                      choices=E.InteriorFeature, relation="interior_features"),
            FieldSpec("exterior_features", FieldKind.ENUM_LIST, False,
                      choices=E.ExteriorFeature, relation="exterior_features"),
            FieldSpec("equipment", FieldKind.ENUM_LIST, False,
                      choices=E.Equipment, relation="equipment"),
        ),
    ),
    Category.JET_SKIS: FieldSchema(
        Category.JET_SKIS, "jet_ski_spec", JetSkiSpecification, (
            _s("brand"),
            _s("model"),
            _s("modification", required=False),
            _b("is_registered"),
            _i("horsepower", min=1, max=1000),
            _year(),
            _d("weight", min="0.1", max="10000"),
            _d("fuel_capacity", min="0", max="1000"),
            _i("operating_hours", min=0),
            _e("fuel_type", E.JetSkiFuelType),
            _b("trailer_included"),
            _b("in_warranty"),
            _condition(),
        ),
    ),
    Category.TRAILERS: FieldSchema(
        Category.TRAILERS, "trailer_spec", TrailerSpecification, (
            _e("trailer_type", E.TrailerType),
            _s("brand", required=False),
            _s("model", required=False),
            _e("axle_count", E.AxleCount),
            _b("is_registered"),
            _d("own_weight", required=False, min="0", max="100000"),
            _d("load_capacity", min="0.1", max="100000"),
            _d("length", min="0.1", max="50"),
            _d("width", min="0.1", max="10"),
            _year(),
            _e("suspension_type", E.SuspensionType, required=False),
            _e("keel_rollers", E.KeelRollers, required=False),
            _b("in_warranty"),
            _condition(),
        ),
    ),
    Category.ENGINES: FieldSchema(
        Category.ENGINES, "engine_spec", EngineSpecification, (
            _e("engine_type", E.EngineKind),
            _s("brand", required=False),
            _s("modification", required=False),
            _e("stroke_type", E.StrokeType),
            _b("in_warranty"),
            _i("horsepower", min=1, max=10000),
            _i("operating_hours", min=0),
            _i("cylinders", required=False, min=1, max=16),
            _i("displacement_cc", required=False, min=1),
            _i("rpm", required=False, min=1),
            _d("weight", required=False, min="0.1", max="10000"),
            _year(),
            _d("fuel_capacity", min="0", max="10000"),
            _e("ignition_type", E.IgnitionType),
            _e("control_type", E.ControlType),
            _e("shaft_length", E.ShaftLength),
            _e("fuel_type", E.EngineFuelType),
            _e("engine_system_type", E.EngineSystemType),
            _condition(),
            _e("color", E.EngineColor),
        ),
    ),
    Category.MARINE_ELECTRONICS: FieldSchema(
        Category.MARINE_ELECTRONICS, "marine_electronics_spec", MarineElectronicsSpecification, (
            _e("electronics_type", E.ElectronicsType),
            _s("brand"),
            _s("model", required=False),
            _year(required=False),
            _b("in_warranty", required=False),
            _condition(),
            _e("working_frequency", E.WorkingFrequency, required=False),
            _e("depth_range", E.DepthRange, required=False),
            _e("screen_size", E.ScreenSize, required=False),
            _b("probe_included", required=False),
            _e("screen_type", E.ScreenType, required=False),
            _b("gps_integrated", required=False),
            _i("thrust", required=False, min=1, max=500),
            _e("voltage", E.Voltage, required=False),
        ),
    ),
    Category.FISHING: FieldSchema(
        Category.FISHING, "fishing_spec", FishingSpecification, (
            _e("fishing_type", E.FishingType),
            _s("brand", required=False),
            _e("fishing_technique", E.FishingTechnique),
            _e("target_fish", E.TargetFish),
            _condition(),
        ),
    ),
    Category.PARTS: FieldSchema(
        Category.PARTS, "parts_spec", PartsSpecification, (
            _e("part_type", E.PartType),
            _condition(),
        ),
    ),
    Category.SERVICES: FieldSchema(
        Category.SERVICES, "services_spec", ServicesSpecification, (
            _e("service_type", E.ServiceType),
            _s("company_name", max_length=200),
            _b("is_authorized_service", required=False),
            _b("is_official_representative", required=False),
            _s("description", required=False, max_length=2000),
            _s("contact_phone", max_length=32),
            _s("contact_email", max_length=255),
            _s("address", max_length=200),
            _s("website", required=False, max_length=200),
            FieldSpec("supported_brands", FieldKind.STRING_LIST, False),
            FieldSpec("supported_materials", FieldKind.ENUM_LIST, False, choices=E.MaterialType),
        ),
    ),
}

PAYLOAD_KEYS = {schema.payload_key: cat for cat, schema in REGISTRY.items()}


def parse_category(category) -> Category:
    if isinstance(category, Category):
        return category
    try:
        return Category(str(category).strip().upper())
    except ValueError:
        raise UnsupportedCategoryError(category)


def schema_for(category) -> FieldSchema:
    cat = parse_category(category)
    schema = REGISTRY.get(cat)
    if schema is None:
        raise UnsupportedCategoryError(category)
    return schema


# ---------- приведение значений ----------

class _Invalid(Exception):
    def __init__(self, rule: str, message: str):
        self.rule = rule
        self.message = message


_MISSING = object()

# целое: необязательный минус и ASCII-цифры
_INT_RE = re.compile(r"-?[0-9]+", re.ASCII)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _enum_value(spec: FieldSpec, value) -> str:
    if not isinstance(value, str):
        raise _Invalid("invalid_type", f"'{spec.name}' должно быть строкой")
    try:
        return spec.choices(value.strip().upper()).value
    except ValueError:
        raise _Invalid("invalid_enum", f"Недопустимое значение '{value}' для '{spec.name}'")


def _coerce(spec: FieldSpec, value):
    kind = spec.kind
    if kind is FieldKind.STRING:
        if not isinstance(value, str):
            raise _Invalid("invalid_type", f"'{spec.name}' должно быть строкой")
        return value.strip()
    if kind is FieldKind.INTEGER:
        if isinstance(value, bool):
            raise _Invalid("invalid_type", f"'{spec.name}' должно быть целым числом")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
            return int(value.strip())
        raise _Invalid("invalid_type", f"'{spec.name}' должно быть целым числом")
    if kind is FieldKind.DECIMAL:
        if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
            raise _Invalid("invalid_type", f"'{spec.name}' должно быть числом")
        try:
            d = Decimal(str(value).strip())
        except InvalidOperation:
            raise _Invalid("invalid_type", f"'{spec.name}' должно быть числом")
        if not d.is_finite():
            raise _Invalid("invalid_type", f"'{spec.name}' должно быть числом")
        return d
    if kind is FieldKind.BOOLEAN:
        if not isinstance(value, bool):
            raise _Invalid("invalid_type", f"'{spec.name}' должно быть true/false")
        return value
    if kind is FieldKind.ENUM:
        return _enum_value(spec, value)
    if kind in (FieldKind.ENUM_LIST, FieldKind.STRING_LIST):
        if not isinstance(value, (list, tuple)):
            raise _Invalid("invalid_type", f"'{spec.name}' должно быть списком")
        out: list[str] = []
        for item in value:
            if kind is FieldKind.ENUM_LIST:
                item = _enum_value(spec, item)
            else:
                if not isinstance(item, str) or "," in item:
                    raise _Invalid("invalid_type", f"'{spec.name}': недопустимый элемент {item!r}")
                item = item.strip()
                if not item:
                    continue
            if item not in out:
                out.append(item)
        return out
    raise _Invalid("invalid_type", f"Неизвестный тип поля '{spec.name}'")


def _check_bounds(spec: FieldSpec, value) -> None:
    if spec.max_length is not None and isinstance(value, str) and len(value) > spec.max_length:
        raise _Invalid("too_long", f"'{spec.name}' длиннее {spec.max_length} символов")
    lo, hi = spec.lower(), spec.upper()
    if lo is not None and value < lo or hi is not None and value > hi:
        if lo is not None and hi is not None:
            msg = f"'{spec.name}' должно быть в диапазоне [{lo}, {hi}]"
        elif lo is not None:
            msg = f"'{spec.name}' должно быть не меньше {lo}"
        else:
            msg = f"'{spec.name}' должно быть не больше {hi}"
        raise _Invalid("out_of_range", msg)


def validate_field(schema: FieldSchema, spec: FieldSpec, raw: Any):
    """Одно поле: пропуск -> тип -> домен. Возвращает нормализованное значение."""
    cat = schema.category.value
    if raw is _MISSING or _is_blank(raw):
        if spec.required:
            raise MandatoryFieldMissingError(cat, spec.name)
        return [] if spec.is_list else None
    try:
        value = _coerce(spec, raw)
        if spec.is_list:
            if spec.required and not value:
                raise MandatoryFieldMissingError(cat, spec.name)
            return value
        if spec.kind is FieldKind.STRING and not value:
            if spec.required:
                raise MandatoryFieldMissingError(cat, spec.name)
            return None
        _check_bounds(spec, value)
        return value
    except _Invalid as e:
        raise InvalidFieldValueError(cat, spec.name, e.message, rule=e.rule)


def validate(category, raw_attributes) -> ValidationResult:
    """
    Проверяет блок спецификации категории.
    Первая ошибка выигрывает, порядок: порядок объявления полей в схеме.
    """
    try:
        schema = schema_for(category)
    except UnsupportedCategoryError as e:
        return ValidationResult(str(category), error=e)

    cat = schema.category.value
    result = ValidationResult(cat)

    if raw_attributes is None:
        result.error = MandatoryFieldMissingError(cat, schema.payload_key)
        return result
    if not isinstance(raw_attributes, dict):
        result.error = InvalidFieldValueError(
            cat, schema.payload_key, f"'{schema.payload_key}' должно быть объектом", rule="invalid_type"
        )
        return result

    values: dict = {}
    try:
        for spec in schema.fields:
            values[spec.name] = validate_field(schema, spec, raw_attributes.get(spec.name, _MISSING))
    except MarketplaceError as e:
        result.error = e
        return result

    unknown = [k for k in raw_attributes if schema.field(k) is None]
    if unknown:
        result.error = InvalidFieldValueError(
            cat, unknown[0], f"Поле '{unknown[0]}' не относится к категории {cat}", rule="unknown_field"
        )
        return result

    result.values = values
    return result


def filter_options() -> dict[str, dict[str, list[str]]]:
    # домены enum-полей по категориям: для выпадающих списков фильтра
    return {cat.value: schema.domains() for cat, schema in REGISTRY.items()}
