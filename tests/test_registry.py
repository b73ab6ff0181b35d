import datetime as dt
from decimal import Decimal

import pytest

from marinemarket.errors import (
    InvalidFieldValueError,
    MandatoryFieldMissingError,
    UnsupportedCategoryError,
)
from marinemarket.models.enums import Category
from marinemarket.models.specifications import BoatSpecification, ServicesSpecification
from marinemarket.services.registry import (
    REGISTRY,
    FieldKind,
    filter_options,
    schema_for,
    validate,
)

from .factories import boat_spec, jet_ski_spec, services_spec


def test_every_category_has_a_schema():
    assert set(REGISTRY) == set(Category)
    for cat, schema in REGISTRY.items():
        assert schema.category is cat
        assert schema.fields


def test_schema_for_accepts_string_and_enum():
    assert schema_for("boats_and_yachts").model is BoatSpecification
    assert schema_for(Category.SERVICES).model is ServicesSpecification


def test_schema_for_unknown_category():
    with pytest.raises(UnsupportedCategoryError):
        schema_for("HELICOPTERS")


def test_boat_schema_declares_bounded_fields():
    schema = schema_for(Category.BOATS_AND_YACHTS)
    year = schema.field("year")
    assert year.kind is FieldKind.INTEGER and year.required
    assert year.lower() == 1900
    assert year.upper() == dt.date.today().year + 5
    assert "MOTOR_BOAT" in schema.field("type").domain()
    assert schema.field("draft").required is False


def test_valid_boat_payload_is_normalized():
    result = validate("BOATS_AND_YACHTS", boat_spec(brand="  Bavaria ", fuel_type="diesel"))
    assert result.ok
    values = result.values
    assert values["brand"] == "Bavaria"
    assert values["fuel_type"] == "DIESEL"
    assert values["length"] == Decimal("8.9")
    assert values["draft"] is None
    assert values["equipment"] == ["GPS", "VHF_RADIO"]


def test_first_missing_field_in_declaration_order_wins():
    spec = boat_spec()
    del spec["brand"]
    del spec["model"]
    del spec["condition"]
    result = validate(Category.BOATS_AND_YACHTS, spec)
    assert not result.ok
    assert isinstance(result.error, MandatoryFieldMissingError)
    assert result.error.field == "brand"
    assert result.error.rule == "missing"


def test_blank_string_counts_as_missing():
    result = validate(Category.JET_SKIS, jet_ski_spec(model="   "))
    assert result.error.field == "model"
    assert result.error.rule == "missing"


def test_missing_payload_names_payload_key():
    result = validate(Category.JET_SKIS, None)
    assert isinstance(result.error, MandatoryFieldMissingError)
    assert result.error.field == "jet_ski_spec"


def test_year_out_of_range():
    too_new = dt.date.today().year + 6
    result = validate(Category.BOATS_AND_YACHTS, boat_spec(year=too_new))
    assert isinstance(result.error, InvalidFieldValueError)
    assert result.error.field == "year"
    assert result.error.rule == "out_of_range"

    assert validate(Category.BOATS_AND_YACHTS, boat_spec(year=1899)).error.rule == "out_of_range"
    assert validate(Category.BOATS_AND_YACHTS, boat_spec(year=dt.date.today().year + 5)).ok


def test_invalid_enum_value():
    result = validate(Category.BOATS_AND_YACHTS, boat_spec(material="CARBON"))
    assert result.error.field == "material"
    assert result.error.rule == "invalid_enum"


def test_earlier_range_error_beats_later_missing_field():
    spec = boat_spec(horsepower=0)
    del spec["condition"]
    result = validate(Category.BOATS_AND_YACHTS, spec)
    assert result.error.field == "horsepower"
    assert result.error.rule == "out_of_range"


@pytest.mark.parametrize("value", ["yes", 1])
def test_wrong_type_is_reported(value):
    result = validate(Category.BOATS_AND_YACHTS, boat_spec(engine_included=value))
    assert result.error.field == "engine_included"
    assert result.error.rule == "invalid_type"


@pytest.mark.parametrize("value", ["--5", "²", "1_000", "12a", "", 3.5, True])
def test_malformed_integer_is_invalid_type(value):
    result = validate(Category.BOATS_AND_YACHTS, boat_spec(horsepower=value))
    assert not result.ok
    assert result.error.field == "horsepower"
    assert result.error.rule == ("missing" if value == "" else "invalid_type")


def test_integer_strings_are_accepted():
    assert validate(Category.BOATS_AND_YACHTS, boat_spec(horsepower=" 250 ")).values["horsepower"] == 250
    assert validate(Category.BOATS_AND_YACHTS, boat_spec(horsepower="-5")).error.rule == "out_of_range"


@pytest.mark.parametrize(
    "category,spec,field,value",
    [
        (Category.BOATS_AND_YACHTS, boat_spec, "weight", "1000000.01"),
        (Category.BOATS_AND_YACHTS, boat_spec, "fuel_capacity", "100000000"),
        (Category.JET_SKIS, jet_ski_spec, "weight", "99999999999"),
        (Category.JET_SKIS, jet_ski_spec, "fuel_capacity", "1000.5"),
    ],
)
def test_decimal_upper_bounds(category, spec, field, value):
    result = validate(category, spec(**{field: value}))
    assert result.error.field == field
    assert result.error.rule == "out_of_range"


def test_invalid_feature_tag():
    result = validate(Category.BOATS_AND_YACHTS, boat_spec(interior_features=["JACUZZI"]))
    assert result.error.field == "interior_features"
    assert result.error.rule == "invalid_enum"


def test_unknown_field_is_rejected():
    result = validate(Category.PARTS, {"part_type": "HULL", "condition": "NEW", "brand": "X"})
    assert result.error.field == "brand"
    assert result.error.rule == "unknown_field"


def test_unsupported_category_is_distinct_from_missing_field():
    result = validate("SUBMARINES", {"brand": "X"})
    assert isinstance(result.error, UnsupportedCategoryError)
    assert not isinstance(result.error, MandatoryFieldMissingError)
    with pytest.raises(UnsupportedCategoryError):
        result.raise_for_error()


def test_services_lists():
    values = validate(Category.SERVICES, services_spec(supported_brands=["Yamaha", " ", "Yamaha"])).raise_for_error()
    assert values["supported_brands"] == ["Yamaha"]
    assert values["supported_materials"] == ["FIBERGLASS"]


def test_filter_options_cover_enum_fields():
    options = filter_options()
    assert "FISH_FINDER" in options["MARINE_ELECTRONICS"]["electronics_type"]
    assert options["PARTS"]["condition"] == ["NEW", "LIKE_NEW", "USED", "FOR_PARTS"]
