from decimal import Decimal

from marinemarket.models.ad import Ad
from marinemarket.services.assembler import format_price, to_response
from marinemarket.services.spec_store import delete_specification

from .factories import add_ad, parts_spec


def test_boat_response_carries_features(db, identity):
    ad = add_ad(db, identity)
    resp = to_response(db, ad)

    assert resp.category_display_name == "Лодки и Яхти"
    assert resp.user_full_name == "Ivan Petrov"
    assert resp.specification_missing is False
    spec = resp.specification
    assert spec["type"] == "MOTOR_BOAT"
    assert spec["exterior_features"] == ["SWIM_PLATFORM"]
    assert spec["equipment"] == ["GPS", "VHF_RADIO"]


def test_missing_specification_is_marked(db, identity):
    ad = add_ad(db, identity, category="PARTS", spec=parts_spec())
    delete_specification(db, "PARTS", ad.id)
    db.commit()

    resp = to_response(db, ad)
    assert resp.specification is None
    assert resp.specification_missing is True
    assert resp.title == ad.title


def test_format_price():
    ad = Ad(price_amount=Decimal("1500"), price_type="FIXED_PRICE", including_vat=True)
    assert format_price(ad) == "1500.00 лв с ДДС"
    ad.including_vat = False
    assert format_price(ad) == "1500.00 лв без ДДС"
    ad.including_vat = None
    assert format_price(ad) == "1500.00 лв"

    assert format_price(Ad(price_type="NEGOTIABLE")) == "По договаряне"
    assert format_price(Ad(price_type="FREE")) == "Безплатно"
