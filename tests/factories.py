from __future__ import annotations

import datetime as dt

from marinemarket.schemas import AdCreateRequest
from marinemarket.services.ads import create_ad
from marinemarket.services.identity import UserIdentity

OWNER = "owner@example.com"
OTHER = "other@example.com"


class FakeIdentity:
    def __init__(self, users=None, error=None):
        self.users = users if users is not None else {
            OWNER: UserIdentity(True, OWNER, "u-1", "Ivan", "Petrov"),
            OTHER: UserIdentity(True, OTHER, "u-2", "Maria", None),
        }
        self.error = error
        self.calls = []

    def validate_user(self, email, token):
        self.calls.append((email, token))
        if self.error is not None:
            raise self.error
        return self.users.get(email) or UserIdentity(exists=False, email=email)


def boat_spec(**over):
    spec = {
        "type": "MOTOR_BOAT",
        "brand": "Bavaria",
        "model": "S29",
        "engine_type": "INBOARD",
        "engine_included": True,
        "horsepower": 220,
        "length": "8.9",
        "width": "2.9",
        "max_people": 8,
        "year": 2020,
        "in_warranty": False,
        "weight": 3900,
        "fuel_capacity": 350,
        "has_water_tank": True,
        "number_of_engines": 1,
        "has_auxiliary_engine": False,
        "console_type": "CABIN",
        "fuel_type": "DIESEL",
        "material": "FIBERGLASS",
        "is_registered": True,
        "condition": "USED",
        "interior_features": ["SHOWER", "KITCHEN"],
        "exterior_features": ["SWIM_PLATFORM"],
        "equipment": ["GPS", "VHF_RADIO"],
    }
    spec.update(over)
    return spec


def jet_ski_spec(**over):
    spec = {
        "brand": "Sea-Doo",
        "model": "GTX 170",
        "is_registered": True,
        "horsepower": 170,
        "year": 2020,
        "weight": 350,
        "fuel_capacity": 60,
        "operating_hours": 120,
        "fuel_type": "PETROL",
        "trailer_included": False,
        "in_warranty": False,
        "condition": "USED",
    }
    spec.update(over)
    return spec


def electronics_spec(**over):
    spec = {
        "electronics_type": "FISH_FINDER",
        "brand": "Garmin",
        "model": "Striker 4",
        "condition": "NEW",
        "screen_size": "UP_TO_5_INCH",
        "gps_integrated": True,
    }
    spec.update(over)
    return spec


def parts_spec(**over):
    spec = {"part_type": "PROPELLERS", "condition": "USED"}
    spec.update(over)
    return spec


def services_spec(**over):
    spec = {
        "service_type": "REPAIR",
        "company_name": "Varna Marine Service",
        "is_authorized_service": True,
        "contact_phone": "+359888000000",
        "contact_email": "service@example.com",
        "address": "Varna, Port 1",
        "supported_brands": ["Yamaha", "Mercury"],
        "supported_materials": ["FIBERGLASS"],
    }
    spec.update(over)
    return spec


_PAYLOAD_KEY = {
    "BOATS_AND_YACHTS": "boat_spec",
    "JET_SKIS": "jet_ski_spec",
    "MARINE_ELECTRONICS": "marine_electronics_spec",
    "PARTS": "parts_spec",
    "SERVICES": "services_spec",
}


def make_request(category="BOATS_AND_YACHTS", spec=None, price=150000, price_type="FIXED_PRICE", **over):
    if spec is None:
        spec = boat_spec()
    data = {
        "title": "Продавам лодка",
        "description": "Отлично състояние, винаги на закрито, пълна окомплектовка.",
        "category": category,
        "price": {"amount": price, "type": price_type, "including_vat": True},
        "location": "Varna",
        "ad_type": "SALE",
        "user_email": OWNER,
        _PAYLOAD_KEY.get(category, "boat_spec"): spec,
    }
    data.update(over)
    return AdCreateRequest(**data)


def add_ad(db, identity, category="BOATS_AND_YACHTS", spec=None, created_at=None, views=None, **over):
    ad = create_ad(db, identity, make_request(category, spec, **over), "token")
    if created_at is not None or views is not None:
        if created_at is not None:
            ad.created_at = created_at
        if views is not None:
            ad.views_count = views
        db.commit()
    return ad


T0 = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)


def at(hours: int) -> dt.datetime:
    return T0 + dt.timedelta(hours=hours)
