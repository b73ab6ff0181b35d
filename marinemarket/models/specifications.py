# marinemarket/models/specifications.py
# Одна таблица на категорию; строка связана с объявлением по ad_id (1:1).
# Enum-поля храним строками (имя значения).
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base


def _ad_fk():
    return Column(Integer, ForeignKey("ads.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)


class BoatSpecification(Base):
    __tablename__ = "boat_specifications"
    id = Column(Integer, primary_key=True)
    ad_id = _ad_fk()

    boat_type = Column(String(32), nullable=False)
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    engine_type = Column(String(32), nullable=False)
    engine_included = Column(Boolean, nullable=False)
    engine_brand_model = Column(String(200), nullable=True)
    horsepower = Column(Integer, nullable=False)
    length = Column(Numeric(8, 2), nullable=False)
    width = Column(Numeric(8, 2), nullable=False)
    draft = Column(Numeric(8, 2), nullable=True)
    max_people = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    in_warranty = Column(Boolean, nullable=False)
    weight = Column(Numeric(12, 2), nullable=False)
    fuel_capacity = Column(Numeric(10, 2), nullable=False)
    has_water_tank = Column(Boolean, nullable=False)
    number_of_engines = Column(Integer, nullable=False)
    has_auxiliary_engine = Column(Boolean, nullable=False)
    console_type = Column(String(32), nullable=False)
    fuel_type = Column(String(32), nullable=False)
    material = Column(String(32), nullable=False)
    is_registered = Column(Boolean, nullable=False)
    has_commercial_fishing_license = Column(Boolean, nullable=True)
    condition = Column(String(32), nullable=False)

    interior_features = relationship(
        "BoatInteriorFeature", cascade="all, delete-orphan", order_by="BoatInteriorFeature.id"
    )
    exterior_features = relationship(
        "BoatExteriorFeature", cascade="all, delete-orphan", order_by="BoatExteriorFeature.id"
    )
    equipment = relationship(
        "BoatEquipment", cascade="all, delete-orphan", order_by="BoatEquipment.id"
    )


class BoatInteriorFeature(Base):
    __tablename__ = "boat_interior_features"
    id = Column(Integer, primary_key=True)
    boat_spec_id = Column(Integer, ForeignKey("boat_specifications.id", ondelete="CASCADE"), nullable=False, index=True)
    feature = Column(String(64), nullable=False)


class BoatExteriorFeature(Base):
    __tablename__ = "boat_exterior_features"
    id = Column(Integer, primary_key=True)
    boat_spec_id = Column(Integer, ForeignKey("boat_specifications.id", ondelete="CASCADE"), nullable=False, index=True)
    feature = Column(String(64), nullable=False)


class BoatEquipment(Base):
    __tablename__ = "boat_equipment"
    id = Column(Integer, primary_key=True)
    boat_spec_id = Column(Integer, ForeignKey("boat_specifications.id", ondelete="CASCADE"), nullable=False, index=True)
    feature = Column(String(64), nullable=False)


class JetSkiSpecification(Base):
    __tablename__ = "jet_ski_specifications"
    id = Column(Integer, primary_key=True)
    ad_id = _ad_fk()

    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    modification = Column(String(100), nullable=True)
    is_registered = Column(Boolean, nullable=False)
    horsepower = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    weight = Column(Numeric(10, 2), nullable=False)
    fuel_capacity = Column(Numeric(10, 2), nullable=False)
    operating_hours = Column(Integer, nullable=False)
    fuel_type = Column(String(32), nullable=False)
    trailer_included = Column(Boolean, nullable=False)
    in_warranty = Column(Boolean, nullable=False)
    condition = Column(String(32), nullable=False)


class TrailerSpecification(Base):
    __tablename__ = "trailer_specifications"
    id = Column(Integer, primary_key=True)
    ad_id = _ad_fk()

    trailer_type = Column(String(32), nullable=False)
    brand = Column(String(100), nullable=True)
    model = Column(String(100), nullable=True)
    axle_count = Column(String(16), nullable=False)
    is_registered = Column(Boolean, nullable=False)
    own_weight = Column(Numeric(10, 2), nullable=True)
    load_capacity = Column(Numeric(10, 2), nullable=False)
    length = Column(Numeric(8, 2), nullable=False)
    width = Column(Numeric(8, 2), nullable=False)
    year = Column(Integer, nullable=False)
    suspension_type = Column(String(32), nullable=True)
    keel_rollers = Column(String(32), nullable=True)
    in_warranty = Column(Boolean, nullable=False)
    condition = Column(String(32), nullable=False)


class EngineSpecification(Base):
    __tablename__ = "engine_specifications"
    id = Column(Integer, primary_key=True)
    ad_id = _ad_fk()

    engine_type = Column(String(32), nullable=False)
    brand = Column(String(100), nullable=True)
    modification = Column(String(100), nullable=True)
    stroke_type = Column(String(32), nullable=False)
    in_warranty = Column(Boolean, nullable=False)
    horsepower = Column(Integer, nullable=False)
    operating_hours = Column(Integer, nullable=False)
    cylinders = Column(Integer, nullable=True)
    displacement_cc = Column(Integer, nullable=True)
    rpm = Column(Integer, nullable=True)
    weight = Column(Numeric(10, 2), nullable=True)
    year = Column(Integer, nullable=False)
    fuel_capacity = Column(Numeric(10, 2), nullable=False)
    ignition_type = Column(String(32), nullable=False)
    control_type = Column(String(32), nullable=False)
    shaft_length = Column(String(32), nullable=False)
    fuel_type = Column(String(32), nullable=False)
    engine_system_type = Column(String(32), nullable=False)
    condition = Column(String(32), nullable=False)
    color = Column(String(32), nullable=False)


class MarineElectronicsSpecification(Base):
    __tablename__ = "marine_electronics_specifications"
    id = Column(Integer, primary_key=True)
    ad_id = _ad_fk()

    electronics_type = Column(String(32), nullable=False)
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=True)
    year = Column(Integer, nullable=True)
    in_warranty = Column(Boolean, nullable=True)
    condition = Column(String(32), nullable=False)
    working_frequency = Column(String(32), nullable=True)
    depth_range = Column(String(32), nullable=True)
    screen_size = Column(String(32), nullable=True)
    probe_included = Column(Boolean, nullable=True)
    screen_type = Column(String(32), nullable=True)
    gps_integrated = Column(Boolean, nullable=True)
    thrust = Column(Integer, nullable=True)      # lbs, для тролинг-моторов
    voltage = Column(String(8), nullable=True)


class FishingSpecification(Base):
    __tablename__ = "fishing_specifications"
    id = Column(Integer, primary_key=True)
    ad_id = _ad_fk()

    fishing_type = Column(String(32), nullable=False)
    brand = Column(String(100), nullable=True)
    fishing_technique = Column(String(32), nullable=False)
    target_fish = Column(String(32), nullable=False)
    condition = Column(String(32), nullable=False)


class PartsSpecification(Base):
    __tablename__ = "parts_specifications"
    id = Column(Integer, primary_key=True)
    ad_id = _ad_fk()

    part_type = Column(String(32), nullable=False)
    condition = Column(String(32), nullable=False)


class ServicesSpecification(Base):
    __tablename__ = "services_specifications"
    id = Column(Integer, primary_key=True)
    ad_id = _ad_fk()

    service_type = Column(String(32), nullable=False)
    company_name = Column(String(200), nullable=False)
    is_authorized_service = Column(Boolean, nullable=True)
    is_official_representative = Column(Boolean, nullable=True)
    description = Column(Text, nullable=True)
    contact_phone = Column(String(32), nullable=False)
    contact_email = Column(String(255), nullable=False)
    address = Column(String(200), nullable=False)
    website = Column(String(200), nullable=True)
    supported_brands = Column(Text, nullable=True)      # через запятую
    supported_materials = Column(Text, nullable=True)   # через запятую
