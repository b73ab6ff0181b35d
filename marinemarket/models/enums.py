# marinemarket/models/enums.py
import enum


class Category(str, enum.Enum):
    BOATS_AND_YACHTS   = "BOATS_AND_YACHTS"
    JET_SKIS           = "JET_SKIS"
    TRAILERS           = "TRAILERS"
    ENGINES            = "ENGINES"
    MARINE_ELECTRONICS = "MARINE_ELECTRONICS"
    FISHING            = "FISHING"
    PARTS              = "PARTS"
    SERVICES           = "SERVICES"

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]


CATEGORY_DISPLAY_NAMES = {
    Category.BOATS_AND_YACHTS:   "Лодки и Яхти",
    Category.JET_SKIS:           "Джетове",
    Category.TRAILERS:           "Колесари",
    Category.ENGINES:            "Двигатели",
    Category.MARINE_ELECTRONICS: "Морска Електроника",
    Category.FISHING:            "Риболов",
    Category.PARTS:              "Части",
    Category.SERVICES:           "Услуги",
}


class PriceType(str, enum.Enum):
    FIXED_PRICE = "FIXED_PRICE"   # единственный тип с суммой
    NEGOTIABLE  = "NEGOTIABLE"
    ON_REQUEST  = "ON_REQUEST"
    FREE        = "FREE"
    BARTER      = "BARTER"

    @property
    def display_name(self) -> str:
        return PRICE_TYPE_DISPLAY_NAMES[self]


PRICE_TYPE_DISPLAY_NAMES = {
    PriceType.FIXED_PRICE: "Фиксирана цена",
    PriceType.NEGOTIABLE:  "По договаряне",
    PriceType.ON_REQUEST:  "При запитване",
    PriceType.FREE:        "Безплатно",
    PriceType.BARTER:      "Бартер",
}


class AdType(str, enum.Enum):
    SALE   = "SALE"
    RENT   = "RENT"
    WANTED = "WANTED"


class ItemCondition(str, enum.Enum):
    NEW       = "NEW"
    LIKE_NEW  = "LIKE_NEW"
    USED      = "USED"
    FOR_PARTS = "FOR_PARTS"


# ---------- лодки ----------

class BoatType(str, enum.Enum):
    MOTOR_BOAT   = "MOTOR_BOAT"
    SAILING_BOAT = "SAILING_BOAT"
    KAYAK_CANOE  = "KAYAK_CANOE"


class BoatEngineType(str, enum.Enum):
    OUTBOARD = "OUTBOARD"
    INBOARD  = "INBOARD"
    NONE     = "NONE"


class ConsoleType(str, enum.Enum):
    NONE      = "NONE"
    CENTRAL   = "CENTRAL"
    SIDE      = "SIDE"
    CABIN     = "CABIN"
    FLYBRIDGE = "FLYBRIDGE"


class FuelType(str, enum.Enum):
    PETROL   = "PETROL"
    DIESEL   = "DIESEL"
    LPG      = "LPG"
    HYDROGEN = "HYDROGEN"


class MaterialType(str, enum.Enum):
    FIBERGLASS = "FIBERGLASS"
    WOOD       = "WOOD"
    ALUMINUM   = "ALUMINUM"
    PVC        = "PVC"
    HYPALON    = "HYPALON"
    RUBBER     = "RUBBER"


class InteriorFeature(str, enum.Enum):
    REFRIGERATOR     = "REFRIGERATOR"
    SHOWER           = "SHOWER"
    TOILET           = "TOILET"
    KITCHEN          = "KITCHEN"
    AIR_CONDITIONING = "AIR_CONDITIONING"
    HEATING          = "HEATING"
    TV               = "TV"
    SOUND_SYSTEM     = "SOUND_SYSTEM"
    BERTHS           = "BERTHS"


class ExteriorFeature(str, enum.Enum):
    SWIM_PLATFORM = "SWIM_PLATFORM"
    BIMINI_TOP    = "BIMINI_TOP"
    TEAK_DECK     = "TEAK_DECK"
    SUN_DECK      = "SUN_DECK"
    BOW_THRUSTER  = "BOW_THRUSTER"
    ANCHOR_WINCH  = "ANCHOR_WINCH"
    SWIM_LADDER   = "SWIM_LADDER"


class Equipment(str, enum.Enum):
    GPS               = "GPS"
    CHARTPLOTTER      = "CHARTPLOTTER"
    AUTOPILOT         = "AUTOPILOT"
    RADAR             = "RADAR"
    VHF_RADIO         = "VHF_RADIO"
    FISH_FINDER       = "FISH_FINDER"
    LIFE_JACKETS      = "LIFE_JACKETS"
    FIRE_EXTINGUISHER = "FIRE_EXTINGUISHER"


# ---------- джеты ----------

class JetSkiFuelType(str, enum.Enum):
    PETROL   = "PETROL"
    DIESEL   = "DIESEL"
    ELECTRIC = "ELECTRIC"


# ---------- колесари ----------

class TrailerType(str, enum.Enum):
    BOAT_TRAILER    = "BOAT_TRAILER"
    JET_SKI_TRAILER = "JET_SKI_TRAILER"
    KAYAK_TRAILER   = "KAYAK_TRAILER"
    UNIVERSAL       = "UNIVERSAL"


class AxleCount(str, enum.Enum):
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    TRIPLE = "TRIPLE"


class SuspensionType(str, enum.Enum):
    LEAF_SPRING = "LEAF_SPRING"
    TORSION     = "TORSION"
    NONE        = "NONE"


class KeelRollers(str, enum.Enum):
    FIXED      = "FIXED"
    ADJUSTABLE = "ADJUSTABLE"
    NONE       = "NONE"


# ---------- двигатели ----------

class EngineKind(str, enum.Enum):
    OUTBOARD    = "OUTBOARD"
    INBOARD     = "INBOARD"
    STERNDRIVE  = "STERNDRIVE"
    ELECTRIC    = "ELECTRIC"


class StrokeType(str, enum.Enum):
    TWO_STROKE  = "TWO_STROKE"
    FOUR_STROKE = "FOUR_STROKE"


class IgnitionType(str, enum.Enum):
    ELECTRIC_START = "ELECTRIC_START"
    MANUAL_START   = "MANUAL_START"


class ControlType(str, enum.Enum):
    TILLER = "TILLER"
    REMOTE = "REMOTE"


class ShaftLength(str, enum.Enum):
    SHORT      = "SHORT"
    LONG       = "LONG"
    EXTRA_LONG = "EXTRA_LONG"


class EngineFuelType(str, enum.Enum):
    PETROL   = "PETROL"
    DIESEL   = "DIESEL"
    ELECTRIC = "ELECTRIC"


class EngineSystemType(str, enum.Enum):
    CARBURETOR = "CARBURETOR"
    INJECTION  = "INJECTION"


class EngineColor(str, enum.Enum):
    BLACK = "BLACK"
    WHITE = "WHITE"
    GREY  = "GREY"
    BLUE  = "BLUE"
    OTHER = "OTHER"


# ---------- электроника ----------

class ElectronicsType(str, enum.Enum):
    FISH_FINDER    = "FISH_FINDER"
    CHARTPLOTTER   = "CHARTPLOTTER"
    GPS            = "GPS"
    RADAR          = "RADAR"
    VHF_RADIO      = "VHF_RADIO"
    AUTOPILOT      = "AUTOPILOT"
    TROLLING_MOTOR = "TROLLING_MOTOR"
    TRANSDUCER     = "TRANSDUCER"


class WorkingFrequency(str, enum.Enum):
    SINGLE = "SINGLE"
    DUAL   = "DUAL"
    CHIRP  = "CHIRP"


class DepthRange(str, enum.Enum):
    UP_TO_100M  = "UP_TO_100M"
    UP_TO_300M  = "UP_TO_300M"
    UP_TO_1000M = "UP_TO_1000M"
    OVER_1000M  = "OVER_1000M"


class ScreenSize(str, enum.Enum):
    UP_TO_5_INCH  = "UP_TO_5_INCH"
    INCH_7        = "INCH_7"
    INCH_9        = "INCH_9"
    INCH_12       = "INCH_12"
    OVER_12_INCH  = "OVER_12_INCH"


class ScreenType(str, enum.Enum):
    LCD         = "LCD"
    TOUCHSCREEN = "TOUCHSCREEN"
    MONOCHROME  = "MONOCHROME"


class Voltage(str, enum.Enum):
    V12 = "V12"
    V24 = "V24"
    V36 = "V36"


# ---------- риболов ----------

class FishingType(str, enum.Enum):
    ROD       = "ROD"
    REEL      = "REEL"
    LINE      = "LINE"
    LURE      = "LURE"
    BAIT      = "BAIT"
    NET       = "NET"
    ACCESSORY = "ACCESSORY"


class FishingTechnique(str, enum.Enum):
    SPINNING       = "SPINNING"
    CASTING        = "CASTING"
    FLY_FISHING    = "FLY_FISHING"
    TROLLING       = "TROLLING"
    JIGGING        = "JIGGING"
    BOTTOM_FISHING = "BOTTOM_FISHING"


class TargetFish(str, enum.Enum):
    PREDATORY = "PREDATORY"
    CARP      = "CARP"
    SEA_FISH  = "SEA_FISH"
    TROUT     = "TROUT"
    CATFISH   = "CATFISH"
    UNIVERSAL = "UNIVERSAL"


# ---------- части / услуги ----------

class PartType(str, enum.Enum):
    ENGINE_PARTS = "ENGINE_PARTS"
    ELECTRICAL   = "ELECTRICAL"
    HULL         = "HULL"
    PROPELLERS   = "PROPELLERS"
    STEERING     = "STEERING"
    RIGGING      = "RIGGING"
    INTERIOR     = "INTERIOR"
    OTHER        = "OTHER"


class ServiceType(str, enum.Enum):
    REPAIR      = "REPAIR"
    MAINTENANCE = "MAINTENANCE"
    STORAGE     = "STORAGE"
    TRANSPORT   = "TRANSPORT"
    CHARTER     = "CHARTER"
    TRAINING    = "TRAINING"
    INSURANCE   = "INSURANCE"
    SURVEY      = "SURVEY"
