"""Service variants with their pricing tables, thresholds, and staff pay rules."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from cleanbook.schemas.job_schema import FootfallLevel
from cleanbook.utils import is_weekend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomType:
    id: str
    label: str
    multiplier: float


@dataclass(frozen=True)
class SizeOption:
    id: str
    label: str
    hint: str
    weight: float


@dataclass(frozen=True)
class AddOn:
    id: str
    label: str
    price: float
    hours: float


@dataclass(frozen=True)
class PricingConfig:
    """Everything that differs between the booking form variants."""

    variant: str
    service_type: str
    min_hours: float
    weekday_hourly_rate: float
    weekend_hourly_rate: float
    supplies_fee: float
    team_threshold_hours: float
    team_factor: float
    room_types: tuple[RoomType, ...]
    sizes: tuple[SizeOption, ...]
    add_ons: tuple[AddOn, ...]
    per_cubicle_hours: float = 0.0
    cubicle_room_type: Optional[str] = None
    flat_deposit: Optional[float] = None
    min_rooms: int = 0
    max_rooms: Optional[int] = None
    requires_access: bool = True
    requires_supplies_choice: bool = True

    def hourly_rate(self, day: Optional[date]) -> float:
        return self.weekend_hourly_rate if is_weekend(day) else self.weekday_hourly_rate

    def room_type(self, room_type_id: str) -> Optional[RoomType]:
        return next((rt for rt in self.room_types if rt.id == room_type_id), None)

    def size(self, size_id: str) -> Optional[SizeOption]:
        return next((s for s in self.sizes if s.id == size_id), None)

    def add_on(self, add_on_id: str) -> Optional[AddOn]:
        return next((a for a in self.add_ons if a.id == add_on_id), None)


FOOTFALL_MULTIPLIERS: dict[FootfallLevel, float] = {
    FootfallLevel.QUITE_CLEAN: 0.9,
    FootfallLevel.AVERAGE: 1.0,
    FootfallLevel.QUITE_DIRTY: 1.25,
    FootfallLevel.FILTHY: 1.6,
}

FOOTFALL_LABELS: dict[FootfallLevel, str] = {
    FootfallLevel.QUITE_CLEAN: "Low footfall",
    FootfallLevel.AVERAGE: "Typical footfall",
    FootfallLevel.QUITE_DIRTY: "High footfall",
    FootfallLevel.FILTHY: "Very high footfall",
}

_SIZE_HINTS = {
    "xs": ("Extra small", "up to ~2×2 m (≈4 m²)"),
    "s": ("Small", "up to ~4×4 m (≈16 m²)"),
    "m": ("Medium", "around ~6×6 m (≈36 m²)"),
    "l": ("Large", "around ~8×8 m (≈64 m²)"),
    "xl": ("XL", "up to ~10×10 m (≈100 m²)"),
}


def _sizes(weights: dict[str, float]) -> tuple[SizeOption, ...]:
    return tuple(
        SizeOption(id=sid, label=_SIZE_HINTS[sid][0], hint=_SIZE_HINTS[sid][1], weight=w)
        for sid, w in weights.items()
    )


_KITCHEN_ADD_ONS = (
    AddOn("fridge", "Fridge clean", 20, 0.5),
    AddOn("freezer", "Freezer clean", 25, 0.75),
    AddOn("dishwasher", "Dishwasher load/unload", 10, 0.25),
    AddOn("cupboards", "Kitchen cupboards", 0, 0.25),
)

# Medium rooms weigh 1.0 so a medium bedroom is one hour of work.
RESIDENTIAL = PricingConfig(
    variant="residential",
    service_type="Cleaning Service",
    min_hours=2,
    weekday_hourly_rate=28,
    weekend_hourly_rate=28,
    supplies_fee=5,
    team_threshold_hours=4,
    team_factor=1.6,
    room_types=(
        RoomType("bedroom", "Bedroom", 1.0),
        RoomType("living", "Living room", 1.0),
        RoomType("kitchen", "Kitchen", 1.0),
        RoomType("bathroom", "Bathroom", 1.0),
        RoomType("utility", "Utility room", 0.5),
        RoomType("hallway", "Hallway / landing", 0.5),
        RoomType("storage", "Storage / cupboard", 0.5),
        RoomType("other", "Other", 0.5),
    ),
    sizes=_sizes({"xs": 0.6, "s": 0.8, "m": 1.0, "l": 1.25, "xl": 1.5}),
    add_ons=(
        AddOn("fridge", "Fridge", 20, 0),
        AddOn("freezer", "Freezer", 20, 0),
        AddOn("oven", "Oven", 40, 0),
        AddOn("ironing", "Ironing", 30, 0),
        AddOn("blinds", "Blind cleaning", 20, 0),
        AddOn("cupboards", "Kitchen cupboards", 0, 0),
    ),
    requires_supplies_choice=False,
)

_OFFICE_ROOM_TYPES = (
    RoomType("open-plan", "Open-plan area", 1.4),
    RoomType("meeting", "Meeting room", 1.2),
    RoomType("private-office", "Private office", 1.0),
    RoomType("reception", "Reception", 1.1),
    RoomType("corridor", "Corridor", 0.7),
    RoomType("storage", "Storage / copy room", 0.8),
    RoomType("kitchen", "Kitchen / tea point", 1.3),
    RoomType("bathroom", "Toilet room", 1.2),
)

_OFFICE_SIZES = _sizes({"xs": 0.3, "s": 0.5, "m": 0.8, "l": 1.1, "xl": 1.6})

OFFICE = PricingConfig(
    variant="office",
    service_type="Office Cleaning",
    min_hours=2,
    weekday_hourly_rate=30,
    weekend_hourly_rate=32,
    supplies_fee=5,
    team_threshold_hours=4,
    team_factor=1.7,
    room_types=_OFFICE_ROOM_TYPES,
    sizes=_OFFICE_SIZES,
    add_ons=_KITCHEN_ADD_ONS,
    per_cubicle_hours=0.35,
    cubicle_room_type="bathroom",
)

OFFICE_CLASSIC = PricingConfig(
    variant="office-classic",
    service_type="Office Cleaning",
    min_hours=2,
    weekday_hourly_rate=30,
    weekend_hourly_rate=32,
    supplies_fee=5,
    team_threshold_hours=6,
    team_factor=1.6,
    room_types=_OFFICE_ROOM_TYPES,
    sizes=_OFFICE_SIZES,
    add_ons=_KITCHEN_ADD_ONS,
    per_cubicle_hours=0.35,
    cubicle_room_type="bathroom",
)

PROMOTIONAL = PricingConfig(
    variant="promotional",
    service_type="One Room Clean",
    min_hours=1,
    weekday_hourly_rate=0,
    weekend_hourly_rate=0,
    supplies_fee=0,
    team_threshold_hours=4,
    team_factor=1.7,
    room_types=(
        RoomType("open-plan", "Living room", 1.5),
        RoomType("bedroom", "Bedroom", 1.3),
        RoomType("reception", "Hallway / corridor", 1.0),
        RoomType("storage", "Storage / utility", 0.9),
        RoomType("kitchen", "Kitchen", 1.6),
        RoomType("bathroom", "Bathroom / toilet", 1.7),
    ),
    sizes=_sizes({"xs": 0.4, "s": 0.7, "m": 1.0, "l": 1.4, "xl": 2.0}),
    add_ons=_KITCHEN_ADD_ONS,
    flat_deposit=25,
    min_rooms=1,
    max_rooms=1,
)

VARIANTS: dict[str, PricingConfig] = {
    cfg.variant: cfg for cfg in (RESIDENTIAL, OFFICE, OFFICE_CLASSIC, PROMOTIONAL)
}


def get_pricing_config(variant: str) -> PricingConfig:
    """Look up a variant by name.

    Raises:
        KeyError: If the variant is not known.
    """
    normalized = variant.lower().strip()
    if normalized not in VARIANTS:
        raise KeyError(f"Variant '{variant}' not known. Available: {list(VARIANTS)}")
    return VARIANTS[normalized]


# Staff pay per hour: (weekday, weekend)
STANDARD_STAFF_RATES = (15.0, 17.0)
DEEP_CLEAN_STAFF_RATES = (21.0, 23.0)


def staff_rate_for_job(service_type: Optional[str], day: Optional[date]) -> float:
    """Hourly staff pay for a job, by service type and weekday/weekend."""
    rates = DEEP_CLEAN_STAFF_RATES if "deep" in (service_type or "").lower() else STANDARD_STAFF_RATES
    return rates[1] if is_weekend(day) else rates[0]
