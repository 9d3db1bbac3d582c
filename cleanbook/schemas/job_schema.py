"""Job description and quote models."""

from datetime import date as Date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class SizeClass(str, Enum):
    XS = "xs"
    S = "s"
    M = "m"
    L = "l"
    XL = "xl"


class FootfallLevel(str, Enum):
    """Ordered footfall / dirtiness levels, lightest first."""
    QUITE_CLEAN = "quite-clean"
    AVERAGE = "average"
    QUITE_DIRTY = "quite-dirty"
    FILTHY = "filthy"


class SuppliesChoice(str, Enum):
    BRING = "bring"
    CUSTOMER = "customer"


class AccessMethod(str, Enum):
    HOME = "home"
    KEY = "key"
    LET_IN = "let-in"
    ALTERNATIVE = "alternative"


# Access methods that need a key location or entry instructions
ACCESS_NEEDS_INSTRUCTIONS = frozenset({AccessMethod.KEY, AccessMethod.ALTERNATIVE})


class RoomEntry(BaseModel):
    """One room on the job. Unknown keys price at zero rather than failing."""
    room_type: str
    size_class: str


class JobDescription(BaseModel):
    """Structured quote input built from the customer's selections."""

    rooms: list[RoomEntry] = Field(default_factory=list)
    add_ons: dict[str, int] = Field(default_factory=dict)
    footfall: Optional[FootfallLevel] = None
    supplies: Optional[SuppliesChoice] = None
    date: Optional[Date] = None

    @field_validator("add_ons")
    @classmethod
    def _no_negative_counts(cls, value: dict[str, int]) -> dict[str, int]:
        for key, count in value.items():
            if count < 0:
                raise ValueError(f"Add-on count for '{key}' cannot be negative")
        return value


class Quote(BaseModel):
    """Estimated duration and price for a job."""

    base_estimated_hours: float
    team_applied: bool
    estimated_hours: float
    hourly_rate: float
    labour_charge: float
    add_ons_total: float
    supplies_fee: float
    total_price: float
