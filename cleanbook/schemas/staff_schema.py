"""Staff roster data models."""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class StaffMember(BaseModel):
    """A cleaner, as stored in the staff roster.

    ``availability`` maps weekday names (``monday`` or ``Monday``) to
    ``{"available": bool, "startTime": "HH:MM", "endTime": "HH:MM"}``
    records. It is kept loosely typed because roster records are edited
    by hand outside this system.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    active: bool = True
    availability: Any = Field(default_factory=dict)
    min_notice_hours: Optional[float] = Field(default=None, alias="minNoticeHours")
    travel_buffer_mins: Optional[float] = Field(default=None, alias="travelBufferMins")


@dataclass(frozen=True)
class DayAvailability:
    """Resolved working window for one staff member on one weekday."""

    available: bool
    start: str
    end: str
