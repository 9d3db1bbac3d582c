"""
Quote calculation: rooms and add-ons to an estimated duration and price.

The same calculation serves every form variant; the differences live in
the variant's PricingConfig.

Usage:
    from cleanbook.tools.catalog import OFFICE
    q = quote(job, OFFICE)
    q.estimated_hours, q.total_price
"""

import logging

from cleanbook.schemas.booking_schema import RoomSummary
from cleanbook.schemas.job_schema import JobDescription, Quote, SuppliesChoice
from cleanbook.tools.catalog import FOOTFALL_MULTIPLIERS, PricingConfig
from cleanbook.utils import round_money, round_up_to_half

logger = logging.getLogger(__name__)


def raw_hours(job: JobDescription, config: PricingConfig) -> float:
    """Summed room and add-on hours before the footfall multiplier."""
    hours = 0.0
    for room in job.rooms:
        size = config.size(room.size_class)
        room_type = config.room_type(room.room_type)
        hours += (size.weight if size else 0.0) * (room_type.multiplier if room_type else 0.0)

    if config.cubicle_room_type:
        cubicles = sum(1 for r in job.rooms if r.room_type == config.cubicle_room_type)
        hours += cubicles * config.per_cubicle_hours

    for add_on_id, count in job.add_ons.items():
        add_on = config.add_on(add_on_id)
        if add_on:
            hours += count * add_on.hours
    return hours


def add_ons_total(job: JobDescription, config: PricingConfig) -> float:
    total = 0.0
    for add_on_id, count in job.add_ons.items():
        add_on = config.add_on(add_on_id)
        if add_on:
            total += count * add_on.price
    return total


def quote(job: JobDescription, config: PricingConfig) -> Quote:
    """Estimate hours and price for a job under a variant's pricing rules."""
    if config.flat_deposit is not None:
        return Quote(
            base_estimated_hours=config.min_hours,
            team_applied=False,
            estimated_hours=config.min_hours,
            hourly_rate=0,
            labour_charge=0,
            add_ons_total=0,
            supplies_fee=0,
            total_price=config.flat_deposit,
        )

    multiplier = FOOTFALL_MULTIPLIERS.get(job.footfall, 1.0) if job.footfall else 1.0
    scaled = raw_hours(job, config) * multiplier

    base = max(config.min_hours, round_up_to_half(scaled))
    team_applied = base > config.team_threshold_hours
    effective = base / config.team_factor if team_applied else base
    estimated = max(config.min_hours, round_up_to_half(effective))

    rate = config.hourly_rate(job.date)
    labour = estimated * rate
    extras = add_ons_total(job, config)
    supplies = config.supplies_fee if job.supplies == SuppliesChoice.BRING else 0.0

    result = Quote(
        base_estimated_hours=base,
        team_applied=team_applied,
        estimated_hours=estimated,
        hourly_rate=rate,
        labour_charge=labour,
        add_ons_total=extras,
        supplies_fee=supplies,
        total_price=round_money(labour + extras + supplies),
    )
    logger.debug(
        "Quote for %s: %.1fh (base %.1fh, team=%s) = %.2f",
        config.variant, estimated, base, team_applied, result.total_price,
    )
    return result


def summarize_rooms(job: JobDescription, config: PricingConfig) -> list[RoomSummary]:
    """Group rooms by type, in the variant's room-type order."""
    summaries = []
    for room_type in config.room_types:
        matching = [r for r in job.rooms if r.room_type == room_type.id]
        if not matching:
            continue
        summaries.append(RoomSummary(
            room_type=room_type.id,
            label=room_type.label,
            count=len(matching),
            sizes=[r.size_class for r in matching],
        ))
    return summaries


def describe_rooms(job: JobDescription, config: PricingConfig) -> list[str]:
    """One line per room, e.g. ``Room 1 — Bedroom — Medium (around ~6×6 m (≈36 m²))``."""
    lines = []
    for i, room in enumerate(job.rooms, start=1):
        room_type = config.room_type(room.room_type)
        size = config.size(room.size_class)
        line = f"Room {i} — {room_type.label if room_type else 'Room'}"
        if size:
            line += f" — {size.label} ({size.hint})"
        lines.append(line)
    return lines


def describe_add_ons(job: JobDescription, config: PricingConfig) -> list[str]:
    """One line per requested add-on, e.g. ``Fridge clean x2``."""
    lines = []
    for add_on in config.add_ons:
        count = job.add_ons.get(add_on.id, 0)
        if count > 0:
            lines.append(f"{add_on.label} x{count}")
    return lines
