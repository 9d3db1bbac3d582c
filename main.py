"""
Command line entry point for the booking engine.

Runs against a seeded in-memory roster so the calendar, slot, quote,
and submission paths can be exercised without any external service.

Usage:
    python main.py blocked
    python main.py slots 2026-10-21
    python main.py quote office --room open-plan:l --room bathroom:s --footfall quite-dirty
    python main.py book --date 2026-10-21 --time 10
"""

import argparse
import asyncio
import json
import sys
from datetime import date, datetime, timedelta
from typing import Optional

from cleanbook.booking import BookingOrchestrator, BookingValidationError
from cleanbook.config import settings
from cleanbook.schemas.booking_schema import Address, Contact
from cleanbook.schemas.job_schema import (
    AccessMethod,
    FootfallLevel,
    JobDescription,
    RoomEntry,
    SuppliesChoice,
)
from cleanbook.tools.calendar import load_blocked_dates
from cleanbook.tools.catalog import VARIANTS, get_pricing_config
from cleanbook.tools.pricing import quote
from cleanbook.tools.stores import (
    BookingStore,
    CoverageStore,
    LedgerStore,
    OverrideStore,
    StaffStore,
    Stores,
)
from cleanbook.tools.time_slots import load_available_slots
from cleanbook.utils import display_date, display_hour, parse_date_key


_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


def build_demo_stores(today: Optional[date] = None) -> Stores:
    """Two weekday cleaners, one Saturday cleaner, and a booking the day after tomorrow."""
    today = today or date.today()
    busy_day = (today + timedelta(days=2)).isoformat()
    return Stores(
        staff=StaffStore([
            {
                "id": "staff-1",
                "name": "Amira",
                "availability": {
                    day: {"available": True, "startTime": "08:00", "endTime": "16:00"}
                    for day in _WEEKDAYS
                },
            },
            {
                "id": "staff-2",
                "name": "Tomasz",
                "minNoticeHours": 24,
                "travelBufferMins": 45,
                "availability": {
                    "Monday": {"available": True, "startTime": "12:00", "endTime": "19:00"},
                    "Wednesday": {"available": True, "startTime": "12:00", "endTime": "19:00"},
                    "Saturday": {"available": True, "endTime": "14:00"},
                },
            },
        ]),
        bookings=BookingStore([
            {"date": busy_day, "startTime": "10:00", "endTime": "12:00", "serviceType": "Cleaning Service"},
        ]),
        overrides=OverrideStore(),
        ledger=LedgerStore(),
        coverage=CoverageStore(["M1", "M2", "M3", "M4", "M14", "M15", "M16", "M20"]),
    )


def _parse_room(value: str) -> RoomEntry:
    room_type, _, size = value.partition(":")
    if not room_type or not size:
        raise argparse.ArgumentTypeError(f"Room must look like TYPE:SIZE, got {value!r}")
    return RoomEntry(room_type=room_type, size_class=size)


def _parse_add_on(value: str) -> tuple[str, int]:
    add_on_id, _, count = value.partition(":")
    try:
        return add_on_id, int(count or "1")
    except ValueError:
        raise argparse.ArgumentTypeError(f"Add-on must look like ID[:COUNT], got {value!r}") from None


def _parse_date(value: str) -> date:
    try:
        return parse_date_key(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Date must be YYYY-MM-DD, got {value!r}") from None


def _job_from_args(args: argparse.Namespace) -> JobDescription:
    add_ons: dict[str, int] = {}
    for add_on_id, count in args.add_on or []:
        add_ons[add_on_id] = add_ons.get(add_on_id, 0) + count
    return JobDescription(
        rooms=args.room or [],
        add_ons=add_ons,
        footfall=FootfallLevel(args.footfall) if args.footfall else None,
        supplies=SuppliesChoice(args.supplies) if args.supplies else None,
        date=args.date,
    )


async def _cmd_blocked(args: argparse.Namespace, stores: Stores) -> int:
    blocked = await load_blocked_dates(stores.staff, datetime.now())
    today = date.today()
    upcoming = sorted(k for k in blocked if k >= today.isoformat())
    print(f"{len(upcoming)} upcoming dates blocked:")
    for key in upcoming:
        print(f"  {key}  {display_date(parse_date_key(key))}")
    return 0


async def _cmd_slots(args: argparse.Namespace, stores: Stores) -> int:
    now = datetime.now()
    blocked = await load_blocked_dates(stores.staff, now)
    slots = await load_available_slots(stores, args.day, now, blocked)
    if not slots:
        print(f"No slots on {display_date(args.day)}")
        return 1
    print(f"Slots on {display_date(args.day)}:")
    for hour in slots:
        print(f"  {display_hour(hour)}")
    return 0


async def _cmd_quote(args: argparse.Namespace, stores: Stores) -> int:
    config = get_pricing_config(args.variant)
    result = quote(_job_from_args(args), config)
    print(json.dumps(result.model_dump(), indent=2))
    return 0


async def _cmd_book(args: argparse.Namespace, stores: Stores) -> int:
    orchestrator = BookingOrchestrator(stores)
    job = _job_from_args(args)
    try:
        record = await orchestrator.submit(
            args.variant,
            Contact(name=args.name, email=args.email, phone=args.phone),
            Address(line1=args.line1, town=args.town, postcode=args.postcode),
            job,
            args.date,
            args.time,
            access=AccessMethod(args.access) if args.access else None,
            access_notes=args.access_notes,
        )
    except BookingValidationError as e:
        print(f"Booking rejected: {e}", file=sys.stderr)
        return 2
    print(json.dumps(record.model_dump(mode="json"), indent=2))
    return 0


def _add_job_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--room", action="append", type=_parse_room, help="TYPE:SIZE, repeatable")
    parser.add_argument("--add-on", action="append", type=_parse_add_on, help="ID[:COUNT], repeatable")
    parser.add_argument("--footfall", choices=[f.value for f in FootfallLevel])
    parser.add_argument("--supplies", choices=[s.value for s in SuppliesChoice])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"{settings.booking.business_name} booking engine")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("blocked", help="List dates with no bookable hour")

    slots = sub.add_parser("slots", help="List bookable hours for a date")
    slots.add_argument("day", type=_parse_date)

    quote_cmd = sub.add_parser("quote", help="Price a job")
    quote_cmd.add_argument("variant", choices=sorted(VARIANTS))
    quote_cmd.add_argument("--date", type=_parse_date)
    _add_job_arguments(quote_cmd)

    book = sub.add_parser("book", help="Submit a demo booking")
    book.add_argument("--variant", default="residential", choices=sorted(VARIANTS))
    book.add_argument("--date", type=_parse_date, required=True)
    book.add_argument("--time", required=True, help="Hour label, e.g. 10")
    book.add_argument("--name", default="Jo Bloggs")
    book.add_argument("--email", default="jo@example.com")
    book.add_argument("--phone", default="07123 456789")
    book.add_argument("--line1", default="1 Example Street")
    book.add_argument("--town", default="Manchester")
    book.add_argument("--postcode", default="M1 1AA")
    book.add_argument("--access", choices=[a.value for a in AccessMethod], default="home")
    book.add_argument("--access-notes", default="")
    _add_job_arguments(book)
    return parser


_COMMANDS = {
    "blocked": _cmd_blocked,
    "slots": _cmd_slots,
    "quote": _cmd_quote,
    "book": _cmd_book,
}


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    stores = build_demo_stores()
    return asyncio.run(_COMMANDS[args.command](args, stores))


if __name__ == "__main__":
    sys.exit(main())
