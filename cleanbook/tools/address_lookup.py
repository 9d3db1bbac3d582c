"""
Postcode coverage check and address lookup.

Coverage is checked first, keyed by the outward code (``M1`` for
``M1 1AA``). Only covered postcodes are sent to the address provider.
Every failure carries a message fit to show the customer, who can
always fall back to entering the address by hand.
"""

import logging
from typing import Optional

import httpx

from cleanbook.config import settings
from cleanbook.schemas.booking_schema import Address
from cleanbook.tools.stores import CoverageStore

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    401: "API authentication failed. Please check your API key.",
    404: "Postcode not found. Please check and try again.",
    429: "API usage limit reached. Please try again later.",
}


class AddressLookupError(Exception):
    """Address lookup failed with a customer-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PostcodeNotCoveredError(AddressLookupError):
    """The postcode is outside the service area."""


def compact_postcode(postcode: str) -> str:
    return "".join(postcode.split()).upper()


def extract_outward(postcode: str) -> Optional[str]:
    """Outward part of a UK postcode, or None if too short to be one."""
    compact = compact_postcode(postcode)
    if len(compact) < 5:
        return None
    return compact[:-3]


def parse_address(full_address: str, postcode: str) -> Address:
    """Split a provider address (``line1, [line2, ]town, county``) into fields."""
    parts = [p for p in full_address.split(", ") if p.strip()]
    if len(parts) > 2:
        town = parts[-2]
    elif len(parts) > 1:
        town = parts[1]
    else:
        town = ""
    return Address(
        line1=parts[0] if parts else "",
        line2=parts[1] if len(parts) > 2 else "",
        town=town,
        county=parts[-1] if len(parts) > 1 else "",
        postcode=postcode,
        full_address=full_address,
    )


def missing_manual_fields(address: Address) -> list[str]:
    """Required fields a hand-entered address is still missing."""
    missing = []
    if not address.line1.strip():
        missing.append("line1")
    if not address.town.strip():
        missing.append("town")
    if not address.postcode.strip():
        missing.append("postcode")
    return missing


class AddressLookupClient:
    """Looks up candidate addresses for covered postcodes."""

    def __init__(
        self,
        coverage: CoverageStore,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._coverage = coverage
        self._api_url = (api_url or settings.integrations.address_api_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.integrations.address_api_key
        self._timeout = timeout or settings.integrations.http_timeout_seconds
        self._transport = transport

    async def check_coverage(self, postcode: str) -> str:
        """Return the outward code if covered.

        Raises:
            AddressLookupError: If the postcode is malformed or the check fails.
            PostcodeNotCoveredError: If the area is not served.
        """
        if not postcode.strip():
            raise AddressLookupError("Please enter a postcode")
        outward = extract_outward(postcode)
        if not outward:
            raise AddressLookupError("Please enter a valid UK postcode")
        try:
            covered = await self._coverage.is_covered(outward)
        except Exception:
            logger.exception("Postcode coverage check failed for %s", outward)
            raise AddressLookupError(
                "Something went wrong checking coverage. Please try again."
            ) from None
        if not covered:
            raise PostcodeNotCoveredError(
                f"Sorry, we don't cover {postcode.strip().upper()} yet."
            )
        return outward

    async def find(self, postcode: str) -> list[Address]:
        """Candidate addresses for a postcode, coverage permitting."""
        await self.check_coverage(postcode)

        url = f"{self._api_url}/find/{compact_postcode(postcode)}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(url, params={"api-key": self._api_key})
        except httpx.HTTPError:
            logger.exception("Address provider request failed")
            raise AddressLookupError(
                "Error fetching addresses. Please try again or enter manually."
            ) from None

        if resp.status_code >= 400:
            logger.warning("Address provider error %s: %s", resp.status_code, resp.text[:200])
            message = _STATUS_MESSAGES.get(
                resp.status_code, f"Error: {resp.status_code} - {resp.reason_phrase}"
            )
            raise AddressLookupError(message)

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.warning("Address provider returned an unreadable body: %s", resp.text[:200])
            raise AddressLookupError(
                "Error fetching addresses. Please try again or enter manually."
            )
        addresses = data.get("addresses") or []
        if not addresses:
            raise AddressLookupError("No addresses found for this postcode")
        found_postcode = data.get("postcode") or postcode.strip().upper()
        return [parse_address(a, found_postcode) for a in addresses]
