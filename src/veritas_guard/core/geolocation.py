"""
Best-effort location lookup used as retrieval context for fact-checks.

The lookup is bounded by a short timeout. Any failure (timeout, HTTP error,
malformed payload) is logged and yields None so the caller proceeds without
location context.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from .config_loader import CONFIG
from .http_client import get_async_http_client
from .schemas import GeoLocation

logger = logging.getLogger(__name__)


def parse_location(payload: Dict[str, Any]) -> Optional[GeoLocation]:
    """Reads coordinates from an IP geolocation payload ('lat'/'lon' or 'latitude'/'longitude')."""
    if not isinstance(payload, dict) or payload.get("status") == "fail":
        return None
    lat = payload.get("lat", payload.get("latitude"))
    lng = payload.get("lon", payload.get("longitude"))
    if lat is None or lng is None:
        return None
    try:
        return GeoLocation(latitude=float(lat), longitude=float(lng))
    except (TypeError, ValueError, ValidationError):
        return None


async def _lookup(url: str, timeout: float) -> Optional[GeoLocation]:
    async with get_async_http_client(timeout=timeout) as client:
        response = await client.get(url)
        response.raise_for_status()
        return parse_location(response.json())


async def locate_user(
    timeout: Optional[float] = None, url: Optional[str] = None
) -> Optional[GeoLocation]:
    """
    Resolves the user's approximate location from their public IP address.

    Args:
        timeout (Optional[float]): Upper bound for the whole lookup, in seconds.
        url (Optional[str]): Overrides the configured lookup endpoint.

    Returns:
        Optional[GeoLocation]: The location, or None if unavailable.
    """
    settings = CONFIG.geolocation
    if not settings.enabled:
        logger.info("Geolocation disabled in configuration.")
        return None
    timeout = timeout if timeout is not None else settings.timeout
    try:
        location = await asyncio.wait_for(
            _lookup(url or settings.lookup_url, timeout), timeout=timeout
        )
    except asyncio.TimeoutError:
        logger.warning(f"Geolocation lookup timed out after {timeout}s.")
        return None
    except httpx.HTTPError as e:
        logger.warning(f"Geolocation lookup failed: {e}")
        return None
    except ValueError as e:
        logger.warning(f"Geolocation lookup returned an invalid payload: {e}")
        return None
    if location is None:
        logger.info("Geolocation info not available for Maps grounding.")
    return location
