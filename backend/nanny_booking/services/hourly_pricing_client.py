"""Client for the authoritative hourly pricing function.

The function is reached over HTTP at ``HOURLY_PRICING_URL``; this app serves
a compatible endpoint at ``POST /api/v1/pricing/hourly``. Every failure mode
surfaces as :class:`HourlyPricingUnavailable` so the caller can fall back to
the local estimate.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ..core.config import settings
from ..pricing.errors import HourlyPricingUnavailable

logger = logging.getLogger(__name__)


async def fetch_hourly_quote(
    payload: dict,
    *,
    url: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Mapping[str, Any]:
    """POST ``payload`` to the hourly pricing function and return its JSON body."""
    target = (url if url is not None else settings.HOURLY_PRICING_URL).strip()
    if not target:
        raise HourlyPricingUnavailable("HOURLY_PRICING_URL not configured")

    headers = {"Content-Type": "application/json"}
    if settings.HOURLY_PRICING_API_KEY:
        headers["Authorization"] = f"Bearer {settings.HOURLY_PRICING_API_KEY}"

    timeout_s = timeout if timeout is not None else settings.HOURLY_PRICING_TIMEOUT
    try:
        async with httpx.AsyncClient(timeout=timeout_s, transport=transport) as http:
            resp = await http.post(target, json=payload, headers=headers)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPError as exc:
        logger.error("Hourly pricing request failed: %s", exc)
        raise HourlyPricingUnavailable("Hourly pricing service unreachable") from exc
    except ValueError as exc:
        logger.error("Hourly pricing returned invalid JSON: %s", exc)
        raise HourlyPricingUnavailable("Invalid response from hourly pricing service") from exc

    if not isinstance(data, Mapping):
        logger.error("Hourly pricing response is not an object: %r", data)
        raise HourlyPricingUnavailable("Unexpected hourly pricing response")
    return data
