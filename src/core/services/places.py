"""Foursquare place search proxy. Keeps the API key server-side and sidesteps browser CORS."""

import logging
from typing import Any

import httpx

from core.errors import ErrorCode, InvalidArgumentError, TripperError, UpstreamError

logger = logging.getLogger(__name__)

FOURSQUARE_SEARCH_URL = "https://places-api.foursquare.com/places/search"
FOURSQUARE_API_VERSION = "2025-06-17"
TIMEOUT_SECONDS = 5.0
DEFAULT_LIMIT = 5
MAX_LIMIT = 50


def cors_headers(origin: str | None, allowed_origins: tuple[str, ...]) -> dict[str, str]:
    """Echo the origin when allow-listed, otherwise pin to the first allowed origin."""
    allowed = origin if origin in allowed_origins else (allowed_origins[0] if allowed_origins else "")
    return {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": allowed,
    }


def validate_query(query: str | None) -> str:
    if not query:
        raise InvalidArgumentError("query parameter required")
    if len(query) < 2:
        raise InvalidArgumentError("Query too short (min 2 characters)")
    if len(query) > 200:
        raise InvalidArgumentError("Query too long (max 200 characters)")
    return query


def parse_limit(limit: str | None) -> int:
    if not limit:
        return DEFAULT_LIMIT
    try:
        value = int(limit)
    except ValueError as e:
        raise InvalidArgumentError("limit must be an integer") from e
    if not 1 <= value <= MAX_LIMIT:
        raise InvalidArgumentError(f"limit must be between 1 and {MAX_LIMIT}")
    return value


async def search_places(
    api_key: str,
    query: str | None,
    ll: str | None = None,
    limit: str | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> tuple[int, Any]:
    """Forward a search to Foursquare. Returns the upstream status code and JSON body."""
    query = validate_query(query)
    params: dict[str, Any] = {"query": query, "limit": parse_limit(limit)}
    if ll:
        params["ll"] = ll

    if not api_key:
        raise TripperError("Foursquare API key not configured", code=ErrorCode.INTERNAL_ERROR)

    headers = {
        "Authorization": f"Bearer {api_key}",
        "X-Places-Api-Version": FOURSQUARE_API_VERSION,
    }

    try:
        if http_client is not None:
            response = await http_client.get(
                FOURSQUARE_SEARCH_URL, params=params, headers=headers, timeout=TIMEOUT_SECONDS
            )
        else:
            async with httpx.AsyncClient(timeout=TIMEOUT_SECONDS) as client:
                response = await client.get(FOURSQUARE_SEARCH_URL, params=params, headers=headers)
    except httpx.TimeoutException as e:
        logger.warning("Foursquare search timed out for query %r", query)
        raise UpstreamError(f"Foursquare request timed out: {e}", code=ErrorCode.UPSTREAM_TIMEOUT) from e
    except httpx.HTTPError as e:
        raise UpstreamError(f"Foursquare request failed: {e}") from e

    try:
        body = response.json()
    except ValueError as e:
        raise UpstreamError(f"Foursquare returned a non-JSON body (status {response.status_code})") from e

    return response.status_code, body
