"""Public place search proxy. Every response, errors included, carries the CORS headers."""

import asyncio
import logging
from typing import Any

from core.api import header, json_response, query_param
from core.config import get_config
from core.errors import TripperError
from core.services.places import cors_headers, search_places

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    config = get_config()
    headers = cors_headers(header(event, "Origin"), config.allowed_origins)

    if event.get("httpMethod") == "OPTIONS":
        return {
            "statusCode": 204,
            "headers": {
                **headers,
                "Access-Control-Allow-Methods": "GET, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
            "body": "",
        }

    try:
        status_code, body = asyncio.run(
            search_places(
                config.foursquare_api_key,
                query_param(event, "query"),
                ll=query_param(event, "ll"),
                limit=query_param(event, "limit"),
            )
        )
    except TripperError as e:
        if e.status_code >= 500:
            logger.error("Place search failed: %s", e.message)
        return json_response(e.status_code, {"error": e.user_message}, headers=headers)

    return json_response(status_code, body, headers=headers)
