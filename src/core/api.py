"""API Gateway (REST, Lambda proxy integration) plumbing shared by the HTTP handlers."""

import base64
import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.errors import USER_MESSAGES, ErrorCode, InvalidArgumentError, TripperError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Route = Callable[[dict[str, Any]], tuple[int, Any]]


def _jsonable(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(by_alias=True, exclude_none=True)
    if isinstance(body, list):
        return [_jsonable(item) for item in body]
    return body


def json_response(status_code: int, body: Any, headers: dict[str, str] | None = None) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": headers or {"Content-Type": "application/json"},
        "body": json.dumps(_jsonable(body)),
    }


def route_key(event: dict[str, Any]) -> str:
    return f"{event.get('httpMethod', '')} {event.get('resource', '')}"


def caller_id(event: dict[str, Any]) -> str | None:
    """User id placed in the request context by the authorizer; None for anonymous requests."""
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    return authorizer.get("userId") or None


def path_param(event: dict[str, Any], name: str) -> str:
    value = (event.get("pathParameters") or {}).get(name)
    if not value:
        raise InvalidArgumentError(f"Missing path parameter: {name}")
    return value


def query_param(event: dict[str, Any], name: str) -> str | None:
    return (event.get("queryStringParameters") or {}).get(name)


def header(event: dict[str, Any], name: str) -> str | None:
    headers = event.get("headers") or {}
    lowered = name.lower()
    return next((value for key, value in headers.items() if key.lower() == lowered), None)


def parse_body(event: dict[str, Any], model: type[ModelT]) -> ModelT:
    raw = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidArgumentError("Request body must be valid JSON") from e
    return model.model_validate(data)


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def dispatch(event: dict[str, Any], routes: dict[str, Route]) -> dict[str, Any]:
    """Run the route for this request and translate errors into HTTP responses."""
    key = route_key(event)
    route = routes.get(key)
    if route is None:
        return json_response(404, {"error": f"No route for {key}"})

    try:
        status_code, body = route(event)
    except TripperError as e:
        if e.status_code >= 500:
            logger.error("%s failed: %s", key, e.message)
        else:
            logger.warning("%s refused (%s): %s", key, e.code.value, e.message)
        return json_response(e.status_code, {"error": e.user_message})
    except ValidationError as e:
        logger.warning("%s rejected invalid input: %s", key, e)
        return json_response(400, {"error": _validation_message(e)})
    except Exception:
        logger.exception("Unhandled error on %s", key)
        return json_response(500, {"error": USER_MESSAGES[ErrorCode.INTERNAL_ERROR]})

    return json_response(status_code, body)
