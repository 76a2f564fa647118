import base64
import json

import pytest

from core.api import caller_id, dispatch, header, json_response, parse_body, path_param
from core.errors import ForbiddenError, InvalidArgumentError
from core.models import TripCreate


def _routes():
    def ok(event):
        return 200, {"hello": "world"}

    def forbidden(event):
        raise ForbiddenError("Only the trip owner can delete this trip")

    def invalid_body(event):
        return 200, parse_body(event, TripCreate)

    def boom(event):
        raise RuntimeError("database exploded")

    return {
        "GET /ok": ok,
        "DELETE /forbidden": forbidden,
        "POST /trips": invalid_body,
        "GET /boom": boom,
    }


def test_dispatch_success(api_event):
    response = dispatch(api_event("GET", "/ok"), _routes())

    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {"hello": "world"}
    assert response["headers"]["Content-Type"] == "application/json"


def test_dispatch_unknown_route(api_event):
    response = dispatch(api_event("PUT", "/nowhere"), _routes())

    assert response["statusCode"] == 404


def test_dispatch_maps_domain_errors(api_event):
    response = dispatch(api_event("DELETE", "/forbidden"), _routes())

    assert response["statusCode"] == 403
    assert json.loads(response["body"]) == {"error": "Only the trip owner can delete this trip"}


def test_dispatch_maps_validation_errors(api_event):
    response = dispatch(api_event("POST", "/trips", body=json.dumps({"name": ""})), _routes())

    assert response["statusCode"] == 400
    assert "name" in json.loads(response["body"])["error"]


def test_dispatch_hides_unexpected_errors(api_event):
    response = dispatch(api_event("GET", "/boom"), _routes())

    assert response["statusCode"] == 500
    assert "database" not in response["body"]


def test_json_response_serializes_models():
    response = json_response(200, [TripCreate(name="Japan", default_zoom=5)])

    assert json.loads(response["body"]) == [{"name": "Japan", "defaultZoom": 5.0}]


def test_caller_id(api_event):
    assert caller_id(api_event("GET", "/ok", user_id="user-9")) == "user-9"
    assert caller_id(api_event("GET", "/ok", user_id=None)) is None
    assert caller_id({}) is None


def test_path_param_missing(api_event):
    with pytest.raises(InvalidArgumentError, match="tripId"):
        path_param(api_event("GET", "/trips/{tripId}"), "tripId")


def test_header_case_insensitive(api_event):
    event = api_event("GET", "/ok", headers={"origin": "http://localhost:5173"})
    assert header(event, "Origin") == "http://localhost:5173"
    assert header(event, "X-Missing") is None


def test_parse_body_base64(api_event):
    event = api_event("POST", "/trips", body=base64.b64encode(b'{"name": "Japan"}').decode())
    event["isBase64Encoded"] = True

    assert parse_body(event, TripCreate).name == "Japan"


def test_parse_body_rejects_malformed_json(api_event):
    with pytest.raises(InvalidArgumentError, match="valid JSON"):
        parse_body(api_event("POST", "/trips", body="{not json"), TripCreate)
