import json

from imagetransform.core.utils.response import ResponseBuilder


def test_ok_response_contains_cors_headers() -> None:
    response = ResponseBuilder.ok({"a": 1}, request_id="req-1")

    assert response["statusCode"] == 200
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    assert response["headers"]["Content-Type"] == "application/json"
    assert json.loads(response["body"]) == {"a": 1, "request_id": "req-1"}


def test_ok_response_accepts_lists() -> None:
    response = ResponseBuilder.ok([1, 2])

    assert json.loads(response["body"]) == [1, 2]


def test_created_response() -> None:
    assert ResponseBuilder.created({"id": "x"})["statusCode"] == 201


def test_cors_origin_override() -> None:
    response = ResponseBuilder.ok({}, cors_origin="https://app.example.com")

    assert response["headers"]["Access-Control-Allow-Origin"] == "https://app.example.com"


def test_error_payload_shape() -> None:
    response = ResponseBuilder.bad_request("Invalid", error="CODE", details={"field": "x"})
    body = json.loads(response["body"])

    assert response["statusCode"] == 400
    assert body["error"] == "CODE"
    assert body["message"] == "Invalid"
    assert body["details"] == {"field": "x"}
    assert "timestamp" in body


def test_error_defaults_to_status_name() -> None:
    body = json.loads(ResponseBuilder.not_found()["body"])

    assert body["error"] == "NOT_FOUND"


def test_unauthorized_forbidden_and_internal_statuses() -> None:
    assert ResponseBuilder.unauthorized()["statusCode"] == 401
    assert ResponseBuilder.forbidden()["statusCode"] == 403
    assert ResponseBuilder.internal_error()["statusCode"] == 500


def test_preflight() -> None:
    response = ResponseBuilder.preflight()

    assert response["statusCode"] == 204
    assert response["body"] == ""
