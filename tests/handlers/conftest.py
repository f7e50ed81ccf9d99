"""Fixtures for Lambda handler tests: API Gateway events and a Lambda context."""

import base64
import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="image-transformation-test",
        memory_limit_in_mb=512,
        invoked_function_arn="arn:aws:lambda:us-east-1:123456789012:function:image-transformation-test",
    )


@pytest.fixture
def api_event() -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway proxy event for an authenticated user.

    Usage:
        event = api_event("POST", body={"rotate": 90}, path_params={"image_id": "img_1"})
        page = api_event("GET", query_params={"page": "1", "limit": "5"})
        anonymous = api_event("GET", user=None)
    """

    def _build(
        method: str = "GET",
        *,
        path: str = "/",
        path_params: dict[str, str] | None = None,
        query_params: dict[str, str] | None = None,
        body: dict[str, Any] | str | None = None,
        user: str | None = "john",
    ) -> dict[str, Any]:
        request_context: dict[str, Any] = {"requestId": "test-request-id"}
        if user is not None:
            request_context["authorizer"] = {"claims": {"sub": user}}

        if isinstance(body, dict):
            body = json.dumps(body)

        return {
            "httpMethod": method,
            "path": path,
            "pathParameters": path_params,
            "queryStringParameters": query_params,
            "headers": {"Content-Type": "application/json"},
            "body": body,
            "requestContext": request_context,
        }

    return _build


@pytest.fixture
def b64_image(make_image_bytes) -> Callable[..., str]:
    """Base64-encoded test image for upload bodies."""

    def _encode(*args: Any, **kwargs: Any) -> str:
        return base64.b64encode(make_image_bytes(*args, **kwargs)).decode("ascii")

    return _encode


@pytest.fixture
def seeded_image(aws_resources, s3_put_object, make_image_bytes, make_image_record) -> Callable[..., Any]:
    """
    Store an original image in mocked S3 and DynamoDB.

    Usage:
        image = seeded_image(owner_id="john", width=100, height=100)
    """

    def _seed(*, width: int = 100, height: int = 100, fmt: str = "PNG", **overrides: Any):
        data = make_image_bytes(width, height, fmt=fmt)
        content_type = f"image/{fmt.lower()}"
        image_id = overrides.pop("image_id", "img_1")
        owner_id = overrides.pop("owner_id", "john")
        image = make_image_record(
            image_id=image_id,
            owner_id=owner_id,
            storage_key=f"images/{owner_id}/{image_id}.{fmt.lower()}",
            content_type=content_type,
            file_size=len(data),
            **overrides,
        )
        s3_put_object(image.storage_key, data, content_type)
        aws_resources["images"].put_item(Item=image.model_dump())
        return image

    return _seed


@pytest.fixture
def seeded_transformation(aws_resources, s3_put_object, make_transformed_record) -> Callable[..., Any]:
    """
    Store a derived image blob and its record.

    Usage:
        record = seeded_transformation(transformed_image_id="tfm_2")
    """

    def _seed(**overrides: Any):
        record = make_transformed_record(**overrides)
        s3_put_object(record.storage_key, b"derived-bytes", record.content_type)
        aws_resources["transformed"].put_item(Item=record.model_dump())
        return record

    return _seed
