"""
Pytest configuration and fixtures for image transformation tests.
Provides AWS mocking, DynamoDB and S3 fixtures, and Pillow-generated images.
"""

import os
from collections.abc import Callable
from io import BytesIO
from typing import Any

os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("IMAGE_S3_BUCKET_NAME", "test-image-bucket")
os.environ.setdefault("IMAGE_METADATA_TABLE_NAME", "test-image-metadata")
os.environ.setdefault("TRANSFORMED_IMAGE_TABLE_NAME", "test-transformed-images")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ImageTransformationServiceTests")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "image-transformation-tests")

import boto3  # noqa: E402
import pytest  # noqa: E402
from moto import mock_aws  # noqa: E402
from PIL import Image as PILImage  # noqa: E402

from imagetransform.core.models.image import Image, TransformedImage  # noqa: E402


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


def _owner_created_index() -> dict[str, Any]:
    return {
        "IndexName": "owner-created-index",
        "KeySchema": [
            {"AttributeName": "owner_id", "KeyType": "HASH"},
            {"AttributeName": "created_at", "KeyType": "RANGE"},
        ],
        "Projection": {"ProjectionType": "ALL"},
    }


@pytest.fixture(scope="function")
def images_table(dynamodb_resource):
    """Images table with the owner index."""
    table = dynamodb_resource.create_table(
        TableName=os.getenv("IMAGE_METADATA_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "image_id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": "image_id", "AttributeType": "S"},
            {"AttributeName": "owner_id", "AttributeType": "S"},
            {"AttributeName": "created_at", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[_owner_created_index()],
    )
    table.wait_until_exists()
    return table


@pytest.fixture(scope="function")
def transformed_table(dynamodb_resource):
    """Transformed images table with the owner and parent indexes."""
    table = dynamodb_resource.create_table(
        TableName=os.getenv("TRANSFORMED_IMAGE_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "transformed_image_id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": "transformed_image_id", "AttributeType": "S"},
            {"AttributeName": "owner_id", "AttributeType": "S"},
            {"AttributeName": "parent_image_id", "AttributeType": "S"},
            {"AttributeName": "created_at", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            _owner_created_index(),
            {
                "IndexName": "parent-created-index",
                "KeySchema": [
                    {"AttributeName": "parent_image_id", "KeyType": "HASH"},
                    {"AttributeName": "created_at", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    )
    table.wait_until_exists()
    return table


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the image bucket inside the mocked account."""
    s3_client.create_bucket(Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"))
    return s3_client


@pytest.fixture(scope="function")
def aws_resources(s3_bucket, images_table, transformed_table):
    """Bucket and both tables, for tests that go through the default adapters."""
    return {"s3": s3_bucket, "images": images_table, "transformed": transformed_table}


@pytest.fixture
def s3_put_object(s3_client) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("images/user/img.jpg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        return s3_client.put_object(
            Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"), Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], bytes]:
    """Helper to read an object's bytes from S3."""

    def _get(key: str) -> bytes:
        response = s3_client.get_object(Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"), Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_keys(s3_client) -> Callable[[], list[str]]:
    """Helper listing every key in the bucket."""

    def _keys() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=os.getenv("IMAGE_S3_BUCKET_NAME"))
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _keys


@pytest.fixture
def make_image_bytes() -> Callable[..., bytes]:
    """
    Factory for encoded test images.

    Usage:
        png = make_image_bytes(100, 50, color=(255, 0, 0), fmt="PNG")
    """

    def _make(
        width: int = 100,
        height: int = 100,
        *,
        color: tuple[int, ...] = (255, 0, 0),
        fmt: str = "PNG",
        mode: str = "RGB",
    ) -> bytes:
        buffer = BytesIO()
        PILImage.new(mode, (width, height), color).save(buffer, format=fmt)
        return buffer.getvalue()

    return _make


@pytest.fixture
def decode_image() -> Callable[[bytes], PILImage.Image]:
    """Open encoded bytes with Pillow."""

    def _decode(data: bytes) -> PILImage.Image:
        image = PILImage.open(BytesIO(data))
        image.load()
        return image

    return _decode


@pytest.fixture
def make_image_record() -> Callable[..., Image]:
    """Factory for original image records."""

    def _make(**overrides: Any) -> Image:
        fields: dict[str, Any] = {
            "image_id": "img_1",
            "owner_id": "john",
            "storage_key": "images/john/img_1.png",
            "original_name": "photo.png",
            "content_type": "image/png",
            "file_size": 100,
            "created_at": "2024-01-01T10:00:00+00:00",
        }
        fields.update(overrides)
        return Image(**fields)

    return _make


@pytest.fixture
def make_transformed_record() -> Callable[..., TransformedImage]:
    """Factory for derived image records."""

    def _make(**overrides: Any) -> TransformedImage:
        fields: dict[str, Any] = {
            "transformed_image_id": "tfm_1",
            "parent_image_id": "img_1",
            "owner_id": "john",
            "storage_key": "transformed/john/abc_photo_transformed_gray.png",
            "filename": "abc_photo_transformed_gray.png",
            "url": "https://test-image-bucket.s3.amazonaws.com/transformed/john/abc_photo_transformed_gray.png",
            "content_type": "image/png",
            "file_size": 42,
            "applied_options": '{"filters":{"grayscale":true,"sepia":false}}',
            "created_at": "2024-01-02T10:00:00+00:00",
        }
        fields.update(overrides)
        return TransformedImage(**fields)

    return _make
