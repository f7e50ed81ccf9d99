"""Unit tests for DynamoDBArtifactRepository."""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import pytest
from botocore.exceptions import ClientError

from imagetransform.core.infrastructure.aws.dynamodb_metadata import DynamoDBArtifactRepository
from imagetransform.core.models.errors import RepositoryFailureError
from imagetransform.core.utils.constants import (
    ERROR_CODE_METADATA_CONFLICT,
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_INVALID_FORMAT,
    ERROR_CODE_METADATA_LIST_FAILED,
)


class DummyAdapter:
    """Minimal DynamoDBAdapter stub."""

    put_item: Callable[..., Any]
    get_item: Callable[..., dict[str, Any]]
    delete_item: Callable[..., Any]
    query: Callable[..., dict[str, Any]]

    def __init__(self) -> None:
        self.put_item = lambda **_: None
        self.get_item = lambda **_: {}
        self.delete_item = lambda **_: None
        self.query = lambda **_: {"Items": []}


def _raise(code: str, operation: str) -> Callable[..., Any]:
    def _fail(**_: Any) -> None:
        raise ClientError({"Error": {"Code": code, "Message": "x"}}, operation)

    return _fail


def _repo(images: DummyAdapter | None = None, transformed: DummyAdapter | None = None):
    return DynamoDBArtifactRepository(images or DummyAdapter(), transformed or DummyAdapter())


class TestWithStubAdapters:
    def test_save_image_uses_conditional_put(self, make_image_record) -> None:
        calls: list[dict[str, Any]] = []
        adapter = DummyAdapter()
        adapter.put_item = lambda **kwargs: calls.append(kwargs)

        _repo(images=adapter).save_image(make_image_record())

        assert calls[0]["condition_expression"] == "attribute_not_exists(image_id)"
        assert calls[0]["item"]["owner_id"] == "john"

    def test_save_duplicate_raises_conflict(self, make_image_record) -> None:
        adapter = DummyAdapter()
        adapter.put_item = _raise("ConditionalCheckFailedException", "PutItem")

        with pytest.raises(RepositoryFailureError) as exc:
            _repo(images=adapter).save_image(make_image_record())

        assert exc.value.error_code == ERROR_CODE_METADATA_CONFLICT

    def test_save_other_client_error(self, make_transformed_record) -> None:
        adapter = DummyAdapter()
        adapter.put_item = _raise("ProvisionedThroughputExceededException", "PutItem")

        with pytest.raises(RepositoryFailureError) as exc:
            _repo(transformed=adapter).save_transformed_image(make_transformed_record())

        assert exc.value.error_code == ERROR_CODE_METADATA_CREATE_FAILED

    def test_get_image_absent(self) -> None:
        assert _repo().get_image("img_1") is None

    def test_get_image_converts_decimals(self) -> None:
        adapter = DummyAdapter()
        adapter.get_item = lambda **_: {
            "Item": {
                "image_id": "img_1",
                "owner_id": "john",
                "storage_key": "images/john/img_1.png",
                "original_name": "a.png",
                "content_type": "image/png",
                "file_size": Decimal("123"),
                "created_at": "2024-01-01T00:00:00+00:00",
            }
        }

        image = _repo(images=adapter).get_image("img_1")

        assert image is not None
        assert image.file_size == 123

    def test_get_image_malformed_item(self) -> None:
        adapter = DummyAdapter()
        adapter.get_item = lambda **_: {"Item": {"image_id": "img_1"}}

        with pytest.raises(RepositoryFailureError) as exc:
            _repo(images=adapter).get_image("img_1")

        assert exc.value.error_code == ERROR_CODE_METADATA_INVALID_FORMAT

    def test_get_client_error(self) -> None:
        adapter = DummyAdapter()
        adapter.get_item = _raise("InternalServerError", "GetItem")

        with pytest.raises(RepositoryFailureError) as exc:
            _repo(transformed=adapter).get_transformed_image("tfm_1")

        assert exc.value.error_code == ERROR_CODE_METADATA_FETCH_FAILED

    def test_delete_client_error(self) -> None:
        adapter = DummyAdapter()
        adapter.delete_item = _raise("InternalServerError", "DeleteItem")

        with pytest.raises(RepositoryFailureError) as exc:
            _repo(images=adapter).delete_image("img_1")

        assert exc.value.error_code == ERROR_CODE_METADATA_DELETE_FAILED

    def test_query_follows_pagination(self, make_transformed_record) -> None:
        first = make_transformed_record(transformed_image_id="tfm_2").model_dump()
        second = make_transformed_record(transformed_image_id="tfm_1").model_dump()
        seen: list[dict[str, Any]] = []

        def query(**kwargs: Any) -> dict[str, Any]:
            seen.append(kwargs)
            if "ExclusiveStartKey" not in kwargs:
                return {"Items": [first], "LastEvaluatedKey": {"transformed_image_id": "tfm_2"}}
            return {"Items": [second]}

        adapter = DummyAdapter()
        adapter.query = query

        records = _repo(transformed=adapter).find_transformed_by_parent("img_1")

        assert [r.transformed_image_id for r in records] == ["tfm_2", "tfm_1"]
        assert seen[0]["IndexName"] == "parent-created-index"
        assert seen[0]["ScanIndexForward"] is False
        assert seen[1]["ExclusiveStartKey"] == {"transformed_image_id": "tfm_2"}

    def test_query_client_error(self) -> None:
        adapter = DummyAdapter()
        adapter.query = _raise("InternalServerError", "Query")

        with pytest.raises(RepositoryFailureError) as exc:
            _repo(images=adapter).find_images_by_owner("john")

        assert exc.value.error_code == ERROR_CODE_METADATA_LIST_FAILED

    def test_query_invalid_items(self) -> None:
        adapter = DummyAdapter()
        adapter.query = lambda **_: {"Items": "oops"}

        with pytest.raises(RepositoryFailureError):
            _repo(images=adapter).find_images_by_owner("john")


class TestAgainstMockedDynamoDB:
    @pytest.fixture
    def repo(self, images_table, transformed_table) -> DynamoDBArtifactRepository:
        return DynamoDBArtifactRepository()

    def test_image_round_trip(self, repo, make_image_record) -> None:
        image = make_image_record()

        repo.save_image(image)

        assert repo.get_image("img_1") == image

    def test_duplicate_image_is_rejected(self, repo, make_image_record) -> None:
        repo.save_image(make_image_record())

        with pytest.raises(RepositoryFailureError) as exc:
            repo.save_image(make_image_record(original_name="other.png"))

        assert exc.value.error_code == ERROR_CODE_METADATA_CONFLICT

    def test_images_by_owner_newest_first(self, repo, make_image_record) -> None:
        repo.save_image(make_image_record(image_id="img_old", created_at="2024-01-01T00:00:00+00:00"))
        repo.save_image(make_image_record(image_id="img_new", created_at="2024-03-01T00:00:00+00:00"))
        repo.save_image(make_image_record(image_id="img_other", owner_id="alice"))

        images = repo.find_images_by_owner("john")

        assert [image.image_id for image in images] == ["img_new", "img_old"]

    def test_transformed_queries(self, repo, make_transformed_record) -> None:
        repo.save_transformed_image(make_transformed_record(transformed_image_id="tfm_1"))
        repo.save_transformed_image(
            make_transformed_record(transformed_image_id="tfm_2", created_at="2024-05-01T00:00:00+00:00")
        )
        repo.save_transformed_image(
            make_transformed_record(transformed_image_id="tfm_3", parent_image_id="img_2")
        )

        by_parent = repo.find_transformed_by_parent("img_1")
        by_owner = repo.find_transformed_by_owner("john")

        assert [r.transformed_image_id for r in by_parent] == ["tfm_2", "tfm_1"]
        assert {r.transformed_image_id for r in by_owner} == {"tfm_1", "tfm_2", "tfm_3"}

    def test_delete_transformed_image(self, repo, make_transformed_record) -> None:
        repo.save_transformed_image(make_transformed_record())

        repo.delete_transformed_image("tfm_1")

        assert repo.get_transformed_image("tfm_1") is None
        assert repo.find_transformed_by_parent("img_1") == []
