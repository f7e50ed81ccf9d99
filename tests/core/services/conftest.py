"""Fixtures for service tests: an in-memory blob store that records every call."""

from collections.abc import Callable
from typing import Any

import pytest

from imagetransform.core.imaging.engine import TransformationEngine
from imagetransform.core.infrastructure.memory.in_memory_artifacts import InMemoryArtifactRepository
from imagetransform.core.models.errors import StorageFailureError
from imagetransform.core.repositories.storage_repository import StorageGateway
from imagetransform.core.services.transformation_orchestrator import TransformationOrchestrator


class RecordingStorage(StorageGateway):
    """Dictionary-backed StorageGateway with failure injection."""

    def __init__(self) -> None:
        self.blobs: dict[str, tuple[bytes, str]] = {}
        self.reads: list[str] = []
        self.writes: list[str] = []
        self.deletes: list[str] = []
        self.presigned: list[dict[str, Any]] = []
        self.fail_on: set[str] = set()

    def _maybe_fail(self, operation: str, key: str) -> None:
        if operation in self.fail_on:
            raise StorageFailureError(message=f"{operation} failed", details={"key": key})

    def get(self, key: str) -> bytes:
        self.reads.append(key)
        self._maybe_fail("get", key)
        if key not in self.blobs:
            raise StorageFailureError(message="Image data not found", details={"key": key})
        return self.blobs[key][0]

    def put(self, key: str, data: bytes, content_type: str) -> str:
        self._maybe_fail("put", key)
        self.writes.append(key)
        self.blobs[key] = (data, content_type)
        return f"https://bucket.example.com/{key}"

    def delete(self, key: str) -> None:
        self._maybe_fail("delete", key)
        self.deletes.append(key)
        self.blobs.pop(key, None)

    def presign_upload(self, key: str, content_type: str, ttl: int) -> str:
        self._maybe_fail("presign", key)
        self.presigned.append({"method": "PUT", "key": key, "content_type": content_type, "ttl": ttl})
        return f"https://signed.example.com/{key}?op=put&ttl={ttl}"

    def presign_download(self, key: str, ttl: int) -> str:
        self._maybe_fail("presign", key)
        self.presigned.append({"method": "GET", "key": key, "ttl": ttl})
        return f"https://signed.example.com/{key}?op=get&ttl={ttl}"


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def repository() -> InMemoryArtifactRepository:
    return InMemoryArtifactRepository()


@pytest.fixture
def orchestrator(storage, repository) -> TransformationOrchestrator:
    return TransformationOrchestrator(storage, repository, TransformationEngine(), cascade_delete=True)


@pytest.fixture
def stored_image(storage, repository, make_image_record, make_image_bytes) -> Callable[..., Any]:
    """
    Store an image blob and its record.

    Usage:
        image = stored_image(width=100, height=100, fmt="JPEG")
    """

    def _store(
        *,
        width: int = 100,
        height: int = 100,
        color: tuple[int, ...] = (255, 0, 0),
        fmt: str = "PNG",
        **overrides: Any,
    ):
        content_type = f"image/{fmt.lower()}"
        extension = "jpg" if fmt == "JPEG" else fmt.lower()
        data = make_image_bytes(width, height, color=color, fmt=fmt)
        image_id = overrides.pop("image_id", "img_1")
        owner_id = overrides.pop("owner_id", "john")
        image = make_image_record(
            image_id=image_id,
            owner_id=owner_id,
            storage_key=f"images/{owner_id}/{image_id}.{extension}",
            original_name=overrides.pop("original_name", f"photo.{extension}"),
            content_type=content_type,
            file_size=len(data),
            **overrides,
        )
        storage.blobs[image.storage_key] = (data, content_type)
        repository.save_image(image)
        return image

    return _store
