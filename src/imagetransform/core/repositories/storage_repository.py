"""Abstract contract for blob storage."""

from abc import ABC, abstractmethod


class StorageGateway(ABC):
    """Contract for storing and retrieving image blobs.

    Implementations could be S3, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    Timeouts and retries belong to the implementation; every failure is
    surfaced as a StorageFailureError.
    """

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Read a blob.

        Raises:
            StorageFailureError: If the blob is missing or the read fails
        """

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Write a blob and return its object URL.

        Raises:
            StorageFailureError: If the write fails
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete a blob.

        Raises:
            StorageFailureError: If the deletion fails
        """

    @abstractmethod
    def presign_upload(self, key: str, content_type: str, ttl: int) -> str:
        """Return a URL allowing a single PUT of `key` for `ttl` seconds.

        Raises:
            StorageFailureError: If the URL cannot be generated
        """

    @abstractmethod
    def presign_download(self, key: str, ttl: int) -> str:
        """Return a URL allowing GET of `key` for `ttl` seconds.

        Raises:
            StorageFailureError: If the URL cannot be generated
        """
