"""Abstract interface for blob storage operations."""

from abc import ABC, abstractmethod


class StorageClient(ABC):
    """Abstract base class for blob storage backends."""

    @abstractmethod
    def download(self, bucket_name: str, object_name: str) -> bytes:
        """
        Downloads an object from storage.

        Args:
            bucket_name: The storage bucket name.
            object_name: The object path/name in storage.

        Returns:
            The object contents as bytes.

        Raises:
            BlobNotFoundError: If the object does not exist.
            StorageDownloadError: If the download fails.
        """
        pass

    @abstractmethod
    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: bytes,
        content_type: str,
    ) -> None:
        """
        Uploads an object to storage, replacing any existing object.

        Args:
            bucket_name: The storage bucket name.
            object_name: The destination path/name in storage.
            data: The object contents.
            content_type: MIME type of the object.

        Raises:
            StorageUploadError: If the upload fails.
        """
        pass

    @abstractmethod
    def ensure_bucket_exists(self, bucket_name: str) -> None:
        """
        Ensures a bucket exists, creating it if necessary.

        Args:
            bucket_name: The bucket name to ensure exists.
        """
        pass
