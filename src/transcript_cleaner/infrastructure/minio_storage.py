"""MinIO storage client implementation."""

import io

from minio import Minio
from minio.error import S3Error

from transcript_cleaner.exceptions import (
    BlobNotFoundError,
    StorageDownloadError,
    StorageUploadError,
)
from transcript_cleaner.infrastructure.interfaces import StorageClient
from transcript_cleaner.logging import setup_logging

logger = setup_logging()

NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "NoSuchObject"})


class MinioStorageClient(StorageClient):
    """Storage client implementation using MinIO."""

    def __init__(self, client: Minio):
        self._client = client

    def download(self, bucket_name: str, object_name: str) -> bytes:
        """
        Downloads an object from MinIO.

        Args:
            bucket_name: The storage bucket name.
            object_name: The object path/name in storage.

        Returns:
            The object contents as bytes.

        Raises:
            BlobNotFoundError: If the object does not exist.
            StorageDownloadError: If the download fails.
        """
        try:
            response = self._client.get_object(bucket_name, object_name)
            try:
                data = response.data
                logger.info(
                    "File downloaded",
                    extra={"bucket": bucket_name, "object": object_name},
                )
                return data
            finally:
                response.close()
                response.release_conn()
        except S3Error as e:
            if e.code in NOT_FOUND_CODES:
                logger.info(
                    "Object not found",
                    extra={"bucket": bucket_name, "object": object_name},
                )
                raise BlobNotFoundError(bucket_name, object_name, cause=e) from e
            logger.exception(
                "Download failed",
                extra={"bucket": bucket_name, "object": object_name},
            )
            raise StorageDownloadError(object_name, cause=e) from e
        except Exception as e:
            logger.exception(
                "Download failed",
                extra={"bucket": bucket_name, "object": object_name},
            )
            raise StorageDownloadError(object_name, cause=e) from e

    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: bytes,
        content_type: str,
    ) -> None:
        """
        Uploads an object to MinIO, replacing any existing object.

        Raises:
            StorageUploadError: If the upload fails.
        """
        try:
            self._client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=io.BytesIO(data),
                length=len(data),
                content_type=content_type,
            )
            logger.info(
                "File uploaded",
                extra={"bucket": bucket_name, "object": object_name, "size": len(data)},
            )
        except Exception as e:
            logger.exception(
                "Upload failed",
                extra={"bucket": bucket_name, "object": object_name},
            )
            raise StorageUploadError(object_name, cause=e) from e

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        """
        Ensures a bucket exists in MinIO, creating it if necessary.

        Args:
            bucket_name: The bucket name to ensure exists.
        """
        if not self._client.bucket_exists(bucket_name):
            self._client.make_bucket(bucket_name)
            logger.info("Bucket created", extra={"bucket": bucket_name})
        else:
            logger.info("Bucket exists", extra={"bucket": bucket_name})
