"""S3 Storage Adapter - Implementation of RecordingStoragePort using boto3.

Provides S3-compatible storage operations for AWS S3, MinIO, and other
S3-compatible services: overwrite-or-reject uploads and public URL derivation.

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import logging
from io import BytesIO
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import ClientError, NoCredentialsError

from domain.recordings.ports import RecordingStoragePort, StoredObject

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class S3StorageAdapter(RecordingStoragePort):
    """S3-compatible storage adapter using boto3.

    Example:
        config = load_storage_config()
        storage = S3StorageAdapter(
            endpoint_url=config.endpoint_url,
            access_key=config.access_key,
            secret_key=config.secret_key,
            bucket_name=config.bucket_name,
            region=config.region,
            public_base_url=config.public_base_url,
        )

        stored = await storage.upload('recordings/call.mp3', data, 'audio/mpeg')
        url = storage.public_url(stored.key)
    """

    def __init__(
        self,
        endpoint_url: Optional[str],
        access_key: str,
        secret_key: str,
        bucket_name: str,
        region: str = "us-east-1",
        public_base_url: Optional[str] = None,
    ):
        """Initialize S3 storage adapter.

        Args:
            endpoint_url: S3 endpoint URL (None for AWS S3, URL for MinIO)
            access_key: S3 access key ID
            secret_key: S3 secret access key
            bucket_name: S3 bucket name
            region: AWS region (default: 'us-east-1')
            public_base_url: Base URL objects are publicly served from, if it
                differs from the endpoint (CDN, reverse proxy)

        Raises:
            StorageError: If S3 client initialization fails
        """
        try:
            self.s3_client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name=region,
            )
            self.endpoint_url = endpoint_url
            self.bucket_name = bucket_name
            self.region = region
            self.public_base_url = public_base_url

            logger.info(
                f"Initialized S3 storage adapter: bucket={bucket_name}, "
                f"endpoint={endpoint_url or 'AWS S3'}, region={region}"
            )
        except NoCredentialsError as e:
            raise StorageError(f"Invalid S3 credentials: {e}")
        except Exception as e:
            raise StorageError(f"Failed to initialize S3 client: {e}")

    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: str,
        upsert: bool = True,
    ) -> StoredObject:
        """Upload raw bytes to S3 under key.

        Args:
            key: Object key
            data: Object content
            content_type: MIME type
            upsert: Overwrite an existing object (default True)

        Returns:
            StoredObject: Metadata about the written object

        Raises:
            StorageError: If upload fails or key exists while upsert is False
        """
        if not upsert and await self.exists(key):
            logger.warning(f"Refusing to overwrite existing object: key={key}")
            raise StorageError(f"The resource already exists: {key}")

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=BytesIO(data),
                ContentType=content_type,
            )

            logger.info(
                f"Uploaded object: key={key}, size={len(data)}, "
                f"content_type={content_type}, upsert={upsert}"
            )

            return StoredObject(
                key=key,
                size_bytes=len(data),
                content_type=content_type,
            )

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(
                f"S3 upload failed: key={key}, "
                f"error={error_code}, message={e}"
            )
            raise StorageError(f"Failed to upload file: {error_code}")
        except Exception as e:
            logger.error(f"Unexpected error during upload: {e}")
            raise StorageError(f"Failed to upload file: {e}")

    def public_url(self, key: str) -> str:
        """Derive the public URL of an object.

        Resolution order:
        1. public_base_url + /key
        2. endpoint_url + /bucket/key (path-style, MinIO and friends)
        3. https://bucket.s3.region.amazonaws.com/key (AWS virtual-hosted)

        Example:
            >>> adapter.public_url('recordings/call 1.mp3')
            'http://localhost:9000/consultations/recordings/call%201.mp3'
        """
        quoted_key = quote(key, safe="/")

        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{quoted_key}"

        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{quoted_key}"

        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{quoted_key}"

    async def exists(self, key: str) -> bool:
        """Check if an object exists in S3.

        Uses HEAD request (faster than GET).
        """
        try:
            self.s3_client.head_object(
                Bucket=self.bucket_name,
                Key=key,
            )
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey"):
                return False
            logger.warning(
                f"Error checking object existence: key={key}, "
                f"error={error_code}"
            )
            raise StorageError(f"Failed to check object: {error_code}")

    async def verify_bucket_exists(self) -> bool:
        """Verify that the configured bucket exists.

        Used by the health check to report storage reachability.

        Raises:
            StorageError: If bucket check fails or bucket doesn't exist
        """
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "404":
                raise StorageError(
                    f"Bucket '{self.bucket_name}' does not exist. "
                    f"Create it first or update S3_BUCKET_NAME."
                )
            raise StorageError(f"Failed to verify bucket: {error_code}")
        except Exception as e:
            raise StorageError(f"Failed to verify bucket: {e}")
