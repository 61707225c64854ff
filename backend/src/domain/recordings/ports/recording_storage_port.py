"""Recording Storage Port - Domain interface for the blob store holding audio.

Adapters implement this interface to provide S3, MinIO, or other storage
backends. Keys are caller-chosen (recordings/<filename>), so writes to an
existing key overwrite the previous object when upsert is allowed.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class StoredObject:
    """Metadata for an object written to storage.

    Attributes:
        key: Object key inside the bucket (e.g. 'recordings/call.mp3')
        size_bytes: Object size in bytes
        content_type: MIME type recorded on the object
    """
    key: str
    size_bytes: int
    content_type: str


class RecordingStoragePort(ABC):
    """Port interface for recording storage operations.

    Example Usage:
        storage = S3StorageAdapter(...)

        stored = await storage.upload(
            key='recordings/call.mp3',
            data=audio_bytes,
            content_type='audio/mpeg',
        )
        url = storage.public_url(stored.key)
    """

    @abstractmethod
    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: str,
        upsert: bool = True,
    ) -> StoredObject:
        """Write raw bytes under key.

        Args:
            key: Object key
            data: Raw object content
            content_type: MIME type stored with the object
            upsert: Overwrite an existing object at key (default True)

        Returns:
            StoredObject: Metadata about the written object

        Raises:
            StorageError: If the write fails, or the key exists and upsert is False
        """
        pass

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Derive the publicly reachable URL for key.

        No request is made; the object is not checked for existence.
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if an object exists (HEAD request)."""
        pass
