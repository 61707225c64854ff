from .recording_storage_port import RecordingStoragePort, StoredObject

__all__ = ["RecordingStoragePort", "StoredObject"]
