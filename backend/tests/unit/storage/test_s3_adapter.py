"""Unit tests for S3 Storage Adapter using moto

Covers overwrite-or-reject uploads, existence checks, public URL derivation
and bucket verification against a mocked bucket.
"""

import pytest
from moto import mock_aws

from domain.recordings.ports import StoredObject
from infrastructure.storage.s3_storage_adapter import (
    S3StorageAdapter,
    StorageError,
)

TEST_BUCKET = "consultations"
TEST_REGION = "us-east-1"
TEST_ACCESS_KEY = "test-access-key"
TEST_SECRET_KEY = "test-secret-key"


def make_adapter(**overrides) -> S3StorageAdapter:
    kwargs = dict(
        endpoint_url=None,
        access_key=TEST_ACCESS_KEY,
        secret_key=TEST_SECRET_KEY,
        bucket_name=TEST_BUCKET,
        region=TEST_REGION,
    )
    kwargs.update(overrides)
    return S3StorageAdapter(**kwargs)


class TestUpload:
    """Test object upload"""

    @pytest.mark.asyncio
    async def test_upload_success(self, storage, s3_client):
        stored = await storage.upload(
            key="recordings/call.mp3",
            data=b"ID3 fake mp3 bytes",
            content_type="audio/mpeg",
        )

        assert stored == StoredObject(
            key="recordings/call.mp3",
            size_bytes=len(b"ID3 fake mp3 bytes"),
            content_type="audio/mpeg",
        )

        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key="recordings/call.mp3")
        assert obj["Body"].read() == b"ID3 fake mp3 bytes"
        assert obj["ContentType"] == "audio/mpeg"

    @pytest.mark.asyncio
    async def test_upsert_overwrites(self, storage, s3_client):
        await storage.upload("recordings/call.mp3", b"first", "audio/mpeg")
        await storage.upload("recordings/call.mp3", b"second", "audio/mpeg", upsert=True)

        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key="recordings/call.mp3")
        assert obj["Body"].read() == b"second"

    @pytest.mark.asyncio
    async def test_no_upsert_rejects_existing_key(self, storage, s3_client):
        await storage.upload("recordings/call.mp3", b"first", "audio/mpeg")

        with pytest.raises(StorageError, match="already exists"):
            await storage.upload("recordings/call.mp3", b"second", "audio/mpeg", upsert=False)

        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key="recordings/call.mp3")
        assert obj["Body"].read() == b"first"

    @pytest.mark.asyncio
    async def test_no_upsert_new_key_succeeds(self, storage):
        stored = await storage.upload("recordings/new.mp3", b"data", "audio/mpeg", upsert=False)
        assert stored.key == "recordings/new.mp3"

    @pytest.mark.asyncio
    async def test_upload_to_missing_bucket_raises(self, s3_client):
        adapter = make_adapter(bucket_name="does-not-exist")

        with pytest.raises(StorageError, match="Failed to upload file"):
            await adapter.upload("recordings/call.mp3", b"data", "audio/mpeg")


class TestExists:
    """Test object existence checks"""

    @pytest.mark.asyncio
    async def test_exists_true(self, storage):
        await storage.upload("recordings/call.mp3", b"data", "audio/mpeg")
        assert await storage.exists("recordings/call.mp3") is True

    @pytest.mark.asyncio
    async def test_exists_false(self, storage):
        assert await storage.exists("recordings/missing.mp3") is False


class TestPublicUrl:
    """Test public URL derivation (no network access needed)"""

    def test_aws_virtual_hosted_url(self):
        with mock_aws():
            adapter = make_adapter()
            assert adapter.public_url("recordings/call.mp3") == (
                "https://consultations.s3.us-east-1.amazonaws.com/recordings/call.mp3"
            )

    def test_path_style_url_for_custom_endpoint(self):
        with mock_aws():
            adapter = make_adapter(endpoint_url="http://localhost:9000/")
            assert adapter.public_url("recordings/call.mp3") == (
                "http://localhost:9000/consultations/recordings/call.mp3"
            )

    def test_public_base_url_wins(self):
        with mock_aws():
            adapter = make_adapter(
                endpoint_url="http://minio:9000",
                public_base_url="https://cdn.example.com/audio/",
            )
            assert adapter.public_url("recordings/call.mp3") == (
                "https://cdn.example.com/audio/recordings/call.mp3"
            )

    def test_key_is_percent_encoded_once(self):
        with mock_aws():
            adapter = make_adapter(endpoint_url="http://localhost:9000")
            assert adapter.public_url("recordings/call 1.mp3") == (
                "http://localhost:9000/consultations/recordings/call%201.mp3"
            )


class TestVerifyBucket:

    @pytest.mark.asyncio
    async def test_existing_bucket(self, storage):
        assert await storage.verify_bucket_exists() is True

    @pytest.mark.asyncio
    async def test_missing_bucket_raises(self, s3_client):
        adapter = make_adapter(bucket_name="does-not-exist")

        with pytest.raises(StorageError):
            await adapter.verify_bucket_exists()
