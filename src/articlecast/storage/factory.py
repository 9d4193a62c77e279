"""Blob 存储工厂."""

from articlecast.config import Settings
from articlecast.storage.blob import BlobStore, LocalBlobStore


def create_blob_store(settings: Settings) -> BlobStore:
    """根据配置创建 Blob 存储."""
    return LocalBlobStore(
        root=settings.audio_dir,
        public_base_url=settings.audio_public_url,
    )
