"""音频存储模块."""

from articlecast.storage.blob import BlobStore, LocalBlobStore
from articlecast.storage.factory import create_blob_store

__all__ = [
    "BlobStore",
    "LocalBlobStore",
    "create_blob_store",
]
