"""音频 Blob 存储."""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import ClassVar

from articlecast.errors import StorageError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Blob 存储抽象基类."""

    @abstractmethod
    async def store(self, data: bytes, content_type: str = "audio/mpeg") -> str:
        """保存数据，返回存储引用."""
        ...

    @abstractmethod
    def resolve_url(self, ref: str) -> str | None:
        """获取可播放的 URL."""
        ...

    @abstractmethod
    async def read_path(self, ref: str) -> Path | None:
        """获取本地文件路径（用于下载），不存在时返回 None."""
        ...

    async def close(self) -> None:
        """释放资源."""
        return None


class LocalBlobStore(BlobStore):
    """保存到本地目录，通过静态文件路由对外提供."""

    EXTENSIONS: ClassVar[dict[str, str]] = {
        "audio/mpeg": ".mp3",
        "audio/wav": ".wav",
        "audio/ogg": ".ogg",
    }

    def __init__(
        self,
        root: str | Path,
        public_base_url: str = "/media/audio",
    ) -> None:
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")
        self._executor = ThreadPoolExecutor(max_workers=2)

    async def close(self) -> None:
        """关闭写入线程池."""
        self._executor.shutdown(wait=False)

    async def store(self, data: bytes, content_type: str = "audio/mpeg") -> str:
        """写入文件（线程池中执行）."""
        ref = f"{uuid.uuid4().hex}{self.EXTENSIONS.get(content_type, '.bin')}"
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(self._executor, self._write_sync, ref, data)
        except OSError as e:
            raise StorageError(f"Failed to store audio: {e}") from e

        logger.info(f"音频已保存: {ref} ({len(data)} 字节)")
        return ref

    def _write_sync(self, ref: str, data: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path_for(ref)
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(data)
        tmp_path.replace(path)

    def resolve_url(self, ref: str) -> str | None:
        """拼接公开 URL."""
        if not self._is_valid_ref(ref):
            return None
        return f"{self.public_base_url}/{ref}"

    async def read_path(self, ref: str) -> Path | None:
        """获取文件路径."""
        if not self._is_valid_ref(ref):
            return None
        path = self._path_for(ref)
        loop = asyncio.get_running_loop()
        exists = await loop.run_in_executor(self._executor, path.is_file)
        return path if exists else None

    def _path_for(self, ref: str) -> Path:
        return self.root / ref

    @staticmethod
    def _is_valid_ref(ref: str) -> bool:
        # 引用只能是单个文件名
        return bool(ref) and "/" not in ref and "\\" not in ref and ref not in {".", ".."}
