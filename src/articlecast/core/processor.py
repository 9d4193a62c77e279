"""文章处理流程 - 抓取 + 提取 + 语音合成 + 存储."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import select

from articlecast.errors import ArticleNotFoundError, FetchError, StageTimeoutError
from articlecast.extraction.coordinator import ExtractionCoordinator
from articlecast.fetcher.page import PageFetcher
from articlecast.models.article import Article, ArticleStatus, utc_now
from articlecast.speech.synthesizer import SpeechSynthesizer
from articlecast.storage.blob import BlobStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNKNOWN_ERROR = "Unknown error"
INTERRUPTED_ERROR = "Processing interrupted by restart"

# 已调度或正在运行的文章 ID（进程内）
_active_runs: set[str] = set()


def is_run_active(article_id: str) -> bool:
    """该文章是否有处理任务已调度或正在运行."""
    return article_id in _active_runs


def claim_run(article_id: str) -> bool:
    """登记一次处理任务，已有任务时返回 False."""
    if article_id in _active_runs:
        return False
    _active_runs.add(article_id)
    return True


def release_run(article_id: str) -> None:
    """注销处理任务."""
    _active_runs.discard(article_id)


class ArticleProcessor:
    """单篇文章的处理流程.

    各阶段严格串行：抓取 -> 提取 -> 写入标题正文 -> 合成 -> 存储音频 -> 完成。
    任何阶段抛出的异常都在顶层捕获，并写入 error 状态，不会继续向外抛出。
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        fetcher: PageFetcher,
        coordinator: ExtractionCoordinator,
        synthesizer: SpeechSynthesizer,
        blob_store: BlobStore,
        stage_timeout: float | None = 300.0,
    ) -> None:
        self._session_factory = session_factory
        self.fetcher = fetcher
        self.coordinator = coordinator
        self.synthesizer = synthesizer
        self.blob_store = blob_store
        self.stage_timeout = stage_timeout

    async def close(self) -> None:
        """关闭各外部服务的连接."""
        await self.coordinator.close()
        await self.synthesizer.close()
        await self.blob_store.close()

    async def run(self, article_id: str) -> None:
        """处理单篇文章."""
        try:
            await self._process(article_id)
        except Exception as e:
            logger.exception(f"处理文章失败: {article_id}")
            await self._mark_error(article_id, str(e) or UNKNOWN_ERROR)
        finally:
            release_run(article_id)

    async def _process(self, article_id: str) -> None:
        article = await self._load(article_id)
        url = article.url
        logger.info(f"开始处理文章: {url}")

        response = await self._stage("Page fetch", self.fetcher.fetch(url))
        if not response.ok:
            msg = f"Failed to fetch article: {response.status_text}"
            raise FetchError(msg)

        extracted = await self._stage(
            "Extraction", self.coordinator.extract(response.body, url)
        )
        await self._update(article_id, title=extracted.title, content=extracted.content)
        logger.info(f"提取完成 ({extracted.method}): {extracted.title}")

        audio = await self._stage(
            "Speech synthesis", self.synthesizer.synthesize(extracted.content)
        )
        audio_ref = await self._stage("Audio storage", self.blob_store.store(audio))

        await self._update(
            article_id, status=ArticleStatus.COMPLETED, audio_ref=audio_ref
        )
        logger.info(f"处理完成: {extracted.title}")

    async def _stage(self, name: str, awaitable: Awaitable[T]) -> T:
        """执行一个外部调用阶段，超时时抛出 StageTimeoutError."""
        if self.stage_timeout is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, timeout=self.stage_timeout)
        except TimeoutError as e:
            raise StageTimeoutError(name, self.stage_timeout) from e

    async def _load(self, article_id: str) -> Article:
        async with self._session_factory() as session:
            article = await session.get(Article, article_id)
            if article is None:
                raise ArticleNotFoundError(article_id)
            return article

    async def _update(self, article_id: str, **fields: Any) -> None:
        """单条记录的一次原子更新."""
        async with self._session_factory() as session:
            article = await session.get(Article, article_id)
            if article is None:
                raise ArticleNotFoundError(article_id)
            for key, value in fields.items():
                setattr(article, key, value)
            article.updated_at = utc_now()
            await session.commit()

    async def _mark_error(self, article_id: str, message: str) -> None:
        """写入 error 状态."""
        try:
            async with self._session_factory() as session:
                article = await session.get(Article, article_id)
                if article is None:
                    logger.warning(f"文章不存在，无法记录错误: {article_id}")
                    return
                article.status = ArticleStatus.ERROR
                article.error_message = message
                article.audio_ref = None
                article.updated_at = utc_now()
                await session.commit()
        except Exception:
            logger.exception(f"记录错误状态失败: {article_id}")


async def reset_interrupted_runs(session: AsyncSession) -> int:
    """把上次进程退出时仍处于 processing 的文章标记为 error，便于用户重试."""
    stmt = select(Article).where(Article.status == ArticleStatus.PROCESSING)
    result = await session.execute(stmt)
    articles = result.scalars().all()

    count = 0
    for article in articles:
        if is_run_active(article.id):
            continue
        article.status = ArticleStatus.ERROR
        article.error_message = INTERRUPTED_ERROR
        article.audio_ref = None
        article.updated_at = utc_now()
        count += 1

    await session.commit()
    if count:
        logger.info(f"已重置 {count} 篇中断的文章")
    return count
