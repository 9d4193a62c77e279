"""文章提交、重试与查询."""

import logging
from collections.abc import Callable
from datetime import datetime
from urllib.parse import urlsplit

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from articlecast.core.processor import claim_run, release_run
from articlecast.errors import (
    ArticleNotFoundError,
    DuplicateURLError,
    InvalidURLError,
    RunInProgressError,
)
from articlecast.models.article import Article, ArticleStatus, utc_now
from articlecast.storage.blob import BlobStore

logger = logging.getLogger(__name__)

# 调度一次处理任务，立即返回
RunScheduler = Callable[[str], None]


class ArticleView(BaseModel):
    """返回给客户端的文章."""

    id: str
    url: str
    title: str | None = None
    content: str | None = None
    status: str
    error_message: str | None = None
    audio_url: str | None = None
    created_at: datetime
    updated_at: datetime


def normalize_url(url: str) -> str:
    """去除首尾空白并校验 http(s) 链接."""
    url = (url or "").strip()
    parts = urlsplit(url)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise InvalidURLError(url)
    return url


def to_view(article: Article, blob_store: BlobStore) -> ArticleView:
    """转换为客户端视图，解析音频 URL."""
    audio_url = blob_store.resolve_url(article.audio_ref) if article.audio_ref else None
    return ArticleView(
        id=article.id,
        url=article.url,
        title=article.title,
        content=article.content,
        status=article.status,
        error_message=(
            article.error_message if article.status == ArticleStatus.ERROR else None
        ),
        audio_url=audio_url,
        created_at=article.created_at,
        updated_at=article.updated_at,
    )


async def submit_article(
    session: AsyncSession, url: str, schedule: RunScheduler
) -> str:
    """提交新文章并调度处理，不等待处理完成."""
    url = normalize_url(url)

    stmt = select(Article).where(Article.url == url)
    result = await session.execute(stmt)
    if result.scalars().first() is not None:
        raise DuplicateURLError(url)

    article = Article(url=url, status=ArticleStatus.PROCESSING)
    session.add(article)
    try:
        await session.commit()
    except IntegrityError as e:
        # 并发提交同一 URL
        await session.rollback()
        raise DuplicateURLError(url) from e

    article_id = article.id
    claim_run(article_id)
    _schedule(schedule, article_id)

    logger.info(f"已提交文章: {url} ({article_id})")
    return article_id


async def retry_article(
    session: AsyncSession, article_id: str, schedule: RunScheduler
) -> str:
    """重置文章内容并重新调度处理."""
    article = await session.get(Article, article_id)
    if article is None:
        raise ArticleNotFoundError(article_id)

    if not claim_run(article_id):
        raise RunInProgressError(article_id)

    try:
        article.status = ArticleStatus.PROCESSING
        article.title = None
        article.content = None
        article.audio_ref = None
        article.error_message = None
        article.updated_at = utc_now()
        await session.commit()
    except Exception:
        release_run(article_id)
        raise

    _schedule(schedule, article_id)

    logger.info(f"已重新调度文章: {article.url} ({article_id})")
    return article_id


def _schedule(schedule: RunScheduler, article_id: str) -> None:
    try:
        schedule(article_id)
    except Exception:
        release_run(article_id)
        raise


async def list_articles(
    session: AsyncSession, blob_store: BlobStore
) -> list[ArticleView]:
    """获取文章列表（最新在前）."""
    stmt = select(Article).order_by(
        Article.created_at.desc(),  # type: ignore[attr-defined]
        Article.id.desc(),  # type: ignore[attr-defined]
    )
    result = await session.execute(stmt)
    return [to_view(article, blob_store) for article in result.scalars().all()]


async def get_article(
    session: AsyncSession, article_id: str, blob_store: BlobStore
) -> ArticleView:
    """获取单篇文章."""
    article = await session.get(Article, article_id)
    if article is None:
        raise ArticleNotFoundError(article_id)
    return to_view(article, blob_store)
