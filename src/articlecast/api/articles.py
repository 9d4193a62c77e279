"""文章 API."""

from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from articlecast.config import get_settings
from articlecast.core.articles import (
    ArticleView,
    RunScheduler,
    get_article,
    list_articles,
    retry_article,
    submit_article,
)
from articlecast.errors import (
    ArticleNotFoundError,
    DuplicateURLError,
    InvalidURLError,
    RunInProgressError,
)
from articlecast.models.article import Article
from articlecast.models.database import get_session
from articlecast.scheduler import schedule_article_run
from articlecast.storage import BlobStore, create_blob_store

router = APIRouter(prefix="/api/articles", tags=["articles"])


class SubmitRequest(BaseModel):
    """提交文章请求."""

    url: str


class ArticleIdResponse(BaseModel):
    """返回文章 ID."""

    id: str


@lru_cache
def get_blob_store() -> BlobStore:
    """获取 Blob 存储（用于依赖注入）."""
    return create_blob_store(get_settings())


def get_run_scheduler() -> RunScheduler:
    """获取任务调度函数（用于依赖注入）."""
    return schedule_article_run


@router.get("", response_model=list[ArticleView])
async def list_all(
    session: AsyncSession = Depends(get_session),
    blob_store: BlobStore = Depends(get_blob_store),
) -> list[ArticleView]:
    """获取文章列表（最新在前）."""
    return await list_articles(session, blob_store)


@router.post("", status_code=201, response_model=ArticleIdResponse)
async def submit(
    request: SubmitRequest,
    session: AsyncSession = Depends(get_session),
    schedule: RunScheduler = Depends(get_run_scheduler),
) -> ArticleIdResponse:
    """提交文章，后台开始处理."""
    try:
        article_id = await submit_article(session, request.url, schedule)
    except DuplicateURLError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except InvalidURLError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return ArticleIdResponse(id=article_id)


@router.get("/{article_id}", response_model=ArticleView)
async def get_one(
    article_id: str,
    session: AsyncSession = Depends(get_session),
    blob_store: BlobStore = Depends(get_blob_store),
) -> ArticleView:
    """获取文章详情."""
    try:
        return await get_article(session, article_id, blob_store)
    except ArticleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("/{article_id}/retry", response_model=ArticleIdResponse)
async def retry(
    article_id: str,
    session: AsyncSession = Depends(get_session),
    schedule: RunScheduler = Depends(get_run_scheduler),
) -> ArticleIdResponse:
    """重置并重新处理文章."""
    try:
        await retry_article(session, article_id, schedule)
    except ArticleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except RunInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    return ArticleIdResponse(id=article_id)


@router.get("/{article_id}/audio")
async def download_audio(
    article_id: str,
    session: AsyncSession = Depends(get_session),
    blob_store: BlobStore = Depends(get_blob_store),
) -> FileResponse:
    """下载文章音频."""
    article = await session.get(Article, article_id)
    if not article:
        raise HTTPException(status_code=404, detail="Article not found")

    path = await blob_store.read_path(article.audio_ref) if article.audio_ref else None
    if path is None:
        raise HTTPException(status_code=404, detail="Audio not available")

    return FileResponse(
        path,
        media_type="audio/mpeg",
        filename=f"{article.title or 'article'}.mp3",
    )
