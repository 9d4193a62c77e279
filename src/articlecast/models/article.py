"""Article 文章模型."""

import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class ArticleStatus:
    """文章处理状态枚举."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


def _new_article_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    """当前 UTC 时间（带时区）."""
    return datetime.now(UTC)


class Article(SQLModel, table=True):
    """待转换为语音的文章."""

    __tablename__ = "articles"  # type: ignore[assignment]

    id: str = Field(
        default_factory=_new_article_id, primary_key=True, description="文章 ID"
    )
    url: str = Field(unique=True, index=True, description="原文链接")
    title: str | None = Field(default=None, description="提取的标题")
    content: str | None = Field(default=None, description="提取的纯文本正文")
    audio_ref: str | None = Field(default=None, description="音频存储引用")
    status: str = Field(
        default=ArticleStatus.PROCESSING,
        description="处理状态: processing|completed|error",
    )
    error_message: str | None = Field(default=None, description="处理错误信息")
    created_at: datetime = Field(
        default_factory=utc_now, index=True, description="提交时间"
    )
    updated_at: datetime = Field(
        default_factory=utc_now, description="最后更新时间"
    )
