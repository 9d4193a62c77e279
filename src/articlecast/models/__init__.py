"""数据模型."""

from articlecast.models.article import Article, ArticleStatus
from articlecast.models.database import get_session, init_db

__all__ = [
    "Article",
    "ArticleStatus",
    "get_session",
    "init_db",
]
