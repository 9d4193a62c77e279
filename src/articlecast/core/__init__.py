"""核心业务逻辑."""

from articlecast.core.articles import (
    ArticleView,
    get_article,
    list_articles,
    retry_article,
    submit_article,
)
from articlecast.core.processor import ArticleProcessor, is_run_active

__all__ = [
    "ArticleProcessor",
    "ArticleView",
    "get_article",
    "is_run_active",
    "list_articles",
    "retry_article",
    "submit_article",
]
