"""正文提取抽象基类."""

from abc import ABC, abstractmethod
from typing import Literal

from pydantic import BaseModel

UNTITLED_ARTICLE = "Untitled Article"


class ExtractedArticle(BaseModel):
    """正文提取结果."""

    title: str
    content: str
    method: Literal["heuristic", "model"] = "heuristic"


class ArticleExtractor(ABC):
    """正文提取器抽象基类."""

    @abstractmethod
    async def extract(self, html: str, url: str) -> ExtractedArticle:
        """从页面 HTML 中提取标题和正文."""
        ...

    async def close(self) -> None:
        """释放资源."""
        return None
