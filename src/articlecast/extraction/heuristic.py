"""基于页面结构的启发式正文提取器."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import ClassVar

from bs4 import BeautifulSoup, Tag

from articlecast.extraction.base import (
    UNTITLED_ARTICLE,
    ArticleExtractor,
    ExtractedArticle,
)
from articlecast.utils.html_parser import (
    collapse_whitespace,
    html_to_text,
    strip_scripts_and_styles,
)

logger = logging.getLogger(__name__)


class HeuristicExtractor(ArticleExtractor):
    """按常见选择器匹配正文容器，不调用任何外部服务，永不失败."""

    # 按优先级排列，命中第一个即停止；class 按子串匹配
    CONTENT_SELECTORS: ClassVar[list[str]] = [
        "article",
        '[role="main"]',
        '[class*="post-content"]',
        '[class*="entry-content"]',
        '[class*="article-content"]',
        '[class*="content"]',
        "main",
    ]

    def __init__(self, executor: ThreadPoolExecutor | None = None) -> None:
        self._executor = executor

    async def extract(self, html: str, url: str) -> ExtractedArticle:
        """
        提取标题和正文.

        BeautifulSoup 解析是同步的，这里用线程池包装成异步。
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.extract_sync, html)

    def extract_sync(self, html: str) -> ExtractedArticle:
        """同步提取."""
        cleaned = strip_scripts_and_styles(html or "")
        soup = BeautifulSoup(cleaned, "lxml")

        title = self._extract_title(soup)
        content = self._extract_content(soup, cleaned)

        return ExtractedArticle(title=title, content=content, method="heuristic")

    def _extract_title(self, soup: BeautifulSoup) -> str:
        """<title> 优先，其次 og:title，都没有时使用默认标题."""
        if soup.title is not None:
            title = collapse_whitespace(soup.title.get_text())
            if title:
                return title

        meta = soup.find("meta", attrs={"property": "og:title"})
        if isinstance(meta, Tag):
            og_title = meta.get("content")
            if isinstance(og_title, list):
                og_title = " ".join(og_title)
            if og_title and og_title.strip():
                return collapse_whitespace(og_title)

        return UNTITLED_ARTICLE

    def _extract_content(self, soup: BeautifulSoup, cleaned: str) -> str:
        """按选择器顺序查找正文容器."""
        for selector in self.CONTENT_SELECTORS:
            element = soup.select_one(selector)
            if element is not None:
                logger.debug(f"正文选择器命中: {selector}")
                return collapse_whitespace(element.get_text(" "))

        if soup.body is not None:
            return collapse_whitespace(soup.body.get_text(" "))

        return html_to_text(cleaned)
