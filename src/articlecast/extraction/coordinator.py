"""提取协调器：启发式优先，质量不达标时回退到模型提取."""

import logging

from articlecast.extraction.base import ArticleExtractor, ExtractedArticle
from articlecast.extraction.gate import QualityGate

logger = logging.getLogger(__name__)


class ExtractionCoordinator:
    """组合两级提取器."""

    def __init__(
        self,
        heuristic: ArticleExtractor,
        fallback: ArticleExtractor,
        gate: QualityGate | None = None,
    ) -> None:
        self.heuristic = heuristic
        self.fallback = fallback
        self.gate = gate or QualityGate()

    async def close(self) -> None:
        """关闭两级提取器."""
        await self.heuristic.close()
        await self.fallback.close()

    async def extract(self, html: str, url: str) -> ExtractedArticle:
        """提取标题和正文."""
        result = await self.heuristic.extract(html, url)

        if self.gate.is_sufficient(result):
            logger.info(f"启发式提取成功: {url} ({len(result.content)} 字)")
            return result

        logger.info(
            f"启发式提取质量不足 (title={result.title!r}, "
            f"{len(result.content)} 字)，改用模型提取: {url}"
        )
        return await self.fallback.extract(html, url)
