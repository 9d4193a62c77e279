"""启发式提取结果的质量检测."""

from articlecast.extraction.base import ExtractedArticle


class QualityGate:
    """判断启发式提取结果是否可用，不可用时需要回退到模型提取."""

    # 最小正文长度阈值
    MIN_CONTENT_LENGTH = 200

    def is_sufficient(self, result: ExtractedArticle) -> bool:
        """
        判断提取结果是否足够好.

        Args:
            result: 启发式提取结果

        Returns:
            True 表示可以直接使用
        """
        if not result.title or not result.title.strip():
            return False

        return len(result.content) >= self.MIN_CONTENT_LENGTH
