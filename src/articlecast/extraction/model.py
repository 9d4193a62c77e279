"""基于 LLM 的正文提取器."""

import json
import logging

from articlecast.errors import ExtractionError
from articlecast.extraction.base import (
    UNTITLED_ARTICLE,
    ArticleExtractor,
    ExtractedArticle,
)
from articlecast.llm.base import LLMProvider, Message
from articlecast.utils.html_parser import html_to_text, truncate

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert at extracting article content. Extract the main title "
    "and the core article text from the provided HTML content. Return a JSON "
    "object with 'title' and 'content' fields. The content should be the main "
    "article text, cleaned of navigation, ads, and other non-article content."
)

USER_PROMPT_TEMPLATE = (
    "Extract the title and main content from this webpage content from URL: "
    "{url}\n\nContent: {content}"
)

NO_CONTENT_PLACEHOLDER = "No content extracted"


class ModelExtractor(ArticleExtractor):
    """启发式提取不达标时使用的模型提取器."""

    # 限制输入长度，避免超过 token 限制
    MAX_INPUT_CHARS = 8000

    def __init__(self, provider: LLMProvider) -> None:
        self.provider = provider

    async def close(self) -> None:
        await self.provider.close()

    async def extract(self, html: str, url: str) -> ExtractedArticle:
        """调用 LLM 提取标题和正文，不做本地重试."""
        messages = self._build_messages(html, url)

        try:
            response = await self.provider.chat(messages, json_mode=True)
        except Exception as e:
            raise ExtractionError(f"Model extraction failed: {e}") from e

        return self._parse_response(response)

    def _build_messages(self, html: str, url: str) -> list[Message]:
        """构建对话消息."""
        text = truncate(html_to_text(html), self.MAX_INPUT_CHARS)

        return [
            Message(role="system", content=SYSTEM_PROMPT),
            Message(
                role="user",
                content=USER_PROMPT_TEMPLATE.format(url=url, content=text),
            ),
        ]

    def _parse_response(self, response: str) -> ExtractedArticle:
        """解析 LLM 响应，缺失字段使用占位值."""
        response = response.strip()

        # 移除可能的 markdown 代码块标记
        if response.startswith("```json"):
            response = response[7:]
        if response.startswith("```"):
            response = response[3:]
        if response.endswith("```"):
            response = response[:-3]

        response = response.strip() or "{}"

        try:
            data = json.loads(response)
        except json.JSONDecodeError as e:
            logger.warning(f"模型返回的不是合法 JSON: {response[:200]}")
            raise ExtractionError(f"Model returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ExtractionError("Model returned a non-object JSON response")

        title = data.get("title")
        content = data.get("content")

        return ExtractedArticle(
            title=(str(title).strip() if title else "") or UNTITLED_ARTICLE,
            content=(str(content).strip() if content else "") or NO_CONTENT_PLACEHOLDER,
            method="model",
        )
