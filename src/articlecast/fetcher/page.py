"""原始页面抓取."""

import logging
from abc import ABC, abstractmethod
from http import HTTPStatus

import httpx
from pydantic import BaseModel

from articlecast.errors import FetchError

logger = logging.getLogger(__name__)

# 模拟浏览器的 User-Agent 以规避简单的 403
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class PageResponse(BaseModel):
    """页面抓取结果."""

    ok: bool
    status_code: int
    status_text: str
    body: str = ""


def status_text_for(status_code: int, reason: str = "") -> str:
    """获取状态描述，服务端没有返回 reason 时使用标准描述."""
    if reason:
        return reason
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return f"HTTP {status_code}"


class PageFetcher(ABC):
    """页面抓取器抽象基类."""

    @abstractmethod
    async def fetch(self, url: str) -> PageResponse:
        """GET 指定 URL."""
        ...


class HttpPageFetcher(PageFetcher):
    """使用 httpx 抓取页面."""

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    async def fetch(self, url: str) -> PageResponse:
        """
        抓取页面.

        非 2xx 响应原样返回（ok=False），由调用方决定如何处理；
        网络层错误抛出 FetchError。
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            detail = str(e) or type(e).__name__
            logger.warning(f"页面请求失败: {url} - {detail}")
            raise FetchError(f"Failed to fetch article: {detail}") from e

        return PageResponse(
            ok=response.is_success,
            status_code=response.status_code,
            status_text=status_text_for(response.status_code, response.reason_phrase),
            body=response.text,
        )
