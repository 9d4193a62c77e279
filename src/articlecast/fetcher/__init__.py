"""页面抓取模块."""

from articlecast.fetcher.page import HttpPageFetcher, PageFetcher, PageResponse

__all__ = [
    "HttpPageFetcher",
    "PageFetcher",
    "PageResponse",
]
