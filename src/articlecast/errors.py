"""错误类型定义."""


class ArticleCastError(Exception):
    """所有业务错误的基类."""


# 提交/重试阶段的同步错误，直接返回给调用方


class DuplicateURLError(ArticleCastError):
    """相同 URL 的文章已存在."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__("Article already exists")


class InvalidURLError(ArticleCastError):
    """URL 格式不合法."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid article URL: {url!r}")


class ArticleNotFoundError(ArticleCastError):
    """文章记录不存在."""

    def __init__(self, article_id: str) -> None:
        self.article_id = article_id
        super().__init__("Article not found")


class RunInProgressError(ArticleCastError):
    """该文章已有处理任务在运行."""

    def __init__(self, article_id: str) -> None:
        self.article_id = article_id
        super().__init__("Article is already being processed")


# 处理流程中的终止性错误，会被记录到文章的 error_message


class FetchError(ArticleCastError):
    """页面抓取失败."""


class ExtractionError(ArticleCastError):
    """正文提取失败（仅模型提取会失败）."""


class SynthesisError(ArticleCastError):
    """语音合成失败."""


class StorageError(ArticleCastError):
    """音频存储失败."""


class StageTimeoutError(ArticleCastError):
    """某个处理阶段超时."""

    def __init__(self, stage: str, timeout: float) -> None:
        self.stage = stage
        self.timeout = timeout
        super().__init__(f"{stage} timed out after {timeout:g}s")
