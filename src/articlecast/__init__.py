"""ArticleCast - 文章转语音服务."""

__version__ = "0.1.0"
