"""HTML 解析工具."""

import re

_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_scripts_and_styles(html: str) -> str:
    """移除 script 和 style 块."""
    if not html:
        return ""
    html = _SCRIPT_RE.sub("", html)
    return _STYLE_RE.sub("", html)


def strip_tags(html: str) -> str:
    """把所有标签替换为空格."""
    return _TAG_RE.sub(" ", html)


def collapse_whitespace(text: str) -> str:
    """合并连续空白为单个空格并去除首尾空白."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def html_to_text(html: str) -> str:
    """
    将 HTML 转换为单行纯文本.

    Args:
        html: HTML 内容

    Returns:
        去除脚本、样式和标签后的纯文本
    """
    if not html:
        return ""

    return collapse_whitespace(strip_tags(strip_scripts_and_styles(html)))


def truncate(text: str, limit: int) -> str:
    """截取前 limit 个字符."""
    return text[:limit]
