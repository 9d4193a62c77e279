"""通用工具."""
