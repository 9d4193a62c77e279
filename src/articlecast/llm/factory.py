"""LLM Provider 工厂."""

from articlecast.config import Settings
from articlecast.llm.base import LLMConfig, LLMProvider
from articlecast.llm.ollama import OllamaProvider
from articlecast.llm.openai import OpenAIProvider


def create_llm_provider(settings: Settings) -> LLMProvider:
    """根据配置创建 LLM Provider."""
    if settings.llm_provider == "ollama":
        config = LLMConfig(model=settings.ollama_model)
        return OllamaProvider(config=config, host=settings.ollama_host)

    # 默认使用 OpenAI
    config = LLMConfig(model=settings.openai_model)
    return OpenAIProvider(
        config=config,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )
