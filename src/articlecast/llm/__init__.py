"""LLM 抽象层."""

from articlecast.llm.base import LLMConfig, LLMProvider, Message
from articlecast.llm.factory import create_llm_provider
from articlecast.llm.ollama import OllamaProvider
from articlecast.llm.openai import OpenAIProvider

__all__ = [
    "LLMConfig",
    "LLMProvider",
    "Message",
    "OllamaProvider",
    "OpenAIProvider",
    "create_llm_provider",
]
