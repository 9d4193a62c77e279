"""应用配置管理."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置（环境变量）."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM 配置（正文提取兜底）
    llm_provider: Literal["openai", "ollama"] = "openai"

    # OpenAI 配置
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"

    # Ollama 配置
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    # ElevenLabs 语音合成配置
    elevenlabs_api_key: str = ""
    elevenlabs_base_url: str = "https://api.elevenlabs.io"
    elevenlabs_voice_id: str = "s3TPKV1kjDlVtZbl4Ksh"
    elevenlabs_model_id: str = "eleven_multilingual_v2"
    elevenlabs_stability: float = 0.5
    elevenlabs_similarity_boost: float = 0.5
    elevenlabs_output_format: str = "mp3_44100_128"

    # 音频存储
    audio_dir: str = "./data/audio"
    audio_public_url: str = "/media/audio"

    # 应用配置
    database_url: str = "sqlite+aiosqlite:///./articlecast.db"
    log_level: str = "INFO"

    # 超时配置（秒）
    fetch_timeout_seconds: int = 30
    stage_timeout_seconds: int = 300


@lru_cache
def get_settings() -> Settings:
    """获取应用配置（带缓存）."""
    return Settings()
