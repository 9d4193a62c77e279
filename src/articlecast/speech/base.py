"""语音合成抽象基类."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from pydantic import BaseModel


class VoiceSettings(BaseModel):
    """固定的合成参数."""

    voice_id: str = "s3TPKV1kjDlVtZbl4Ksh"
    model_id: str = "eleven_multilingual_v2"
    stability: float = 0.5
    similarity_boost: float = 0.5
    output_format: str = "mp3_44100_128"


class SpeechProvider(ABC):
    """TTS 服务提供者抽象基类."""

    @abstractmethod
    def stream(self, text: str) -> AsyncIterator[bytes]:
        """流式合成，按到达顺序逐块返回音频数据."""
        ...

    async def close(self) -> None:
        """释放底层连接."""
        return None
