"""语音合成器."""

import logging

from articlecast.errors import SynthesisError
from articlecast.speech.base import SpeechProvider

logger = logging.getLogger(__name__)


class SpeechSynthesizer:
    """把正文转换为完整的音频数据."""

    def __init__(self, provider: SpeechProvider) -> None:
        self.provider = provider

    async def close(self) -> None:
        await self.provider.close()

    async def synthesize(self, text: str) -> bytes:
        """
        合成语音.

        完整消费 provider 的流式响应，按到达顺序拼接所有分块后返回，
        调用方不会拿到不完整的音频。
        """
        if not text or not text.strip():
            msg = "Cannot synthesize empty text"
            raise SynthesisError(msg)

        chunks: list[bytes] = []
        try:
            async for chunk in self.provider.stream(text):
                chunks.append(chunk)
        except SynthesisError:
            raise
        except Exception as e:
            raise SynthesisError(f"Speech synthesis failed: {e}") from e

        audio = b"".join(chunks)
        logger.info(f"语音合成完成: {len(chunks)} 块, {len(audio)} 字节")
        return audio
