"""ElevenLabs TTS Provider."""

from collections.abc import AsyncIterator

import httpx

from articlecast.errors import SynthesisError
from articlecast.speech.base import SpeechProvider, VoiceSettings


class ElevenLabsProvider(SpeechProvider):
    """ElevenLabs 文本转语音."""

    def __init__(
        self,
        api_key: str,
        voice: VoiceSettings | None = None,
        base_url: str = "https://api.elevenlabs.io",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.voice = voice or VoiceSettings()
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=300.0)

    async def close(self) -> None:
        """关闭客户端."""
        await self._client.aclose()

    async def stream(self, text: str) -> AsyncIterator[bytes]:
        """流式合成."""
        if not self.api_key:
            msg = "ElevenLabs API key not configured"
            raise SynthesisError(msg)

        url = f"{self.base_url}/v1/text-to-speech/{self.voice.voice_id}/stream"
        payload = {
            "text": text,
            "model_id": self.voice.model_id,
            "voice_settings": {
                "stability": self.voice.stability,
                "similarity_boost": self.voice.similarity_boost,
            },
        }

        async with self._client.stream(
            "POST",
            url,
            json=payload,
            params={"output_format": self.voice.output_format},
            headers={"xi-api-key": self.api_key, "Accept": "audio/mpeg"},
        ) as response:
            if not response.is_success:
                body = (await response.aread()).decode("utf-8", errors="replace")
                msg = (
                    f"ElevenLabs request failed: {response.status_code} "
                    f"{response.reason_phrase} {body[:200]}".strip()
                )
                raise SynthesisError(msg)

            async for chunk in response.aiter_bytes():
                if chunk:
                    yield chunk
