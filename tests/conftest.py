"""测试配置和 fixtures."""

import asyncio
from collections.abc import AsyncGenerator, AsyncIterator, Iterator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from articlecast.core import processor as processor_module
from articlecast.core.processor import ArticleProcessor
from articlecast.extraction import (
    ExtractionCoordinator,
    HeuristicExtractor,
    ModelExtractor,
)
from articlecast.fetcher.page import PageFetcher, PageResponse
from articlecast.llm.base import LLMConfig, LLMProvider, Message
from articlecast.models.article import Article
from articlecast.speech.base import SpeechProvider
from articlecast.speech.synthesizer import SpeechSynthesizer
from articlecast.storage.blob import BlobStore

LONG_TEXT = (
    "The city council approved the new transit plan on Tuesday after months "
    "of debate. The plan adds three bus lines, extends light rail service to "
    "the airport, and funds protected bike lanes along the river corridor."
)

ARTICLE_HTML = f"""<html>
<head>
  <title>Foo</title>
  <style>body {{ color: red; }}</style>
  <script>var tracking = "<article>fake</article>";</script>
</head>
<body>
  <nav>Home | News | Sports</nav>
  <article><h1>Foo</h1><p>{LONG_TEXT}</p></article>
  <footer>Copyright</footer>
</body>
</html>"""

THIN_HTML = (
    "<html><head><title></title></head>"
    "<body>Just a short teaser paragraph, nothing more.</body></html>"
)


class FakeFetcher(PageFetcher):
    """返回预设响应的页面抓取器."""

    def __init__(self) -> None:
        self.response = PageResponse(
            ok=True, status_code=200, status_text="OK", body=ARTICLE_HTML
        )
        self.error: Exception | None = None
        self.delay = 0.0
        self.calls: list[str] = []

    async def fetch(self, url: str) -> PageResponse:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response


class FakeLLMProvider(LLMProvider):
    """返回预设内容的 LLM."""

    def __init__(self) -> None:
        super().__init__(LLMConfig(model="fake-model"))
        self.response = '{"title": "Model Title", "content": "Model extracted body."}'
        self.error: Exception | None = None
        self.calls: list[tuple[list[Message], bool]] = []

    async def chat(self, messages: list[Message], json_mode: bool = False) -> str:
        self.calls.append((messages, json_mode))
        if self.error:
            raise self.error
        return self.response


class FakeSpeechProvider(SpeechProvider):
    """按顺序输出预设分块的 TTS."""

    def __init__(self) -> None:
        self.chunks: list[bytes] = [b"ID3", b"audio-", b"frames"]
        self.error: Exception | None = None
        self.texts: list[str] = []

    async def stream(self, text: str) -> AsyncIterator[bytes]:
        self.texts.append(text)
        for chunk in self.chunks:
            yield chunk
        if self.error:
            raise self.error


class MemoryBlobStore(BlobStore):
    """内存 Blob 存储."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self.error: Exception | None = None

    async def store(self, data: bytes, content_type: str = "audio/mpeg") -> str:
        if self.error:
            raise self.error
        ref = f"blob-{len(self.blobs) + 1}.mp3"
        self.blobs[ref] = data
        return ref

    def resolve_url(self, ref: str) -> str | None:
        if ref not in self.blobs:
            return None
        return f"https://cdn.test/audio/{ref}"

    async def read_path(self, ref: str) -> Path | None:
        return None


@pytest.fixture(autouse=True)
def clear_active_runs() -> Iterator[None]:
    """每个测试前后清空进程内的运行登记."""
    processor_module._active_runs.clear()
    yield
    processor_module._active_runs.clear()


@pytest_asyncio.fixture
async def session_factory(
    tmp_path: Path,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """创建测试用的数据库会话工厂."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """创建测试用的数据库会话."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def llm_provider() -> FakeLLMProvider:
    return FakeLLMProvider()


@pytest.fixture
def speech_provider() -> FakeSpeechProvider:
    return FakeSpeechProvider()


@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def processor(
    session_factory: async_sessionmaker[AsyncSession],
    fetcher: FakeFetcher,
    llm_provider: FakeLLMProvider,
    speech_provider: FakeSpeechProvider,
    blob_store: MemoryBlobStore,
) -> ArticleProcessor:
    """组装使用假依赖的处理流程."""
    return ArticleProcessor(
        session_factory=session_factory,
        fetcher=fetcher,
        coordinator=ExtractionCoordinator(
            heuristic=HeuristicExtractor(),
            fallback=ModelExtractor(llm_provider),
        ),
        synthesizer=SpeechSynthesizer(speech_provider),
        blob_store=blob_store,
        stage_timeout=5.0,
    )


@pytest.fixture
def scheduled() -> list[str]:
    """记录被调度的文章 ID."""
    return []


@pytest.fixture
def schedule(scheduled: list[str]):
    return scheduled.append


@pytest.fixture
def reload_article(session_factory: async_sessionmaker[AsyncSession]):
    """返回读取文章最新状态的函数."""

    async def _reload(article_id: str) -> Article | None:
        async with session_factory() as session:
            return await session.get(Article, article_id)

    return _reload


@pytest_asyncio.fixture
async def processing_article(async_session: AsyncSession) -> Article:
    """创建一篇 processing 状态的文章."""
    article = Article(url="https://example.com/news/transit-plan")
    async_session.add(article)
    await async_session.commit()
    return article
