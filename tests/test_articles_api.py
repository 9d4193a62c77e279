"""测试文章 API 端点."""

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from articlecast.api.articles import get_blob_store, get_run_scheduler
from articlecast.core.processor import claim_run
from articlecast.main import app
from articlecast.models.article import Article, ArticleStatus
from articlecast.models.database import get_session
from articlecast.storage import LocalBlobStore


@pytest.fixture
def local_store(tmp_path: Path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "audio", public_base_url="/media/audio")


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    local_store: LocalBlobStore,
    scheduled: list[str],
):
    """创建测试客户端."""

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_blob_store] = lambda: local_store
    app.dependency_overrides[get_run_scheduler] = lambda: scheduled.append

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestSubmitEndpoint:
    """测试 POST /api/articles."""

    async def test_submit_returns_id(
        self, client: AsyncClient, scheduled: list[str]
    ) -> None:
        response = await client.post(
            "/api/articles", json={"url": "https://example.com/a"}
        )
        assert response.status_code == 201
        article_id = response.json()["id"]
        assert scheduled == [article_id]

    async def test_duplicate_returns_409(self, client: AsyncClient) -> None:
        """重复 URL 返回 409."""
        await client.post("/api/articles", json={"url": "https://example.com/a"})
        response = await client.post(
            "/api/articles", json={"url": "https://example.com/a"}
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "Article already exists"

    async def test_invalid_url_returns_422(self, client: AsyncClient) -> None:
        response = await client.post("/api/articles", json={"url": "not a url"})
        assert response.status_code == 422


class TestRetryEndpoint:
    """测试 POST /api/articles/{id}/retry."""

    async def test_retry_error_article(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        scheduled: list[str],
    ) -> None:
        article = Article(
            url="https://example.com/a",
            status=ArticleStatus.ERROR,
            error_message="Failed to fetch article: Not Found",
        )
        async_session.add(article)
        await async_session.commit()

        response = await client.post(f"/api/articles/{article.id}/retry")

        assert response.status_code == 200
        assert response.json() == {"id": article.id}
        assert scheduled == [article.id]

        detail = (await client.get(f"/api/articles/{article.id}")).json()
        assert detail["status"] == "processing"
        assert detail["error_message"] is None

    async def test_retry_missing_returns_404(self, client: AsyncClient) -> None:
        response = await client.post("/api/articles/missing/retry")
        assert response.status_code == 404

    async def test_retry_in_flight_returns_409(
        self, client: AsyncClient, processing_article: Article
    ) -> None:
        """已有任务在运行时返回 409."""
        claim_run(processing_article.id)
        response = await client.post(f"/api/articles/{processing_article.id}/retry")
        assert response.status_code == 409


class TestListAndAudioEndpoints:
    """测试列表与音频下载."""

    async def test_list_includes_audio_url(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        local_store: LocalBlobStore,
    ) -> None:
        """completed 文章返回可播放 URL."""
        ref = await local_store.store(b"mp3-bytes")
        article = Article(
            url="https://example.com/a",
            title="Transit-Plan",
            content="Body text",
            audio_ref=ref,
            status=ArticleStatus.COMPLETED,
        )
        async_session.add(article)
        await async_session.commit()

        response = await client.get("/api/articles")

        assert response.status_code == 200
        items = response.json()
        assert len(items) == 1
        assert items[0]["status"] == "completed"
        assert items[0]["audio_url"] == f"/media/audio/{ref}"

        audio = await client.get(f"/api/articles/{article.id}/audio")
        assert audio.status_code == 200
        assert audio.content == b"mp3-bytes"
        assert audio.headers["content-type"] == "audio/mpeg"
        assert "Transit-Plan.mp3" in audio.headers["content-disposition"]

    async def test_audio_missing_returns_404(
        self, client: AsyncClient, processing_article: Article
    ) -> None:
        response = await client.get(f"/api/articles/{processing_article.id}/audio")
        assert response.status_code == 404

    async def test_get_missing_returns_404(self, client: AsyncClient) -> None:
        response = await client.get("/api/articles/missing")
        assert response.status_code == 404


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.json() == {"status": "ok"}
