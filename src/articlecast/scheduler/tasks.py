"""后台任务定义."""

import logging
import uuid

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from articlecast.config import Settings
from articlecast.core.processor import ArticleProcessor, release_run
from articlecast.extraction import (
    ExtractionCoordinator,
    HeuristicExtractor,
    ModelExtractor,
)
from articlecast.fetcher import HttpPageFetcher
from articlecast.llm import create_llm_provider
from articlecast.models.database import async_session_maker
from articlecast.speech import ElevenLabsProvider, SpeechSynthesizer, VoiceSettings
from articlecast.storage import create_blob_store

logger = logging.getLogger(__name__)

_scheduler: AsyncIOScheduler | None = None
_processor: ArticleProcessor | None = None


def build_processor(settings: Settings) -> ArticleProcessor:
    """根据配置组装处理流程."""
    coordinator = ExtractionCoordinator(
        heuristic=HeuristicExtractor(),
        fallback=ModelExtractor(create_llm_provider(settings)),
    )
    voice = VoiceSettings(
        voice_id=settings.elevenlabs_voice_id,
        model_id=settings.elevenlabs_model_id,
        stability=settings.elevenlabs_stability,
        similarity_boost=settings.elevenlabs_similarity_boost,
        output_format=settings.elevenlabs_output_format,
    )
    synthesizer = SpeechSynthesizer(
        ElevenLabsProvider(
            api_key=settings.elevenlabs_api_key,
            voice=voice,
            base_url=settings.elevenlabs_base_url,
        )
    )

    return ArticleProcessor(
        session_factory=async_session_maker(),
        fetcher=HttpPageFetcher(timeout=settings.fetch_timeout_seconds),
        coordinator=coordinator,
        synthesizer=synthesizer,
        blob_store=create_blob_store(settings),
        stage_timeout=settings.stage_timeout_seconds or None,
    )


async def process_article_task(article_id: str) -> None:
    """处理任务：执行单篇文章的完整流程."""
    if _processor is None:
        # 任务无法执行，释放运行登记
        release_run(article_id)
        msg = "处理流程未初始化，请先调用 create_scheduler()"
        raise RuntimeError(msg)

    await _processor.run(article_id)


def schedule_article_run(article_id: str) -> None:
    """调度一次文章处理（一次性任务，立即执行）."""
    if _scheduler is None or not _scheduler.running:
        msg = "调度器未启动"
        raise RuntimeError(msg)

    _scheduler.add_job(
        process_article_task,
        "date",  # 一次性任务
        args=[article_id],
        id=f"process_article_{article_id}_{uuid.uuid4().hex[:8]}",
        name=f"处理文章 {article_id}",
        misfire_grace_time=None,
    )
    logger.info(f"已调度文章处理任务: {article_id}")


def create_scheduler(
    settings: Settings, processor: ArticleProcessor | None = None
) -> AsyncIOScheduler:
    """创建并启动调度器."""
    global _scheduler, _processor

    _processor = processor or build_processor(settings)
    _scheduler = AsyncIOScheduler()
    _scheduler.start()
    logger.info("任务调度器已启动")

    return _scheduler


async def shutdown_scheduler() -> None:
    """关闭调度器."""
    global _scheduler, _processor
    if _scheduler:
        _scheduler.shutdown(wait=False)
        logger.info("任务调度器已关闭")
        _scheduler = None
    if _processor is not None:
        await _processor.close()
        _processor = None
