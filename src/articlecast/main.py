"""ArticleCast 主应用入口."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from articlecast.api import articles
from articlecast.config import get_settings
from articlecast.core.processor import reset_interrupted_runs
from articlecast.models.database import async_session_maker, dispose_db, init_db
from articlecast.scheduler import create_scheduler, shutdown_scheduler

# 配置日志
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def _reset_interrupted() -> None:
    """重置上次退出时未完成的文章."""
    session_factory = async_session_maker()
    async with session_factory() as session:
        await reset_interrupted_runs(session)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """应用生命周期管理."""
    app_settings = get_settings()

    # 启动时初始化
    logger.info("正在初始化数据库...")
    await init_db(app_settings.database_url)

    logger.info("正在检查中断的处理任务...")
    await _reset_interrupted()

    logger.info("正在启动任务调度器...")
    create_scheduler(app_settings)

    logger.info("ArticleCast 启动完成！")
    yield

    # 关闭时清理
    logger.info("正在关闭...")
    await shutdown_scheduler()
    await dispose_db()
    logger.info("ArticleCast 已关闭")


settings = get_settings()
Path(settings.audio_dir).mkdir(parents=True, exist_ok=True)

app = FastAPI(
    title="ArticleCast",
    description="文章转语音 - 正文提取与语音合成",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 生产环境应该限制具体域名
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(articles.router)

# 音频静态文件
app.mount(
    settings.audio_public_url,
    StaticFiles(directory=settings.audio_dir),
    name="audio",
)


@app.get("/")
async def root() -> dict:
    """根路径."""
    return {
        "name": "ArticleCast",
        "version": "0.1.0",
        "description": "文章转语音服务",
    }


@app.get("/health")
async def health() -> dict:
    """健康检查."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "articlecast.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
