"""后台任务调度."""

from articlecast.scheduler.tasks import (
    create_scheduler,
    process_article_task,
    schedule_article_run,
    shutdown_scheduler,
)

__all__ = [
    "create_scheduler",
    "process_article_task",
    "schedule_article_run",
    "shutdown_scheduler",
]
