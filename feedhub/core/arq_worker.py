import asyncio
import logging
import os
import sys
import time
from typing import Optional

import httpx
from arq import cron, Worker
from arq.connections import RedisSettings
from sqlalchemy import select

from feedhub.core.statuses import parse_status, status_meta
from feedhub.db.session import async_session
from feedhub.db.models import Changelog, Feedback, Project, ProjectConfig

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

HUB_URL = os.getenv("HUB_URL", "http://localhost:8000")


async def startup(ctx):
    ctx["http"] = httpx.AsyncClient(timeout=10)

async def shutdown(ctx):
    await ctx["http"].aclose()


async def _discord_config(db, project_id: str) -> Optional[ProjectConfig]:
    result = await db.execute(select(ProjectConfig).where(ProjectConfig.project_id == project_id))
    config = result.scalar_one_or_none()
    if not config or not config.integration_discord_status or not config.integration_discord_webhook:
        return None
    return config


async def post_to_discord(ctx, config: ProjectConfig, payload: dict) -> bool:
    if config.integration_discord_role_id:
        payload["content"] = f"<@&{config.integration_discord_role_id}> {payload.get('content', '')}".strip()
    try:
        res = await ctx["http"].post(config.integration_discord_webhook, json=payload)
        res.raise_for_status()
        return True
    except httpx.HTTPError as e:
        logger.error(f"Discord webhook failed for project {config.project_id}: {e}", exc_info=True)
        return False


async def notify_status_change(ctx, feedback_id: str, status: str) -> bool:
    """Background job: announce a feedback status change on Discord."""
    logger.info(f"Announcing status change of feedback {feedback_id} to {status}")

    async with async_session() as db:
        feedback = await db.get(Feedback, feedback_id)
        if not feedback:
            logger.info(f"Feedback {feedback_id} not found")
            return False

        config = await _discord_config(db, feedback.project_id)
        if not config:
            return False
        project = await db.get(Project, feedback.project_id)

    label = parse_status(status)
    payload = {
        "content": f"**{feedback.title}** is now {label.label if label else status}",
        "embeds": [
            {
                "title": feedback.title,
                "url": f"{HUB_URL}/{project.slug}/feedback/{feedback.id}",
                "color": int(status_meta(status).color.lstrip("#"), 16),
            }
        ],
    }
    return await post_to_discord(ctx, config, payload)


async def notify_changelog_published(ctx, changelog_id: str) -> bool:
    """Background job: announce a published changelog on Discord."""
    logger.info(f"Announcing changelog {changelog_id}")

    async with async_session() as db:
        changelog = await db.get(Changelog, changelog_id)
        if not changelog or not changelog.published:
            logger.info(f"Changelog {changelog_id} missing or unpublished")
            return False

        config = await _discord_config(db, changelog.project_id)
        if not config:
            return False
        project = await db.get(Project, changelog.project_id)

    payload = {
        "content": f"New changelog: **{changelog.title}**",
        "embeds": [
            {
                "title": changelog.title,
                "description": changelog.summary or "",
                "url": f"{HUB_URL}/{project.slug}/changelog/{changelog.slug}",
            }
        ],
    }
    return await post_to_discord(ctx, config, payload)


notify_status_change.max_tries = 3
notify_changelog_published.max_tries = 3

async def worker_heartbeat(ctx):
    redis = ctx["redis"]
    await redis.set(
        "arq:heartbeat", str(time.time()), ex=60
    )  # expire in 60 seconds


async def run_worker_forever():
    """
    Resilient loop that keeps the ARQ worker running.
    Restarts worker on failure with exponential backoff.
    """
    backoff = 1
    while True:
        try:
            worker = Worker(
                functions = [
                    notify_status_change,
                    notify_changelog_published,
                ],
                redis_settings = RedisSettings.from_dsn(os.getenv("REDIS_URL", "redis://localhost:6379")),
                cron_jobs = [
                    cron(worker_heartbeat, second=0),
                ],
                on_startup = startup,
                on_shutdown = shutdown,
                keep_result = 0,
                max_jobs = 5,
            )
            logger.info("Starting ARQ worker...")
            await worker.async_run()
        except asyncio.CancelledError:
            logger.warning("Worker shutdown triggered by CancelledError")
            break
        except Exception as e:
            logger.error(f"Worker crashed: {e}", exc_info=True)
            logger.info(f"Restarting worker in {backoff} seconds...")
            await asyncio.sleep(backoff)
            backoff = min(backoff * 2, 60)  # Max backoff 1 minute
        else:
            backoff = 1  # Reset backoff on clean exit


if __name__ == "__main__":
    try:
        asyncio.run(run_worker_forever())
    except KeyboardInterrupt:
        logger.info("Worker manually stopped.")
