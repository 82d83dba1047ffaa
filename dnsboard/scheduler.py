"""Interval polling of the dashboard collections using APScheduler"""

import logging
from datetime import datetime
from typing import Optional, List
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from dnsboard.polling import DashboardStore, PolledCollection

logger = logging.getLogger(__name__)

# Global scheduler instance
_scheduler: Optional[AsyncIOScheduler] = None


def get_scheduler() -> AsyncIOScheduler:
    """Get or create the scheduler instance; call from inside the event loop"""
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler()
        _scheduler.start()
        logger.info("Scheduler started")
    return _scheduler


def get_job_id(key: str) -> str:
    """Get the APScheduler job ID for a collection"""
    return f"poll_{key}"


def add_poll_job(scheduler: AsyncIOScheduler, collection: PolledCollection, immediate: bool = True) -> None:
    """Poll a collection every interval_seconds"""
    scheduler.add_job(
        collection.refresh,
        trigger=IntervalTrigger(seconds=collection.interval_seconds),
        id=get_job_id(collection.key),
        name=f"Poll {collection.key}",
        replace_existing=True,
        next_run_time=datetime.now() if immediate else None,
        # A slow response must not hold back the next poll
        max_instances=2,
        coalesce=True,
    )
    logger.info(f"Polling {collection.key} every {collection.interval_seconds}s")


def start_polling(store: DashboardStore, scheduler: Optional[AsyncIOScheduler] = None) -> AsyncIOScheduler:
    """Register a poll job for every collection of the store"""
    scheduler = scheduler or get_scheduler()
    for collection in store.collections.values():
        add_poll_job(scheduler, collection)
    return scheduler


def stop_polling(store: DashboardStore, scheduler: Optional[AsyncIOScheduler] = None) -> None:
    """Remove the poll jobs of the store"""
    scheduler = scheduler or get_scheduler()
    for key in store.collections:
        job_id = get_job_id(key)
        if scheduler.get_job(job_id):
            scheduler.remove_job(job_id)
            logger.info(f"Removed job: {job_id}")


def get_poll_jobs(scheduler: Optional[AsyncIOScheduler] = None) -> List[str]:
    scheduler = scheduler or get_scheduler()
    return [job.id for job in scheduler.get_jobs() if job.id.startswith("poll_")]


def shutdown_scheduler() -> None:
    """Stop the scheduler"""
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("Scheduler stopped")
