import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from app.services.rawg import import_new_games

logger = logging.getLogger(__name__)


def build_scheduler(database, settings):
    """Periodic jobs; the RAWG import only runs when an API key is configured."""
    scheduler = AsyncIOScheduler()
    if settings.RAWG_API_KEY:
        scheduler.add_job(
            import_new_games,
            "interval",
            hours=settings.RAWG_IMPORT_INTERVAL_HOURS,
            args=[database, settings],
            id="rawg_import",
            max_instances=1,
        )
    else:
        logger.info("RAWG_API_KEY not set; catalog import disabled")
    return scheduler


def start_scheduler(scheduler):
    if scheduler.get_jobs():
        scheduler.start()


def stop_scheduler(scheduler):
    if scheduler.running:
        scheduler.shutdown(wait=False)
