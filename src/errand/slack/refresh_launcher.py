from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.executors.pool import ThreadPoolExecutor

from .concierge import concierge
from .app import app

import logging

logger = logging.getLogger(__name__)


def refresh_job():
    # one fetch per tick, shown on every open home tab
    try:
        refreshed = concierge.refresh_homes(app.client)
        logger.debug(f"Refreshed {refreshed} home tab(s).")
    except Exception as e:
        logger.exception(f"Error refreshing home tabs: {e}")


def launch_refresh_scheduler(seconds=60):
    if seconds <= 0:
        logger.info("Home tab refresh disabled.")
        return False

    # only 1 worker thread
    executors = {"default": ThreadPoolExecutor(max_workers=1)}
    scheduler = BackgroundScheduler(executors=executors)

    try:
        scheduler.add_job(
            func=refresh_job,
            trigger="interval",
            seconds=seconds,
            id="home_refresh_job",
            replace_existing=True,
            misfire_grace_time=60,
        )

        scheduler.start()
        return True
    except Exception as e:
        logger.exception(f"Error starting scheduler: {e}")
        scheduler.shutdown()
        return False
