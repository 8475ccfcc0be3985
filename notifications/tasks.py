"""
Background tasks for the notifications app using Django-Q.
"""
import logging
from typing import Dict, List

from .scheduler import build_scheduler

logger = logging.getLogger(__name__)


def run_notification_pass() -> List[Dict[str, object]]:
    """
    Run a single scheduler wake outside the periodic loop.

    Can be called directly or queued via Django-Q's async_task().
    Returns the batch reports so they show up in the task result.
    """
    scheduler = build_scheduler()
    reports = scheduler.run_once()
    logger.info("On-demand notification pass finished with %s batches", len(reports))
    return [report.as_dict() for report in reports]
