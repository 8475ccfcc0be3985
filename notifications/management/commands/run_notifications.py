"""
Run the notification scheduler.

Usage:
    python manage.py run_notifications            # loop until SIGINT/SIGTERM
    python manage.py run_notifications --once     # single wake, print reports
"""
import json
import logging
import signal
import threading
from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from notifications.scheduler import CHECK_INTERVAL, build_scheduler, start_scheduler

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Send weekly skill summaries and inactivity reminders on a fixed interval."

    def add_arguments(self, parser):
        parser.add_argument(
            "--once",
            action="store_true",
            help="Run a single wake and exit.",
        )
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Seconds between wakes (default: NOTIFICATION_CHECK_INTERVAL_SECONDS).",
        )

    def handle(self, *args, **options):
        seconds = options["interval"]
        if seconds is None:
            seconds = getattr(
                settings,
                "NOTIFICATION_CHECK_INTERVAL_SECONDS",
                int(CHECK_INTERVAL.total_seconds()),
            )
        if seconds <= 0:
            raise CommandError("--interval must be a positive number of seconds.")

        interval = timedelta(seconds=seconds)
        if interval < CHECK_INTERVAL:
            logger.warning(
                "Wake interval %s is shorter than %s; the weekly summary may be "
                "sent more than once within its hour.",
                interval,
                CHECK_INTERVAL,
            )

        scheduler = build_scheduler(interval=interval)

        if options["once"]:
            for report in scheduler.run_once():
                self.stdout.write(json.dumps(report.as_dict()))
            return

        stop_event = threading.Event()

        def signal_handler(signum, frame):
            """Handle shutdown signals gracefully."""
            logger.info("Received shutdown signal. Stopping gracefully...")
            stop_event.set()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        self.stdout.write("Starting notification scheduler. Press Ctrl+C to stop.")
        thread = start_scheduler(scheduler, stop_event)

        # Join in short slices so signal handlers run on the main thread.
        while thread.is_alive():
            thread.join(timeout=1)

        self.stdout.write("Notification scheduler stopped.")
