"""
Notification scheduler

Background loop that wakes on a fixed interval and evaluates two rules:

- weekly summary: Monday, 9 o'clock local time, to every user with
  notifications enabled who has at least one skill
- inactivity reminder: every wake, to users whose newest skill update is
  older than the inactivity window

Sends are best-effort. A failure for one user is logged and counted in the
batch report; the rest of the batch and future wakes are unaffected. A
missed Monday 9:00 wake is not made up later.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from django.db import close_old_connections
from django.utils import timezone

from skills.services import summarize_skills

from .emails import EmailDispatcher
from .exceptions import NotificationError
from .store import DjangoSkillStore

logger = logging.getLogger(__name__)


CHECK_INTERVAL = timedelta(hours=1)
WEEKLY_SUMMARY_WEEKDAY = 0  # Monday
WEEKLY_SUMMARY_HOUR = 9
INACTIVITY_WINDOW = timedelta(days=30)

WEEKLY_SUMMARY = "weekly_summary"
INACTIVITY_REMINDER = "inactivity_reminder"


@dataclass
class BatchReport:
    """Outcome counts for one rule execution."""

    rule: str
    eligible: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0
    failed_recipients: List[str] = field(default_factory=list)

    def record_failure(self, recipient: str) -> None:
        self.failed += 1
        self.failed_recipients.append(recipient)

    def as_dict(self) -> Dict[str, object]:
        return {
            "rule": self.rule,
            "eligible": self.eligible,
            "sent": self.sent,
            "failed": self.failed,
            "skipped": self.skipped,
            "failed_recipients": list(self.failed_recipients),
        }


def weekly_summary_due(now: datetime) -> bool:
    """
    True when ``now`` falls in the weekly summary hour (local time).
    """
    local_now = timezone.localtime(now) if timezone.is_aware(now) else now
    return (
        local_now.weekday() == WEEKLY_SUMMARY_WEEKDAY
        and local_now.hour == WEEKLY_SUMMARY_HOUR
    )


class NotificationScheduler:
    """
    Drives the notification rules against an injected store and dispatcher.

    ``store`` provides read-only user/skill queries, ``dispatcher`` the
    ``send_summary``/``send_reminder`` transport. ``clock`` returns the
    current aware datetime.
    """

    def __init__(
        self,
        store,
        dispatcher,
        *,
        interval: timedelta = CHECK_INTERVAL,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.interval = interval
        self.clock = clock

    # --------------------------------------------------------------------- #
    # Loop                                                                  #
    # --------------------------------------------------------------------- #

    def run(self, stop_event: threading.Event) -> None:
        """
        Wake every ``interval`` until ``stop_event`` is set.

        The wait between wakes returns early when the event is set, in which
        case no further wake starts.
        """
        logger.info(
            "Notification scheduler started (interval: %s).", self.interval
        )

        while not stop_event.is_set():
            close_old_connections()
            try:
                self.run_once()
            except Exception as exc:
                logger.exception("Error in notification scheduler wake: %s", exc)
            finally:
                close_old_connections()

            if stop_event.wait(self.interval.total_seconds()):
                break

        logger.info("Notification scheduler stopped.")

    def run_once(self, now: Optional[datetime] = None) -> List[BatchReport]:
        """
        Evaluate both rules once. Returns the report of every rule that ran.

        A rule that fails before producing a report is logged and left out;
        the other rule still runs.
        """
        now = now or self.clock()
        rules = []
        if weekly_summary_due(now):
            rules.append((WEEKLY_SUMMARY, self.send_weekly_summaries))
        rules.append((INACTIVITY_REMINDER, self.send_inactivity_reminders))

        reports: List[BatchReport] = []
        for rule, send in rules:
            try:
                reports.append(send(now))
            except Exception as exc:  # noqa: BLE001
                logger.exception("Rule %s failed: %s", rule, exc)
        return reports

    # --------------------------------------------------------------------- #
    # Rules                                                                 #
    # --------------------------------------------------------------------- #

    def send_weekly_summaries(self, now: datetime) -> BatchReport:
        report = BatchReport(rule=WEEKLY_SUMMARY)
        users = self.store.list_users_with_notifications_enabled()
        report.eligible = len(users)

        logger.info("Sending weekly summaries to %s users", report.eligible)

        for user in users:
            try:
                summary = summarize_skills(self.store.list_skills_for_user(user.pk))
                if summary.total_skills == 0:
                    report.skipped += 1
                    continue

                if self.dispatcher.send_summary(user.email, user.display_name, summary):
                    report.sent += 1
                else:
                    logger.error(
                        "Failed to send summary email to %s: transport reported failure",
                        user.email,
                    )
                    report.record_failure(user.email)
            except Exception as exc:  # noqa: BLE001
                logger.error("Failed to send summary email to %s: %s", user.email, exc)
                report.record_failure(user.email)

        self._log_report(report)
        return report

    def send_inactivity_reminders(self, now: datetime) -> BatchReport:
        report = BatchReport(rule=INACTIVITY_REMINDER)
        users = self.store.list_inactive_users(now - INACTIVITY_WINDOW)
        report.eligible = len(users)

        logger.info("Sending inactivity reminders to %s users", report.eligible)

        for user in users:
            try:
                last_update = self.store.max_last_updated_for_user(user.pk)
                if last_update is None:
                    raise NotificationError(
                        f"no skill activity recorded for user {user.pk}"
                    )

                days_since_update = (now - last_update).days
                if self.dispatcher.send_reminder(user.email, user.display_name, days_since_update):
                    report.sent += 1
                else:
                    logger.error(
                        "Failed to send reminder email to %s: transport reported failure",
                        user.email,
                    )
                    report.record_failure(user.email)
            except Exception as exc:  # noqa: BLE001
                logger.error("Failed to send reminder email to %s: %s", user.email, exc)
                report.record_failure(user.email)

        self._log_report(report)
        return report

    @staticmethod
    def _log_report(report: BatchReport) -> None:
        logger.info(
            "Finished %s batch: eligible=%s sent=%s failed=%s skipped=%s",
            report.rule,
            report.eligible,
            report.sent,
            report.failed,
            report.skipped,
        )


def build_scheduler(**kwargs) -> NotificationScheduler:
    """Scheduler wired to the ORM store and the email dispatcher."""
    return NotificationScheduler(DjangoSkillStore(), EmailDispatcher(), **kwargs)


def start_scheduler(
    scheduler: NotificationScheduler,
    stop_event: threading.Event,
) -> threading.Thread:
    """
    Run ``scheduler`` on a daemon thread until ``stop_event`` is set.
    """
    thread = threading.Thread(
        target=scheduler.run,
        args=(stop_event,),
        name="notification-scheduler",
        daemon=True,
    )
    thread.start()
    logger.info("Dispatched notification scheduler in background thread")
    return thread
