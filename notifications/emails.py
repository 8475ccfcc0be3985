"""
Email Service

Formats and sends notification emails. Every public send method returns
True on success and False on any failure; nothing is raised to the caller.
"""
import logging
from email.utils import formataddr

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


SUMMARY_SUBJECT = "Your Skills Summary - Skill Tracker"
REMINDER_SUBJECT = "Time to Update Your Skills! - Skill Tracker"
TEST_SUBJECT = "Test Email - Skill Tracker"


class EmailDispatcher:
    """
    Notification transport built on Django's mail framework.

    Sender details come from ``NOTIFICATION_SENDER_EMAIL`` and
    ``NOTIFICATION_SENDER_NAME``; the SMTP connection from Django's
    ``EMAIL_*`` settings.
    """

    def __init__(self, connection=None):
        self.connection = connection
        self.sender_email = getattr(settings, "NOTIFICATION_SENDER_EMAIL", "")
        self.sender_name = getattr(settings, "NOTIFICATION_SENDER_NAME", "Skill Tracker")
        self.dashboard_url = getattr(
            settings,
            "NOTIFICATION_DASHBOARD_URL",
            "http://localhost:3000/dashboard",
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.sender_email)

    def send_summary(self, recipient: str, display_name: str, summary) -> bool:
        """
        Send the weekly skills summary.

        Args:
            recipient: Destination email address
            display_name: Name used in the greeting
            summary: SkillSummary for the recipient

        Returns:
            bool: True if email sent successfully, False otherwise
        """
        context = {
            "display_name": display_name,
            "total_skills": summary.total_skills,
            "by_category": sorted(summary.by_category.items()),
            "by_level": [
                (level.label, count)
                for level, count in sorted(summary.by_level.items())
            ],
            "recently_updated": summary.recently_updated,
        }
        return self._send(recipient, SUMMARY_SUBJECT, "notifications/email/summary.html", context)

    def send_reminder(self, recipient: str, display_name: str, days_since_last_update: int) -> bool:
        """
        Send an inactivity reminder.

        Args:
            recipient: Destination email address
            display_name: Name used in the greeting
            days_since_last_update: Whole days since the newest skill update

        Returns:
            bool: True if email sent successfully, False otherwise
        """
        context = {
            "display_name": display_name,
            "days_since_last_update": days_since_last_update,
        }
        return self._send(recipient, REMINDER_SUBJECT, "notifications/email/reminder.html", context)

    def send_test_email(self, recipient: str) -> bool:
        """Send a test email to verify the transport configuration."""
        context = {"sent_at": timezone.localtime()}
        return self._send(recipient, TEST_SUBJECT, "notifications/email/test.html", context)

    def _send(self, recipient: str, subject: str, template_name: str, context: dict) -> bool:
        if not self.is_configured:
            logger.warning("Email configuration is missing. Email not sent to %s.", recipient)
            return False

        try:
            html_body = render_to_string(
                template_name,
                {**context, "dashboard_url": self.dashboard_url},
            )
            message = EmailMultiAlternatives(
                subject=subject,
                body=strip_tags(html_body),
                from_email=formataddr((self.sender_name, self.sender_email)),
                to=[recipient],
                connection=self.connection,
            )
            message.attach_alternative(html_body, "text/html")
            message.send(fail_silently=False)
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Failed to send email to {recipient}: {exc}")
            return False

        logger.info(f"Email sent successfully to {recipient}")
        return True
