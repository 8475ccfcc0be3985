"""
Notifications app views

Operational endpoints for the email transport and the scheduler.
"""
import logging

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django_q.tasks import async_task
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from .emails import EmailDispatcher

logger = logging.getLogger(__name__)


class SendTestEmailView(APIView):
    """
    Send a test email to verify email configuration.

    POST /api/notifications/test-email/?to_email=<address>
    """

    permission_classes = [IsAdminUser]

    def post(self, request):
        to_email = request.query_params.get('to_email') or request.data.get('to_email')
        if not to_email:
            return Response(
                {'error': 'Email address is required'},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            validate_email(to_email)
        except ValidationError:
            return Response(
                {'error': 'Invalid email address format'},
                status=status.HTTP_400_BAD_REQUEST,
            )

        logger.info("Attempting to send test email to: %s", to_email)
        if EmailDispatcher().send_test_email(to_email):
            return Response(
                {'message': 'Email sent successfully! Check your inbox (and spam folder).'}
            )

        logger.warning("Email service returned false for: %s", to_email)
        return Response(
            {'error': 'Failed to send email. Check the email configuration.'},
            status=status.HTTP_400_BAD_REQUEST,
        )


class EmailConfigStatusView(APIView):
    """
    Report whether a sender address is configured, without exposing it.

    GET /api/notifications/email-config-status/
    """

    def get(self, request):
        is_configured = EmailDispatcher().is_configured
        return Response({
            'is_configured': is_configured,
            'message': (
                'Email service is configured and ready'
                if is_configured
                else 'Email service is not configured'
            ),
        })


class NotificationRunView(APIView):
    """
    Queue one scheduler wake on the Django-Q cluster.

    POST /api/notifications/run/
    """

    permission_classes = [IsAdminUser]

    def post(self, request):
        task_id = async_task('notifications.tasks.run_notification_pass')
        logger.info("Queued notification pass %s for %s", task_id, request.user.email)
        return Response({'task_id': task_id}, status=status.HTTP_202_ACCEPTED)
