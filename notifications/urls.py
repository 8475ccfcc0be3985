"""
Notifications app URLs
"""
from django.urls import path
from .views import EmailConfigStatusView, NotificationRunView, SendTestEmailView

urlpatterns = [
    path('test-email/', SendTestEmailView.as_view(), name='notifications-test-email'),
    path('email-config-status/', EmailConfigStatusView.as_view(), name='notifications-email-config'),
    path('run/', NotificationRunView.as_view(), name='notifications-run'),
]
