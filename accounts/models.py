"""
Accounts app models

Custom User model that signs in with an email address and carries the
notification preference read by the background scheduler.
"""
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom user model keyed by email.

    Extends Django's AbstractUser to add:
    - email: unique login identifier
    - email_notifications_enabled: opt-in flag for summaries and reminders

    ``username`` is kept for admin compatibility and mirrors the email.
    """

    email = models.EmailField('email address', unique=True)
    email_notifications_enabled = models.BooleanField(default=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def __str__(self):
        return self.email

    @property
    def display_name(self) -> str:
        """
        Name used to greet the user in emails.
        """
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'
