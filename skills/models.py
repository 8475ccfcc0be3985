"""
Skills app models

Skill model for a user's personal list of tracked skills.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone


class SkillLevel(models.IntegerChoices):
    """Ordered proficiency levels."""

    BEGINNER = 1, 'Beginner'
    INTERMEDIATE = 2, 'Intermediate'
    EXPERT = 3, 'Expert'


class Skill(models.Model):
    """
    A single skill owned by one user.

    ``last_updated`` only moves forward through ``touch()`` and never
    precedes ``created_at``.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='skills',
    )
    name = models.CharField(max_length=200)
    category = models.CharField(max_length=100)
    description = models.TextField(max_length=1000, blank=True, default='')
    level = models.PositiveSmallIntegerField(
        choices=SkillLevel.choices,
        default=SkillLevel.BEGINNER,
    )

    created_at = models.DateTimeField(default=timezone.now)
    last_updated = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.name} ({self.category}) - {self.get_level_display()}"

    def touch(self, when=None):
        """Mark the skill as updated at ``when`` (defaults to now)."""
        when = when or timezone.now()
        self.last_updated = max(when, self.created_at)

    class Meta:
        verbose_name = 'Skill'
        verbose_name_plural = 'Skills'
        ordering = ['-last_updated']
        indexes = [
            models.Index(fields=['user', 'last_updated'], name='skill_user_updated_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(last_updated__gte=models.F('created_at')),
                name='skill_updated_after_created',
            ),
        ]
