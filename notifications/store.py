"""
Read-only access to users and skills for the notification scheduler.
"""
from datetime import datetime
from typing import List, Optional

from django.contrib.auth import get_user_model
from django.db.models import Max

from skills.models import Skill


class DjangoSkillStore:
    """
    ORM-backed store. Every call runs a fresh query.
    """

    def __init__(self):
        self.user_model = get_user_model()

    def list_users_with_notifications_enabled(self) -> List:
        return list(
            self.user_model.objects.filter(email_notifications_enabled=True).order_by('id')
        )

    def list_skills_for_user(self, user_id) -> List[Skill]:
        return list(Skill.objects.filter(user_id=user_id).order_by('id'))

    def max_last_updated_for_user(self, user_id) -> Optional[datetime]:
        """Latest ``last_updated`` across the user's skills, None without skills."""
        return Skill.objects.filter(user_id=user_id).aggregate(
            latest=Max('last_updated'),
        )['latest']

    def list_inactive_users(self, cutoff: datetime) -> List:
        """
        Users with notifications enabled, at least one skill and no skill
        updated at or after ``cutoff``.
        """
        return list(
            self.user_model.objects.filter(email_notifications_enabled=True)
            .annotate(latest_update=Max('skills__last_updated'))
            .filter(latest_update__lt=cutoff)
            .order_by('id')
        )
