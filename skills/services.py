"""
Skills service layer

Holds the summary aggregator shared by the API and the notification
scheduler, plus the per-user skill operations used by the views.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from django.utils import timezone

from .models import Skill, SkillLevel

logger = logging.getLogger(__name__)


RECENTLY_UPDATED_LIMIT = 5


@dataclass(frozen=True)
class SkillSummary:
    """
    Per-user skill statistics. Derived on demand, never stored.
    """

    total_skills: int = 0
    by_category: Dict[str, int] = field(default_factory=dict)
    by_level: Dict[SkillLevel, int] = field(default_factory=dict)
    recently_updated: List[Any] = field(default_factory=list)


def summarize_skills(skills: Iterable[Any]) -> SkillSummary:
    """
    Build a SkillSummary from a user's skills.

    Works on model instances or any record exposing ``category``, ``level``
    and ``last_updated``. Categories are grouped by exact string match.
    Skills sharing a ``last_updated`` value keep their input order.
    """
    skills = list(skills)

    by_category = Counter(skill.category for skill in skills)
    by_level = Counter(SkillLevel(skill.level) for skill in skills)
    recently_updated = sorted(
        skills,
        key=lambda skill: skill.last_updated,
        reverse=True,
    )[:RECENTLY_UPDATED_LIMIT]

    return SkillSummary(
        total_skills=len(skills),
        by_category=dict(by_category),
        by_level=dict(by_level),
        recently_updated=recently_updated,
    )


def parse_skill_level(value: Any) -> Optional[SkillLevel]:
    """
    Resolve a level given as its number ("3") or name ("expert").

    Returns None when the value names no level.
    """
    text = str(value).strip()
    if text.isdigit():
        try:
            return SkillLevel(int(text))
        except ValueError:
            return None
    for level in SkillLevel:
        if level.label.lower() == text.lower():
            return level
    return None


class SkillService:
    """Per-user skill operations."""

    UPDATABLE_TEXT_FIELDS = ('name', 'category')

    @staticmethod
    def list_skills(user):
        return Skill.objects.filter(user=user).order_by('-last_updated', 'id')

    @classmethod
    def skills_in_category(cls, user, category: str):
        return cls.list_skills(user).filter(category=category)

    @classmethod
    def skills_at_level(cls, user, level: SkillLevel):
        return cls.list_skills(user).filter(level=level)

    @staticmethod
    def create_skill(user, **fields) -> Skill:
        now = timezone.now()
        skill = Skill.objects.create(
            user=user,
            created_at=now,
            last_updated=now,
            **fields,
        )
        logger.info("Created skill %s for user %s", skill.id, user.pk)
        return skill

    @classmethod
    def update_skill(cls, skill: Skill, **changes) -> Skill:
        """
        Apply a partial update and refresh ``last_updated``.

        Blank name/category values are ignored; description may be cleared.
        """
        for attr in cls.UPDATABLE_TEXT_FIELDS:
            value = changes.get(attr)
            if value is not None and str(value).strip():
                setattr(skill, attr, value)

        if changes.get('description') is not None:
            skill.description = changes['description']

        if changes.get('level') is not None:
            skill.level = changes['level']

        skill.touch()
        skill.save()
        return skill

    @staticmethod
    def get_summary(user) -> SkillSummary:
        skills = Skill.objects.filter(user=user).order_by('id')
        return summarize_skills(skills)
