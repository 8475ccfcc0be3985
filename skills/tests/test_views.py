from datetime import timedelta

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from skills.models import Skill, SkillLevel

User = get_user_model()


def create_user(email):
    return User.objects.create_user(username=email, email=email, password="Sk1ll-Tracker!")


def create_skill(user, name, category="Python", level=SkillLevel.BEGINNER, days_ago=0):
    moment = timezone.now() - timedelta(days=days_ago)
    return Skill.objects.create(
        user=user,
        name=name,
        category=category,
        level=level,
        created_at=moment,
        last_updated=moment,
    )


class SkillApiTests(APITestCase):
    """API tests for the owner-scoped skill endpoints."""

    def setUp(self) -> None:
        self.user = create_user("ada@example.com")
        self.other = create_user("grace@example.com")
        self.client.force_authenticate(self.user)

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.get(reverse("skill-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_skill_sets_owner_and_timestamps(self) -> None:
        response = self.client.post(
            reverse("skill-list"),
            {"name": "Django", "category": "Python", "level": SkillLevel.EXPERT},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        skill = Skill.objects.get(id=response.data["id"])
        self.assertEqual(skill.user, self.user)
        self.assertEqual(response.data["level_name"], "Expert")
        self.assertGreaterEqual(skill.last_updated, skill.created_at)

    def test_create_rejects_blank_name(self) -> None:
        response = self.client.post(
            reverse("skill-list"),
            {"name": "  ", "category": "Python"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", response.data)

    def test_list_only_returns_own_skills_newest_first(self) -> None:
        older = create_skill(self.user, "SQL", days_ago=3)
        newer = create_skill(self.user, "Django", days_ago=1)
        create_skill(self.other, "Rust", category="Rust")

        response = self.client.get(reverse("skill-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in response.data], [newer.id, older.id])

    def test_other_users_skill_is_not_found(self) -> None:
        foreign = create_skill(self.other, "Rust", category="Rust")

        response = self.client.get(reverse("skill-detail", args=[foreign.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.delete(reverse("skill-detail", args=[foreign.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Skill.objects.filter(id=foreign.id).exists())

    def test_update_is_partial_and_refreshes_last_updated(self) -> None:
        skill = create_skill(self.user, "SQL", days_ago=10)
        previous_update = skill.last_updated

        response = self.client.put(
            reverse("skill-detail", args=[skill.id]),
            {"name": "", "level": SkillLevel.INTERMEDIATE, "description": "Window functions"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        skill.refresh_from_db()
        self.assertEqual(skill.name, "SQL")
        self.assertEqual(skill.category, "Python")
        self.assertEqual(skill.level, SkillLevel.INTERMEDIATE)
        self.assertEqual(skill.description, "Window functions")
        self.assertGreater(skill.last_updated, previous_update)

    def test_delete_skill(self) -> None:
        skill = create_skill(self.user, "SQL")

        response = self.client.delete(reverse("skill-detail", args=[skill.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Skill.objects.filter(id=skill.id).exists())

    def test_summary(self) -> None:
        create_skill(self.user, "Goroutines", category="Go", level=SkillLevel.EXPERT)
        create_skill(self.user, "Generics", category="Go", days_ago=1)
        create_skill(self.user, "Borrowing", category="Rust", level=SkillLevel.INTERMEDIATE, days_ago=40)

        response = self.client.get(reverse("skill-summary"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total_skills"], 3)
        self.assertEqual(response.data["by_category"], {"Go": 2, "Rust": 1})
        self.assertEqual(
            response.data["by_level"],
            {"Expert": 1, "Beginner": 1, "Intermediate": 1},
        )
        self.assertEqual(
            [item["name"] for item in response.data["recently_updated"]],
            ["Goroutines", "Generics", "Borrowing"],
        )

    def test_summary_without_skills(self) -> None:
        response = self.client.get(reverse("skill-summary"))

        self.assertEqual(response.data["total_skills"], 0)
        self.assertEqual(response.data["by_category"], {})
        self.assertEqual(response.data["by_level"], {})
        self.assertEqual(response.data["recently_updated"], [])

    def test_filter_by_category(self) -> None:
        create_skill(self.user, "Goroutines", category="Go")
        create_skill(self.user, "Borrowing", category="Rust")

        response = self.client.get(reverse("skill-by-category", kwargs={"category": "Go"}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["name"] for item in response.data], ["Goroutines"])

    def test_filter_by_level_accepts_name_or_number(self) -> None:
        create_skill(self.user, "Goroutines", category="Go", level=SkillLevel.EXPERT)
        create_skill(self.user, "Borrowing", category="Rust")

        by_name = self.client.get(reverse("skill-by-level", kwargs={"level": "expert"}))
        by_number = self.client.get(reverse("skill-by-level", kwargs={"level": "3"}))

        self.assertEqual([item["name"] for item in by_name.data], ["Goroutines"])
        self.assertEqual(by_name.data, by_number.data)

    def test_filter_by_unknown_level(self) -> None:
        response = self.client.get(reverse("skill-by-level", kwargs={"level": "guru"}))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
