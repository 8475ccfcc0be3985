"""
Skills app views

ViewSet for the authenticated user's skills.
"""
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .serializers import SkillSerializer, SkillSummarySerializer
from .services import SkillService, parse_skill_level


class SkillViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Skill.

    - GET: List current user's skills, most recently updated first
    - POST: Create skill
    - GET {id}: Retrieve specific skill
    - PUT/PATCH {id}: Update skill (always partial, refreshes last_updated)
    - DELETE {id}: Delete skill
    - GET summary/: Aggregated statistics
    - GET category/{category}/ and level/{level}/: Filtered lists
    """

    serializer_class = SkillSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        """
        Filter to show only current user's skills.
        """
        return SkillService.list_skills(self.request.user)

    def perform_create(self, serializer):
        """Automatically set user from request."""
        serializer.save(user=self.request.user)

    def update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return super().update(request, *args, **kwargs)

    @action(detail=False, methods=['get'])
    def summary(self, request):
        """
        GET /api/skills/summary/
        """
        summary = SkillService.get_summary(request.user)
        return Response(SkillSummarySerializer(summary).data)

    @action(detail=False, methods=['get'], url_path=r'category/(?P<category>[^/]+)')
    def by_category(self, request, category=None):
        """
        GET /api/skills/category/{category}/
        """
        skills = SkillService.skills_in_category(request.user, category)
        return Response(self.get_serializer(skills, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'level/(?P<level>[^/.]+)')
    def by_level(self, request, level=None):
        """
        GET /api/skills/level/{level}/ - level as number or name
        """
        parsed = parse_skill_level(level)
        if parsed is None:
            return Response(
                {'error': f"Unknown skill level: {level}"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        skills = SkillService.skills_at_level(request.user, parsed)
        return Response(self.get_serializer(skills, many=True).data)
