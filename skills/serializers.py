"""
Skills app serializers

Serializers for Skill and the derived SkillSummary.
"""
from rest_framework import serializers

from .models import Skill
from .services import SkillService


class SkillSerializer(serializers.ModelSerializer):
    """
    Serializer for Skill.

    On update, blank name/category values leave the stored value unchanged.
    User is automatically set from request context.
    """

    name = serializers.CharField(max_length=200, allow_blank=True)
    category = serializers.CharField(max_length=100, allow_blank=True)
    description = serializers.CharField(
        max_length=1000,
        allow_blank=True,
        required=False,
    )
    level_name = serializers.CharField(source='get_level_display', read_only=True)

    class Meta:
        model = Skill
        fields = [
            'id',
            'name',
            'category',
            'description',
            'level',
            'level_name',
            'created_at',
            'last_updated',
        ]
        read_only_fields = ['id', 'created_at', 'last_updated']

    def validate(self, attrs):
        if self.instance is None:
            missing = [
                attr for attr in ('name', 'category')
                if not str(attrs.get(attr, '')).strip()
            ]
            if missing:
                raise serializers.ValidationError(
                    {attr: 'This field may not be blank.' for attr in missing}
                )
        return attrs

    def create(self, validated_data):
        user = validated_data.pop('user')
        return SkillService.create_skill(user, **validated_data)

    def update(self, instance, validated_data):
        return SkillService.update_skill(instance, **validated_data)


class SkillSummarySerializer(serializers.Serializer):
    """
    Read-only representation of a SkillSummary.

    Level counts are keyed by level name.
    """

    total_skills = serializers.IntegerField()
    by_category = serializers.DictField(child=serializers.IntegerField())
    by_level = serializers.SerializerMethodField()
    recently_updated = SkillSerializer(many=True)

    def get_by_level(self, obj) -> dict:
        return {level.label: count for level, count in obj.by_level.items()}
