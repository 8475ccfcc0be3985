"""
Accounts app serializers

Serializers for registration, login and the current user's profile.
"""
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model.

    Exposes profile details and the notification preference.
    Email is the login identifier and cannot be changed here.
    """

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'first_name',
            'last_name',
            'email_notifications_enabled',
        ]
        read_only_fields = ['id', 'email']


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for new account registration.

    Password is write-only and hashed on create.
    """

    # username mirrors the email, so both share the username column limit
    email = serializers.EmailField(max_length=150)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)

    def validate_email(self, value):
        email = User.objects.normalize_email(value)
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("User with this email already exists")
        return email

    def validate(self, attrs):
        candidate = User(
            email=attrs['email'],
            first_name=attrs['first_name'],
            last_name=attrs['last_name'],
        )
        validate_password(attrs['password'], user=candidate)
        return attrs

    def create(self, validated_data):
        """Create user with hashed password; username mirrors the email."""
        email = validated_data['email']
        return User.objects.create_user(
            username=email,
            email=email,
            password=validated_data['password'],
            first_name=validated_data['first_name'],
            last_name=validated_data['last_name'],
        )


class LoginSerializer(serializers.Serializer):
    """Credentials for token login."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_email(self, value):
        # Match the form stored at registration
        return User.objects.normalize_email(value)
