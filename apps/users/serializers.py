"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer."""

    display_name = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "display_name",
            "first_name",
            "last_name",
            "phone",
            "role",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "created_at",
            "updated_at",
        ]


class UserShortSerializer(serializers.ModelSerializer):
    """Compact representation embedded in chat and booking payloads."""

    display_name = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = ["id", "email", "display_name", "role"]
