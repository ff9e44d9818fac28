"""Serializers for the chat API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer

from .models import Conversation, Message
from .services import conversation_display_name


class MessageSerializer(serializers.ModelSerializer):
    sender = UserShortSerializer(read_only=True)

    class Meta:
        model = Message
        fields = ["id", "conversation", "sender", "text", "created_at"]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    text = serializers.CharField(max_length=5000, trim_whitespace=True)


class ConversationSerializer(serializers.ModelSerializer):
    participants = UserShortSerializer(many=True, read_only=True)
    display_name = serializers.SerializerMethodField()
    unread_count = serializers.SerializerMethodField()
    last_message = serializers.SerializerMethodField()

    class Meta:
        model = Conversation
        fields = [
            "id",
            "name",
            "display_name",
            "is_group",
            "participants",
            "context_type",
            "context_id",
            "unread_count",
            "last_message",
            "created_at",
        ]
        read_only_fields = fields

    def _user(self):
        return self.context["request"].user

    def get_display_name(self, obj) -> str:  # type: ignore
        return conversation_display_name(obj, self._user())

    def get_unread_count(self, obj) -> int:  # type: ignore
        user_id = self._user().pk
        for membership in obj.memberships.all():
            if membership.user_id == user_id:
                return membership.unread_count
        return 0

    def get_last_message(self, obj):  # type: ignore
        if not obj.last_message_at:
            return None
        return {
            "text": obj.last_message_text,
            "timestamp": obj.last_message_at,
            "sender_id": obj.last_message_sender_id,
        }


class ConversationCreateSerializer(serializers.Serializer):
    participant_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    is_group = serializers.BooleanField(default=False)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    context_type = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    context_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
