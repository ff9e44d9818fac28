"""Chat domain models.

Conversations hold two or more participants. Each participant keeps
their own unread counter; the conversation caches its last message for
the inbox listing.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Conversation(models.Model):
    """A direct or group conversation, optionally about a listing or booking."""

    name = models.CharField(max_length=255, blank=True, help_text=_("Group name"))
    is_group = models.BooleanField(default=False)
    participants = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="ConversationParticipant",
        related_name="conversations",
    )
    # Loose reference, e.g. ("hotels.hotelbooking", "42")
    context_type = models.CharField(max_length=100, blank=True)
    context_id = models.CharField(max_length=64, blank=True)
    # "<lower id>:<higher id>" for direct conversations
    direct_key = models.CharField(max_length=64, unique=True, null=True, blank=True, editable=False)

    last_message_text = models.CharField(max_length=200, blank=True, help_text=_("Preview of the last message"))
    last_message_at = models.DateTimeField(null=True, blank=True)
    last_message_sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Conversation")
        verbose_name_plural = _("Conversations")
        ordering = [models.F("last_message_at").desc(nulls_last=True), "-created_at"]
        indexes = [
            models.Index(fields=["-last_message_at"], name="chat_conver_last_me_0a7c1e_idx"),
            models.Index(fields=["context_type", "context_id"], name="chat_conver_context_94b2d8_idx"),
        ]

    def __str__(self) -> str:
        if self.is_group:
            return self.name or f"Group #{self.pk}"
        return f"Conversation #{self.pk}"

    @staticmethod
    def make_direct_key(first_id, second_id) -> str:
        low, high = sorted([int(first_id), int(second_id)])
        return f"{low}:{high}"

    def get_other_user(self, user):
        """The other participant of a direct conversation."""
        for participant in self.participants.all():
            if participant.pk != user.pk:
                return participant
        return None


class ConversationParticipant(models.Model):
    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name="memberships")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_memberships",
    )
    unread_count = models.PositiveIntegerField(default=0)
    last_read_at = models.DateTimeField(null=True, blank=True)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Conversation participant")
        verbose_name_plural = _("Conversation participants")
        constraints = [
            models.UniqueConstraint(fields=["conversation", "user"], name="chat_unique_participant"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} in {self.conversation_id}"

    def mark_as_read(self) -> None:
        self.unread_count = 0
        self.last_read_at = timezone.now()
        self.save(update_fields=["unread_count", "last_read_at"])


class Message(models.Model):
    """A text message. Messages are ordered by the time they were stored."""

    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_messages",
    )
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Message")
        verbose_name_plural = _("Messages")
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["conversation", "created_at"], name="chat_messag_convers_61e3fa_idx"),
        ]

    def __str__(self) -> str:
        preview = self.text[:50] + "..." if len(self.text) > 50 else self.text
        return f"Message from {self.sender_id} at {self.created_at}: {preview}"
