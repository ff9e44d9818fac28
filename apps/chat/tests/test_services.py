"""Service-level tests for chat."""

from __future__ import annotations

from unittest import mock

from django.test import TestCase

from apps.chat.exceptions import ChatError, ChatPermissionError
from apps.chat.models import Conversation
from apps.chat.services import (
    add_message,
    broadcast_message,
    conversation_display_name,
    create_conversation,
    message_payload,
)
from apps.users.models import User


class ChatServiceTests(TestCase):
    def setUp(self) -> None:
        self.alice = User.objects.create_user(email="alice@example.com", password="pass12345", first_name="Alice")
        self.bob = User.objects.create_user(email="bob@example.com", password="pass12345", first_name="Bob")
        self.carol = User.objects.create_user(email="carol@example.com", password="pass12345", first_name="Carol")

    def test_direct_key_is_order_independent(self) -> None:
        self.assertEqual(Conversation.make_direct_key(7, 3), Conversation.make_direct_key(3, 7))

    def test_context_is_stored(self) -> None:
        conversation, created = create_conversation(
            self.alice, [self.bob.pk], context_type="hotels.hotelbooking", context_id=42
        )
        self.assertTrue(created)
        self.assertEqual(conversation.context_type, "hotels.hotelbooking")
        self.assertEqual(conversation.context_id, "42")

    def test_unnamed_group_lists_other_participants(self) -> None:
        conversation, _ = create_conversation(self.alice, [self.bob.pk, self.carol.pk], is_group=True)
        self.assertEqual(conversation_display_name(conversation, self.alice), "Bob, Carol")
        self.assertEqual(conversation_display_name(conversation, self.carol), "Alice, Bob")

    def test_outsider_cannot_post(self) -> None:
        conversation, _ = create_conversation(self.alice, [self.bob.pk])
        with self.assertRaises(ChatPermissionError):
            add_message(conversation, self.carol, "Hi")

    def test_blank_message_is_rejected(self) -> None:
        conversation, _ = create_conversation(self.alice, [self.bob.pk])
        with self.assertRaises(ChatError):
            add_message(conversation, self.alice, "")

    def test_preview_is_truncated(self) -> None:
        conversation, _ = create_conversation(self.alice, [self.bob.pk])
        add_message(conversation, self.alice, "x" * 500)
        conversation.refresh_from_db()
        self.assertEqual(len(conversation.last_message_text), 200)

    def test_payload_shape(self) -> None:
        conversation, _ = create_conversation(self.alice, [self.bob.pk])
        message = add_message(conversation, self.alice, "Hello")
        payload = message_payload(message)
        self.assertEqual(
            set(payload),
            {"id", "conversationId", "senderId", "senderName", "text", "timestamp"},
        )
        self.assertEqual(payload["senderName"], "Alice")

    def test_broadcast_failure_is_reported_not_raised(self) -> None:
        conversation, _ = create_conversation(self.alice, [self.bob.pk])
        message = add_message(conversation, self.alice, "Hello")
        layer = mock.Mock()
        layer.group_send = mock.AsyncMock(side_effect=RuntimeError("layer down"))
        with mock.patch("apps.chat.services.get_channel_layer", return_value=layer):
            self.assertFalse(broadcast_message(message))
        self.assertTrue(broadcast_message(message))
