"""REST tests for conversations, messages and read state."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.chat.models import Conversation, ConversationParticipant, Message
from apps.users.models import User


class ConversationAPITests(APITestCase):
    def setUp(self) -> None:
        self.alice = User.objects.create_user(email="alice@example.com", password="AlicePass123", first_name="Alice")
        self.bob = User.objects.create_user(email="bob@example.com", password="BobPass123", first_name="Bob")
        self.carol = User.objects.create_user(email="carol@example.com", password="CarolPass123", first_name="Carol")
        self.client.force_authenticate(self.alice)
        self.list_url = reverse("chat-conversation-list")

    def _start_direct(self, other: User) -> dict:
        response = self.client.post(self.list_url, {"participant_ids": [other.pk]}, format="json")
        self.assertIn(response.status_code, (status.HTTP_200_OK, status.HTTP_201_CREATED))
        return response.data

    def test_direct_conversation_is_reused(self) -> None:
        first = self.client.post(self.list_url, {"participant_ids": [self.bob.pk]}, format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(first.data["display_name"], "Bob")

        self.client.force_authenticate(self.bob)
        second = self.client.post(self.list_url, {"participant_ids": [self.alice.pk]}, format="json")
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(second.data["id"], first.data["id"])
        self.assertEqual(Conversation.objects.count(), 1)

    def test_direct_conversation_rejects_third_participant(self) -> None:
        response = self.client.post(
            self.list_url,
            {"participant_ids": [self.bob.pk, self.carol.pk]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("exactly two", response.data["non_field_errors"][0])

    def test_conversation_with_self_only_is_rejected(self) -> None:
        response = self.client.post(self.list_url, {"participant_ids": [self.alice.pk]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_participant_is_rejected(self) -> None:
        response = self.client.post(self.list_url, {"participant_ids": [99999]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_group_conversation(self) -> None:
        response = self.client.post(
            self.list_url,
            {"participant_ids": [self.bob.pk, self.carol.pk], "is_group": True, "name": "Trip planning"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["is_group"])
        self.assertEqual(response.data["display_name"], "Trip planning")
        self.assertEqual(len(response.data["participants"]), 3)

    def test_messages_update_preview_and_unread_counts(self) -> None:
        conversation = self._start_direct(self.bob)
        messages_url = reverse("chat-conversation-messages", args=[conversation["id"]])

        response = self.client.post(messages_url, {"text": "  Is the room still free?  "}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["text"], "Is the room still free?")
        self.client.post(messages_url, {"text": "For next weekend"}, format="json")

        self.client.force_authenticate(self.bob)
        listing = self.client.get(self.list_url)
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(listing.data[0]["unread_count"], 2)
        self.assertEqual(listing.data[0]["last_message"]["text"], "For next weekend")

        history = self.client.get(messages_url)
        self.assertEqual([m["text"] for m in history.data], ["Is the room still free?", "For next weekend"])

        read = self.client.post(reverse("chat-conversation-read", args=[conversation["id"]]))
        self.assertEqual(read.status_code, status.HTTP_200_OK)
        self.assertEqual(read.data["unread_count"], 0)
        membership = ConversationParticipant.objects.get(conversation_id=conversation["id"], user=self.bob)
        self.assertIsNotNone(membership.last_read_at)

        # The sender's own counter is untouched
        sender_membership = ConversationParticipant.objects.get(conversation_id=conversation["id"], user=self.alice)
        self.assertEqual(sender_membership.unread_count, 0)

    def test_empty_message_is_rejected(self) -> None:
        conversation = self._start_direct(self.bob)
        response = self.client.post(
            reverse("chat-conversation-messages", args=[conversation["id"]]),
            {"text": "   "},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Message.objects.count(), 0)

    def test_non_participant_cannot_see_conversation(self) -> None:
        conversation = self._start_direct(self.bob)
        self.client.force_authenticate(self.carol)

        self.assertEqual(self.client.get(self.list_url).data, [])
        detail = self.client.get(reverse("chat-conversation-detail", args=[conversation["id"]]))
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)
        post = self.client.post(
            reverse("chat-conversation-messages", args=[conversation["id"]]),
            {"text": "Hello"},
            format="json",
        )
        self.assertEqual(post.status_code, status.HTTP_404_NOT_FOUND)

    def test_conversations_ordered_by_last_activity(self) -> None:
        with_bob = self._start_direct(self.bob)
        with_carol = self._start_direct(self.carol)
        self.client.post(reverse("chat-conversation-messages", args=[with_bob["id"]]), {"text": "Hi Bob"}, format="json")

        listing = self.client.get(self.list_url)
        self.assertEqual([c["id"] for c in listing.data], [with_bob["id"], with_carol["id"]])

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_401_UNAUTHORIZED)
