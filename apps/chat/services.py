"""Conversation and message services shared by the REST API and the socket consumer."""

from __future__ import annotations

import logging

from asgiref.sync import async_to_sync  # type: ignore
from channels.layers import get_channel_layer  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import F  # type: ignore
from django.utils import timezone  # type: ignore

from .exceptions import ChatError, ChatPermissionError
from .models import Conversation, ConversationParticipant, Message

logger = logging.getLogger(__name__)

User = get_user_model()

PREVIEW_LENGTH = 200


def conversation_group_name(conversation_id) -> str:
    return f"chat_conversation_{conversation_id}"


def is_participant(conversation_id, user) -> bool:
    return ConversationParticipant.objects.filter(conversation_id=conversation_id, user_id=user.pk).exists()


def create_conversation(
    creator,
    participant_ids,
    *,
    is_group: bool = False,
    name: str = "",
    context_type: str = "",
    context_id: str = "",
) -> tuple[Conversation, bool]:
    """Start a conversation between the creator and ``participant_ids``.

    A direct conversation between the same two users is reused instead of
    duplicated. Returns ``(conversation, created)``.
    """

    ids = {creator.pk} | {int(pk) for pk in participant_ids}
    if len(ids) < 2:
        raise ChatError("A conversation needs at least two participants.")
    if not is_group and len(ids) > 2:
        raise ChatError("A direct conversation has exactly two participants.")
    if User.objects.filter(pk__in=ids).count() != len(ids):
        raise ChatError("One or more participants do not exist.")

    direct_key = None
    if not is_group:
        direct_key = Conversation.make_direct_key(*ids)
        existing = Conversation.objects.filter(direct_key=direct_key).first()
        if existing is not None:
            return existing, False

    try:
        with transaction.atomic():
            conversation = Conversation.objects.create(
                is_group=is_group,
                name=name if is_group else "",
                context_type=context_type,
                context_id=str(context_id or ""),
                direct_key=direct_key,
            )
            ConversationParticipant.objects.bulk_create(
                [ConversationParticipant(conversation=conversation, user_id=pk) for pk in sorted(ids)]
            )
    except IntegrityError:
        # A concurrent request created the same direct conversation
        return Conversation.objects.get(direct_key=direct_key), False

    logger.info(f"Conversation {conversation.pk} created by user {creator.pk} with {len(ids)} participants")
    return conversation, True


def conversations_for_user(user):
    """The user's conversations, most recent activity first and empty ones last."""
    return (
        Conversation.objects.filter(memberships__user=user)
        .select_related("last_message_sender")
        .prefetch_related("participants", "memberships")
        .order_by(F("last_message_at").desc(nulls_last=True), "-created_at")
    )


def conversation_display_name(conversation: Conversation, user) -> str:
    if conversation.is_group:
        if conversation.name:
            return conversation.name
        participants = sorted(conversation.participants.all(), key=lambda p: p.pk)
        others = [p.display_name for p in participants if p.pk != user.pk]
        return ", ".join(others)
    other = conversation.get_other_user(user)
    return other.display_name if other else ""


def add_message(conversation: Conversation, sender, text: str) -> Message:
    """Store a message and bump every other participant's unread counter."""

    text = (text or "").strip()
    if not text:
        raise ChatError("Message text cannot be empty.")
    if not is_participant(conversation.pk, sender):
        raise ChatPermissionError("You are not a participant in this conversation.")

    with transaction.atomic():
        message = Message.objects.create(conversation=conversation, sender=sender, text=text)
        Conversation.objects.filter(pk=conversation.pk).update(
            last_message_text=text[:PREVIEW_LENGTH],
            last_message_at=message.created_at,
            last_message_sender=sender,
            updated_at=timezone.now(),
        )
        ConversationParticipant.objects.filter(conversation=conversation).exclude(user=sender).update(
            unread_count=F("unread_count") + 1
        )

    conversation.last_message_text = text[:PREVIEW_LENGTH]
    conversation.last_message_at = message.created_at
    conversation.last_message_sender = sender
    return message


def mark_conversation_read(conversation: Conversation, user) -> ConversationParticipant:
    membership = ConversationParticipant.objects.filter(conversation=conversation, user_id=user.pk).first()
    if membership is None:
        raise ChatPermissionError("You are not a participant in this conversation.")
    membership.mark_as_read()
    return membership


def message_payload(message: Message) -> dict:
    """JSON-ready representation pushed to sockets."""
    return {
        "id": message.pk,
        "conversationId": message.conversation_id,
        "senderId": message.sender_id,
        "senderName": message.sender.display_name,
        "text": message.text,
        "timestamp": message.created_at.isoformat(),
    }


def broadcast_message(message: Message) -> bool:
    """Push ``newMessage`` to everyone who joined the conversation room.

    Delivery is best effort: clients that are not connected fetch the
    history over REST.
    """

    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False
    try:
        async_to_sync(channel_layer.group_send)(
            conversation_group_name(message.conversation_id),
            {"type": "chat.message", "message": message_payload(message)},
        )
    except Exception as e:
        logger.error(f"Failed to broadcast message {message.pk}: {e}", exc_info=True)
        return False
    return True
