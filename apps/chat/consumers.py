"""WebSocket consumer relaying chat messages between conversation participants.

Client events (JSON objects with a ``type`` key):

* ``joinConversation`` ``{conversationId}``: leave the current room and join
  this one, acknowledged with ``conversationJoined``.
* ``leaveConversation`` ``{conversationId}``: leave the room.
* ``sendMessage`` ``{conversationId, text}``: store the message and send
  ``newMessage`` to everyone in the room, the sender included.

Failures are answered with ``error`` ``{message}``; the socket stays open.
"""

from __future__ import annotations

import logging

from channels.db import database_sync_to_async  # type: ignore
from channels.generic.websocket import AsyncJsonWebsocketConsumer  # type: ignore

from .exceptions import ChatError, ChatPermissionError
from .models import Conversation
from .services import add_message, conversation_group_name, is_participant, message_payload

logger = logging.getLogger(__name__)


@database_sync_to_async
def _check_participant(conversation_id, user) -> None:
    if not is_participant(conversation_id, user):
        raise ChatPermissionError("You are not a participant in this conversation.")


@database_sync_to_async
def _store_message(conversation_id, user, text) -> dict:
    conversation = Conversation.objects.filter(pk=conversation_id).first()
    if conversation is None:
        raise ChatError("Conversation not found.")
    message = add_message(conversation, user, text)
    return message_payload(message)


class ChatConsumer(AsyncJsonWebsocketConsumer):
    async def connect(self):  # type: ignore
        user = self.scope.get("user")
        if user is None or not user.is_authenticated:
            logger.info("Rejected unauthenticated chat socket")
            await self.close(code=4401)
            return
        self.user = user
        self.conversation_id = None
        await self.accept()
        logger.info(f"Chat socket connected for user {user.pk}")

    async def disconnect(self, code):  # type: ignore
        await self._leave_current()
        user = self.scope.get("user")
        logger.info(f"Chat socket disconnected for user {getattr(user, 'pk', None)} ({code})")

    @classmethod
    async def decode_json(cls, text_data):  # type: ignore
        try:
            return await super().decode_json(text_data)
        except ValueError:
            return None

    async def receive_json(self, content, **kwargs):  # type: ignore
        handlers = {
            "joinConversation": self.join_conversation,
            "leaveConversation": self.leave_conversation,
            "sendMessage": self.send_message,
        }
        if not isinstance(content, dict):
            await self.send_error("Messages must be JSON objects.")
            return
        event = content.get("type")
        handler = handlers.get(event) if isinstance(event, str) else None
        if handler is None:
            await self.send_error(f"Unknown event: {event}")
            return
        try:
            await handler(content)
        except ChatError as exc:
            await self.send_error(str(exc))
        except Exception as e:
            logger.error(f"Chat event {event} failed for user {self.user.pk}: {e}", exc_info=True)
            await self.send_error("Could not process the event.")

    # --- Client events -----------------------------------------------------
    async def join_conversation(self, content) -> None:
        conversation_id = self._conversation_id(content)
        await _check_participant(conversation_id, self.user)
        await self._leave_current()
        await self.channel_layer.group_add(conversation_group_name(conversation_id), self.channel_name)
        self.conversation_id = conversation_id
        logger.info(f"User {self.user.pk} joined conversation {conversation_id}")
        await self.send_json({"type": "conversationJoined", "conversationId": conversation_id})

    async def leave_conversation(self, content) -> None:
        conversation_id = content.get("conversationId")
        if conversation_id is None or str(conversation_id) == str(self.conversation_id):
            await self._leave_current()

    async def send_message(self, content) -> None:
        conversation_id = self._conversation_id(content)
        payload = await _store_message(conversation_id, self.user, content.get("text", ""))
        await self.channel_layer.group_send(
            conversation_group_name(conversation_id),
            {"type": "chat.message", "message": payload},
        )

    # --- Group events ------------------------------------------------------
    async def chat_message(self, event) -> None:
        await self.send_json({"type": "newMessage", "message": event["message"]})

    # --- Helpers -----------------------------------------------------------
    async def send_error(self, message: str) -> None:
        await self.send_json({"type": "error", "message": message})

    async def _leave_current(self) -> None:
        conversation_id = getattr(self, "conversation_id", None)
        if conversation_id is None:
            return
        await self.channel_layer.group_discard(conversation_group_name(conversation_id), self.channel_name)
        logger.info(f"User {self.user.pk} left conversation {conversation_id}")
        self.conversation_id = None

    @staticmethod
    def _conversation_id(content) -> int:
        try:
            return int(content.get("conversationId"))
        except (TypeError, ValueError):
            raise ChatError("conversationId is required.") from None
