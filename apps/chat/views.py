"""Chat REST API views."""

from __future__ import annotations

from contextlib import contextmanager

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import PermissionDenied, ValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore

from .exceptions import ChatError, ChatPermissionError
from .serializers import (
    ConversationCreateSerializer,
    ConversationSerializer,
    MessageCreateSerializer,
    MessageSerializer,
)
from .services import (
    add_message,
    broadcast_message,
    conversations_for_user,
    create_conversation,
    mark_conversation_read,
)


@contextmanager
def chat_errors_as_api_errors():
    try:
        yield
    except ChatPermissionError as exc:
        raise PermissionDenied(str(exc))
    except ChatError as exc:
        raise ValidationError({"non_field_errors": [str(exc)]})


class ConversationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """The signed-in user's conversations, their messages and read state."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ConversationSerializer

    def get_queryset(self):  # type: ignore
        return conversations_for_user(self.request.user)

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return ConversationCreateSerializer
        if self.action == "messages":
            return MessageCreateSerializer if self.request.method == "POST" else MessageSerializer
        return ConversationSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        with chat_errors_as_api_errors():
            conversation, created = create_conversation(request.user, data.pop("participant_ids"), **data)
        conversation = self.get_queryset().get(pk=conversation.pk)
        output = ConversationSerializer(conversation, context=self.get_serializer_context()).data
        return Response(output, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)

    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):  # type: ignore
        conversation = self.get_object()
        if request.method == "GET":
            queryset = conversation.messages.select_related("sender")
            return Response(MessageSerializer(queryset, many=True).data)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with chat_errors_as_api_errors():
            message = add_message(conversation, request.user, serializer.validated_data["text"])
        broadcast_message(message)
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):  # type: ignore
        conversation = self.get_object()
        with chat_errors_as_api_errors():
            membership = mark_conversation_read(conversation, request.user)
        return Response({"conversation": conversation.pk, "unread_count": membership.unread_count})
