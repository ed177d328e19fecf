# messaging/views.py
#
# Purpose:
# - Admin inbox: list conversations, open a thread, reply.
#
#   GET  /api/conversations/                 newest first
#   GET  /api/conversations/{id}/messages/   thread (ascending), marks it read
#   POST /api/conversations/{id}/messages/   { "text": ... } send a message
#
# Notes:
# - Staff only. A POST without sender fields is an admin reply signed with
#   SALON_ADMIN_ID / "Admin".
#
import logging

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import BasePermission
from rest_framework.response import Response

from .models import Conversation, Message
from .serializers import ConversationSerializer, MessageSerializer, PostMessageSerializer
from .services import open_thread, post_message

log = logging.getLogger(__name__)


class IsStaffOnly(BasePermission):
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_staff)


class ConversationViewSet(viewsets.ModelViewSet):
    queryset = Conversation.objects.all().order_by("-last_message_time")
    serializer_class = ConversationSerializer
    permission_classes = [IsStaffOnly]

    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        conversation = self.get_object()

        if request.method == "GET":
            thread = open_thread(conversation)
            return Response(MessageSerializer(thread, many=True).data)

        form = PostMessageSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        data = form.validated_data

        sender_type = data["sender_type"]
        if sender_type == Message.SENDER_ADMIN:
            sender_id = data["sender_id"] or settings.SALON_ADMIN_ID
            sender_name = data["sender_name"] or "Admin"
        else:
            sender_id = data["sender_id"] or conversation.customer_id
            sender_name = data["sender_name"] or conversation.customer_name

        try:
            message = post_message(conversation, data["text"], sender_id, sender_name, sender_type)
        except DatabaseError:
            log.exception("Error sending message to %s", conversation.pk)
            return Response(
                {"detail": "Failed to send message. Please try again."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)
