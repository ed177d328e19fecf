"""
services.py
-----------
Thread operations for the admin inbox.

- open_thread(): what the admin sees when clicking a conversation. Opening a
  thread marks it read (unread_count -> 0).
- post_message(): append a message and refresh the conversation summary.
  Customer messages bump unread_count and drop a notification in the
  admin's bell.
"""

import logging

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from notifications.services import notify

from .models import Conversation, Message

log = logging.getLogger(__name__)


def open_thread(conversation: Conversation):
    """Reset the unread counter and return the messages, oldest first."""
    if conversation.unread_count:
        conversation.unread_count = 0
        conversation.save(update_fields=["unread_count"])
    return list(conversation.messages.order_by("timestamp"))


@transaction.atomic
def post_message(conversation: Conversation, text: str, sender_id: str, sender_name: str,
                 sender_type: str = Message.SENDER_ADMIN) -> Message:
    now = timezone.now()
    message = Message.objects.create(
        conversation=conversation,
        sender_id=sender_id,
        sender_name=sender_name,
        sender_type=sender_type,
        text=text,
        timestamp=now,
    )

    conversation.last_message = text
    conversation.last_message_time = now
    fields = ["last_message", "last_message_time"]
    if sender_type == Message.SENDER_CUSTOMER:
        conversation.unread_count = F("unread_count") + 1
        fields.append("unread_count")
    conversation.save(update_fields=fields)
    conversation.refresh_from_db(fields=["unread_count"])

    if sender_type == Message.SENDER_CUSTOMER:
        notify(
            settings.SALON_ADMIN_ID,
            "New Message",
            f"{sender_name}: {text[:80]}",
            type="message",
            data={"conversation_id": conversation.pk},
        )

    log.debug("Message %s posted to %s by %s", message.pk, conversation.pk, sender_type)
    return message
