# messaging/models.py
#
# Purpose:
# - Customer <-> admin chat threads.
#
# Design:
# - Conversation is the per-customer thread summary shown in the inbox
#   (last message + unread counter). Its id is usually "<customer_id>_admin".
# - unread_count is the sum the dashboard shows as "pending messages". It goes
#   up when a customer writes and is reset to 0 when an admin opens the thread.
# - Message belongs to exactly one Conversation and is read in timestamp order.
#
from django.db import models
from django.utils import timezone

from booking.models import new_document_id


class Conversation(models.Model):
    id = models.CharField(primary_key=True, max_length=64, default=new_document_id)
    customer_name = models.CharField(max_length=200)
    customer_email = models.CharField(max_length=254, blank=True)
    customer_id = models.CharField(max_length=64, blank=True)
    last_message = models.TextField(blank=True)
    last_message_time = models.DateTimeField(default=timezone.now)
    unread_count = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["-last_message_time"]

    def __str__(self):
        return f"Conversation with {self.customer_name}"


class Message(models.Model):
    SENDER_ADMIN = "admin"
    SENDER_CUSTOMER = "customer"
    SENDER_CHOICES = [
        (SENDER_ADMIN, "Admin"),
        (SENDER_CUSTOMER, "Customer"),
    ]

    id = models.CharField(primary_key=True, max_length=64, default=new_document_id, editable=False)
    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name="messages")
    sender_id = models.CharField(max_length=64)
    sender_name = models.CharField(max_length=200)
    sender_type = models.CharField(max_length=10, choices=SENDER_CHOICES)
    text = models.TextField()
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["timestamp"]

    def __str__(self):
        return f"{self.sender_name}: {self.text[:40]}"
