# notifications/models.py
#
# Purpose:
# - In-app notifications shown in the notification bell (admin and clients).
#
# Design:
# - user_id is a plain string: either SALON_ADMIN_ID or a client's id.
# - 'read' is flipped by the bell (single item or "mark all read").
# - 'data' carries the booking payload (or other context) that triggered it.
#
from django.db import models

from booking.models import new_document_id


class Notification(models.Model):
    TYPE_CHOICES = [
        ("booking", "Booking"),
        ("message", "Message"),
        ("payment", "Payment"),
        ("reminder", "Reminder"),
    ]

    id = models.CharField(primary_key=True, max_length=64, default=new_document_id, editable=False)
    user_id = models.CharField(max_length=64, db_index=True)
    title = models.CharField(max_length=200)
    message = models.TextField()
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default="booking")
    read = models.BooleanField(default=False)
    data = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Notification to {self.user_id}: {self.title} at {self.created_at:%Y-%m-%d %H:%M}"
