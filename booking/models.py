# booking/models.py
#
# Purpose:
# - Core domain records for the salon: clients, stylists and bookings.
#
# Design highlights:
# - Every record is a "document" with a short string id. Callers may choose
#   the id (sample data uses "client1", "client2", ...), otherwise one is
#   generated by new_document_id().
# - Booking keeps three money fields (amount / revenue / price). Different
#   booking paths write different ones:
#   • in-shop (admin) bookings write amount
#   • online (client) bookings write price and revenue
#   Readers must use reports.stats.booking_amount() which applies the
#   amount -> revenue -> price fallback.
# - Booking.date is stored as a "YYYY-MM-DD" string and Booking.time as a slot
#   label ("10:00 AM"); reports compare calendar days on the string.
# - Stylist is referenced from Booking by a (stylist name, stylist_id) pair,
#   not by a foreign key.
#
# Notes for developers:
# - Status transitions are expected to move pending -> confirmed -> completed,
#   or pending/confirmed -> cancelled. Nothing enforces this; the admin API
#   accepts any status in STATUS_CHOICES.
#
import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


def new_document_id() -> str:
    """Random 20-char id, same shape for every collection."""
    return uuid.uuid4().hex[:20]


# -------------------------
# Client (customer directory)
# -------------------------
class Client(models.Model):
    """
    A customer known to the salon. The number of clients is the
    dashboard's "active customers" figure.
    """
    id = models.CharField(primary_key=True, max_length=64, default=new_document_id, editable=False)
    display_name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=20, blank=True)
    is_client = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["display_name"]

    def __str__(self):
        return self.display_name


# -------------------------
# Stylist
# -------------------------
class Stylist(models.Model):
    """
    A stylist who can be assigned to bookings.

    Rules:
    - rating is 1..5, fractions allowed (4.5)
    - specialties is a list of free-text tags
    """
    id = models.CharField(primary_key=True, max_length=64, default=new_document_id, editable=False)
    name = models.CharField(max_length=200)
    specialties = models.JSONField(default=list, blank=True)
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=1,
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    experience = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


# -------------------------
# Booking record
# -------------------------
class Booking(models.Model):
    """
    Appointment booking, either made online by a client or in-shop by an admin.
    """
    STATUS_PENDING = "pending"
    STATUS_CONFIRMED = "confirmed"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    TYPE_ADMIN = "admin"    # in-shop
    TYPE_CLIENT = "client"  # online
    TYPE_CHOICES = [
        (TYPE_ADMIN, "In-shop"),
        (TYPE_CLIENT, "Online"),
    ]

    PAYMENT_CHOICES = [
        ("mpesa", "M-Pesa"),
        ("cash", "Cash"),
    ]

    id = models.CharField(primary_key=True, max_length=64, default=new_document_id, editable=False)

    customer_name = models.CharField(max_length=200)
    customer_email = models.CharField(max_length=254, blank=True)
    customer_phone = models.CharField(max_length=20, blank=True)
    customer_id = models.CharField(max_length=64, blank=True)

    service = models.CharField(max_length=200, blank=True)
    services = models.JSONField(default=list, blank=True)
    service_id = models.CharField(max_length=64, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True)

    stylist = models.CharField(max_length=200, blank=True)
    stylist_id = models.CharField(max_length=64, blank=True)

    date = models.CharField(max_length=10, help_text="Calendar day, YYYY-MM-DD")
    time = models.CharField(max_length=20, blank=True)

    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        help_text="Booking lifecycle status",
    )
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default=TYPE_CLIENT)

    amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    revenue = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    payment_method = models.CharField(max_length=10, choices=PAYMENT_CHOICES, blank=True)

    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        label = self.service or ", ".join(self.services or []) or "service"
        return f"{self.customer_name} → {label} on {self.date} {self.time}".strip()
