"""
booking_manager.py
------------------
Coordinates booking creation and status changes.

Two creation paths:
- online (client) bookings: service picked from the catalog, status pending,
  price/revenue taken from the catalog
- in-shop (admin) bookings: walk-ins typed in by staff, status confirmed,
  amount entered by hand

Notes:
- Status updates save with update_fields=["status", ...] so that
  notifications.signals can tell a status change from any other save.
- Database failures are logged and re-raised; the API layer turns them
  into a 500 with a readable message.
"""

import logging

from django.db import DatabaseError, transaction
from django.db.models import Q, TextField
from django.db.models.functions import Cast

from ..models import Booking
from .catalog import get_service

log = logging.getLogger(__name__)

IN_SHOP_NOTE = "In-shop booking"


class BookingManager:
    @transaction.atomic
    def create_online_booking(self, data, stylist_name=""):
        """
        Create a pending client booking from validated form data.

        Raises:
            ValueError: if service_id is not in the catalog.
        """
        service = get_service(data["service_id"])
        if service is None:
            raise ValueError(f"Unknown service: {data['service_id']}")

        booking = Booking.objects.create(
            customer_name=data["customer_name"],
            customer_email=data.get("customer_email", ""),
            customer_phone=data.get("customer_phone", ""),
            customer_id=data.get("customer_id", ""),
            service=service["name"],
            services=[service["name"]],
            service_id=service["id"],
            duration=service["duration"],
            stylist=stylist_name,
            stylist_id=data.get("stylist_id", ""),
            date=data["date"].isoformat(),
            time=data["time"],
            status=Booking.STATUS_PENDING,
            type=Booking.TYPE_CLIENT,
            price=service["price"],
            revenue=service["price"],
            notes=data.get("notes", ""),
        )
        log.info("Online booking %s created for %s (%s)", booking.id, booking.customer_name, booking.service)
        return booking

    @transaction.atomic
    def create_in_shop_booking(self, data):
        booking = Booking.objects.create(
            customer_name=data["customer_name"],
            service=data["service"],
            services=[data["service"]],
            stylist=data["stylist"],
            stylist_id=data.get("stylist_id", ""),
            date=data["date"].isoformat(),
            time=data["time"],
            status=Booking.STATUS_CONFIRMED,
            type=Booking.TYPE_ADMIN,
            amount=data["amount"],
            notes=IN_SHOP_NOTE,
        )
        log.info("In-shop booking %s created for %s", booking.id, booking.customer_name)
        return booking

    def update_status(self, booking, status, payment_method=None):
        """Set a new status (and optionally the payment method) on a booking."""
        booking.status = status
        fields = ["status"]
        if payment_method:
            booking.payment_method = payment_method
            fields.append("payment_method")

        try:
            booking.save(update_fields=fields)
        except DatabaseError:
            log.exception("Error updating booking %s status to %s", booking.pk, status)
            raise
        log.info("Booking %s status -> %s", booking.pk, status)
        return booking


def filter_bookings(queryset, status=None, search=None):
    """
    Narrow a booking queryset by status and a free-text search over
    customer name, email and service name(s).
    """
    if status and status != "all":
        queryset = queryset.filter(status=status)

    term = (search or "").strip()
    if term:
        # services is a JSON list; search its text form
        queryset = queryset.annotate(services_text=Cast("services", output_field=TextField())).filter(
            Q(customer_name__icontains=term)
            | Q(customer_email__icontains=term)
            | Q(service__icontains=term)
            | Q(services_text__icontains=term)
        )
    return queryset
