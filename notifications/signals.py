# notifications/signals.py
#
# Purpose:
# - Record in-app notifications when bookings are created or change status.
#   * New online (client) booking: "New Booking Request" for the admin, and
#     "Booking Submitted" for the customer when we know their id.
#   * Status change: "Booking <Status>" for the customer.
#
# Notes:
# - A save counts as a status change only when update_fields includes
#   'status' (BookingManager.update_status saves that way). Plain saves from
#   the Django admin do not notify.
# - In-shop (admin) bookings do not notify on create; the admin made them.
# - Never raises: notification failures are logged by notify().
#
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from booking.models import Booking
from notifications.services import notify


def _booking_data(booking: Booking) -> dict:
    return {
        "booking_id": booking.pk,
        "customer_name": booking.customer_name,
        "service": booking.service,
        "date": booking.date,
        "time": booking.time,
        "status": booking.status,
    }


@receiver(post_save, sender=Booking, dispatch_uid="notifications-booking-saved")
def booking_notifications(sender, instance: Booking, created: bool, update_fields=None, **kwargs):
    if created:
        if instance.type != Booking.TYPE_CLIENT:
            return
        data = _booking_data(instance)
        notify(
            settings.SALON_ADMIN_ID,
            "New Booking Request",
            f"{instance.customer_name} booked {instance.service} on {instance.date} at {instance.time}",
            data=data,
        )
        if instance.customer_id:
            notify(
                instance.customer_id,
                "Booking Submitted",
                f"Your booking for {instance.service} on {instance.date} at {instance.time} "
                f"has been received and is awaiting confirmation.",
                data=data,
            )
        return

    if update_fields is None or "status" not in update_fields:
        return
    if not instance.customer_id:
        return

    label = instance.get_status_display()
    notify(
        instance.customer_id,
        f"Booking {label}",
        f"Your booking for {instance.service} on {instance.date} at {instance.time} is now {instance.status}.",
        data=_booking_data(instance),
    )
