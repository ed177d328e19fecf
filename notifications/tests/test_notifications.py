# notifications/tests/test_notifications.py

from django.contrib.auth.models import User
from django.test import TestCase
from rest_framework.test import APIClient

from booking.models import Booking
from booking.services.booking_manager import BookingManager
from notifications.models import Notification


class BookingSignalTests(TestCase):
    def test_plain_save_does_not_notify(self):
        booking = Booking.objects.create(customer_name="Sarah", customer_id="client1", date="2025-06-10")
        Notification.objects.all().delete()

        booking.notes = "prefers mornings"
        booking.save()
        self.assertEqual(Notification.objects.count(), 0)

    def test_status_change_notifies_customer(self):
        booking = Booking.objects.create(customer_name="Sarah", customer_id="client1", date="2025-06-10")
        Notification.objects.all().delete()

        BookingManager().update_status(booking, Booking.STATUS_CONFIRMED)

        note = Notification.objects.get()
        self.assertEqual(note.user_id, "client1")
        self.assertEqual(note.title, "Booking Confirmed")
        self.assertEqual(note.data["booking_id"], booking.pk)

    def test_no_customer_id_no_customer_notification(self):
        Booking.objects.create(customer_name="Guest", date="2025-06-10")
        self.assertEqual(list(Notification.objects.values_list("title", flat=True)), ["New Booking Request"])


class NotificationApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.staff = User.objects.create_user(username="admin", password="pass123", is_staff=True)
        self.client.force_authenticate(self.staff)
        self.a = Notification.objects.create(user_id="admin", title="One", message="1")
        self.b = Notification.objects.create(user_id="admin", title="Two", message="2")
        Notification.objects.create(user_id="client1", title="Other", message="x")

    def test_list_for_user(self):
        resp = self.client.get("/api/notifications/", {"user": "admin"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data["results"]), 2)
        self.assertEqual(resp.data["unread_count"], 2)

    def test_mark_read(self):
        resp = self.client.post(f"/api/notifications/{self.a.pk}/read/")
        self.assertEqual(resp.status_code, 200)
        self.a.refresh_from_db()
        self.assertTrue(self.a.read)

    def test_mark_all_read(self):
        resp = self.client.post("/api/notifications/read-all/?user=admin")
        self.assertEqual(resp.data["updated"], 2)
        self.assertEqual(Notification.objects.filter(read=False).count(), 1)

    def test_mark_all_read_needs_user(self):
        self.assertEqual(self.client.post("/api/notifications/read-all/").status_code, 400)
