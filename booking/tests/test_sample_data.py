# booking/tests/test_sample_data.py

from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone

from booking.models import Booking, Client
from booking.services.sample_data import delete_bot_data, reset_sample_data, seed_sample_data
from configmgr import flags
from messaging.models import Conversation, Message
from notifications.models import Notification
from reports.stats import compute_booking_stats, compute_conversation_stats
from booking import store


class SampleDataTests(TestCase):
    def test_seed_creates_demo_records_once(self):
        self.assertTrue(seed_sample_data("admin-uid"))

        self.assertEqual(Client.objects.count(), 3)
        self.assertEqual(Booking.objects.count(), 3)
        self.assertEqual(Conversation.objects.count(), 2)
        self.assertEqual(Message.objects.count(), 3)
        self.assertEqual(Notification.objects.get().title, "Welcome Admin!")
        self.assertTrue(flags.is_set(flags.SAMPLE_DATA_INITIALIZED))

        self.assertFalse(seed_sample_data("admin-uid"))
        self.assertEqual(Booking.objects.count(), 3)

    def test_seeded_dashboard_figures(self):
        seed_sample_data("admin-uid")
        stats = compute_booking_stats(store.fetch_all("bookings"), today=timezone.localdate())
        self.assertEqual(stats["todays_bookings"], 3)
        self.assertEqual(stats["revenue_today"], Decimal("2800"))
        self.assertEqual(compute_conversation_stats(store.fetch_all("conversations"))["pending_messages"], 3)

    def test_disabled_flag_skips_seed(self):
        flags.set_flag(flags.SAMPLE_DATA_DISABLED)
        self.assertFalse(seed_sample_data("admin-uid"))
        self.assertEqual(Client.objects.count(), 0)

    def test_delete_bot_data(self):
        seed_sample_data("admin-uid")
        Client.objects.create(id="real1", display_name="Real Customer")

        counts = delete_bot_data()

        self.assertEqual(counts, {"bookings": 3, "clients": 3, "conversations": 2, "messages": 2})
        self.assertEqual(list(Client.objects.values_list("id", flat=True)), ["real1"])
        self.assertEqual(Message.objects.count(), 0)
        self.assertFalse(flags.is_set(flags.SAMPLE_DATA_INITIALIZED))

    def test_reset_allows_reseed(self):
        seed_sample_data("admin-uid")
        self.assertTrue(reset_sample_data())
        self.assertFalse(reset_sample_data())
        self.assertFalse(flags.is_set(flags.SAMPLE_DATA_INITIALIZED))

    def test_commands(self):
        out = StringIO()
        call_command("seed_sample_data", "--admin-id", "admin-uid", stdout=out)
        self.assertIn("initialized", out.getvalue())
        self.assertTrue(Notification.objects.filter(user_id="admin-uid").exists())

        out = StringIO()
        call_command("delete_bot_data", stdout=out)
        self.assertIn("3 bookings", out.getvalue())

        out = StringIO()
        call_command("reset_sample_data", stdout=out)
        self.assertIn("not set", out.getvalue())
