# booking/tests/test_store.py

from unittest import mock

from django.db import transaction
from django.test import TestCase

from booking import store
from booking.models import Client


class StoreTests(TestCase):
    def setUp(self):
        self.subs = []

    def tearDown(self):
        for sub in self.subs:
            sub.unsubscribe()

    def listen(self, collection, **kw):
        received, errors = [], []
        sub = store.subscribe(collection, received.append, errors.append, **kw)
        self.subs.append(sub)
        return sub, received, errors

    def test_fetch_all_returns_documents(self):
        Client.objects.create(id="client1", display_name="Sarah Johnson")
        docs = store.fetch_all("clients")
        self.assertEqual(docs[0]["id"], "client1")
        self.assertEqual(docs[0]["display_name"], "Sarah Johnson")

    def test_unknown_collection(self):
        with self.assertRaises(store.UnknownCollection):
            store.fetch_all("invoices")

    def test_initial_and_change_snapshots(self):
        _, received, _ = self.listen("clients")
        self.assertEqual(received, [[]])

        with self.captureOnCommitCallbacks(execute=True):
            Client.objects.create(display_name="Maria Garcia")
        self.assertEqual(len(received[-1]), 1)

        with self.captureOnCommitCallbacks(execute=True):
            Client.objects.all().delete()
        self.assertEqual(received[-1], [])

    def test_delivery_waits_for_commit(self):
        _, received, _ = self.listen("clients", deliver_initial=False)

        with self.captureOnCommitCallbacks() as callbacks:
            Client.objects.create(display_name="Maria Garcia")
            # still inside the transaction: nothing pushed yet
            self.assertEqual(received, [])
        self.assertEqual(len(callbacks), 1)

        callbacks[0]()
        self.assertEqual(len(received[-1]), 1)

    def test_rolled_back_write_is_never_delivered(self):
        _, received, _ = self.listen("clients", deliver_initial=False)

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(RuntimeError):
                with transaction.atomic():
                    Client.objects.create(display_name="Ghost")
                    raise RuntimeError("abort")

        self.assertEqual(callbacks, [])
        self.assertEqual(received, [])
        self.assertEqual(Client.objects.count(), 0)

    def test_unsubscribe_stops_delivery(self):
        sub, received, _ = self.listen("clients", deliver_initial=False)
        self.assertEqual(store.subscriber_count("clients"), 1)

        sub.unsubscribe()
        sub.unsubscribe()  # idempotent
        self.assertEqual(store.subscriber_count("clients"), 0)

        with self.captureOnCommitCallbacks(execute=True):
            Client.objects.create(display_name="Lisa Chen")
        self.assertEqual(received, [])
        self.assertFalse(sub.active)

    def test_read_failure_goes_to_on_error(self):
        _, received, errors = self.listen("clients", deliver_initial=False)
        with mock.patch.object(store, "fetch_all", side_effect=RuntimeError("offline")):
            with self.assertLogs("booking.store", level="ERROR"):
                store.broadcast("clients")
        self.assertEqual(received, [])
        self.assertEqual(str(errors[0]), "offline")

    def test_failing_listener_does_not_break_writes(self):
        def explode(documents):
            raise ValueError("bad listener")

        self.subs.append(store.subscribe("clients", explode, deliver_initial=False))
        _, received, _ = self.listen("clients", deliver_initial=False)

        with self.assertLogs("booking.store", level="ERROR"):
            with self.captureOnCommitCallbacks(execute=True):
                Client.objects.create(display_name="Sarah Johnson")
        self.assertEqual(Client.objects.count(), 1)
        self.assertEqual(len(received), 1)
