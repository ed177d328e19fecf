"""
store.py
--------
Collection-style access to the salon data, with real-time listeners.

The dashboard and reports work on "documents": plain dicts holding a record's
field values plus its id. This module maps the collection names used across
the app to Django models and offers three operations:

- fetch_all(collection)          one-off bulk read
- subscribe(collection, ...)     listener that receives the WHOLE collection
                                 every time any record in it is saved/deleted
- Subscription.unsubscribe()     detach a listener

Delivery rules:
- Listeners are driven by post_save / post_delete signals of this process.
  Delivery waits for the surrounding transaction to commit, so listeners
  never see rows that are later rolled back.
- Writes made by other processes (other workers, management commands) do
  not reach listeners here; readers that must track those re-read with
  fetch_all (see reports.stats.StatsAggregator.refresh_if_stale).
- If reading the snapshot fails, each listener's on_error is called instead.
- A listener that raises is logged and skipped. Writes never fail because a
  listener misbehaved.
- There is no ordering guarantee between different collections.
"""

import logging
import threading
from collections import defaultdict
from functools import partial

from django.apps import apps
from django.db import transaction
from django.db.models.signals import post_delete, post_save

log = logging.getLogger(__name__)

COLLECTIONS = {
    "bookings": "booking.Booking",
    "stylists": "booking.Stylist",
    "clients": "booking.Client",
    "conversations": "messaging.Conversation",
    "messages": "messaging.Message",
    "notifications": "notifications.Notification",
}

_subscribers = defaultdict(list)
_lock = threading.RLock()


class UnknownCollection(KeyError):
    pass


def get_model(collection: str):
    try:
        label = COLLECTIONS[collection]
    except KeyError:
        raise UnknownCollection(collection)
    return apps.get_model(label)


def to_document(instance) -> dict:
    """
    Flatten a model instance into a document dict.
    Foreign keys appear under their attname (e.g. "conversation_id").
    """
    doc = {f.attname: getattr(instance, f.attname) for f in instance._meta.concrete_fields}
    doc["id"] = instance.pk
    return doc


def fetch_all(collection: str, order_by=None) -> list:
    model = get_model(collection)
    qs = model.objects.all()
    if order_by:
        qs = qs.order_by(*order_by)
    return [to_document(obj) for obj in qs]


class Subscription:
    """Handle returned by subscribe(); call unsubscribe() on teardown."""

    def __init__(self, collection, on_snapshot, on_error=None):
        self.collection = collection
        self.on_snapshot = on_snapshot
        self.on_error = on_error
        self.active = True

    def unsubscribe(self):
        with _lock:
            self.active = False
            subs = _subscribers.get(self.collection, [])
            if self in subs:
                subs.remove(self)

    def __repr__(self):
        state = "active" if self.active else "closed"
        return f"<Subscription {self.collection} {state}>"


def subscribe(collection: str, on_snapshot, on_error=None, deliver_initial=True) -> Subscription:
    """
    Register a listener on a collection.

    on_snapshot(documents) receives the full list of documents.
    on_error(exc) receives read failures; when omitted they are only logged.
    With deliver_initial=True the current snapshot is pushed right away.
    """
    get_model(collection)  # fail fast on a typo
    sub = Subscription(collection, on_snapshot, on_error)
    with _lock:
        _subscribers[collection].append(sub)
    log.debug("Subscribed to %s (%d listener(s))", collection, len(_subscribers[collection]))

    if deliver_initial:
        _deliver(collection, [sub])
    return sub


def subscriber_count(collection: str) -> int:
    with _lock:
        return len(_subscribers.get(collection, []))


def _deliver(collection, subs):
    subs = [s for s in subs if s.active]
    if not subs:
        return

    try:
        documents = fetch_all(collection)
    except Exception as exc:
        log.error("Snapshot read for %s failed: %s", collection, exc)
        for sub in subs:
            if sub.on_error is None:
                continue
            try:
                sub.on_error(exc)
            except Exception:
                log.exception("Error handler for %s raised", collection)
        return

    for sub in subs:
        try:
            sub.on_snapshot(list(documents))
        except Exception:
            log.exception("Listener on %s raised; skipping it for this snapshot", collection)


def broadcast(collection: str):
    """Push the current snapshot of `collection` to all of its listeners."""
    with _lock:
        subs = list(_subscribers.get(collection, []))
    _deliver(collection, subs)


def _collection_for(model):
    label = model._meta.label
    for name, model_label in COLLECTIONS.items():
        if model_label == label:
            return name
    return None


def _on_change(sender, **kwargs):
    collection = _collection_for(sender)
    if collection:
        # runs immediately when not inside atomic(); dropped on rollback
        transaction.on_commit(partial(broadcast, collection), using=kwargs.get("using"))


def connect_signals():
    """Hook every collection model's save/delete signals (idempotent)."""
    for name in COLLECTIONS:
        model = get_model(name)
        post_save.connect(_on_change, sender=model, dispatch_uid=f"store-save-{name}")
        post_delete.connect(_on_change, sender=model, dispatch_uid=f"store-delete-{name}")
