"""
stats.py
--------
Live dashboard figures for the admin overview.

Figures:
- todays_bookings   bookings whose date is today (any status)
- revenue_today     money from today's completed bookings
- mpesa_count /
  cash_count /
  total_payments    completed bookings per payment method (all dates)
- stylist_stats     per stylist_id: completed count and revenue
- pending_messages  sum of unread counters over all conversations
- active_customers  number of client records

How it stays fresh:
- Three independent channels feed the figures: bookings, conversations and
  clients. Each channel owns a fixed set of fields (CHANNEL_FIELDS) and
  recomputes them from the full collection snapshot it receives.
- merge_stats() is the only way a channel's values enter the shared
  snapshot. It copies the channel's own fields and nothing else, so the
  channels can arrive in any order.
- StatsAggregator first runs one bulk validation pass. Only after it
  succeeds are the subscriptions opened.
- Listeners only see writes from this process. refresh_if_stale() repeats
  the bulk pass once the last one is older than STATS_REFRESH_INTERVAL
  seconds, which brings in writes from other workers and commands.

Failure policy:
- A channel error is logged and its fields keep their previous values.
- If a channel delivers nothing within the first-snapshot timeout, its fields
  are forced to their empty values so the dashboard does not sit loading.
"""

import logging
import threading
import time
from datetime import date
from decimal import Decimal, InvalidOperation
from functools import partial

from django.conf import settings
from django.utils import timezone

from booking import store

log = logging.getLogger(__name__)

COMPLETED = "completed"
PAYMENT_METHODS = ("mpesa", "cash")

CHANNEL_FIELDS = {
    "bookings": (
        "todays_bookings",
        "revenue_today",
        "mpesa_count",
        "cash_count",
        "total_payments",
        "stylist_stats",
    ),
    "conversations": ("pending_messages",),
    "clients": ("active_customers",),
}


# -------------------- Helpers --------------------
def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def booking_amount(booking) -> Decimal:
    """
    Money value of a booking: amount, else revenue, else price, else 0.
    The first non-empty, non-zero field wins. Keep this order.
    """
    value = booking.get("amount") or booking.get("revenue") or booking.get("price") or 0
    return to_decimal(value)


def today_str(today=None) -> str:
    """Current local calendar day as YYYY-MM-DD (evaluated on every call)."""
    if today is None:
        today = timezone.localdate()
    if isinstance(today, date):
        return today.isoformat()
    return str(today)


def empty_stats() -> dict:
    return {
        "todays_bookings": 0,
        "pending_messages": 0,
        "active_customers": 0,
        "revenue_today": Decimal("0"),
        "mpesa_count": 0,
        "cash_count": 0,
        "total_payments": 0,
        "stylist_stats": [],
        "last_update": None,
    }


def empty_slice(channel: str) -> dict:
    blank = empty_stats()
    return {field: blank[field] for field in CHANNEL_FIELDS[channel]}


# -------------------- Slice computations --------------------
def compute_stylist_stats(bookings, stylists=()) -> list:
    """
    Completed count and revenue per stylist_id.

    Bookings without a stylist_id are ignored. Stylists passed in `stylists`
    are listed even when they have no bookings.
    """
    by_id = {}
    for stylist in stylists:
        by_id[stylist["id"]] = {
            "id": stylist["id"],
            "name": stylist.get("name", ""),
            "count": 0,
            "revenue": Decimal("0"),
        }

    for booking in bookings:
        stylist_id = booking.get("stylist_id")
        if not stylist_id:
            continue
        entry = by_id.setdefault(stylist_id, {
            "id": stylist_id,
            "name": booking.get("stylist") or "",
            "count": 0,
            "revenue": Decimal("0"),
        })
        if booking.get("status") == COMPLETED:
            entry["count"] += 1
            entry["revenue"] += booking_amount(booking)

    return list(by_id.values())


def compute_booking_stats(bookings, today=None, stylists=()) -> dict:
    current_day = today_str(today)

    todays = [b for b in bookings if b.get("date") == current_day]
    revenue = sum(
        (booking_amount(b) for b in todays if b.get("status") == COMPLETED),
        Decimal("0"),
    )

    completed = [b for b in bookings if b.get("status") == COMPLETED]
    method_counts = {method: 0 for method in PAYMENT_METHODS}
    for booking in completed:
        method = booking.get("payment_method")
        if method in method_counts:
            method_counts[method] += 1

    return {
        "todays_bookings": len(todays),
        "revenue_today": revenue,
        "mpesa_count": method_counts["mpesa"],
        "cash_count": method_counts["cash"],
        "total_payments": sum(method_counts.values()),
        "stylist_stats": compute_stylist_stats(bookings, stylists),
    }


def compute_conversation_stats(conversations) -> dict:
    return {"pending_messages": sum(int(c.get("unread_count") or 0) for c in conversations)}


def compute_client_stats(clients) -> dict:
    return {"active_customers": len(clients)}


def merge_stats(prev: dict, channel: str, values: dict, now=None) -> dict:
    """
    Reducer: new snapshot = prev with the channel's own fields replaced.
    Fields owned by other channels are never touched, even if present in values.
    """
    merged = dict(prev)
    for field in CHANNEL_FIELDS[channel]:
        if field in values:
            merged[field] = values[field]
    merged["last_update"] = now or timezone.now()
    return merged


# -------------------- Aggregator --------------------
class StatsAggregator:
    """
    Keeps the dashboard snapshot current.

    Lifecycle:
        agg = StatsAggregator()
        agg.start()        # validation pass, then live subscriptions
        agg.snapshot()     # read at any time
        agg.refresh_if_stale()  # pick up writes from other processes
        agg.stop()         # unsubscribe on teardown
    """

    def __init__(self, fetch=None, subscribe=None, first_snapshot_timeout=None, refresh_interval=None):
        self._fetch = fetch or store.fetch_all
        self._subscribe = subscribe or store.subscribe
        if first_snapshot_timeout is None:
            first_snapshot_timeout = getattr(settings, "STATS_FIRST_SNAPSHOT_TIMEOUT", 5)
        self.first_snapshot_timeout = first_snapshot_timeout
        if refresh_interval is None:
            refresh_interval = getattr(settings, "STATS_REFRESH_INTERVAL", 30)
        self.refresh_interval = refresh_interval

        self._lock = threading.RLock()
        self._stats = empty_stats()
        self._stylists = []
        self._subscriptions = {}
        self._timers = {}
        self._received = set()
        self.validated = False
        self._refreshed_at = None

    # ---- reading ----
    @property
    def stats(self) -> dict:
        with self._lock:
            return dict(self._stats)

    @property
    def running(self) -> bool:
        return bool(self._subscriptions)

    def snapshot(self) -> dict:
        data = self.stats
        data["validated"] = self.validated
        return data

    # ---- validation pass ----
    def run_validation(self) -> bool:
        """
        One-off bulk read of every collection the dashboard uses.
        Returns True on success; on failure logs and leaves validated False.
        """
        log.info("Running system validation...")
        try:
            bookings = self._fetch("bookings")
            stylists = self._fetch("stylists")
            conversations = self._fetch("conversations")
            clients = self._fetch("clients")
        except Exception:
            log.exception("System validation failed")
            return False

        now = timezone.now()
        known_stylists = [{"id": s["id"], "name": s.get("name", "")} for s in stylists]

        stats = empty_stats()
        stats = merge_stats(stats, "bookings", compute_booking_stats(bookings, stylists=known_stylists), now)
        stats = merge_stats(stats, "conversations", compute_conversation_stats(conversations), now)
        stats = merge_stats(stats, "clients", compute_client_stats(clients), now)

        with self._lock:
            self._stylists = known_stylists
            self._stats = stats
            self.validated = True
            self._refreshed_at = time.monotonic()

        log.info(
            "System validated: %s bookings, %s messages, %s customers, Ksh%s revenue",
            stats["todays_bookings"],
            stats["pending_messages"],
            stats["active_customers"],
            stats["revenue_today"],
        )
        return True

    def refresh_if_stale(self) -> bool:
        """
        Re-read every collection when the last full read is older than
        refresh_interval seconds. Listeners only hear about writes made in
        this process; this catches the rest (other workers, management
        commands). A negative interval disables it.

        Returns True when a re-read ran and succeeded.
        """
        if self.refresh_interval < 0:
            return False
        with self._lock:
            last = self._refreshed_at
        if last is not None and time.monotonic() - last < self.refresh_interval:
            return False
        return self.run_validation()

    # ---- live phase ----
    def start(self) -> bool:
        """
        Validate (if not done yet) and open the three subscriptions.
        Returns False, without subscribing, when validation fails.
        """
        if self.running:
            return True
        if not self.validated and not self.run_validation():
            return False

        log.info("Setting up real-time listeners...")
        for channel in CHANNEL_FIELDS:
            self._arm_timeout(channel)
            self._subscriptions[channel] = self._subscribe(
                channel,
                partial(self._on_snapshot, channel),
                partial(self._on_error, channel),
            )
        return True

    def stop(self):
        for sub in self._subscriptions.values():
            sub.unsubscribe()
        self._subscriptions.clear()
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
            self._received.clear()

    def compute(self, channel: str, documents) -> dict:
        if channel == "bookings":
            return compute_booking_stats(documents, stylists=self._stylists)
        if channel == "conversations":
            return compute_conversation_stats(documents)
        if channel == "clients":
            return compute_client_stats(documents)
        raise ValueError(f"Unknown stats channel: {channel}")

    def _on_snapshot(self, channel, documents):
        values = self.compute(channel, documents)
        with self._lock:
            self._received.add(channel)
            timer = self._timers.pop(channel, None)
            if timer is not None:
                timer.cancel()
            self._stats = merge_stats(self._stats, channel, values)

    def _on_error(self, channel, exc):
        # Fields of this channel stay as they were
        log.error("%s listener error: %s", channel.capitalize(), exc)

    def _arm_timeout(self, channel):
        if not self.first_snapshot_timeout or self.first_snapshot_timeout <= 0:
            return
        timer = threading.Timer(self.first_snapshot_timeout, self._on_first_snapshot_timeout, args=(channel,))
        timer.daemon = True
        with self._lock:
            self._timers[channel] = timer
        timer.start()

    def _on_first_snapshot_timeout(self, channel):
        with self._lock:
            self._timers.pop(channel, None)
            if channel in self._received:
                return
            self._stats = merge_stats(self._stats, channel, empty_slice(channel))
        log.warning(
            "No %s snapshot within %ss; showing empty values",
            channel,
            self.first_snapshot_timeout,
        )


# -------------------- Process-wide dashboard --------------------
_aggregator = None
_aggregator_lock = threading.Lock()


def get_aggregator() -> StatsAggregator:
    """
    Shared aggregator behind the stats endpoint. Started on first use; if
    validation failed earlier, every call tries again.
    """
    global _aggregator
    with _aggregator_lock:
        if _aggregator is None:
            _aggregator = StatsAggregator()
        if not _aggregator.running:
            _aggregator.start()
        return _aggregator


def shutdown_aggregator():
    global _aggregator
    with _aggregator_lock:
        if _aggregator is not None:
            _aggregator.stop()
        _aggregator = None
