# reports/revenue.py
#
# Purpose:
# - On-demand revenue breakdown for the admin "Revenue Metrics" view.
#
# What it returns:
# - daily:    last 7 calendar days (oldest first), one row per day
# - weekly:   last 4 seven-day windows (oldest first)
# - services: revenue per service name, highest revenue first
# - totals:   grand revenue, booking count, average value, top service
#
# Notes for developers:
# - All bookings are read in one go and filtered to status == "completed" in
#   Python. Fine while the collection is small; switch to DB aggregation
#   (Sum/Count grouped by date/service) once it is not.
# - Money uses reports.stats.booking_amount (amount -> revenue -> price).
# - Weekly windows compare calendar dates, both ends inclusive:
#   window k covers [today - 7k - 6, today - 7k]. A booking whose date
#   string does not parse falls in no window.
#
import logging
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone
from django.utils.dateparse import parse_date

from booking import store

from .stats import COMPLETED, booking_amount

log = logging.getLogger(__name__)

DAYS = 7
WEEKS = 4
UNKNOWN_SERVICE = "Unknown Service"
NO_SERVICE = "None"

CENTS = Decimal("0.01")


def completed_only(bookings):
    return [b for b in bookings if b.get("status") == COMPLETED]


def booking_day(booking):
    """Parse a booking's date into a date, or None if it is missing/malformed."""
    raw = booking.get("date")
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return parse_date(raw.strip())
    except ValueError:
        # Well-formed but impossible dates, e.g. 2025-02-30
        return None


def _average(total: Decimal, count: int) -> Decimal:
    if count == 0:
        return Decimal("0")
    return (total / count).quantize(CENTS, rounding=ROUND_HALF_UP)


def summarize(bookings) -> dict:
    revenue = sum((booking_amount(b) for b in bookings), Decimal("0"))
    count = len(bookings)
    return {
        "revenue": revenue,
        "bookings": count,
        "average_booking_value": _average(revenue, count),
    }


def daily_series(completed, today: date) -> list:
    rows = []
    for offset in range(DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        key = day.isoformat()
        day_bookings = [b for b in completed if b.get("date") == key]
        rows.append({"date": key, "label": day.strftime("%b %d"), **summarize(day_bookings)})
    return rows


def weekly_series(completed, today: date) -> list:
    dated = [(booking_day(b), b) for b in completed]
    undated = sum(1 for day, _ in dated if day is None)
    if undated:
        log.debug("Skipping %d completed booking(s) with unparseable dates", undated)

    rows = []
    for k in range(WEEKS - 1, -1, -1):
        end = today - timedelta(days=7 * k)
        start = end - timedelta(days=6)
        week = [b for day, b in dated if day is not None and start <= day <= end]
        rows.append({
            "label": f"Week {WEEKS - k}",
            "start": start.isoformat(),
            "end": end.isoformat(),
            **summarize(week),
        })
    return rows


def service_breakdown(completed) -> list:
    groups = {}
    for booking in completed:
        name = booking.get("service") or UNKNOWN_SERVICE
        entry = groups.setdefault(name, {
            "service_name": name,
            "total_revenue": Decimal("0"),
            "booking_count": 0,
        })
        entry["total_revenue"] += booking_amount(booking)
        entry["booking_count"] += 1

    for entry in groups.values():
        entry["average_price"] = _average(entry["total_revenue"], entry["booking_count"])

    return sorted(groups.values(), key=lambda e: e["total_revenue"], reverse=True)


def totals(completed, services) -> dict:
    summary = summarize(completed)
    return {
        "total_revenue": summary["revenue"],
        "total_bookings": summary["bookings"],
        "average_booking_value": summary["average_booking_value"],
        "top_service": services[0]["service_name"] if services else NO_SERVICE,
    }


class RevenueMetricsReporter:
    """
    Builds the full revenue report from one bulk read of the bookings.

    `fetch` is store.fetch_all by default; tests can pass a stub returning
    plain booking dicts.
    """

    def __init__(self, fetch=None):
        self._fetch = fetch or store.fetch_all

    def report(self, today=None) -> dict:
        today = today or timezone.localdate()

        all_bookings = self._fetch("bookings", order_by=["-created_at"])
        completed = completed_only(all_bookings)
        log.info(
            "Fetched %d total bookings, %d completed for metrics",
            len(all_bookings),
            len(completed),
        )

        services = service_breakdown(completed)
        return {
            "generated_for": today.isoformat(),
            "daily": daily_series(completed, today),
            "weekly": weekly_series(completed, today),
            "services": services,
            "totals": totals(completed, services),
        }
