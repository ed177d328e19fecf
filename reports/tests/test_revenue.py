# reports/tests/test_revenue.py

from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth.models import User
from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient

from reports.revenue import RevenueMetricsReporter, booking_day

TODAY = date(2025, 6, 10)


def days_ago(n):
    return (TODAY - timedelta(days=n)).isoformat()


class RevenueReportTests(SimpleTestCase):
    def report(self, bookings):
        calls = []

        def fetch(collection, order_by=None):
            calls.append((collection, order_by))
            return bookings

        data = RevenueMetricsReporter(fetch=fetch).report(today=TODAY)
        self.assertEqual(calls, [("bookings", ["-created_at"])])
        return data

    def test_series_shape_on_empty_data(self):
        data = self.report([])
        self.assertEqual(len(data["daily"]), 7)
        self.assertEqual(len(data["weekly"]), 4)
        self.assertEqual(data["services"], [])
        self.assertEqual(data["totals"]["top_service"], "None")
        self.assertEqual(data["totals"]["total_revenue"], Decimal("0"))
        self.assertEqual(data["totals"]["average_booking_value"], Decimal("0"))

    def test_daily_series_oldest_first(self):
        data = self.report([])
        dates = [row["date"] for row in data["daily"]]
        self.assertEqual(dates[0], days_ago(6))
        self.assertEqual(dates[-1], TODAY.isoformat())
        self.assertEqual(dates, sorted(dates))
        self.assertEqual(data["daily"][-1]["label"], "Jun 10")

    def test_daily_values(self):
        data = self.report([
            {"date": days_ago(0), "status": "completed", "amount": 500},
            {"date": days_ago(0), "status": "completed", "price": 300},
            {"date": days_ago(0), "status": "pending", "amount": 999},
            {"date": days_ago(2), "status": "completed", "revenue": 800},
        ])
        today_row = data["daily"][-1]
        self.assertEqual(today_row["revenue"], Decimal("800"))
        self.assertEqual(today_row["bookings"], 2)
        self.assertEqual(today_row["average_booking_value"], Decimal("400.00"))
        self.assertEqual(data["daily"][-3]["revenue"], Decimal("800"))

    def test_weekly_windows_inclusive(self):
        data = self.report([
            {"date": days_ago(0), "status": "completed", "amount": 100},
            {"date": days_ago(6), "status": "completed", "amount": 200},
            {"date": days_ago(7), "status": "completed", "amount": 400},
            {"date": days_ago(27), "status": "completed", "amount": 800},
            {"date": days_ago(28), "status": "completed", "amount": 1600},
        ])
        weekly = data["weekly"]
        self.assertEqual([w["label"] for w in weekly], ["Week 1", "Week 2", "Week 3", "Week 4"])
        self.assertEqual(weekly[-1]["revenue"], Decimal("300"))
        self.assertEqual(weekly[-2]["revenue"], Decimal("400"))
        self.assertEqual(weekly[0]["revenue"], Decimal("800"))
        self.assertEqual(weekly[-1]["start"], days_ago(6))
        self.assertEqual(weekly[-1]["end"], days_ago(0))

    def test_malformed_date_skipped_from_windows(self):
        data = self.report([
            {"date": "not-a-date", "status": "completed", "amount": 100},
            {"date": "2025-02-30", "status": "completed", "amount": 100},
        ])
        self.assertTrue(all(w["revenue"] == 0 for w in data["weekly"]))
        # still part of the totals
        self.assertEqual(data["totals"]["total_bookings"], 2)

    def test_services_sorted_descending(self):
        data = self.report([
            {"date": days_ago(1), "status": "completed", "service": "Acrylics", "amount": 1500},
            {"date": days_ago(1), "status": "completed", "service": "Gum Gel", "amount": 800},
            {"date": days_ago(1), "status": "completed", "service": "Gum Gel", "amount": 800},
            {"date": days_ago(1), "status": "completed", "amount": 100},
        ])
        services = data["services"]
        revenues = [s["total_revenue"] for s in services]
        self.assertEqual(revenues, sorted(revenues, reverse=True))
        self.assertEqual(services[0]["service_name"], "Gum Gel")
        self.assertEqual(services[0]["booking_count"], 2)
        self.assertEqual(services[0]["average_price"], Decimal("800.00"))
        self.assertEqual(services[-1]["service_name"], "Unknown Service")
        self.assertEqual(data["totals"]["top_service"], "Gum Gel")
        self.assertEqual(data["totals"]["total_revenue"], Decimal("3200"))

    def test_booking_day(self):
        self.assertEqual(booking_day({"date": "2025-06-10"}), TODAY)
        self.assertIsNone(booking_day({"date": "10/06/2025"}))
        self.assertIsNone(booking_day({}))


class RevenueEndpointTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.staff = User.objects.create_user(username="admin", password="pass123", is_staff=True)

    def test_requires_staff(self):
        resp = self.client.get("/api/reports/revenue")
        self.assertIn(resp.status_code, (401, 403))

    def test_report_shape(self):
        self.client.force_authenticate(self.staff)
        resp = self.client.get("/api/reports/revenue")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data["daily"]), 7)
        self.assertEqual(len(resp.data["weekly"]), 4)
        self.assertEqual(resp.data["totals"]["top_service"], "None")
