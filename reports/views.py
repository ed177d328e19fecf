# reports/views.py

import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import BasePermission
from rest_framework import status

from .revenue import RevenueMetricsReporter
from .stats import get_aggregator

log = logging.getLogger(__name__)


class IsStaffOnly(BasePermission):
    """
    Only allow requests from logged-in staff users.
    """
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_staff)


class StatsView(APIView):
    """
    GET /api/reports/stats

    Live dashboard snapshot:
    - todays_bookings, revenue_today
    - pending_messages, active_customers
    - mpesa_count, cash_count, total_payments
    - stylist_stats: [{ "id", "name", "count", "revenue" }, ...]
    - last_update, validated

    While "validated" is false the figures are placeholders and the
    dashboard should keep showing its loading state.
    """
    permission_classes = [IsStaffOnly]

    def get(self, request):
        aggregator = get_aggregator()
        aggregator.refresh_if_stale()
        return Response(aggregator.snapshot())


class RevenueView(APIView):
    """
    GET /api/reports/revenue

    Returns JSON with:
    - daily:    [{ "date", "label", "revenue", "bookings", "average_booking_value" }] x 7
    - weekly:   [{ "label", "start", "end", "revenue", "bookings", "average_booking_value" }] x 4
    - services: [{ "service_name", "total_revenue", "booking_count", "average_price" }, ...]
    - totals:   { "total_revenue", "total_bookings", "average_booking_value", "top_service" }
    """
    permission_classes = [IsStaffOnly]
    reporter_class = RevenueMetricsReporter

    def get(self, request):
        try:
            data = self.reporter_class().report()
        except Exception:
            log.exception("Error fetching revenue data")
            return Response(
                {"detail": "Unable to load revenue data."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(data)
