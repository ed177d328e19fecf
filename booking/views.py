# booking/views.py
#
# Purpose:
# - Booking API: public online booking, staff-only listing, in-shop bookings
#   and status updates.
# - Client directory (staff only).
# - Static service catalog for the booking form.
#
# Permissions:
#   * POST /api/bookings/ needs NO login (customers book from the website).
#   * Everything else under /api/bookings/ and /api/clients/ is staff only.
#
# Notes for developers:
# - Bookings are created through BookingManager, never via serializer.save(),
#   so that price/revenue and type/status are set consistently.
# - Write failures (DatabaseError) come back as 500 {"detail": ...}; the
#   admin UI shows that text in its error toast.
#
import logging

from django.db import DatabaseError
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, BasePermission
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Booking, Client, Stylist
from .serializers import (
    BookingSerializer,
    BookingStatusSerializer,
    ClientSerializer,
    InShopBookingSerializer,
    OnlineBookingSerializer,
)
from .services.booking_manager import BookingManager, filter_bookings
from .services.catalog import SERVICE_CATALOG

log = logging.getLogger(__name__)


# -------------------- Permissions --------------------
class IsStaffOnly(BasePermission):
    def has_permission(self, request, view):
        return bool(request.user and request.user.is_staff)


# -------------------- ViewSets --------------------
class BookingViewSet(viewsets.ModelViewSet):
    """
    Endpoints:
    - GET    /api/bookings/?status=&search=   list, newest first (staff)
    - POST   /api/bookings/                   online booking (public)
    - POST   /api/bookings/in-shop/           walk-in booking (staff)
    - POST   /api/bookings/{id}/status/       change status (staff)
    """
    queryset = Booking.objects.all().order_by("-created_at")
    serializer_class = BookingSerializer
    http_method_names = ["get", "post", "delete", "head", "options"]
    manager = BookingManager()

    def get_permissions(self):
        if self.action == "create":
            return [AllowAny()]
        return [IsStaffOnly()]

    def get_queryset(self):
        qs = super().get_queryset()
        if self.action != "list":
            return qs
        params = self.request.query_params
        return filter_bookings(qs, status=params.get("status"), search=params.get("search"))

    def create(self, request, *args, **kwargs):
        form = OnlineBookingSerializer(data=request.data)
        form.is_valid(raise_exception=True)
        data = form.validated_data

        stylist_name = ""
        if data.get("stylist_id"):
            stylist_name = Stylist.objects.get(pk=data["stylist_id"]).name

        try:
            booking = self.manager.create_online_booking(data, stylist_name=stylist_name)
        except ValueError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except DatabaseError:
            log.exception("Error creating online booking")
            return Response(
                {"detail": "Failed to create booking. Please try again."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        out = BookingSerializer(booking)
        headers = self.get_success_headers(out.data)
        return Response(out.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(detail=False, methods=["post"], url_path="in-shop")
    def in_shop(self, request):
        form = InShopBookingSerializer(data=request.data)
        form.is_valid(raise_exception=True)

        try:
            booking = self.manager.create_in_shop_booking(form.validated_data)
        except DatabaseError:
            log.exception("Error creating in-shop booking")
            return Response(
                {"detail": "Failed to create booking. Please try again."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, pk=None):
        booking = self.get_object()
        form = BookingStatusSerializer(data=request.data)
        form.is_valid(raise_exception=True)

        try:
            self.manager.update_status(
                booking,
                form.validated_data["status"],
                payment_method=form.validated_data.get("payment_method"),
            )
        except DatabaseError:
            return Response(
                {"detail": "Failed to update booking status. Please try again."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(BookingSerializer(booking).data)


class ClientViewSet(viewsets.ModelViewSet):
    queryset = Client.objects.all().order_by("display_name")
    serializer_class = ClientSerializer
    permission_classes = [IsStaffOnly]


class ServiceCatalogView(APIView):
    """GET /api/services/ - the fixed menu shown on the booking form."""
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(SERVICE_CATALOG)
