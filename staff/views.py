# staff/views.py
#
# Purpose:
# - Stylist directory for the admin console and the booking form.
#   * GET is public (the booking form lists stylists).
#   * Create/update/delete are staff only.
#
import logging

from rest_framework import viewsets
from rest_framework.permissions import BasePermission

from booking.models import Stylist
from .serializers import StylistSerializer

log = logging.getLogger(__name__)


class IsStaffOrReadOnly(BasePermission):
    """
    Read: anyone
    Write: staff only
    """
    def has_permission(self, request, view):
        if request.method in ("GET", "HEAD", "OPTIONS"):
            return True
        return bool(request.user and request.user.is_staff)


class StylistViewSet(viewsets.ModelViewSet):
    queryset = Stylist.objects.all().order_by("name")
    serializer_class = StylistSerializer
    permission_classes = [IsStaffOrReadOnly]

    def perform_create(self, serializer):
        stylist = serializer.save()
        log.info("Stylist %s added (%s)", stylist.pk, stylist.name)

    def perform_destroy(self, instance):
        log.info("Stylist %s removed (%s)", instance.pk, instance.name)
        instance.delete()
