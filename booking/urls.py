# booking/urls.py
#
# Purpose:
# - Expose REST API endpoints for the booking app via DRF router
# - Serve the static service catalog used by the booking form
#
# Notes for developers:
# - The REST API routes are registered using DefaultRouter.
# - Extra booking actions (in-shop, status) live on BookingViewSet.

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import BookingViewSet, ClientViewSet, ServiceCatalogView

# --------------------------
# DRF Router registrations
# --------------------------
router = DefaultRouter()
router.register(r"bookings", BookingViewSet, basename="booking")
router.register(r"clients", ClientViewSet, basename="client")

# --------------------------
# URL patterns
# --------------------------
urlpatterns = [
    path("", include(router.urls)),
    path("services/", ServiceCatalogView.as_view(), name="service-catalog"),
]
