# beautyexpress/urls.py
#
# Purpose:
# - Project URL router.
# - Every JSON API lives under /api/; the Django admin stays at /admin/.
#
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static


urlpatterns = [
    # Django admin
    path("admin/", admin.site.urls),

    # =====
    # API's
    # =====
    path("api/", include("booking.urls")),
    path("api/", include("staff.urls")),
    path("api/", include("messaging.urls")),
    path("api/", include("notifications.urls")),
    path("api/reports/", include("reports.urls")),
    path("api/mpesa/", include("payments.urls")),
]

# Static files in DEBUG (dev only). In production, serve via web server / CDN.
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
