# notifications/apps.py
from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "In-app notifications"

    def ready(self):
        # Booking receivers: "New Booking Request", "Booking <Status>"
        import notifications.signals  # noqa: F401
