# booking/apps.py
from django.apps import AppConfig


class BookingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "booking"

    def ready(self):
        # Wire model signals to the document store so subscribers get snapshots
        from . import store

        store.connect_signals()
