"""
seed_sample_data.py
-------------------
Seeds demo clients, bookings, conversations and a welcome notification for a
fresh admin console. Runs once; use reset_sample_data to allow a re-run.

Usage:
    python manage.py seed_sample_data
    python manage.py seed_sample_data --admin-id <uid>
"""

from django.conf import settings
from django.core.management.base import BaseCommand

from booking.services.sample_data import seed_sample_data


class Command(BaseCommand):
    help = "Seed demo data for the admin dashboard (once)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--admin-id",
            default=None,
            help="User id that receives the welcome notification (default: SALON_ADMIN_ID).",
        )

    def handle(self, *args, **options):
        admin_id = options["admin_id"] or settings.SALON_ADMIN_ID
        if seed_sample_data(admin_id):
            self.stdout.write(self.style.SUCCESS("Sample data initialized."))
        else:
            self.stdout.write("Sample data skipped (already initialized or disabled).")
