"""
delete_bot_data.py
------------------
Removes everything that belongs to the demo clients (client1..client3) and
clears the sample-data flag.

Usage:
    python manage.py delete_bot_data
"""

from django.core.management.base import BaseCommand

from booking.services.sample_data import delete_bot_data


class Command(BaseCommand):
    help = "Delete demo (bot) clients and their bookings, conversations and messages."

    def handle(self, *args, **options):
        counts = delete_bot_data()
        self.stdout.write(self.style.SUCCESS(
            "Bot data removed: "
            f"{counts['bookings']} bookings, {counts['clients']} clients, "
            f"{counts['conversations']} conversations, {counts['messages']} messages"
        ))
