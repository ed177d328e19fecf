from django.core.management.base import BaseCommand

from booking.services.sample_data import reset_sample_data


class Command(BaseCommand):
    help = "Clear the sample-data flag so seed_sample_data runs again."

    def handle(self, *args, **options):
        if reset_sample_data():
            self.stdout.write(self.style.SUCCESS("Sample data flag cleared."))
        else:
            self.stdout.write("Sample data flag was not set.")
