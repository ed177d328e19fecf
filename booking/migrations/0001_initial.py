import booking.models
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Client",
            fields=[
                ("id", models.CharField(default=booking.models.new_document_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ("display_name", models.CharField(max_length=200)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("phone", models.CharField(blank=True, max_length=20)),
                ("is_client", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["display_name"],
            },
        ),
        migrations.CreateModel(
            name="Stylist",
            fields=[
                ("id", models.CharField(default=booking.models.new_document_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("specialties", models.JSONField(blank=True, default=list)),
                ("rating", models.DecimalField(decimal_places=1, default=5, max_digits=3, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ("experience", models.CharField(blank=True, max_length=200)),
                ("phone", models.CharField(blank=True, max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.CharField(default=booking.models.new_document_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ("customer_name", models.CharField(max_length=200)),
                ("customer_email", models.CharField(blank=True, max_length=254)),
                ("customer_phone", models.CharField(blank=True, max_length=20)),
                ("customer_id", models.CharField(blank=True, max_length=64)),
                ("service", models.CharField(blank=True, max_length=200)),
                ("services", models.JSONField(blank=True, default=list)),
                ("service_id", models.CharField(blank=True, max_length=64)),
                ("duration", models.PositiveIntegerField(blank=True, null=True)),
                ("stylist", models.CharField(blank=True, max_length=200)),
                ("stylist_id", models.CharField(blank=True, max_length=64)),
                ("date", models.CharField(help_text="Calendar day, YYYY-MM-DD", max_length=10)),
                ("time", models.CharField(blank=True, max_length=20)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("confirmed", "Confirmed"), ("completed", "Completed"), ("cancelled", "Cancelled")], default="pending", help_text="Booking lifecycle status", max_length=10)),
                ("type", models.CharField(choices=[("admin", "In-shop"), ("client", "Online")], default="client", max_length=10)),
                ("amount", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("revenue", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("payment_method", models.CharField(blank=True, choices=[("mpesa", "M-Pesa"), ("cash", "Cash")], max_length=10)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
