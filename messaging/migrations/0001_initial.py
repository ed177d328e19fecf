import booking.models
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Conversation",
            fields=[
                ("id", models.CharField(default=booking.models.new_document_id, max_length=64, primary_key=True, serialize=False)),
                ("customer_name", models.CharField(max_length=200)),
                ("customer_email", models.CharField(blank=True, max_length=254)),
                ("customer_id", models.CharField(blank=True, max_length=64)),
                ("last_message", models.TextField(blank=True)),
                ("last_message_time", models.DateTimeField(default=django.utils.timezone.now)),
                ("unread_count", models.PositiveIntegerField(default=0)),
            ],
            options={
                "ordering": ["-last_message_time"],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                ("id", models.CharField(default=booking.models.new_document_id, editable=False, max_length=64, primary_key=True, serialize=False)),
                ("sender_id", models.CharField(max_length=64)),
                ("sender_name", models.CharField(max_length=200)),
                ("sender_type", models.CharField(choices=[("admin", "Admin"), ("customer", "Customer")], max_length=10)),
                ("text", models.TextField()),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                ("conversation", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="messages", to="messaging.conversation")),
            ],
            options={
                "ordering": ["timestamp"],
            },
        ),
    ]
