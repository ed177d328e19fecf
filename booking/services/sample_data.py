"""
sample_data.py
--------------
Demo data for a fresh admin console, plus the clean-up utilities that go
with it.

- seed_sample_data(admin_id): 3 bot clients (client1..client3), one completed
  booking each for today, 2 conversations, 3 messages and a welcome
  notification. Runs once: guarded by the SAMPLE_DATA_INITIALIZED flag and
  skipped entirely while SAMPLE_DATA_DISABLED is set.
- delete_bot_data(): remove everything that belongs to the bot clients and
  clear the initialized flag so the next seed runs again.
- reset_sample_data(): clear the initialized flag only.
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from configmgr import flags
from messaging.models import Conversation, Message
from notifications.models import Notification

from ..models import Booking, Client

log = logging.getLogger(__name__)

BOT_CLIENT_IDS = ["client1", "client2", "client3"]

SAMPLE_CLIENTS = [
    {"id": "client1", "display_name": "Sarah Johnson", "email": "sarah@example.com", "phone": "+1234567890"},
    {"id": "client2", "display_name": "Maria Garcia", "email": "maria@example.com", "phone": "+1234567891"},
    {"id": "client3", "display_name": "Lisa Chen", "email": "lisa@example.com", "phone": "+1234567892"},
]

SAMPLE_BOOKINGS = [
    {"customer_id": "client1", "service": "Gel + Artwork", "stylist": "Sarah",
     "time": "10:00 AM", "notes": "Regular customer", "revenue": Decimal("500")},
    {"customer_id": "client2", "service": "Pedicure + Gel", "stylist": "Emma",
     "time": "2:00 PM", "notes": "First time client", "revenue": Decimal("800")},
    {"customer_id": "client3", "service": "Acrylics", "stylist": "Lisa",
     "time": "4:00 PM", "notes": "Special design requested", "revenue": Decimal("1500")},
]

SAMPLE_CONVERSATIONS = [
    {"id": "client1_admin", "customer_id": "client1",
     "last_message": "Thank you for confirming my appointment!", "unread_count": 1},
    {"id": "client2_admin", "customer_id": "client2",
     "last_message": "What time slots do you have available?", "unread_count": 2},
]

# (sender is the customer?, text); all in client1_admin
SAMPLE_MESSAGES = [
    (True, "Hi! I'd like to book an appointment"),
    (False, "Of course! What service are you interested in?"),
    (True, "Thank you for confirming my appointment!"),
]


def _client(client_id):
    return next(c for c in SAMPLE_CLIENTS if c["id"] == client_id)


@transaction.atomic
def seed_sample_data(admin_id) -> bool:
    """Create the demo records. Returns True if anything was written."""
    if flags.is_set(flags.SAMPLE_DATA_DISABLED):
        log.info("Sample data initialization is disabled")
        return False
    if flags.is_set(flags.SAMPLE_DATA_INITIALIZED):
        log.info("Sample data already initialized")
        return False

    log.info("Initializing sample data for admin %s", admin_id)
    today = timezone.localdate().isoformat()
    now = timezone.now()

    for c in SAMPLE_CLIENTS:
        Client.objects.update_or_create(id=c["id"], defaults={**c, "is_client": True})

    for b in SAMPLE_BOOKINGS:
        client = _client(b["customer_id"])
        Booking.objects.create(
            customer_id=client["id"],
            customer_name=client["display_name"],
            customer_email=client["email"],
            customer_phone=client["phone"],
            service=b["service"],
            services=[b["service"]],
            stylist=b["stylist"],
            date=today,
            time=b["time"],
            status=Booking.STATUS_COMPLETED,
            # admin type: seeded bookings do not raise "New Booking Request"
            type=Booking.TYPE_ADMIN,
            notes=b["notes"],
            revenue=b["revenue"],
        )

    for conv in SAMPLE_CONVERSATIONS:
        client = _client(conv["customer_id"])
        Conversation.objects.update_or_create(
            id=conv["id"],
            defaults={
                "customer_id": client["id"],
                "customer_name": client["display_name"],
                "customer_email": client["email"],
                "last_message": conv["last_message"],
                "last_message_time": now,
                "unread_count": conv["unread_count"],
            },
        )

    sarah = _client("client1")
    for from_customer, text in SAMPLE_MESSAGES:
        Message.objects.create(
            conversation_id="client1_admin",
            sender_id=sarah["id"] if from_customer else admin_id,
            sender_name=sarah["display_name"] if from_customer else "Admin",
            sender_type=Message.SENDER_CUSTOMER if from_customer else Message.SENDER_ADMIN,
            text=text,
            timestamp=now,
        )

    Notification.objects.create(
        user_id=admin_id,
        title="Welcome Admin!",
        message="Sample data has been initialized successfully",
        type="message",
    )

    flags.set_flag(flags.SAMPLE_DATA_INITIALIZED)
    log.info("Sample data initialized successfully")
    return True


@transaction.atomic
def delete_bot_data() -> dict:
    """Remove bot client records; returns how many of each were deleted."""
    bookings, _ = Booking.objects.filter(customer_id__in=BOT_CLIENT_IDS).delete()
    clients, _ = Client.objects.filter(id__in=BOT_CLIENT_IDS).delete()
    messages, _ = Message.objects.filter(sender_id__in=BOT_CLIENT_IDS).delete()
    # counted before the cascade takes the admin replies with it
    conversations = Conversation.objects.filter(customer_id__in=BOT_CLIENT_IDS)
    conversation_count = conversations.count()
    conversations.delete()

    flags.clear_flag(flags.SAMPLE_DATA_INITIALIZED)

    counts = {
        "bookings": bookings,
        "clients": clients,
        "conversations": conversation_count,
        "messages": messages,
    }
    log.info("Bot data removed: %s", counts)
    return counts


def reset_sample_data() -> bool:
    """Forget that sample data was seeded; the next seed will run again."""
    return flags.clear_flag(flags.SAMPLE_DATA_INITIALIZED)
