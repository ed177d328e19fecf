from decimal import Decimal

from rest_framework import serializers

from .models import Booking, Client, Stylist
from .services.catalog import SERVICE_CATALOG, TIME_SLOTS


class ClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ["id", "display_name", "email", "phone", "is_client", "created_at"]
        read_only_fields = ["created_at"]


class BookingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Booking
        fields = [
            "id",
            "customer_name",
            "customer_email",
            "customer_phone",
            "customer_id",
            "service",
            "services",
            "service_id",
            "stylist",
            "stylist_id",
            "date",
            "time",
            "status",
            "type",
            "amount",
            "revenue",
            "price",
            "payment_method",
            "duration",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class OnlineBookingSerializer(serializers.Serializer):
    """
    Public booking form. The service is chosen from the catalog by id;
    price and duration come from the catalog, not from the client.
    """
    customer_name = serializers.CharField(max_length=200)
    customer_email = serializers.EmailField(required=False, allow_blank=True, default="")
    customer_phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    customer_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    service_id = serializers.ChoiceField(choices=[s["id"] for s in SERVICE_CATALOG])
    stylist_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    date = serializers.DateField()
    time = serializers.ChoiceField(choices=TIME_SLOTS)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_stylist_id(self, value):
        if value and not Stylist.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Unknown stylist.")
        return value


class InShopBookingSerializer(serializers.Serializer):
    """Walk-in booking entered by an admin. Every field is required."""
    customer_name = serializers.CharField(max_length=200)
    service = serializers.CharField(max_length=200)
    stylist = serializers.CharField(max_length=200)
    stylist_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    date = serializers.DateField()
    time = serializers.CharField(max_length=20)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c[0] for c in Booking.STATUS_CHOICES])
    payment_method = serializers.ChoiceField(
        choices=[c[0] for c in Booking.PAYMENT_CHOICES], required=False
    )
