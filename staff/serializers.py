from rest_framework import serializers

from booking.models import Stylist


class StylistSerializer(serializers.ModelSerializer):
    specialties = serializers.ListField(
        child=serializers.CharField(max_length=100, allow_blank=True), required=False, default=list
    )
    rating = serializers.DecimalField(
        max_digits=3, decimal_places=1, min_value=1, max_value=5, required=False
    )

    class Meta:
        model = Stylist
        fields = ["id", "name", "specialties", "rating", "experience", "phone", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Stylist name is required")
        return value

    def validate_specialties(self, value):
        # the admin form sends a comma-split list, blanks included
        return [s.strip() for s in value if s and s.strip()]
