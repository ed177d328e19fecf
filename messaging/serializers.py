from rest_framework import serializers

from .models import Conversation, Message


class ConversationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Conversation
        fields = [
            "id",
            "customer_name",
            "customer_email",
            "customer_id",
            "last_message",
            "last_message_time",
            "unread_count",
        ]
        read_only_fields = ["last_message", "last_message_time", "unread_count"]


class MessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Message
        fields = ["id", "conversation", "sender_id", "sender_name", "sender_type", "text", "timestamp"]
        read_only_fields = fields


class PostMessageSerializer(serializers.Serializer):
    text = serializers.CharField(trim_whitespace=True)
    sender_type = serializers.ChoiceField(
        choices=[c[0] for c in Message.SENDER_CHOICES], required=False, default=Message.SENDER_ADMIN
    )
    sender_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    sender_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
