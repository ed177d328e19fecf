from django.contrib import admin
from .models import Conversation, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    fields = ("sender_name", "sender_type", "text", "timestamp")


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ("id", "customer_name", "last_message_time", "unread_count")
    search_fields = ("customer_name", "customer_email")
    inlines = [MessageInline]
