from django.contrib import admin
from .models import Booking, Client, Stylist

@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("id", "display_name", "email", "phone")
    search_fields = ("display_name", "email")

@admin.register(Stylist)
class StylistAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "rating", "experience")
    search_fields = ("name",)

@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("id", "customer_name", "service", "stylist", "date", "time", "status", "type")
    list_filter = ("status", "type", "payment_method")
    search_fields = ("customer_name", "customer_email", "service")
