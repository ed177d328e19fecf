"""
catalog.py
----------
Service menu offered on the online booking form.

Online bookings pick a service by id; the booking then stores the service
name, price (also copied to revenue) and duration. In-shop bookings type the
service name and amount by hand and do not use this list.
"""

from decimal import Decimal


SERVICE_CATALOG = [
    {"id": "Gel+artwork",         "name": "Gel + Artwork",           "duration": 45,  "price": Decimal("500")},
    {"id": "Gel+artwork-classic", "name": "Gel + Artwork (Classic)", "duration": 60,  "price": Decimal("300")},
    {"id": "Acrylics",            "name": "Acrylics",                "duration": 90,  "price": Decimal("1500")},
    {"id": "Pedicure+gel",        "name": "Pedicure + Gel",          "duration": 120, "price": Decimal("800")},
    {"id": "Gum-gel",             "name": "Gum Gel",                 "duration": 30,  "price": Decimal("800")},
    {"id": "Gum-gel-extension",   "name": "Gum Gel Extension",       "duration": 45,  "price": Decimal("1000")},
    {"id": "Pedicure+tips",       "name": "Pedicure + Tips",         "duration": 90,  "price": Decimal("1000")},
    {"id": "Nail-builder",        "name": "Nail Builder",            "duration": 30,  "price": Decimal("500")},
    {"id": "Nail-removal",        "name": "Nail Removal",            "duration": 15,  "price": Decimal("100")},
]

TIME_SLOTS = [
    "9:00 AM", "9:30 AM", "10:00 AM", "10:30 AM", "11:00 AM", "11:30 AM",
    "12:00 PM", "12:30 PM", "1:00 PM", "1:30 PM", "2:00 PM", "2:30 PM",
    "3:00 PM", "3:30 PM", "4:00 PM", "4:30 PM", "5:00 PM", "5:30 PM",
]


def get_service(service_id):
    """Catalog entry for an id, or None."""
    for item in SERVICE_CATALOG:
        if item["id"] == service_id:
            return item
    return None
