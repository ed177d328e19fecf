"""
flags.py
--------
Boolean switches stored as SystemSetting rows.

A flag is "set" when a row with the key exists and its value is truthy
("true", "1", "yes"). Clearing a flag deletes the row.
"""

from .models import SystemSetting

SAMPLE_DATA_INITIALIZED = "SAMPLE_DATA_INITIALIZED"
SAMPLE_DATA_DISABLED = "SAMPLE_DATA_DISABLED"

_TRUTHY = ("true", "1", "yes", "on")


def is_set(key: str) -> bool:
    row = SystemSetting.objects.filter(key=key).first()
    return bool(row and row.value.strip().lower() in _TRUTHY)


def set_flag(key: str, value: bool = True) -> None:
    SystemSetting.objects.update_or_create(key=key, defaults={"value": "true" if value else "false"})


def clear_flag(key: str) -> bool:
    """Remove the flag; returns True if it existed."""
    deleted, _ = SystemSetting.objects.filter(key=key).delete()
    return deleted > 0
