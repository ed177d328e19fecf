# configmgr/models.py
#
# Purpose:
# - Small persistent switches for the admin console (see configmgr/flags.py).
#
# Keys in use:
#   - SAMPLE_DATA_INITIALIZED  'true' once demo data was seeded
#   - SAMPLE_DATA_DISABLED     'true' to never seed demo data
#
from django.db import models


class SystemSetting(models.Model):
    key = models.CharField(max_length=100, unique=True)
    value = models.CharField(max_length=200, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return f"{self.key}={self.value}"
