"""
Persistence Model — World State Table (Django ORM)

The chaincode only ever needs a flat key/value store. LedgerState is that
store for deployments that run the handlers behind Django instead of a
Fabric peer: one row per ledger key, raw bytes as the value.

Key architectural decisions:

- key is the primary key, so a put is a single upsert on an indexed column.
- value is stored as opaque bytes; the ORM never interprets records.
- updated_at is kept for traceability only and is never read by handlers.
"""

from django.db import models


class LedgerState(models.Model):
    key = models.CharField(max_length=512, primary_key=True)
    value = models.BinaryField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return f"LedgerState {self.key} ({len(self.value)} bytes)"
