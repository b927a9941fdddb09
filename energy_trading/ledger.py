"""
Ledger Port — the only storage capability the chaincode consumes.

    get_state(key) -> bytes | None
    put_state(key, value: bytes) -> None, or PersistenceError

Two adapters are provided:

- InMemoryLedger: a dict, for unit tests and throwaway local runs.
- OrmLedger: the LedgerState table through the Django ORM.

Neither adapter adds transactions across keys. Each put is independent;
grouping puts into one unit of work is the caller's transport concern.
"""

import logging

from django.db import DatabaseError, transaction

from energy_trading.conf import app_settings
from energy_trading.domain.exceptions import PersistenceError
from energy_trading.models import LedgerState

logger = logging.getLogger(__name__)


class Ledger:

    def get_state(self, key):
        raise NotImplementedError

    def put_state(self, key, value):
        raise NotImplementedError


class InMemoryLedger(Ledger):

    def __init__(self, initial=None):
        self._state = {}
        for key, value in (initial or {}).items():
            self.put_state(key, value)

    def get_state(self, key):
        return self._state.get(key)

    def put_state(self, key, value):
        if not isinstance(value, (bytes, bytearray)):
            raise PersistenceError(f"value for key {key!r} must be bytes")
        self._state[key] = bytes(value)

    def keys(self):
        return sorted(self._state)

    def __len__(self):
        return len(self._state)

    def __contains__(self, key):
        return key in self._state


class OrmLedger(Ledger):

    def get_state(self, key):
        try:
            value = (
                LedgerState.objects
                .filter(key=key)
                .values_list("value", flat=True)
                .first()
            )
        except DatabaseError as exc:
            logger.error("Ledger read failed: key=%s error=%s", key, exc)
            raise PersistenceError(f"Failed to read {key} from the ledger: {exc}") from exc

        return None if value is None else bytes(value)

    def put_state(self, key, value):
        try:
            # Savepoint so a failed write leaves the enclosing transaction usable
            with transaction.atomic():
                LedgerState.objects.update_or_create(key=key, defaults={"value": bytes(value)})
        except DatabaseError as exc:
            logger.error("Ledger write failed: key=%s error=%s", key, exc)
            raise PersistenceError(f"Could not store {key}: {exc}") from exc


_process_memory_ledger = InMemoryLedger()


def get_ledger():
    """Ledger selected by ENERGY_TRADING["LEDGER_BACKEND"]."""
    backend = app_settings.LEDGER_BACKEND
    if backend == "orm":
        return OrmLedger()
    if backend == "memory":
        return _process_memory_ledger
    raise ValueError(f"Unknown ENERGY_TRADING LEDGER_BACKEND: {backend!r}")
