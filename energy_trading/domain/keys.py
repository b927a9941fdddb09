from energy_trading.domain.records import RECORD_TYPES

KEY_PREFIXES = {record_type.kind: f"{record_type.kind}_" for record_type in RECORD_TYPES}


def derive_key(kind, identifier):
    """Ledger key of a record: kind prefix followed by the identifier's string form."""
    try:
        prefix = KEY_PREFIXES[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind: {kind!r}") from None
    return prefix + str(identifier)


def record_key(record):
    return derive_key(record.kind, record.identity)
