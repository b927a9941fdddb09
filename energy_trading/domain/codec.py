"""
Deterministic Record Codec

Records are stored as compact UTF-8 JSON objects. Key order is the dataclass
field order, never the interpreter's dict or sort order, so two encodings
of equal records are byte-identical.

Output follows the text Go's encoding/json produces for the same struct:

- enum fields are written as their integer code
- floats use the shortest round-trip digits, in plain decimal notation
  ("200", "0.00001", "10000000000000000") unless the magnitude is below
  1e-6 or at least 1e21, which use exponent form ("1e-7", "1e+21")
- "<", ">", "&", U+2028 and U+2029 inside strings are \\u-escaped

Decoding:

- integers are accepted for float fields, never floats for integer fields
- booleans are rejected everywhere
- unknown keys are ignored; missing keys are not
- a field may also be read under a legacy name listed in metadata["aliases"]
"""

import json
import math
import re
from dataclasses import fields
from decimal import Decimal

from energy_trading.domain.enums import DomainTable
from energy_trading.domain.exceptions import MalformedRecord, UnknownDomainValue

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_HTML_ESCAPE_PATTERN = re.compile("[<>&\u2028\u2029]")
_SHORT_NEGATIVE_EXPONENT = re.compile(r"e-0(\d)$")


def format_float(value):
    """Shortest round-trip text of a finite float, spelled as Go's encoder spells it."""
    if not math.isfinite(value):
        raise ValueError(f"cannot encode non-finite float {value!r}")

    shortest = repr(value)
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < 1e-6 or magnitude >= 1e21):
        return _SHORT_NEGATIVE_EXPONENT.sub(r"e-\1", shortest)

    text = format(Decimal(shortest), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _dump_string(value):
    text = json.dumps(value, ensure_ascii=False)
    return _HTML_ESCAPE_PATTERN.sub(lambda match: _HTML_ESCAPES[match.group()], text)


def _dump_value(value):
    if isinstance(value, DomainTable):
        return str(int(value))
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return _dump_string(value)
    return json.dumps(value)


def encode(record):
    members = (
        f"{_dump_string(f.metadata['name'])}:{_dump_value(getattr(record, f.name))}"
        for f in fields(record)
    )
    return ("{" + ",".join(members) + "}").encode("utf-8")


def _read_field(record_type, f, name, raw):
    expected = f.type

    if isinstance(raw, bool):
        raise MalformedRecord(record_type.kind, f"field {name!r} must not be a boolean")

    if isinstance(expected, type) and issubclass(expected, DomainTable):
        try:
            return expected.from_code(raw)
        except UnknownDomainValue:
            raise MalformedRecord(
                record_type.kind, f"field {name!r} holds unknown {expected.domain_name()} code {raw!r}"
            ) from None

    if expected is int:
        if not isinstance(raw, int):
            raise MalformedRecord(record_type.kind, f"field {name!r} must be an integer")
        return raw

    if expected is float:
        if not isinstance(raw, (int, float)):
            raise MalformedRecord(record_type.kind, f"field {name!r} must be a number")
        value = float(raw)
        if not math.isfinite(value):
            raise MalformedRecord(record_type.kind, f"field {name!r} must be finite")
        return value

    if not isinstance(raw, str):
        raise MalformedRecord(record_type.kind, f"field {name!r} must be a string")
    return raw


def _stored_name(document, f):
    for name in (f.metadata["name"], *f.metadata.get("aliases", ())):
        if name in document:
            return name
    return None


def decode(record_type, data):
    """
    Rebuilds a record of record_type from its stored bytes.

    Raises MalformedRecord for anything that is not a complete, well-typed
    encoding of that kind.
    """
    try:
        document = json.loads(data)
    except (TypeError, ValueError) as exc:
        raise MalformedRecord(record_type.kind, f"invalid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise MalformedRecord(record_type.kind, "expected a JSON object")

    values = {}
    for f in fields(record_type):
        name = _stored_name(document, f)
        if name is None:
            raise MalformedRecord(record_type.kind, f"missing field {f.metadata['name']!r}")
        values[f.name] = _read_field(record_type, f, name, document[name])

    return record_type(**values)
