"""
Strict positional-argument parsing.

Invocations arrive as flat lists of strings. Each helper converts one
argument to its field type or raises ParseError naming the field; nothing
is coerced, trimmed or defaulted.
"""

import math
import re

from energy_trading.conf import app_settings
from energy_trading.domain.exceptions import ArityError, ParseError, UnknownDomainValue

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?", re.ASCII)


def check_arity(args, expected):
    if len(args) != expected:
        raise ArityError(expected, len(args))


def sanitize_arguments(args):
    """Every argument must be a non-empty string within MAX_ARGUMENT_LENGTH."""
    limit = app_settings.MAX_ARGUMENT_LENGTH
    for position, value in enumerate(args):
        if not isinstance(value, str):
            raise ParseError(f"argument {position}", value, "must be a string")
        if not value:
            raise ParseError(f"argument {position}", value, "must be a non-empty string")
        if len(value) > limit:
            raise ParseError(f"argument {position}", value, f"must be <= {limit} characters")


def parse_int(field, value):
    if not _INTEGER.fullmatch(value):
        raise ParseError(field, value, "not a base-10 integer")
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ParseError(field, value, "out of 64-bit integer range")
    return number


def parse_float(field, value):
    if not _DECIMAL.fullmatch(value):
        raise ParseError(field, value, "not a decimal number")
    number = float(value)
    if not math.isfinite(number):
        raise ParseError(field, value, "out of 64-bit float range")
    return number


def parse_label(table, field, value):
    """Exact label lookup, e.g. "Prosumer" or "DG Set"."""
    try:
        return table.from_label(value)
    except UnknownDomainValue:
        raise UnknownDomainValue(table.domain_name(), value, field=field) from None


def parse_code_or_label(table, field, value):
    """
    Integer code ("0") as the gateway sends it, or the exact label ("BidCreated").

    Labels never start with a digit or sign, so the two forms cannot collide.
    """
    if _INTEGER.fullmatch(value):
        try:
            return table.from_code(int(value))
        except UnknownDomainValue:
            raise UnknownDomainValue(table.domain_name(), value, field=field) from None
    return parse_label(table, field, value)
