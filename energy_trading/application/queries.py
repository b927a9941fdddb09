"""
Read accessors. Each returns the stored bytes exactly as written; records
are never decoded or re-encoded on the read path.
"""

import logging

from energy_trading.application.parsing import check_arity, parse_int, sanitize_arguments
from energy_trading.domain.exceptions import NotFound
from energy_trading.domain.keys import derive_key
from energy_trading.domain.records import BidMatch, Order, Payment, PaymentDetail, PlatformContract, User

logger = logging.getLogger(__name__)


def _read(ledger, kind, identifier):
    data = ledger.get_state(derive_key(kind, identifier))
    if data is None:
        logger.info("Read miss: kind=%s id=%s", kind, identifier)
        raise NotFound(kind, identifier)
    return data


def _read_by_int_id(ledger, args, record_type, field):
    check_arity(args, 1)
    sanitize_arguments(args)
    return _read(ledger, record_type.kind, parse_int(field, args[0]))


def read_user_profile(ledger, args):
    return _read_by_int_id(ledger, args, User, "User ID")


def read_platform_contract(ledger, args):
    return _read_by_int_id(ledger, args, PlatformContract, "User ID")


def read_payment(ledger, args):
    check_arity(args, 1)
    sanitize_arguments(args)
    return _read(ledger, Payment.kind, args[0])


def read_payment_detail(ledger, args):
    return _read_by_int_id(ledger, args, PaymentDetail, "PaymentDetail ID")


def read_order(ledger, args):
    return _read_by_int_id(ledger, args, Order, "Order ID")


def read_bid_match(ledger, args):
    return _read_by_int_id(ledger, args, BidMatch, "BidMatch ID")
