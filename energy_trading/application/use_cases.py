"""
Application Use Cases — Ledger Writes

One handler per write operation of the energy trading chaincode. Every
handler follows the same lifecycle:

1. check the argument count
2. sanitize and strictly parse every positional argument
3. derive the record key
4. load the existing record, if any (Absent -> create, Present -> merge)
5. encode and put the merged record

Guarantees:

- No ledger access happens before every argument has parsed, so a rejected
  invocation never mutates the store.
- createdOn and identity fields are written once, on creation, and carried
  over by every later update.
- A load followed by a put is the only read-modify-write; there is no lock
  and no multi-key transaction. RecordPayment issues two independent puts
  and does not undo the first if the second fails. Serializing concurrent
  writers is the ledger host's job.

Handlers return None. Callers read the record back to observe its contents.
"""

import logging

from energy_trading.application.parsing import (
    check_arity,
    parse_code_or_label,
    parse_float,
    parse_int,
    parse_label,
    sanitize_arguments,
)
from energy_trading.domain import codec
from energy_trading.domain.enums import Action, BidStatus, EnergySource, PaymentType, UserCategory
from energy_trading.domain.exceptions import InvalidInitialState, ReferenceNotFound
from energy_trading.domain.keys import derive_key, record_key
from energy_trading.domain.records import BidMatch, Order, Payment, PaymentDetail, PlatformContract, User
from energy_trading.identifiers import MonotonicIdSource, unix_clock

logger = logging.getLogger(__name__)

_default_id_source = MonotonicIdSource()


def load_record(ledger, record_type, identifier):
    """Decoded record stored for identifier, or None when the key is absent."""
    data = ledger.get_state(derive_key(record_type.kind, identifier))
    if data is None:
        return None
    return codec.decode(record_type, data)


def refreshed_on(now, existing):
    """updatedOn for a write: the clock, but always past the previous updatedOn."""
    if existing is None:
        return now
    return max(now, existing.updated_on + 1)


def store_record(ledger, record):
    key = record_key(record)
    ledger.put_state(key, codec.encode(record))
    return key


def write(ledger, args):
    """Generic passthrough write of a raw value under an arbitrary key."""
    check_arity(args, 2)
    sanitize_arguments(args)

    key, value = args
    ledger.put_state(key, value.encode("utf-8"))
    logger.debug("Raw write: key=%s", key)


def update_user_profile(ledger, args, clock=unix_clock):
    """
    Creates or updates a User.

    Args: id, category, location, meterId, source.
    """
    check_arity(args, 5)
    sanitize_arguments(args)

    user_id = parse_int("User ID", args[0])
    category = parse_label(UserCategory, "user category", args[1])
    location = args[2]
    meter_id = args[3]
    source = parse_label(EnergySource, "energy source", args[4])

    existing = load_record(ledger, User, user_id)
    now = clock()

    user = User(
        id=user_id,
        category=category,
        created_on=now if existing is None else existing.created_on,
        updated_on=refreshed_on(now, existing),
        location=location,
        meter_id=meter_id,
        source=source,
    )
    store_record(ledger, user)

    if existing is None:
        logger.info("User created: id=%s category=%s", user_id, category)
    else:
        logger.info("User updated: id=%s category=%s", user_id, category)


def sign_platform_contract(ledger, args, clock=unix_clock):
    """Args: userId. The user must already have a profile."""
    check_arity(args, 1)
    sanitize_arguments(args)

    user_id = parse_int("User ID", args[0])

    if ledger.get_state(derive_key(User.kind, user_id)) is None:
        logger.warning("Contract signing for unknown user: id=%s", user_id)
        raise ReferenceNotFound(User.kind, user_id)

    existing = load_record(ledger, PlatformContract, user_id)
    now = clock()

    contract = PlatformContract(
        user_id=user_id,
        created_on=now if existing is None else existing.created_on,
        updated_on=refreshed_on(now, existing),
    )
    store_record(ledger, contract)
    logger.info("Platform contract signed: user=%s resigned=%s", user_id, existing is not None)


def record_payment(ledger, args, clock=unix_clock, id_source=None):
    """
    Records a Payment and the PaymentDetail it points to.

    Args: paymentId, paymentType, totalAmount, userId, debitedFrom,
    creditedTo, totalUnitCost, platformFee, tokenAmount, bidRefundAmount,
    platformFeeRefundAmount, penaltyFromSeller.

    The detail is written first. If the payment put then fails, the detail
    stays written.
    """
    check_arity(args, 12)
    sanitize_arguments(args)

    payment_id = args[0]
    payment_type = parse_label(PaymentType, "payment type", args[1])
    total_amount = parse_float("total amount", args[2])
    user_id = parse_int("user ID", args[3])
    debited_from = args[4]
    credited_to = args[5]
    total_unit_cost = parse_float("total unit cost", args[6])
    platform_fee = parse_float("platform fee", args[7])
    token_amount = parse_float("token amount", args[8])
    bid_refund_amount = parse_float("bid refund amount", args[9])
    platform_fee_refund_amount = parse_float("platform fee refund amount", args[10])
    penalty_from_seller = parse_float("penalty from seller", args[11])

    existing = load_record(ledger, Payment, payment_id)
    next_id = id_source or _default_id_source

    detail = PaymentDetail(
        id=next_id(),
        debited_from=debited_from,
        credited_to=credited_to,
        total_unit_cost=total_unit_cost,
        platform_fee=platform_fee,
        token_amount=token_amount,
        bid_refund_amount=bid_refund_amount,
        platform_fee_refund_amount=platform_fee_refund_amount,
        token_amount_refund=penalty_from_seller,
        penalty_from_seller=penalty_from_seller,
    )
    store_record(ledger, detail)

    payment = Payment(
        created_on=clock() if existing is None else existing.created_on,
        id=payment_id,
        payment_detail_id=detail.id,
        payment_type=payment_type,
        total_amount=total_amount,
        user_id=user_id,
    )
    store_record(ledger, payment)

    logger.info(
        "Payment recorded: id=%s type=%s amount=%s detail=%s",
        payment_id, payment_type, total_amount, detail.id,
    )


def register_order(ledger, args, clock=unix_clock):
    """
    Creates or updates an Order.

    Args: bidMatchId, bidStatus, orderId, onMarketPrice, orderCost,
    paymentId, slotId, totalQuantity, unitCost, userId, slotExecDate, action.

    bidStatus and action take the integer code or the label. A new order
    must start as BidCreated or BidAccepted.
    """
    check_arity(args, 12)
    sanitize_arguments(args)

    bid_match_id = parse_int("BidMatchID", args[0])
    bid_status = parse_code_or_label(BidStatus, "BidStatus", args[1])
    order_id = parse_int("order ID", args[2])
    on_market_price = args[3]
    order_cost = parse_float("OrderCost", args[4])
    payment_id = parse_int("PaymentID", args[5])
    slot_id = args[6]
    total_quantity = parse_int("TotalQuantity", args[7])
    unit_cost = parse_float("UnitCost", args[8])
    user_id = parse_int("UserID", args[9])
    slot_exec_date = parse_int("SlotExecDate", args[10])
    action = parse_code_or_label(Action, "action", args[11])

    existing = load_record(ledger, Order, order_id)

    if existing is None and bid_status not in BidStatus.initial_states():
        logger.warning("Order rejected: id=%s initial status=%s", order_id, bid_status)
        raise InvalidInitialState(order_id, int(bid_status))

    now = clock()

    order = Order(
        bid_match_id=bid_match_id,
        bid_status=bid_status,
        created_on=now if existing is None else existing.created_on,
        id=order_id,
        on_market_price=on_market_price,
        order_cost=order_cost,
        payment_id=payment_id,
        slot_id=slot_id,
        slot_exec_date=slot_exec_date,
        total_quantity=total_quantity,
        unit_cost=unit_cost,
        updated_on=refreshed_on(now, existing),
        action=action,
        user_id=user_id,
    )
    store_record(ledger, order)

    if existing is None:
        logger.info("Order registered: id=%s status=%s action=%s", order_id, bid_status, action)
    else:
        logger.info("Order updated: id=%s status=%s action=%s", order_id, bid_status, action)


def process_bid_match(ledger, args):
    """
    Creates or overwrites a BidMatch.

    Args: bidMatchTms, bidSlot, bidStatus, bidUnitPrice, buyerUserId,
    deliveredBidUnits, bidMatchId, originalBidUnits, sellerUserId,
    transactionBuyId, transactionSellId.
    """
    check_arity(args, 11)
    sanitize_arguments(args)

    bid_match_tms = parse_int("BidMatchTms", args[0])
    bid_slot = args[1]
    bid_status = parse_code_or_label(BidStatus, "BidStatus", args[2])
    bid_unit_price = parse_int("BidUnitPrice", args[3])
    buyer_user_id = parse_int("BuyerUserId", args[4])
    delivered_bid_units = parse_float("DeliveredBidUnits", args[5])
    bid_match_id = parse_int("BidMatch ID", args[6])
    original_bid_units = parse_float("OriginalBidUnits", args[7])
    seller_user_id = parse_int("SellerUserId", args[8])
    transaction_buy_id = parse_int("TransactionBuyID", args[9])
    transaction_sell_id = parse_int("TransactionSellID", args[10])

    existing = load_record(ledger, BidMatch, bid_match_id)

    bid_match = BidMatch(
        bid_match_tms=bid_match_tms,
        bid_slot=bid_slot,
        bid_status=bid_status,
        bid_unit_price=bid_unit_price,
        buyer_user_id=buyer_user_id,
        delivered_bid_units=delivered_bid_units,
        id=bid_match_id,
        original_bid_units=original_bid_units,
        seller_user_id=seller_user_id,
        transaction_buy_id=transaction_buy_id,
        transaction_sell_id=transaction_sell_id,
    )
    store_record(ledger, bid_match)

    if existing is None:
        logger.info("Bid match created: id=%s status=%s", bid_match_id, bid_status)
    else:
        logger.info("Bid match updated: id=%s status=%s", bid_match_id, bid_status)
