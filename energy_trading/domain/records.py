"""
Ledger Records — Energy Trading Domain

Plain dataclasses, one per entity kind. Field declaration order is the
encoded order: the codec walks dataclasses.fields() and never sorts, so the
byte form is identical across runs and across implementations that follow
the same table.

Each field carries its on-chain JSON name in metadata["name"] and any older
names it may still be stored under in metadata["aliases"].

Records hold no behaviour beyond identity. Defaulting, merging and
validation happen in the application handlers.
"""

from dataclasses import dataclass, field
from typing import ClassVar

from energy_trading.domain.enums import Action, BidStatus, EnergySource, PaymentType, UserCategory


def wire(name, aliases=(), **kwargs):
    return field(metadata={"name": name, "aliases": aliases}, **kwargs)


@dataclass
class User:
    kind: ClassVar[str] = "User"

    id: int = wire("id")
    category: UserCategory = wire("category")
    created_on: int = wire("createdOn")
    updated_on: int = wire("updatedOn")
    location: str = wire("location")
    meter_id: str = wire("meterId")
    source: EnergySource = wire("source")

    @property
    def identity(self):
        return self.id


@dataclass
class PlatformContract:
    kind: ClassVar[str] = "PlatformContract"

    user_id: int = wire("userId")
    created_on: int = wire("createdOn")
    updated_on: int = wire("updatedOn")

    @property
    def identity(self):
        return self.user_id


@dataclass
class Payment:
    kind: ClassVar[str] = "Payment"

    created_on: int = wire("createdOn")
    id: str = wire("id")
    payment_detail_id: int = wire("paymentDetail")
    payment_type: PaymentType = wire("paymentType")
    total_amount: float = wire("totalAmount")
    user_id: int = wire("userId")

    @property
    def identity(self):
        return self.id


@dataclass
class PaymentDetail:
    """
    Granular breakdown of a Payment.

    token_amount_refund and penalty_from_seller are both filled from the
    penalty argument of RecordPayment.
    """

    kind: ClassVar[str] = "PaymentDetail"

    id: int = wire("id")
    debited_from: str = wire("debitedFrom")
    credited_to: str = wire("creditedTo")
    total_unit_cost: float = wire("totalUnitCost")
    platform_fee: float = wire("platformFee")
    token_amount: float = wire("tokenAmount")
    bid_refund_amount: float = wire("bidRefundAmount")
    platform_fee_refund_amount: float = wire("platformFeeRefundAmount")
    token_amount_refund: float = wire("tokenAmountRefund")
    penalty_from_seller: float = wire("penaltyFromSeller")

    @property
    def identity(self):
        return self.id


@dataclass
class Order:
    """
    An energy buy or sell bid, fields in alphabetical wire order.

    order_cost is written as "orderCost". Orders committed by the Go
    chaincode carry it under "status"; that name is still accepted on decode
    and replaced by "orderCost" on the next write.
    """

    kind: ClassVar[str] = "Order"

    bid_match_id: int = wire("bidMatchId")
    bid_status: BidStatus = wire("bidStatus")
    created_on: int = wire("createdOn")
    id: int = wire("id")
    on_market_price: str = wire("onMarketPrice")
    order_cost: float = wire("orderCost", aliases=("status",))
    payment_id: int = wire("paymentId")
    slot_id: str = wire("slotId")
    slot_exec_date: int = wire("slotExecDate")
    total_quantity: int = wire("totalQuantity")
    unit_cost: float = wire("unitCost")
    updated_on: int = wire("updatedOn")
    action: Action = wire("action")
    user_id: int = wire("userId")

    @property
    def identity(self):
        return self.id


@dataclass
class BidMatch:
    """A matched buy/sell pair, fields in alphabetical wire order."""

    kind: ClassVar[str] = "BidMatch"

    bid_match_tms: int = wire("bidMatchTms")
    bid_slot: str = wire("bidSlot")
    bid_status: BidStatus = wire("bidStatus")
    bid_unit_price: int = wire("bidUnitPrice")
    buyer_user_id: int = wire("buyerUserId")
    delivered_bid_units: float = wire("deliveredBidUnits")
    id: int = wire("id")
    original_bid_units: float = wire("originalBidUnits")
    seller_user_id: int = wire("sellerUserId")
    transaction_buy_id: int = wire("transactionBuyId")
    transaction_sell_id: int = wire("transactionSellId")

    @property
    def identity(self):
        return self.id


RECORD_TYPES = (User, PlatformContract, Payment, PaymentDetail, Order, BidMatch)
