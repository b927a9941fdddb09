from energy_trading.application.chaincode import EnergyTradingChaincode
from energy_trading.ledger import InMemoryLedger


class SteppingClock:
    """Returns start, start + 1, ... on successive calls."""

    def __init__(self, start=1_700_000_000):
        self.now = start - 1

    def __call__(self):
        self.now += 1
        return self.now


class SequentialIds:

    def __init__(self, start=500):
        self.next_id = start

    def __call__(self):
        value = self.next_id
        self.next_id += 1
        return value


def make_chaincode(ledger=None):
    return EnergyTradingChaincode(
        ledger if ledger is not None else InMemoryLedger(),
        clock=SteppingClock(),
        id_source=SequentialIds(),
    )


def user_args(user_id="1", category="Prosumer", location="Location A", meter_id="Meter1", source="Solar"):
    return [user_id, category, location, meter_id, source]


def order_args(order_id="4", bid_status="0", unit_cost="3.5", action="0"):
    return [
        "1",          # bidMatchId
        bid_status,
        order_id,
        "2.5",        # onMarketPrice
        "200",        # orderCost
        "5",          # paymentId
        "slot1234",   # slotId
        "300",        # totalQuantity
        unit_cost,
        "6",          # userId
        "50",         # slotExecDate
        action,
    ]


def payment_args(payment_id="PAY-1", payment_type="Buyer - Energy Purchased", penalty="1.25"):
    return [
        payment_id,
        payment_type,
        "150.75",     # totalAmount
        "6",          # userId
        "wallet-6",   # debitedFrom
        "wallet-9",   # creditedTo
        "140",        # totalUnitCost
        "7.5",        # platformFee
        "3.25",       # tokenAmount
        "0",          # bidRefundAmount
        "0.5",        # platformFeeRefundAmount
        penalty,
    ]


def bid_match_args(bid_match_id="1", bid_status="1", buyer_user_id="4", delivered_units="2.5"):
    return [
        "1700000000",  # bidMatchTms
        "Slot1",
        bid_status,
        "100",         # bidUnitPrice
        buyer_user_id,
        delivered_units,
        bid_match_id,
        "3.5",         # originalBidUnits
        "5",           # sellerUserId
        "6",           # transactionBuyId
        "7",           # transactionSellId
    ]
