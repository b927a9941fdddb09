"""
Domain Tables — Closed Vocabularies of the Energy Market

Every enumerated field stored on the ledger is written as a small integer
code. Codes follow definition order and must never be renumbered: records
already committed on-chain are decoded with these exact values.

Each table maps in both directions:

- from_label(): exact, case-sensitive label to member
- from_code(): integer code to member
- member.label: canonical label of a member

Lookups outside the table raise UnknownDomainValue; nothing is normalized
or defaulted.
"""

from enum import IntEnum

from energy_trading.domain.exceptions import UnknownDomainValue


class DomainTable(IntEnum):

    def __new__(cls, code, label):
        member = int.__new__(cls, code)
        member._value_ = code
        member.label = label
        return member

    @classmethod
    def domain_name(cls):
        return cls.__name__

    @classmethod
    def labels(cls):
        return [member.label for member in cls]

    @classmethod
    def from_label(cls, label):
        for member in cls:
            if member.label == label:
                return member
        raise UnknownDomainValue(cls.domain_name(), label)

    @classmethod
    def from_code(cls, code):
        if isinstance(code, bool) or not isinstance(code, int):
            raise UnknownDomainValue(cls.domain_name(), code)
        try:
            return cls(code)
        except ValueError:
            raise UnknownDomainValue(cls.domain_name(), code) from None

    def __str__(self):
        return self.label


class BidStatus(DomainTable):
    CREATED = 0, "BidCreated"
    ACCEPTED = 1, "BidAccepted"
    REJECTED = 2, "BidRejected"
    EXECUTED = 3, "BidExecuted"
    TERMINATED = 4, "BidTerminated"

    @classmethod
    def initial_states(cls):
        return (cls.CREATED, cls.ACCEPTED)


class EnergySource(DomainTable):
    SOLAR = 0, "Solar"
    WIND = 1, "Wind"
    DG_SET = 2, "DG Set"
    BATTERY = 3, "Battery"


class Action(DomainTable):
    BUY = 0, "Buy"
    SELL = 1, "Sell"


class UserCategory(DomainTable):
    PROSUMER = 0, "Prosumer"
    CONSUMER = 1, "Consumer"


class PaymentType(DomainTable):
    WALLET_RECHARGE = 0, "WalletRecharge"
    SELLER_TOKEN_AMOUNT = 1, "Seller - Token Amount"
    BUYER_ENERGY_PURCHASED = 2, "Buyer - Energy Purchased"
    BUYER_SELLER_INCENTIVE = 3, "Buyer/Seller - Incentive"
    SELLER_ENERGY_SOLD_TOKEN_REFUND = 4, "Seller - Energy Sold plus Token Refund"
