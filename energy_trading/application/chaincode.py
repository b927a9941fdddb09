"""
Chaincode Entry Point — function name + string arguments in, uniform response out.

The dispatcher routes an invocation to its handler and converts the outcome
into a ChaincodeResponse. It owns no business rules: argument checks,
record lifecycle and key derivation all live in the handlers.

Every ChaincodeError is terminal for the invocation. It is logged and
returned as an ERROR response with the original exception attached, so a
transport adapter can map it without parsing the message. Nothing is
retried, and writes issued before the failure are not undone here.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from energy_trading.application import queries, use_cases
from energy_trading.domain.exceptions import ChaincodeError, UnknownFunction
from energy_trading.identifiers import unix_clock

logger = logging.getLogger(__name__)

OK = 200
ERROR = 500


@dataclass
class ChaincodeResponse:
    status: int
    message: str = ""
    payload: Optional[bytes] = None
    error: Optional[ChaincodeError] = None

    @property
    def ok(self):
        return self.status == OK

    @classmethod
    def success(cls, payload=None):
        return cls(status=OK, payload=payload)

    @classmethod
    def failure(cls, error):
        return cls(status=ERROR, message=str(error), error=error)


class EnergyTradingChaincode:

    def __init__(self, ledger, clock=unix_clock, id_source=None):
        self.ledger = ledger
        self.clock = clock
        self.id_source = id_source
        self.functions = {
            "Write": lambda args: use_cases.write(self.ledger, args),
            "UpdateUserProfile": lambda args: use_cases.update_user_profile(self.ledger, args, self.clock),
            "SignPlatformContract": lambda args: use_cases.sign_platform_contract(self.ledger, args, self.clock),
            "RecordPayment": lambda args: use_cases.record_payment(
                self.ledger, args, self.clock, self.id_source
            ),
            "RegisterOrder": lambda args: use_cases.register_order(self.ledger, args, self.clock),
            "ProcessBidMatch": lambda args: use_cases.process_bid_match(self.ledger, args),
            "ReadUserProfile": lambda args: queries.read_user_profile(self.ledger, args),
            "ReadPlatformContract": lambda args: queries.read_platform_contract(self.ledger, args),
            "ReadPayment": lambda args: queries.read_payment(self.ledger, args),
            "ReadPaymentDetail": lambda args: queries.read_payment_detail(self.ledger, args),
            "ReadOrder": lambda args: queries.read_order(self.ledger, args),
            "ReadBidMatch": lambda args: queries.read_bid_match(self.ledger, args),
        }

    def read_functions(self):
        return sorted(name for name in self.functions if name.startswith("Read"))

    def init(self):
        return ChaincodeResponse.success()

    def query(self):
        # Legacy shim entry point
        return ChaincodeResponse(status=ERROR, message="Unknown supported call - Query()")

    def invoke(self, function, args):
        logger.debug("starting invoke, for - %s", function)

        handler = self.functions.get(function)
        try:
            if handler is None:
                raise UnknownFunction(function)
            payload = handler(list(args))
        except ChaincodeError as exc:
            logger.warning("Invoke failed: function=%s error=%s", function, exc)
            return ChaincodeResponse.failure(exc)

        logger.debug("- end %s", function)
        return ChaincodeResponse.success(payload)
