class ChaincodeError(Exception):
    """Base class for every failure reported back to the invoker."""


class ArityError(ChaincodeError):
    """Raised when an operation receives the wrong number of arguments."""

    def __init__(self, expected, received):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Incorrect number of arguments. Expecting {expected}, received {received}"
        )


class ParseError(ChaincodeError):
    """Raised when a positional argument cannot be converted to its field type."""

    def __init__(self, field, value, reason):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Failed to parse {field} from {value!r}: {reason}")


class UnknownDomainValue(ParseError):
    """Raised when a label or code is not part of a closed domain table."""

    def __init__(self, domain, value, field=None):
        self.domain = domain
        super().__init__(field or domain, value, f"unknown {domain} value")


class InvalidInitialState(ChaincodeError):
    """Raised when a brand-new order is registered with a non-initial bid status."""

    def __init__(self, order_id, status):
        self.order_id = order_id
        self.status = status
        super().__init__(
            f"Invalid BidStatus {status} for new Order {order_id}. "
            f"It should be BidCreated (0) or BidAccepted (1)."
        )


class ReferenceNotFound(ChaincodeError):
    """Raised when an operation refers to a record that does not exist."""

    def __init__(self, kind, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} with ID {identifier} not found")


class NotFound(ChaincodeError):
    """Raised when a read targets an absent record."""

    def __init__(self, kind, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} with ID {identifier} not found.")


class MalformedRecord(ChaincodeError):
    """Raised when stored bytes cannot be decoded into a record."""

    def __init__(self, kind, reason):
        self.kind = kind
        self.reason = reason
        super().__init__(f"Malformed {kind} record: {reason}")


class PersistenceError(ChaincodeError):
    """Raised when the ledger fails to read or write a key."""

    def __init__(self, reason):
        self.reason = reason
        super().__init__(str(reason))


class UnknownFunction(ChaincodeError):
    """Raised when the dispatcher receives an unregistered function name."""

    def __init__(self, function):
        self.function = function
        super().__init__(f"Received unknown invoke function name - '{function}'")
