"""Error taxonomy for the POS core."""

from __future__ import annotations


class PosError(Exception):
    """Base class for recoverable POS errors."""


class ValidationError(PosError, ValueError):
    """Rejected product input (empty name, negative or unparsable price)."""


class InvalidCheckout(PosError):
    """Checkout refused: the cart is empty or nobody is logged in."""


class IllegalTransition(PosError, ValueError):
    """Kitchen status change that the workflow does not allow."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"Invalid state transition from {current} to {requested}")
        self.current = current
        self.requested = requested
