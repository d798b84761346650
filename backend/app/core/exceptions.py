"""
Ledger errors raised by the reconciliation engine.
"""
from fractions import Fraction


class LedgerError(Exception):
    """Base class for reconciliation failures."""


class InvalidReference(LedgerError):
    """An expense names a payer who is not part of the participant set."""

    def __init__(self, payer_id: str):
        self.payer_id = payer_id
        super().__init__(f"Payer {payer_id!r} is not a participant")


class UnbalancedInput(LedgerError):
    """Balances handed to the solver do not sum to zero."""

    def __init__(self, imbalance: Fraction):
        self.imbalance = imbalance
        super().__init__(
            f"Balances are off by {imbalance} minor units; "
            "they must come from a single fair-share computation"
        )
