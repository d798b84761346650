"""
Balance service: reduce expense records to one signed balance per participant.
"""
import logging
from fractions import Fraction
from typing import Dict, Iterable, List

from app.core.exceptions import InvalidReference
from app.schemas.ledger import ExpenseRecord

logger = logging.getLogger(__name__)


class ParticipantBalance:
    """Paid total and net balance of one participant, in minor units."""
    def __init__(self, name: str, paid_total: int, balance: Fraction):
        self.name = name
        self.paid_total = paid_total
        self.balance = balance

    def __repr__(self):
        return f"ParticipantBalance({self.name!r}, paid_total={self.paid_total}, balance={self.balance})"


def fair_share(group_total: int, participant_count: int) -> Fraction:
    """Equal portion of the group total owed by each participant."""
    if participant_count == 0:
        return Fraction(0)
    return Fraction(group_total, participant_count)


def compute_participant_balances(
    participants: Iterable[str],
    expenses: Iterable[ExpenseRecord]
) -> List[ParticipantBalance]:
    """
    Compute paid totals and balances, in the order participants were given.

    Raises InvalidReference if an expense was paid by someone outside
    ``participants``.
    """
    # dict keeps first-seen order and drops duplicate identifiers
    paid: Dict[str, int] = dict.fromkeys(participants, 0)

    group_total = 0
    for expense in expenses:
        if expense.payer_id not in paid:
            logger.warning(f"Rejecting expense from unknown payer {expense.payer_id!r}")
            raise InvalidReference(expense.payer_id)
        paid[expense.payer_id] += expense.amount
        group_total += expense.amount

    share = fair_share(group_total, len(paid))
    logger.debug(f"Aggregated {group_total} minor units over {len(paid)} participants")

    return [
        ParticipantBalance(name, paid_total, paid_total - share)
        for name, paid_total in paid.items()
    ]


def aggregate_balances(
    participants: Iterable[str],
    expenses: Iterable[ExpenseRecord]
) -> Dict[str, Fraction]:
    """Map each participant to ``paid_total - fair_share`` (positive = owed money)."""
    return {
        pb.name: pb.balance
        for pb in compute_participant_balances(participants, expenses)
    }
