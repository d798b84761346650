"""
Settlement service for automated fair settlement calculation.
"""
import logging
from fractions import Fraction
from typing import Dict, Iterable, List, Mapping, Optional
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import UnbalancedInput
from app.core.money import EPSILON, Number, from_minor_units, format_amount, round_minor
from app.models.project import Project
from app.schemas.ledger import ExpenseRecord, Settlement
from app.schemas.settlement import ParticipantBalanceResponse, SettlementSummary, Transfer
from app.services.balance_service import ParticipantBalance, compute_participant_balances, fair_share
from app.services.expense_service import get_expense_records

logger = logging.getLogger(__name__)


class Reconciliation:
    """Balances and settlements computed from one snapshot of expenses."""
    def __init__(
        self,
        participants: List[ParticipantBalance],
        group_total: int,
        fair_share: Fraction,
        settlements: List[Settlement]
    ):
        self.participants = participants
        self.group_total = group_total
        self.fair_share = fair_share
        self.settlements = settlements

    @property
    def balances(self) -> Dict[str, Fraction]:
        return {pb.name: pb.balance for pb in self.participants}


def default_tolerance() -> Fraction:
    """Largest |sum of balances| the solver accepts."""
    return settings.LEDGER_IMBALANCE_FACTOR * EPSILON


def minimize_transfers(
    balances: Mapping[str, Number],
    tolerance: Optional[Fraction] = None
) -> List[Settlement]:
    """
    Minimize the number of transfers needed to settle debts.

    Greedy: the largest creditor is paired with the largest debtor until one
    side runs out. Ties are broken by participant name so the output is
    reproducible. The walk moves exact amounts; emitted amounts are the
    running total of those rounded half-to-even to minor units, so every
    participant ends within one minor unit of their balance however many
    transfers the group needs. Whatever is left once one side runs out is
    rounding dust and is dropped.
    """
    if tolerance is None:
        tolerance = default_tolerance()

    exact: Dict[str, Fraction] = {}
    for name, balance in balances.items():
        if isinstance(balance, float):
            raise TypeError("Binary floats are not accepted for money")
        exact[name] = Fraction(balance)

    imbalance = sum(exact.values(), Fraction(0))
    if abs(imbalance) > tolerance:
        logger.error(f"Refusing to settle balances that are off by {imbalance}")
        raise UnbalancedInput(imbalance)

    # Separate creditors (positive balance) and debtors (negative balance)
    creditors = [[name, bal] for name, bal in exact.items() if bal > EPSILON]
    debtors = [[name, bal] for name, bal in exact.items() if bal < -EPSILON]

    creditors.sort(key=lambda x: (-x[1], x[0]))
    debtors.sort(key=lambda x: (x[1], x[0]))

    transfers = []
    cred_idx = 0
    debt_idx = 0
    moved = Fraction(0)
    emitted = 0

    while cred_idx < len(creditors) and debt_idx < len(debtors):
        creditor = creditors[cred_idx]
        debtor = debtors[debt_idx]

        # Transfer the minimum of what's owed and what's needed
        amount = min(creditor[1], -debtor[1])
        creditor[1] -= amount
        debtor[1] += amount

        # Each participant's transfers are consecutive, so rounding the running
        # total bounds their error by one minor unit
        moved += amount
        rounded = round_minor(moved) - emitted
        if rounded > 0:
            transfers.append(Settlement(from_=debtor[0], to=creditor[0], amount=rounded))
            emitted += rounded

        if creditor[1] == 0:
            cred_idx += 1
        if debtor[1] == 0:
            debt_idx += 1

    logger.debug(
        f"Settled {len(creditors)} creditors and {len(debtors)} debtors "
        f"with {len(transfers)} transfers"
    )
    return transfers


def reconcile(
    participants: Iterable[str],
    expenses: Iterable[ExpenseRecord],
    tolerance: Optional[Fraction] = None
) -> Reconciliation:
    """Aggregate balances and settle them in one call."""
    expenses = list(expenses)
    participant_balances = compute_participant_balances(participants, expenses)
    group_total = sum(expense.amount for expense in expenses)
    settlements = minimize_transfers(
        {pb.name: pb.balance for pb in participant_balances},
        tolerance=tolerance
    )
    return Reconciliation(
        participants=participant_balances,
        group_total=group_total,
        fair_share=fair_share(group_total, len(participant_balances)),
        settlements=settlements
    )


def _signed(units: Number, currency: str) -> str:
    value = round_minor(units)
    return f"{'+' if value >= 0 else '-'}{format_amount(abs(value), currency)}"


def build_summary_text(result: Reconciliation, currency: str) -> str:
    """Plain-text summary of a reconciliation."""
    summary_lines = []
    summary_lines.append(f"Total expenses: {format_amount(result.group_total, currency)}")
    summary_lines.append(f"Participants: {len(result.participants)}")
    summary_lines.append(f"Fair share: {format_amount(result.fair_share, currency)}")
    summary_lines.append("\nNet balances:")
    for pb in result.participants:
        summary_lines.append(f"  {pb.name}: {_signed(pb.balance, currency)}")
    summary_lines.append("\nTransfers:")
    if not result.settlements:
        summary_lines.append("  All settled up.")
    for transfer in result.settlements:
        summary_lines.append(
            f"  {transfer.from_} -> {transfer.to}: {format_amount(transfer.amount, currency)}"
        )
    return "\n".join(summary_lines)


def calculate_project_settlement(project: Project, db: Session) -> SettlementSummary:
    """
    Calculate settlement for a project over its complete expense ledger.
    Participants are identified by name, which is unique within a project.
    """
    records = get_expense_records(project, db)
    result = reconcile([p.name for p in project.participants], records)

    currency = project.currency
    ids = {p.name: p.id for p in project.participants}

    logger.info(
        f"Project {project.id}: {len(records)} expenses settled with "
        f"{len(result.settlements)} transfers"
    )

    return SettlementSummary(
        project_id=project.id,
        currency=currency,
        total_expenses=from_minor_units(result.group_total, currency),
        participant_count=len(result.participants),
        fair_share=from_minor_units(result.fair_share, currency),
        balances=[
            ParticipantBalanceResponse(
                participant_id=ids[pb.name],
                name=pb.name,
                paid_total=from_minor_units(pb.paid_total, currency),
                balance=from_minor_units(pb.balance, currency)
            )
            for pb in result.participants
        ],
        transfers=[
            Transfer(
                from_participant_id=ids[t.from_],
                from_name=t.from_,
                to_participant_id=ids[t.to],
                to_name=t.to,
                amount=from_minor_units(t.amount, currency)
            )
            for t in result.settlements
        ],
        summary=build_summary_text(result, currency)
    )
