"""
Report service: period report data for weekly, monthly and yearly exports.
"""
import calendar
import logging
import re
from collections import defaultdict
from datetime import date, timedelta
from typing import Tuple
from urllib.parse import quote
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.money import format_amount, from_minor_units, quantize_amount, to_minor_units
from app.models.expense import Expense
from app.models.project import Project
from app.schemas.report import ProjectReport, ReportExpense, ReportItem, ReportParticipant
from app.services.settlement_service import calculate_project_settlement

logger = logging.getLogger(__name__)

PERIOD_TYPES = ("weekly", "monthly", "yearly")


def period_bounds(period_type: str, ref_date: date) -> Tuple[date, date, str]:
    """
    Return (start, end, label) of the period containing ref_date.
    Weeks start on Monday. Unknown period types are treated as monthly.
    """
    if period_type == "weekly":
        start = ref_date - timedelta(days=ref_date.weekday())
        end = start + timedelta(days=6)
        return start, end, f"Week of {start.strftime('%d %b %Y')}"
    if period_type == "yearly":
        return date(ref_date.year, 1, 1), date(ref_date.year, 12, 31), str(ref_date.year)

    last_day = calendar.monthrange(ref_date.year, ref_date.month)[1]
    return (
        ref_date.replace(day=1),
        ref_date.replace(day=last_day),
        ref_date.strftime("%B %Y")
    )


def report_filename(project_name: str, period_type: str, ref_date: date) -> str:
    """File name for a downloaded report, e.g. ``Goa_Trip_monthly_2025-01.txt``."""
    slug = re.sub(r"\s+", "_", re.sub(r'["\\/]', "", project_name).strip())
    return f"{slug}_{period_type}_{ref_date.strftime('%Y-%m')}.txt"


def content_disposition(filename: str) -> str:
    """
    Attachment header for a report download.
    Names outside ASCII get an RFC 5987 ``filename*`` next to an ASCII fallback.
    """
    quoted = quote(filename)
    if quoted == filename:
        return f'attachment; filename="{filename}"'
    fallback = filename.encode("ascii", "ignore").decode("ascii")
    return f"attachment; filename=\"{fallback}\"; filename*=utf-8''{quoted}"


def build_report(project: Project, period_type: str, ref_date: date, db: Session) -> ProjectReport:
    """
    Collect the expenses of one period plus the settlement guide.

    Period totals only cover the period; the settlement guide is computed from
    the complete ledger so it always reflects what is actually owed.
    """
    if period_type not in PERIOD_TYPES:
        logger.warning(f"Unknown report type {period_type!r}, using monthly")
        period_type = "monthly"

    currency = project.currency
    start, end, label = period_bounds(period_type, ref_date)

    expenses = db.query(Expense).options(
        joinedload(Expense.payer),
        selectinload(Expense.items)
    ).filter(
        Expense.project_id == project.id,
        Expense.date >= start,
        Expense.date <= end
    ).order_by(Expense.date.asc(), Expense.id.asc()).all()

    paid = defaultdict(int)
    for expense in expenses:
        paid[expense.payer_id] += to_minor_units(expense.total, currency)

    settlement = calculate_project_settlement(project, db)

    return ProjectReport(
        project_id=project.id,
        project_name=project.name,
        currency=currency,
        period_type=period_type,
        period_label=label,
        start_date=start,
        end_date=end,
        participants=[
            ReportParticipant(name=p.name, total=from_minor_units(paid[p.id], currency))
            for p in project.participants
        ],
        grand_total=from_minor_units(sum(paid.values()), currency),
        expenses=[
            ReportExpense(
                date=expense.date,
                note=expense.note,
                total=quantize_amount(expense.total, currency),
                payer_name=expense.payer.name,
                items=[
                    ReportItem(
                        name=item.name,
                        price=quantize_amount(item.price, currency),
                        quantity=item.quantity
                    )
                    for item in expense.items
                ]
            )
            for expense in expenses
        ],
        settlements=settlement.transfers,
        filename=report_filename(project.name, period_type, ref_date)
    )


def _money(amount, currency: str) -> str:
    return format_amount(to_minor_units(amount, currency), currency)


def render_text(report: ProjectReport) -> str:
    """Render a report as a plain-text document."""
    currency = report.currency
    lines = [
        report.project_name,
        f"Expense report: {report.period_label}",
        f"Currency: {currency}",
        "",
        "PARTICIPANT TOTALS",
    ]
    for participant in report.participants:
        lines.append(f"  {participant.name}: {_money(participant.total, currency)}")
    lines.append(f"  TOTAL: {_money(report.grand_total, currency)}")

    if report.settlements:
        lines.append("")
        lines.append("SETTLEMENT GUIDE")
        for transfer in report.settlements:
            lines.append(
                f"  {transfer.from_name} -> {transfer.to_name}: {_money(transfer.amount, currency)}"
            )

    lines.append("")
    lines.append("EXPENSES")
    if not report.expenses:
        lines.append("  No expenses in this period.")
    for expense in report.expenses:
        title = expense.note or ", ".join(item.name for item in expense.items)
        lines.append(
            f"  {expense.date.strftime('%d %b %Y')}  {title}  "
            f"({expense.payer_name})  {_money(expense.total, currency)}"
        )
        for item in expense.items:
            lines.append(f"      {item.name} x{item.quantity} @ {_money(item.price, currency)}")

    return "\n".join(lines) + "\n"
