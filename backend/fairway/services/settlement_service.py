"""
Settlement service: net balances and debt simplification for shared trip expenses.

The calculation itself is a pair of pure functions over plain value objects
(calculate_balance_sheet / simplify_debts) so it can run from routes,
scripts and tests alike. calculate_trip_settlement is the thin database
adapter used by the API.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence
from sqlalchemy.orm import Session, selectinload
from fairway.core.config import settings
from fairway.core.exceptions import ValidationError
from fairway.models.expense import Expense
from fairway.models.trip import Trip

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class Participant:
    """Someone on the trip roster."""
    def __init__(self, participant_id: Hashable, name: str = ""):
        self.id = participant_id
        self.name = name


class SharedExpense:
    """
    An expense as seen by the settlement calculation.

    split_among lists the participants sharing the cost; an empty list
    means the whole roster.
    """
    def __init__(self, payer_id: Hashable, amount: Any, split_among: Optional[Iterable[Hashable]] = None,
                 expense_id: Optional[Hashable] = None):
        self.id = expense_id
        self.payer_id = payer_id
        self.amount = amount
        self.split_among = list(split_among or [])


class ParticipantBalance:
    """What one participant paid, what they consumed, and the difference."""
    def __init__(self, participant_id: Hashable, paid: Decimal = Decimal(0), owed: Decimal = Decimal(0)):
        self.participant_id = participant_id
        self.paid = paid
        self.owed = owed

    @property
    def net(self) -> Decimal:
        """Positive = should receive, negative = should pay."""
        return self.paid - self.owed


class Transfer:
    """Represents a single transfer between participants."""
    def __init__(self, from_id: Hashable, to_id: Hashable, amount: Decimal):
        self.from_id = from_id
        self.to_id = to_id
        self.amount = amount

    def __repr__(self):
        return f"Transfer({self.from_id!r} -> {self.to_id!r}: {self.amount})"


class Settlement:
    """Balance sheet plus the transfers that settle it."""
    def __init__(self, balances: Dict[Hashable, ParticipantBalance], transfers: List[Transfer]):
        self.balances = balances
        self.transfers = transfers

    @property
    def net_balances(self) -> Dict[Hashable, Decimal]:
        return {pid: b.net for pid, b in self.balances.items()}


def _to_decimal(value: Any, label: str) -> Decimal:
    """Convert to a finite Decimal or raise ValidationError."""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{label} is not a number: {value!r}")
    if not amount.is_finite():
        raise ValidationError(f"{label} must be a finite number, got {value!r}")
    return amount


def _roster_ids(participants: Sequence[Participant]) -> List[Hashable]:
    ids = []
    seen = set()
    for participant in participants:
        if participant.id in seen:
            raise ValidationError(f"Participant {participant.id!r} appears twice in the roster")
        seen.add(participant.id)
        ids.append(participant.id)
    return ids


def resolve_split(expense: SharedExpense, roster_ids: Sequence[Hashable]) -> List[Hashable]:
    """
    Return the participants who share an expense.

    An empty split means the whole roster. Duplicates are collapsed and
    every member must be on the roster.
    """
    if not expense.split_among:
        return list(roster_ids)

    roster = set(roster_ids)
    members = []
    for participant_id in expense.split_among:
        if participant_id not in roster:
            raise ValidationError(
                f"Expense {expense.id!r} is split with {participant_id!r}, who is not on the roster"
            )
        if participant_id not in members:
            members.append(participant_id)
    return members


def calculate_balance_sheet(
    expenses: Iterable[SharedExpense],
    participants: Sequence[Participant]
) -> Dict[Hashable, ParticipantBalance]:
    """
    Compute paid / owed / net per participant, in roster order.

    Every roster participant is present even without any activity. Each
    expense credits its payer with the full amount and charges an equal
    share to each member of its split.
    """
    roster_ids = _roster_ids(participants)
    sheet = {pid: ParticipantBalance(pid) for pid in roster_ids}

    for expense in expenses:
        amount = _to_decimal(expense.amount, f"Amount of expense {expense.id!r}")
        if amount < 0:
            raise ValidationError(f"Amount of expense {expense.id!r} cannot be negative")
        if expense.payer_id not in sheet:
            raise ValidationError(f"Payer {expense.payer_id!r} of expense {expense.id!r} is not on the roster")

        members = resolve_split(expense, roster_ids)
        sheet[expense.payer_id].paid += amount
        share = amount / len(members)
        for participant_id in members:
            sheet[participant_id].owed += share

    return sheet


def calculate_balances(
    expenses: Iterable[SharedExpense],
    participants: Sequence[Participant]
) -> Dict[Hashable, Decimal]:
    """Net balance per participant (positive = is owed, negative = owes)."""
    sheet = calculate_balance_sheet(expenses, participants)
    return {pid: balance.net for pid, balance in sheet.items()}


def simplify_debts(balances: Mapping[Hashable, Any], epsilon: Optional[Decimal] = None) -> List[Transfer]:
    """
    Minimize the number of transfers needed to settle debts.

    Greedy matching: most-negative debtor pays most-positive creditor the
    smaller of the two magnitudes, and whichever side reaches zero (within
    epsilon) moves on. Produces at most debtors + creditors - 1 transfers.
    """
    if epsilon is None:
        epsilon = settings.SETTLEMENT_EPSILON

    debtors = []
    creditors = []
    for participant_id, value in balances.items():
        balance = _to_decimal(value, f"Balance of {participant_id!r}")
        if balance < -epsilon:
            debtors.append([participant_id, balance])
        elif balance > epsilon:
            creditors.append([participant_id, balance])

    # Stable sorts keep input order among equal balances
    debtors.sort(key=lambda x: x[1])
    creditors.sort(key=lambda x: x[1], reverse=True)

    transfers = []
    debt_idx = 0
    cred_idx = 0

    while debt_idx < len(debtors) and cred_idx < len(creditors):
        debtor_id, debt_balance = debtors[debt_idx]
        creditor_id, cred_balance = creditors[cred_idx]

        amount = min(abs(debt_balance), cred_balance)
        transfers.append(Transfer(debtor_id, creditor_id, amount))

        debtors[debt_idx][1] = debt_balance + amount
        creditors[cred_idx][1] = cred_balance - amount

        if abs(debtors[debt_idx][1]) < epsilon:
            debt_idx += 1
        if abs(creditors[cred_idx][1]) < epsilon:
            cred_idx += 1

    return transfers


def settle(
    expenses: Iterable[SharedExpense],
    participants: Sequence[Participant],
    epsilon: Optional[Decimal] = None
) -> Settlement:
    """Run the balance calculation and feed it straight into debt simplification."""
    sheet = calculate_balance_sheet(expenses, participants)
    transfers = simplify_debts({pid: b.net for pid, b in sheet.items()}, epsilon=epsilon)
    logger.debug(f"Settled {len(sheet)} participants with {len(transfers)} transfers")
    return Settlement(sheet, transfers)


def to_cents(amount: Decimal) -> Decimal:
    """Round to whole cents for display."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_trip_settlement(trip_id: int, db: Session) -> Dict[str, Any]:
    """
    Load a trip's roster and expenses and compute its settlement.
    Nothing is written back; the result is rebuilt on every call.
    """
    trip = db.query(Trip).options(selectinload(Trip.golfers)).filter(Trip.id == trip_id).first()
    golfers = trip.golfers if trip else []
    expenses = db.query(Expense).options(
        selectinload(Expense.splits)
    ).filter(Expense.trip_id == trip_id).order_by(Expense.expense_date, Expense.id).all()

    participants = [Participant(g.id, g.name) for g in golfers]
    shared = [SharedExpense(e.payer_id, e.amount, e.split_among, expense_id=e.id) for e in expenses]
    result = settle(shared, participants)

    name_map = {p.id: p.name for p in participants}
    total = sum((Decimal(e.amount) for e in expenses), Decimal(0))

    calculation_data = {
        "trip_id": trip_id,
        "total_expenses": to_cents(total),
        "participant_count": len(participants),
        "balances": [
            {
                "golfer_id": pid,
                "name": name_map.get(pid, ""),
                "paid": to_cents(b.paid),
                "owed": to_cents(b.owed),
                "net": to_cents(b.net),
            }
            for pid, b in result.balances.items()
        ],
        "transfers": [
            {
                "from_golfer_id": t.from_id,
                "from_name": name_map.get(t.from_id, ""),
                "to_golfer_id": t.to_id,
                "to_name": name_map.get(t.to_id, ""),
                "amount": to_cents(t.amount),
            }
            for t in result.transfers
        ],
    }
    calculation_data["summary"] = build_summary(calculation_data)
    return calculation_data


def build_summary(calculation_data: Dict[str, Any]) -> str:
    """Plain-text summary of a settlement."""
    summary_lines = [
        f"Total expenses: ${calculation_data['total_expenses']:.2f}",
        f"Participants: {calculation_data['participant_count']}",
        "\nNet balances:",
    ]
    for balance in calculation_data["balances"]:
        summary_lines.append(f"  {balance['name']}: {balance['net']:+.2f}")
    summary_lines.append("\nTransfers:")
    if not calculation_data["transfers"]:
        summary_lines.append("  All settled up!")
    for transfer in calculation_data["transfers"]:
        summary_lines.append(
            f"  {transfer['from_name']} -> {transfer['to_name']}: ${transfer['amount']:.2f}"
        )
    return "\n".join(summary_lines)
