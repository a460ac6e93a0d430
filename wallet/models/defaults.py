"""
Default and sample records.

Used when no snapshot exists yet. Sample data is only seeded when
`AppSettings.seed_sample_data` is on.
"""

from datetime import date
from decimal import Decimal

from wallet.models.ledger import (
    Budget,
    DomainSnapshot,
    Goal,
    Profile,
    RecurringTransaction,
    Transaction,
    TransactionType,
)


CHART_PALETTE: tuple[str, ...] = (
    "hsl(var(--chart-1))",
    "hsl(var(--chart-2))",
    "hsl(var(--chart-3))",
    "hsl(var(--chart-4))",
    "hsl(var(--chart-5))",
    "hsl(var(--chart-6))",
)

BILL_COLOR = "hsl(var(--destructive))"
INCOME_COLOR = "hsl(var(--chart-2))"


def default_budgets() -> list[Budget]:
    return [
        Budget(category="Food & Dining", limit=Decimal("5000"), color=CHART_PALETTE[0]),
        Budget(category="Transportation", limit=Decimal("3000"), color=CHART_PALETTE[1]),
        Budget(category="Entertainment", limit=Decimal("2000"), color=CHART_PALETTE[2]),
        Budget(category="Shopping", limit=Decimal("4000"), color=CHART_PALETTE[3]),
        Budget(category="Utilities", limit=Decimal("2500"), color=CHART_PALETTE[4]),
        Budget(category="Healthcare", limit=Decimal("1500"), color=CHART_PALETTE[5]),
    ]


def default_profile() -> Profile:
    return Profile(name="John Doe", email="john.doe@example.com")


def _txn(id_, type_, amount, category, description, on) -> Transaction:
    return Transaction(
        id=id_,
        type=type_,
        amount=Decimal(amount),
        category=category,
        description=description,
        date=on,
    )


def sample_transactions() -> list[Transaction]:
    expense, income = TransactionType.EXPENSE, TransactionType.INCOME
    return [
        _txn("1", expense, "450", "Food & Dining", "Grocery shopping", date(2025, 12, 8)),
        _txn("2", expense, "1200", "Transportation", "Fuel", date(2025, 12, 7)),
        _txn("3", income, "25000", "Salary", "Monthly salary", date(2025, 12, 1)),
        _txn("4", expense, "350", "Entertainment", "Movie tickets", date(2025, 12, 6)),
        _txn("5", expense, "2500", "Shopping", "New clothes", date(2025, 12, 5)),
        _txn("6", expense, "1800", "Utilities", "Electricity bill", date(2025, 12, 4)),
        _txn("7", income, "5000", "Freelance", "Side project", date(2025, 12, 3)),
        _txn("8", expense, "650", "Healthcare", "Medicine", date(2025, 12, 2)),
    ]


def sample_goals() -> list[Goal]:
    return [
        Goal(
            id="1",
            name="Emergency Fund",
            target_amount=Decimal("50000"),
            current_amount=Decimal("32500"),
            deadline=date(2025, 6, 30),
            icon="shield",
            color=CHART_PALETTE[0],
            milestones_reached=[25, 50],
        ),
        Goal(
            id="2",
            name="New Car",
            target_amount=Decimal("150000"),
            current_amount=Decimal("45000"),
            deadline=date(2026, 1, 15),
            icon="car",
            color=CHART_PALETTE[1],
            milestones_reached=[25],
        ),
        Goal(
            id="3",
            name="Vacation",
            target_amount=Decimal("25000"),
            current_amount=Decimal("18750"),
            deadline=date(2025, 4, 1),
            icon="plane",
            color=CHART_PALETTE[2],
            milestones_reached=[25, 50, 75],
        ),
    ]


def sample_recurring() -> list[RecurringTransaction]:
    expense, income = TransactionType.EXPENSE, TransactionType.INCOME
    rows = [
        ("r1", expense, "8500", "Housing", "Rent", 1),
        ("r2", expense, "1200", "Utilities", "Electricity Bill", 15),
        ("r3", expense, "450", "Utilities", "Internet", 5),
        ("r4", expense, "199", "Entertainment", "Netflix", 8),
        ("r5", expense, "149", "Entertainment", "Spotify", 12),
        ("r6", expense, "350", "Transportation", "Car Insurance", 20),
        ("r7", income, "25000", "Salary", "Monthly Salary", 25),
    ]
    return [
        RecurringTransaction(
            id=id_,
            type=type_,
            amount=Decimal(amount),
            category=category,
            description=description,
            day_of_month=day,
        )
        for id_, type_, amount, category, description, day in rows
    ]


def default_snapshot(seed_sample_data: bool = False) -> DomainSnapshot:
    """Initial state for a first start."""
    snapshot = DomainSnapshot(
        budgets=default_budgets(),
        profile=default_profile(),
    )
    if seed_sample_data:
        snapshot.transactions = sample_transactions()
        snapshot.goals = sample_goals()
        snapshot.recurring_transactions = sample_recurring()
    return snapshot
