"""
Derived View Models

Everything the engine computes from the ledger: budget consumption,
monthly summaries, insights, recommendations and schedule projections.

None of these are persisted. They are recomputed on demand and handed to
the presentation layer as-is.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BudgetStatus(BaseModel):
    """Spend-vs-limit view of one budget for one month."""

    category: str
    color: str = ""
    spent: Decimal = Field(..., ge=0)
    limit: Decimal
    percentage: float = Field(
        ...,
        description="100 * spent / limit; sentinel 100 when the limit is not positive"
    )
    is_over_budget: bool

    @property
    def display_percentage(self) -> float:
        """Percentage clamped to 100, for progress bars."""
        return min(self.percentage, 100.0)

    @property
    def remaining(self) -> Decimal:
        return max(self.limit - self.spent, Decimal("0"))


class MonthlySummary(BaseModel):
    """Income, expenses and savings of one calendar month."""

    year: int
    month: int = Field(..., ge=1, le=12)
    label: str = Field(..., description="Short month name, e.g. 'Mar'")
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    savings: Decimal = Decimal("0")

    @property
    def savings_rate(self) -> float:
        """Share of income kept, 0 when there is no income."""
        if self.income <= 0:
            return 0.0
        return float(self.savings / self.income * 100)


class Insights(BaseModel):
    """Single-value metrics derived from the monthly series and budgets."""

    expense_change: float = Field(
        default=0.0,
        description="Month-over-month expense change in %, 0 without a previous month"
    )
    savings_rate: float = Field(
        default=0.0,
        description="Current month savings as % of income, 0 without income"
    )
    over_budget: list[BudgetStatus] = Field(default_factory=list)
    near_budget: list[BudgetStatus] = Field(default_factory=list)
    top_spending_category: Optional[BudgetStatus] = None
    current_income: Decimal = Decimal("0")
    current_expenses: Decimal = Decimal("0")
    current_savings: Decimal = Decimal("0")


class RecommendationKind(str, Enum):
    WARNING = "warning"
    SUCCESS = "success"
    TIP = "tip"


class Recommendation(BaseModel):
    """One rule-based piece of advice."""

    kind: RecommendationKind
    message: str
    categories: list[str] = Field(
        default_factory=list,
        description="Budget categories the advice is about, if any"
    )


class SpendingSlice(BaseModel):
    """One category's share of a month's expenses, tracked or not."""

    category: str
    amount: Decimal
    share: float = Field(..., ge=0.0, le=100.0)
    color: str
    is_tracked: bool


class CalendarEventKind(str, Enum):
    BILL = "bill"
    INCOME = "income"
    GOAL = "goal"


class CalendarEvent(BaseModel):
    """A dated item in the month calendar."""

    source_id: str
    date: date
    kind: CalendarEventKind
    title: str
    amount: Decimal
    color: str = ""


class CalendarMonth(BaseModel):
    """Scheduled bills, incomes and goal deadlines of one month."""

    year: int
    month: int = Field(..., ge=1, le=12)
    events: list[CalendarEvent] = Field(default_factory=list)

    @property
    def bills_total(self) -> Decimal:
        return sum(
            (e.amount for e in self.events if e.kind == CalendarEventKind.BILL),
            Decimal("0"),
        )

    @property
    def income_total(self) -> Decimal:
        return sum(
            (e.amount for e in self.events if e.kind == CalendarEventKind.INCOME),
            Decimal("0"),
        )

    @property
    def goal_deadlines(self) -> int:
        return sum(1 for e in self.events if e.kind == CalendarEventKind.GOAL)

    def events_on(self, day: date) -> list[CalendarEvent]:
        return [e for e in self.events if e.date == day]


class UpcomingBill(BaseModel):
    """Next due date of an active recurring expense."""

    recurring_id: str
    description: str
    category: str
    amount: Decimal
    next_due: date
    days_until: int = Field(..., ge=0)


class GoalOutlook(BaseModel):
    """Where a goal stands relative to its next milestone and deadline."""

    goal_id: str
    name: str
    progress: float
    next_milestone: int
    amount_to_next_milestone: Decimal
    percent_to_next_milestone: float
    days_to_deadline: int


class MilestoneMessage(BaseModel):
    """Celebration text shown when a milestone is crossed."""

    milestone: int
    title: str
    message: str
    emoji: str
