"""
Analytics Engine

DESIGN DECISION: Analytics are DERIVED, never stored.
Every call aggregates the current ledger from scratch. Nothing here
mutates the domain state.

Produces:
- A trailing monthly series (income / expenses / savings)
- Current-month spending per budget
- Insights (expense change, savings rate, budget pressure)
- Rule-based recommendations
- Calendar, yearly trend and spending breakdown views

Every ratio has a defined value on degenerate input: no income means a
0% savings rate, no previous spending means a 0% change.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from wallet.budgets.tracker import budget_status, expenses_by_category
from wallet.config import AnalyticsSettings, get_settings
from wallet.models.analytics import (
    BudgetStatus,
    CalendarEvent,
    CalendarEventKind,
    CalendarMonth,
    Insights,
    MonthlySummary,
    Recommendation,
    RecommendationKind,
    SpendingSlice,
)
from wallet.models.defaults import BILL_COLOR, CHART_PALETTE, INCOME_COLOR
from wallet.models.ledger import TransactionType
from wallet.periods import (
    YearMonth,
    in_month,
    month_label,
    month_of,
    months_of_year,
    trailing_months,
)
from wallet.state import DomainState


ZERO = Decimal("0")


class AnalyticsEngine:
    """
    Derived views over a `DomainState`.

    GUARANTEES:
    - Only reads state, never writes it
    - Never raises on well-formed but degenerate data (empty ledger,
      zero income, no budgets)
    """

    def __init__(
        self,
        state: DomainState,
        settings: Optional[AnalyticsSettings] = None,
        clock: Callable[[], date] = date.today,
    ):
        self._state = state
        self._settings = settings or get_settings().analytics
        self._clock = clock

    def _current_month(self) -> YearMonth:
        return month_of(self._clock())

    def _totals_by_month(self) -> dict[YearMonth, dict[TransactionType, Decimal]]:
        """Income and expense sums grouped by calendar month."""
        groups: dict[YearMonth, dict[TransactionType, Decimal]] = defaultdict(
            lambda: {TransactionType.INCOME: ZERO, TransactionType.EXPENSE: ZERO}
        )
        for t in self._state.transactions:
            groups[month_of(t.date)][t.type] += t.amount
        return groups

    def _summaries(self, months: list[YearMonth]) -> list[MonthlySummary]:
        totals = self._totals_by_month()
        summaries = []
        for month in months:
            income = totals[month][TransactionType.INCOME] if month in totals else ZERO
            expenses = totals[month][TransactionType.EXPENSE] if month in totals else ZERO
            summaries.append(MonthlySummary(
                year=month[0],
                month=month[1],
                label=month_label(month),
                income=income,
                expenses=expenses,
                savings=income - expenses,
            ))
        return summaries

    # -------------------------------------------------------------------------
    # Series and spending
    # -------------------------------------------------------------------------

    def monthly_series(self, months_back: Optional[int] = None) -> list[MonthlySummary]:
        """
        Trailing monthly summaries, oldest first, ending with the current month.

        Always exactly `months_back` entries; months without transactions
        are all zeros. A non-positive `months_back` gives an empty series.
        """
        months_back = self._settings.months_back if months_back is None else months_back
        if months_back <= 0:
            return []
        return self._summaries(trailing_months(self._current_month(), months_back))

    def month_summary(self, month: Optional[YearMonth] = None) -> MonthlySummary:
        """Income, expenses and savings of one month (default: current)."""
        return self._summaries([month or self._current_month()])[0]

    def yearly_trend(self, year: Optional[int] = None) -> list[MonthlySummary]:
        """January to December of `year` (default: current year)."""
        year = year or self._clock().year
        return self._summaries(list(months_of_year(year)))

    def category_spending(self, month: Optional[YearMonth] = None) -> list[BudgetStatus]:
        """Spend per budget category for `month` (default: current)."""
        month = month or self._current_month()
        spending = expenses_by_category(self._state.transactions, month)
        return [
            budget_status(budget, spending.get(budget.category, ZERO))
            for budget in self._state.budgets
        ]

    def spending_breakdown(self, month: Optional[YearMonth] = None) -> list[SpendingSlice]:
        """
        Every expense category of the month, tracked or not, largest first.

        Tracked categories keep their budget color; the others take palette
        colors in order of first appearance.
        """
        month = month or self._current_month()
        spending = expenses_by_category(self._state.transactions, month)
        total = sum(spending.values(), ZERO)
        colors = {b.category: b.color for b in self._state.budgets}

        slices = []
        for index, (category, amount) in enumerate(spending.items()):
            tracked = category in colors
            slices.append(SpendingSlice(
                category=category,
                amount=amount,
                share=float(amount / total * 100) if total > 0 else 0.0,
                color=colors[category] if tracked else CHART_PALETTE[index % len(CHART_PALETTE)],
                is_tracked=tracked,
            ))
        return sorted(slices, key=lambda s: s.amount, reverse=True)

    def calendar_events(self, month: Optional[YearMonth] = None) -> CalendarMonth:
        """Active recurring due dates and goal deadlines falling in `month`."""
        month = month or self._current_month()
        events = []

        for template in self._state.recurring_transactions:
            if not template.is_active:
                continue
            is_bill = template.type == TransactionType.EXPENSE
            events.append(CalendarEvent(
                source_id=template.id,
                date=date(month[0], month[1], template.day_of_month),
                kind=CalendarEventKind.BILL if is_bill else CalendarEventKind.INCOME,
                title=template.description,
                amount=template.amount,
                color=BILL_COLOR if is_bill else INCOME_COLOR,
            ))

        for goal in self._state.goals:
            if in_month(goal.deadline, month):
                events.append(CalendarEvent(
                    source_id=goal.id,
                    date=goal.deadline,
                    kind=CalendarEventKind.GOAL,
                    title=f"{goal.name} deadline",
                    amount=goal.target_amount - goal.current_amount,
                    color=goal.color,
                ))

        events.sort(key=lambda e: e.date)
        return CalendarMonth(year=month[0], month=month[1], events=events)

    # -------------------------------------------------------------------------
    # Insights and recommendations
    # -------------------------------------------------------------------------

    def insights(
        self,
        series: list[MonthlySummary],
        category_spending: list[BudgetStatus],
    ) -> Insights:
        """
        Single-value metrics from the last two series entries and budgets.
        """
        current = series[-1] if series else None
        previous = series[-2] if len(series) >= 2 else None

        expense_change = 0.0
        if current and previous and previous.expenses > 0:
            expense_change = float(
                (current.expenses - previous.expenses) / previous.expenses * 100
            )

        near = self._settings.near_budget_threshold
        over_budget = [c for c in category_spending if c.is_over_budget]
        near_budget = [
            c for c in category_spending
            if not c.is_over_budget and near <= c.percentage <= 100
        ]
        top = max(category_spending, key=lambda c: c.spent, default=None)

        return Insights(
            expense_change=expense_change,
            savings_rate=current.savings_rate if current else 0.0,
            over_budget=over_budget,
            near_budget=near_budget,
            top_spending_category=top,
            current_income=current.income if current else ZERO,
            current_expenses=current.expenses if current else ZERO,
            current_savings=current.savings if current else ZERO,
        )

    def recommendations(self, insights: Insights) -> list[Recommendation]:
        """
        Rule-based advice, in rule order. Empty when nothing applies.

        1. One warning per over-budget category
        2. Savings rate below target (tip) or at/above it (success)
        3. Expenses rising sharply (warning) or dropping (success)
        4. One tip listing categories close to their limit
        """
        settings = self._settings
        recs = []

        for cat in insights.over_budget:
            if cat.limit <= 0:
                message = f"{cat.category} has no spending limit set. Set a budget to track it."
            else:
                message = (
                    f"{cat.category} is {cat.percentage - 100:.0f}% over budget. "
                    "Consider reducing spending."
                )
            recs.append(Recommendation(
                kind=RecommendationKind.WARNING,
                message=message,
                categories=[cat.category],
            ))

        if insights.savings_rate < settings.savings_rate_target and insights.current_income > 0:
            recs.append(Recommendation(
                kind=RecommendationKind.TIP,
                message=(
                    f"Your savings rate is {insights.savings_rate:.0f}%. "
                    f"Try to save at least {settings.savings_rate_target:.0f}% of your income."
                ),
            ))
        elif insights.savings_rate >= settings.savings_rate_target:
            recs.append(Recommendation(
                kind=RecommendationKind.SUCCESS,
                message=(
                    f"Great job! You're saving {insights.savings_rate:.0f}% "
                    "of your income this month."
                ),
            ))

        if insights.expense_change > settings.expense_rise_alert:
            recs.append(Recommendation(
                kind=RecommendationKind.WARNING,
                message=f"Spending increased {insights.expense_change:.0f}% compared to last month.",
            ))
        elif insights.expense_change < settings.expense_drop_praise:
            recs.append(Recommendation(
                kind=RecommendationKind.SUCCESS,
                message=(
                    f"Excellent! You reduced spending by "
                    f"{abs(insights.expense_change):.0f}% this month."
                ),
            ))

        if insights.near_budget:
            names = [c.category for c in insights.near_budget]
            recs.append(Recommendation(
                kind=RecommendationKind.TIP,
                message=f"{', '.join(names)} approaching budget limit.",
                categories=names,
            ))

        return recs

    def current_recommendations(self) -> list[Recommendation]:
        """Insights and recommendations for the current month in one call."""
        return self.recommendations(
            self.insights(self.monthly_series(), self.category_spending())
        )
