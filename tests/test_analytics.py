"""Tests for the derived analytics views."""

import pytest
from datetime import date
from decimal import Decimal

from factories import budget, expense, income
from wallet.analytics import AnalyticsEngine
from wallet.ledger import LedgerStore
from wallet.models.analytics import (
    BudgetStatus,
    CalendarEventKind,
    Insights,
    MonthlySummary,
    RecommendationKind,
)
from wallet.models.defaults import BILL_COLOR, CHART_PALETTE
from wallet.models.ledger import Goal, RecurringTransaction, TransactionType
from wallet.periods import month_bounds, shift_month, trailing_months


@pytest.fixture
def analytics(state, analytics_settings, clock):
    return AnalyticsEngine(state, settings=analytics_settings, clock=clock)


@pytest.fixture
def ledger(state):
    return LedgerStore(state)


def summary(year, month, income="0", expenses="0"):
    income, expenses = Decimal(income), Decimal(expenses)
    return MonthlySummary(
        year=year, month=month, label="", income=income, expenses=expenses, savings=income - expenses
    )


def status(category, spent, limit):
    spent, limit = Decimal(str(spent)), Decimal(str(limit))
    percentage = float(spent / limit * 100)
    return BudgetStatus(
        category=category, spent=spent, limit=limit,
        percentage=percentage, is_over_budget=percentage > 100,
    )


class TestPeriods:
    """Tests for the calendar month helpers."""

    def test_month_bounds_leap_year(self):
        """Test February bounds in a leap year."""
        assert month_bounds((2028, 2)) == (date(2028, 2, 1), date(2028, 2, 29))

    def test_shift_month_across_year(self):
        """Test month shifting across a year boundary."""
        assert shift_month((2026, 1), -1) == (2025, 12)
        assert shift_month((2025, 12), 1) == (2026, 1)

    def test_trailing_months(self):
        """Test trailing months are listed oldest first."""
        assert trailing_months((2026, 2), 3) == [(2025, 12), (2026, 1), (2026, 2)]


class TestMonthlySeries:
    """Tests for the trailing monthly series."""

    def test_empty_ledger_gives_zero_months(self, analytics):
        """Test an empty ledger still yields a full series of zeros."""
        series = analytics.monthly_series()
        assert len(series) == 6
        assert all(m.income == 0 and m.expenses == 0 and m.savings == 0 for m in series)

    def test_oldest_first_ending_this_month(self, analytics):
        """Test the series ends with the current month."""
        series = analytics.monthly_series()
        assert [(m.year, m.month) for m in series] == [
            (2025, 10), (2025, 11), (2025, 12), (2026, 1), (2026, 2), (2026, 3),
        ]
        assert series[-1].label == "Mar"

    def test_year_boundary(self, state, analytics_settings):
        """Test the series spans the previous year in January and February."""
        engine = AnalyticsEngine(state, settings=analytics_settings, clock=lambda: date(2026, 2, 10))
        series = engine.monthly_series(3)
        assert [(m.year, m.month, m.label) for m in series] == [
            (2025, 12, "Dec"), (2026, 1, "Jan"), (2026, 2, "Feb"),
        ]

    def test_totals(self, analytics, ledger):
        """Test income, expenses and savings per month."""
        ledger.add(income(25000, date(2026, 3, 1)))
        ledger.add(expense(450, "Food & Dining", date(2026, 3, 8)))
        ledger.add(expense(1000, "Shopping", date(2026, 2, 28)))
        ledger.add(expense(5000, "Shopping", date(2025, 3, 1)))

        series = analytics.monthly_series()
        assert series[-1].income == Decimal("25000")
        assert series[-1].expenses == Decimal("450")
        assert series[-1].savings == Decimal("24550")
        assert series[-1].savings_rate == pytest.approx(98.2)
        assert series[-2].expenses == Decimal("1000")
        assert sum(m.expenses for m in series) == Decimal("1450")

    @pytest.mark.parametrize("months_back", [0, -3])
    def test_non_positive_length(self, analytics, months_back):
        """Test a non-positive length gives an empty series."""
        assert analytics.monthly_series(months_back) == []

    def test_yearly_trend(self, analytics, ledger):
        """Test the yearly trend covers January to December."""
        ledger.add(income(1000, date(2025, 7, 14)))
        trend = analytics.yearly_trend(2025)
        assert [m.label for m in trend][:3] == ["Jan", "Feb", "Mar"]
        assert len(trend) == 12
        assert trend[6].income == Decimal("1000")

    def test_month_summary_defaults_to_current(self, analytics, ledger):
        """Test month summary uses the current month by default."""
        ledger.add(expense(80, "Food & Dining", date(2026, 3, 31)))
        assert analytics.month_summary().expenses == Decimal("80")
        assert analytics.month_summary((2026, 4)).expenses == Decimal("0")


class TestCategorySpending:
    """Tests for current-month spend per budget and the breakdown view."""

    def test_category_spending(self, analytics, ledger, state):
        """Test current-month spend per budget."""
        state.budgets.append(budget("Food & Dining", 5000))
        ledger.add(expense(450, "Food & Dining", date(2026, 3, 8)))

        spending = analytics.category_spending()
        assert len(spending) == 1
        assert spending[0].spent == Decimal("450")
        assert spending[0].percentage == pytest.approx(9.0)
        assert spending[0].is_over_budget is False

    def test_breakdown_includes_untracked(self, analytics, ledger, state):
        """Test the breakdown lists untracked categories too."""
        state.budgets.append(budget("Food & Dining", 5000, color="food"))
        ledger.add(expense(300, "Food & Dining", date(2026, 3, 8)))
        ledger.add(expense(100, "Pets", date(2026, 3, 9)))
        ledger.add(expense(900, "Pets", date(2026, 2, 9)))

        slices = analytics.spending_breakdown()
        assert [(s.category, s.amount, s.is_tracked) for s in slices] == [
            ("Food & Dining", Decimal("300"), True),
            ("Pets", Decimal("100"), False),
        ]
        assert slices[0].share == pytest.approx(75.0)
        assert slices[0].color == "food"
        assert slices[1].color == CHART_PALETTE[1]

    def test_breakdown_empty_month(self, analytics):
        """Test the breakdown of a month without expenses."""
        assert analytics.spending_breakdown() == []


class TestInsights:
    """Tests for single-value insights."""

    def test_degenerate_input(self, analytics):
        """Test insights on an empty series and no budgets."""
        insights = analytics.insights([], [])
        assert insights.expense_change == 0.0
        assert insights.savings_rate == 0.0
        assert insights.over_budget == []
        assert insights.top_spending_category is None

    def test_expense_change(self, analytics):
        """Test month-over-month expense change."""
        series = [summary(2026, 2, expenses="1000"), summary(2026, 3, expenses="1500")]
        assert analytics.insights(series, []).expense_change == pytest.approx(50.0)

    def test_no_previous_spending(self, analytics):
        """Test expense change is 0 without previous spending."""
        series = [summary(2026, 2), summary(2026, 3, expenses="1500")]
        assert analytics.insights(series, []).expense_change == 0.0

    def test_no_income_means_zero_savings_rate(self, analytics):
        """Test savings rate is 0 without income."""
        series = [summary(2026, 3, expenses="1500")]
        assert analytics.insights(series, []).savings_rate == 0.0

    def test_budget_buckets(self, analytics):
        """Test over, near and top spending categories."""
        spending = [
            status("Food & Dining", 6000, 5000),
            status("Shopping", 3400, 4000),
            status("Utilities", 2500, 2500),
            status("Healthcare", 100, 1500),
        ]
        insights = analytics.insights([summary(2026, 3)], spending)
        assert [c.category for c in insights.over_budget] == ["Food & Dining"]
        assert [c.category for c in insights.near_budget] == ["Shopping", "Utilities"]
        assert insights.top_spending_category.category == "Food & Dining"


class TestRecommendations:
    """Tests for rule-based recommendations."""

    def messages(self, analytics, **fields):
        return [(r.kind, r.message) for r in analytics.recommendations(Insights(**fields))]

    def test_nothing_to_say(self, analytics):
        """Test no recommendations for neutral insights."""
        assert analytics.recommendations(Insights()) == []

    def test_missing_limit_warning(self, analytics):
        """Test a budget without a positive limit gets its own warning."""
        broken = BudgetStatus(
            category="Gifts", spent=Decimal("10"), limit=Decimal("0"),
            percentage=100.0, is_over_budget=True,
        )
        recs = analytics.recommendations(Insights(over_budget=[broken]))
        assert recs[0].kind == RecommendationKind.WARNING
        assert recs[0].message == "Gifts has no spending limit set. Set a budget to track it."

    def test_over_budget_warning(self, analytics):
        """Test the over-budget warning text."""
        recs = analytics.recommendations(Insights(over_budget=[status("Food & Dining", 6000, 5000)]))
        assert recs[0].kind == RecommendationKind.WARNING
        assert recs[0].message == "Food & Dining is 20% over budget. Consider reducing spending."
        assert recs[0].categories == ["Food & Dining"]

    def test_low_savings_tip(self, analytics):
        """Test the low savings rate tip."""
        assert self.messages(analytics, savings_rate=10.0, current_income=Decimal("10000")) == [
            (RecommendationKind.TIP, "Your savings rate is 10%. Try to save at least 20% of your income."),
        ]

    def test_good_savings_praise(self, analytics):
        """Test praise for a savings rate at or above target."""
        assert self.messages(analytics, savings_rate=98.2, current_income=Decimal("25000")) == [
            (RecommendationKind.SUCCESS, "Great job! You're saving 98% of your income this month."),
        ]

    def test_spending_rise(self, analytics):
        """Test a warning for sharply rising spending."""
        assert (
            RecommendationKind.WARNING,
            "Spending increased 50% compared to last month.",
        ) in self.messages(analytics, expense_change=50.0)

    def test_spending_drop(self, analytics):
        """Test praise for reduced spending."""
        assert (
            RecommendationKind.SUCCESS,
            "Excellent! You reduced spending by 20% this month.",
        ) in self.messages(analytics, expense_change=-20.0)

    def test_small_change_is_silent(self, analytics):
        """Test small expense changes produce no advice."""
        assert self.messages(analytics, expense_change=15.0) == []

    def test_near_budget_tip(self, analytics):
        """Test one tip lists all categories near their limit."""
        recs = analytics.recommendations(Insights(near_budget=[
            status("Shopping", 3400, 4000),
            status("Utilities", 2000, 2500),
        ]))
        assert recs[-1].message == "Shopping, Utilities approaching budget limit."
        assert recs[-1].categories == ["Shopping", "Utilities"]

    def test_rule_order(self, analytics):
        """Test recommendations come out in rule order."""
        kinds = [r.kind for r in analytics.recommendations(Insights(
            over_budget=[status("Food & Dining", 6000, 5000)],
            savings_rate=5.0,
            current_income=Decimal("1000"),
            expense_change=30.0,
            near_budget=[status("Shopping", 3400, 4000)],
        ))]
        assert kinds == [
            RecommendationKind.WARNING,
            RecommendationKind.TIP,
            RecommendationKind.WARNING,
            RecommendationKind.TIP,
        ]

    def test_current_recommendations(self, analytics, ledger, state):
        """Test recommendations for the current month in one call."""
        state.budgets.append(budget("Food & Dining", 5000))
        ledger.add(income(25000, date(2026, 3, 1)))
        ledger.add(expense(6000, "Food & Dining", date(2026, 3, 8)))

        messages = [r.message for r in analytics.current_recommendations()]
        assert messages[0] == "Food & Dining is 20% over budget. Consider reducing spending."
        assert "Great job! You're saving 76% of your income this month." in messages


class TestCalendar:
    """Tests for the month calendar."""

    def test_events(self, analytics, state):
        """Test recurring due dates and goal deadlines in the calendar."""
        state.recurring_transactions.extend([
            RecurringTransaction(id="r7", type=TransactionType.INCOME, amount=Decimal("25000"),
                                 category="Salary", description="Monthly Salary", day_of_month=25),
            RecurringTransaction(id="r1", type=TransactionType.EXPENSE, amount=Decimal("8500"),
                                 category="Housing", description="Rent", day_of_month=1),
            RecurringTransaction(id="r9", type=TransactionType.EXPENSE, amount=Decimal("500"),
                                 category="Fitness", description="Gym", day_of_month=3, is_active=False),
        ])
        state.goals.extend([
            Goal(id="g1", name="Vacation", target_amount=Decimal("25000"),
                 current_amount=Decimal("18750"), deadline=date(2026, 3, 20)),
            Goal(id="g2", name="Car", target_amount=Decimal("150000"), deadline=date(2026, 4, 20)),
        ])

        month = analytics.calendar_events()

        assert [(e.source_id, e.date) for e in month.events] == [
            ("r1", date(2026, 3, 1)),
            ("g1", date(2026, 3, 20)),
            ("r7", date(2026, 3, 25)),
        ]
        assert month.events[0].color == BILL_COLOR
        assert month.events[1].kind == CalendarEventKind.GOAL
        assert month.events[1].amount == Decimal("6250")
        assert month.bills_total == Decimal("8500")
        assert month.income_total == Decimal("25000")

    def test_other_month(self, analytics, state):
        """Test calendar events for an explicit month."""
        state.recurring_transactions.append(
            RecurringTransaction(type=TransactionType.EXPENSE, amount=Decimal("450"),
                                 category="Utilities", description="Internet", day_of_month=5),
        )
        month = analytics.calendar_events((2026, 2))
        assert (month.year, month.month) == (2026, 2)
        assert month.events[0].date == date(2026, 2, 5)
