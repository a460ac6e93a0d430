"""
Core Data Models for Wallet

These models define the strict schemas for every record the engine owns.
They are designed to:
1. Enforce the ledger invariants at the boundary (positive amounts,
   valid days of month, known milestones)
2. Provide clear validation error messages
3. Be serializable as one whole-state snapshot

DESIGN DECISION: Invalid records are rejected when they are built, not
when they are used. Every add/update goes through model validation, so a
stored record always satisfies its invariants.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# Goal completion percentages that are celebrated, in ascending order.
MILESTONES: tuple[int, ...] = (25, 50, 75, 100)


def new_id() -> str:
    """Fresh opaque record identifier."""
    return str(uuid4())


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow. Amounts are always positive."""
    INCOME = "income"
    EXPENSE = "expense"


class GoalStatus(str, Enum):
    """Implicit goal state, derived from current vs target amount."""
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class Theme(str, Enum):
    """Display theme flag persisted with the domain state."""
    LIGHT = "light"
    DARK = "dark"


# =============================================================================
# LEDGER
# =============================================================================

class TransactionDraft(BaseModel):
    """
    A transaction before it has been given an identity.

    This is what callers hand to the ledger; the ledger assigns the id.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    type: TransactionType
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Positive amount; direction comes from `type`"
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Free-text category, matched against budget categories"
    )
    description: str = Field(
        default="",
        max_length=200,
    )
    date: date
    is_recurring: bool = Field(
        default=False,
        description="Set on entries materialized from a recurring template"
    )
    recurring_day: Optional[int] = Field(
        default=None,
        ge=1,
        le=28,
        description="Day of month of the originating recurring template"
    )

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class Transaction(TransactionDraft):
    """A recorded ledger entry."""

    id: str = Field(
        default_factory=new_id,
        min_length=1,
        description="Unique opaque identifier"
    )


# =============================================================================
# BUDGETS
# =============================================================================

class Budget(BaseModel):
    """
    Monthly spending limit for one expense category.

    The category is the key: there is at most one budget per category.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
    )
    limit: Decimal = Field(
        ...,
        gt=0,
        description="Monthly limit for the category"
    )
    color: str = Field(
        default="",
        description="Display color, opaque to the engine"
    )


# =============================================================================
# RECURRING TEMPLATES
# =============================================================================

class RecurringTransaction(BaseModel):
    """
    Template for a bill or income that repeats every month.

    Not a ledger entry itself: it materializes into a Transaction on its
    due day. Days are capped at 28 so that every month has the due day.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    id: str = Field(default_factory=new_id, min_length=1)
    type: TransactionType
    amount: Decimal = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=100)
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Also the de-duplication key when materializing"
    )
    day_of_month: int = Field(..., ge=1, le=28)
    is_active: bool = True


# =============================================================================
# GOALS
# =============================================================================

class Goal(BaseModel):
    """
    A savings goal.

    `milestones_reached` records which completion percentages have already
    been celebrated. It only grows through contributions.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., gt=0)
    current_amount: Decimal = Field(default=Decimal("0"), ge=0)
    deadline: date
    icon: str = Field(default="target", max_length=50)
    color: str = ""
    milestones_reached: list[int] = Field(default_factory=list)

    @field_validator('milestones_reached')
    @classmethod
    def validate_milestones(cls, v: list[int]) -> list[int]:
        """Only known milestones, each once, ascending."""
        unknown = [m for m in v if m not in MILESTONES]
        if unknown:
            raise ValueError(f"Unknown milestones: {unknown}. Allowed: {list(MILESTONES)}")
        return sorted(set(v))

    @property
    def progress(self) -> Decimal:
        """Completion percentage; may exceed 100."""
        return self.current_amount / self.target_amount * 100

    @property
    def status(self) -> GoalStatus:
        if self.current_amount >= self.target_amount:
            return GoalStatus.COMPLETE
        return GoalStatus.IN_PROGRESS

    @property
    def is_complete(self) -> bool:
        return self.status == GoalStatus.COMPLETE

    @property
    def remaining_amount(self) -> Decimal:
        return max(self.target_amount - self.current_amount, Decimal("0"))


# =============================================================================
# NOTES & PROFILE
# =============================================================================

class Note(BaseModel):
    """Free-text note. No derived logic."""
    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=new_id, min_length=1)
    content: str = Field(..., max_length=5000)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class Profile(BaseModel):
    """The single user's profile."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: str = Field(default="", max_length=100)
    email: str = Field(default="", max_length=200)
    avatar: str = Field(
        default="",
        description="Avatar reference (URL or data URI), opaque to the engine"
    )


# =============================================================================
# SNAPSHOT
# =============================================================================

class DomainSnapshot(BaseModel):
    """
    The whole domain state as persisted.

    Rewritten wholesale after every mutation and reloaded wholesale at
    startup.
    """
    model_config = ConfigDict(extra="ignore")

    version: int = Field(default=1, ge=1)
    transactions: list[Transaction] = Field(default_factory=list)
    budgets: list[Budget] = Field(default_factory=list)
    recurring_transactions: list[RecurringTransaction] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    profile: Profile = Field(default_factory=Profile)
    theme: Theme = Theme.LIGHT

    @field_validator('budgets')
    @classmethod
    def validate_unique_categories(cls, v: list[Budget]) -> list[Budget]:
        """At most one budget per category."""
        seen = set()
        duplicates = []
        for b in v:
            if b.category in seen:
                duplicates.append(b.category)
            seen.add(b.category)
        if duplicates:
            raise ValueError(f"Duplicate budget categories: {duplicates}")
        return v
