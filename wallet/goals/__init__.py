"""Savings goals package."""

from wallet.goals.engine import (
    MILESTONE_MESSAGES,
    GoalEngine,
    crossed_milestones,
    milestone_message,
)

__all__ = [
    "MILESTONE_MESSAGES",
    "GoalEngine",
    "crossed_milestones",
    "milestone_message",
]
