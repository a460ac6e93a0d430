"""
Goal Engine

Owns savings goals: CRUD, contributions and milestone detection.

A goal has no explicit status field. It is in progress while the current
amount is below the target and complete from then on; it stays editable
after completion.

CRITICAL: each milestone (25/50/75/100 %) is reported at most once per
goal, ever. `milestones_reached` remembers what has been celebrated and
only `contribute` adds to it.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Union

import structlog

from wallet.audit import AuditLogger
from wallet.errors import InvalidInputError
from wallet.models.analytics import GoalOutlook, MilestoneMessage
from wallet.models.ledger import MILESTONES, Goal, new_id
from wallet.state import (
    ChangeAction,
    ColorPolicy,
    CyclingColorPolicy,
    DomainState,
    EntityKind,
    index_by_key,
    replace_fields,
)


MILESTONE_MESSAGES: dict[int, MilestoneMessage] = {
    25: MilestoneMessage(
        milestone=25,
        title="Great Start!",
        message="You've reached 25% of your goal! Keep up the momentum!",
        emoji="🎯",
    ),
    50: MilestoneMessage(
        milestone=50,
        title="Halfway There!",
        message="Amazing! You're 50% of the way to your goal!",
        emoji="⭐",
    ),
    75: MilestoneMessage(
        milestone=75,
        title="Almost There!",
        message="Incredible! Just 25% more to reach your goal!",
        emoji="🔥",
    ),
    100: MilestoneMessage(
        milestone=100,
        title="Goal Achieved!",
        message="Congratulations! You did it! Time to celebrate!",
        emoji="🏆",
    ),
}


def crossed_milestones(goal: Goal, new_amount: Decimal) -> list[int]:
    """
    Milestones reached at `new_amount` that the goal has not celebrated yet.

    Ascending order.
    """
    percentage = new_amount / goal.target_amount * 100
    return [
        m for m in MILESTONES
        if percentage >= m and m not in goal.milestones_reached
    ]


def milestone_message(milestone: int) -> MilestoneMessage:
    """Celebration text for a milestone. KeyError for unknown percentages."""
    return MILESTONE_MESSAGES[milestone]


class GoalEngine:
    """Savings goals on a `DomainState`."""

    def __init__(
        self,
        state: DomainState,
        color_policy: Optional[ColorPolicy] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], date] = date.today,
    ):
        self._state = state
        self._colors = color_policy or CyclingColorPolicy()
        self._audit_logger = audit_logger
        self._clock = clock
        self._logger = structlog.get_logger(__name__)

    def add(
        self,
        name: str,
        target_amount: Union[Decimal, int, float, str],
        deadline: date,
        icon: str = "target",
        current_amount: Union[Decimal, int, float, str] = Decimal("0"),
        color: Optional[str] = None,
    ) -> Goal:
        """
        Create a goal. Milestones start empty, even when the goal starts
        with a current amount already past some of them.
        """
        goal = Goal(
            id=new_id(),
            name=name,
            target_amount=target_amount,
            current_amount=current_amount,
            deadline=deadline,
            icon=icon,
            color=color or self._colors.next_color([g.color for g in self._state.goals]),
            milestones_reached=[],
        )
        self._state.goals.append(goal)
        self._state.notify(EntityKind.GOAL, ChangeAction.ADDED, goal.id)
        return goal

    def update(self, goal_id: str, **changes) -> Optional[Goal]:
        """
        Partial update.

        May overwrite `current_amount` and `milestones_reached` directly.
        Lowering them is allowed and may make a milestone celebratable
        again; keeping them consistent is the caller's responsibility.
        """
        index = index_by_key(self._state.goals, goal_id)
        if index is None:
            self._logger.debug("goal_not_found", goal_id=goal_id, op="update")
            return None

        updated = replace_fields(self._state.goals[index], changes)
        self._state.goals[index] = updated
        self._state.notify(EntityKind.GOAL, ChangeAction.UPDATED, goal_id)
        return updated

    def delete(self, goal_id: str) -> bool:
        index = index_by_key(self._state.goals, goal_id)
        if index is None:
            self._logger.debug("goal_not_found", goal_id=goal_id, op="delete")
            return False

        del self._state.goals[index]
        self._state.notify(EntityKind.GOAL, ChangeAction.DELETED, goal_id)
        return True

    def get(self, goal_id: str) -> Optional[Goal]:
        index = index_by_key(self._state.goals, goal_id)
        return None if index is None else self._state.goals[index]

    def contribute(
        self,
        goal_id: str,
        amount: Union[Decimal, int, float, str],
    ) -> list[int]:
        """
        Add `amount` to a goal and report milestones crossed for the first time.

        The current amount is not clamped at the target. Unknown goals
        return an empty list.

        Raises:
            InvalidInputError: If amount is not positive
        """
        try:
            amount = Decimal(str(amount))
        except InvalidOperation as e:
            raise InvalidInputError(f"Contribution is not a number: {amount!r}") from e
        if not amount.is_finite() or amount <= 0:
            raise InvalidInputError(f"Contribution must be positive, got {amount}")

        index = index_by_key(self._state.goals, goal_id)
        if index is None:
            self._logger.debug("goal_not_found", goal_id=goal_id, op="contribute")
            return []

        goal = self._state.goals[index]
        new_amount = goal.current_amount + amount
        newly_crossed = crossed_milestones(goal, new_amount)

        self._state.goals[index] = goal.model_copy(update={
            "current_amount": new_amount,
            "milestones_reached": sorted(goal.milestones_reached + newly_crossed),
        })
        self._state.notify(EntityKind.GOAL, ChangeAction.UPDATED, goal_id)

        if self._audit_logger:
            self._audit_logger.log_goal_contribution(goal_id, str(amount), str(new_amount))
            self._audit_logger.log_milestones_reached(goal_id, goal.name, newly_crossed)

        return newly_crossed

    def approaching(
        self,
        today: Optional[date] = None,
        milestone_proximity: float = 15.0,
        deadline_proximity_days: int = 30,
    ) -> list[GoalOutlook]:
        """
        Goals worth a nudge: the next milestone is close, or the deadline is.

        Only goals with an uncelebrated milestone still ahead are listed,
        closest milestone first.
        """
        today = today or self._clock()
        outlooks = []

        for goal in self._state.goals:
            progress = goal.progress
            next_milestone = next(
                (m for m in MILESTONES if m not in goal.milestones_reached and progress < m),
                None,
            )
            if next_milestone is None:
                continue

            percent_to_next = float(next_milestone - progress)
            days_to_deadline = (goal.deadline - today).days
            if percent_to_next > milestone_proximity and days_to_deadline > deadline_proximity_days:
                continue

            outlooks.append(GoalOutlook(
                goal_id=goal.id,
                name=goal.name,
                progress=float(progress),
                next_milestone=next_milestone,
                amount_to_next_milestone=goal.target_amount * next_milestone / 100 - goal.current_amount,
                percent_to_next_milestone=percent_to_next,
                days_to_deadline=days_to_deadline,
            ))

        return sorted(outlooks, key=lambda o: o.percent_to_next_milestone)

    def list(self) -> list[Goal]:
        return list(self._state.goals)
