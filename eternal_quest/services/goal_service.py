"""
Goal registry service.
Keeps the session's goals in creation order and records events by position.
"""
import logging
from typing import Iterable, Iterator, List

from eternal_quest.models import Goal, GoalType, SimpleGoal, EternalGoal, ChecklistGoal
from eternal_quest.schemas import GoalCreate, GoalListItem
from eternal_quest.exceptions import (
    GoalIndexOutOfRangeException,
    UnknownGoalTypeException,
    ValidationException,
)

logger = logging.getLogger("eternal_quest.goals")


class GoalRegistry:
    """Ordered collection of goals. Positions are 1-based."""

    def __init__(self, goals: Iterable[Goal] = ()):
        self._goals: List[Goal] = list(goals)

    @property
    def goals(self) -> List[Goal]:
        """Copy of the goal list in display order"""
        return list(self._goals)

    @property
    def count(self) -> int:
        return len(self._goals)

    def __len__(self) -> int:
        return len(self._goals)

    def __iter__(self) -> Iterator[Goal]:
        return iter(self._goals)

    def create_goal(self, goal_data: GoalCreate) -> Goal:
        """
        Create a goal of the requested variant and append it.

        Raises:
            UnknownGoalTypeException: goal_type is not a known variant
            ValidationException: checklist goal without a target count
        """
        try:
            goal_type = GoalType(goal_data.goal_type)
        except ValueError:
            raise UnknownGoalTypeException(goal_data.goal_type)

        if goal_type == GoalType.SIMPLE:
            goal = SimpleGoal(goal_data.title, goal_data.description, goal_data.points)
        elif goal_type == GoalType.ETERNAL:
            goal = EternalGoal(goal_data.title, goal_data.description, goal_data.points)
        else:
            if goal_data.target_count is None:
                raise ValidationException(
                    "target_count", "target_count is required for checklist goals"
                )
            goal = ChecklistGoal(
                goal_data.title,
                goal_data.description,
                goal_data.points,
                target_count=goal_data.target_count,
                bonus_on_completion=goal_data.bonus_on_completion
            )

        self._goals.append(goal)
        logger.info(f"Created {goal_type.value} goal '{goal.title}' at position {len(self._goals)}")
        return goal

    def list_goals(self) -> List[GoalListItem]:
        """Read-only listing with 1-based positions"""
        return [
            GoalListItem(
                index=position,
                status=goal.get_status(),
                title=goal.title,
                description=goal.description
            )
            for position, goal in enumerate(self._goals, start=1)
        ]

    def get_goal_at(self, index: int) -> Goal:
        """
        Goal at a 1-based position.

        Raises:
            GoalIndexOutOfRangeException: index outside [1, count]
        """
        if index < 1 or index > len(self._goals):
            raise GoalIndexOutOfRangeException(index, len(self._goals))
        return self._goals[index - 1]

    def record_event_at(self, index: int) -> int:
        """
        Record an event against the goal at a 1-based position.

        Returns:
            Points earned; the caller passes them on to the gamification engine
        """
        goal = self.get_goal_at(index)
        points = goal.record_event()
        logger.debug(f"Recorded event for '{goal.title}': {points} points")
        return points

    def replace_all(self, goals: Iterable[Goal]) -> None:
        """Discard every goal and take the given ones instead"""
        self._goals = list(goals)
