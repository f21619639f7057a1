"""
Goal models.
Goal is the shared contract; SimpleGoal, EternalGoal and ChecklistGoal are
the concrete variants with their own completion rules.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import List

from eternal_quest.constants import (
    FIELD_DELIMITER,
    GOAL_TYPE_SIMPLE,
    GOAL_TYPE_ETERNAL,
    GOAL_TYPE_CHECKLIST,
    STATUS_COMPLETE,
    STATUS_INCOMPLETE,
    STATUS_ETERNAL,
)


class GoalType(str, Enum):
    """Goal variants. Values double as the type tag in the save file."""
    SIMPLE = GOAL_TYPE_SIMPLE
    ETERNAL = GOAL_TYPE_ETERNAL
    CHECKLIST = GOAL_TYPE_CHECKLIST


class Goal(ABC):
    """Base goal: a title, a description and the points awarded per event."""

    goal_type: GoalType

    def __init__(self, title: str, description: str, points: int):
        self._title = title
        self._description = description
        self._points = points

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def points(self) -> int:
        return self._points

    @property
    def is_complete(self) -> bool:
        return False

    @abstractmethod
    def record_event(self) -> int:
        """Record one event against the goal and return the points earned."""

    @abstractmethod
    def get_status(self) -> str:
        """Human-readable completion marker used when listing goals."""

    def serialize(self) -> str:
        """One delimiter-joined save file record for this goal."""
        fields = [self.goal_type.value, self._title, self._description, str(self._points)]
        fields.extend(self._extra_fields())
        return FIELD_DELIMITER.join(fields)

    @abstractmethod
    def _extra_fields(self) -> List[str]:
        """Variant-specific fields appended after the shared ones."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._title!r} {self.get_status()}>"


class SimpleGoal(Goal):
    """One-time goal. Completes on its first event."""

    goal_type = GoalType.SIMPLE

    def __init__(self, title: str, description: str, points: int, is_complete: bool = False):
        super().__init__(title, description, points)
        self._is_complete = is_complete

    @property
    def is_complete(self) -> bool:
        return self._is_complete

    def record_event(self) -> int:
        if self._is_complete:
            return 0

        self._is_complete = True
        return self._points

    def get_status(self) -> str:
        return STATUS_COMPLETE if self._is_complete else STATUS_INCOMPLETE

    def _extra_fields(self) -> List[str]:
        return [str(self._is_complete)]


class EternalGoal(Goal):
    """Repeatable goal. Never completes; every event pays out."""

    goal_type = GoalType.ETERNAL

    def __init__(self, title: str, description: str, points: int, times_recorded: int = 0):
        super().__init__(title, description, points)
        self._times_recorded = times_recorded

    @property
    def times_recorded(self) -> int:
        return self._times_recorded

    def record_event(self) -> int:
        self._times_recorded += 1
        return self._points

    def get_status(self) -> str:
        return f"{STATUS_ETERNAL} Completed {self._times_recorded} time(s)"

    def _extra_fields(self) -> List[str]:
        return [str(self._times_recorded)]


class ChecklistGoal(Goal):
    """
    Goal that must be recorded target_count times.

    Every event pays points; the event that reaches the target also pays
    bonus_on_completion. Completion is derived from the counts, including
    at construction so a loaded goal keeps its completed state.
    """

    goal_type = GoalType.CHECKLIST

    def __init__(
        self,
        title: str,
        description: str,
        points: int,
        target_count: int,
        bonus_on_completion: int,
        current_count: int = 0
    ):
        super().__init__(title, description, points)
        self._target_count = target_count
        self._current_count = current_count
        self._bonus_on_completion = bonus_on_completion
        self._is_complete = self._current_count >= self._target_count

    @property
    def target_count(self) -> int:
        return self._target_count

    @property
    def current_count(self) -> int:
        return self._current_count

    @property
    def bonus_on_completion(self) -> int:
        return self._bonus_on_completion

    @property
    def is_complete(self) -> bool:
        return self._is_complete

    def record_event(self) -> int:
        if self._is_complete:
            return 0

        self._current_count += 1
        earned = self._points

        if self._current_count >= self._target_count:
            self._is_complete = True
            earned += self._bonus_on_completion

        return earned

    def get_status(self) -> str:
        if self._is_complete:
            return STATUS_COMPLETE
        return f"{STATUS_INCOMPLETE} Completed {self._current_count}/{self._target_count}"

    def _extra_fields(self) -> List[str]:
        # Order matches the save file layout: target, current, bonus
        return [
            str(self._target_count),
            str(self._current_count),
            str(self._bonus_on_completion),
        ]
