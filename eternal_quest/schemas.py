from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from eternal_quest.constants import BADGE_THRESHOLDS, LEVEL_POINTS_STEP


# Goal schemas

class GoalCreate(BaseModel):
    goal_type: str  # "Simple", "Eternal" or "Checklist"
    title: str
    description: str = ""
    points: int

    # Checklist-only settings
    target_count: Optional[int] = None
    bonus_on_completion: int = 0


class GoalListItem(BaseModel):
    index: int  # 1-based display position
    status: str
    title: str
    description: str


# Gamification schemas

class GamificationSettings(BaseModel):
    level_step: int = Field(default=LEVEL_POINTS_STEP, ge=1)
    badge_thresholds: Dict[int, str] = Field(
        default_factory=lambda: dict(BADGE_THRESHOLDS)
    )


class EngineStatus(BaseModel):
    score: int
    level: int
    badges: List[str] = []


class PointsAwardResult(BaseModel):
    points_added: int = 0
    old_level: int
    new_level: int
    new_badges: List[str] = []

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level


# Operation results

class OperationResult(BaseModel):
    success: bool
    message: str


class RecordEventResult(OperationResult):
    points_earned: int = 0
    leveled_up: bool = False
    level: Optional[int] = None
    new_badges: List[str] = []


class SaveResult(OperationResult):
    path: str


class LoadResult(OperationResult):
    path: str
    goals_loaded: int = 0
    records_dropped: int = 0
