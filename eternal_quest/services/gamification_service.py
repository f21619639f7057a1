"""
Gamification service.
Derives level and badges from the running score.
"""
import logging
from typing import List, Optional, Set

from eternal_quest.schemas import EngineStatus, GamificationSettings, PointsAwardResult

logger = logging.getLogger("eternal_quest.gamification")


class GamificationEngine:
    """Score, level and badge state for one session"""

    def __init__(self, starting_score: int = 0, settings: Optional[GamificationSettings] = None):
        self.settings = settings or GamificationSettings()
        self._score = max(0, starting_score)
        self._badges: Set[str] = set()
        self._level = self.calculate_level(self._score)

    @property
    def score(self) -> int:
        return self._score

    @property
    def level(self) -> int:
        return self._level

    @property
    def badges(self) -> Set[str]:
        return set(self._badges)

    def calculate_level(self, score: int) -> int:
        """
        Level for a score.

        score 0-99 -> 1, 100-199 -> 2, ... with the default step of 100.
        """
        return score // self.settings.level_step + 1

    def add_points(self, points: int) -> PointsAwardResult:
        """
        Add earned points, then check for a level-up and new badges.

        Args:
            points: Points to add. Zero or negative values are ignored.

        Returns:
            What changed: levels before and after, badges awarded by this call
        """
        old_level = self._level
        if points <= 0:
            return PointsAwardResult(old_level=old_level, new_level=old_level)

        self._score += points
        self._level = self.calculate_level(self._score)

        if self._level > old_level:
            logger.info(f"Level up: {old_level} -> {self._level} (score {self._score})")

        new_badges = self._award_badges()

        return PointsAwardResult(
            points_added=points,
            old_level=old_level,
            new_level=self._level,
            new_badges=new_badges
        )

    def remove_points(self, points: int) -> None:
        """Subtract points. Score is clamped at 0 and badges are kept."""
        if points <= 0:
            return

        self._score = max(0, self._score - points)
        self._level = self.calculate_level(self._score)

    def _award_badges(self) -> List[str]:
        """Award every threshold badge reached and not yet held, lowest first."""
        awarded = []
        for threshold in sorted(self.settings.badge_thresholds):
            badge = self.settings.badge_thresholds[threshold]
            if self._score >= threshold and badge not in self._badges:
                self._badges.add(badge)
                awarded.append(badge)
                logger.info(f"Badge earned: {badge}")
        return awarded

    def status(self) -> EngineStatus:
        return EngineStatus(
            score=self._score,
            level=self._level,
            badges=sorted(self._badges)
        )

    def serialize(self) -> str:
        return str(self._score)

    @classmethod
    def deserialize(
        cls,
        text: str,
        settings: Optional[GamificationSettings] = None
    ) -> "GamificationEngine":
        """Rebuild an engine from a saved score line. Unparseable text gives score 0."""
        try:
            score = int(text.strip())
        except ValueError:
            logger.warning(f"Invalid score line {text!r}, resetting score to 0")
            score = 0

        if score < 0:
            logger.warning(f"Negative score {score} in save file, resetting score to 0")
            score = 0

        return cls(score, settings)
