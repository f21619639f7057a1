"""
Quest session service.
Owns the goal registry and gamification engine for one session and exposes
the operations the menu loop calls. Validation and I/O errors become failed
results; nothing here raises to the caller.
"""
import logging
from typing import List, Optional

from eternal_quest.constants import DEFAULT_SAVE_FILENAME
from eternal_quest.exceptions import (
    EmptySaveFileException,
    PersistenceException,
    SaveFileNotFoundException,
    ValidationException,
)
from eternal_quest.repositories.save_file_repository import SaveFileRepository
from eternal_quest.schemas import (
    EngineStatus,
    GamificationSettings,
    GoalCreate,
    GoalListItem,
    LoadResult,
    OperationResult,
    RecordEventResult,
    SaveResult,
)
from eternal_quest.services import persistence_service
from eternal_quest.services.gamification_service import GamificationEngine
from eternal_quest.services.goal_service import GoalRegistry

logger = logging.getLogger("eternal_quest.session")


def resolve_path(path: Optional[str]) -> str:
    """Save file path, falling back to the default name when none is given"""
    if path is None or not path.strip():
        return DEFAULT_SAVE_FILENAME
    return path.strip()


class QuestService:
    """Service for one Eternal Quest session"""

    def __init__(
        self,
        registry: Optional[GoalRegistry] = None,
        engine: Optional[GamificationEngine] = None,
        settings: Optional[GamificationSettings] = None
    ):
        self.settings = settings or GamificationSettings()
        self.registry = registry if registry is not None else GoalRegistry()
        self.engine = engine if engine is not None else GamificationEngine(0, self.settings)
        self.file_repo = SaveFileRepository()

    def create_goal(self, goal_data: GoalCreate) -> OperationResult:
        """Create a goal; unknown variants are reported, not raised"""
        try:
            goal = self.registry.create_goal(goal_data)
        except ValidationException as e:
            logger.info(f"Goal not created: {e}")
            return OperationResult(success=False, message=str(e))

        return OperationResult(success=True, message=f"Goal '{goal.title}' created.")

    def list_goals(self) -> List[GoalListItem]:
        return self.registry.list_goals()

    def record_event_at(self, index: int) -> RecordEventResult:
        """
        Record an event for the goal at a 1-based position and award its points.

        Args:
            index: 1-based goal position

        Returns:
            Points earned and any level-up or badges that followed
        """
        try:
            points = self.registry.record_event_at(index)
        except ValidationException as e:
            logger.info(f"Event not recorded: {e}")
            return RecordEventResult(success=False, message=str(e))

        if points <= 0:
            return RecordEventResult(
                success=True,
                message="No points earned (maybe the goal was already complete).",
                level=self.engine.level
            )

        award = self.engine.add_points(points)
        return RecordEventResult(
            success=True,
            message=f"You earned {points} points!",
            points_earned=points,
            leveled_up=award.leveled_up,
            level=award.new_level,
            new_badges=award.new_badges
        )

    def get_engine_status(self) -> EngineStatus:
        return self.engine.status()

    def save_to_path(self, path: Optional[str] = None) -> SaveResult:
        """Write score and goals to the save file"""
        target = resolve_path(path)
        text = persistence_service.dump_state(self.engine, self.registry)

        try:
            self.file_repo.write_text(target, text)
        except PersistenceException as e:
            logger.error(f"Save to {target} failed: {e}")
            return SaveResult(success=False, message=f"Failed to save: {e.details}", path=target)

        logger.info(f"Saved {len(self.registry)} goals to {target}")
        return SaveResult(success=True, message=f"Saved to {target}.", path=target)

    def load_from_path(self, path: Optional[str] = None) -> LoadResult:
        """
        Replace the session's goals and score with the save file contents.

        The current registry and engine are only replaced after the whole
        file has been read and parsed. Malformed goal lines are dropped.
        """
        target = resolve_path(path)

        try:
            lines = self.file_repo.read_lines(target)
            if not lines:
                raise EmptySaveFileException(target)
        except SaveFileNotFoundException:
            logger.warning(f"Save file not found: {target}")
            return LoadResult(success=False, message=f"File '{target}' not found.", path=target)
        except EmptySaveFileException:
            logger.warning(f"Save file is empty: {target}")
            return LoadResult(success=False, message=f"File '{target}' is empty.", path=target)
        except PersistenceException as e:
            logger.error(f"Load from {target} failed: {e}")
            return LoadResult(success=False, message=f"Failed to load: {e.details}", path=target)

        state = persistence_service.parse_state(lines, self.settings)

        self.engine = state.engine
        self.registry = GoalRegistry(state.goals)

        message = f"Loaded {len(state.goals)} goals and score from {target}."
        if state.dropped:
            message += f" Skipped {state.dropped} unreadable record(s)."
        logger.info(message)

        return LoadResult(
            success=True,
            message=message,
            path=target,
            goals_loaded=len(state.goals),
            records_dropped=state.dropped
        )
