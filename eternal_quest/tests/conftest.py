"""
Shared fixtures for Eternal Quest tests.
"""
import pytest

from eternal_quest.schemas import GamificationSettings, GoalCreate
from eternal_quest.services.gamification_service import GamificationEngine
from eternal_quest.services.goal_service import GoalRegistry
from eternal_quest.services.quest_service import QuestService


@pytest.fixture
def default_settings():
    return GamificationSettings()


@pytest.fixture
def engine(default_settings):
    return GamificationEngine(0, default_settings)


@pytest.fixture
def registry():
    return GoalRegistry()


@pytest.fixture
def service(default_settings):
    return QuestService(settings=default_settings)


@pytest.fixture
def save_path(tmp_path):
    return str(tmp_path / "quest.txt")


def write_save_file(path, lines):
    """Write raw save file lines (helper for load tests)"""
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")


def make_goal_data(goal_type="Simple", title="Run", description="Run a marathon", points=100, **extra):
    return GoalCreate(
        goal_type=goal_type,
        title=title,
        description=description,
        points=points,
        **extra
    )
