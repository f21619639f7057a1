"""
Save file codec.
Converts the gamification engine and goal list to and from the line-based
text format:

    line 1:  score
    line 2+: one goal record per line, fields joined with "|"

    Simple|<title>|<description>|<points>|<True/False>
    Eternal|<title>|<description>|<points>|<times recorded>
    Checklist|<title>|<description>|<points>|<target>|<current>|<bonus>

Titles and descriptions containing "|" cannot be round-tripped.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from eternal_quest.constants import (
    FIELD_DELIMITER,
    SIMPLE_FIELD_COUNT,
    ETERNAL_FIELD_COUNT,
    CHECKLIST_FIELD_COUNT,
)
from eternal_quest.exceptions import GoalParseException
from eternal_quest.models import Goal, GoalType, SimpleGoal, EternalGoal, ChecklistGoal
from eternal_quest.schemas import GamificationSettings
from eternal_quest.services.gamification_service import GamificationEngine

logger = logging.getLogger("eternal_quest.persistence")


@dataclass
class ParsedState:
    """Result of parsing a whole save file"""
    engine: GamificationEngine
    goals: List[Goal] = field(default_factory=list)
    dropped: int = 0


def _parse_int(value: str, name: str, line: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise GoalParseException(line, f"{name} is not an integer: {value!r}")


def _parse_bool(value: str, name: str, line: str) -> bool:
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise GoalParseException(line, f"{name} is not True/False: {value!r}")


def _require_fields(parts: List[str], count: int, line: str) -> None:
    if len(parts) < count:
        raise GoalParseException(line, f"expected {count} fields, got {len(parts)}")


def _parse_simple(parts: List[str], line: str) -> Goal:
    _require_fields(parts, SIMPLE_FIELD_COUNT, line)
    return SimpleGoal(
        parts[1],
        parts[2],
        _parse_int(parts[3], "points", line),
        is_complete=_parse_bool(parts[4], "is_complete", line)
    )


def _parse_eternal(parts: List[str], line: str) -> Goal:
    _require_fields(parts, ETERNAL_FIELD_COUNT, line)
    return EternalGoal(
        parts[1],
        parts[2],
        _parse_int(parts[3], "points", line),
        times_recorded=_parse_int(parts[4], "times_recorded", line)
    )


def _parse_checklist(parts: List[str], line: str) -> Goal:
    _require_fields(parts, CHECKLIST_FIELD_COUNT, line)
    return ChecklistGoal(
        parts[1],
        parts[2],
        _parse_int(parts[3], "points", line),
        target_count=_parse_int(parts[4], "target_count", line),
        current_count=_parse_int(parts[5], "current_count", line),
        bonus_on_completion=_parse_int(parts[6], "bonus_on_completion", line)
    )


GOAL_PARSERS: Dict[str, Callable[[List[str], str], Goal]] = {
    GoalType.SIMPLE.value: _parse_simple,
    GoalType.ETERNAL.value: _parse_eternal,
    GoalType.CHECKLIST.value: _parse_checklist,
}


def serialize_goal(goal: Goal) -> str:
    return goal.serialize()


def parse_goal(line: str) -> Goal:
    """
    Parse one goal record.

    Raises:
        GoalParseException: unknown type tag, missing fields or bad numbers
    """
    record = line.rstrip("\r\n")
    parts = record.split(FIELD_DELIMITER)

    parser = GOAL_PARSERS.get(parts[0].strip())
    if parser is None:
        raise GoalParseException(record, f"unknown goal type {parts[0]!r}")

    return parser(parts, record)


def deserialize_goal(line: str) -> Optional[Goal]:
    """
    Parse one goal record, or return None when it is malformed.

    Errors never propagate so one bad line cannot abort a load.
    """
    try:
        return parse_goal(line)
    except GoalParseException as e:
        logger.warning(f"Skipping goal record: {e.reason} ({e.line!r})")
        return None


def dump_state(engine: GamificationEngine, goals: Iterable[Goal]) -> str:
    """Full save file text: score line, then one line per goal."""
    lines = [engine.serialize()]
    lines.extend(serialize_goal(goal) for goal in goals)
    return "\n".join(lines) + "\n"


def parse_state(
    lines: List[str],
    settings: Optional[GamificationSettings] = None
) -> ParsedState:
    """
    Rebuild engine and goals from save file lines.

    Args:
        lines: File lines; the first is the score line
        settings: Gamification settings for the rebuilt engine

    Returns:
        Parsed engine and goals plus the number of dropped goal records
    """
    if not lines:
        return ParsedState(engine=GamificationEngine(0, settings))

    state = ParsedState(engine=GamificationEngine.deserialize(lines[0], settings))

    for line in lines[1:]:
        if not line.strip():
            continue

        goal = deserialize_goal(line)
        if goal is None:
            state.dropped += 1
        else:
            state.goals.append(goal)

    logger.debug(
        f"Parsed save file: score={state.engine.score}, "
        f"goals={len(state.goals)}, dropped={state.dropped}"
    )
    return state
