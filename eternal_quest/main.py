"""
Eternal Quest interactive menu.
"""
import logging
from typing import Callable, Optional

from eternal_quest.constants import DEFAULT_LOG_FILENAME, DEFAULT_SAVE_FILENAME, LOGGER_NAME
from eternal_quest.models import GoalType
from eternal_quest.schemas import GoalCreate
from eternal_quest.services.quest_service import QuestService

logger = logging.getLogger(LOGGER_NAME)

MENU = """Menu:
1. Create a new goal
2. Show goals
3. Record an event (complete a goal)
4. Show score/level
5. Save goals & score
6. Load goals & score
7. Exit
"""

GOAL_TYPE_CHOICES = {
    "1": GoalType.SIMPLE,
    "2": GoalType.ETERNAL,
    "3": GoalType.CHECKLIST,
}


def configure_logging(log_path: str = DEFAULT_LOG_FILENAME) -> None:
    # Console only gets warnings so the menu stays readable
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            console
        ]
    )


class QuestMenu:
    """Menu loop driving a QuestService with pluggable input/output"""

    def __init__(
        self,
        service: Optional[QuestService] = None,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print
    ):
        self.service = service or QuestService()
        self.input = input_func
        self.output = output_func

    def read_int(self, prompt: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
        """Prompt until the user enters an integer within [minimum, maximum]"""
        while True:
            raw = self.input(prompt)
            try:
                value = int(raw)
            except ValueError:
                self.output("Invalid number, try again.")
                continue

            if minimum is not None and maximum is not None:
                if not minimum <= value <= maximum:
                    self.output(f"Value must be between {minimum} and {maximum}.")
                    continue
            elif minimum is not None and value < minimum:
                self.output(f"Value must be at least {minimum}.")
                continue
            elif maximum is not None and value > maximum:
                self.output(f"Value must be at most {maximum}.")
                continue
            return value

    def run(self) -> None:
        self.output("Welcome to Eternal Quest!\n")
        actions = {
            "1": self.create_goal,
            "2": self.show_goals,
            "3": self.record_event,
            "4": self.show_score,
            "5": self.save,
            "6": self.load,
        }

        while True:
            self.output(MENU)
            choice = self.input("Choose an option: ").strip()
            self.output("")

            if choice == "7":
                break

            action = actions.get(choice)
            if action is None:
                self.output("Invalid option. Try again.\n")
                continue
            action()

        self.output("Goodbye! Keep pressing forward on your Eternal Quest.")

    def create_goal(self) -> None:
        self.output("Select goal type:")
        self.output("1. Simple goal (one-time)")
        self.output("2. Eternal goal (repeatable)")
        self.output("3. Checklist goal (repeat N times)")
        choice = self.input("Choice: ").strip()

        title = self.input("Enter title: ")
        description = self.input("Enter description: ")
        points = self.read_int("Enter points awarded per event: ")

        goal_type = GOAL_TYPE_CHOICES.get(choice)
        target_count = None
        bonus = 0
        if goal_type == GoalType.CHECKLIST:
            target_count = self.read_int("Enter how many times needed to complete: ", 1)
            bonus = self.read_int("Enter bonus points awarded on completion: ")

        result = self.service.create_goal(GoalCreate(
            goal_type=goal_type.value if goal_type else choice,
            title=title,
            description=description,
            points=points,
            target_count=target_count,
            bonus_on_completion=bonus
        ))

        if result.success:
            self.output("Goal created.\n")
        else:
            self.output("Unknown type. Aborting creation.\n")

    def show_goals(self) -> None:
        goals = self.service.list_goals()
        if not goals:
            self.output("No goals yet.\n")
            return

        self.output("Goals:")
        for item in goals:
            self.output(f"{item.index}. {item.status} {item.title} - {item.description}")
        self.output("")

    def record_event(self) -> None:
        goals = self.service.list_goals()
        if not goals:
            self.output("No goals to record.\n")
            return

        self.show_goals()
        index = self.read_int(f"Choose a goal to record (1-{len(goals)}): ", 1, len(goals))
        result = self.service.record_event_at(index)

        self.output(result.message + "\n")
        if result.leveled_up:
            self.output(f"*** Level up! You reached level {result.level}! ***\n")
        for badge in result.new_badges:
            self.output(f"Badge earned: {badge}")

    def show_score(self) -> None:
        status = self.service.get_engine_status()
        self.output(f"Score: {status.score}  |  Level: {status.level}")
        if status.badges:
            self.output("Badges: " + ", ".join(status.badges))
        self.output("")

    def save(self) -> None:
        path = self.input(f"Enter filename to save (default {DEFAULT_SAVE_FILENAME}): ")
        result = self.service.save_to_path(path)
        self.output(result.message + "\n")

    def load(self) -> None:
        path = self.input(f"Enter filename to load (default {DEFAULT_SAVE_FILENAME}): ")
        result = self.service.load_from_path(path)
        self.output(result.message + "\n")


def main() -> None:
    configure_logging()
    logger.info("Eternal Quest started")
    try:
        QuestMenu().run()
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed, exiting")
    logger.info("Eternal Quest stopped")


if __name__ == "__main__":
    main()
