"""
Application constants.
Tunable values for scoring, badges and the save file format.
"""

# Save file
DEFAULT_SAVE_FILENAME = "EternalQuest.txt"
SAVE_FILE_ENCODING = "utf-8"
FIELD_DELIMITER = "|"

# Goal type tags (first field of every goal record)
GOAL_TYPE_SIMPLE = "Simple"
GOAL_TYPE_ETERNAL = "Eternal"
GOAL_TYPE_CHECKLIST = "Checklist"

# Field counts per record, type tag included
SIMPLE_FIELD_COUNT = 5
ETERNAL_FIELD_COUNT = 5
CHECKLIST_FIELD_COUNT = 7

# Gamification
LEVEL_POINTS_STEP = 100  # level = score // step + 1
BADGE_THRESHOLDS = {
    100: "100+ points",
    500: "500+ points",
}

# Status markers
STATUS_COMPLETE = "[X]"
STATUS_INCOMPLETE = "[ ]"
STATUS_ETERNAL = "[~]"

# Logging
DEFAULT_LOG_FILENAME = "eternal_quest.log"
LOGGER_NAME = "eternal_quest"
