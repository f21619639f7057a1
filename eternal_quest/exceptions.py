"""
Custom exceptions for the Eternal Quest application.
Provides specific exception types so the session layer can turn them into
failed operation results instead of crashing the menu loop.
"""


class EternalQuestException(Exception):
    """Base exception for Eternal Quest"""
    pass


class ValidationException(EternalQuestException):
    """Raised when data validation fails"""
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error for {field}: {message}")


class UnknownGoalTypeException(ValidationException):
    """Raised when a goal is requested with an unsupported variant"""
    def __init__(self, goal_type: str):
        self.goal_type = goal_type
        super().__init__("goal_type", f"unknown goal type '{goal_type}'")


class GoalIndexOutOfRangeException(ValidationException):
    """Raised when a goal is addressed by a position outside the registry"""
    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        if count == 0:
            message = f"index {index} is out of range (no goals)"
        else:
            message = f"index {index} is out of range (1-{count})"
        super().__init__("index", message)


class GoalParseException(EternalQuestException):
    """Raised when a serialized goal record cannot be parsed"""
    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Cannot parse goal record {line!r}: {reason}")


class PersistenceException(EternalQuestException):
    """Raised when save file operations fail"""
    def __init__(self, operation: str, details: str):
        self.operation = operation
        self.details = details
        super().__init__(f"Save file {operation} failed: {details}")


class SaveFileNotFoundException(PersistenceException):
    """Raised when the save file to load does not exist"""
    def __init__(self, path: str):
        self.path = path
        super().__init__("read", f"file '{path}' not found")


class EmptySaveFileException(PersistenceException):
    """Raised when the save file exists but holds no lines"""
    def __init__(self, path: str):
        self.path = path
        super().__init__("read", f"file '{path}' is empty")
