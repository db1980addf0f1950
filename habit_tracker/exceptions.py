from typing import Optional


class HabitError(Exception):
    """Base class for failures the habit service reports to its callers."""

    message = "Habit error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(HabitError):
    message = "Invalid habit data"


class NotFound(HabitError):
    def __init__(self, habit_id: int):
        super().__init__("Habit not found")
        self.habit_id = habit_id


class ArchivedConflict(HabitError):
    def __init__(self, habit_id: int):
        super().__init__("Habit is archived, restore it before checking in")
        self.habit_id = habit_id


class StorageError(HabitError):
    message = "Storage failure"
