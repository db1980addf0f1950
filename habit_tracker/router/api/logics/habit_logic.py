import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from habit_tracker.clock import DateProvider
from habit_tracker.database.habit_store import HabitStore
from habit_tracker.exceptions import NotFound, StorageError, ValidationError
from habit_tracker.log import get_logger
from habit_tracker.model.habit_checkins import HabitCheckin
from habit_tracker.model.habits import Habit
from habit_tracker.router.service.streak_service import decide_checkin

log = get_logger(__name__)

HEX_COLOUR = re.compile(r"^#[0-9a-fA-F]{6}$")
MAX_NAME_LENGTH = 50
MAX_EMOJI_LENGTH = 8
MAX_CHECKIN_ATTEMPTS = 3


class CheckinStatus(str, Enum):
    CHECKED_IN = "checked_in"
    ALREADY_DONE = "already_done"
    ARCHIVED = "archived"


@dataclass
class CheckinResult:
    status: CheckinStatus
    habit: Habit

    @property
    def already_done(self) -> bool:
        return self.status == CheckinStatus.ALREADY_DONE

    @property
    def archived(self) -> bool:
        return self.status == CheckinStatus.ARCHIVED


##################
### validation ###
##################

def _as_text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"Habit {field} must be text")
    return value.strip()


def clean_name(raw_name: Any) -> str:
    if raw_name is None:
        raise ValidationError("Habit name is required")
    name = _as_text(raw_name, "name")
    if not name:
        raise ValidationError("Habit name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Habit name must be at most {MAX_NAME_LENGTH} characters")
    return name


def clean_emoji(raw_emoji: Any) -> str:
    emoji = _as_text(raw_emoji, "emoji")
    if not emoji:
        raise ValidationError("Emoji cannot be empty")
    if len(emoji) > MAX_EMOJI_LENGTH:
        raise ValidationError(f"Emoji must be at most {MAX_EMOJI_LENGTH} characters")
    return emoji


def clean_colour(raw_colour: Any) -> str:
    colour = _as_text(raw_colour, "colour")
    if not HEX_COLOUR.match(colour):
        raise ValidationError("Colour must be a hex value like #6c8cff")
    return colour


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class HabitService:
    """Habit lifecycle: validation, the streak rule and persistence.

    The store and the clock are handed in by whoever builds the service, so
    one process can run several independent services (the tests do).
    """

    def __init__(
        self,
        store: HabitStore,
        clock: DateProvider,
        history_default_limit: int = 30,
        history_max_limit: int = 90,
    ):
        self.store = store
        self.clock = clock
        self.history_default_limit = history_default_limit
        self.history_max_limit = history_max_limit

    def today(self) -> str:
        return self.clock.today()

    def is_checked_in_today(self, habit: Habit, today: Optional[str] = None) -> bool:
        return habit.last_checked_in == (today or self.today())

    def list_habits(self, include_archived: bool = False) -> List[Habit]:
        return self.store.list_habits(include_archived)

    def get(self, habit_id: int) -> Habit:
        habit = self.store.get_habit(habit_id)
        if not habit:
            raise NotFound(habit_id)
        return habit

    def create(self, raw_name: Any, raw_emoji: Any = None, raw_colour: Any = None) -> Habit:
        """Validate the raw form values and store a new habit.

        A missing or blank emoji or colour falls back to the defaults.
        """
        name = clean_name(raw_name)
        emoji = None if _is_blank(raw_emoji) else clean_emoji(raw_emoji)
        colour = None if _is_blank(raw_colour) else clean_colour(raw_colour)

        habit = self.store.create_habit(name, emoji, colour)
        log.info("created habit %s (%r)", habit.id, habit.name)
        return habit

    def update(self, habit_id: int, **raw_fields) -> Habit:
        """Change the supplied fields of a habit.

        Every supplied field is validated before anything is written; one bad
        value rejects the whole update.
        """
        cleaners = {"name": clean_name, "emoji": clean_emoji, "colour": clean_colour}
        changes: Dict[str, str] = {}
        for field, cleaner in cleaners.items():
            if raw_fields.get(field) is not None:
                changes[field] = cleaner(raw_fields[field])
        if not changes:
            raise ValidationError("Nothing to update, send a name, emoji or colour")

        habit = self.store.update_habit(habit_id, **changes)
        if not habit:
            raise NotFound(habit_id)
        log.info("updated habit %s: %s", habit_id, ", ".join(sorted(changes)))
        return habit

    def checkin(self, habit_id: int) -> CheckinResult:
        """Record today's check-in for a habit.

        The read, the streak decision and the write run under the habit's lock,
        and the write only lands if ``last_checked_in`` still holds the value
        that was read. A lost race is retried with fresh state.
        """
        # unknown ids never get a lock entry
        self.get(habit_id)
        with self.store.habit_lock(habit_id):
            for _ in range(MAX_CHECKIN_ATTEMPTS):
                habit = self.get(habit_id)
                if habit.is_archived:
                    log.info("check-in refused, habit %s is archived", habit_id)
                    return CheckinResult(CheckinStatus.ARCHIVED, habit)

                today = self.today()
                decision = decide_checkin(habit.last_checked_in, habit.current_streak, today)
                if decision.already_done:
                    log.info("habit %s already checked in on %s", habit_id, today)
                    return CheckinResult(CheckinStatus.ALREADY_DONE, habit)

                updated = self.store.record_checkin(
                    habit_id,
                    today,
                    decision.new_streak,
                    expected_last_checked_in=habit.last_checked_in,
                )
                if updated is not None:
                    log.info("habit %s checked in on %s, streak %s", habit_id, today, updated.current_streak)
                    return CheckinResult(CheckinStatus.CHECKED_IN, updated)

                log.warning("habit %s changed during check-in, retrying", habit_id)

        raise StorageError(f"Could not record check-in for habit {habit_id}, please try again")

    def archive(self, habit_id: int) -> Habit:
        habit = self.store.archive_habit(habit_id)
        if not habit:
            raise NotFound(habit_id)
        log.info("archived habit %s", habit_id)
        return habit

    def restore(self, habit_id: int) -> Habit:
        habit = self.store.restore_habit(habit_id)
        if not habit:
            raise NotFound(habit_id)
        log.info("restored habit %s", habit_id)
        return habit

    def clamp_history_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            limit = self.history_default_limit
        return max(1, min(int(limit), self.history_max_limit))

    def history(self, habit_id: int, limit: Optional[int] = None) -> List[HabitCheckin]:
        self.get(habit_id)
        return self.store.get_history(habit_id, self.clamp_history_limit(limit))

    def delete(self, habit_id: int) -> None:
        if not self.store.delete_habit(habit_id):
            raise NotFound(habit_id)
        log.info("deleted habit %s", habit_id)
