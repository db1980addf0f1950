import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, List, Optional

from sqlalchemy import desc
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from habit_tracker.exceptions import StorageError
from habit_tracker.log import get_logger
from habit_tracker.model.habit_checkins import HabitCheckin
from habit_tracker.model.habits import DEFAULT_COLOUR, DEFAULT_EMOJI, Habit

log = get_logger(__name__)

UPDATABLE_FIELDS = ("name", "emoji", "colour")

# dialects that understand INSERT ... ON CONFLICT DO NOTHING
_CONFLICT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}

_ANY = object()


class HabitStore:
    """Durable CRUD over habits and their per-day check-ins.

    Every public method runs in its own transaction and returns objects that
    stay readable after the session is closed. Database failures surface as
    ``StorageError``; a missing habit is reported as ``None`` (or ``False`` for
    ``delete_habit``) and left for the caller to interpret.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._locks: Dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            log.error("database operation failed: %s", e)
            raise StorageError("Database operation failed") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def habit_lock(self, habit_id: int) -> threading.Lock:
        """Return the lock that serialises check-ins on one habit."""
        with self._locks_guard:
            lock = self._locks.get(habit_id)
            if lock is None:
                lock = self._locks[habit_id] = threading.Lock()
            return lock

    ##############
    ### habits ###
    ##############

    def list_habits(self, include_archived: bool = False) -> List[Habit]:
        with self._session() as db:
            query = db.query(Habit)
            if not include_archived:
                query = query.filter(Habit.archived_at.is_(None))
            return query.order_by(desc(Habit.created_at), desc(Habit.id)).all()

    def create_habit(self, name: str, emoji: Optional[str] = None, colour: Optional[str] = None) -> Habit:
        with self._session() as db:
            habit = Habit(
                name=name,
                emoji=emoji or DEFAULT_EMOJI,
                colour=colour or DEFAULT_COLOUR,
                current_streak=0,
                last_checked_in=None,
                created_at=datetime.now(),
            )
            db.add(habit)
            db.flush()
            return habit

    def get_habit(self, habit_id: int) -> Optional[Habit]:
        with self._session() as db:
            return db.query(Habit).filter(Habit.id == habit_id).first()

    def update_habit(self, habit_id: int, **fields) -> Optional[Habit]:
        """Change only the supplied fields; ``None`` values are ignored."""
        with self._session() as db:
            habit = db.query(Habit).filter(Habit.id == habit_id).first()
            if not habit:
                return None
            for field in UPDATABLE_FIELDS:
                if fields.get(field) is not None:
                    setattr(habit, field, fields[field])
            return habit

    def archive_habit(self, habit_id: int) -> Optional[Habit]:
        with self._session() as db:
            habit = db.query(Habit).filter(Habit.id == habit_id, Habit.archived_at.is_(None)).first()
            if not habit:
                return None
            habit.archived_at = datetime.now()
            return habit

    def restore_habit(self, habit_id: int) -> Optional[Habit]:
        with self._session() as db:
            habit = db.query(Habit).filter(Habit.id == habit_id, Habit.archived_at.isnot(None)).first()
            if not habit:
                return None
            habit.archived_at = None
            return habit

    def delete_habit(self, habit_id: int) -> bool:
        with self._session() as db:
            removed = db.query(Habit).filter(Habit.id == habit_id).delete(synchronize_session=False)
        with self._locks_guard:
            self._locks.pop(habit_id, None)
        return removed > 0

    ################
    ### checkins ###
    ################

    def record_checkin(
        self,
        habit_id: int,
        checkin_date: str,
        new_streak: int,
        expected_last_checked_in=_ANY,
    ) -> Optional[Habit]:
        """Store a check-in: new streak, last day and the history row, in one transaction.

        When ``expected_last_checked_in`` is given the streak is only written if
        the habit is still active and has that ``last_checked_in`` value.
        ``None`` is returned when the habit is gone or the comparison failed;
        nothing is written then.
        """
        with self._session() as db:
            query = db.query(Habit).filter(Habit.id == habit_id)
            if expected_last_checked_in is not _ANY:
                query = query.filter(Habit.archived_at.is_(None))
                if expected_last_checked_in is None:
                    query = query.filter(Habit.last_checked_in.is_(None))
                else:
                    query = query.filter(Habit.last_checked_in == expected_last_checked_in)
            updated = query.update(
                {"current_streak": new_streak, "last_checked_in": checkin_date},
                synchronize_session=False,
            )
            if not updated:
                return None
            self._insert_checkin(db, habit_id, checkin_date)
            return db.query(Habit).filter(Habit.id == habit_id).first()

    def _insert_checkin(self, db: Session, habit_id: int, checkin_date: str) -> None:
        values = {"habit_id": habit_id, "checkin_date": checkin_date, "created_at": datetime.now()}
        dialect_insert = _CONFLICT_INSERTS.get(db.get_bind().dialect.name)
        if dialect_insert is not None:
            stmt = dialect_insert(HabitCheckin).values(**values).on_conflict_do_nothing(
                index_elements=["habit_id", "checkin_date"]
            )
            db.execute(stmt)
            return

        exists = db.query(HabitCheckin.id).filter(
            HabitCheckin.habit_id == habit_id,
            HabitCheckin.checkin_date == checkin_date,
        ).first()
        if not exists:
            db.add(HabitCheckin(**values))

    def get_history(self, habit_id: int, limit: Optional[int] = None) -> List[HabitCheckin]:
        """Check-ins of one habit, most recent day first."""
        with self._session() as db:
            query = db.query(HabitCheckin).filter(HabitCheckin.habit_id == habit_id).order_by(
                desc(HabitCheckin.checkin_date)
            )
            if limit is not None:
                query = query.limit(limit)
            return query.all()
