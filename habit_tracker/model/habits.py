from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from habit_tracker.database.base_class import Base

DEFAULT_EMOJI = "⭐"
DEFAULT_COLOUR = "#6c8cff"


class Habit(Base):
    __tablename__ = "habits"
    # never hand a deleted habit's id to a new one
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(50), nullable=False)
    emoji = Column(String(8), nullable=False, default=DEFAULT_EMOJI)
    colour = Column(String(7), nullable=False, default=DEFAULT_COLOUR)
    current_streak = Column(Integer, nullable=False, default=0)
    # "YYYY-MM-DD" of the most recent check-in
    last_checked_in = Column(String(10), nullable=True)
    archived_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    checkins = relationship(
        "HabitCheckin",
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None
