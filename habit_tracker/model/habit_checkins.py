from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from habit_tracker.database.base_class import Base


class HabitCheckin(Base):
    __tablename__ = "habit_checkins"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # FK
    habit_id = Column(Integer, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True)

    # attributes
    checkin_date = Column(String(10), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    __table_args__ = (
        UniqueConstraint("habit_id", "checkin_date", name="uq_habit_checkins_habit_day"),
    )

    # relationship
    habit = relationship("Habit", back_populates="checkins")
