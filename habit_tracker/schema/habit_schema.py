from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class HabitCreate(BaseModel):
    # validated by the habit service, so a bad value reports a readable reason
    name: Optional[Any] = None
    emoji: Optional[Any] = None
    colour: Optional[Any] = None


class HabitUpdate(BaseModel):
    name: Optional[Any] = None
    emoji: Optional[Any] = None
    colour: Optional[Any] = None


class HabitOut(BaseModel):
    id: int
    name: str
    emoji: str
    colour: str
    current_streak: int
    last_checked_in: Optional[str] = None
    archived_at: Optional[datetime] = None
    created_at: datetime
    archived: bool
    checked_in_today: bool


class CheckinOut(HabitOut):
    already_done: bool


class CheckinRecordOut(BaseModel):
    checkin_date: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DeleteOut(BaseModel):
    success: bool
