from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from habit_tracker.exceptions import ArchivedConflict
from habit_tracker.model.habits import Habit
from habit_tracker.router.api.logics.habit_logic import HabitService
from habit_tracker.router.dependencies import get_habit_service
from habit_tracker.schema.habit_schema import (
    CheckinOut,
    CheckinRecordOut,
    DeleteOut,
    HabitCreate,
    HabitOut,
    HabitUpdate,
)

router = APIRouter()


def habit_out(service: HabitService, habit: Habit, today: str) -> HabitOut:
    return HabitOut(
        id=habit.id,
        name=habit.name,
        emoji=habit.emoji,
        colour=habit.colour,
        current_streak=habit.current_streak,
        last_checked_in=habit.last_checked_in,
        archived_at=habit.archived_at,
        created_at=habit.created_at,
        archived=habit.is_archived,
        checked_in_today=service.is_checked_in_today(habit, today),
    )


@router.get("", response_model=List[HabitOut], status_code=status.HTTP_200_OK)
def list_habits(
    include_archived: bool = Query(False),
    service: HabitService = Depends(get_habit_service),
):
    """All habits, newest first. Archived habits only when asked for."""
    today = service.today()
    return [habit_out(service, h, today) for h in service.list_habits(include_archived)]


@router.post("", response_model=HabitOut, status_code=status.HTTP_201_CREATED)
def create_habit(request: HabitCreate, service: HabitService = Depends(get_habit_service)):
    habit = service.create(request.name, request.emoji, request.colour)
    return habit_out(service, habit, service.today())


@router.get("/{habit_id}", response_model=HabitOut, status_code=status.HTTP_200_OK)
def get_habit(habit_id: int, service: HabitService = Depends(get_habit_service)):
    return habit_out(service, service.get(habit_id), service.today())


@router.patch("/{habit_id}", response_model=HabitOut, status_code=status.HTTP_200_OK)
def update_habit(habit_id: int, request: HabitUpdate, service: HabitService = Depends(get_habit_service)):
    """Change the name, emoji or colour of a habit. Omitted fields keep their value."""
    habit = service.update(habit_id, **request.model_dump(exclude_none=True))
    return habit_out(service, habit, service.today())


@router.put("/{habit_id}/checkin", response_model=CheckinOut, status_code=status.HTTP_200_OK)
def checkin_habit(habit_id: int, service: HabitService = Depends(get_habit_service)):
    """Check a habit in for today.

    A second check-in on the same day is not an error: the habit comes back
    unchanged with ``already_done`` set. Archived habits answer 409.
    """
    result = service.checkin(habit_id)
    if result.archived:
        raise ArchivedConflict(habit_id)
    out = habit_out(service, result.habit, service.today())
    return CheckinOut(**out.model_dump(), already_done=result.already_done)


@router.post("/{habit_id}/archive", response_model=HabitOut, status_code=status.HTTP_200_OK)
def archive_habit(habit_id: int, service: HabitService = Depends(get_habit_service)):
    return habit_out(service, service.archive(habit_id), service.today())


@router.post("/{habit_id}/restore", response_model=HabitOut, status_code=status.HTTP_200_OK)
def restore_habit(habit_id: int, service: HabitService = Depends(get_habit_service)):
    return habit_out(service, service.restore(habit_id), service.today())


@router.get("/{habit_id}/history", response_model=List[CheckinRecordOut], status_code=status.HTTP_200_OK)
def get_habit_history(
    habit_id: int,
    limit: Optional[int] = Query(None),
    service: HabitService = Depends(get_habit_service),
):
    """Check-in days of a habit, most recent first. ``limit`` is kept between 1 and 90."""
    return [CheckinRecordOut.model_validate(c) for c in service.history(habit_id, limit)]


@router.delete("/{habit_id}", response_model=DeleteOut, status_code=status.HTTP_200_OK)
def delete_habit(habit_id: int, service: HabitService = Depends(get_habit_service)):
    """Delete a habit and its whole check-in history."""
    service.delete(habit_id)
    return DeleteOut(success=True)
