from fastapi import APIRouter, Depends, status

from habit_tracker.router.api.logics.guide_logic import GUIDE_TASKS, GuideChecker
from habit_tracker.router.dependencies import get_guide_checker
from habit_tracker.schema.guide_schema import GuideCheckOut, GuideTasksOut

router = APIRouter()


@router.get("/tasks", response_model=GuideTasksOut, status_code=status.HTTP_200_OK)
def get_guide_tasks():
    return GuideTasksOut(tasks=GUIDE_TASKS)


@router.get("/check/{task_number}", response_model=GuideCheckOut, status_code=status.HTTP_200_OK)
def check_guide_task(task_number: int, checker: GuideChecker = Depends(get_guide_checker)):
    """Look at the front-end files and report whether a guide task is done."""
    return checker.check(task_number)
