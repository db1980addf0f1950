from fastapi import Request

from habit_tracker.router.api.logics.guide_logic import GuideChecker
from habit_tracker.router.api.logics.habit_logic import HabitService


def get_habit_service(request: Request) -> HabitService:
    return request.app.state.habit_service


def get_guide_checker(request: Request) -> GuideChecker:
    return request.app.state.guide_checker
