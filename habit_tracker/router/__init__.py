from habit_tracker.router.api.guide import router as guide_router
from habit_tracker.router.api.habits import router as habits_router
__all__ = [
    "guide_router",
    "habits_router",
]
