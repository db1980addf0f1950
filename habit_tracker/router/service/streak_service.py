from typing import NamedTuple, Optional

from habit_tracker.clock import previous_day


class CheckinDecision(NamedTuple):
    already_done: bool
    new_streak: int


##############
### streak ###
##############

def decide_checkin(last_checked_in: Optional[str], current_streak: int, today: str) -> CheckinDecision:
    """Work out what a check-in on ``today`` does to a habit's streak.

    - checked in today already: nothing changes
    - checked in yesterday: the streak grows by one
    - anything else (never, an older day, or a day after ``today``): a new
      streak of 1 starts

    Days are ``YYYY-MM-DD`` keys.
    """
    if last_checked_in == today:
        return CheckinDecision(already_done=True, new_streak=current_streak)

    if last_checked_in == previous_day(today):
        return CheckinDecision(already_done=False, new_streak=current_streak + 1)

    return CheckinDecision(already_done=False, new_streak=1)
