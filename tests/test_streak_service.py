"""Tests for the check-in streak rule."""

from habit_tracker.router.service.streak_service import CheckinDecision, decide_checkin


def test_first_checkin_starts_a_streak():
    assert decide_checkin(None, 0, "2025-03-15") == CheckinDecision(already_done=False, new_streak=1)


def test_same_day_is_already_done():
    assert decide_checkin("2025-03-15", 4, "2025-03-15") == CheckinDecision(already_done=True, new_streak=4)


def test_yesterday_extends_streak():
    assert decide_checkin("2025-03-14", 4, "2025-03-15") == CheckinDecision(already_done=False, new_streak=5)


def test_yesterday_across_month_and_leap_day():
    assert decide_checkin("2024-02-29", 2, "2024-03-01").new_streak == 3
    assert decide_checkin("2024-12-31", 9, "2025-01-01").new_streak == 10


def test_gap_resets_streak():
    assert decide_checkin("2025-03-13", 7, "2025-03-15") == CheckinDecision(already_done=False, new_streak=1)


def test_future_last_checkin_resets_streak():
    assert decide_checkin("2025-03-20", 7, "2025-03-15") == CheckinDecision(already_done=False, new_streak=1)
