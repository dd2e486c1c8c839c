from datetime import datetime, timedelta

from salon_api.domain.ai_tryon.quota import (
    WEEKLY_WINDOW,
    evaluate_quota,
    remaining_try_ons,
    roll_weekly_window,
)

NOW = datetime(2030, 3, 1, 12, 0, 0)


def test_first_use_opens_a_window():
    assert roll_weekly_window(0, None, NOW) == (0, NOW + WEEKLY_WINDOW)


def test_elapsed_window_resets_counter():
    used, reset = roll_weekly_window(5, NOW - timedelta(seconds=1), NOW)
    assert used == 0
    assert reset == NOW + timedelta(days=7)


def test_current_window_is_kept():
    reset = NOW + timedelta(days=2)
    assert roll_weekly_window(3, reset, NOW) == (3, reset)
    assert roll_weekly_window(*roll_weekly_window(3, reset, NOW), NOW) == (3, reset)


def test_free_tier_allows_up_to_limit():
    reset = NOW + timedelta(days=3)
    decision = evaluate_quota("free", 0, 4, reset, NOW, 5)
    assert decision.allowed
    assert decision.weekly_try_ons_used == 5
    assert decision.remaining == 0

    refused = evaluate_quota("free", 0, 5, reset, NOW, 5)
    assert not refused.allowed
    assert refused.weekly_try_ons_used == 5


def test_free_tier_is_allowed_again_after_window():
    decision = evaluate_quota("free", 0, 5, NOW - timedelta(days=1), NOW, 5)
    assert decision.allowed
    assert decision.weekly_try_ons_used == 1
    assert decision.weekly_reset_date == NOW + WEEKLY_WINDOW


def test_paid_tier_consumes_credits():
    decision = evaluate_quota("plus", 3, 0, None, NOW, 5)
    assert decision.allowed
    assert decision.try_on_credits == 2

    refused = evaluate_quota("pro", 0, 0, None, NOW, 5)
    assert not refused.allowed
    assert refused.try_on_credits == 0


def test_remaining_view_does_not_open_a_window():
    assert remaining_try_ons("free", 0, 0, None, NOW, 5) == (5, None)
    reset = NOW + timedelta(days=1)
    assert remaining_try_ons("free", 0, 2, reset, NOW, 5) == (3, reset)
    assert remaining_try_ons("plus", 42, 0, None, NOW, 5) == (42, None)
