"""Tests for the per-user button cooldown."""

from verify_bot.cooldown import CooldownTracker


def test_first_press_is_accepted(cooldowns):
    assert cooldowns.hit(1) is True
    assert 1 in cooldowns


def test_press_within_window_is_rejected(cooldowns, clock):
    cooldowns.hit(1)
    clock.advance(2.999)

    assert cooldowns.hit(1) is False


def test_press_after_window_is_accepted(cooldowns, clock):
    cooldowns.hit(1)
    clock.advance(3.0)

    assert cooldowns.hit(1) is True


def test_rejected_press_does_not_extend_window(cooldowns, clock):
    cooldowns.hit(1)
    clock.advance(2.0)
    assert cooldowns.hit(1) is False
    clock.advance(1.0)

    assert cooldowns.hit(1) is True


def test_users_are_independent(cooldowns):
    assert cooldowns.hit(1) is True
    assert cooldowns.hit(2) is True


def test_remaining(cooldowns, clock):
    assert cooldowns.remaining(1) == 0.0
    cooldowns.hit(1)
    clock.advance(1.0)

    assert cooldowns.remaining(1) == 2.0
    clock.advance(5.0)
    assert cooldowns.remaining(1) == 0.0


def test_prune_drops_only_expired_entries(cooldowns, clock):
    cooldowns.hit(1)
    clock.advance(2.0)
    cooldowns.hit(2)
    clock.advance(1.5)

    assert cooldowns.prune() == 1
    assert 1 not in cooldowns
    assert 2 in cooldowns


def test_clear(cooldowns):
    cooldowns.hit(1)
    cooldowns.hit(2)
    cooldowns.clear()

    assert len(cooldowns) == 0


def test_default_window_is_three_seconds():
    assert CooldownTracker().window_seconds == 3.0
