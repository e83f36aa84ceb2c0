from __future__ import annotations

import pytest

from fakes import FakeClock
from verify_bot.cooldown import CooldownTracker
from verify_bot.storage import SettingsStore
from verify_bot.verification import VerificationFlow


@pytest.fixture
def store(tmp_path) -> SettingsStore:
    return SettingsStore(tmp_path / "guildSettings.json")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cooldowns(clock) -> CooldownTracker:
    return CooldownTracker(3.0, clock=clock)


@pytest.fixture
def flow(store, cooldowns) -> VerificationFlow:
    return VerificationFlow(store, cooldowns)
