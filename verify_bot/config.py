"""Configuration helpers for the verification bot runtime."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

log = logging.getLogger("verify-bot")

DEFAULT_SETTINGS_FILE = "guildSettings.json"
DEFAULT_COOLDOWN_MS = 3000
DEFAULT_PRUNE_MINUTES = 10


def env_bool(name: str, *, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    if lowered:
        log.warning("Ignoring %s=%r, expected a boolean; using %s", name, raw, default)
    return default


def env_int(name: str, *, default: int | None = None, minimum: int | None = None) -> int | None:
    """Read an integer env var, falling back to ``default`` when unset or invalid.

    Values below ``minimum`` count as invalid.
    """
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r, expected an integer; using %s", name, raw, default)
        return default
    if minimum is not None and value < minimum:
        log.warning(
            "Ignoring %s=%d, must be at least %d; using %s", name, value, minimum, default
        )
        return default
    return value


@dataclass(frozen=True, slots=True)
class BotConfig:
    discord_token: str
    settings_file: str
    cooldown_ms: int
    prune_minutes: int
    log_level: str
    sync_commands: bool

    @property
    def cooldown_seconds(self) -> float:
        return self.cooldown_ms / 1000

    @classmethod
    def load(cls) -> BotConfig:
        missing: list[str] = []

        def need(name: str) -> str:
            value = os.getenv(name)
            if not value:
                missing.append(name)
                return ""
            return value

        discord_token = need("DISCORD_TOKEN")

        if missing:
            raise RuntimeError("Missing env vars: " + ", ".join(sorted(set(missing))))

        cooldown_ms = env_int("VERIFY_COOLDOWN_MS", default=DEFAULT_COOLDOWN_MS, minimum=1)
        prune_minutes = env_int("COOLDOWN_PRUNE_MINUTES", default=DEFAULT_PRUNE_MINUTES, minimum=1)

        return cls(
            discord_token=discord_token,
            settings_file=os.getenv("SETTINGS_FILE") or DEFAULT_SETTINGS_FILE,
            cooldown_ms=cooldown_ms,
            prune_minutes=prune_minutes,
            log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
            sync_commands=env_bool("SYNC_COMMANDS", default=True),
        )
