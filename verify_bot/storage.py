"""JSON-file settings store keyed by guild id.

The whole file is the unit of persistence: every operation loads it fresh,
changes one guild's record and rewrites it in full. Two admin commands racing
on the same file can therefore lose one write (last write wins).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from .models import GuildConfig

log = logging.getLogger("verify-bot")


class SettingsStoreError(Exception):
    """Raised when the settings file cannot be written."""


class SettingsStore:
    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def ensure_exists(self) -> None:
        if self._path.exists():
            return
        log.info("Creating empty settings file at %s", self._path)
        self.save({})

    def load(self) -> dict[str, GuildConfig]:
        """Return every stored guild config.

        A missing, unreadable or malformed file yields an empty mapping.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            log.warning("Cannot read settings file %s: %s", self._path, exc)
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            log.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}

        if not isinstance(data, dict):
            log.warning("Settings file %s does not hold a JSON object", self._path)
            return {}

        configs: dict[str, GuildConfig] = {}
        for guild_id, item in data.items():
            if not isinstance(item, dict):
                log.warning("Skipping malformed settings entry for guild %s", guild_id)
                continue
            configs[str(guild_id)] = GuildConfig.from_item(item)
        return configs

    def save(self, configs: Mapping[str, GuildConfig]) -> None:
        payload = {str(guild_id): cfg.to_item() for guild_id, cfg in configs.items()}
        content = json.dumps(payload, indent=2, ensure_ascii=False)
        parent = self._path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise SettingsStoreError(
                f"Cannot write settings file {self._path}: {exc}"
            ) from exc

        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(temp_path, self._path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise SettingsStoreError(
                f"Cannot write settings file {self._path}: {exc}"
            ) from exc
        log.debug("Saved %d guild config(s) to %s", len(payload), self._path)

    # ----- Per-guild helpers -----
    def get(self, guild_id: int | str) -> GuildConfig | None:
        return self.load().get(str(guild_id))

    def put(self, guild_id: int | str, config: GuildConfig) -> None:
        configs = self.load()
        configs[str(guild_id)] = config
        self.save(configs)

    def delete(self, guild_id: int | str) -> bool:
        configs = self.load()
        if configs.pop(str(guild_id), None) is None:
            return False
        self.save(configs)
        return True
