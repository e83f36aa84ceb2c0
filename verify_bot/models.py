from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(slots=True)
class GuildConfig:
    """Verification settings stored for one guild."""

    verified_role_id: str
    log_channel_id: str

    ROLE_KEY: ClassVar[str] = "verifiedRoleId"
    CHANNEL_KEY: ClassVar[str] = "logChannelId"

    def to_item(self) -> dict[str, str]:
        return {
            self.ROLE_KEY: self.verified_role_id,
            self.CHANNEL_KEY: self.log_channel_id,
        }

    @classmethod
    def from_item(cls, item: dict[str, object]) -> GuildConfig:
        return cls(
            verified_role_id=str(item.get(cls.ROLE_KEY) or ""),
            log_channel_id=str(item.get(cls.CHANNEL_KEY) or ""),
        )

    @property
    def role_id(self) -> int | None:
        return _as_snowflake(self.verified_role_id)

    @property
    def channel_id(self) -> int | None:
        return _as_snowflake(self.log_channel_id)

    def role_mention(self) -> str:
        return f"<@&{self.verified_role_id}>"

    def channel_mention(self) -> str:
        return f"<#{self.log_channel_id}>"


def _as_snowflake(value: str) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
