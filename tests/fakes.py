"""Hand-written fakes for the Discord objects the bot touches."""

from __future__ import annotations

from types import SimpleNamespace
from unittest import mock

import discord


def http_error(cls: type[discord.HTTPException] = discord.HTTPException, status: int = 500):
    return cls(mock.Mock(status=status, reason="error"), "request failed")


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRole:
    def __init__(self, role_id: int, name: str = "Member") -> None:
        self.id = role_id
        self.name = name

    @property
    def mention(self) -> str:
        return f"<@&{self.id}>"


class FakeMember:
    def __init__(self, user_id: int = 42, name: str = "alice", roles=()) -> None:
        self.id = user_id
        self.name = name
        self.roles = list(roles)
        self.granted: list[tuple[tuple[FakeRole, ...], str | None]] = []
        self.dms: list[str] = []
        self.add_error: Exception | None = None
        self.dm_error: Exception | None = None

    def __str__(self) -> str:
        return self.name

    def get_role(self, role_id: int):
        return next((role for role in self.roles if role.id == role_id), None)

    async def add_roles(self, *roles, reason=None) -> None:
        if self.add_error is not None:
            raise self.add_error
        self.roles.extend(roles)
        self.granted.append((roles, reason))

    async def send(self, content=None, **_kwargs) -> None:
        if self.dm_error is not None:
            raise self.dm_error
        self.dms.append(content)


class FakeTextChannel(discord.abc.Messageable):
    def __init__(self, channel_id: int, name: str = "logs", send_error=None) -> None:
        self.id = channel_id
        self.name = name
        self.send_error = send_error
        self.sent: list[dict] = []

    @property
    def mention(self) -> str:
        return f"<#{self.id}>"

    async def send(self, content=None, **kwargs):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append({"content": content, **kwargs})
        return mock.Mock()

    async def _get_channel(self):
        return self

    def _get_guild(self):
        return None


class FakeCategory:
    def __init__(self, channel_id: int, name: str = "Lobby") -> None:
        self.id = channel_id
        self.name = name


class FakeGuild:
    def __init__(self, guild_id: int = 1000, roles=(), channels=()) -> None:
        self.id = guild_id
        self._roles = {role.id: role for role in roles}
        self._channels = {channel.id: channel for channel in channels}

    def get_role(self, role_id: int):
        return self._roles.get(role_id)

    def get_channel(self, channel_id: int):
        return self._channels.get(channel_id)

    def remove_role(self, role_id: int) -> None:
        self._roles.pop(role_id, None)

    def remove_channel(self, channel_id: int) -> None:
        self._channels.pop(channel_id, None)


class FakeResponse:
    def __init__(self) -> None:
        self.messages: list[tuple[str, bool]] = []
        self.deferred = False

    def is_done(self) -> bool:
        return self.deferred or bool(self.messages)

    async def send_message(self, content=None, *, ephemeral: bool = False, **_kwargs) -> None:
        self.messages.append((content, ephemeral))

    async def defer(self, *, ephemeral: bool = False, thinking: bool = False) -> None:
        self.deferred = True


class FakeFollowup:
    def __init__(self) -> None:
        self.messages: list[tuple[str, bool]] = []

    async def send(self, content=None, *, ephemeral: bool = False, **_kwargs) -> None:
        self.messages.append((content, ephemeral))


def make_interaction(
    *,
    guild: FakeGuild | None,
    user: FakeMember | None = None,
    custom_id: str | None = None,
    channel=None,
    interaction_type: discord.InteractionType = discord.InteractionType.component,
):
    data = None
    if custom_id is not None:
        data = {
            "custom_id": custom_id,
            "component_type": discord.ComponentType.button.value,
        }
    return SimpleNamespace(
        type=interaction_type,
        data=data,
        guild=guild,
        guild_id=guild.id if guild is not None else None,
        user=user or FakeMember(),
        channel=channel,
        response=FakeResponse(),
        followup=FakeFollowup(),
    )


def replies(interaction) -> list[tuple[str, bool]]:
    """Every reply sent for ``interaction``, initial response first."""
    return interaction.response.messages + interaction.followup.messages
