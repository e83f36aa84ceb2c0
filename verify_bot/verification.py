"""Button handling for the verification panel.

A member counts as verified when they hold the guild's configured role; there
is no separate verified flag. Pressing ``verify_user`` walks the gates below
in order and stops at the first one that fails:

* cooldown (shared by every button)
* guild has run ``/setup``
* configured role still exists
* member does not already hold the role
* role grant succeeds

After a grant the welcome DM and the audit-log post are best effort: their
failures are counted in :class:`SideEffectStats` and never reach the member.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final

import discord

from .cooldown import CooldownTracker
from .interactions import is_text_capable, send_private
from .models import GuildConfig
from .panel import PanelButton
from .storage import SettingsStore

log = logging.getLogger("verify-bot")

LOG_EMBED_COLOR: Final[int] = 0x00FF99
GRANT_REASON: Final[str] = "Passed button verification"

COOLDOWN_MESSAGE: Final[str] = "⏱️ You're pressing too fast! Wait {seconds:.1f}s and try again."
AGREE_RULES_MESSAGE: Final[str] = (
    "📜 Thanks for agreeing to the rules! Now press the `✅ Verify` button."
)
NOT_CONFIGURED_MESSAGE: Final[str] = (
    "⚠️ This server hasn't set up the bot yet. Ask an admin to run `/setup`!"
)
ROLE_MISSING_MESSAGE: Final[str] = (
    "❌ The verified role could not be found. Please contact an admin."
)
ALREADY_VERIFIED_MESSAGE: Final[str] = "✅ You're already verified!"
GRANT_FORBIDDEN_MESSAGE: Final[str] = (
    "❌ Failed to give you the role.\n"
    "Admins: make sure the bot's role is above the verified role "
    "and that it has the **Manage Roles** permission!"
)
GRANT_FAILED_MESSAGE: Final[str] = "❌ Unexpected Discord error – try again later."
VERIFIED_MESSAGE: Final[str] = "✅ Verification complete! You now have access to the server."
UNKNOWN_BUTTON_MESSAGE: Final[str] = "❌ Unrecognized button."
WELCOME_DM: Final[str] = (
    "✅ Verification complete!\n\n"
    "🎉 Welcome to the server!\n"
    "📌 Please take a look at the announcement and rules channels too!"
)


@dataclass(slots=True)
class SideEffectStats:
    dm_sent: int = 0
    dm_failed: int = 0
    log_posted: int = 0
    log_skipped: int = 0
    log_failed: int = 0


def build_log_embed(user: discord.abc.User, *, when: datetime | None = None) -> discord.Embed:
    when = when or datetime.now(UTC)
    embed = discord.Embed(title="✅ Verification complete", color=LOG_EMBED_COLOR)
    embed.add_field(name="User", value=f"{user} ({user.id})", inline=False)
    embed.add_field(name="Time", value=f"<t:{int(when.timestamp())}:F>", inline=False)
    return embed


class VerificationFlow:
    def __init__(self, store: SettingsStore, cooldowns: CooldownTracker) -> None:
        self._store = store
        self._cooldowns = cooldowns
        self.stats = SideEffectStats()

    async def handle_button(self, interaction: discord.Interaction) -> None:
        if not self._cooldowns.hit(interaction.user.id):
            wait = self._cooldowns.remaining(interaction.user.id)
            await send_private(interaction, COOLDOWN_MESSAGE.format(seconds=wait))
            return

        custom_id = (interaction.data or {}).get("custom_id")
        match custom_id:
            case PanelButton.AGREE_RULES:
                await send_private(interaction, AGREE_RULES_MESSAGE)
            case PanelButton.VERIFY_USER:
                await self.verify(interaction)
            case _:
                log.debug("Ignoring unknown button %r from %s", custom_id, interaction.user)
                await send_private(interaction, UNKNOWN_BUTTON_MESSAGE)

    async def verify(self, interaction: discord.Interaction) -> None:
        guild = interaction.guild
        member = interaction.user
        config = self._store.get(interaction.guild_id) if guild is not None else None
        if config is None:
            await send_private(interaction, NOT_CONFIGURED_MESSAGE)
            return

        role = guild.get_role(config.role_id) if config.role_id is not None else None
        if role is None:
            log.error(
                "Verified role ID %s not found in guild %s",
                config.verified_role_id,
                guild.id,
            )
            await send_private(interaction, ROLE_MISSING_MESSAGE)
            return

        if member.get_role(role.id) is not None:
            await send_private(interaction, ALREADY_VERIFIED_MESSAGE)
            return

        # Grant, DM and log can outlast the initial response window.
        await interaction.response.defer(ephemeral=True, thinking=True)

        try:
            await member.add_roles(role, reason=GRANT_REASON)
        except discord.Forbidden:
            log.warning("Forbidden when adding role %s to %s", role.id, member)
            await send_private(interaction, GRANT_FORBIDDEN_MESSAGE)
            return
        except discord.HTTPException as exc:
            log.exception("HTTPException adding role: %s", exc)
            await send_private(interaction, GRANT_FAILED_MESSAGE)
            return

        log.info("Verified %s (%s) in guild %s", member, member.id, guild.id)
        await self._send_welcome(member)
        await self._post_log(guild, config, member)
        await send_private(interaction, VERIFIED_MESSAGE)

    async def _send_welcome(self, user: discord.abc.User) -> None:
        try:
            await user.send(WELCOME_DM)
        except discord.HTTPException as exc:
            self.stats.dm_failed += 1
            log.debug("Could not DM %s: %s", user, exc)
            return
        self.stats.dm_sent += 1

    async def _post_log(
        self, guild: discord.Guild, config: GuildConfig, user: discord.abc.User
    ) -> None:
        channel = (
            guild.get_channel(config.channel_id)
            if config.channel_id is not None
            else None
        )
        if channel is None or not is_text_capable(channel):
            self.stats.log_skipped += 1
            log.debug(
                "Log channel %s unavailable in guild %s", config.log_channel_id, guild.id
            )
            return
        try:
            await channel.send(embed=build_log_embed(user))
        except discord.Forbidden:
            self.stats.log_failed += 1
            log.warning("No send permission in log channel %s", config.log_channel_id)
            return
        except discord.HTTPException as exc:
            self.stats.log_failed += 1
            log.warning("Failed to log verification: %s", exc)
            return
        self.stats.log_posted += 1
