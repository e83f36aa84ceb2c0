"""Administrator slash commands: /setup, /panel, /status and /reset.

Each handler loads the settings file fresh, touches only the invoking guild's
record and answers ephemerally. The administrator requirement is declared on
the command definitions and enforced by Discord before dispatch.
"""

from __future__ import annotations

import logging
from typing import Final

import discord
from discord import app_commands

from .interactions import is_text_capable, send_private
from .models import GuildConfig
from .panel import ButtonHandler, VerificationPanel, build_panel_embed
from .storage import SettingsStore, SettingsStoreError

log = logging.getLogger("verify-bot")

COMMAND_NAMES: Final[tuple[str, ...]] = ("setup", "panel", "status", "reset")

CHANNEL_NOT_TEXT_MESSAGE: Final[str] = "❌ The log channel must be a text channel!"
SAVE_FAILED_MESSAGE: Final[str] = "❌ Could not save the settings – try again later."
SETUP_FIRST_MESSAGE: Final[str] = "⚠️ Run `/setup` first to configure the bot!"
NO_SETTINGS_MESSAGE: Final[str] = (
    "⚠️ This server has no settings yet. Start with `/setup`!"
)
PANEL_INSTALLED_MESSAGE: Final[str] = "✅ Verification panel installed!"
PANEL_FAILED_MESSAGE: Final[str] = (
    "❌ Could not post the panel here. Check that the bot can send messages "
    "and embeds in this channel."
)
RESET_MESSAGE: Final[str] = "🧹 This server's settings have been reset!"


def setup_confirmation(role: discord.Role, channel_id: int) -> str:
    return (
        "✅ Settings saved!\n"
        f"- Verified role: **{role.name}**\n"
        f"- Log channel: <#{channel_id}>\n\n"
        "Now run `/panel` to install the verification buttons!"
    )


def status_summary(config: GuildConfig) -> str:
    return (
        "📌 Current settings\n"
        f"- Verified role: {config.role_mention()}\n"
        f"- Log channel: {config.channel_mention()}"
    )


class AdminCommands:
    def __init__(self, store: SettingsStore, button_handler: ButtonHandler) -> None:
        self._store = store
        self._button_handler = button_handler

    async def setup(
        self,
        interaction: discord.Interaction,
        verified_role: discord.Role,
        log_channel: discord.abc.GuildChannel,
    ) -> None:
        if log_channel is None or not is_text_capable(log_channel):
            await send_private(interaction, CHANNEL_NOT_TEXT_MESSAGE)
            return

        config = GuildConfig(
            verified_role_id=str(verified_role.id),
            log_channel_id=str(log_channel.id),
        )
        try:
            self._store.put(interaction.guild_id, config)
        except SettingsStoreError as exc:
            log.exception("Failed to save settings for guild %s: %s", interaction.guild_id, exc)
            await send_private(interaction, SAVE_FAILED_MESSAGE)
            return

        log.info(
            "Guild %s configured: role=%s log_channel=%s",
            interaction.guild_id,
            config.verified_role_id,
            config.log_channel_id,
        )
        await send_private(interaction, setup_confirmation(verified_role, log_channel.id))

    async def panel(self, interaction: discord.Interaction) -> None:
        if self._store.get(interaction.guild_id) is None:
            await send_private(interaction, SETUP_FIRST_MESSAGE)
            return

        channel = interaction.channel
        if channel is None or not is_text_capable(channel):
            await send_private(interaction, PANEL_FAILED_MESSAGE)
            return

        try:
            await channel.send(
                embed=build_panel_embed(),
                view=VerificationPanel(self._button_handler),
            )
        except discord.Forbidden:
            log.warning("No send permission in channel %s", channel.id)
            await send_private(interaction, PANEL_FAILED_MESSAGE)
            return
        except discord.HTTPException as exc:
            log.exception("Failed to post verification panel: %s", exc)
            await send_private(interaction, PANEL_FAILED_MESSAGE)
            return

        await send_private(interaction, PANEL_INSTALLED_MESSAGE)

    async def status(self, interaction: discord.Interaction) -> None:
        config = self._store.get(interaction.guild_id)
        if config is None:
            await send_private(interaction, NO_SETTINGS_MESSAGE)
            return
        await send_private(interaction, status_summary(config))

    async def reset(self, interaction: discord.Interaction) -> None:
        try:
            removed = self._store.delete(interaction.guild_id)
        except SettingsStoreError as exc:
            log.exception("Failed to reset settings for guild %s: %s", interaction.guild_id, exc)
            await send_private(interaction, SAVE_FAILED_MESSAGE)
            return
        if removed:
            log.info("Guild %s settings reset", interaction.guild_id)
        await send_private(interaction, RESET_MESSAGE)


def register_commands(tree: app_commands.CommandTree, handlers: AdminCommands) -> None:
    """Attach the four admin commands to ``tree``."""

    @tree.command(
        name="setup",
        description="Save this server's verification settings. (Admin only)",
    )
    @app_commands.describe(
        verified_role="Role given to members once they verify",
        log_channel="Channel that receives verification logs",
    )
    @app_commands.default_permissions(administrator=True)
    @app_commands.guild_only()
    async def setup(
        interaction: discord.Interaction,
        verified_role: discord.Role,
        log_channel: discord.abc.GuildChannel,
    ) -> None:
        await handlers.setup(interaction, verified_role, log_channel)

    @tree.command(
        name="panel",
        description="Install the verification button panel. (Admin only)",
    )
    @app_commands.default_permissions(administrator=True)
    @app_commands.guild_only()
    async def panel(interaction: discord.Interaction) -> None:
        await handlers.panel(interaction)

    @tree.command(
        name="status",
        description="Show this server's verification settings. (Admin only)",
    )
    @app_commands.default_permissions(administrator=True)
    @app_commands.guild_only()
    async def status(interaction: discord.Interaction) -> None:
        await handlers.status(interaction)

    @tree.command(
        name="reset",
        description="Reset this server's verification settings. (Admin only)",
    )
    @app_commands.default_permissions(administrator=True)
    @app_commands.guild_only()
    async def reset(interaction: discord.Interaction) -> None:
        await handlers.reset(interaction)
