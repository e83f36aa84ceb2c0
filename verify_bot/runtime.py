"""Discord client wiring and process lifecycle for the verification bot."""

from __future__ import annotations

import asyncio
import logging

import discord
from discord import app_commands
from discord.ext import tasks

from .commands import AdminCommands, register_commands
from .config import BotConfig
from .cooldown import CooldownTracker
from .panel import PanelButton, VerificationPanel
from .storage import SettingsStore
from .verification import VerificationFlow

log = logging.getLogger("verify-bot")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_PANEL_BUTTON_IDS = frozenset(button.value for button in PanelButton)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


class VerifyRuntime:
    """Owns the client, command tree, settings store and cooldown state."""

    def __init__(self, config: BotConfig) -> None:
        intents = discord.Intents.default()
        intents.guilds = True
        intents.members = True

        self.config = config
        self.bot = discord.Client(intents=intents)
        self.tree = app_commands.CommandTree(self.bot)
        self.store = SettingsStore(config.settings_file)
        self.cooldowns = CooldownTracker(config.cooldown_seconds)
        self.flow = VerificationFlow(self.store, self.cooldowns)
        self.commands = AdminCommands(self.store, self.flow)
        self.prune_loop = tasks.loop(minutes=config.prune_minutes)(self.prune_cooldowns)
        self._commands_synced = False

        register_commands(self.tree, self.commands)
        self.bot.setup_hook = self.setup_hook
        self.bot.event(self.on_ready)
        self.bot.event(self.on_interaction)

    async def setup_hook(self) -> None:
        # Panels posted before a restart keep dispatching to the same handler.
        self.bot.add_view(VerificationPanel(self.flow))
        self.prune_loop.start()

    async def on_ready(self) -> None:
        if self.config.sync_commands and not self._commands_synced:
            await self.sync_commands()
        log.info("Bot ready as %s (%s)", self.bot.user, self.bot.user.id)

    async def sync_commands(self) -> None:
        log.info("Registering global slash commands...")
        try:
            synced = await self.tree.sync()
        except discord.DiscordException as exc:
            log.exception("Global command registration failed: %s", exc)
            return
        self._commands_synced = True
        log.info(
            "Registered %d global slash command(s); propagation can take up to an hour",
            len(synced),
        )

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        match interaction.type:
            case discord.InteractionType.component:
                data = interaction.data or {}
                if data.get("component_type") != discord.ComponentType.button.value:
                    return
                if data.get("custom_id") in _PANEL_BUTTON_IDS:
                    return  # dispatched through VerificationPanel
                await self.flow.handle_button(interaction)
            case _:
                return

    async def prune_cooldowns(self) -> None:
        removed = self.cooldowns.prune()
        if removed:
            log.debug("Pruned %d expired cooldown entr(ies)", removed)

    def shutdown(self) -> None:
        if self.prune_loop.is_running():
            self.prune_loop.cancel()
        self.cooldowns.clear()
        log.info(
            "Shutdown complete (DMs sent=%d failed=%d, log posts=%d skipped=%d failed=%d)",
            self.flow.stats.dm_sent,
            self.flow.stats.dm_failed,
            self.flow.stats.log_posted,
            self.flow.stats.log_skipped,
            self.flow.stats.log_failed,
        )

    async def run(self) -> None:
        self.store.ensure_exists()
        try:
            async with self.bot:
                await self.bot.start(self.config.discord_token)
        finally:
            self.shutdown()


def run() -> None:
    """Console entry point; exits with status 1 when the token is missing."""
    try:
        config = BotConfig.load()
    except RuntimeError as exc:
        configure_logging()
        log.error("%s – set DISCORD_TOKEN in the environment before starting the bot", exc)
        raise SystemExit(1) from exc

    configure_logging(config.log_level)
    try:
        asyncio.run(VerifyRuntime(config).run())
    except KeyboardInterrupt:
        log.info("Bot stopped by user")


__all__ = ["VerifyRuntime", "configure_logging", "run"]
