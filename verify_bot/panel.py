"""Verification panel message: embed plus the persistent two-button view."""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol

import discord

PANEL_COLOR = 0x3399FF


class PanelButton(StrEnum):
    AGREE_RULES = "agree_rules"
    VERIFY_USER = "verify_user"


class ButtonHandler(Protocol):
    async def handle_button(self, interaction: discord.Interaction) -> None: ...


def build_panel_embed() -> discord.Embed:
    return discord.Embed(
        title="🔐 Server Verification",
        description=(
            "1) Press `📜 Agree to Rules`.\n"
            "2) Press `✅ Verify`.\n\n"
            "Once verified you can use the server channels!"
        ),
        color=PANEL_COLOR,
    )


class VerificationPanel(discord.ui.View):
    """Buttons keep fixed custom ids so the view survives bot restarts."""

    def __init__(self, handler: ButtonHandler) -> None:
        super().__init__(timeout=None)
        self._handler = handler

    @discord.ui.button(
        label="📜 Agree to Rules",
        style=discord.ButtonStyle.secondary,
        custom_id=PanelButton.AGREE_RULES.value,
    )
    async def agree_rules(self, interaction: discord.Interaction, _: discord.ui.Button) -> None:
        await self._handler.handle_button(interaction)

    @discord.ui.button(
        label="✅ Verify",
        style=discord.ButtonStyle.success,
        custom_id=PanelButton.VERIFY_USER.value,
    )
    async def verify_user(self, interaction: discord.Interaction, _: discord.ui.Button) -> None:
        await self._handler.handle_button(interaction)
