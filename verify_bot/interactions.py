from __future__ import annotations

import discord


def is_text_capable(channel: object) -> bool:
    """Return ``True`` for channels the bot can post messages into."""
    return isinstance(channel, discord.abc.Messageable)


async def send_private(interaction: discord.Interaction, content: str) -> None:
    """Reply ephemerally, using a follow-up once the interaction was acknowledged."""
    if interaction.response.is_done():
        await interaction.followup.send(content, ephemeral=True)
    else:
        await interaction.response.send_message(content, ephemeral=True)
