"""Button-driven Discord verification bot.

Guild administrators store a verified role and a log channel with ``/setup``,
post the two-button panel with ``/panel``, and members receive the role by
pressing the verify button.
"""

__all__ = [
    "commands",
    "config",
    "cooldown",
    "interactions",
    "models",
    "panel",
    "runtime",
    "storage",
    "verification",
]
