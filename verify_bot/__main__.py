"""Entry point for running the bot via python -m verify_bot"""

from verify_bot.runtime import run

if __name__ == "__main__":
    run()
