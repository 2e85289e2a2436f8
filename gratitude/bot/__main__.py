"""
gratitude.bot.__main__ — Entry point for ``python -m gratitude.bot``
====================================================================

Wiring:
1. Load .env (secrets).
2. Load config.yaml (identity + recognition tuning).
3. Create the SQLAlchemy engine and ensure tables exist.
4. Create the GratitudeBot and hand it config + engine.
5. Start the bot (blocking — runs the asyncio event loop).

Run with::

    python -m gratitude.bot
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

from gratitude.bot.core import GratitudeBot
from gratitude.config import load_config
from gratitude.database.engine import create_db_engine, init_db

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("gratitude")


def main() -> None:
    """Bootstrap and run the Gratitude bot."""

    # 1. Environment variables (secrets).
    load_dotenv()

    token = os.getenv("DISCORD_TOKEN")
    if not token or token == "your-discord-bot-token-here":
        logger.critical(
            "DISCORD_TOKEN is not set.  "
            "Copy .env.example → .env and paste your bot token."
        )
        sys.exit(1)

    # 2. Configuration.
    cfg = load_config(os.getenv("GRATITUDE_CONFIG", "config.yaml"))
    logger.info(
        "Config loaded — %s (emoji %s, %d per day)",
        cfg.community_name, cfg.recognition.recognize_emoji, cfg.recognition.maximum,
    )

    # 3. Database.
    engine = create_db_engine()
    init_db(engine)

    # 4. Bot.
    bot = GratitudeBot(cfg=cfg, engine=engine)

    # 5. Run (blocks until Ctrl+C or SIGTERM).
    logger.info("Starting Gratitude bot…")
    try:
        bot.run(token, log_handler=None)
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully…")


if __name__ == "__main__":
    main()
