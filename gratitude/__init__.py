"""
Gratitude — Peer Recognition for Discord
=========================================
Members give each other a scarce daily recognition currency by posting a
message with the recognition emoji and @-mentions, or by reacting to an
existing recognition.  Every award is validated, written to a ledger one
unit at a time, and announced to the receiver by DM.

Package layout::

    gratitude/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Mention / tag / emoji / multiplier patterns
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   └── models.py      # recognitions, user_settings
    ├── engine/
    │   ├── events.py      # ChatUser, ParsedMessage, RecognitionRequest, …
    │   ├── parser.py      # Message text → ParsedMessage
    │   ├── validation.py  # Ordered, exhaustive business rules
    │   ├── award.py       # Unit counts and AwardUnit expansion
    │   └── notifications.py # Receiver DMs and giver replies
    ├── services/
    │   ├── ports.py       # ChatPlatform / RecognitionLedger protocols
    │   ├── errors.py      # Lookup / ledger / dispatch / notification errors
    │   ├── ledger.py      # SQLAlchemy ledger + daily allowance
    │   ├── dispatcher.py  # Concurrent unit fan-out
    │   └── recognition_service.py  # End-to-end recognition flow
    └── bot/
        ├── core.py        # Bot subclass, cog loader
        ├── platform.py    # Discord ChatPlatform adapter
        └── cogs/
            ├── recognition.py  # on_message + on_raw_reaction_add
            └── meta.py         # /gratitude balance, timezone, help
"""

__version__ = "0.1.0"
