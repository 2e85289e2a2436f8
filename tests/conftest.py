"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool

from gratitude.config import RecognitionSettings
from gratitude.database.models import Base
from gratitude.engine.events import ChatUser

EMOJI = ":emoji-recognize:"


def run_async(coro):
    """Run an async coroutine to completion (no pytest-asyncio)."""
    return asyncio.run(coro)


@pytest.fixture
def settings() -> RecognitionSettings:
    """Recognition tuning used across the suite."""
    return RecognitionSettings(
        recognize_emoji=EMOJI,
        reaction_emoji=EMOJI,
        minimum_message_length=10,
        maximum=5,
        default_timezone="UTC",
        redeem_url="https://wiki.example.com/redeem",
    )


@pytest.fixture
def giver() -> ChatUser:
    return ChatUser(id="UGIVER", timezone="UTC")


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with all Gratitude tables.

    Uses StaticPool so all threads share the same in-memory database
    (required by ``asyncio.to_thread`` used in ``run_db``).
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine
