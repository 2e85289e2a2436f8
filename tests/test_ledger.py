"""
tests/test_ledger.py — SQL Recognition Ledger Tests
====================================================

Uses an in-memory SQLite database via the shared conftest fixtures.
"""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from gratitude.database.models import Recognition, UserSettings
from gratitude.services import ledger as ledger_module
from gratitude.services.errors import LedgerWriteError
from gratitude.services.ledger import (
    SqlRecognitionLedger,
    insert_recognition,
    resolve_timezone,
    start_of_local_day,
)
from tests.conftest import run_async


class _Clock:
    """Settable clock for the ledger."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _insert(engine, giver_id: str, receiver_id: str, at: datetime) -> None:
    insert_recognition(
        engine,
        giver_id=giver_id,
        receiver_id=receiver_id,
        text="thanks",
        channel_id="C1",
        tags=(),
        created_at=at,
    )


class TestRecordAndCount:
    def test_record_persists_row(self, db_engine, settings):
        clock = _Clock(datetime(2026, 10, 19, 12, 0, tzinfo=UTC))
        ledger = SqlRecognitionLedger(db_engine, settings, clock=clock)

        run_async(ledger.record_recognition("G", "R", "great job", "C1", ("ops", "dev")))

        with Session(db_engine) as session:
            rows = session.query(Recognition).all()
            assert len(rows) == 1
            assert rows[0].giver_id == "G"
            assert rows[0].receiver_id == "R"
            assert rows[0].message == "great job"
            assert rows[0].tags == ["ops", "dev"]

    def test_count_received(self, db_engine, settings):
        ledger = SqlRecognitionLedger(db_engine, settings)
        for _ in range(3):
            run_async(ledger.record_recognition("G", "R", "t", "C1", ()))
        run_async(ledger.record_recognition("G", "OTHER", "t", "C1", ()))

        assert run_async(ledger.count_recognitions_received("R")) == 3
        assert run_async(ledger.count_recognitions_received("NOBODY")) == 0

    def test_db_failure_becomes_ledger_write_error(self, db_engine, settings):
        with patch.object(
            ledger_module, "get_session",
            side_effect=OperationalError("INSERT", {}, Exception("locked")),
        ):
            with pytest.raises(LedgerWriteError):
                _insert(db_engine, "G", "R", datetime(2026, 10, 19, tzinfo=UTC))


class TestDailyAllowance:
    def test_full_allowance_when_nothing_given(self, db_engine, settings):
        ledger = SqlRecognitionLedger(db_engine, settings)
        assert run_async(ledger.remaining_daily_allowance("G", "UTC")) == 5

    def test_counts_only_todays_units(self, db_engine, settings):
        clock = _Clock(datetime(2026, 10, 19, 15, 0, tzinfo=UTC))
        ledger = SqlRecognitionLedger(db_engine, settings, clock=clock)
        _insert(db_engine, "G", "R", datetime(2026, 10, 18, 23, 0, tzinfo=UTC))
        _insert(db_engine, "G", "R", datetime(2026, 10, 19, 1, 0, tzinfo=UTC))
        _insert(db_engine, "G", "R", datetime(2026, 10, 19, 14, 0, tzinfo=UTC))
        _insert(db_engine, "SOMEONE", "R", datetime(2026, 10, 19, 14, 0, tzinfo=UTC))

        assert run_async(ledger.remaining_daily_allowance("G", "UTC")) == 3

    def test_day_boundary_follows_giver_timezone(self, db_engine, settings):
        # 03:00 UTC on the 19th is 21:00 on the 18th in Denver (MDT, UTC-6).
        clock = _Clock(datetime(2026, 10, 19, 3, 0, tzinfo=UTC))
        ledger = SqlRecognitionLedger(db_engine, settings, clock=clock)
        _insert(db_engine, "G", "R", datetime(2026, 10, 18, 5, 0, tzinfo=UTC))
        _insert(db_engine, "G", "R", datetime(2026, 10, 18, 7, 0, tzinfo=UTC))

        assert run_async(ledger.remaining_daily_allowance("G", "America/Denver")) == 4
        assert run_async(ledger.remaining_daily_allowance("G", "UTC")) == 5

    def test_never_negative(self, db_engine, settings):
        clock = _Clock(datetime(2026, 10, 19, 12, 0, tzinfo=UTC))
        ledger = SqlRecognitionLedger(db_engine, settings, clock=clock)
        for hour in range(7):
            _insert(db_engine, "G", "R", datetime(2026, 10, 19, hour, 0, tzinfo=UTC))
        assert run_async(ledger.remaining_daily_allowance("G", "UTC")) == 0


class TestTimezones:
    def test_unknown_timezone_falls_back(self):
        assert resolve_timezone("Mars/Olympus_Mons", "UTC") == ZoneInfo("UTC")

    def test_empty_timezone_falls_back(self):
        assert resolve_timezone("", "Europe/Berlin") == ZoneInfo("Europe/Berlin")

    def test_start_of_local_day(self):
        now = datetime(2026, 10, 19, 3, 0, tzinfo=UTC)
        start = start_of_local_day(now, ZoneInfo("America/Denver"))
        assert start == datetime(2026, 10, 18, 6, 0, tzinfo=UTC)

    def test_user_timezone_round_trip(self, db_engine, settings):
        ledger = SqlRecognitionLedger(db_engine, settings)
        assert run_async(ledger.user_timezone("U1")) == "UTC"

        run_async(ledger.set_user_timezone("U1", "Asia/Tokyo"))
        run_async(ledger.set_user_timezone("U1", "Europe/Paris"))

        assert run_async(ledger.user_timezone("U1")) == "Europe/Paris"
        with Session(db_engine) as session:
            assert session.query(UserSettings).count() == 1
