"""
tests/test_dispatcher.py — Recognition Dispatcher Tests
========================================================

Fan-out count, concurrency of submissions, and the no-rollback policy.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from gratitude.engine.events import ChatUser, RecognitionRequest
from gratitude.engine.parser import parse_message
from gratitude.services.dispatcher import RecognitionDispatcher
from gratitude.services.errors import DispatchError, LedgerWriteError
from tests.conftest import EMOJI, run_async


def _request(settings, giver, text, receiver_ids):
    return RecognitionRequest(
        giver=giver,
        receivers=tuple(ChatUser(id=r) for r in receiver_ids),
        parsed=parse_message(text, settings),
        channel_id="C1",
    )


class TestDispatch:
    def test_single_unit(self, settings, giver):
        ledger = AsyncMock()
        request = _request(settings, giver, f"<@U1> great job! {EMOJI}", ["U1"])

        results = run_async(RecognitionDispatcher(ledger).dispatch(request))

        assert len(results) == 1
        assert results[0].ok
        ledger.record_recognition.assert_awaited_once_with(
            "UGIVER", "U1", f"<@U1> great job! {EMOJI}", "C1", (),
        )

    def test_fan_out_count(self, settings, giver):
        """2 receivers × 2 emoji × x3 = 12 ledger writes."""
        ledger = AsyncMock()
        text = f"<@U1> <@U2> thanks {EMOJI}{EMOJI} x3 #ops"
        request = _request(settings, giver, text, ["U1", "U2"])

        results = run_async(RecognitionDispatcher(ledger).dispatch(request))

        assert len(results) == 12
        assert ledger.record_recognition.await_count == 12
        receivers = [call.args[1] for call in ledger.record_recognition.await_args_list]
        assert receivers.count("U1") == 6
        assert receivers.count("U2") == 6
        assert all(call.args[4] == ("ops",) for call in ledger.record_recognition.await_args_list)

    def test_submissions_run_concurrently(self, settings, giver):
        in_flight = 0
        peak = 0

        async def slow_record(*args):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        ledger = AsyncMock()
        ledger.record_recognition.side_effect = slow_record
        request = _request(settings, giver, f"<@U1> thanks {EMOJI} x4", ["U1"])

        run_async(RecognitionDispatcher(ledger).dispatch(request))
        assert peak == 4

    def test_partial_failure_raises_after_all_settle(self, settings, giver):
        calls = []

        async def flaky(giver_id, receiver_id, text, channel_id, tags):
            calls.append(receiver_id)
            if receiver_id == "U2":
                raise LedgerWriteError("disk full")

        ledger = AsyncMock()
        ledger.record_recognition.side_effect = flaky
        request = _request(settings, giver, f"<@U1> <@U2> <@U3> thanks {EMOJI}", ["U1", "U2", "U3"])

        with pytest.raises(DispatchError) as excinfo:
            run_async(RecognitionDispatcher(ledger).dispatch(request))

        # Every unit was attempted; nothing is rolled back.
        assert calls == ["U1", "U2", "U3"]
        err = excinfo.value
        assert len(err.results) == 3
        assert [r.unit.receiver_id for r in err.failures] == ["U2"]
        assert isinstance(err.failures[0].error, LedgerWriteError)

    def test_no_receivers_writes_nothing(self, settings, giver):
        ledger = AsyncMock()
        request = _request(settings, giver, f"thanks {EMOJI}", [])
        assert run_async(RecognitionDispatcher(ledger).dispatch(request)) == []
        ledger.record_recognition.assert_not_awaited()
