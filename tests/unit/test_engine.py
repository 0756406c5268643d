"""Tests for the tail engine."""

import re
from unittest.mock import Mock, patch

import pytest

from journal_watch.core.engine import (
    EngineSettings,
    EngineState,
    InvalidationStrategy,
    TailEngine,
)
from journal_watch.core.exceptions import (
    DescriptorError,
    ProcessError,
    SeekError,
    SourceOpenError,
)
from journal_watch.sources.base import MonotonicPosition, SourceEvent
from tests.fixtures.sources import BOOT_ID, FakeLogSource, make_records


def messages(output):
    """Message bodies rendered so far, in output order."""
    return re.findall(r"msg-\d+", output.getvalue())


def expected(numbers):
    return [f"msg-{n}" for n in numbers]


class TestHistoryReplay:
    """Test the startup seek-back-and-replay phase."""

    def test_replays_last_twenty_records_in_order(self, make_engine, output):
        source = FakeLogSource(make_records(30))
        engine = make_engine(source)

        assert engine.replay_history() == 20
        assert messages(output) == expected(range(10, 30))
        assert output.getvalue().count("\n") == 20

    def test_replays_everything_when_fewer_records(self, make_engine, output):
        source = FakeLogSource(make_records(5))
        engine = make_engine(source)

        assert engine.replay_history() == 5
        assert messages(output) == expected(range(5))

    def test_custom_history_count(self, make_engine, output):
        source = FakeLogSource(make_records(10))
        engine = make_engine(source, history=3)

        assert engine.replay_history() == 3
        assert messages(output) == expected(range(7, 10))

    def test_zero_history_renders_nothing(self, make_engine, output):
        source = FakeLogSource(make_records(10))
        engine = make_engine(source, history=0)

        assert engine.replay_history() == 0
        assert output.getvalue() == ""

    def test_empty_source_then_append(self, make_engine, output):
        source = FakeLogSource()
        engine = make_engine(source)

        assert engine.replay_history() == 0
        source.append(*make_records(2))

        assert engine.drain() == 2
        assert messages(output) == expected(range(2))

    def test_state_moves_to_draining(self, make_engine):
        engine = make_engine(FakeLogSource(make_records(1)))
        assert engine.state == EngineState.SEEKING

        engine.replay_history()

        assert engine.state == EngineState.DRAINING

    def test_seek_failure_is_fatal_to_loop(self, make_engine):
        source = FakeLogSource(make_records(3))
        source.fail_seek_tail = True
        engine = make_engine(source)

        with pytest.raises(SeekError):
            engine.run()

    def test_unreadable_timestamp_skips_record(self, make_engine, output):
        source = FakeLogSource(make_records(3))
        source.fail_realtime = True
        engine = make_engine(source)

        with patch("journal_watch.ui.render.logger") as mock_logger:
            assert engine.replay_history() == 3

        assert output.getvalue() == ""
        assert mock_logger.error.call_count == 3


class TestDraining:
    """Test the steady-state wait/drain loop."""

    def test_registers_source_descriptor(self, make_engine, waiter):
        source = FakeLogSource(make_records(1), fd=11, events=5)
        engine = make_engine(source)

        engine.start()

        assert waiter.registered == {11: 5}

    def test_drains_all_coalesced_appends_before_next_wait(
        self, make_engine, waiter, output
    ):
        source = FakeLogSource(make_records(2))
        seen_before_wait = []

        def on_wait(call):
            seen_before_wait.append(messages(output))
            if call == 1:
                source.append(*make_records(3, start=2))
                source.notify(SourceEvent.APPEND)
            else:
                engine.stop()

        waiter.on_wait = on_wait
        engine = make_engine(source)

        assert engine.run() == 0
        assert seen_before_wait[0] == expected(range(2))
        assert seen_before_wait[1] == expected(range(5))

    def test_stop_ends_run_after_current_cycle(self, make_engine, waiter, output):
        source = FakeLogSource(make_records(1))
        engine = make_engine(source)

        def on_wait(call):
            source.append(*make_records(1, start=1))
            source.notify(SourceEvent.APPEND)
            engine.stop()

        waiter.on_wait = on_wait

        assert engine.run() == 0
        assert len(waiter.wait_timeouts) == 1
        assert messages(output) == expected(range(2))

    def test_nop_renders_nothing(self, make_engine, output):
        source = FakeLogSource(make_records(2))
        engine = make_engine(source)
        engine.start()
        before = output.getvalue()

        source.notify(SourceEvent.NOP)
        engine.run_once()

        assert output.getvalue() == before

    def test_unknown_event_is_logged_and_loop_continues(self, make_engine, output):
        source = FakeLogSource()
        engine = make_engine(source)
        engine.start()

        source.notify(42)
        with patch("journal_watch.core.engine.logger") as mock_logger:
            engine.run_once()
        mock_logger.warning.assert_called_once()
        assert "42" in mock_logger.warning.call_args[0][0]

        source.append(*make_records(1))
        source.notify(SourceEvent.APPEND)
        engine.run_once()
        assert messages(output) == ["msg-0"]

    def test_out_of_range_timestamp_is_skipped(self, make_engine, output):
        source = FakeLogSource(make_records(1))
        engine = make_engine(source)
        engine.start()

        corrupt = make_records(1, start=1)[0]
        corrupt.realtime_usec = 2**63
        source.append(corrupt, *make_records(1, start=2))
        source.notify(SourceEvent.APPEND)
        with patch("journal_watch.ui.render.logger"):
            engine.run_once()

        assert messages(output) == ["msg-0", "msg-2"]

    def test_indefinite_wait_when_source_has_no_timeout(self, make_engine, waiter):
        engine = make_engine(FakeLogSource(timeout=None))

        engine.start()
        engine.run_once()

        assert waiter.wait_timeouts == [None]

    def test_uses_source_timeout(self, make_engine, waiter):
        engine = make_engine(FakeLogSource(timeout=0.25))

        engine.start()
        engine.run_once()

        assert waiter.wait_timeouts == [0.25]

    def test_falls_back_to_polling_when_timeout_unavailable(self, make_engine, waiter):
        source = FakeLogSource()
        source.fail_timeout = True
        engine = make_engine(source, fallback_timeout=0.5)

        engine.start()
        engine.run_once()
        engine.run_once()

        assert waiter.wait_timeouts == [0.5, 0.5]

    def test_process_failure_stops_loop(self, make_engine):
        source = FakeLogSource()
        source.fail_process = True
        engine = make_engine(source)

        with pytest.raises(ProcessError) as exc_info:
            engine.run()
        assert exc_info.value.errno == 5

    def test_descriptor_failure_stops_loop(self, make_engine):
        source = FakeLogSource()
        source.fail_fileno = True
        engine = make_engine(source)

        with pytest.raises(DescriptorError) as exc_info:
            engine.run()
        assert exc_info.value.errno == 9


class TestReopening:
    """Test recovery from source invalidation."""

    def test_reopens_and_resumes_from_captured_position(
        self, make_engine, waiter, output
    ):
        stale = FakeLogSource(make_records(5), fd=7)
        fresh = FakeLogSource(make_records(7), fd=8)
        engine = make_engine(stale, opener=lambda: fresh)
        engine.start()

        stale.notify(SourceEvent.INVALIDATE)
        engine.run_once()

        assert stale.closed
        assert waiter.deregister_calls == [7]
        assert waiter.registered == {8: 1}
        assert engine.source is fresh
        assert fresh.sought_positions == [MonotonicPosition(3_000, BOOT_ID)]
        # The last two records seen are replayed once more
        assert messages(output) == expected(range(5)) + expected(range(3, 7))
        assert engine.state == EngineState.DRAINING

    def test_falls_back_to_tail_when_seek_fails(self, make_engine, output):
        stale = FakeLogSource(make_records(5), fd=7)
        fresh = FakeLogSource(make_records(7), fd=8)
        fresh.fail_seek_monotonic = True
        engine = make_engine(stale, opener=lambda: fresh)
        engine.start()

        stale.notify(SourceEvent.INVALIDATE)
        with patch("journal_watch.core.engine.logger") as mock_logger:
            engine.run_once()

        mock_logger.error.assert_called_once()
        assert fresh.seek_tail_calls == 1
        assert messages(output) == expected(range(5))

        fresh.append(*make_records(1, start=7))
        fresh.notify(SourceEvent.APPEND)
        engine.run_once()
        assert messages(output)[-1] == "msg-7"

    def test_seeks_tail_when_position_not_captured(self, make_engine):
        stale = FakeLogSource(make_records(5), fd=7)
        stale.fail_monotonic = True
        fresh = FakeLogSource(make_records(5), fd=8)
        engine = make_engine(stale, opener=lambda: fresh)
        engine.start()

        stale.notify(SourceEvent.INVALIDATE)
        engine.run_once()

        assert fresh.sought_positions == []
        assert fresh.seek_tail_calls == 1
        assert stale.closed

    def test_reopen_failure_is_fatal(self, make_engine):
        stale = FakeLogSource(make_records(2))
        opener = Mock(side_effect=SourceOpenError("Failed to open system journal"))
        engine = make_engine(stale, opener=opener)
        engine.start()

        stale.notify(SourceEvent.INVALIDATE)
        with pytest.raises(SourceOpenError):
            engine.run_once()

        assert stale.closed
        assert engine.source is None
        # Closing after a failed reopen must not touch the stale handle again
        engine.close()

    def test_drain_strategy_keeps_handle(self, make_engine, output):
        source = FakeLogSource(make_records(2))
        opener = Mock()
        engine = make_engine(
            source, opener=opener, on_invalidate=InvalidationStrategy.DRAIN
        )
        engine.start()

        source.append(*make_records(2, start=2))
        source.notify(SourceEvent.INVALIDATE)
        engine.run_once()

        opener.assert_not_called()
        assert not source.closed
        assert messages(output) == expected(range(4))


class TestClose:
    """Test engine shutdown."""

    def test_close_deregisters_and_closes(self, make_engine, waiter):
        source = FakeLogSource(fd=9)
        engine = make_engine(source)
        engine.start()

        engine.close()

        assert source.closed
        assert waiter.deregister_calls == [9]
        assert engine.source is None

    def test_default_settings(self, renderer, output, waiter):
        engine = TailEngine(FakeLogSource(), FakeLogSource, renderer, output, waiter)

        assert engine.settings == EngineSettings()
        assert engine.settings.history == 20
        assert engine.settings.on_invalidate is InvalidationStrategy.REOPEN
        assert engine.settings.fallback_timeout == 1.0
