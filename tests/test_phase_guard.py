"""
Tests for the PhaseGuard run state.
"""
import threading

from daemon_control.phase_guard import Phase, PhaseGuard


class TestPhaseGuard:
    """Tests for PhaseGuard transitions."""

    def test_initial_state(self):
        guard = PhaseGuard()
        assert guard.phase == Phase.IDLE
        assert guard.is_running() is False
        assert guard.begin_stop() is None
        assert guard.wait_stopped(0) is True

    def test_begin_cycle_rejects_active_cycle(self):
        guard = PhaseGuard()
        assert guard.begin_cycle(drain_enabled=False) is True
        assert guard.is_running() is True
        assert guard.phase == Phase.STARTING
        assert guard.begin_cycle(drain_enabled=False) is False

    def test_stop_claimed_once_under_contention(self):
        """Only one of many concurrent callers wins the stop sequence."""
        guard = PhaseGuard()
        guard.begin_cycle(drain_enabled=True)
        guard.mark_started(True)

        barrier = threading.Barrier(8)
        tickets = []
        lock = threading.Lock()

        def claim():
            barrier.wait()
            ticket = guard.begin_stop()
            with lock:
                tickets.append(ticket)

        threads = [threading.Thread(target=claim) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        winners = [t for t in tickets if t is not None]
        assert len(winners) == 1
        assert winners[0].drain is True
        assert guard.is_running() is False

    def test_disable_drain_applies_to_current_cycle_only(self):
        guard = PhaseGuard()
        guard.begin_cycle(drain_enabled=True)
        guard.mark_started(True)
        guard.disable_drain()
        assert guard.begin_stop().drain is False
        guard.finish()

        guard.begin_cycle(drain_enabled=True)
        guard.mark_started(True)
        assert guard.begin_stop().drain is True

    def test_finish_fires_stop_event_once_per_cycle(self):
        guard = PhaseGuard()
        guard.begin_cycle(drain_enabled=False)
        first = guard.stop_event
        guard.mark_started(True)
        guard.begin_stop()
        guard.finish(0)
        assert first.is_set()
        assert guard.phase == Phase.STOPPED

        assert guard.begin_cycle(drain_enabled=False) is True
        assert guard.stop_event is not first
        assert not guard.stop_event.is_set()

    def test_start_failure_status_wins(self):
        guard = PhaseGuard()
        guard.begin_cycle(drain_enabled=False)
        guard.mark_started(False, failure_status=1)
        assert guard.wait_started() is False
        guard.begin_stop()
        guard.finish(0)
        assert guard.exit_status == 1

    def test_abort_ends_cycle_and_allows_next(self):
        guard = PhaseGuard()
        guard.begin_cycle(drain_enabled=True)
        guard.abort(3)

        assert guard.phase == Phase.STOPPED
        assert guard.is_running() is False
        assert guard.exit_status == 3
        assert guard.wait_started() is False
        assert guard.begin_stop() is None
        assert guard.begin_cycle(drain_enabled=False) is True
