import pytest

from torchlight.core.timing import FixedStep


def test_dt_matches_tick_rate():
    assert FixedStep(target_tps=20).dt == pytest.approx(0.05)


def test_rejects_non_positive_rate():
    with pytest.raises(ValueError):
        FixedStep(target_tps=0)


def test_advance_counts_elapsed_ticks(monkeypatch):
    now = [100.0]
    monkeypatch.setattr("torchlight.core.timing.time.perf_counter", lambda: now[0])

    timer = FixedStep(target_tps=10)
    timer.start()

    now[0] += 0.25
    assert timer.advance() == 2
    assert timer.remaining() == pytest.approx(0.05)


def test_advance_drops_backlog_after_max_steps(monkeypatch):
    now = [0.0]
    monkeypatch.setattr("torchlight.core.timing.time.perf_counter", lambda: now[0])

    timer = FixedStep(target_tps=100, max_steps_per_frame=3)
    timer.start()

    now[0] += 10.0
    assert timer.advance() == 3
    assert timer.remaining() == pytest.approx(0.01)
