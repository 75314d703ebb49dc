"""Tests for the snapshot → display projection."""

import pytest

from intervalquest.render import format_time, render
from intervalquest.timer.config import TimerConfiguration
from intervalquest.timer.engine import TimerEngine

from helpers import ManualScheduler, finish_phase, run_ticks


@pytest.mark.parametrize("seconds,text", [
    (0, "00:00"),
    (9, "00:09"),
    (75, "01:15"),
    (3600, "60:00"),
    (-4, "00:00"),
])
def test_format_time(seconds, text):
    assert format_time(seconds) == text


@pytest.fixture
def eng(qapp):
    return TimerEngine(
        configuration=TimerConfiguration(30, 10, 4),
        exercises=["Squats", "Lunges"],
        scheduler=ManualScheduler(),
    )


class TestRender:

    def test_idle(self, eng):
        view = render(eng.snapshot())
        assert view.time_text == "00:30"
        assert view.phase_label == "WORK"
        assert view.round_text == "Round 1 of 4"
        assert view.exercise == "Squats"
        assert view.primary_action == "Start"
        assert view.overall_percent == 0

    def test_running_midway(self, eng):
        eng.start()
        run_ticks(eng, 15)
        view = render(eng.snapshot())
        assert view.time_text == "00:15"
        assert view.phase_percent == 50
        assert view.overall_percent == 12  # (0.5 / 4) rounds half-to-even
        assert view.primary_action == "Pause"

    def test_paused(self, eng):
        eng.start()
        eng.pause()
        view = render(eng.snapshot())
        assert view.is_paused
        assert view.primary_action == "Resume"
        assert "(paused)" in view.as_line()

    def test_rest(self, eng):
        eng.start()
        finish_phase(eng)
        view = render(eng.snapshot())
        assert view.phase_label == "REST"
        assert view.time_text == "00:10"
        assert view.overall_percent == 25

    def test_finished(self, eng):
        eng.start()
        run_ticks(eng, 40 * 4)
        view = render(eng.snapshot())
        assert view.phase_label == "COMPLETE"
        assert view.overall_percent == 100
        assert view.primary_action == "Start"

    def test_as_line(self, eng):
        assert render(eng.snapshot()).as_line() == "[WORK]  00:30  Round 1 of 4  Squats  0%"
