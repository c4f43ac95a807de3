"""Tests for the animation loop driver."""

import numpy as np
import pytest

from physcalc.viz.engine import VisualizationEngine, VisualMode
from physcalc.viz.loop import AnimationLoop, SchedScheduler


class ManualScheduler:
    """Scheduler whose queued callbacks run only when asked."""

    def __init__(self):
        self.time = 0.0
        self.queue = []
        self.cancelled = []

    def now(self):
        return self.time

    def call_later(self, delay, callback):
        handle = (self.time + delay, callback)
        self.queue.append(handle)
        return handle

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.queue.remove(handle)

    def fire(self):
        when, callback = self.queue.pop(0)
        self.time = when
        callback()


@pytest.fixture
def engine():
    return VisualizationEngine(VisualMode.REYNOLDS, particle_count=20, rng=np.random.default_rng(0))


class TestAnimationLoop:
    def test_runs_requested_frames(self, engine):
        scheduler = SchedScheduler(realtime=False)
        frames = []
        loop = AnimationLoop(engine, lambda: ({"v": "2"}, None), scheduler, sink=frames.append, max_frames=30)
        loop.start()
        scheduler.run()
        assert loop.frame_count == 30
        assert len(frames) == 30
        assert frames[-1] is loop.last_frame
        assert not loop.running

    def test_virtual_time_advances(self, engine):
        scheduler = SchedScheduler(realtime=False)
        loop = AnimationLoop(engine, lambda: ({}, None), scheduler, interval=0.5, max_frames=4)
        loop.start()
        scheduler.run()
        assert scheduler.now() == pytest.approx(2.0)

    def test_reschedules_each_frame(self, engine):
        scheduler = ManualScheduler()
        loop = AnimationLoop(engine, lambda: ({}, None), scheduler)
        loop.start()
        assert len(scheduler.queue) == 1
        scheduler.fire()
        scheduler.fire()
        assert loop.frame_count == 2
        assert len(scheduler.queue) == 1

    def test_stop_cancels_pending_frame(self, engine):
        scheduler = ManualScheduler()
        loop = AnimationLoop(engine, lambda: ({}, None), scheduler)
        loop.start()
        scheduler.fire()
        loop.stop()
        assert scheduler.queue == []
        assert len(scheduler.cancelled) == 1
        assert not loop.running
        loop.stop()
        assert len(scheduler.cancelled) == 1

    def test_start_is_idempotent(self, engine):
        scheduler = ManualScheduler()
        loop = AnimationLoop(engine, lambda: ({}, None), scheduler)
        loop.start()
        loop.start()
        assert len(scheduler.queue) == 1

    def test_latest_input_wins(self, engine):
        scheduler = ManualScheduler()
        state = {"inputs": {"v": "1"}}
        loop = AnimationLoop(engine, lambda: (state["inputs"], None), scheduler)
        loop.start()
        scheduler.fire()
        slow = loop.last_frame.geometry["speed"]
        state["inputs"] = {"v": "10"}
        scheduler.fire()
        assert loop.last_frame.geometry["speed"] > slow

    def test_dt_from_scheduler_clock(self, engine):
        scheduler = ManualScheduler()
        loop = AnimationLoop(engine, lambda: ({"v": "1"}, None), scheduler, interval=1 / 60)
        loop.start()
        x0 = [p.x for p in engine.particles]
        scheduler.fire()
        moved = [p.x - x for p, x in zip(engine.particles, x0)]
        # One frame at v=1 moves 2.5 px unless the particle wrapped
        assert any(m == pytest.approx(2.5) for m in moved)

    def test_bad_input_does_not_stop_loop(self, engine):
        scheduler = SchedScheduler(realtime=False)
        loop = AnimationLoop(engine, lambda: ({"v": "NaN"}, "garbage"), scheduler, max_frames=10)
        loop.start()
        scheduler.run()
        assert loop.frame_count == 10
