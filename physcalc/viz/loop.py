"""Cancelable per-frame animation driver.

``AnimationLoop`` is a self-rescheduling task: every frame it queues the
next one on a scheduler, reads the latest inputs, steps the engine and
hands the frame to a sink.  The scheduler is injected so the same loop
runs under a Qt timer in the desktop shell and under ``sched`` (real or
virtual time) on the command line and in tests.
"""

from __future__ import annotations

import logging
import sched
import time
from typing import Any, Callable, Mapping, Protocol

from physcalc.viz.engine import VisualizationEngine, VisualizationFrame

logger = logging.getLogger(__name__)

InputSource = Callable[[], "tuple[Mapping[str, str], str | None]"]
FrameSink = Callable[[VisualizationFrame], None]


class Scheduler(Protocol):
    """Minimal single-threaded timer interface."""

    def now(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class SchedScheduler:
    """Scheduler backed by :mod:`sched`.

    Args:
        realtime: If False, time is virtual: waiting advances the clock
            instantly, so long animations run as fast as they compute.
    """

    def __init__(self, realtime: bool = True) -> None:
        self.realtime = realtime
        self._virtual_now = 0.0
        if realtime:
            self._sched = sched.scheduler(time.monotonic, time.sleep)
        else:
            self._sched = sched.scheduler(self.now, self._advance)

    def now(self) -> float:
        return time.monotonic() if self.realtime else self._virtual_now

    def _advance(self, delay: float) -> None:
        self._virtual_now += max(delay, 0.0)

    def call_later(self, delay: float, callback: Callable[[], None]) -> sched.Event:
        return self._sched.enter(delay, 0, callback)

    def cancel(self, handle: sched.Event) -> None:
        try:
            self._sched.cancel(handle)
        except ValueError:
            pass  # already ran

    def run(self) -> None:
        """Run queued events until none remain."""
        self._sched.run()


class AnimationLoop:
    """Drive a VisualizationEngine frame by frame.

    Args:
        engine: Engine owned by the panel this loop animates.
        source: Returns the latest ``(raw_inputs, result_text)``.
        scheduler: Timer used to queue frames.
        sink: Receives each frame (e.g. a canvas redraw).
        interval: Target seconds between frames.
        max_frames: Stop after this many frames (None = until stopped).
    """

    def __init__(
        self,
        engine: VisualizationEngine,
        source: InputSource,
        scheduler: Scheduler,
        sink: FrameSink | None = None,
        interval: float = 1.0 / 60.0,
        max_frames: int | None = None,
    ) -> None:
        self.engine = engine
        self.source = source
        self.scheduler = scheduler
        self.sink = sink
        self.interval = interval
        self.max_frames = max_frames
        self.frame_count = 0
        self.last_frame: VisualizationFrame | None = None
        self._running = False
        self._handle: Any = None
        self._last_time = 0.0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Begin animating; a no-op if already running."""
        if self._running:
            return
        self._running = True
        self._last_time = self.scheduler.now()
        self._handle = self.scheduler.call_later(self.interval, self.tick)
        logger.debug("Animation started (%s)", self.engine.mode.value)

    def stop(self) -> None:
        """Cancel the pending frame.  Safe to call repeatedly."""
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None
        if self._running:
            logger.debug("Animation stopped after %d frames", self.frame_count)
        self._running = False

    def tick(self) -> None:
        """Render one frame and queue the next."""
        if not self._running:
            return
        now = self.scheduler.now()
        dt = now - self._last_time
        self._last_time = now

        self.frame_count += 1
        if self.max_frames is not None and self.frame_count >= self.max_frames:
            self._running = False
            self._handle = None
        else:
            self._handle = self.scheduler.call_later(self.interval, self.tick)

        inputs, result = self.source()
        frame = self.engine.step(dt, inputs, result)
        self.last_frame = frame
        if self.sink is not None:
            self.sink(frame)
