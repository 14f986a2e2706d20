"""PlaybackRateController — adapts the renderer clock speed to frame throughput.

Driven once per rendered frame by the render loop.  Keeps a sliding window of
frame times and, every ``check_interval`` frames outside a cooldown, compares
the mean against the target frame time:

* ratio > ``poor_ratio``: slow down by ``adjustment_rate`` (floor
  ``base_speed * min_speed_ratio``);
* ratio < ``good_ratio`` and below base: speed up by ``adjustment_rate``
  (cap ``base_speed``).

Each adjustment starts a cooldown.  Keyframes are never touched; only the
clock multiplier changes.  Not thread-safe: exactly one render loop may drive
an instance.
"""

from __future__ import annotations

import logging
import time
from collections import deque

from route_flyover.config import FlyoverConfig
from route_flyover.playback.presets import get_preset

_logger = logging.getLogger(__name__)

_LOG_EVERY_FRAMES = 300


class NullClock:
    """Stand-in renderer clock; records every multiplier written."""

    def __init__(self, multiplier: float = 1.0) -> None:
        self._multiplier = multiplier
        self.writes: list[float] = []

    @property
    def multiplier(self) -> float:
        return self._multiplier

    @multiplier.setter
    def multiplier(self, value: float) -> None:
        self.writes.append(value)
        self._multiplier = value


class PlaybackRateController:
    """Closed-loop speed control for one renderer clock.

    Parameters
    ----------
    clock:
        Object with a writable ``multiplier`` attribute.  A multiplier of 0 or
        less means the clock is paused and is left alone.
    base_speed:
        Nominal multiplier; the controller never exceeds it.
    target_fps:
        Frame rate the renderer should sustain.
    time_source:
        Callable returning seconds; used by :meth:`on_frame`.
    """

    def __init__(
        self,
        clock,
        base_speed: float,
        target_fps: float = 90.0,
        window_size: int = 30,
        check_interval: int = 30,
        cooldown_frames: int = 60,
        poor_ratio: float = 1.3,
        good_ratio: float = 0.8,
        adjustment_rate: float = 0.1,
        min_speed_ratio: float = 0.5,
        time_source=time.perf_counter,
    ) -> None:
        self._clock = clock
        self._base_speed = base_speed
        self._min_speed = base_speed * min_speed_ratio
        self._target_frame_ms = 1000.0 / target_fps if target_fps > 0 else 1000.0 / 90.0
        self._window: deque[float] = deque(maxlen=max(1, window_size))
        self._check_interval = max(1, check_interval)
        self._cooldown_frames = max(0, cooldown_frames)
        self._poor_ratio = poor_ratio
        self._good_ratio = good_ratio
        self._adjustment = adjustment_rate
        self._time_source = time_source

        self._current_speed = base_speed
        self._cooldown = 0
        self._frame_count = 0
        self._last_time: float | None = None

    @classmethod
    def from_config(cls, clock, base_speed: float, config: FlyoverConfig, **kwargs):
        return cls(
            clock,
            base_speed,
            target_fps=config.target_fps,
            window_size=config.rate_window_size,
            cooldown_frames=config.rate_cooldown_frames,
            poor_ratio=config.rate_poor_ratio,
            good_ratio=config.rate_good_ratio,
            adjustment_rate=config.rate_adjustment,
            min_speed_ratio=config.rate_min_speed_ratio,
            **kwargs,
        )

    @classmethod
    def from_preset(cls, clock, name: str, **kwargs):
        """Build a controller from a quality preset's speed and FPS."""
        preset = get_preset(name)
        return cls(clock, preset.speed, target_fps=preset.fps, **kwargs)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def current_speed(self) -> float:
        return self._current_speed

    @property
    def base_speed(self) -> float:
        return self._base_speed

    @property
    def cooldown_remaining(self) -> int:
        return self._cooldown

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def average_frame_time(self) -> float:
        """Mean of the sample window in ms (0.0 before the first sample)."""
        if not self._window:
            return 0.0
        return sum(self._window) / len(self._window)

    def on_frame(self) -> None:
        """Render-loop hook: measure the time since the previous call and record it.

        The first call only primes the timer.
        """
        now = self._time_source()
        if self._last_time is None:
            self._last_time = now
            return
        elapsed_ms = (now - self._last_time) * 1000.0
        self._last_time = now
        self.record_frame_time(elapsed_ms)

    def record_frame_time(self, frame_time_ms: float) -> None:
        """Feed one frame-time sample (milliseconds) into the controller."""
        self._window.append(max(0.0, frame_time_ms))
        self._frame_count += 1

        if self._cooldown > 0:
            self._cooldown -= 1
            return
        if self._frame_count % self._check_interval != 0:
            return

        avg = self.average_frame_time
        ratio = avg / self._target_frame_ms

        if ratio > self._poor_ratio:
            self._set_speed(max(self._min_speed, self._current_speed * (1 - self._adjustment)))
            _logger.warning(
                "Frame drop detected (%.1fms avg); reducing speed to %.1fx",
                avg,
                self._current_speed,
            )
            self._cooldown = self._cooldown_frames
        elif ratio < self._good_ratio and self._current_speed < self._base_speed:
            self._set_speed(min(self._base_speed, self._current_speed * (1 + self._adjustment)))
            _logger.info(
                "Good performance (%.1fms avg); increasing speed to %.1fx",
                avg,
                self._current_speed,
            )
            self._cooldown = self._cooldown_frames

        if self._frame_count % _LOG_EVERY_FRAMES == 0 and avg > 0:
            _logger.debug(
                "Performance: %.1f FPS (%.1fms), speed %.1fx",
                1000.0 / avg,
                avg,
                self._current_speed,
            )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _set_speed(self, speed: float) -> None:
        self._current_speed = speed
        if self._clock.multiplier > 0:
            self._clock.multiplier = speed
