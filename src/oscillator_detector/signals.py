
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .detector import OscillatorDetector

Schedule = Callable[[float, int], float]


def direction_of(previous: int, current: int) -> int:
    """Sign of the step from previous to current, clamped to -1/0/1."""
    return max(-1, min(1, current - previous))


def label_directions(positions: Iterable[int], previous: int = 0) -> Iterator[Tuple[int, int]]:
    for pos in positions:
        yield pos, direction_of(previous, pos)
        previous = pos


def _clamp(v: float, lo: Optional[float], hi: Optional[float]) -> float:
    if lo is not None and v < lo:
        return lo
    if hi is not None and v > hi:
        return hi
    return v


# Amplitude schedules: called once per sample, before the value is computed.

def constant() -> Schedule:
    return lambda amp, i: amp


def linear(step: float, lo: Optional[float] = None, hi: Optional[float] = None) -> Schedule:
    return lambda amp, i: _clamp(amp + step, lo, hi)


def accelerating(rate: float, lo: Optional[float] = None, hi: Optional[float] = None) -> Schedule:
    """amp += rate * i, so the change grows with the sample index."""
    return lambda amp, i: _clamp(amp + rate * i, lo, hi)


def alternating(up: float, down: float) -> Schedule:
    return lambda amp, i: amp + (up if i % 2 == 0 else -down)


def sine_positions(samples: int = 7200, amplitude: float = 1000.0,
                   schedule: Optional[Schedule] = None, freq: int = 1) -> Iterator[int]:
    """Integer sine samples for i = 0..samples (inclusive), one degree * freq per step.

    Values are truncated toward zero, as an int64 cast would.
    """
    schedule = schedule or constant()
    for i in range(samples + 1):
        amplitude = schedule(amplitude, i)
        yield int(amplitude * math.sin(math.radians(i * freq)))


def ramp_positions(samples: int = 7200, start: int = 0, step: int = 1) -> Iterator[int]:
    for i in range(samples + 1):
        yield start + step * i


def run(detector: OscillatorDetector, samples: Iterable[Tuple[int, int]]) -> bool:
    """Feed (position, direction) pairs; True if any call reported oscillation."""
    detected = False
    for pos, d in samples:
        detected |= detector.detect(pos, d)
    return detected


@dataclass
class Scenario:
    name: str
    positions: Callable[[], Iterable[int]]
    expected: bool
    previous: int = 0

    def samples(self) -> Iterator[Tuple[int, int]]:
        return label_directions(self.positions(), self.previous)

    def run(self, detector: Optional[OscillatorDetector] = None) -> bool:
        return run(detector or OscillatorDetector(), self.samples())


SCENARIOS: List[Scenario] = [
    Scenario("linear_rise", lambda: ramp_positions(7200, 0, 1), False),
    Scenario("linear_fall", lambda: ramp_positions(7200, 7200, -1), False, previous=7200),
    Scenario("pure_sine", lambda: sine_positions(7200, 1000.0), True),
    Scenario("decaying_sine", lambda: sine_positions(7200, 1000.0, accelerating(-10, 0.1, 1000.0)), False),
    Scenario("growing_sine", lambda: sine_positions(7200, 1000.0, accelerating(10)), True),
    Scenario("small_rise_sine", lambda: sine_positions(7200, 100.0, linear(0.5)), True),
    Scenario("slow_decaying_sine", lambda: sine_positions(7200, 1000.0, linear(-0.5, 0.1, 1000.0)), False),
    # extra shapes
    Scenario("growing_sine_slow", lambda: sine_positions(7200, 1000.0, linear(1.0)), True),
    Scenario("growing_sine_fast", lambda: sine_positions(7200, 500.0, linear(5.0), freq=3), True),
    Scenario("small_amplitude_slow", lambda: sine_positions(7200, 50.0, linear(0.1)), True),
    Scenario("very_fast_frequency", lambda: sine_positions(7200, 1000.0, linear(2.0), freq=10), True),
    Scenario("high_frequency_small_rise", lambda: sine_positions(7200, 50.0, linear(0.2), freq=5), True),
    Scenario("very_high_frequency", lambda: sine_positions(7200, 200.0, linear(1.0), freq=20), True),
    Scenario("decaying_sine_fast", lambda: sine_positions(7200, 2000.0, linear(-5.0, 0.1, 2000.0), freq=5), False),
    Scenario("alternating_amplitude", lambda: sine_positions(7200, 100.0, alternating(1.0, 0.5), freq=2), True),
    Scenario("very_small_amplitude", lambda: sine_positions(7200, 5.0, linear(0.05)), True),
    Scenario("decaying_tiny_amplitude", lambda: sine_positions(7200, 20.0, linear(-0.05, 0.1, 20.0)), False),
]


def scenario(name: str) -> Scenario:
    for s in SCENARIOS:
        if s.name == name:
            return s
    raise KeyError(name)
