
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
U8_MASK = 0xFF

@dataclass
class DetectorParams:
    # repeat candidates tolerated per side before a drop below the reference resets
    smoother_threshold: int = 5
    # confirmed extrema must strictly exceed this for a positive verdict
    sensitivity: int = 5

@dataclass(frozen=True)
class DetectorState:
    extrema_counter: int = 0
    last_direction: int = 0
    max_found_pos: int = INT64_MIN
    min_found_pos: int = INT64_MAX
    maximum_debounce_counter: int = 0
    minimum_debounce_counter: int = 0

def _u8(v) -> int:
    return int(v) & U8_MASK

class OscillatorDetector:
    """Turnaround counter for a 1D integer signal.

    Call detect(position, direction) once per sample, where direction is the
    sign of the change since the previous sample (-1 falling, 0 stopped,
    1 rising). Returns True while the number of confirmed extrema exceeds
    the sensitivity. Counters are 8-bit and wrap at 256.
    """
    __slots__ = (
        "_smoother_threshold", "_sensitivity",
        "_extrema_counter", "_last_direction",
        "_max_found_pos", "_min_found_pos",
        "_maximum_debounce_counter", "_minimum_debounce_counter",
    )

    def __init__(self, p: Optional[DetectorParams] = None):
        p = p or DetectorParams()
        self._smoother_threshold = _u8(p.smoother_threshold)
        self._sensitivity = _u8(p.sensitivity)
        self.reset()

    def reset(self) -> None:
        """Drop all accumulated evidence. Parameters are left alone."""
        self._extrema_counter = 0
        self._last_direction = 0
        self._max_found_pos = INT64_MIN
        self._min_found_pos = INT64_MAX
        self._maximum_debounce_counter = 0
        self._minimum_debounce_counter = 0

    def detect(self, position: int, direction: int) -> bool:
        """Consume one sample; True while confirmed extrema exceed the sensitivity."""
        if direction not in (-1, 0, 1):
            # anything outside the three labels is treated as stationary
            direction = 0
        reset = False
        maximum_found = self._last_direction > 0 and direction <= 0
        minimum_found = self._last_direction < 0 and direction >= 0

        if maximum_found:
            if self._max_found_pos <= position:
                first = self._maximum_debounce_counter == 0
                self._maximum_debounce_counter = _u8(self._maximum_debounce_counter + 1)
                if first:
                    self._extrema_counter = _u8(self._extrema_counter + 1)
                    self._minimum_debounce_counter = 0
                self._max_found_pos = position
            elif self._maximum_debounce_counter > self._smoother_threshold:
                reset = True

        if minimum_found:
            if self._min_found_pos >= position:
                first = self._minimum_debounce_counter == 0
                self._minimum_debounce_counter = _u8(self._minimum_debounce_counter + 1)
                if first:
                    self._extrema_counter = _u8(self._extrema_counter + 1)
                    self._maximum_debounce_counter = 0
                self._min_found_pos = position
            elif self._minimum_debounce_counter > self._smoother_threshold:
                reset = True

        if reset:
            self.reset()

        # written after the reset so the next sample still sees this direction
        self._last_direction = direction
        return self._extrema_counter > self._sensitivity

    def set_smoother_threshold(self, threshold: int) -> None:
        self._smoother_threshold = _u8(threshold)

    def get_smoother_threshold(self) -> int:
        return self._smoother_threshold

    def set_sensitivity(self, sensitivity: int) -> None:
        self._sensitivity = _u8(sensitivity)

    def get_sensitivity(self) -> int:
        return self._sensitivity

    # camelCase aliases
    setSmootherThreshold = set_smoother_threshold
    getSmootherThreshold = get_smoother_threshold
    setSensitivity = set_sensitivity
    getSensitivity = get_sensitivity

    smoother_threshold = property(get_smoother_threshold, set_smoother_threshold)
    sensitivity = property(get_sensitivity, set_sensitivity)

    @property
    def params(self) -> DetectorParams:
        return DetectorParams(smoother_threshold=self._smoother_threshold, sensitivity=self._sensitivity)

    @property
    def extrema_count(self) -> int:
        return self._extrema_counter

    @property
    def state(self) -> DetectorState:
        return DetectorState(
            extrema_counter=self._extrema_counter,
            last_direction=self._last_direction,
            max_found_pos=self._max_found_pos,
            min_found_pos=self._min_found_pos,
            maximum_debounce_counter=self._maximum_debounce_counter,
            minimum_debounce_counter=self._minimum_debounce_counter,
        )
