
from __future__ import annotations
from typing import Optional
from .config import AppCfg
from .detector import OscillatorDetector, DetectorParams, DetectorState
from .logs import NdjsonLogger
from .signals import direction_of

class OscillationMonitor:
    """Single-channel wrapper: raw positions in, verdict out, transitions logged."""
    def __init__(self, params: Optional[DetectorParams] = None, logger: Optional[NdjsonLogger] = None,
                 channel: str = "ch0", initial_position: int = 0):
        self.detector = OscillatorDetector(params)
        self.logger = logger
        self.channel = channel
        self.prev = initial_position
        self.sample_index = -1
        self.detected = False
        self.onsets = 0
        self.resets = 0
        self.max_extrema = 0

    @classmethod
    def from_config(cls, cfg: AppCfg, logger: Optional[NdjsonLogger] = None) -> "OscillationMonitor":
        params = DetectorParams(**cfg.detector.__dict__)
        return cls(params, logger, cfg.monitor.channel, cfg.monitor.initial_position)

    def _log(self, typ: str, msg: str, data: dict):
        if self.logger is None:
            return
        self.logger.write({"type": typ, "channel": self.channel, "sample": self.sample_index, "msg": msg, "data": data})

    def update(self, position: int) -> bool:
        position = int(position)
        self.sample_index += 1
        direction = direction_of(self.prev, position)
        before = self.detector.extrema_count
        verdict = self.detector.detect(position, direction)
        after = self.detector.extrema_count
        self.prev = position
        self.max_extrema = max(self.max_extrema, after)

        # an 8-bit wrap also lands on 0 but keeps its extremum references
        state = self.detector.state
        if before > 0 and state == DetectorState(last_direction=state.last_direction):
            self.resets += 1
            self._log("debug", "accumulator_reset", {"position": position, "extrema_before": before})
        if verdict and not self.detected:
            self.onsets += 1
            self._log("event", "OSCILLATION_START", {"position": position, "extrema": after})
        elif self.detected and not verdict:
            self._log("event", "OSCILLATION_END", {"position": position, "extrema": after})
        self.detected = verdict
        return verdict

    def summary(self) -> dict:
        return {
            "channel": self.channel,
            "samples": self.sample_index + 1,
            "detected": self.detected,
            "onsets": self.onsets,
            "resets": self.resets,
            "max_extrema": self.max_extrema,
            "smoother_threshold": self.detector.get_smoother_threshold(),
            "sensitivity": self.detector.get_sensitivity(),
        }
