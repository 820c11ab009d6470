
from __future__ import annotations
import yaml
from dataclasses import dataclass
from typing import Optional, List

@dataclass
class DetectorCfg:
    # both stored as uint8 by the detector; larger values wrap
    smoother_threshold: int = 5
    sensitivity: int = 5

@dataclass
class MonitorCfg:
    channel: str = "ch0"
    # position assumed before the first sample when deriving direction
    initial_position: int = 0

@dataclass
class LoggingCfg:
    dir: str = "./logs"
    file_prefix: str = "oscillator"
    # 'regular' drops debug records from the main file unless whitelisted;
    # 'verbose' emits everything.
    mode: str = "regular"
    # Message names emitted even in regular mode, e.g. ["accumulator_reset"].
    verbose_whitelist: Optional[List[str]] = None
    # When enabled the full stream (debug included) also goes to dir/debug.
    dual_file: bool = False
    debug_subdir: Optional[str] = "debug"

@dataclass
class AppCfg:
    detector: DetectorCfg
    monitor: MonitorCfg
    logging: LoggingCfg

def _as_int(d, key, default):
    v = d.get(key, default)
    try:
        return int(v)
    except (TypeError, ValueError):
        return default

def load_config(path: str) -> AppCfg:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    # Coerce numeric fields so quoted YAML values still work
    det_raw = dict(raw.get("detector") or {})
    det = DetectorCfg(
        smoother_threshold=_as_int(det_raw, "smoother_threshold", DetectorCfg.smoother_threshold),
        sensitivity=_as_int(det_raw, "sensitivity", DetectorCfg.sensitivity),
    )
    mon_raw = dict(raw.get("monitor") or {})
    mon = MonitorCfg(
        channel=str(mon_raw.get("channel", MonitorCfg.channel)),
        initial_position=_as_int(mon_raw, "initial_position", MonitorCfg.initial_position),
    )
    log = LoggingCfg(**(raw.get("logging") or {}))
    return AppCfg(detector=det, monitor=mon, logging=log)
