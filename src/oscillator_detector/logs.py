
from __future__ import annotations
import os, json, time, pathlib, uuid
from typing import Optional, IO, Iterable

class NdjsonLogger:
    """One JSON object per line, with optional full-stream debug copy.

    Records are plain dicts: {"type": "event"|"status"|"debug", "msg": ..., "data": {...}}.
    """
    def __init__(self, directory: str, file_prefix: str, *, dual_file: bool = False, debug_subdir: Optional[str] = None):
        self.dir = pathlib.Path(directory)
        self.dir.mkdir(parents=True, exist_ok=True)
        self.prefix = file_prefix
        self.dual_file = bool(dual_file)
        self.debug_subdir = debug_subdir or "debug"
        self._debug_dir: Optional[pathlib.Path] = None
        self.seq = 0
        self._fh: Optional[IO[str]] = None
        self._debug_fh: Optional[IO[str]] = None
        self._path: Optional[pathlib.Path] = None
        self._debug_path: Optional[pathlib.Path] = None
        self._rot_day: Optional[str] = None
        # 'regular' drops debug records from the main file unless their msg
        # is whitelisted; 'verbose' writes everything.
        self.mode: str = os.getenv("LOG_MODE", "regular")
        wl = os.getenv("LOG_VERBOSE_WHITELIST", "")
        self.verbose_whitelist = set(s.strip() for s in wl.split(",") if s.strip())
        self.session_id: str = os.getenv("SESSION_ID") or uuid.uuid4().hex[:12]
        self.pid: int = os.getpid()
        self.rotate()

    @property
    def path(self) -> Optional[pathlib.Path]:
        return self._path

    @property
    def debug_path(self) -> Optional[pathlib.Path]:
        return self._debug_path

    def configure(self, mode: Optional[str] = None, verbose_whitelist: Optional[Iterable[str]] = None):
        if mode:
            self.mode = mode
        if verbose_whitelist is not None:
            self.verbose_whitelist = set(verbose_whitelist)

    def close(self):
        for fh in (self._fh, self._debug_fh):
            if fh:
                try:
                    fh.close()
                except OSError:
                    pass
        self._fh = None
        self._debug_fh = None

    def rotate(self):
        self.close()
        # Time-coded filename, e.g. oscillator_YYYYMMDD_HHMMSS.ndjson
        stamp = time.strftime("%Y%m%d_%H%M%S", time.localtime(time.time()))
        path = self.dir / f"{self.prefix}_{stamp}.ndjson"
        self._fh = open(path, "a", buffering=1, encoding="utf-8")
        self._path = path
        if self.dual_file:
            self._debug_dir = self.dir / self.debug_subdir
            try:
                self._debug_dir.mkdir(parents=True, exist_ok=True)
                dpath = self._debug_dir / f"{self.prefix}_debug_{stamp}.ndjson"
                self._debug_fh = open(dpath, "a", buffering=1, encoding="utf-8")
                self._debug_path = dpath
            except OSError:
                # main log still works without the debug copy
                self._debug_fh = None
        self._rot_day = stamp[:8]

    def _allowed_in_main(self, obj: dict) -> bool:
        if self.mode != "regular":
            return True
        if obj.get("type") != "debug":
            return True
        msg = obj.get("msg")
        return bool(msg) and msg in self.verbose_whitelist

    def write(self, obj: dict):
        self.seq += 1
        now = time.time()
        msec = int((now % 1.0) * 1000)
        obj.setdefault("hms", time.strftime("%H:%M:%S", time.localtime(now)) + f".{msec:03d}")
        obj.setdefault("seq", self.seq)
        obj.setdefault("schema", "v1")
        obj.setdefault("session_id", self.session_id)
        obj.setdefault("pid", self.pid)
        if time.strftime("%Y%m%d") != self._rot_day:
            self.rotate()

        line = json.dumps(obj) + "\n"
        # Logging must never break the detection loop
        try:
            if self.dual_file and self._debug_fh:
                self._debug_fh.write(line)
        except OSError:
            pass
        if not self._allowed_in_main(obj):
            return
        try:
            if self._fh:
                self._fh.write(line)
        except OSError:
            pass
