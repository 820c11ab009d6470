import json
from pathlib import Path

from oscillator_detector.logs import NdjsonLogger


def _read_ndjson_lines(d: Path, pattern="*.ndjson"):
    contents = []
    for f in d.glob(pattern):
        with f.open("r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if line:
                    contents.append(json.loads(line))
    return contents


def test_record_gets_identity_fields(tmp_path: Path):
    d = tmp_path / "logs"
    logger = NdjsonLogger(str(d), "osc")
    logger.write({"type": "event", "msg": "OSCILLATION_START", "data": {"extrema": 6}})
    logger.write({"type": "event", "msg": "OSCILLATION_END", "data": {"extrema": 0}})
    logger.close()
    lines = _read_ndjson_lines(d)
    assert [l["msg"] for l in lines] == ["OSCILLATION_START", "OSCILLATION_END"]
    assert [l["seq"] for l in lines] == [1, 2]
    for l in lines:
        assert "hms" in l
        assert l["schema"] == "v1"
        assert l["session_id"] == logger.session_id


def test_regular_mode_drops_debug(tmp_path: Path):
    d = tmp_path / "logs"
    logger = NdjsonLogger(str(d), "osc")
    logger.configure(mode="regular", verbose_whitelist=[])
    logger.write({"type": "debug", "msg": "accumulator_reset", "data": {}})
    assert len(_read_ndjson_lines(d)) == 0


def test_whitelist_and_verbose(tmp_path: Path):
    d = tmp_path / "logs"
    logger = NdjsonLogger(str(d), "osc")
    logger.configure(mode="regular", verbose_whitelist=["accumulator_reset"])
    logger.write({"type": "debug", "msg": "accumulator_reset", "data": {}})
    logger.write({"type": "debug", "msg": "other", "data": {}})
    assert [l["msg"] for l in _read_ndjson_lines(d)] == ["accumulator_reset"]

    d2 = tmp_path / "logs2"
    logger2 = NdjsonLogger(str(d2), "osc")
    logger2.configure(mode="verbose")
    logger2.write({"type": "debug", "msg": "other", "data": {}})
    assert [l["msg"] for l in _read_ndjson_lines(d2)] == ["other"]


def test_dual_file_writes(tmp_path: Path):
    base = tmp_path / "logs"
    logger = NdjsonLogger(str(base), "osc_test", dual_file=True, debug_subdir="debug")
    logger.mode = "regular"
    logger.verbose_whitelist = set()
    logger.write({"type": "event", "msg": "op_info", "data": {"a": 1}})
    logger.write({"type": "debug", "msg": "op_debug", "data": {"a": 2}})

    main_lines = _read_ndjson_lines(base, "osc_test_*.ndjson")
    assert any(l["msg"] == "op_info" for l in main_lines)
    assert not any(l["msg"] == "op_debug" for l in main_lines)

    debug_dir = base / "debug"
    assert debug_dir.exists()
    dbg_lines = _read_ndjson_lines(debug_dir, "osc_test_debug_*.ndjson")
    assert {l["msg"] for l in dbg_lines} == {"op_info", "op_debug"}
    assert logger.debug_path.parent == debug_dir
