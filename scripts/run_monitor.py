
import argparse, csv, sys
from oscillator_detector.config import load_config
from oscillator_detector.logs import NdjsonLogger
from oscillator_detector.monitor import OscillationMonitor

def _positions(args):
    if args.csv:
        with open(args.csv, newline="", encoding="utf-8") as f:
            for row in csv.DictReader(f):
                yield int(float(row[args.column]))
    else:
        for line in sys.stdin:
            line = line.strip()
            if line:
                yield int(float(line))

def main():
    ap = argparse.ArgumentParser(description="Feed a position stream through the oscillation monitor")
    ap.add_argument("--config", required=True)
    ap.add_argument("--csv", help="CSV file to read instead of stdin (one position per line)")
    ap.add_argument("--column", default="position")
    args = ap.parse_args()

    cfg = load_config(args.config)
    logger = NdjsonLogger(cfg.logging.dir, cfg.logging.file_prefix,
                          dual_file=cfg.logging.dual_file, debug_subdir=cfg.logging.debug_subdir)
    logger.configure(cfg.logging.mode, cfg.logging.verbose_whitelist)
    mon = OscillationMonitor.from_config(cfg, logger)
    try:
        for pos in _positions(args):
            mon.update(pos)
    except FileNotFoundError:
        print(f"[err] not found: {args.csv}"); sys.exit(2)
    except (KeyError, ValueError) as e:
        print(f"[err] bad input: {e}"); sys.exit(2)
    finally:
        summary = mon.summary()
        logger.write({"type": "status", "msg": "summary", "data": summary})
        logger.close()
    print(f"{summary['channel']}: samples={summary['samples']} onsets={summary['onsets']} "
          f"resets={summary['resets']} detected={summary['detected']}")

if __name__ == "__main__":
    main()
