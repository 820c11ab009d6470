
import argparse, sys
from oscillator_detector.detector import OscillatorDetector, DetectorParams
from oscillator_detector.signals import SCENARIOS

def main():
    ap = argparse.ArgumentParser(description="Run the synthetic signal scenarios through the detector")
    ap.add_argument("--sensitivity", type=int, default=DetectorParams.sensitivity)
    ap.add_argument("--smoother", type=int, default=DetectorParams.smoother_threshold)
    ap.add_argument("--only", help="run a single scenario by name")
    args = ap.parse_args()

    failed = 0
    for sc in SCENARIOS:
        if args.only and sc.name != args.only:
            continue
        det = OscillatorDetector(DetectorParams(smoother_threshold=args.smoother, sensitivity=args.sensitivity))
        got = sc.run(det)
        ok = got == sc.expected
        failed += 0 if ok else 1
        print(f"{sc.name:28s} expected={sc.expected!s:5s} got={got!s:5s} {'ok' if ok else 'MISMATCH'}")
    sys.exit(1 if failed else 0)

if __name__ == "__main__":
    main()
