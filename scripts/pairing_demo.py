#!/usr/bin/env python3
"""
Compute e(G1, G2) on one of the preset curves and optionally print the Miller-loop trace.

    python3 scripts/pairing_demo.py --curve tinyjubjub --trace
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys


ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from curve import PRESETS  # noqa: E402
from pairing import final_exponentiate, miller_loop  # noqa: E402


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger("pairing")
    if logger.handlers:
        return logger
    logger.setLevel(level)
    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(ch)
    return logger


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Tate pairing on a toy pairing-friendly curve.")
    p.add_argument("--curve", choices=sorted(PRESETS), default="tinyjubjub", help="Preset curve. Default: tinyjubjub")
    p.add_argument("--trace", action="store_true", help="Print one row per Miller-loop phase.")
    p.add_argument("--debug", action="store_true", help="Also emit the DEBUG log records of the pairing module.")
    return p


def main(argv=None):
    args = build_arg_parser().parse_args(argv if argv is not None else sys.argv[1:])
    setup_logger(logging.DEBUG if args.debug else logging.INFO)

    g1, g2 = PRESETS[args.curve]
    curve = g2.curve
    print(f"{curve}  (r = {curve.r}, k = {curve.k}, #E = {curve.order})")
    print(f"P = {g1}")
    print(f"Q = {g2}")

    steps: list = []
    f = miller_loop(g1, g2, trace=steps)
    if args.trace:
        for s in steps:
            slope = "vertical" if s.slope is None else s.slope
            print(f"  bit={s.bit} {s.op:<6} m={slope}  line={s.line}  f={s.f}  R={s.point}")
    print(f"miller loop: {f}")
    print(f"e(P, Q)    : {final_exponentiate(f, curve)}")


if __name__ == "__main__":
    main()
