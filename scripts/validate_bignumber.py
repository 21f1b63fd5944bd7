#!/usr/bin/env python3
"""
Validation script for the bignumber package.

Runs a sequence of checks:
1. Layout constants and host byte order
2. Worked examples (saturating subtraction, floor division, carries)
3. Native / little-endian byte round-trips
4. Randomised differential run against Python int semantics

Usage:
    python scripts/validate_bignumber.py
    python scripts/validate_bignumber.py --config configs/validate_default.yaml
    python scripts/validate_bignumber.py --output-dir outputs/validate
"""

import argparse
import sys
import time
import traceback
from dataclasses import asdict
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from bignumber import (
    BigNumber, DiffConfig, NUMBER_SIZE, BASE, NUMBER_BYTES,
    host_byte_order, load_config, run_differential,
)
from bignumber.logging import RunLogger, create_manifest

DEFAULT_CONFIG = str(
    Path(__file__).resolve().parent.parent / "configs" / "validate_default.yaml"
)


def section(name: str):
    print(f"\n{'='*60}")
    print(f"  {name}")
    print(f"{'='*60}")


def check(name: str, passed: bool, detail: str = ""):
    status = "PASS" if passed else "FAIL"
    mark = "✓" if passed else "✗"
    print(f"  [{status}] {mark} {name}" + (f" -- {detail}" if detail else ""))
    return passed


def main():
    parser = argparse.ArgumentParser(
        description="Validate BigNumber arithmetic"
    )
    parser.add_argument("--config", type=str, default=DEFAULT_CONFIG,
                        help=f"Config file (default: {DEFAULT_CONFIG})")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="Write manifest.json and JSONL logs here")
    args = parser.parse_args()

    print("bignumber Validation Suite")
    print(f"Python: {sys.version}")

    results = []

    # ---------------------------------------------------------------
    # 1. Layout
    # ---------------------------------------------------------------
    section("1. Layout")

    print(f"  NUMBER_SIZE = {NUMBER_SIZE}, BASE = {BASE}")
    print(f"  host byte order = {host_byte_order()}")
    results.append(check("Zero value is zero", BigNumber().is_zero()))
    results.append(check("Buffer size", len(BigNumber().to_ne_bytes()) == NUMBER_BYTES,
                         f"{NUMBER_BYTES} bytes"))

    # ---------------------------------------------------------------
    # 2. Worked examples
    # ---------------------------------------------------------------
    section("2. Worked Examples")

    try:
        q = BigNumber.from_wide(100000) / BigNumber.from_limb(7)
        results.append(check("100000 / 7", q.to_int() == 14285,
                             f"got {q.to_int()}"))

        d = BigNumber() - BigNumber.from_limb(1)
        results.append(check("0 - 1 saturates", d.is_zero()))

        x = BigNumber.from_limb(BASE - 1)
        want = BASE - 1
        for _ in range(10):
            x *= BigNumber.from_limb(BASE - 1)
            want *= BASE - 1
        results.append(check("(2^16-1)^11 carries", x.to_int() == want,
                             f"{x.significant_limbs()} limbs"))
    except Exception as e:
        results.append(check("Worked examples", False, str(e)))
        traceback.print_exc()

    # ---------------------------------------------------------------
    # 3. Byte round-trips
    # ---------------------------------------------------------------
    section("3. Byte Round-trips")

    try:
        x = BigNumber.from_int(0x1234_5678_9ABC_DEF0_1357_9BDF)
        results.append(check("native bytes",
                             BigNumber.from_ne_bytes(x.to_ne_bytes()) == x))
        results.append(check("little-endian bytes",
                             BigNumber.from_le_bytes(x.to_le_bytes()) == x))
    except Exception as e:
        results.append(check("Byte round-trips", False, str(e)))
        traceback.print_exc()

    # ---------------------------------------------------------------
    # 4. Differential run
    # ---------------------------------------------------------------
    section("4. Differential Run")

    config = load_config(args.config) if Path(args.config).exists() else DiffConfig()
    print(f"  config: {asdict(config)}")

    logger = None
    if args.output_dir:
        output_dir = Path(args.output_dir)
        run_id = f"validate_{int(time.time())}"
        create_manifest(run_id, asdict(config)).save(output_dir / "manifest.json")
        logger = RunLogger(output_dir)

    try:
        summary = run_differential(config, logger=logger)
        for op, stats in summary["ops"].items():
            results.append(check(
                f"{op} x{stats['cases']}", stats["mismatches"] == 0,
                f"{stats['mismatches']} mismatches, {stats['wall_time_sec']:.2f}s",
            ))
    except Exception as e:
        results.append(check("Differential run", False, str(e)))
        traceback.print_exc()
    finally:
        if logger is not None:
            logger.close()

    # ---------------------------------------------------------------
    # Summary
    # ---------------------------------------------------------------
    section("Summary")

    n_pass = sum(1 for r in results if r)
    n_fail = len(results) - n_pass
    print(f"\n  {n_pass}/{len(results)} checks passed, {n_fail} failed")

    return 0 if n_fail == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
