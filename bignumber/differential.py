"""
Differential validation: BigNumber against Python int semantics.

Each case draws two random operands, applies one operation to both the
BigNumber values and their Python int counterparts, and compares the
results.  Reference semantics:

  add   (a + b) mod BASE**NUMBER_SIZE
  sub   a - b if b <= a else 0
  mul   (a * b) mod BASE**NUMBER_SIZE
  div   a // b        (b != 0)
  mod   a % b         (b != 0)
"""

import random
import time
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

import yaml

from .constants import NUMBER_SIZE, BASE_BITS, MODULUS
from .logging import RunLogger
from .number import BigNumber

REFERENCE_OPS: Dict[str, Callable[[int, int], int]] = {
    "add": lambda a, b: (a + b) % MODULUS,
    "sub": lambda a, b: a - b if b <= a else 0,
    "mul": lambda a, b: (a * b) % MODULUS,
    "div": lambda a, b: a // b,
    "mod": lambda a, b: a % b,
}

BIGNUMBER_OPS: Dict[str, Callable[[BigNumber, BigNumber], BigNumber]] = {
    "add": lambda a, b: a + b,
    "sub": lambda a, b: a - b,
    "mul": lambda a, b: a * b,
    "div": lambda a, b: a / b,
    "mod": lambda a, b: a % b,
}

_DIVIDING_OPS = ("div", "mod")


@dataclass
class DiffConfig:
    """Configuration for a differential run."""
    seed: int = 1234
    n_cases: int = 200              # Cases per operation
    max_limbs: int = 8              # Operand size for ordinary cases
    full_width_every: int = 0       # Every Nth case uses full-width operands (0 = never)
    ops: Tuple[str, ...] = ("add", "sub", "mul", "div", "mod")

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DiffConfig":
        known = {f.name for f in fields(cls)}
        extra = set(raw) - known
        if extra:
            raise ValueError(f"Unknown config keys: {sorted(extra)}")
        values = dict(raw)
        if "ops" in values:
            values["ops"] = tuple(values["ops"])
        return cls(**values)


def load_config(path: Union[str, Path]) -> DiffConfig:
    """Load a DiffConfig from a YAML file (top-level key 'differential')."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return DiffConfig.from_dict(raw.get("differential", {}))


def _random_operand(rng: random.Random, n_limbs: int) -> int:
    k = rng.randint(1, n_limbs)
    return rng.getrandbits(BASE_BITS * k)


def run_differential(config: Optional[DiffConfig] = None,
                     logger: Optional[RunLogger] = None) -> Dict[str, Any]:
    """Run all configured operations and compare against the reference.

    Returns:
        Summary dict with per-op case/mismatch counts and wall time.
    """
    config = config or DiffConfig()
    unknown = [op for op in config.ops if op not in REFERENCE_OPS]
    if unknown:
        raise ValueError(f"Unknown operations: {unknown}")

    rng = random.Random(config.seed)
    summary: Dict[str, Any] = {"config": asdict(config), "ops": {}}
    total_mismatches = 0

    for op in config.ops:
        ref = REFERENCE_OPS[op]
        impl = BIGNUMBER_OPS[op]
        mismatches = 0
        t0 = time.time()

        for case in range(config.n_cases):
            full = (config.full_width_every > 0
                    and case % config.full_width_every == 0)
            size = NUMBER_SIZE if full else config.max_limbs
            a = _random_operand(rng, size)
            b = _random_operand(rng, size)
            if op in _DIVIDING_OPS and b == 0:
                b = 1

            want = ref(a, b)
            got = impl(BigNumber.from_int(a), BigNumber.from_int(b)).to_int()
            if got != want:
                mismatches += 1
                if logger is not None:
                    logger.log_mismatch({
                        "op": op, "case": case,
                        "a": hex(a), "b": hex(b),
                        "got": hex(got), "want": hex(want),
                    })

        dt = time.time() - t0
        summary["ops"][op] = {
            "cases": config.n_cases,
            "mismatches": mismatches,
            "wall_time_sec": dt,
        }
        total_mismatches += mismatches
        if logger is not None:
            logger.log_metrics({
                "op": op,
                "cases": config.n_cases,
                "mismatches": mismatches,
                "wall_time_sec": dt,
                "cases_per_sec": config.n_cases / dt if dt > 0 else 0.0,
            })

    summary["total_mismatches"] = total_mismatches
    summary["passed"] = total_mismatches == 0
    return summary
