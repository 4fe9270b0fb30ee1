"""
Seed derivation.

Precedence is fixed: an explicit seed wins, then the run-wide global seed,
then a seed derived from the wall clock. The global seed is an ordinary
value passed in by the caller; there is no module-level override.
"""

import time
from typing import Optional

from stationgen.prng import U64_MAX, check_u64


DEFAULT_FIXED_SEED = 123456789


def time_seed() -> int:
    """Seed from the current wall-clock time in nanoseconds, truncated to 64 bits."""
    return time.time_ns() & U64_MAX


def resolve_seed(explicit: Optional[int] = None, global_seed: Optional[int] = None) -> int:
    """
    Resolve the seed for one PRNG instance.

    Args:
        explicit: Seed supplied for this instance (optional)
        global_seed: Run-wide seed that makes a whole run reproducible (optional)

    Returns:
        explicit if given, else global_seed if given, else a time-based seed

    Raises:
        ValueError: If a supplied seed is not an unsigned 64-bit integer
    """
    if explicit is not None:
        return check_u64(explicit, "seed")
    if global_seed is not None:
        return check_u64(global_seed, "global seed")
    return time_seed()
