"""
Pseudo-random primitives for stationgen.

Two small, fully deterministic generators implemented on plain Python ints:

    - SplitMix64: only used to expand a 64-bit seed into generator state
    - Xoshiro256: xoshiro256++ engine producing one u64 per call

Every station and the station selector each own a separate Xoshiro256
instance. Nothing here is shared between instances.

ARCHITECTURAL RULE:
    Identical seeds MUST yield identical u64 sequences on every platform.
    All arithmetic is masked to 64 bits; never use the stdlib `random`
    module here, its stream is not part of our output contract.
"""

from typing import List


U64_MAX = (1 << 64) - 1

# float(U64_MAX) rounds to 2**64 in binary64
_U64_SCALE = float(U64_MAX)
_LARGEST_BELOW_ONE = 1.0 - 2.0 ** -53


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (64 - shift))) & U64_MAX


def check_u64(value: int, what: str = "value") -> int:
    """
    Validate that `value` is an unsigned 64-bit integer.

    Raises:
        ValueError: If value is not an int in [0, U64_MAX]
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {type(value).__name__}")
    if value < 0 or value > U64_MAX:
        raise ValueError(f"{what} must be in [0, 2**64 - 1], got {value}")
    return value


class SplitMix64:
    """SplitMix64 seed expander."""

    def __init__(self, seed: int):
        self.state = check_u64(seed, "seed")

    def next(self) -> int:
        self.state = (self.state + 0x9E3779B97F4A7C15) & U64_MAX
        z = self.state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & U64_MAX
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & U64_MAX
        return z ^ (z >> 31)


class Xoshiro256:
    """
    xoshiro256++ generator seeded through SplitMix64.

    Properties:
        seed: The u64 seed this instance was created from
        state: The four 64-bit state words (exclusively owned)
    """

    def __init__(self, seed: int):
        self.seed = check_u64(seed, "seed")
        expander = SplitMix64(seed)
        self.state: List[int] = [expander.next() for _ in range(4)]

    def next(self) -> int:
        """Return the next raw u64 from the stream."""
        s = self.state
        result = (_rotl((s[0] + s[3]) & U64_MAX, 23) + s[0]) & U64_MAX
        t = (s[1] << 17) & U64_MAX

        s[2] ^= s[0]
        s[3] ^= s[1]
        s[1] ^= s[2]
        s[0] ^= s[3]

        s[2] ^= t
        s[3] = _rotl(s[3], 45)

        return result

    def random(self) -> float:
        """Return the next uniform float in [0, 1)."""
        return to_unit_interval(self.next())


def to_unit_interval(raw: int) -> float:
    """
    Map a raw u64 onto [0, 1).

    The raw value is divided by U64_MAX. Drawing U64_MAX itself is
    corrected to U64_MAX - 1 first; because values that close to U64_MAX
    still round to 1.0 in binary64, the result is also capped at the
    largest float below 1.0.

    Args:
        raw: Unsigned 64-bit integer

    Returns:
        Float in [0, 1), never exactly 1.0
    """
    check_u64(raw, "raw")
    if raw == U64_MAX:
        raw -= 1
    return min(raw / _U64_SCALE, _LARGEST_BELOW_ONE)


def select_index(uniform: float, count: int) -> int:
    """
    Map a uniform draw in [0, 1) to an index in [0, count).

    Args:
        uniform: Float in [0, 1)
        count: Number of candidates (must be positive)

    Returns:
        floor(uniform * count), never equal to count
    """
    if count <= 0:
        raise ValueError(f"count must be positive, got {count}")
    if not 0.0 <= uniform < 1.0:
        raise ValueError(f"uniform must be in [0, 1), got {uniform}")
    index = int(uniform * count)
    # uniform * count can round up to count for uniforms just below 1.0
    return min(index, count - 1)
