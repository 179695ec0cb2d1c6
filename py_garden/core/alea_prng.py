"""
Alea pseudo-random generator used as the garden's seeded stream.

Based on Johannes Baagøe's Alea algorithm. It accepts arbitrary string
seeds (user identities, feature fingerprints), which makes it a good fit
for keying a whole garden off one stable string.
"""

import math


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class AleaPRNG:
    """
    Deterministic stream of floats in [0, 1).

    Every draw advances the stream, so callers that need reproducible
    output must consume it in a fixed order.
    """

    def __init__(self, seed):
        """Initialize with seed string or number."""
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        mash_n = 0xEFC8249D  # 4022871197

        def mash(data):
            nonlocal mash_n
            data = str(data)
            for char in data:
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 -= mash(arg)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(arg)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(arg)
            if self.s2 < 0:
                self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def uniform(self, low: float, high: float) -> float:
        """Draw a float in [low, high)."""
        return low + self.random() * (high - low)

    def jitter(self, spread: float) -> float:
        """Draw a centered offset in [-spread/2, spread/2)."""
        return (self.random() - 0.5) * spread

    def angle(self) -> float:
        """Draw an angle in [0, 2π)."""
        return self.random() * math.pi * 2

    def __repr__(self) -> str:
        return f"AleaPRNG(seed={self.seed!r}, calls={self.call_count})"
