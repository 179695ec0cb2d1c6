"""
2D noise sources for terrain synthesis.

Data Contract:
---------------
- Inputs:
    - prng: the garden's seeded stream; noise seeds are drawn from it.
    - x, y: scalars or NumPy arrays of the same shape.
- Outputs:
    - Noise values approximately in [-1, 1], same shape as the input.
- Invariants: Given the same stream state, the output is deterministic.
"""

from typing import Protocol, Union

import numpy as np
import structlog
from opensimplex import OpenSimplex

from .alea_prng import AleaPRNG

logger = structlog.get_logger()

ArrayLike = Union[float, np.ndarray]

# Sample a lattice when it is at most this many times larger than the input
_LATTICE_FACTOR = 4


class NoiseSourceError(RuntimeError):
    """Raised when a noise source cannot be constructed."""


class NoiseSource(Protocol):
    def noise(self, x: ArrayLike, y: ArrayLike) -> ArrayLike: ...


class SimplexNoise:
    """
    Seeded 2D OpenSimplex noise.

    The generator seed is a single 32-bit draw from the garden stream, so
    the noise field is fixed by the garden seed.
    """

    name = "simplex"

    def __init__(self, prng: AleaPRNG):
        if prng is None:
            raise NoiseSourceError("Simplex noise needs a seeded stream")
        self.seed = int(prng.random() * 0x100000000)
        self.generator = OpenSimplex(seed=self.seed)

    def noise(self, x: ArrayLike, y: ArrayLike) -> ArrayLike:
        """Sample noise at (x, y); returns a float for scalar input."""
        if np.ndim(x) == 0 and np.ndim(y) == 0:
            return float(self.generator.noise2(float(x), float(y)))

        xin, yin = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
        flat_x = xin.ravel()
        flat_y = yin.ravel()

        ux, ix = np.unique(flat_x, return_inverse=True)
        uy, iy = np.unique(flat_y, return_inverse=True)

        if ux.size * uy.size <= _LATTICE_FACTOR * flat_x.size:
            # Grid input such as the terrain plane: sample the lattice once, then gather
            lattice = self.generator.noise2array(ux, uy)
            values = lattice[iy.ravel(), ix.ravel()]
        else:
            values = np.fromiter(
                (self.generator.noise2(float(a), float(b)) for a, b in zip(flat_x, flat_y)),
                dtype=np.float64,
                count=flat_x.size,
            )

        return np.asarray(values, dtype=np.float64).reshape(xin.shape)


class RandomNoise:
    """
    Fallback noise: independent uniform values in [-1, 1].

    Not continuous, but keeps generation going on the same seeded stream.
    """

    name = "random"

    def __init__(self, prng: AleaPRNG):
        self.prng = prng

    def noise(self, x: ArrayLike, y: ArrayLike) -> ArrayLike:
        shape = np.broadcast(np.asarray(x), np.asarray(y)).shape
        if shape == ():
            return self.prng.random() * 2.0 - 1.0
        count = int(np.prod(shape))
        values = np.fromiter((self.prng.random() for _ in range(count)), dtype=np.float64, count=count)
        return (values * 2.0 - 1.0).reshape(shape)


NOISE_SOURCES = {
    SimplexNoise.name: SimplexNoise,
    RandomNoise.name: RandomNoise,
}


def create_noise_source(kind: str, prng: AleaPRNG) -> NoiseSource:
    """
    Build the requested noise source on the given stream.

    Falls back to RandomNoise if the source is unknown or fails to build.
    """
    factory = NOISE_SOURCES.get(kind)
    if factory is None:
        logger.warning("Unknown noise source, falling back to random noise", requested=kind)
        return RandomNoise(prng)

    try:
        return factory(prng)
    except Exception as e:
        logger.warning("Noise source unavailable, falling back to random noise", requested=kind, error=str(e))
        return RandomNoise(prng)


def fractal_noise(
    source: NoiseSource,
    x: np.ndarray,
    y: np.ndarray,
    octaves: int = 5,
    frequency: float = 0.015,
    lacunarity: float = 2.1,
    persistence: float = 0.5,
) -> np.ndarray:
    """Sum several octaves of noise, each finer and weaker than the last."""
    total = np.zeros(np.broadcast(np.asarray(x), np.asarray(y)).shape, dtype=np.float64)
    amplitude = 1.0

    for _ in range(octaves):
        total += np.asarray(source.noise(x * frequency, y * frequency)) * amplitude
        amplitude *= persistence
        frequency *= lacunarity

    return total
