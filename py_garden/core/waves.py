"""
Ocean surface displacement.

The ocean is two crossed sine waves whose frequency, speed and height
grow with danceability. Displacement is a pure function of position and
elapsed time, so any frame can be reproduced without stored state.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Optional, Union

import numpy as np

from .terrain_generator import plane_vertices

ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class WaveParams:
    """Parameters of the two sine wave components."""

    freq_x: float
    freq_y: float
    speed_x: float
    speed_y: float
    height_x: float
    height_y: float

    @classmethod
    def from_danceability(cls, danceability: float) -> "WaveParams":
        # Higher danceability = faster, choppier, taller waves
        return cls(
            freq_x=0.05 + danceability * 0.15,  # 0.05 to 0.20
            freq_y=0.10 + danceability * 0.20,  # 0.10 to 0.30
            speed_x=0.5 + danceability * 1.5,  # 0.5 to 2.0
            speed_y=0.4 + danceability * 1.2,  # 0.4 to 1.6
            height_x=0.5 + danceability * 1.5,  # 0.5 to 2.0
            height_y=0.3 + danceability * 0.9,  # 0.3 to 1.2
        )

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def wave_height(x: ArrayLike, y: ArrayLike, t: float, params: WaveParams) -> ArrayLike:
    """Surface displacement at (x, y) and time t, floored at zero."""
    wave1 = np.sin(np.multiply(x, params.freq_x) + t * params.speed_x) * params.height_x
    wave2 = np.sin(np.multiply(y, params.freq_y) + t * params.speed_y) * params.height_y
    height = np.maximum(0.0, wave1 + wave2)
    if np.ndim(height) == 0:
        return float(height)
    return height


class OceanSurface:
    """
    The ocean plane around the island.

    update() overwrites every vertex height for the given time; nothing
    carries over between frames.
    """

    def __init__(self, params: WaveParams, size: float = 200.0, segments: int = 32, base_level: float = 0.5):
        self.params = params
        self.size = size
        self.segments = segments
        self.base_level = base_level
        self.x, self.y = plane_vertices(size, segments)
        self.heights = np.zeros_like(self.x)

    @property
    def vertex_count(self) -> int:
        return int(self.x.shape[0])

    def update(self, t: float) -> np.ndarray:
        self.heights[:] = wave_height(self.x, self.y, t, self.params)
        return self.heights

    def heights_at(self, t: float, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Heights at time t without touching the stored surface."""
        heights = wave_height(self.x, self.y, t, self.params)
        if out is not None:
            out[:] = heights
            return out
        return heights
