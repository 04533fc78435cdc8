"""Seeded value-noise primitive for edge perturbation.

The edge reconstructor only relies on the contract *same (coordinate,
channel) ⇒ same value*; this module satisfies it with OpenSimplex noise.
The coordinate runs along an edge and the channel (usually an edge hash)
selects an independent lane of the 2-D noise field, so two edges never
share a displacement profile by accident.

Functions
---------
- :meth:`ValueNoise.sample` — single-octave noise in ``[-1, 1]``
- :meth:`ValueNoise.fbm` — Fractal Brownian Motion along one lane
"""

from __future__ import annotations

from opensimplex import OpenSimplex

from .hashing import bit_field

DEFAULT_NOISE_SEED = 12345

# Spacing between channel lanes in noise space.
_LANE_SPACING = 7.31
_LANE_BITS = 12


class ValueNoise:
    """Continuous, deterministic 1-D noise with independent channels.

    Each instance owns its own OpenSimplex generator, so concurrent
    generation passes never share permutation state.
    """

    def __init__(self, seed: int = DEFAULT_NOISE_SEED) -> None:
        self.seed = seed
        self._gen = OpenSimplex(seed=seed)

    def _lane(self, channel: int) -> float:
        return bit_field(channel, 0, _LANE_BITS) * _LANE_SPACING

    def sample(self, x: float, channel: int = 0) -> float:
        """Noise value at *x* on lane *channel*, approximately in ``[-1, 1]``."""
        return float(self._gen.noise2(x, self._lane(channel)))

    def fbm(
        self,
        x: float,
        channel: int = 0,
        *,
        octaves: int = 3,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ) -> float:
        """Fractal Brownian Motion — layered octaves, normalised to ``[-1, 1]``.

        Parameters
        ----------
        x : float
            Sample coordinate along the lane.
        channel : int
            Lane selector.
        octaves : int
            Number of noise layers (more = finer detail).
        lacunarity : float
            Frequency multiplier between octaves.
        persistence : float
            Amplitude multiplier between octaves.
        """
        lane = self._lane(channel)
        value = 0.0
        amplitude = 1.0
        freq = 1.0
        max_amp = 0.0
        for _ in range(octaves):
            value += amplitude * self._gen.noise2(x * freq, lane)
            max_amp += amplitude
            amplitude *= persistence
            freq *= lacunarity
        return float(value / max_amp) if max_amp > 0 else 0.0
