"""
Power-law phase noise generation for synthetic clock records.
"""

from typing import Optional

import numpy as np
from scipy.signal import fftconvolve

from .conversion import phase_to_freq

NOISE_TYPES = {
    2: "white PM",
    1: "flicker PM",
    0: "white FM",
    -1: "flicker FM",
    -2: "random-walk FM",
}


def kasdin_coefficients(d: float, N: int) -> np.ndarray:
    """
    Impulse response of the fractional integrator (1 - z^-1)^-d.

    h[0] = 1, h[k] = h[k-1] * (d + k - 1) / k
    """
    h = np.empty(N, dtype=float)
    h[0] = 1.0
    k = np.arange(1, N)
    h[1:] = np.cumprod((d + k - 1) / k)
    return h


class PowerLawNoise:
    """
    Power-law noise with fractional frequency spectrum S_y(f) ∝ f^alpha.

    Phase is produced by passing white Gaussian noise through a fractional
    integrator of order d = (2 - alpha) / 2 (Kasdin & Walter), so white PM
    (alpha=2) is the white noise itself, white FM (alpha=0) its cumulative
    sum and random-walk FM (alpha=-2) its double cumulative sum.

    Attributes:
    -----------
    alpha : int
        Frequency-noise exponent, one of 2, 1, 0, -1, -2
    N : int
        Number of phase samples
    sigma : float
        Standard deviation of the white driving noise (phase units)
    tau0 : float
        Sampling interval (s)
    """

    def __init__(self, alpha: int, N: int, sigma: float = 1.0, tau0: float = 1.0):
        """
        Initialize noise parameters.

        Parameters:
        -----------
        alpha : int
            Frequency-noise exponent, one of 2, 1, 0, -1, -2
        N : int
            Number of phase samples
        sigma : float
            Standard deviation of the white driving noise (default: 1.0)
        tau0 : float
            Sampling interval (default: 1.0)
        """
        if alpha not in NOISE_TYPES:
            raise ValueError(f"alpha must be one of {sorted(NOISE_TYPES)}")
        if N <= 0:
            raise ValueError("N must be positive")
        if sigma <= 0:
            raise ValueError("sigma must be positive")
        if tau0 <= 0:
            raise ValueError("tau0 must be positive")

        self.alpha = int(alpha)
        self.N = int(N)
        self.sigma = float(sigma)
        self.tau0 = float(tau0)

        self._t = None

    @property
    def kind(self) -> str:
        """Conventional name of the noise type."""
        return NOISE_TYPES[self.alpha]

    @property
    def d(self) -> float:
        """Fractional integration order applied to the white driving noise."""
        return (2 - self.alpha) / 2.0

    @property
    def t(self) -> np.ndarray:
        """Time array (s)."""
        if self._t is None:
            self._t = np.arange(self.N) * self.tau0
        return self._t

    def generate(
        self,
        rng: Optional[np.random.Generator] = None,
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Generate a noise record.

        Parameters:
        -----------
        rng : np.random.Generator, optional
            Random number generator. If None, default RNG is used.

        Returns:
        --------
        t : np.ndarray
            Time array (s)
        x : np.ndarray
            Phase samples, length N
        y : np.ndarray
            Fractional frequency samples, length N - 1
        """
        if rng is None:
            rng = np.random.default_rng()

        w = rng.normal(0.0, self.sigma, size=self.N)
        if self.d == 0:
            x = w
        else:
            x = fftconvolve(w, kasdin_coefficients(self.d, self.N))[: self.N]

        return self.t, x, phase_to_freq(x, self.tau0)
