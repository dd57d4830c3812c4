# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Noise Generators - Additive Noise Distributions
================================================

A noise generator is a distribution over ℝᵈ that the sampling engine draws
from once per time step:

    x[k+1] = f(x[k]) + ω[k],    ω[k] ~ state_noise()
    y[k]   = g(x[k]) + δ[k],    δ[k] ~ observation_noise()

Every generator exposes ``dim`` and ``sample(rng, n=None)``:

- ``sample(rng)`` returns one draw of shape (dim,)
- ``sample(rng, n)`` returns n INDEPENDENT draws of shape (dim, n), one per
  column, matching the (nx, n_batch) batch layout

Provided generators wrap ``scipy.stats`` frozen distributions:

- GaussianNoise: multivariate normal N(mean, cov), singular covariances allowed
- DistributionNoise: any frozen multivariate scipy distribution
- IndependentNoise: product of univariate scipy distributions
- ZeroNoise: always zero (deterministic simulation)

Examples
--------
>>> import numpy as np
>>> from scipy import stats
>>> rng = np.random.default_rng(0)
>>>
>>> GaussianNoise(0.1 * np.eye(2)).sample(rng).shape
(2,)
>>> IndependentNoise([stats.cauchy(0.0, 1e-3)]).sample(rng, 10).shape
(1, 10)
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import numpy as np
from scipy import stats

from ssmodels.types.core import ArrayLike, CovarianceMatrix, NoiseVector, RandomSource
from ssmodels.utils.rng import as_generator


class NoiseGenerator(ABC):
    """
    Abstract distribution over ℝᵈ used as additive noise.

    Subclasses implement ``dim`` and ``_draw(rng, n)``; the public
    ``sample()`` handles the random source and the output layout.
    """

    @property
    @abstractmethod
    def dim(self) -> int:
        """Dimension d of the noise vector."""
        pass

    @abstractmethod
    def _draw(self, rng: np.random.Generator, n: int) -> np.ndarray:
        """
        Draw ``n`` independent samples.

        Returns
        -------
        np.ndarray
            Anything reshapeable to (n, dim). scipy squeezes singleton axes,
            so callers never rely on the raw shape.
        """
        pass

    def sample(self, rng: RandomSource = None, n: Optional[int] = None) -> NoiseVector:
        """
        Draw noise.

        Parameters
        ----------
        rng : RandomSource
            Random source (None, seed, or np.random.Generator)
        n : Optional[int]
            Number of independent draws. None draws a single vector.

        Returns
        -------
        NoiseVector
            (dim,) if n is None, else (dim, n)

        Raises
        ------
        ValueError
            If n is negative
        """
        generator = as_generator(rng)
        count = 1 if n is None else int(n)
        if count < 0:
            raise ValueError(f"Number of noise draws must be non-negative, got {n}")
        draws = np.reshape(np.asarray(self._draw(generator, count)), (count, self.dim))
        if n is None:
            return draws[0]
        return draws.T

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(dim={self.dim})"


class GaussianNoise(NoiseGenerator):
    """
    Multivariate normal noise N(mean, cov).

    Parameters
    ----------
    cov : CovarianceMatrix
        Covariance (d, d). Must be symmetric PSD; singular and zero
        matrices are allowed.
    mean : Optional[ArrayLike]
        Mean (d,). Defaults to zero.

    Notes
    -----
    Backed by ``scipy.stats.multivariate_normal(..., allow_singular=True)``.
    A zero covariance yields exactly ``mean`` on every draw.

    Examples
    --------
    >>> noise = GaussianNoise(np.diag([1.0, 0.0]))
    >>> noise.sample(np.random.default_rng(1), 3)[1]
    array([0., 0., 0.])
    """

    def __init__(self, cov: CovarianceMatrix, mean: Optional[ArrayLike] = None):
        cov = np.atleast_2d(np.array(cov, dtype=float))
        if mean is None:
            mean = np.zeros(cov.shape[0])
        mean = np.atleast_1d(np.array(mean, dtype=float))

        self._mean = mean
        self._cov = cov
        self._mean.flags.writeable = False
        self._cov.flags.writeable = False
        self._dist = stats.multivariate_normal(mean=mean, cov=cov, allow_singular=True)

    @property
    def dim(self) -> int:
        return self._mean.shape[0]

    @property
    def mean(self) -> np.ndarray:
        """Mean vector (read-only)."""
        return self._mean

    @property
    def cov(self) -> CovarianceMatrix:
        """Covariance matrix (read-only)."""
        return self._cov

    def _draw(self, rng: np.random.Generator, n: int) -> np.ndarray:
        return self._dist.rvs(size=n, random_state=rng)

    def __repr__(self) -> str:
        return f"GaussianNoise(dim={self.dim})"


class DistributionNoise(NoiseGenerator):
    """
    Noise from an arbitrary frozen multivariate ``scipy.stats`` distribution.

    Parameters
    ----------
    dist : Any
        Frozen distribution with ``rvs(size=..., random_state=...)``
        (e.g. ``stats.multivariate_t(loc, shape, df)``)
    dim : int
        Dimension of one draw

    Examples
    --------
    >>> noise = DistributionNoise(stats.multivariate_t(np.zeros(2), np.eye(2), df=3), dim=2)
    """

    def __init__(self, dist: Any, dim: int):
        if int(dim) < 1:
            raise ValueError(f"Noise dimension must be positive, got {dim}")
        self._dist = dist
        self._dim = int(dim)

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def distribution(self) -> Any:
        """The wrapped scipy distribution."""
        return self._dist

    def _draw(self, rng: np.random.Generator, n: int) -> np.ndarray:
        return self._dist.rvs(size=n, random_state=rng)


class IndependentNoise(NoiseGenerator):
    """
    Product of independent univariate distributions, one per component.

    Parameters
    ----------
    components : Sequence[Any]
        Frozen univariate scipy distributions; component i drives noise
        coordinate i. Discrete distributions (e.g. ``stats.poisson``) are
        allowed.

    Examples
    --------
    >>> noise = IndependentNoise([stats.cauchy(0.0, 0.1), stats.poisson(2)])
    >>> noise.dim
    2
    """

    def __init__(self, components: Sequence[Any]):
        components = list(components)
        if not components:
            raise ValueError("IndependentNoise requires at least one component")
        self._components = tuple(components)

    @property
    def dim(self) -> int:
        return len(self._components)

    @property
    def components(self) -> tuple:
        """The wrapped univariate distributions."""
        return self._components

    def _draw(self, rng: np.random.Generator, n: int) -> np.ndarray:
        columns = [np.reshape(c.rvs(size=n, random_state=rng), (n,)) for c in self._components]
        return np.column_stack(columns).astype(float)


class ZeroNoise(NoiseGenerator):
    """
    Degenerate noise that is always exactly zero.

    Substitute it for a model's generators to obtain the deterministic
    forward iteration x[k+1] = f(x[k]), y[k] = g(x[k]).

    Parameters
    ----------
    dim : int
        Dimension of the zero vector
    """

    def __init__(self, dim: int):
        if int(dim) < 1:
            raise ValueError(f"Noise dimension must be positive, got {dim}")
        self._dim = int(dim)

    @property
    def dim(self) -> int:
        return self._dim

    def _draw(self, rng: np.random.Generator, n: int) -> np.ndarray:
        return np.zeros((n, self._dim))


__all__ = [
    "NoiseGenerator",
    "GaussianNoise",
    "DistributionNoise",
    "IndependentNoise",
    "ZeroNoise",
]
