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
Double-Well State Space Model
=============================

Scalar model with a double-well transition, a rounding observation operator
and non-Gaussian noise on both equations:

    x[k+1] = x[k] - θ·x[k]·(x[k]² - μ) + ω[k],    ω[k] ~ Cauchy(location, scale)
    y[k]   = ceil(x[k]) + δ[k],                   δ[k] ~ Poisson(rate)

For small θ > 0 and μ > 0 the noise-free map has stable fixed points at
x = ±√μ and an unstable one at x = 0. The heavy Cauchy tails occasionally
kick the state from one well into the other.
"""

import logging

import numpy as np
from scipy import stats

from ssmodels.noise import IndependentNoise
from ssmodels.systems.base.state_space_model import StateSpaceModel
from ssmodels.types.core import ObservationVector, StateVector

logger = logging.getLogger(__name__)


class DoubleWellStateSpaceModel(StateSpaceModel):
    """
    Scalar double-well model with Cauchy state noise and Poisson observation
    noise.

    Parameters
    ----------
    theta : float
        Step size of the drift toward the wells
    mu : float
        Squared location of the wells (wells at ±√mu)
    location : float
        Cauchy location of the state noise
    scale : float
        Cauchy scale of the state noise (positive)
    rate : float
        Poisson rate of the observation noise (non-negative)

    Examples
    --------
    >>> model = DoubleWellStateSpaceModel()
    >>> states, observations = model.sample(np.array([1.0]), n_steps=100, rng=0)
    >>> observations.shape
    (1, 101)
    """

    state_dim = 1
    observation_dim = 1

    def __init__(
        self,
        theta: float = 0.01,
        mu: float = 1.0,
        location: float = 0.0,
        scale: float = 0.001,
        rate: float = 1.0,
    ):
        if scale <= 0:
            raise ValueError(f"Cauchy scale must be positive, got {scale}")
        if rate < 0:
            raise ValueError(f"Poisson rate must be non-negative, got {rate}")
        self.theta = float(theta)
        self.mu = float(mu)
        self.location = float(location)
        self.scale = float(scale)
        self.rate = float(rate)
        logger.debug(
            "Constructed DoubleWellStateSpaceModel(theta=%g, mu=%g, location=%g, scale=%g, rate=%g)",
            self.theta,
            self.mu,
            self.location,
            self.scale,
            self.rate,
        )

    def transition(self, x: StateVector) -> StateVector:
        x = np.asarray(x)
        return x - self.theta * x * (x**2 - self.mu)

    def emission(self, x: StateVector) -> ObservationVector:
        return np.ceil(x)

    def state_noise(self) -> IndependentNoise:
        return IndependentNoise([stats.cauchy(loc=self.location, scale=self.scale)])

    def observation_noise(self) -> IndependentNoise:
        return IndependentNoise([stats.poisson(mu=self.rate)])

    def fixed_points(self) -> np.ndarray:
        """
        Fixed points of the noise-free transition.

        Returns
        -------
        np.ndarray
            ``[-√mu, 0, √mu]`` for mu > 0, else ``[0]``
        """
        if self.mu > 0:
            root = np.sqrt(self.mu)
            return np.array([-root, 0.0, root])
        return np.array([0.0])


__all__ = ["DoubleWellStateSpaceModel"]
