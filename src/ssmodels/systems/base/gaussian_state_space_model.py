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
Gaussian State Space Model (Layer 2)
====================================

Refines StateSpaceModel with zero-mean Gaussian noise:

    x[k+1] = f(x[k]) + ω[k],    ω[k] ~ N(0, Q)
    y[k]   = g(x[k]) + δ[k],    δ[k] ~ N(0, R)

where Q (nx × nx) and R (ny × ny) are the state and observation noise
covariance matrices (symmetric positive semi-definite).

Subclasses supply Q and R; the noise generators are derived here.
"""

from abc import abstractmethod

import numpy as np

from ssmodels.exceptions import NotImplementedOperationError
from ssmodels.noise import GaussianNoise
from ssmodels.systems.base.state_space_model import StateSpaceModel
from ssmodels.types.core import CovarianceMatrix
from ssmodels.utils.validation import validate_covariance


class GaussianStateSpaceModel(StateSpaceModel):
    """
    State space model with additive zero-mean Gaussian noise.

    Subclasses must implement, in addition to the StateSpaceModel
    dimension, transition and emission members:
    1. state_noise_cov(): Q, shape (nx, nx)
    2. observation_noise_cov(): R, shape (ny, ny)

    Concrete methods provided:
    - state_noise() -> GaussianNoise(Q)
    - observation_noise() -> GaussianNoise(R)

    Examples
    --------
    >>> class ScalarAR1(GaussianStateSpaceModel):
    ...     state_dim = 1
    ...     observation_dim = 1
    ...
    ...     def transition(self, x):
    ...         return 0.9 * x
    ...
    ...     def emission(self, x):
    ...         return x
    ...
    ...     def state_noise_cov(self):
    ...         return np.array([[0.01]])
    ...
    ...     def observation_noise_cov(self):
    ...         return np.array([[0.1]])
    """

    @abstractmethod
    def state_noise_cov(self) -> CovarianceMatrix:
        """
        State noise covariance Q.

        Returns
        -------
        CovarianceMatrix
            (nx, nx), symmetric positive semi-definite
        """
        raise NotImplementedOperationError("state_noise_cov", self)

    @abstractmethod
    def observation_noise_cov(self) -> CovarianceMatrix:
        """
        Observation noise covariance R.

        Returns
        -------
        CovarianceMatrix
            (ny, ny), symmetric positive semi-definite
        """
        raise NotImplementedOperationError("observation_noise_cov", self)

    def state_noise(self) -> GaussianNoise:
        """
        Return N(0, Q), the state noise distribution.

        Raises
        ------
        DimensionMismatchError
            If Q is not (state_dim, state_dim)
        CovarianceError
            If Q is not finite, symmetric and positive semi-definite
        """
        Q = validate_covariance(np.asarray(self.state_noise_cov()), self.state_dim, "Q")
        return GaussianNoise(Q)

    def observation_noise(self) -> GaussianNoise:
        """
        Return N(0, R), the observation noise distribution.

        Raises
        ------
        DimensionMismatchError
            If R is not (observation_dim, observation_dim)
        CovarianceError
            If R is not finite, symmetric and positive semi-definite
        """
        R = validate_covariance(np.asarray(self.observation_noise_cov()), self.observation_dim, "R")
        return GaussianNoise(R)

    @property
    def is_gaussian(self) -> bool:
        return True
