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
Linear Gaussian State Space Model
=================================

State space model with linear dynamics, additive Gaussian noise and linear,
Gaussian observations:

    x[k+1] = F·x[k] + w[k],    w[k] ~ N(0, Q)
    y[k]   = H·x[k] + v[k],    v[k] ~ N(0, R)

Matrices
--------
- F (nx × nx): State evolution (transition) matrix
- Q (nx × nx): Covariance of the state evolution noise
- H (ny × nx): Observation matrix
- R (ny × ny): Covariance of the observation noise

Because transition and emission are plain matrix products, batches of states
(nx, n_batch) are propagated column-wise without any special handling.

Factories
---------
- create_constant_acceleration_model: position/velocity/acceleration (nx=3)
- create_constant_velocity_model: position/velocity (nx=2)

Examples
--------
>>> model = LinGsnSSM(
...     F=[[1.0, 0.1], [0.0, 1.0]],
...     Q=0.01 * np.eye(2),
...     H=[[1.0, 0.0]],
...     R=[[1.0]],
... )
>>> states, observations = model.sample(np.zeros(2), n_steps=100, rng=0)
>>> states.shape, observations.shape
((2, 101), (1, 101))
"""

import logging

import numpy as np
import scipy.linalg

from ssmodels.exceptions import DimensionMismatchError
from ssmodels.systems.base.gaussian_state_space_model import GaussianStateSpaceModel
from ssmodels.types.core import (
    ArrayLike,
    CovarianceMatrix,
    DTypeLike,
    ObservationMatrix,
    ObservationVector,
    StateVector,
    TransitionMatrix,
)
from ssmodels.types.model_info import StabilityInfo
from ssmodels.utils.validation import DEFAULT_COVARIANCE_ATOL, validate_covariance

logger = logging.getLogger(__name__)


class LinearGaussianStateSpaceModel(GaussianStateSpaceModel):
    """
    Linear state space model with additive Gaussian noise.

    Parameters
    ----------
    F : ArrayLike
        State evolution matrix (nx, nx)
    Q : ArrayLike
        State noise covariance (nx, nx), symmetric PSD. A scalar is read
        as (1, 1).
    H : ArrayLike
        Observation matrix (ny, nx). A 1-D row is read as (1, nx).
    R : ArrayLike
        Observation noise covariance (ny, ny), symmetric PSD. A scalar is
        read as (1, 1).
    dtype : DTypeLike, optional
        Element type shared by all four matrices. Default: the common
        promoted type of the inputs, widened to float64 if it is integral.
        Must be a real floating type.
    atol : float
        Tolerance for the covariance symmetry/PSD checks

    Raises
    ------
    DimensionMismatchError
        If F is not square, Q is not (nx, nx), H does not have nx columns,
        or R is not (ny, ny)
    CovarianceError
        If Q or R is not finite, symmetric and positive semi-definite
    TypeError
        If dtype (given or inferred) is not a real floating type

    Notes
    -----
    All four matrices are validated eagerly and stored as read-only copies,
    so the model is immutable once constructed and can be shared between
    concurrent sampling calls.

    Examples
    --------
    Scalar random walk observed with noise:

    >>> model = LinearGaussianStateSpaceModel(F=[[1.0]], Q=[[0.1]], H=[[1.0]], R=[[1.0]])
    >>> model.dims
    ModelDimensions(state=1, observation=1)

    Single precision:

    >>> model32 = LinearGaussianStateSpaceModel(F, Q, H, R, dtype=np.float32)
    >>> model32.dtype
    dtype('float32')
    """

    def __init__(
        self,
        F: ArrayLike,
        Q: ArrayLike,
        H: ArrayLike,
        R: ArrayLike,
        dtype: DTypeLike = None,
        atol: float = DEFAULT_COVARIANCE_ATOL,
    ):
        F, Q, H, R = (np.asarray(m) for m in (F, Q, H, R))
        if dtype is None:
            dtype = np.result_type(F, Q, H, R)
            if not np.issubdtype(dtype, np.inexact):
                dtype = np.float64
        self._dtype = np.dtype(dtype)
        if not np.issubdtype(self._dtype, np.floating):
            raise TypeError(
                f"{type(self).__name__} requires a real floating dtype, got {self._dtype}"
            )

        F = np.array(F, dtype=self._dtype)
        H = np.atleast_2d(np.array(H, dtype=self._dtype))
        Q = np.atleast_2d(np.array(Q, dtype=self._dtype))
        R = np.atleast_2d(np.array(R, dtype=self._dtype))

        if F.ndim != 2 or F.shape[0] != F.shape[1]:
            raise DimensionMismatchError(
                f"Dimension mismatch: transition matrix F must be square, got shape {F.shape}"
            )
        nx = F.shape[0]
        if H.ndim != 2 or H.shape[1] != nx:
            raise DimensionMismatchError(
                f"Dimension mismatch: observation matrix H column count "
                f"({H.shape[-1]}) != transition matrix F row count ({nx})"
            )
        ny = H.shape[0]

        Q = validate_covariance(Q, nx, "Q", atol=atol)
        R = validate_covariance(R, ny, "R", atol=atol)

        for matrix in (F, Q, H, R):
            matrix.flags.writeable = False
        self._F, self._Q, self._H, self._R = F, Q, H, R

        logger.debug("Constructed %s with nx=%d, ny=%d, dtype=%s", type(self).__name__, nx, ny, self._dtype)

    # =========================================================================
    # Dimensions
    # =========================================================================

    @property
    def state_dim(self) -> int:
        return self._F.shape[0]

    @property
    def observation_dim(self) -> int:
        return self._H.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    # =========================================================================
    # Model Matrices
    # =========================================================================

    def transition_matrix(self) -> TransitionMatrix:
        """Return the state evolution matrix F (read-only)."""
        return self._F

    def observation_matrix(self) -> ObservationMatrix:
        """Return the observation matrix H (read-only)."""
        return self._H

    def state_noise_cov(self) -> CovarianceMatrix:
        return self._Q

    def observation_noise_cov(self) -> CovarianceMatrix:
        return self._R

    # =========================================================================
    # Dynamics
    # =========================================================================

    def transition(self, x: StateVector) -> StateVector:
        """F·x for a state (nx,) or a batch (nx, n_batch)."""
        return self._F @ x

    def emission(self, x: StateVector) -> ObservationVector:
        """H·x for a state (nx,) or a batch (nx, n_batch)."""
        return self._H @ x

    @property
    def is_linear(self) -> bool:
        return True

    def check_stability(self, tolerance: float = 1e-10) -> StabilityInfo:
        """
        Stability of the noise-free dynamics x[k+1] = F·x[k].

        Parameters
        ----------
        tolerance : float
            Width of the band around the unit circle counted as marginal

        Returns
        -------
        StabilityInfo
            Eigenvalues of F, their magnitudes and the stability flags

        Examples
        --------
        >>> create_constant_velocity_model(0.1).check_stability()['is_marginally_stable']
        True
        """
        eigenvalues = scipy.linalg.eigvals(self._F)
        magnitudes = np.abs(eigenvalues)
        spectral_radius = float(np.max(magnitudes))
        return StabilityInfo(
            eigenvalues=eigenvalues,
            magnitudes=magnitudes,
            spectral_radius=spectral_radius,
            is_stable=bool(spectral_radius < 1.0 - tolerance),
            is_marginally_stable=bool(abs(spectral_radius - 1.0) <= tolerance),
            is_unstable=bool(spectral_radius > 1.0 + tolerance),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, LinearGaussianStateSpaceModel):
            return NotImplemented
        return self._dtype == other._dtype and all(
            a.shape == b.shape and np.array_equal(a, b)
            for a, b in zip(
                (self._F, self._Q, self._H, self._R),
                (other._F, other._Q, other._H, other._R),
            )
        )

    __hash__ = None


LinGsnSSM = LinearGaussianStateSpaceModel
"""Short alias for LinearGaussianStateSpaceModel."""


# ============================================================================
# Factories
# ============================================================================


def create_constant_acceleration_model(
    dt: float,
    dtype: DTypeLike = None,
    measurement_variance: float = 1.0,
) -> LinearGaussianStateSpaceModel:
    """
    Create a constant-acceleration (jerk-driven) tracking model.

    State [position, velocity, acceleration], observing position only:

        F = [[1, dt, dt²/2],
             [0,  1, dt   ],
             [0,  0, 1    ]]

        Q = [[dt⁵/20, dt⁴/8, dt³/6],
             [dt⁴/8,  dt³/3, dt²/2],
             [dt³/6,  dt²/2, dt   ]]

        H = [[1, 0, 0]],  R = [[measurement_variance]]

    Parameters
    ----------
    dt : float
        Sampling period (must be positive)
    dtype : DTypeLike, optional
        Element type of the model matrices
    measurement_variance : float, default=1.0
        Position measurement variance

    Returns
    -------
    LinearGaussianStateSpaceModel

    Examples
    --------
    >>> model = create_constant_acceleration_model(0.01)
    >>> x0 = np.random.default_rng(0).standard_normal((3, 10))
    >>> states, observations = model.sample(x0, n_steps=100, rng=1)
    >>> states.shape
    (3, 10, 101)
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    F = np.array(
        [
            [1.0, dt, 0.5 * dt**2],
            [0.0, 1.0, dt],
            [0.0, 0.0, 1.0],
        ]
    )
    Q = np.array(
        [
            [dt**5 / 20, dt**4 / 8, dt**3 / 6],
            [dt**4 / 8, dt**3 / 3, dt**2 / 2],
            [dt**3 / 6, dt**2 / 2, dt],
        ]
    )
    H = np.array([[1.0, 0.0, 0.0]])
    R = np.array([[measurement_variance]])
    return LinearGaussianStateSpaceModel(F, Q, H, R, dtype=dtype)


def create_constant_velocity_model(
    dt: float,
    dtype: DTypeLike = None,
    measurement_variance: float = 1.0,
) -> LinearGaussianStateSpaceModel:
    """
    Create a constant-velocity (acceleration-driven) tracking model.

    State [position, velocity], observing position only:

        F = [[1, dt],      Q = [[dt³/3, dt²/2],
             [0,  1]]           [dt²/2, dt   ]]

        H = [[1, 0]],  R = [[measurement_variance]]

    Parameters
    ----------
    dt : float
        Sampling period (must be positive)
    dtype : DTypeLike, optional
        Element type of the model matrices
    measurement_variance : float, default=1.0
        Position measurement variance

    Returns
    -------
    LinearGaussianStateSpaceModel
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    F = np.array([[1.0, dt], [0.0, 1.0]])
    Q = np.array([[dt**3 / 3, dt**2 / 2], [dt**2 / 2, dt]])
    H = np.array([[1.0, 0.0]])
    R = np.array([[measurement_variance]])
    return LinearGaussianStateSpaceModel(F, Q, H, R, dtype=dtype)


__all__ = [
    "LinearGaussianStateSpaceModel",
    "LinGsnSSM",
    "create_constant_acceleration_model",
    "create_constant_velocity_model",
]
