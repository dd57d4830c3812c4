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
State Space Model Base Class (Layer 1)
======================================

Abstract base class for all discrete-time state space models of the form:

    x[k+1] = f(x[k]) + ω[k],    ω[k] ~ Ω
    y[k]   = g(x[k]) + δ[k],    δ[k] ~ Δ

where:
    - x[k] ∈ ℝⁿˣ: state (latent, unobserved)
    - y[k] ∈ ℝⁿʸ: observation
    - f: state transition function
    - g: observation (emission) function
    - Ω: state noise distribution
    - Δ: observation noise distribution

There are no control inputs and noise is linearly additive.

States and observations are always vectors; a scalar state is a vector of
length 1. A batch of states is a matrix whose columns are independent
members.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ssmodels.exceptions import NotImplementedOperationError
from ssmodels.noise import NoiseGenerator
from ssmodels.types.core import (
    ArrayLike,
    ObservationVector,
    RandomSource,
    StateVector,
)
from ssmodels.types.model_info import ModelInfo
from ssmodels.types.trajectories import ModelDimensions, TrajectorySample


class StateSpaceModel(ABC):
    """
    Abstract base class for state space models.

    Subclasses must implement:
    1. state_dim (property): Length of the state vector
    2. observation_dim (property): Length of the observation vector
    3. transition(x): Noise-free next state f(x)
    4. emission(x): Noise-free observation g(x)
    5. state_noise(): Distribution of ω
    6. observation_noise(): Distribution of δ

    A subclass missing any of these cannot be instantiated (TypeError). The
    abstract bodies raise NotImplementedOperationError if reached through
    ``super()``.

    Batch Contract
    --------------
    ``transition`` and ``emission`` must accept both a single state (nx,)
    and a batch (nx, n_batch), acting column-wise on batches. Models written
    purely with matrix operations (``F @ x``) or elementwise NumPy ufuncs
    satisfy this for free.

    Additional concrete methods provided:
    - dims, dim(kind): Dimension accessors
    - dtype: Numeric element type (float64 unless overridden)
    - sample(), sample_into(): Trajectory sampling via the sampling engine
    - get_info(): Summary dictionary

    Examples
    --------
    >>> class RandomWalk(StateSpaceModel):
    ...     def __init__(self, sigma=1.0):
    ...         self.sigma = sigma
    ...
    ...     @property
    ...     def state_dim(self):
    ...         return 1
    ...
    ...     @property
    ...     def observation_dim(self):
    ...         return 1
    ...
    ...     def transition(self, x):
    ...         return x
    ...
    ...     def emission(self, x):
    ...         return x
    ...
    ...     def state_noise(self):
    ...         return GaussianNoise([[self.sigma ** 2]])
    ...
    ...     def observation_noise(self):
    ...         return ZeroNoise(1)
    >>>
    >>> states, observations = RandomWalk().sample(np.array([0.0]), n_steps=100, rng=0)
    >>> states.shape
    (1, 101)
    """

    # =========================================================================
    # Abstract Properties (MUST be implemented by subclasses)
    # =========================================================================

    @property
    @abstractmethod
    def state_dim(self) -> int:
        """
        Length nx of the state vector.

        Returns
        -------
        int
            Positive state dimension
        """
        raise NotImplementedOperationError("state_dim", self)

    @property
    @abstractmethod
    def observation_dim(self) -> int:
        """
        Length ny of the observation vector.

        Independent of ``state_dim``.

        Returns
        -------
        int
            Positive observation dimension
        """
        raise NotImplementedOperationError("observation_dim", self)

    # =========================================================================
    # Abstract Methods (MUST be implemented by subclasses)
    # =========================================================================

    @abstractmethod
    def transition(self, x: StateVector) -> StateVector:
        """
        State transition function f: x[k] -> noise-free x[k+1].

        Parameters
        ----------
        x : StateVector
            Current state (nx,) or batch (nx, n_batch)

        Returns
        -------
        StateVector
            Same shape as x
        """
        raise NotImplementedOperationError("transition", self)

    @abstractmethod
    def emission(self, x: StateVector) -> ObservationVector:
        """
        Observation function g: x[k] -> noise-free y[k].

        Parameters
        ----------
        x : StateVector
            State (nx,) or batch (nx, n_batch)

        Returns
        -------
        ObservationVector
            (ny,) or (ny, n_batch)
        """
        raise NotImplementedOperationError("emission", self)

    @abstractmethod
    def state_noise(self) -> NoiseGenerator:
        """
        State noise generator Ω over ℝⁿˣ.

        Returns
        -------
        NoiseGenerator
            Generator with ``dim == state_dim``

        Notes
        -----
        The sampling engine calls this once per sampling call and reuses the
        generator for every step.
        """
        raise NotImplementedOperationError("state_noise", self)

    @abstractmethod
    def observation_noise(self) -> NoiseGenerator:
        """
        Observation noise generator Δ over ℝⁿʸ.

        Returns
        -------
        NoiseGenerator
            Generator with ``dim == observation_dim``
        """
        raise NotImplementedOperationError("observation_noise", self)

    # =========================================================================
    # Dimension Accessors
    # =========================================================================

    @property
    def dims(self) -> ModelDimensions:
        """
        Lengths of the state and observation vectors.

        Examples
        --------
        >>> model.dims
        ModelDimensions(state=3, observation=1)
        """
        return ModelDimensions(state=self.state_dim, observation=self.observation_dim)

    def dim(self, kind: str) -> int:
        """
        Length of the state or observation vector.

        Parameters
        ----------
        kind : str
            ``"state"``, or ``"observation"`` / ``"obs"``

        Raises
        ------
        ValueError
            For any other kind
        """
        if kind == "state":
            return self.state_dim
        if kind in ("observation", "obs"):
            return self.observation_dim
        raise ValueError(f"Unknown dimension kind '{kind}'. Use 'state', 'observation' or 'obs'.")

    @property
    def dtype(self) -> np.dtype:
        """Numeric element type of the state. Default: float64."""
        return np.dtype(np.float64)

    # =========================================================================
    # Sampling (delegates to ssmodels.sampling)
    # =========================================================================

    def sample(
        self,
        x0: ArrayLike,
        n_steps: int,
        rng: RandomSource = None,
    ) -> TrajectorySample:
        """
        Sample a trajectory (x0 of shape (nx,)) or a batch of trajectories
        (x0 of shape (nx, n_batch)).

        See ``ssmodels.sampling.sample`` for details.
        """
        from ssmodels.sampling.trajectory_sampler import sample

        return sample(self, x0, n_steps, rng=rng)

    def sample_into(
        self,
        x0: ArrayLike,
        out_y: np.ndarray,
        out_x: Optional[np.ndarray] = None,
        rng: RandomSource = None,
    ) -> None:
        """
        Sample into preallocated containers.

        See ``ssmodels.sampling.sample_into`` for details.
        """
        from ssmodels.sampling.trajectory_sampler import sample_into

        sample_into(self, x0, out_y, out_x=out_x, rng=rng)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def is_linear(self) -> bool:
        """
        Return True if transition and emission are linear maps.

        Default: False. Override in linear subclasses.
        """
        return False

    @property
    def is_gaussian(self) -> bool:
        """
        Return True if both noise generators are Gaussian.

        Default: False. Override in Gaussian subclasses.
        """
        return False

    def get_info(self) -> ModelInfo:
        """
        Summary of the model.

        Examples
        --------
        >>> info = model.get_info()
        >>> info['class_name'], info['state_dim'], info['is_gaussian']
        ('LinearGaussianStateSpaceModel', 3, True)
        """
        return ModelInfo(
            class_name=self.__class__.__name__,
            state_dim=self.state_dim,
            observation_dim=self.observation_dim,
            dtype=str(self.dtype),
            is_linear=self.is_linear,
            is_gaussian=self.is_gaussian,
        )

    def __repr__(self) -> str:
        """
        String representation of the model.

        Examples
        --------
        >>> print(model)
        LinearGaussianStateSpaceModel(nx=3, ny=1, dtype=float64)
        """
        class_name = self.__class__.__name__
        return f"{class_name}(nx={self.state_dim}, ny={self.observation_dim}, dtype={self.dtype})"
