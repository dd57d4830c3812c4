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
ssmodels - Discrete-Time State Space Models
===========================================

Define state space models

    x[k+1] = f(x[k]) + ω[k]
    y[k]   = g(x[k]) + δ[k]

and sample state and observation trajectories from them, one at a time or
as a batch.

Quick Start
-----------
>>> import numpy as np
>>> import ssmodels
>>>
>>> model = ssmodels.create_constant_acceleration_model(dt=0.01)
>>> states, observations = model.sample(np.zeros(3), n_steps=100, rng=0)
>>> states.shape, observations.shape
((3, 101), (1, 101))

Subpackages
-----------
- systems: StateSpaceModel, GaussianStateSpaceModel and built-in models
- sampling: Trajectory sampling engine
- noise: Noise generators
- types: Semantic array aliases and result containers
- utils: Validation and random-source helpers
"""

from ssmodels.exceptions import (
    CovarianceError,
    DimensionMismatchError,
    NotImplementedOperationError,
    ValidationError,
)
from ssmodels.noise import (
    DistributionNoise,
    GaussianNoise,
    IndependentNoise,
    NoiseGenerator,
    ZeroNoise,
)
from ssmodels.sampling import (
    observation_step,
    sample,
    sample_batch,
    sample_batch_into,
    sample_into,
    sample_observations,
    sample_trajectory,
    sample_trajectory_into,
    state_step,
    step,
)
from ssmodels.systems import (
    DoubleWellStateSpaceModel,
    GaussianStateSpaceModel,
    LinearGaussianStateSpaceModel,
    LinGsnSSM,
    StateSpaceModel,
    create_constant_acceleration_model,
    create_constant_velocity_model,
)
from ssmodels.types import ModelDimensions, TrajectorySample

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Models
    "StateSpaceModel",
    "GaussianStateSpaceModel",
    "LinearGaussianStateSpaceModel",
    "LinGsnSSM",
    "DoubleWellStateSpaceModel",
    "create_constant_acceleration_model",
    "create_constant_velocity_model",
    # Noise
    "NoiseGenerator",
    "GaussianNoise",
    "DistributionNoise",
    "IndependentNoise",
    "ZeroNoise",
    # Sampling
    "state_step",
    "observation_step",
    "step",
    "sample_trajectory_into",
    "sample_batch_into",
    "sample_into",
    "sample_trajectory",
    "sample_batch",
    "sample",
    "sample_observations",
    # Results
    "TrajectorySample",
    "ModelDimensions",
    # Exceptions
    "NotImplementedOperationError",
    "ValidationError",
    "DimensionMismatchError",
    "CovarianceError",
]
