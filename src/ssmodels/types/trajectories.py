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
Trajectory and Dimension Types

Defines the containers returned by the sampling engine and by the model
dimension accessors.

Shape Conventions
-----------------
Trajectories are STATE-MAJOR with time on the LAST axis:

- Single trajectory: states (nx, n_steps+1), observations (ny, n_steps+1)
- Batched trajectories: states (nx, n_batch, n_steps+1),
  observations (ny, n_batch, n_steps+1)

Slot 0 always holds the initial state and the "zeroth" observation sampled
from it, so a request for ``n_steps`` additional steps returns
``n_steps + 1`` time slots.
"""

from typing import NamedTuple

import numpy as np

StateTrajectory = np.ndarray
"""
State trajectory over time.

Shapes:
- Single trajectory: (nx, n_steps+1), column k is x[k]
- Batched trajectories: (nx, n_batch, n_steps+1), [:, i, k] is x⁽ⁱ⁾[k]
"""

ObservationTrajectory = np.ndarray
"""
Observation trajectory over time.

Shapes:
- Single trajectory: (ny, n_steps+1)
- Batched trajectories: (ny, n_batch, n_steps+1)
"""


class TrajectorySample(NamedTuple):
    """
    Result of an allocating sampling call.

    Behaves as a plain ``(states, observations)`` tuple, so both of these
    work:

    >>> states, observations = sample(model, x0, n_steps=100, rng=rng)
    >>> result = sample(model, x0, n_steps=100, rng=rng)
    >>> result.states.shape
    (3, 101)

    Attributes
    ----------
    states : StateTrajectory
        (nx, n_steps+1) or (nx, n_batch, n_steps+1)
    observations : ObservationTrajectory
        (ny, n_steps+1) or (ny, n_batch, n_steps+1)
    """

    states: StateTrajectory
    observations: ObservationTrajectory

    @property
    def n_steps(self) -> int:
        """Number of transitions (time slots minus one)."""
        return self.observations.shape[-1] - 1

    @property
    def is_batched(self) -> bool:
        """True for (dim, n_batch, time) trajectories."""
        return self.observations.ndim == 3

    @property
    def time_steps(self) -> np.ndarray:
        """Integer time indices [0, 1, ..., n_steps]."""
        return np.arange(self.n_steps + 1)


class ModelDimensions(NamedTuple):
    """
    Lengths of the state and observation vectors of a model.

    Examples
    --------
    >>> model.dims
    ModelDimensions(state=3, observation=1)
    >>> nx, ny = model.dims
    """

    state: int
    observation: int


__all__ = [
    "StateTrajectory",
    "ObservationTrajectory",
    "TrajectorySample",
    "ModelDimensions",
]
