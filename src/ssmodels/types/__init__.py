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
Type definitions for ssmodels.

Semantic aliases for arrays (``core``) and the result containers of the
sampling engine (``trajectories``) and model summaries (``model_info``).
"""

from .core import (
    ArrayLike,
    CovarianceMatrix,
    DTypeLike,
    NoiseVector,
    NumpyArray,
    ObservationMatrix,
    ObservationVector,
    RandomSource,
    StateVector,
    TransitionMatrix,
)
from .model_info import ModelInfo, StabilityInfo
from .trajectories import (
    ModelDimensions,
    ObservationTrajectory,
    StateTrajectory,
    TrajectorySample,
)

__all__ = [
    # Core
    "ArrayLike",
    "NumpyArray",
    "DTypeLike",
    "StateVector",
    "ObservationVector",
    "NoiseVector",
    "TransitionMatrix",
    "ObservationMatrix",
    "CovarianceMatrix",
    "RandomSource",
    # Trajectories
    "StateTrajectory",
    "ObservationTrajectory",
    "TrajectorySample",
    "ModelDimensions",
    # Model information
    "ModelInfo",
    "StabilityInfo",
]
