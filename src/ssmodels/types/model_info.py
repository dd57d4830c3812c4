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
Model Information Types

Result dictionaries describing a model:

- ModelInfo: returned by ``StateSpaceModel.get_info()``
- StabilityInfo: returned by ``LinearGaussianStateSpaceModel.check_stability()``
"""

import numpy as np
from typing_extensions import TypedDict


class ModelInfo(TypedDict):
    """
    Summary of a state space model.

    Examples
    --------
    >>> info: ModelInfo = model.get_info()
    >>> info['state_dim'], info['observation_dim']
    (3, 1)
    """

    class_name: str
    state_dim: int
    observation_dim: int
    dtype: str
    is_linear: bool
    is_gaussian: bool


class StabilityInfo(TypedDict):
    """
    Eigenvalue-based stability of a linear transition x[k+1] = F·x[k].

    Examples
    --------
    >>> stability: StabilityInfo = model.check_stability()
    >>> if stability['is_stable']:
    ...     print(f"Stable with ρ={stability['spectral_radius']:.3f}")
    """

    eigenvalues: np.ndarray  # Eigenvalues of F
    magnitudes: np.ndarray  # |λ|
    spectral_radius: float  # max|λ|
    is_stable: bool  # all |λ| < 1
    is_marginally_stable: bool  # max|λ| ≈ 1
    is_unstable: bool  # any |λ| > 1


__all__ = ["ModelInfo", "StabilityInfo"]
