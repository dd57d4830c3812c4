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
Core Types - Fundamental Building Blocks

Defines the basic types used throughout the package:
- Array types (NumPy only)
- Semantic vector types (state, observation, noise)
- Matrix types (transition, observation, covariance)
- Function signatures for transition and emission maps
- Random source types

Shape Conventions
-----------------
All arrays are STATE-MAJOR (columns are samples or time slots):

- Single state: (nx,)
- Batch of states: (nx, n_batch), column i is batch member i
- Single trajectory: (nx, n_steps+1)
- Batched trajectory: (nx, n_batch, n_steps+1)

Usage
-----
>>> from ssmodels.types.core import StateVector, TransitionMatrix
>>>
>>> def propagate(x: StateVector, F: TransitionMatrix) -> StateVector:
...     return F @ x
"""

from typing import Optional, Union

import numpy as np
from numpy.typing import ArrayLike as NumpyArrayLike

# ============================================================================
# Basic Array Types
# ============================================================================

ArrayLike = NumpyArrayLike
"""
Anything ``np.asarray`` accepts: arrays, nested lists, scalars.

Inputs are converted with ``np.asarray`` at the public boundary; internally
everything is an ``np.ndarray``.
"""

NumpyArray = np.ndarray
"""Pure NumPy array."""

DTypeLike = Union[np.dtype, type, str, None]
"""
Numeric element type.

Examples
--------
>>> dtype: DTypeLike = np.float32
>>> dtype: DTypeLike = "float64"
"""


# ============================================================================
# Vector Types - Semantic Naming by Role
# ============================================================================

StateVector = np.ndarray
"""
State vector x ∈ ℝⁿˣ.

Shapes:
- Single state: (nx,)
- Batched states: (nx, n_batch)

Even a scalar-valued state is a vector of length 1.

Examples
--------
>>> x: StateVector = np.array([0.0, 0.0, 1.0])
>>> x_batch: StateVector = np.zeros((3, 10))
"""

ObservationVector = np.ndarray
"""
Observation vector y ∈ ℝⁿʸ.

Shapes:
- Single observation: (ny,)
- Batched observations: (ny, n_batch)
"""

NoiseVector = np.ndarray
"""
Noise sample.

Shapes:
- Single draw: (dim,)
- n independent draws: (dim, n)
"""


# ============================================================================
# Matrix Types
# ============================================================================

TransitionMatrix = np.ndarray
"""State evolution matrix F (nx, nx) of a linear model."""

ObservationMatrix = np.ndarray
"""Observation matrix H (ny, nx) of a linear model."""

CovarianceMatrix = np.ndarray
"""
Covariance matrix (n, n).

Symmetric positive semi-definite. Zero matrices are allowed and describe
deterministic (noise-free) components.

Examples
--------
>>> Q: CovarianceMatrix = 0.01 * np.eye(3)
>>> R: CovarianceMatrix = np.array([[1.0]])
"""


# ============================================================================
# Random Sources
# ============================================================================

RandomSource = Optional[Union[int, np.random.Generator]]
"""
Random number source accepted by every sampling entry point.

- None: a fresh, unseeded ``np.random.default_rng()`` for that call
- int: seed for ``np.random.default_rng(seed)``
- np.random.Generator: used as-is (its state advances)

Examples
--------
>>> rng: RandomSource = np.random.default_rng(42)
>>> rng: RandomSource = 42
"""


__all__ = [
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
]
