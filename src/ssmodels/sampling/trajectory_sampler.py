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
Trajectory Sampler - Forward Simulation of State Space Models
=============================================================

Generates state and observation sequences from any StateSpaceModel:

    x[0]   = x0
    y[0]   = g(x0) + δ[0]
    x[k+1] = f(x[k]) + ω[k]
    y[k+1] = g(x[k+1]) + δ[k+1]

Array layout is state-major with time LAST:

- Single trajectory: x0 (nx,), states (nx, T+1), observations (ny, T+1)
- Batch of trajectories: x0 (nx, N), states (nx, N, T+1), observations (ny, N, T+1)

Slot 0 holds x0 and the "zeroth" observation emitted from it, so T steps
fill T+1 slots.

Operations
----------
Single steps (accept a state (nx,) or a batch (nx, N)):
- state_step, observation_step, step

In-place generation into caller-owned containers:
- sample_trajectory_into, sample_batch_into, sample_into (dispatch on x0.ndim)

Allocating generation:
- sample_trajectory, sample_batch, sample (dispatch on x0.ndim)
- sample_observations (observations only)

Every container and the initial state are validated before anything is
written. Noise generators are taken from the model once per call and reused
for all steps; in batch mode each member receives its own independent draw.

Examples
--------
>>> from ssmodels import create_constant_acceleration_model
>>> model = create_constant_acceleration_model(0.01)
>>> rng = np.random.default_rng(42)
>>>
>>> # Single trajectory
>>> result = sample(model, np.zeros(3), n_steps=100, rng=rng)
>>> result.states.shape, result.observations.shape
((3, 101), (1, 101))
>>>
>>> # Batch of 10 trajectories
>>> result = sample(model, rng.standard_normal((3, 10)), n_steps=100, rng=rng)
>>> result.states.shape
(3, 10, 101)
>>>
>>> # Preallocated observations only
>>> out_y = np.empty((1, 101))
>>> sample_into(model, np.zeros(3), out_y, rng=rng)
"""

import logging
import numbers
from typing import Optional, Tuple

import numpy as np

from ssmodels.exceptions import DimensionMismatchError
from ssmodels.noise import NoiseGenerator
from ssmodels.systems.base.state_space_model import StateSpaceModel
from ssmodels.types.core import (
    ArrayLike,
    NumpyArray,
    ObservationVector,
    RandomSource,
    StateVector,
)
from ssmodels.types.trajectories import ObservationTrajectory, TrajectorySample
from ssmodels.utils.rng import as_generator
from ssmodels.utils.validation import (
    check_equal_axis,
    check_leading_dim,
    check_ndim,
    check_output_container,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Single Steps
# ============================================================================


def state_step(
    model: StateSpaceModel,
    x: ArrayLike,
    rng: RandomSource = None,
    noise: Optional[NoiseGenerator] = None,
) -> StateVector:
    """
    Propagate the state one step: f(x) + ω.

    Parameters
    ----------
    model : StateSpaceModel
        Model providing f and the state noise
    x : ArrayLike
        Current state (nx,) or batch (nx, N)
    rng : RandomSource
        Random source
    noise : Optional[NoiseGenerator]
        State noise generator. Default: ``model.state_noise()``

    Returns
    -------
    StateVector
        Next state, same shape as x. In batch mode every column receives an
        independent noise draw.

    Raises
    ------
    DimensionMismatchError
        If f(x) or the noise draw does not have the shape of x
    """
    x = np.asarray(x)
    if noise is None:
        noise = model.state_noise()
    fx = np.asarray(model.transition(x))
    _check_step_result(fx, x, model.state_dim, "transition output", "model state_dim")
    w = noise.sample(rng, _batch_size(x))
    _check_step_result(w, x, model.state_dim, "state noise draw", "model state_dim")
    return fx + w


def observation_step(
    model: StateSpaceModel,
    x: ArrayLike,
    rng: RandomSource = None,
    noise: Optional[NoiseGenerator] = None,
) -> ObservationVector:
    """
    Emit an observation from the state: g(x) + δ.

    Parameters
    ----------
    model : StateSpaceModel
        Model providing g and the observation noise
    x : ArrayLike
        State (nx,) or batch (nx, N)
    rng : RandomSource
        Random source
    noise : Optional[NoiseGenerator]
        Observation noise generator. Default: ``model.observation_noise()``

    Returns
    -------
    ObservationVector
        (ny,) or (ny, N)

    Raises
    ------
    DimensionMismatchError
        If g(x) or the noise draw does not have ny rows (and N columns in
        batch mode)
    """
    x = np.asarray(x)
    if noise is None:
        noise = model.observation_noise()
    gx = np.asarray(model.emission(x))
    _check_step_result(gx, x, model.observation_dim, "emission output", "model observation_dim")
    v = noise.sample(rng, _batch_size(x))
    _check_step_result(v, x, model.observation_dim, "observation noise draw", "model observation_dim")
    return gx + v


def step(
    model: StateSpaceModel,
    x: ArrayLike,
    rng: RandomSource = None,
    state_noise: Optional[NoiseGenerator] = None,
    observation_noise: Optional[NoiseGenerator] = None,
) -> Tuple[StateVector, ObservationVector]:
    """
    Advance one time step and observe the NEW state.

    Returns
    -------
    Tuple[StateVector, ObservationVector]
        (x_next, y_next) with x_next = f(x) + ω and y_next = g(x_next) + δ

    Examples
    --------
    >>> x1, y1 = step(model, np.zeros(3), rng=np.random.default_rng(0))
    """
    rng = as_generator(rng)
    x_next = state_step(model, x, rng, state_noise)
    y_next = observation_step(model, x_next, rng, observation_noise)
    return x_next, y_next


def _batch_size(x: np.ndarray) -> Optional[int]:
    return x.shape[1] if x.ndim == 2 else None


def _check_step_result(value, x, dim, name, dim_name):
    if value.ndim != x.ndim:
        raise DimensionMismatchError(
            f"Dimension mismatch: {name} has {value.ndim} axes (shape {value.shape}), "
            f"state has {x.ndim} (shape {x.shape})"
        )
    check_leading_dim(value, dim, name, dim_name)
    if x.ndim == 2:
        check_equal_axis(value, x, 1, 1, "Batch size", name, "state")


# ============================================================================
# In-Place Generation
# ============================================================================


def sample_trajectory_into(
    model: StateSpaceModel,
    x0: ArrayLike,
    out_y: NumpyArray,
    out_x: Optional[NumpyArray] = None,
    rng: RandomSource = None,
    state_noise: Optional[NoiseGenerator] = None,
    observation_noise: Optional[NoiseGenerator] = None,
) -> None:
    """
    Sample one trajectory into preallocated containers.

    Parameters
    ----------
    model : StateSpaceModel
        Model to simulate
    x0 : ArrayLike
        Initial state (nx,)
    out_y : NumpyArray
        Observation container (ny, T+1), overwritten
    out_x : Optional[NumpyArray]
        State container (nx, T+1), overwritten. Omit to keep observations only.
    rng : RandomSource
        Random source
    state_noise, observation_noise : Optional[NoiseGenerator]
        Noise overrides. Default: the model's own generators.

    Raises
    ------
    DimensionMismatchError
        If any size disagrees with the model or between the containers
    TypeError
        If a container is not a floating ndarray
    ValueError
        If a container is read-only or has no time slot

    Notes
    -----
    The number of steps T is taken from the containers. All checks run
    before the first write, so a failed call leaves the containers intact.
    """
    x0 = np.asarray(x0)
    check_ndim(x0, 1, "initial state x0")
    _validate_containers(model, x0, out_y, out_x, time_axis=1)
    _fill(model, x0, out_y, out_x, rng, state_noise, observation_noise)


def sample_batch_into(
    model: StateSpaceModel,
    x0: ArrayLike,
    out_y: NumpyArray,
    out_x: Optional[NumpyArray] = None,
    rng: RandomSource = None,
    state_noise: Optional[NoiseGenerator] = None,
    observation_noise: Optional[NoiseGenerator] = None,
) -> None:
    """
    Sample a batch of trajectories into preallocated containers.

    Parameters
    ----------
    model : StateSpaceModel
        Model to simulate
    x0 : ArrayLike
        Initial states (nx, N), one member per column
    out_y : NumpyArray
        Observation container (ny, N, T+1), overwritten
    out_x : Optional[NumpyArray]
        State container (nx, N, T+1), overwritten
    rng : RandomSource
        Random source
    state_noise, observation_noise : Optional[NoiseGenerator]
        Noise overrides. Default: the model's own generators.

    Raises
    ------
    DimensionMismatchError
        If any size disagrees with the model, with x0's batch size, or
        between the containers
    TypeError
        If a container is not a floating ndarray
    ValueError
        If a container is read-only or has no time slot

    Notes
    -----
    Member i of the batch follows the same law as a single trajectory from
    ``x0[:, i]``; members share no noise draws.
    """
    x0 = np.asarray(x0)
    check_ndim(x0, 2, "initial state x0")
    _validate_containers(model, x0, out_y, out_x, time_axis=2)
    _fill(model, x0, out_y, out_x, rng, state_noise, observation_noise)


def sample_into(
    model: StateSpaceModel,
    x0: ArrayLike,
    out_y: NumpyArray,
    out_x: Optional[NumpyArray] = None,
    rng: RandomSource = None,
    state_noise: Optional[NoiseGenerator] = None,
    observation_noise: Optional[NoiseGenerator] = None,
) -> None:
    """
    Sample into preallocated containers, single or batch by ``x0.ndim``.

    A 1-D x0 dispatches to ``sample_trajectory_into``, a 2-D x0 to
    ``sample_batch_into``.

    Raises
    ------
    DimensionMismatchError
        If x0 is neither 1-D nor 2-D, or on any check of the selected form
    """
    x0 = np.asarray(x0)
    if x0.ndim == 1:
        sample_trajectory_into(model, x0, out_y, out_x, rng, state_noise, observation_noise)
    elif x0.ndim == 2:
        sample_batch_into(model, x0, out_y, out_x, rng, state_noise, observation_noise)
    else:
        raise DimensionMismatchError(
            f"Dimension mismatch: initial state x0 must be a vector (nx,) or a "
            f"batch (nx, N), got shape {x0.shape}"
        )


def _validate_containers(model, x0, out_y, out_x, time_axis):
    nx, ny = model.state_dim, model.observation_dim
    check_leading_dim(x0, nx, "initial state x0", "model state_dim")

    check_output_container(out_y, "out_y")
    check_ndim(out_y, time_axis + 1, "out_y")
    check_leading_dim(out_y, ny, "out_y", "model observation_dim")
    if time_axis == 2:
        check_equal_axis(out_y, x0, 1, 1, "Batch size", "out_y", "x0")
    if out_y.shape[time_axis] < 1:
        raise ValueError("out_y must have at least one time slot")

    if out_x is not None:
        check_output_container(out_x, "out_x")
        check_ndim(out_x, time_axis + 1, "out_x")
        check_leading_dim(out_x, nx, "out_x", "model state_dim")
        if time_axis == 2:
            check_equal_axis(out_x, x0, 1, 1, "Batch size", "out_x", "x0")
        check_equal_axis(out_x, out_y, time_axis, time_axis, "Number of time steps", "out_x", "out_y")


def _fill(model, x0, out_y, out_x, rng, state_noise, observation_noise):
    rng = as_generator(rng)
    if state_noise is None:
        state_noise = model.state_noise()
    if observation_noise is None:
        observation_noise = model.observation_noise()
    if state_noise.dim != model.state_dim:
        raise DimensionMismatchError(
            f"Dimension mismatch: state noise dimension ({state_noise.dim}) "
            f"!= model state_dim ({model.state_dim})"
        )
    if observation_noise.dim != model.observation_dim:
        raise DimensionMismatchError(
            f"Dimension mismatch: observation noise dimension ({observation_noise.dim}) "
            f"!= model observation_dim ({model.observation_dim})"
        )

    n_steps = out_y.shape[-1] - 1
    logger.debug(
        "Sampling %s: %s, n_steps=%d, batch=%s, states=%s",
        type(model).__name__,
        "batch" if x0.ndim == 2 else "single",
        n_steps,
        x0.shape[1] if x0.ndim == 2 else None,
        "kept" if out_x is not None else "discarded",
    )

    x = x0
    y = observation_step(model, x, rng, observation_noise)
    if out_x is not None:
        out_x[..., 0] = x
    out_y[..., 0] = y
    for t in range(1, n_steps + 1):
        x, y = step(model, x, rng, state_noise, observation_noise)
        if out_x is not None:
            out_x[..., t] = x
        out_y[..., t] = y


# ============================================================================
# Allocating Generation
# ============================================================================


def sample_trajectory(
    model: StateSpaceModel,
    x0: ArrayLike,
    n_steps: int,
    rng: RandomSource = None,
    state_noise: Optional[NoiseGenerator] = None,
    observation_noise: Optional[NoiseGenerator] = None,
) -> TrajectorySample:
    """
    Sample one trajectory of ``n_steps`` steps from x0 (nx,).

    Returns
    -------
    TrajectorySample
        states (nx, n_steps+1), observations (ny, n_steps+1); slot 0 holds
        x0 and its zeroth observation

    Raises
    ------
    ValueError
        If n_steps is not a non-negative integer
    DimensionMismatchError
        If x0 is not a vector of length state_dim

    Examples
    --------
    >>> states, observations = sample_trajectory(model, [0.0, 0.0, 1.0], 2, rng=0)
    """
    n_steps = _check_n_steps(n_steps)
    x0 = np.asarray(x0)
    check_ndim(x0, 1, "initial state x0")
    dtype = _output_dtype(model, x0)
    out_x = np.empty((model.state_dim, n_steps + 1), dtype=dtype)
    out_y = np.empty((model.observation_dim, n_steps + 1), dtype=dtype)
    sample_trajectory_into(model, x0, out_y, out_x, rng, state_noise, observation_noise)
    return TrajectorySample(out_x, out_y)


def sample_batch(
    model: StateSpaceModel,
    x0: ArrayLike,
    n_steps: int,
    rng: RandomSource = None,
    state_noise: Optional[NoiseGenerator] = None,
    observation_noise: Optional[NoiseGenerator] = None,
) -> TrajectorySample:
    """
    Sample N trajectories of ``n_steps`` steps, one from each column of x0 (nx, N).

    Returns
    -------
    TrajectorySample
        states (nx, N, n_steps+1), observations (ny, N, n_steps+1)

    Raises
    ------
    ValueError
        If n_steps is not a non-negative integer
    DimensionMismatchError
        If x0 is not (state_dim, N)
    """
    n_steps = _check_n_steps(n_steps)
    x0 = np.asarray(x0)
    check_ndim(x0, 2, "initial state x0")
    dtype = _output_dtype(model, x0)
    n_batch = x0.shape[1]
    out_x = np.empty((model.state_dim, n_batch, n_steps + 1), dtype=dtype)
    out_y = np.empty((model.observation_dim, n_batch, n_steps + 1), dtype=dtype)
    sample_batch_into(model, x0, out_y, out_x, rng, state_noise, observation_noise)
    return TrajectorySample(out_x, out_y)


def sample(
    model: StateSpaceModel,
    x0: ArrayLike,
    n_steps: int,
    rng: RandomSource = None,
    state_noise: Optional[NoiseGenerator] = None,
    observation_noise: Optional[NoiseGenerator] = None,
) -> TrajectorySample:
    """
    Sample states and observations, single or batch by ``x0.ndim``.

    Parameters
    ----------
    model : StateSpaceModel
        Model to simulate
    x0 : ArrayLike
        Initial state (nx,) or batch of initial states (nx, N)
    n_steps : int
        Number of steps T (excluding the initial slot)
    rng : RandomSource
        Random source (None, seed, or np.random.Generator)
    state_noise, observation_noise : Optional[NoiseGenerator]
        Noise overrides. Default: the model's own generators.

    Returns
    -------
    TrajectorySample
        Named tuple (states, observations)

    Examples
    --------
    >>> result = sample(model, np.zeros(3), n_steps=50, rng=0)
    >>> result.n_steps
    50
    """
    x0 = np.asarray(x0)
    if x0.ndim == 1:
        return sample_trajectory(model, x0, n_steps, rng, state_noise, observation_noise)
    if x0.ndim == 2:
        return sample_batch(model, x0, n_steps, rng, state_noise, observation_noise)
    raise DimensionMismatchError(
        f"Dimension mismatch: initial state x0 must be a vector (nx,) or a "
        f"batch (nx, N), got shape {x0.shape}"
    )


def sample_observations(
    model: StateSpaceModel,
    x0: ArrayLike,
    n_steps: int,
    rng: RandomSource = None,
    state_noise: Optional[NoiseGenerator] = None,
    observation_noise: Optional[NoiseGenerator] = None,
) -> ObservationTrajectory:
    """
    Sample observations only; the state trajectory is not stored.

    Returns
    -------
    ObservationTrajectory
        (ny, n_steps+1) for a 1-D x0, (ny, N, n_steps+1) for a 2-D x0

    Notes
    -----
    Under the same random source, the result equals
    ``sample(...).observations``.
    """
    n_steps = _check_n_steps(n_steps)
    x0 = np.asarray(x0)
    if x0.ndim not in (1, 2):
        raise DimensionMismatchError(
            f"Dimension mismatch: initial state x0 must be a vector (nx,) or a "
            f"batch (nx, N), got shape {x0.shape}"
        )
    shape = (model.observation_dim,) + x0.shape[1:] + (n_steps + 1,)
    out_y = np.empty(shape, dtype=_output_dtype(model, x0))
    sample_into(model, x0, out_y, None, rng, state_noise, observation_noise)
    return out_y


def _check_n_steps(n_steps) -> int:
    if isinstance(n_steps, bool) or not isinstance(n_steps, numbers.Integral):
        raise ValueError(f"n_steps must be a non-negative integer, got {n_steps!r}")
    if n_steps < 0:
        raise ValueError(f"n_steps must be non-negative, got {n_steps}")
    return int(n_steps)


def _output_dtype(model: StateSpaceModel, x0: np.ndarray) -> np.dtype:
    dtype = np.result_type(x0.dtype, model.dtype)
    if not np.issubdtype(dtype, np.inexact):
        dtype = np.dtype(np.float64)
    return dtype


__all__ = [
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
]
