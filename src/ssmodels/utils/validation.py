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
Validation Helpers - Dimensions and Covariances

Shared checks used by the models (construction time) and by the sampling
engine (before any output is written).

Validation Checks:
- Array rank (vector / matrix / 3-tensor)
- Leading dimension against a model dimension
- Agreement of one axis between two related containers
- Output containers: ndarray, floating dtype, writeable
- Covariance: square, conformant, finite, symmetric, positive semi-definite

All failures raise immediately; nothing is coerced silently except a
nearly-symmetric covariance, which is symmetrised with a UserWarning.
"""

import warnings
from typing import Any

import numpy as np
import scipy.linalg

from ssmodels.exceptions import CovarianceError, DimensionMismatchError

DEFAULT_COVARIANCE_ATOL = 1e-10
"""Absolute tolerance for covariance symmetry and PSD checks."""


# ============================================================================
# Shape Checks
# ============================================================================


def check_ndim(arr: np.ndarray, ndim: int, name: str) -> None:
    """
    Check that ``arr`` has exactly ``ndim`` axes.

    Raises
    ------
    DimensionMismatchError
        If the rank differs.
    """
    if arr.ndim != ndim:
        raise DimensionMismatchError(
            f"Dimension mismatch: {name} must have {ndim} axes, "
            f"got {arr.ndim} (shape {arr.shape})"
        )


def check_leading_dim(arr: np.ndarray, expected: int, name: str, expected_name: str) -> None:
    """
    Check ``arr.shape[0] == expected``.

    Parameters
    ----------
    arr : np.ndarray
        Array to check
    expected : int
        Required leading dimension
    name : str
        Description of ``arr`` for the error message
    expected_name : str
        Description of ``expected`` for the error message

    Raises
    ------
    DimensionMismatchError

    Examples
    --------
    >>> check_leading_dim(np.zeros(2), 3, "initial state", "model state_dim")
    Traceback (most recent call last):
    ...
    DimensionMismatchError: Dimension mismatch: initial state leading dimension (2) != model state_dim (3)
    """
    actual = arr.shape[0] if arr.ndim > 0 else None
    if actual != expected:
        raise DimensionMismatchError(
            f"Dimension mismatch: {name} leading dimension ({actual}) "
            f"!= {expected_name} ({expected})"
        )


def check_equal_axis(
    a: np.ndarray,
    b: np.ndarray,
    axis_a: int,
    axis_b: int,
    label: str,
    a_name: str,
    b_name: str,
) -> None:
    """
    Check that ``a.shape[axis_a] == b.shape[axis_b]``.

    Used for time-step agreement between paired output containers and for
    batch-size agreement between containers and the initial state.

    Raises
    ------
    DimensionMismatchError
        Naming ``label`` and both containers, e.g. ``"Batch size mismatch
        between out_x (4) and x0 (5)"``.
    """
    if a.shape[axis_a] != b.shape[axis_b]:
        raise DimensionMismatchError(
            f"Dimension mismatch: {label} mismatch between "
            f"{a_name} ({a.shape[axis_a]}) and {b_name} ({b.shape[axis_b]})"
        )


def check_output_container(out: Any, name: str) -> None:
    """
    Check that ``out`` can receive sampled values in place.

    Raises
    ------
    TypeError
        If ``out`` is not an ndarray, or its dtype is not floating/complex
        (writing noisy samples into an integer buffer would truncate them).
    ValueError
        If ``out`` is read-only.
    """
    if not isinstance(out, np.ndarray):
        raise TypeError(f"{name} must be a numpy.ndarray, got {type(out).__name__}")
    if not np.issubdtype(out.dtype, np.inexact):
        raise TypeError(
            f"{name} must have a floating or complex dtype to hold sampled values, "
            f"got {out.dtype}"
        )
    if not out.flags.writeable:
        raise ValueError(f"{name} is read-only")


# ============================================================================
# Covariance Checks
# ============================================================================


def validate_covariance(
    cov: np.ndarray,
    dim: int,
    name: str,
    atol: float = DEFAULT_COVARIANCE_ATOL,
) -> np.ndarray:
    """
    Validate a covariance matrix and return a symmetric copy.

    Parameters
    ----------
    cov : np.ndarray
        Candidate covariance (2-D)
    dim : int
        Required size (cov must be dim × dim)
    name : str
        Name used in error messages (e.g. ``"Q"``)
    atol : float
        Absolute tolerance for the symmetry and PSD checks

    Returns
    -------
    np.ndarray
        ``cov`` itself when exactly symmetric, otherwise ``(cov + cov.T) / 2``

    Raises
    ------
    DimensionMismatchError
        If cov is not ``dim × dim``
    CovarianceError
        If cov has non-finite entries, is asymmetric beyond ``atol``, or has
        an eigenvalue below ``-tol``

    Notes
    -----
    Zero matrices are accepted: they describe a noise-free component.

    The PSD tolerance scales with the magnitude of the spectrum:
        tol = max(atol, dim * eps * max|λ|)
    """
    if cov.ndim != 2 or cov.shape[0] != cov.shape[1]:
        raise DimensionMismatchError(
            f"Dimension mismatch: covariance {name} must be square, got shape {cov.shape}"
        )
    if cov.shape[0] != dim:
        raise DimensionMismatchError(
            f"Dimension mismatch: covariance {name} size ({cov.shape[0]}) "
            f"!= required dimension ({dim})"
        )
    if not np.all(np.isfinite(cov)):
        raise CovarianceError(f"Covariance {name} contains non-finite entries")

    asymmetry = np.max(np.abs(cov - cov.T)) if cov.size else 0.0
    if asymmetry > atol:
        raise CovarianceError(
            f"Covariance {name} is not symmetric (max |{name} - {name}ᵀ| = {asymmetry:.3e})"
        )
    if asymmetry > 0.0:
        warnings.warn(
            f"Covariance {name} is symmetric only up to {asymmetry:.3e}; "
            f"using ({name} + {name}ᵀ)/2",
            UserWarning,
            stacklevel=3,
        )
        cov = 0.5 * (cov + cov.T)

    if cov.size:
        eigenvalues = scipy.linalg.eigvalsh(cov)
        tol = max(atol, dim * np.finfo(float).eps * np.max(np.abs(eigenvalues)))
        if eigenvalues[0] < -tol:
            raise CovarianceError(
                f"Covariance {name} is not positive semi-definite "
                f"(smallest eigenvalue {eigenvalues[0]:.3e})"
            )

    return cov


__all__ = [
    "DEFAULT_COVARIANCE_ATOL",
    "check_ndim",
    "check_leading_dim",
    "check_equal_axis",
    "check_output_container",
    "validate_covariance",
]
