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
Unit tests for the validation helpers.

Tests cover:
1. Rank, leading-dimension and axis-agreement checks with their messages
2. Output container checks (type, dtype, writeability)
3. Covariance validation (shape, finiteness, symmetry, PSD tolerance)
"""

import numpy as np
import pytest

from ssmodels.exceptions import CovarianceError, DimensionMismatchError
from ssmodels.utils.validation import (
    DEFAULT_COVARIANCE_ATOL,
    check_equal_axis,
    check_leading_dim,
    check_ndim,
    check_output_container,
    validate_covariance,
)

# ============================================================================
# Shape Checks
# ============================================================================


class TestShapeChecks:
    def test_check_ndim_passes(self):
        check_ndim(np.zeros((2, 3)), 2, "out_y")

    def test_check_ndim_fails(self):
        with pytest.raises(DimensionMismatchError, match="out_y must have 3 axes, got 2"):
            check_ndim(np.zeros((2, 3)), 3, "out_y")

    def test_leading_dim_message(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            check_leading_dim(np.zeros(2), 3, "initial state", "model state_dim")
        assert str(exc_info.value) == (
            "Dimension mismatch: initial state leading dimension (2) != model state_dim (3)"
        )

    def test_leading_dim_of_scalar(self):
        with pytest.raises(DimensionMismatchError, match=r"\(None\)"):
            check_leading_dim(np.float64(1.0), 1, "x", "nx")

    def test_leading_dim_passes(self):
        check_leading_dim(np.zeros((3, 5)), 3, "out_x", "model state_dim")

    def test_equal_axis_message(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            check_equal_axis(np.zeros((2, 4)), np.zeros((2, 5)), 1, 1, "Batch size", "out_x", "x0")
        assert str(exc_info.value) == (
            "Dimension mismatch: Batch size mismatch between out_x (4) and x0 (5)"
        )

    def test_equal_axis_across_different_axes(self):
        check_equal_axis(np.zeros((2, 7)), np.zeros((1, 3, 7)), 1, 2, "Number of time steps", "a", "b")


# ============================================================================
# Output Containers
# ============================================================================


class TestOutputContainer:
    def test_float_and_complex_accepted(self):
        check_output_container(np.empty((2, 3)), "out")
        check_output_container(np.empty((2, 3), dtype=np.float32), "out")
        check_output_container(np.empty((2, 3), dtype=complex), "out")

    def test_list_rejected(self):
        with pytest.raises(TypeError, match="numpy.ndarray"):
            check_output_container([[0.0]], "out_y")

    def test_integer_dtype_rejected(self):
        with pytest.raises(TypeError, match="floating or complex"):
            check_output_container(np.zeros((2, 3), dtype=int), "out_y")

    def test_read_only_rejected(self):
        out = np.zeros((2, 3))
        out.flags.writeable = False
        with pytest.raises(ValueError, match="read-only"):
            check_output_container(out, "out_x")


# ============================================================================
# Covariances
# ============================================================================


class TestValidateCovariance:
    def test_symmetric_psd_returned_unchanged(self):
        cov = np.array([[2.0, 0.5], [0.5, 1.0]])
        assert validate_covariance(cov, 2, "Q") is cov

    def test_zero_matrix_accepted(self):
        validate_covariance(np.zeros((3, 3)), 3, "Q")

    def test_rank_deficient_accepted(self):
        # Eigenvalues 0 and 2, the zero may come out slightly negative
        validate_covariance(np.ones((2, 2)), 2, "R")

    def test_not_square(self):
        with pytest.raises(DimensionMismatchError, match="must be square"):
            validate_covariance(np.zeros((2, 3)), 2, "Q")

    def test_not_two_dimensional(self):
        with pytest.raises(DimensionMismatchError):
            validate_covariance(np.zeros(2), 2, "Q")

    def test_wrong_size(self):
        with pytest.raises(DimensionMismatchError, match=r"size \(3\) != required dimension \(2\)"):
            validate_covariance(np.eye(3), 2, "Q")

    def test_non_finite(self):
        with pytest.raises(CovarianceError, match="non-finite"):
            validate_covariance(np.array([[1.0, np.inf], [np.inf, 1.0]]), 2, "Q")

    def test_asymmetric(self):
        with pytest.raises(CovarianceError, match="not symmetric"):
            validate_covariance(np.array([[1.0, 0.1], [0.0, 1.0]]), 2, "Q")

    def test_nearly_symmetric_warns_and_symmetrises(self):
        cov = np.array([[1.0, 2e-11], [0.0, 1.0]])
        with pytest.warns(UserWarning, match="using"):
            result = validate_covariance(cov, 2, "Q")
        np.testing.assert_array_equal(result, result.T)
        assert result is not cov

    def test_not_psd(self):
        with pytest.raises(CovarianceError, match="smallest eigenvalue"):
            validate_covariance(np.array([[1.0, 2.0], [2.0, 1.0]]), 2, "R")

    def test_negative_within_atol_accepted(self):
        validate_covariance(np.array([[-1e-12]]), 1, "Q")

    def test_atol_override(self):
        with pytest.raises(CovarianceError):
            validate_covariance(np.array([[-1e-6]]), 1, "Q")
        validate_covariance(np.array([[-1e-6]]), 1, "Q", atol=1e-5)

    def test_default_atol(self):
        assert DEFAULT_COVARIANCE_ATOL == 1e-10
