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

"""Validation and random-source utilities."""

from .rng import as_generator
from .validation import (
    DEFAULT_COVARIANCE_ATOL,
    check_equal_axis,
    check_leading_dim,
    check_ndim,
    check_output_container,
    validate_covariance,
)

__all__ = [
    "as_generator",
    "DEFAULT_COVARIANCE_ATOL",
    "check_ndim",
    "check_leading_dim",
    "check_equal_axis",
    "check_output_container",
    "validate_covariance",
]
