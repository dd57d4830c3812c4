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
Exceptions raised by ssmodels.

Hierarchy
---------
NotImplementedError
    NotImplementedOperationError   required model operation not overridden
ValueError
    ValidationError                invalid model or call arguments
        DimensionMismatchError     two related sizes disagree
        CovarianceError            covariance not symmetric PSD
"""

from typing import Any


class NotImplementedOperationError(NotImplementedError):
    """
    Raised when a required model operation is invoked but not overridden.

    Parameters
    ----------
    operation : str
        Name of the missing operation (e.g. ``"transition"``)
    model : Any
        The model instance that received the call

    Examples
    --------
    >>> raise NotImplementedOperationError("state_noise_cov", model)
    Traceback (most recent call last):
    ...
    NotImplementedOperationError: `state_noise_cov` is not implemented for <MyModel object at 0x...> (type MyModel). ...
    """

    def __init__(self, operation: str, model: Any):
        self.operation = operation
        self.model = model
        super().__init__(
            f"`{operation}` is not implemented for {object.__repr__(model)} "
            f"(type {type(model).__name__}). "
            f"Any concrete model must override `{operation}`."
        )


class ValidationError(ValueError):
    """Raised when a model definition or call argument fails validation."""

    pass


class DimensionMismatchError(ValidationError):
    """
    Raised when two related sizes disagree.

    The message names both compared quantities and their values, e.g.
    ``"Dimension mismatch: initial state leading dimension (2) != model
    state_dim (3)"``.
    """

    pass


class CovarianceError(ValidationError):
    """Raised when a covariance matrix is not finite, symmetric and PSD."""

    pass


__all__ = [
    "NotImplementedOperationError",
    "ValidationError",
    "DimensionMismatchError",
    "CovarianceError",
]
