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
Model Base Classes
==================

Layer 1 (Abstract Interface):
    - StateSpaceModel: x[k+1] = f(x[k]) + ω[k], y[k] = g(x[k]) + δ[k]

Layer 2 (Gaussian Refinement):
    - GaussianStateSpaceModel(StateSpaceModel): ω ~ N(0, Q), δ ~ N(0, R)

Concrete models live in ``ssmodels.systems.builtin``.
"""

from .gaussian_state_space_model import GaussianStateSpaceModel
from .state_space_model import StateSpaceModel

__all__ = [
    "StateSpaceModel",
    "GaussianStateSpaceModel",
]
