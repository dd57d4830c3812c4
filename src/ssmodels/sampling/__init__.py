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
Sampling engine: forward simulation of state space models.

See ``ssmodels.sampling.trajectory_sampler`` for the array layout and the
meaning of the zeroth slot.
"""

from .trajectory_sampler import (
    observation_step,
    sample,
    sample_batch,
    sample_batch_into,
    sample_into,
    sample_observations,
    sample_trajectory,
    sample_trajectory_into,
    state_step,
    step,
)

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
