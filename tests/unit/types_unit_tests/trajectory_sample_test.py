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
Unit Tests for Trajectory and Model Information Types

Tests cover:
- TrajectorySample unpacking and derived properties
- ModelDimensions
- ModelInfo / StabilityInfo dictionaries
- Package-level exports
"""

import numpy as np
import pytest

import ssmodels
from ssmodels.types import ModelDimensions, ModelInfo, StabilityInfo, TrajectorySample


class TestTrajectorySample:
    """Test the (states, observations) container."""

    def test_unpacks_like_tuple(self):
        states, observations = TrajectorySample(np.zeros((3, 11)), np.ones((1, 11)))
        assert states.shape == (3, 11)
        assert observations.shape == (1, 11)

    def test_named_fields(self):
        result = TrajectorySample(states=np.zeros((2, 5)), observations=np.ones((1, 5)))
        assert result.states is result[0]
        assert result.observations is result[1]

    def test_single_properties(self):
        result = TrajectorySample(np.zeros((2, 5)), np.zeros((1, 5)))
        assert result.n_steps == 4
        assert not result.is_batched
        np.testing.assert_array_equal(result.time_steps, np.arange(5))

    def test_batch_properties(self):
        result = TrajectorySample(np.zeros((2, 8, 3)), np.zeros((1, 8, 3)))
        assert result.n_steps == 2
        assert result.is_batched
        np.testing.assert_array_equal(result.time_steps, [0, 1, 2])

    def test_single_slot(self):
        result = TrajectorySample(np.zeros((2, 1)), np.zeros((1, 1)))
        assert result.n_steps == 0


class TestModelDimensions:
    def test_fields_and_unpacking(self):
        dims = ModelDimensions(state=3, observation=1)
        assert dims.state == 3
        assert dims.observation == 1
        nx, ny = dims
        assert (nx, ny) == (3, 1)

    def test_equals_plain_tuple(self):
        assert ModelDimensions(2, 2) == (2, 2)


class TestInfoDictionaries:
    def test_model_info_is_dict(self):
        info = ModelInfo(
            class_name="M",
            state_dim=1,
            observation_dim=1,
            dtype="float64",
            is_linear=True,
            is_gaussian=True,
        )
        assert isinstance(info, dict)
        assert info["class_name"] == "M"

    def test_stability_info_from_model(self):
        info = ssmodels.create_constant_velocity_model(0.5).check_stability()
        assert set(info) == set(StabilityInfo.__annotations__)


class TestPackageExports:
    @pytest.mark.parametrize("name", ssmodels.__all__)
    def test_exported_names_exist(self, name):
        assert hasattr(ssmodels, name)

    def test_version(self):
        assert isinstance(ssmodels.__version__, str)

    def test_quick_start(self):
        model = ssmodels.create_constant_acceleration_model(dt=0.01)
        states, observations = model.sample(np.zeros(3), n_steps=100, rng=0)
        assert states.shape == (3, 101)
        assert observations.shape == (1, 101)
