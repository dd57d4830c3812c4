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

"""Unit tests for random source normalisation."""

import numpy as np
import pytest

from ssmodels.utils.rng import as_generator


class TestAsGenerator:
    def test_none_gives_fresh_generator(self):
        first = as_generator(None)
        second = as_generator()
        assert isinstance(first, np.random.Generator)
        assert first is not second

    def test_generator_passed_through(self):
        rng = np.random.default_rng(0)
        assert as_generator(rng) is rng

    def test_int_seed_is_reproducible(self):
        a = as_generator(42).standard_normal(5)
        b = as_generator(42).standard_normal(5)
        np.testing.assert_array_equal(a, b)

    def test_int_seed_matches_default_rng(self):
        np.testing.assert_array_equal(
            as_generator(7).random(3), np.random.default_rng(7).random(3)
        )

    def test_numpy_integer_seed(self):
        assert isinstance(as_generator(np.int64(3)), np.random.Generator)

    @pytest.mark.parametrize("bad", [True, 1.5, "0", np.random.RandomState(0)])
    def test_invalid_sources(self, bad):
        with pytest.raises(TypeError, match="rng must be"):
            as_generator(bad)
