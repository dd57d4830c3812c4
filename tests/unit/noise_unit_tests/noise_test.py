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
Unit Tests for Noise Generators

Tests cover:
- Output layout: (dim,) for one draw, (dim, n) for n draws
- GaussianNoise moments, singular covariances and immutability
- IndependentNoise with continuous and discrete components
- DistributionNoise wrapping multivariate scipy distributions
- ZeroNoise
- Random source handling and reproducibility
"""

import numpy as np
import pytest
from scipy import stats

from ssmodels.noise import (
    DistributionNoise,
    GaussianNoise,
    IndependentNoise,
    NoiseGenerator,
    ZeroNoise,
)


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


# ============================================================================
# GaussianNoise
# ============================================================================


class TestGaussianNoise:
    """Test the multivariate normal generator."""

    def test_single_draw_shape(self, rng):
        noise = GaussianNoise(np.eye(3))
        assert noise.sample(rng).shape == (3,)

    def test_many_draws_shape(self, rng):
        noise = GaussianNoise(np.eye(3))
        assert noise.sample(rng, 7).shape == (3, 7)

    def test_one_dimensional_draws_keep_layout(self, rng):
        noise = GaussianNoise([[2.0]])
        assert noise.sample(rng).shape == (1,)
        assert noise.sample(rng, 1).shape == (1, 1)
        assert noise.sample(rng, 4).shape == (1, 4)

    def test_default_mean_is_zero(self):
        noise = GaussianNoise(np.eye(2))
        np.testing.assert_array_equal(noise.mean, np.zeros(2))
        assert noise.dim == 2

    def test_moments(self, rng):
        cov = np.array([[1.0, 0.3], [0.3, 0.5]])
        mean = np.array([2.0, -1.0])
        draws = GaussianNoise(cov, mean=mean).sample(rng, 40000)

        np.testing.assert_allclose(draws.mean(axis=1), mean, atol=0.03)
        np.testing.assert_allclose(np.cov(draws), cov, atol=0.03)

    def test_zero_covariance_gives_zero_noise(self, rng):
        draws = GaussianNoise(np.zeros((2, 2))).sample(rng, 5)
        np.testing.assert_allclose(draws, np.zeros((2, 5)), atol=1e-12)

    def test_singular_covariance_component_is_zero(self, rng):
        draws = GaussianNoise(np.diag([1.0, 0.0])).sample(rng, 100)
        np.testing.assert_allclose(draws[1], np.zeros(100), atol=1e-12)
        assert np.std(draws[0]) > 0.5

    def test_parameters_are_read_only_copies(self):
        cov = np.eye(2)
        noise = GaussianNoise(cov)

        assert cov.flags.writeable
        with pytest.raises(ValueError):
            noise.cov[0, 0] = 3.0
        cov[0, 0] = 3.0
        assert noise.cov[0, 0] == 1.0

    def test_repr(self):
        assert repr(GaussianNoise(np.eye(4))) == "GaussianNoise(dim=4)"


# ============================================================================
# IndependentNoise
# ============================================================================


class TestIndependentNoise:
    """Test products of univariate distributions."""

    def test_dim_and_shapes(self, rng):
        noise = IndependentNoise([stats.norm(0, 1), stats.uniform(0, 1)])
        assert noise.dim == 2
        assert noise.sample(rng).shape == (2,)
        assert noise.sample(rng, 6).shape == (2, 6)

    def test_components_drive_their_coordinate(self, rng):
        noise = IndependentNoise([stats.uniform(10, 1), stats.uniform(-5, 1)])
        draws = noise.sample(rng, 200)

        assert np.all((draws[0] >= 10) & (draws[0] <= 11))
        assert np.all((draws[1] >= -5) & (draws[1] <= -4))

    def test_discrete_component(self, rng):
        draws = IndependentNoise([stats.poisson(3)]).sample(rng, 300)

        assert draws.dtype == np.float64
        np.testing.assert_array_equal(draws, np.round(draws))
        assert draws.mean() == pytest.approx(3.0, abs=0.4)

    def test_cauchy_component(self, rng):
        draws = IndependentNoise([stats.cauchy(0.0, 1e-3)]).sample(rng, 1000)
        assert np.median(np.abs(draws)) == pytest.approx(1e-3, rel=0.3)

    def test_requires_components(self):
        with pytest.raises(ValueError):
            IndependentNoise([])

    def test_components_property(self):
        components = [stats.norm(0, 1)]
        assert IndependentNoise(components).components == tuple(components)


# ============================================================================
# DistributionNoise
# ============================================================================


class TestDistributionNoise:
    """Test the generic multivariate wrapper."""

    def test_multivariate_t(self, rng):
        dist = stats.multivariate_t(np.zeros(2), np.eye(2), df=5)
        noise = DistributionNoise(dist, dim=2)

        assert noise.dim == 2
        assert noise.distribution is dist
        assert noise.sample(rng).shape == (2,)
        assert noise.sample(rng, 5).shape == (2, 5)

    def test_invalid_dim(self):
        with pytest.raises(ValueError):
            DistributionNoise(stats.norm(), dim=0)


# ============================================================================
# ZeroNoise
# ============================================================================


class TestZeroNoise:
    """Test the degenerate generator."""

    def test_zeros(self, rng):
        noise = ZeroNoise(3)
        np.testing.assert_array_equal(noise.sample(rng), np.zeros(3))
        np.testing.assert_array_equal(noise.sample(rng, 4), np.zeros((3, 4)))

    def test_zero_draws(self, rng):
        assert ZeroNoise(2).sample(rng, 0).shape == (2, 0)

    def test_invalid_dim(self):
        with pytest.raises(ValueError):
            ZeroNoise(0)

    def test_repr(self):
        assert repr(ZeroNoise(2)) == "ZeroNoise(dim=2)"


# ============================================================================
# Random Source
# ============================================================================


class TestRandomSource:
    """Test rng handling shared by all generators."""

    def test_same_seed_same_draws(self):
        noise = GaussianNoise(np.eye(2))
        np.testing.assert_array_equal(noise.sample(5, 10), noise.sample(5, 10))

    def test_generator_and_seed_agree(self):
        noise = GaussianNoise(np.eye(2))
        np.testing.assert_array_equal(
            noise.sample(np.random.default_rng(9), 3), noise.sample(9, 3)
        )

    def test_different_seeds_differ(self):
        noise = GaussianNoise(np.eye(2))
        assert not np.array_equal(noise.sample(1, 10), noise.sample(2, 10))

    def test_unseeded_draws(self):
        assert GaussianNoise(np.eye(2)).sample().shape == (2,)

    def test_invalid_rng(self):
        with pytest.raises(TypeError):
            GaussianNoise(np.eye(2)).sample("seed")

    def test_negative_count(self, rng):
        with pytest.raises(ValueError, match="non-negative"):
            ZeroNoise(1).sample(rng, -1)


class TestCustomGenerator:
    """Test subclassing NoiseGenerator."""

    def test_subclass_gets_layout_handling(self, rng):
        class Ones(NoiseGenerator):
            dim = 2

            def _draw(self, rng, n):
                # flat; sample() restores (n, dim)
                return np.ones(n * 2)

        noise = Ones()
        assert noise.sample(rng).shape == (2,)
        assert noise.sample(rng, 3).shape == (2, 3)

    def test_abstract_members_required(self):
        with pytest.raises(TypeError):
            NoiseGenerator()
