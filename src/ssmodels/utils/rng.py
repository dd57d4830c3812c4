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

"""Random source normalisation."""

import numpy as np

from ssmodels.types.core import RandomSource


def as_generator(rng: RandomSource = None) -> np.random.Generator:
    """
    Turn any accepted random source into a ``np.random.Generator``.

    Parameters
    ----------
    rng : None, int or np.random.Generator
        None gives a fresh unseeded generator scoped to the caller, an int
        seeds a new generator, a Generator is returned unchanged.

    Returns
    -------
    np.random.Generator

    Raises
    ------
    TypeError
        For anything else (including the legacy ``np.random.RandomState``).

    Examples
    --------
    >>> rng = as_generator(42)
    >>> rng is as_generator(rng)
    True
    """
    if rng is None:
        return np.random.default_rng()
    if isinstance(rng, np.random.Generator):
        return rng
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        return np.random.default_rng(int(rng))
    raise TypeError(
        f"rng must be None, an int seed or a numpy.random.Generator, got {type(rng).__name__}"
    )


__all__ = ["as_generator"]
