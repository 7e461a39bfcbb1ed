#
# Copyright (C) 2024 University of Oxford
#
# This file is part of cumfreq.
#
# cumfreq is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# cumfreq is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with cumfreq.  If not, see <http://www.gnu.org/licenses/>.
#
"""
A Fenwick tree (also known as a Binary Indexed Tree) over non-negative
64 bit integer weights, based on "A new data structure for cumulative
frequency tables", Software Practice and Experience, Vol 24, No 3,
pp 327 336 Mar 1994.
"""
from __future__ import annotations

import itertools
import logging

import numpy as np

from . import core
from .exceptions import AccumulatorOverflowError
from .exceptions import PreconditionError
from .exceptions import RangeError

logger = logging.getLogger(__name__)


def _check_size(num_positions):
    if not core.MIN_SIZE <= num_positions <= core.MAX_SIZE:
        raise RangeError(
            f"Number of positions must be between {core.MIN_SIZE} and "
            f"{core.MAX_SIZE}; got {num_positions}"
        )


def _check_u64(value, name):
    value = core._as_int(value, name)
    if not 0 <= value <= core.UINT64_MAX:
        raise RangeError(f"{name} must be between 0 and 2**64 - 1; got {value}")
    return value


class FenwickTree:
    """
    A Fenwick tree representing the cumulative frequency table of an array
    of ``n`` non-negative weights, indexed by zero-based positions.

    The weights are not stored directly. Instead, for each one-based
    position ``i`` the cell ``cells[i - 1]`` holds the sum of the weights
    over the one-based range ``(i - lowbit(i), i]``, where ``lowbit(i)`` is
    the least significant set bit of ``i``. Updates and prefix queries
    therefore touch at most ``log2(n)`` cells.

    All sums must fit in an unsigned 64 bit integer: operations that would
    take the total weight above ``2**64 - 1`` raise an
    :class:`.AccumulatorOverflowError` and leave the tree unchanged.

    The tree has no internal locking. Callers sharing a tree between
    threads must serialise updates against each other and against queries.

    :param int num_positions: The number of positions in the tree, each
        of which initially has zero weight. Must be between 2 and ``2**31``.
    """

    def __init__(self, num_positions):
        num_positions = core._as_int(num_positions, "num_positions")
        _check_size(num_positions)
        self._cells = np.zeros(num_positions, dtype=np.uint64)

    @classmethod
    def build(cls, weights) -> FenwickTree:
        """
        Returns a new tree holding the specified weights. The weights are
        copied, and the input sequence is not retained.

        :param weights: A sequence of between 2 and ``2**31`` non-negative
            integers, each less than ``2**64``.
        :return: A new FenwickTree.
        :rtype: FenwickTree
        """
        if isinstance(weights, np.ndarray):
            if weights.ndim != 1:
                raise ValueError("Weights must be a one dimensional array")
            if weights.dtype.kind not in "iu":
                raise TypeError(f"Weights must be integers, not {weights.dtype}")
            values = weights.tolist()
        else:
            values = [core._as_int(weight, "weight") for weight in weights]
        n = len(values)
        _check_size(n)
        bad = [j for j, value in enumerate(values) if value < 0]
        if len(bad) > 0:
            raise RangeError(f"Weight values negative at indexes {bad}")
        bad = [j for j, value in enumerate(values) if value > core.UINT64_MAX]
        if len(bad) > 0:
            raise RangeError(f"Weight values larger than 2**64 - 1 at indexes {bad}")
        # Every cell holds the sum of a range of weights, so bounding the
        # total bounds every cell.
        total = sum(values)
        if total > core.UINT64_MAX:
            raise AccumulatorOverflowError(
                f"Total weight {total} does not fit in 64 bits"
            )

        cells = values
        for i in range(1, n + 1):
            parent = i + core.lowbit(i)
            if parent <= n:
                cells[parent - 1] += cells[i - 1]
        tree = cls(n)
        tree._cells = np.array(cells, dtype=np.uint64)
        logger.debug("Built tree over %d positions with total weight %d", n, total)
        return tree

    @property
    def num_positions(self) -> int:
        """
        The number of positions in this tree.
        """
        return len(self._cells)

    @property
    def cells(self):
        """
        A read-only view of the accumulator cells.
        """
        cells = self._cells.view()
        cells.flags.writeable = False
        return cells

    @property
    def total(self) -> int:
        """
        The sum of the weights over all positions.
        """
        return self.prefix_sum(self.num_positions)

    def _check_position(self, position):
        position = core._as_int(position, "position")
        if not 0 <= position < self.num_positions:
            raise RangeError(
                f"Position {position} out of bounds [0, {self.num_positions})"
            )
        return position

    def _update(self, position, delta):
        # The caller has checked that the result keeps every cell in range.
        n = self.num_positions
        j = position + 1
        while j <= n:
            self._cells[j - 1] = int(self._cells[j - 1]) + delta
            j += core.lowbit(j)

    def increment(self, position, delta):
        """
        Adds ``delta`` to the weight at the specified position.

        :param int position: The zero-based position to update.
        :param int delta: The non-negative amount to add.
        """
        position = self._check_position(position)
        delta = _check_u64(delta, "delta")
        total = self.total
        if total + delta > core.UINT64_MAX:
            raise AccumulatorOverflowError(
                f"Adding {delta} to total weight {total} overflows 64 bits"
            )
        self._update(position, delta)

    def set_value(self, position, value):
        """
        Sets the weight at the specified position to the specified value.
        """
        position = self._check_position(position)
        value = _check_u64(value, "value")
        delta = value - self.get_value(position)
        total = self.total
        if total + delta > core.UINT64_MAX:
            raise AccumulatorOverflowError(
                f"Setting position {position} to {value} takes the total "
                f"weight over 64 bits"
            )
        self._update(position, delta)

    def prefix_sum(self, position) -> int:
        """
        Returns the sum of the weights at all positions strictly less than
        the specified position. Both -1 and 0 give an empty sum.

        :param int position: A position between -1 and the number of
            positions (inclusive).
        :return: The cumulative weight before ``position``.
        :rtype: int
        """
        position = core._as_int(position, "position")
        if not -1 <= position <= self.num_positions:
            raise RangeError(
                f"Position {position} out of bounds [-1, {self.num_positions}]"
            )
        s = 0
        j = position - 1
        while j >= 0:
            s += int(self._cells[j])
            j -= core.lowbit(j + 1)
        return s

    def range_sum(self, start, stop) -> int:
        """
        Returns the sum of the weights over the positions in
        ``[start, stop)``.
        """
        start = core._as_int(start, "start")
        stop = core._as_int(stop, "stop")
        if not 0 <= start <= stop <= self.num_positions:
            raise RangeError(f"Invalid range: start={start}, stop={stop}")
        return self.prefix_sum(stop) - self.prefix_sum(start)

    def get_value(self, position) -> int:
        """
        Returns the weight at the specified position.
        """
        position = self._check_position(position)
        # Subtract the cells covering (parent(k), k - 1] from cell k, where
        # k is the one-based position and parent(k) clears its lowest bit.
        k = position + 1
        value = int(self._cells[k - 1])
        parent = k & (k - 1)
        j = k - 1
        while j != parent:
            value -= int(self._cells[j - 1])
            j &= j - 1
        return value

    def values(self):
        """
        Returns the weights at every position as a new numpy array.

        :rtype: numpy.ndarray
        """
        n = self.num_positions
        values = self._cells.tolist()
        # Undo the build pass, parents before children.
        for i in range(n, 0, -1):
            parent = i + core.lowbit(i)
            if parent <= n:
                values[parent - 1] -= values[i - 1]
        return np.array(values, dtype=np.uint64)

    def find_by_cumulative(self, target) -> int:
        """
        Returns the largest position ``p`` such that the sum of the weights
        at positions ``0`` to ``p`` inclusive is less than or equal to
        ``target``, i.e., ``prefix_sum(p + 1) <= target``. If the target is
        smaller than the weight at position 0, :data:`.BEFORE_FIRST` (-1) is
        returned, and any target greater than or equal to the total weight
        maps to the last position.

        For a target below the total weight, the position whose weight
        interval contains the target is therefore ``p + 1``.

        The search descends the implicit tree one bit at a time and only
        works for trees whose size is a power of two.

        :param int target: A cumulative weight between 0 and ``2**64 - 1``.
        :return: A position between -1 and ``n - 1``.
        :rtype: int
        :raises PreconditionError: If the number of positions is not a power
            of two.
        """
        n = self.num_positions
        if not core.is_power_of_two(n):
            raise PreconditionError(
                f"Cumulative search requires a power of two size; got {n}"
            )
        target = _check_u64(target, "target")
        cells = self._cells
        if target >= int(cells[n - 1]):
            return n - 1
        value = target
        i = 0
        mask = n >> 1
        while mask != 0:
            t = i + mask
            if t <= n and value >= int(cells[t - 1]):
                i = t
                value -= int(cells[t - 1])
            mask >>= 1
        return i - 1

    def sample(self, size=None, rng=None):
        """
        Chooses positions at random with probability proportional to their
        weights.

        :param size: If None (the default) return a single position,
            otherwise the shape of the array of positions to return.
        :param numpy.random.Generator rng: The random generator to use. If
            None, a new generator seeded from the system is used.
        :return: A position, or an array of positions if ``size`` is given.
        :raises PreconditionError: If the total weight is zero or the number
            of positions is not a power of two.
        """
        n = self.num_positions
        if not core.is_power_of_two(n):
            raise PreconditionError(
                f"Sampling requires a power of two size; got {n}"
            )
        total = self.total
        if total == 0:
            raise PreconditionError("Cannot sample: total weight is 0")
        if rng is None:
            rng = np.random.default_rng()
        if size is None:
            u = rng.integers(total, dtype=np.uint64)
            return self.find_by_cumulative(int(u)) + 1
        u = rng.integers(total, size=size, dtype=np.uint64)
        out = np.array(
            [self.find_by_cumulative(int(x)) + 1 for x in u.ravel()], dtype=np.int64
        )
        return out.reshape(u.shape)

    def copy(self) -> FenwickTree:
        """
        Returns a deep copy of this tree.
        """
        other = type(self)(self.num_positions)
        other._cells[:] = self._cells
        return other

    def __len__(self):
        return self.num_positions

    def __eq__(self, other):
        if not isinstance(other, FenwickTree):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __repr__(self):
        return f"FenwickTree.build({self.values().tolist()!r})"

    def _display_table(self):
        values = self.values().tolist()
        cumulative = list(itertools.accumulate(values, initial=0))

        def format_row(position):
            return [
                str(position),
                str(values[position]),
                str(self._cells[position]),
                str(cumulative[position]),
            ]

        n = self.num_positions
        if n < 40:
            data = [format_row(j) for j in range(n)]
        else:
            data = [format_row(j) for j in range(10)]
            data.append(["⋯"] * 4)
            data += [format_row(j) for j in range(n - 10, n)]
        return ["position", "weight", "cell", "prefix_sum"], data

    def __str__(self):
        titles, data = self._display_table()
        return core.text_table(
            caption=f"FenwickTree: {self.num_positions} positions, "
            f"total weight {self.total}",
            column_titles=titles,
            column_alignments=">>>>",
            data=data,
        )


def build(weights) -> FenwickTree:
    """
    Returns a new :class:`.FenwickTree` holding the specified weights.
    Equivalent to :meth:`FenwickTree.build`.
    """
    return FenwickTree.build(weights)
