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
Test cases for the core functions in cumfreq.
"""
import numpy as np
import pytest

import cumfreq
from cumfreq import core


class TestIsInteger:
    """
    Tests for the function used to determine if a value is an integer.
    """

    def test_good_values(self):
        numpy_int_array = np.array([100], dtype=int)
        good_values = [
            -1,
            0,
            10**6,
            100_000,
            0x123,
            2**64 - 1,
            numpy_int_array[0],
            np.uint64(2**64 - 1),
            np.int8(3),
        ]
        for good_value in good_values:
            assert core.isinteger(good_value)

    def test_bad_values(self):
        numpy_float_array = np.array([100.0], dtype=np.float64)
        bad_values = [
            [],
            None,
            {},
            True,
            np.array([10], dtype=int),
            numpy_float_array[0],
            1.0,
            1.1,
            "1",
            "1.1",
            1e-3,
        ]
        for bad_value in bad_values:
            assert not core.isinteger(bad_value)


class TestLowbit:
    @pytest.mark.parametrize(
        ("i", "expected"),
        [(1, 1), (2, 2), (3, 1), (4, 4), (6, 2), (12, 4), (2**31, 2**31)],
    )
    def test_values(self, i, expected):
        assert core.lowbit(i) == expected


class TestIsPowerOfTwo:
    @pytest.mark.parametrize("n", [1, 2, 4, 1024, 2**31])
    def test_powers(self, n):
        assert core.is_power_of_two(n)

    @pytest.mark.parametrize("n", [-4, 0, 3, 6, 1023, 2**31 + 1])
    def test_non_powers(self, n):
        assert not core.is_power_of_two(n)


class TestConstants:
    def test_limits(self):
        assert cumfreq.MAX_SIZE == 2**31
        assert cumfreq.MAX_BITS == 31
        assert cumfreq.UINT64_MAX == 2**64 - 1
        assert cumfreq.BEFORE_FIRST == -1

    def test_version(self):
        assert isinstance(cumfreq.__version__, str)


class TestTextTable:
    def test_layout(self):
        table = core.text_table(
            caption="caption",
            column_titles=["a", "bb"],
            column_alignments="<>",
            data=[["1", "2"], ["333", "4"]],
        )
        lines = table.splitlines()
        assert lines[0] == "caption"
        assert lines[1].startswith("┌")
        assert lines[3].startswith("├")
        assert lines[-1].startswith("└")
        assert len(lines) == 7
        assert len({len(line) for line in lines[1:]}) == 1
        assert "333" in lines[5]
