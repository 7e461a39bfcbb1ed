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
Core functions and constants used throughout cumfreq.
"""
from __future__ import annotations

import numbers
from typing import Any
from typing import List

import numpy as np

__version__ = "0.1.0"

# Positions are addressed with signed 32 bit arithmetic, so a tree can hold at
# most 2**MAX_BITS cells.
MAX_BITS = 31
MIN_SIZE = 2
MAX_SIZE = 1 << MAX_BITS

UINT64_MAX = (1 << 64) - 1

# Returned by FenwickTree.find_by_cumulative when the target is smaller than
# the first weight.
BEFORE_FIRST = -1

# The exhaustive verification is quadratic in the tree size.
MAX_VERIFY_BITS = 12


def lowbit(i: int) -> int:
    """
    Returns the value of the least significant set bit of the specified
    positive integer.
    """
    assert i > 0
    return i & -i


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def isinteger(value: Any) -> bool:
    """
    Returns True if the specified value is an integer, including numpy
    integer scalars. Floats are rejected even when they have an integral
    value, as they cannot represent every 64 bit weight exactly.
    """
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _as_int(value: Any, name: str) -> int:
    if not isinteger(value):
        raise TypeError(f"{name} must be an integer, not {type(value).__name__}")
    return int(value)


def _text_table_row(data, alignments, widths):
    out_line = "│"
    for value, align, width in zip(data, alignments, widths):
        out_line += f"{value:{align}{width - 1}}│"
    return out_line + "\n"


def text_table(
    caption: str,
    column_titles: List[str],
    column_alignments: str,
    data: List[List[str]],
):
    """
    Returns a text table formatted with the specified data. Column alignments
    should be values used in Python's string formatting mini-language.
    """
    N = len(column_titles)
    assert len(column_alignments) == N
    widths = np.array([len(title) for title in column_titles], dtype=int)
    for row in data:
        assert N == len(row)
        for j in range(N):
            widths[j] = max(widths[j], len(row[j]))
    widths += 3

    hline = "─" * (sum(widths) - 1)
    out = f"{caption}\n"
    out += f"┌{hline}┐\n"
    out += _text_table_row(column_titles, column_alignments, widths)
    out += f"├{hline}┤\n"
    for row in data:
        out += _text_table_row(row, column_alignments, widths)
    out += f"└{hline}┘\n"
    return out
