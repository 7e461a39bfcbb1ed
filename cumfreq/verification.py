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
Exhaustive verification of the Fenwick tree against brute force sums.

Every check is a direct comparison with sums computed by plain
accumulation over the weights, so a failure always points at the tree.
The cost is quadratic in the number of positions (range sums) and linear
in the total weight (inversion), so sizes are limited to
``2**core.MAX_VERIFY_BITS``.
"""
from __future__ import annotations

import dataclasses
import itertools
import logging

from . import core
from .exceptions import RangeError
from .exceptions import VerificationError
from .fenwick import FenwickTree

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class VerificationReport:
    """
    Summary of the checks run against a single tree.
    """

    num_positions: int
    total: int
    num_prefix_checks: int = 0
    num_range_checks: int = 0
    num_inversion_checks: int = 0


def _check(condition, message):
    if not condition:
        raise VerificationError(message)


def brute_force_prefix_sums(weights):
    """
    Returns the list ``S`` of length ``n + 1`` where ``S[i]`` is the sum of
    the weights at positions strictly less than ``i``.
    """
    return list(itertools.accumulate((int(w) for w in weights), initial=0))


def _verify_inversion(tree, weights, S, report, verbose):
    n = len(tree)
    total = S[-1]
    for target in range(total + 1):
        p = tree.find_by_cumulative(target)
        if verbose:
            logger.debug(
                "target %3d: position %2d prefix_sum(%2d) = %3d",
                target,
                p,
                p + 1,
                S[p + 1],
            )
        _check(
            -1 <= p < n,
            f"find_by_cumulative({target}) = {p} is not a valid result",
        )
        _check(
            S[p + 1] <= target,
            f"find_by_cumulative({target}) = {p} but prefix_sum({p + 1}) = "
            f"{S[p + 1]}",
        )
        if p + 1 < n:
            _check(
                target < S[p + 2],
                f"find_by_cumulative({target}) = {p} but prefix_sum({p + 2}) = "
                f"{S[p + 2]}",
            )
        _check(
            (p == core.BEFORE_FIRST) == (target < weights[0]),
            f"find_by_cumulative({target}) = {p} with first weight {weights[0]}",
        )
        report.num_inversion_checks += 1
    for target in {total, total + 1, min(2 * total, core.UINT64_MAX), core.UINT64_MAX}:
        p = tree.find_by_cumulative(target)
        _check(
            p == n - 1,
            f"find_by_cumulative({target}) = {p} for total weight {total}",
        )
        report.num_inversion_checks += 1


def verify_tree(weights, *, verbose=False) -> VerificationReport:
    """
    Builds a tree from the specified weights and checks every prefix sum,
    every range sum and, if the number of weights is a power of two, the
    inversion of every cumulative weight from 0 to the total.

    :param weights: The weights to build the tree from.
    :param bool verbose: If True, log a diagnostic line at DEBUG level for
        every position and target checked.
    :return: A report describing the checks made.
    :rtype: VerificationReport
    :raises VerificationError: If any check fails.
    """
    weights = [int(w) for w in weights]
    tree = FenwickTree.build(weights)
    n = len(tree)
    S = brute_force_prefix_sums(weights)
    report = VerificationReport(num_positions=n, total=S[-1])

    _check(tree.prefix_sum(-1) == 0, "prefix_sum(-1) is not 0")
    report.num_prefix_checks += 1
    for i in range(n + 1):
        value = tree.prefix_sum(i)
        if verbose:
            logger.debug("prefix_sum(%2d): %3d", i, S[i])
        _check(value == S[i], f"prefix_sum({i}) = {value}; expected {S[i]}")
        report.num_prefix_checks += 1
    _check(tree.total == S[-1], f"total = {tree.total}; expected {S[-1]}")

    for i in range(n + 1):
        for j in range(i, n + 1):
            value = tree.range_sum(i, j)
            _check(
                value == S[j] - S[i],
                f"range_sum({i}, {j}) = {value}; expected {S[j] - S[i]}",
            )
            report.num_range_checks += 1

    if core.is_power_of_two(n):
        _verify_inversion(tree, weights, S, report, verbose)
    logger.debug("Verified %s", report)
    return report


def run_verification(max_bits=10, *, verbose=False):
    """
    Runs the full verification suite. For both the weights ``a[i] = i`` and
    ``a[i] = i + 1`` the saturation and sentinel behaviour of a two position
    tree is checked, then every power of two size from 2 to
    ``2**max_bits`` is verified with :func:`verify_tree`. Finally, a four
    position tree is verified with diagnostics.

    :param int max_bits: The binary logarithm of the largest size to check.
    :param bool verbose: Log diagnostics for every size, not just the last.
    :return: The list of reports, one for each tree verified.
    :rtype: list
    """
    max_bits = core._as_int(max_bits, "max_bits")
    if not 1 <= max_bits <= core.MAX_VERIFY_BITS:
        raise RangeError(
            f"max_bits must be between 1 and {core.MAX_VERIFY_BITS}; got {max_bits}"
        )
    size = 1 << max_bits
    reports = []
    for offset in range(2):
        weights = [j + offset for j in range(size)]
        tree = FenwickTree.build(weights[:2])
        for target in [tree.total + 1, core.UINT64_MAX]:
            p = tree.find_by_cumulative(target)
            _check(p == 1, f"find_by_cumulative({target}) = {p}; expected 1")
        # The sentinel is only returned when the first weight is non-zero.
        expected = 0 if weights[0] == 0 else core.BEFORE_FIRST
        p = tree.find_by_cumulative(0)
        _check(p == expected, f"find_by_cumulative(0) = {p}; expected {expected}")

        for bits in range(1, max_bits + 1):
            n = 1 << bits
            reports.append(verify_tree(weights[:n], verbose=verbose))
    reports.append(verify_tree([j + 1 for j in range(4)], verbose=True))
    return reports
