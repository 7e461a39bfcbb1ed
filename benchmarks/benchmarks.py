# MIT License
#
# Copyright (c) 2024 cumfreq Developers
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
"""
Benchmarks for cumfreq using airspeed velocity.
"""
import numpy as np

import cumfreq


class FenwickTreeBenchmark:
    params = [2**10, 2**16, 2**20]
    param_names = ["num_positions"]

    def setup(self, num_positions):
        rng = np.random.default_rng(1)
        self.weights = rng.integers(0, 100, size=num_positions, dtype=np.uint64)
        self.tree = cumfreq.FenwickTree.build(self.weights)
        self.positions = rng.integers(0, num_positions, size=1000).tolist()
        self.targets = rng.integers(0, self.tree.total, size=1000).tolist()

    def time_build(self, num_positions):
        cumfreq.FenwickTree.build(self.weights)

    def time_increment(self, num_positions):
        for position in self.positions:
            self.tree.increment(position, 1)

    def time_prefix_sum(self, num_positions):
        for position in self.positions:
            self.tree.prefix_sum(position)

    def time_find_by_cumulative(self, num_positions):
        for target in self.targets:
            self.tree.find_by_cumulative(target)

    def time_values(self, num_positions):
        self.tree.values()
