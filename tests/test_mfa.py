# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: test_mfa.py
# Date: 2025/04/14 11:15:52
# Description: Tests of the MFA engine
# 
# This program/software is licensed under MIT License
# Copyright (c) 2025 Tien-Thanh Bui (bu1th4nh) / UCF Computational Biology Lab.
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
# 
# This software is written with dedication in the University of Central Florida, EPCOT and the Magic Kingdom.
# -----------------------------------------------------------------------------------------------


# pylint: disable=invalid-name,missing-class-docstring
"""Tests for the multiple factor analysis engine"""
import unittest
import numpy as np
import pandas as pd

from codes.jointOmicFactor import MFAEngine, OmicBlockSet, RankDeficiencyError, DegenerateBlockError


def random_block_set(seed=0, n_samples=12, sizes=(10, 6)):
    rng = np.random.default_rng(seed)
    samples = [f"s{i}" for i in range(n_samples)]
    return OmicBlockSet.from_frames({
        f"omic{d}": pd.DataFrame(rng.standard_normal((m, n_samples)), index=[f"o{d}_f{i}" for i in range(m)], columns=samples)
        for d, m in enumerate(sizes)
    })


class TestMFAEngine(unittest.TestCase):

    def test_deterministic(self):
        block_set = random_block_set()
        first, first_loadings = MFAEngine(block_set, n_components=3).solve()
        second, second_loadings = MFAEngine(block_set, n_components=3).solve()
        np.testing.assert_array_equal(first.to_numpy(), second.to_numpy())
        for name in block_set.names:
            np.testing.assert_array_equal(first_loadings[name].to_numpy(), second_loadings[name].to_numpy())

    def test_shapes_and_provenance(self):
        block_set = random_block_set()
        embedding, loadings = MFAEngine(block_set, n_components=2).solve()
        self.assertEqual(embedding.scores.shape, (12, 2))
        self.assertEqual(embedding.samples, block_set.samples)
        self.assertEqual(embedding.engine, "MFA")
        self.assertEqual(loadings["omic0"].shape, (10, 2))
        self.assertEqual(loadings["omic1"].shape, (6, 2))
        self.assertEqual(set(embedding.hyperparameters["block_weights"]), {"omic0", "omic1"})
        self.assertTrue(embedding.converged)

        # Component scores are centered and ordered by variance
        np.testing.assert_allclose(embedding.to_numpy().mean(axis=0), 0.0, atol=1e-10)
        variances = embedding.to_numpy().var(axis=0)
        self.assertGreaterEqual(variances[0], variances[1])

    def test_block_weighting(self):
        block_set = random_block_set()
        weighted, weights = MFAEngine(block_set).WeightBlocks()
        for Y in weighted:
            self.assertAlmostEqual(np.linalg.svd(Y, compute_uv=False)[0], 1.0)
        self.assertEqual(len(weights), 2)

    def test_truncated_to_usable_rank(self):
        block_set = random_block_set(n_samples=5)
        embedding, _ = MFAEngine(block_set, n_components=10).solve()
        self.assertEqual(embedding.n_components, 4)

    def test_rank_deficiency(self):
        rng = np.random.default_rng(1)
        v = rng.standard_normal(8)
        samples = [f"s{i}" for i in range(8)]
        block_set = OmicBlockSet.from_frames({
            "omic0": pd.DataFrame(np.outer(rng.standard_normal(5), v), columns=samples),
            "omic1": pd.DataFrame(np.outer(rng.standard_normal(3), v), columns=samples),
        })
        with self.assertRaises(RankDeficiencyError):
            MFAEngine(block_set).solve()

    def test_constant_block(self):
        block_set = random_block_set()
        constant = OmicBlockSet([block_set[0], block_set[1].with_data(pd.DataFrame(np.ones((6, 12)), index=block_set[1].data.index, columns=block_set.samples))])
        with self.assertRaises(DegenerateBlockError):
            MFAEngine(constant).solve()


if __name__ == "__main__":
    unittest.main()
