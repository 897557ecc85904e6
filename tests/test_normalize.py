# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: test_normalize.py
# Date: 2025/04/14 10:41:05
# Description: Tests of the block normalization
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
"""Tests for the per-block normalization"""
import unittest
import numpy as np
import pandas as pd

from codes.jointOmicFactor import (
    BlockNormalizer,
    OmicBlockSet,
    DegenerateFeatureError,
    DegenerateBlockError,
    SignConstraintError,
)


def make_block_set(frames):
    return OmicBlockSet.from_frames(frames)


class TestBlockNormalizer(unittest.TestCase):

    def setUp(self):
        rng = np.random.default_rng(42)
        samples = [f"s{i}" for i in range(6)]
        self.block_set = make_block_set({
            "mRNA": pd.DataFrame(rng.uniform(0.1, 5, size=(8, 6)), index=[f"g{i}" for i in range(8)], columns=samples),
            "miRNA": pd.DataFrame(rng.uniform(0.1, 2, size=(4, 6)), index=[f"m{i}" for i in range(4)], columns=samples),
        })

    def test_feature_sums_and_frobenius(self):
        normalizer = BlockNormalizer()
        for block in self.block_set:
            X = normalizer.FeatureSumNormalize(block.values(), block.features, block.name)
            np.testing.assert_allclose(X.sum(axis=1), 1.0)

        for block in normalizer.normalize(self.block_set):
            X = block.values()
            self.assertAlmostEqual(np.linalg.norm(X, ord="fro"), 1.0)
            row_sums = X.sum(axis=1)
            np.testing.assert_allclose(row_sums, row_sums[0])
            self.assertTrue(np.all(X >= 0))

    def test_idempotent(self):
        normalizer = BlockNormalizer()
        once = normalizer.normalize(self.block_set)
        twice = normalizer.normalize(once)
        for a, b in zip(once, twice):
            np.testing.assert_allclose(a.values(), b.values(), atol=1e-12)

    def test_input_untouched(self):
        before = self.block_set.stacked()
        BlockNormalizer().normalize(self.block_set)
        np.testing.assert_array_equal(before, self.block_set.stacked())

    def test_zero_sum_feature(self):
        block_set = make_block_set({"mRNA": pd.DataFrame([[1.0, 2.0], [0.0, 0.0]], index=["g1", "g2"], columns=["s1", "s2"])})
        with self.assertRaises(DegenerateFeatureError):
            BlockNormalizer().normalize(block_set)

    def test_zero_block(self):
        with self.assertRaises(DegenerateBlockError):
            BlockNormalizer().FrobeniusNormalize(np.zeros((3, 2)), "mRNA")

    def test_reject_negative(self):
        block_set = make_block_set({"CNV": pd.DataFrame([[1.0, -2.0], [1.0, 1.0]], index=["c1", "c2"], columns=["s1", "s2"])})
        with self.assertRaises(SignConstraintError):
            BlockNormalizer(sign_policy="reject").normalize(block_set)

    def test_split_signs(self):
        block_set = make_block_set({"CNV": pd.DataFrame([[1.0, -2.0, 3.0], [0.0, 1.0, 2.0]], index=["c1", "c2"], columns=["s1", "s2", "s3"])})
        block = BlockNormalizer(sign_policy="split").normalize(block_set)["CNV"]
        self.assertEqual(block.features, ["c1+", "c2+", "c1-"])
        self.assertTrue(np.all(block.values() >= 0))
        self.assertAlmostEqual(np.linalg.norm(block.values(), ord="fro"), 1.0)
        self.assertEqual(block.values()[2].tolist()[0], 0.0)

    def test_split_keeps_all_zero_feature_degenerate(self):
        block_set = make_block_set({"CNV": pd.DataFrame([[1.0, -2.0], [0.0, 0.0]], index=["c1", "c2"], columns=["s1", "s2"])})
        with self.assertRaises(DegenerateFeatureError):
            BlockNormalizer(sign_policy="split").normalize(block_set)

    def test_invalid_policy(self):
        with self.assertRaises(ValueError):
            BlockNormalizer(sign_policy="abs")


if __name__ == "__main__":
    unittest.main()
