# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: test_nmf.py
# Date: 2025/04/14 13:48:30
# Description: Tests of the joint NMF engine
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
"""Tests for the joint non-negative matrix factorization"""
import unittest
import warnings
from unittest import mock
import numpy as np
import pandas as pd

from codes.jointOmicFactor import (
    JointNMFEngine,
    OmicBlockSet,
    BlockNormalizer,
    ConvergenceState,
    NonConvergenceWarning,
    SignConstraintError,
    DegenerateBlockError,
)


def non_negative_block_set(seed=0, n_samples=10, sizes=(12, 8)):
    rng = np.random.default_rng(seed)
    samples = [f"s{i}" for i in range(n_samples)]
    return OmicBlockSet.from_frames({
        f"omic{d}": pd.DataFrame(rng.uniform(0, 3, size=(m, n_samples)), index=[f"o{d}_f{i}" for i in range(m)], columns=samples)
        for d, m in enumerate(sizes)
    })


class TestJointNMFEngine(unittest.TestCase):

    def setUp(self):
        self.block_set = BlockNormalizer().normalize(non_negative_block_set())

    def test_non_negative_and_monotone(self):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NonConvergenceWarning)
            embedding, loadings = JointNMFEngine(self.block_set, k=3, max_iter=300, tol=1e-9, random_state=0).solve()

        self.assertTrue(np.all(embedding.to_numpy() >= 0))
        for name in loadings:
            self.assertTrue(np.all(loadings[name].to_numpy() >= 0))

        history = np.asarray(embedding.objective_history)
        self.assertTrue(np.all(np.diff(history) <= 1e-12 * history[0]))
        self.assertLessEqual(history[-1], history[0])

    def test_shapes(self):
        embedding, loadings = JointNMFEngine(self.block_set, k=2, max_iter=50, tol=1e-4, random_state=0).solve()
        self.assertEqual(embedding.scores.shape, (10, 2))
        self.assertEqual(loadings["omic0"].shape, (12, 2))
        self.assertEqual(loadings["omic1"].shape, (8, 2))
        self.assertEqual(loadings["omic1"].index.tolist(), self.block_set["omic1"].features)
        self.assertEqual(embedding.n_iter, len(embedding.objective_history) - 1)

    def test_max_iter_reached(self):
        engine = JointNMFEngine(self.block_set, k=2, max_iter=3, tol=0.0, random_state=0)
        with self.assertWarns(NonConvergenceWarning):
            embedding, _ = engine.solve()
        self.assertEqual(embedding.state, ConvergenceState.MAX_ITER_REACHED)
        self.assertEqual(engine.state, ConvergenceState.MAX_ITER_REACHED)
        self.assertEqual(embedding.n_iter, 3)
        self.assertFalse(embedding.converged)

    def test_divergence_reported(self):
        engine = JointNMFEngine(self.block_set, k=2, max_iter=50, tol=1e-12, random_state=0)
        with mock.patch("codes.jointOmicFactor._math.objective_function", side_effect=[4.0, 2.0, np.nan]):
            with self.assertWarnsRegex(NonConvergenceWarning, "NaN/Inf at iteration 2"):
                embedding, _ = engine.solve()
        self.assertEqual(embedding.state, ConvergenceState.MAX_ITER_REACHED)
        self.assertEqual(embedding.n_iter, 2)
        self.assertTrue(np.isnan(embedding.objective_history[-1]))
        self.assertTrue(np.all(np.isfinite(embedding.to_numpy())))

    def test_converged(self):
        embedding, _ = JointNMFEngine(self.block_set, k=2, max_iter=5000, tol=1e-3, random_state=0).solve()
        self.assertEqual(embedding.state, ConvergenceState.CONVERGED)

    def test_reproducible_and_restarts(self):
        single, _ = JointNMFEngine(self.block_set, k=2, max_iter=100, tol=1e-8, random_state=7).solve()
        again, _ = JointNMFEngine(self.block_set, k=2, max_iter=100, tol=1e-8, random_state=7).solve()
        np.testing.assert_array_equal(single.to_numpy(), again.to_numpy())

        # The first restart reproduces the single run, so the best of several cannot be worse
        multiple, _ = JointNMFEngine(self.block_set, k=2, max_iter=100, tol=1e-8, n_restarts=3, random_state=7).solve()
        self.assertLessEqual(min(multiple.objective_history), min(single.objective_history))

    def test_negative_input(self):
        block_set = non_negative_block_set()
        shifted = OmicBlockSet([block.with_data(block.data - 1.0) for block in block_set])
        with self.assertRaises(SignConstraintError):
            JointNMFEngine(shifted, k=2)

    def test_zero_block(self):
        block_set = non_negative_block_set()
        zero = OmicBlockSet([block_set[0], block_set[1].with_data(block_set[1].data * 0.0)])
        with self.assertRaises(DegenerateBlockError):
            JointNMFEngine(zero, k=2)

    def test_invalid_rank(self):
        with self.assertRaises(ValueError):
            JointNMFEngine(self.block_set, k=0)
        with self.assertRaises(ValueError):
            JointNMFEngine(self.block_set, k=11)


if __name__ == "__main__":
    unittest.main()
