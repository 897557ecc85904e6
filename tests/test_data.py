# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: test_data.py
# Date: 2025/04/14 10:02:11
# Description: Tests of the omic block data model
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
"""Tests for the omic block data model"""
import unittest
import warnings
import numpy as np
import pandas as pd

from codes.jointOmicFactor import (
    OmicBlock,
    OmicBlockSet,
    CovariateTable,
    LoadingSet,
    Embedding,
    ConvergenceState,
    JointOmicFactorError,
    SampleAlignmentError,
    InvalidNoiseModelError,
    DegenerateFeatureError,
    latent_columns,
)


def make_frame(n_features, samples, seed=0, prefix="f"):
    rng = np.random.default_rng(seed)
    return pd.DataFrame(
        rng.uniform(size=(n_features, len(samples))),
        index=[f"{prefix}{i}" for i in range(n_features)],
        columns=samples,
    )


class TestOmicBlock(unittest.TestCase):

    def test_block_copies_and_casts(self):
        frame = pd.DataFrame([[1, 2], [3, 4]], index=["g1", "g2"], columns=["s1", "s2"])
        block = OmicBlock("mRNA", frame)
        frame.iloc[0, 0] = 100
        self.assertEqual(block.data.iloc[0, 0], 1.0)
        self.assertEqual(block.data.dtypes.iloc[0], np.float64)
        self.assertEqual(block.n_features, 2)
        self.assertEqual(block.samples, ["s1", "s2"])

    def test_float_block_is_copied_without_warnings(self):
        frame = pd.DataFrame([[1.5, 2.5], [3.5, 4.5]], index=["g1", "g2"], columns=["s1", "s2"])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            block = OmicBlock("mRNA", frame)
        frame.iloc[1, 1] = -1.0
        self.assertEqual(block.data.iloc[1, 1], 4.5)
        self.assertIsNot(block.data, frame)

    def test_invalid_noise_model(self):
        with self.assertRaises(InvalidNoiseModelError):
            OmicBlock("mRNA", make_frame(3, ["s1", "s2"]), noise_model="poisson")

    def test_nan_rejected(self):
        frame = make_frame(3, ["s1", "s2"])
        frame.iloc[1, 1] = np.nan
        with self.assertRaises(ValueError):
            OmicBlock("mRNA", frame)

    def test_duplicated_samples_rejected(self):
        with self.assertRaises(SampleAlignmentError):
            OmicBlock("mRNA", make_frame(3, ["s1", "s1"]))


class TestOmicBlockSet(unittest.TestCase):

    def setUp(self):
        self.samples = ["s1", "s2", "s3", "s4"]
        self.block_set = OmicBlockSet.from_frames(
            {"mRNA": make_frame(5, self.samples, 0), "mutation": make_frame(3, self.samples, 1)},
            {"mutation": "binary"},
        )

    def test_dimensions(self):
        self.assertEqual(self.block_set.D, 2)
        self.assertEqual(self.block_set.N, 4)
        self.assertEqual(self.block_set.m, [5, 3])
        self.assertEqual(self.block_set.M, 8)
        self.assertEqual(self.block_set.noise_models, ["continuous", "binary"])
        self.assertEqual(self.block_set.stacked().shape, (8, 4))
        self.assertEqual(self.block_set.split_indices().tolist(), [5])

    def test_lookup_by_name_and_position(self):
        self.assertIs(self.block_set["mutation"], self.block_set[1])
        with self.assertRaises(KeyError):
            self.block_set["CNV"]

    def test_unaligned_blocks_rejected(self):
        blocks = [
            OmicBlock("mRNA", make_frame(5, self.samples)),
            OmicBlock("CNV", make_frame(5, list(reversed(self.samples)))),
        ]
        with self.assertRaises(SampleAlignmentError):
            OmicBlockSet(blocks)

    def test_wrong_number_of_noise_models(self):
        with self.assertRaises(ValueError):
            OmicBlockSet.from_frames({"mRNA": make_frame(5, self.samples)}, ["continuous", "binary"])


class TestOutputs(unittest.TestCase):

    def test_loading_set_returns_copies(self):
        frame = pd.DataFrame(np.ones((3, 2)), columns=latent_columns(2))
        loadings = LoadingSet("MFA", {"mRNA": frame})
        loadings["mRNA"].iloc[0, 0] = -5
        frame.iloc[1, 1] = -5
        self.assertTrue(np.all(loadings["mRNA"].to_numpy() == 1))
        self.assertEqual(loadings.names, ["mRNA"])
        self.assertEqual(loadings.stacked().shape, (3, 2))

    def test_embedding_convergence_flag(self):
        scores = pd.DataFrame(np.zeros((2, 2)), index=["s1", "s2"], columns=latent_columns(2))
        self.assertTrue(Embedding(scores, "MFA").converged)
        self.assertFalse(Embedding(scores, "JointNMF", state=ConvergenceState.MAX_ITER_REACHED).converged)
        self.assertEqual(Embedding(scores, "MFA").n_components, 2)

    def test_covariate_reindex(self):
        table = CovariateTable(pd.Series(["A", "B", "A"], index=["s1", "s2", "s3"]))
        self.assertEqual(table.reindex(["s3", "s1"]).labels.tolist(), ["A", "A"])
        self.assertEqual(table.categories, ["A", "B"])
        with self.assertRaises(SampleAlignmentError):
            table.reindex(["s4"])

    def test_resolve_label_from_text(self):
        coded = CovariateTable(pd.Series([0, 1, 2, 1], index=["s1", "s2", "s3", "s4"]))
        self.assertEqual(coded.resolve_label("1"), 1)
        self.assertEqual(coded.resolve_label("2.0"), 2)
        self.assertEqual(coded.resolve_label(0), 0)
        self.assertEqual(coded.resolve_label("7"), "7")
        self.assertIsNone(coded.resolve_label(None))

        named = CovariateTable(pd.Series(["LumA", "Basal"], index=["s1", "s2"]))
        self.assertEqual(named.resolve_label("Basal"), "Basal")
        flags = CovariateTable(pd.Series([True, False], index=["s1", "s2"]))
        self.assertIs(flags.resolve_label("True"), True)

    def test_errors_are_value_errors(self):
        self.assertTrue(issubclass(DegenerateFeatureError, JointOmicFactorError))
        self.assertTrue(issubclass(JointOmicFactorError, ValueError))


if __name__ == "__main__":
    unittest.main()
