# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _normalize.py
# Date: 2025/04/03 09:44:51
# Description: Block normalization: feature-sum, Frobenius norm and sign splitting
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


from typing import List, Tuple, Union, Literal, Any, Callable, Dict
import numpy as np
import pandas as pd
import logging

from ._data import OmicBlockSet, OmicBlock
from ._errors import DegenerateFeatureError, DegenerateBlockError, SignConstraintError



class BlockNormalizer:
    """
        Per-omic feature-sum normalization followed by per-block Frobenius normalization.
        Pure transform: a new `OmicBlockSet` is returned, the input is left untouched

        Control parameters:
        - `sign_policy`: Union[None, Literal["reject", "split"]]
            What to do with blocks holding negative entries
            - None: normalize the signed values as they are
            - 'reject': raise `SignConstraintError`
            - 'split': replace the block by its positive part and its negative part (both non-negative),
              doubling the feature count. A half which is identically zero carries nothing and is dropped
        - `zero_tol`: float
            Row sums and norms with absolute value under this tolerance are considered zero
        - `verbose`: bool
            Whether to print the debug information or not
    """

    sign_policy:    Union[None, Literal["reject", "split"]]
    zero_tol:       float
    verbose:        bool


    def __init__(
        self,
        sign_policy:    Union[None, Literal["reject", "split"]] = None,
        zero_tol:       float = 1e-12,
        verbose:        bool = False,
    ):
        if sign_policy not in (None, "reject", "split"): raise ValueError(f"Invalid sign policy: {sign_policy}")
        self.sign_policy = sign_policy
        self.zero_tol = zero_tol
        self.verbose = verbose


    from ._debug import debug


    def normalize(self, omic_blocks: OmicBlockSet) -> OmicBlockSet:
        normalized = []
        for block in omic_blocks:
            X = block.values()
            features = block.features

            if np.any(X < 0):
                if self.sign_policy == "reject":
                    raise SignConstraintError(f"Omic block {block.name} has {int(np.sum(X < 0))} negative value(s)")
                elif self.sign_policy == "split":
                    X, features = self.SplitSigns(X, features, block.name)

            X = self.FeatureSumNormalize(X, features, block.name)
            X = self.FrobeniusNormalize(X, block.name)
            normalized.append(block.with_data(pd.DataFrame(X, index=features, columns=block.data.columns)))

            self.debug(f"Normalized omic block {block.name}: {block.n_features} -> {X.shape[0]} features")

        return OmicBlockSet(normalized)


    def SplitSigns(
        self,
        X: np.ndarray,
        features: List[Any],
        block_name: str,
    ) -> Tuple[np.ndarray, List[str]]:
        """
            Split a signed (feature, sample) matrix into [max(X, 0); max(-X, 0)] with features suffixed `+` and `-`
        """
        self.FeatureSumNormalize(np.abs(X), features, block_name)  # An all-zero original feature stays degenerate

        positive, negative = np.clip(X, 0, None), np.clip(-X, 0, None)
        split_X = np.concatenate([positive, negative], axis=0)
        split_features = [f"{feature}+" for feature in features] + [f"{feature}-" for feature in features]

        keep = np.any(split_X > 0, axis=1)
        if not np.all(keep):
            logging.info(f"Omic block {block_name}: dropped {int(np.sum(~keep))} identically zero sign-split feature(s)")
        return split_X[keep], [feature for feature, kept in zip(split_features, keep) if kept]


    def FeatureSumNormalize(
        self,
        X: np.ndarray,
        features: List[Any],
        block_name: str,
    ) -> np.ndarray:
        row_sums = np.sum(X, axis=1, keepdims=True)
        degenerate = np.abs(row_sums[:, 0]) < self.zero_tol
        if np.any(degenerate):
            names = [features[i] for i in np.flatnonzero(degenerate)]
            raise DegenerateFeatureError(f"Omic block {block_name} has {len(names)} feature(s) summing to zero, e.g. {names[:10]}")
        return X / row_sums


    def FrobeniusNormalize(
        self,
        X: np.ndarray,
        block_name: str,
    ) -> np.ndarray:
        norm = np.linalg.norm(X, ord="fro")
        if norm < self.zero_tol: raise DegenerateBlockError(f"Omic block {block_name} has zero Frobenius norm")
        return X / norm
