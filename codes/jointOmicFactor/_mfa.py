# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _mfa.py
# Date: 2025/04/05 14:20:33
# Description: Multiple factor analysis (weighted multi-block PCA)
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
from sklearn.preprocessing import StandardScaler
from sklearn.decomposition import PCA
import numpy as np
import pandas as pd
import logging
import mlflow

from ._data import OmicBlockSet, Embedding, LoadingSet, latent_columns
from ._errors import DegenerateBlockError, RankDeficiencyError



class MFAEngine:
    """
        Multiple factor analysis, i.e. weighted multi-block PCA

        Each omic block X_d (sample-major) is centered, optionally scaled to unit variance, then weighted by
        the inverse of its first singular value so every block has leading singular value 1. The weighted
        blocks are concatenated on the feature axis and an exact PCA is run on the result.

        Data:
        - `omic_blocks`: OmicBlockSet
            The aligned omic blocks

        Hyperparameters:
        - `n_components`: Union[int, None]
            Number of components to keep. None keeps every usable dimension
        - `standardize`: bool
            Whether to scale every feature to unit variance before weighting

        Control parameters:
        - `rank_tol`: float
            Singular values under `rank_tol` times the largest one are not usable dimensions
        - `verbose`: bool
            Whether to print the debug information or not
        - `mlflow_enable`: bool
            Whether to log the parameters and results to MLFlow
    """

    engine_name = "MFA"

    # Data - Directly from the input
    omic_blocks: OmicBlockSet

    # Hyperparameters - Directly from the input
    n_components: Union[int, None]
    standardize: bool

    # Control parameters - Directly from the input
    rank_tol: float
    verbose: bool
    mlflow_enable: bool


    def __init__(
        self,
        omic_blocks:    OmicBlockSet,
        n_components:   Union[int, None] = 2,
        standardize:    bool = True,
        rank_tol:       float = 1e-10,
        verbose:        bool = False,
        mlflow_enable:  bool = False,
    ):
        if n_components is not None and n_components < 1: raise ValueError(f"Number of components must be positive, got {n_components}")

        self.omic_blocks = omic_blocks
        self.n_components = n_components
        self.standardize = standardize
        self.rank_tol = rank_tol
        self.verbose = verbose
        self.mlflow_enable = mlflow_enable

        for block in omic_blocks: self.nullityCheck(block.values(), f"Omic layer {block.name}")

        logging.info(f"Initialized MFA with {omic_blocks.D} omics layers, {omic_blocks.N} samples, {omic_blocks.M} features, n_components={n_components}, standardize={standardize}")
        if self.mlflow_enable:
            mlflow.log_param("n_components", n_components)
            mlflow.log_param("standardize", standardize)
            mlflow.log_param("Omics layers feature size", omic_blocks.m)


    from ._debug import debug
    from ._debug import nullityCheck


    def WeightBlocks(self) -> Tuple[List[np.ndarray], List[float]]:
        """
            Center/scale every block in (sample, feature) orientation and divide it by its first singular value
        """
        weighted, weights = [], []
        for block in self.omic_blocks:
            Y = StandardScaler(with_mean=True, with_std=self.standardize).fit_transform(block.values().T)
            first_singular_value = np.linalg.svd(Y, compute_uv=False)[0]
            if first_singular_value <= 0 or not np.isfinite(first_singular_value):
                raise DegenerateBlockError(f"Omic block {block.name} is constant across samples")

            weights.append(1.0 / first_singular_value)
            weighted.append(Y / first_singular_value)
            self.debug(f"Omic block {block.name}: first singular value {first_singular_value:.6f}")
        return weighted, weights


    def solve(self) -> Tuple[Embedding, LoadingSet]:
        weighted, weights = self.WeightBlocks()
        big_Y = np.concatenate(weighted, axis=1)

        # Usable dimensions = numerical rank of the weighted table
        singular_values = np.linalg.svd(big_Y, compute_uv=False)
        usable = int(np.sum(singular_values > self.rank_tol * singular_values[0]))
        if usable < 2: raise RankDeficiencyError(f"MFA needs at least 2 usable dimensions, the weighted table has {usable}")

        n_components = usable if self.n_components is None else min(self.n_components, usable)
        if self.n_components is not None and self.n_components > usable:
            logging.warning(f"Requested {self.n_components} components but only {usable} usable dimensions exist. Truncating")


        pca = PCA(n_components=n_components, svd_solver="full")
        scores = pca.fit_transform(big_Y)
        coordinates = pca.components_.T * np.sqrt(pca.explained_variance_)
        logging.info(f"MFA explained variance ratio: {np.round(pca.explained_variance_ratio_, 4).tolist()}")


        columns = latent_columns(n_components)
        loadings = {
            block.name: pd.DataFrame(coords, index=block.data.index, columns=columns)
            for block, coords in zip(self.omic_blocks, np.vsplit(coordinates, self.omic_blocks.split_indices()))
        }
        hyperparameters = {
            "n_components":                 n_components,
            "standardize":                  self.standardize,
            "block_weights":                dict(zip(self.omic_blocks.names, weights)),
            "explained_variance_ratio":     pca.explained_variance_ratio_.tolist(),
        }

        if self.mlflow_enable:
            for i, ratio in enumerate(pca.explained_variance_ratio_): mlflow.log_metric("Explained variance ratio", float(ratio), step=i)

        embedding = Embedding(
            scores = pd.DataFrame(scores, index=self.omic_blocks.samples, columns=columns),
            engine = self.engine_name,
            hyperparameters = hyperparameters,
        )
        return embedding, LoadingSet(self.engine_name, loadings)
