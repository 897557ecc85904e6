# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _simulate.py
# Date: 2025/04/12 09:48:17
# Description: Planted-cluster synthetic cohort over continuous, binary and categorical layers
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
from scipy.special import expit, softmax
import numpy as np
import pandas as pd
import logging

from ._data import OmicBlock, OmicBlockSet, CovariateTable



def simulate_planted_clusters(
    n_samples:      int = 20,
    n_features:     Tuple[int, int, int] = (30, 20, 15),
    n_states:       int = 3,
    separation:     float = 2.0,
    random_state:   Union[int, None] = 0,
) -> Tuple[OmicBlockSet, CovariateTable]:
    """
        Synthetic 3-layer cohort with two planted sample clusters of equal size

        A shared latent matrix Z of shape (N, 2) is drawn with the first dimension centered at -separation/2 and
        +separation/2 for the two clusters, the second dimension being small nuisance variation. The layers are

        - `mRNA` (continuous): Z @ W^T + Gaussian noise
        - `mutation` (binary): Bernoulli draws through the logistic link
        - `CNV` (categorical): states -n_states//2 ... drawn through the softmax link, one loading row per state

        Output
        ------
        omic_blocks: OmicBlockSet
            The simulated layers of shape (feature, sample)
        covariates: CovariateTable
            Cluster label `A` / `B` of each sample
    """
    if n_samples < 2: raise ValueError(f"At least 2 samples are needed to plant 2 clusters, got {n_samples}")
    if len(n_features) != 3: raise ValueError(f"Expected the feature sizes of 3 layers, got {n_features}")
    if n_states < 2: raise ValueError(f"Categorical layer needs at least 2 states, got {n_states}")

    rng = np.random.default_rng(random_state)
    samples = [f"Sample_{i:03}" for i in range(n_samples)]
    cluster = np.repeat([0, 1], [n_samples // 2, n_samples - n_samples // 2])

    Z = np.column_stack([
        (2 * cluster - 1) * separation / 2 + 0.5 * rng.standard_normal(n_samples),
        0.5 * rng.standard_normal(n_samples),
    ])
    p_mrna, p_mutation, p_cnv = n_features


    # Continuous layer
    W = rng.standard_normal((p_mrna, 2))
    mrna = Z @ W.T + 0.5 * rng.standard_normal((n_samples, p_mrna))


    # Binary layer
    W = 1.5 * rng.standard_normal((p_mutation, 2))
    mutation = (rng.uniform(size=(n_samples, p_mutation)) < expit(Z @ W.T)).astype(np.float64)


    # Categorical layer, inverse-CDF sampling of the softmax probabilities
    states = np.arange(n_states) - n_states // 2
    W = 1.5 * rng.standard_normal((p_cnv, n_states, 2))
    probabilities = softmax(np.einsum("nk,pck->npc", Z, W), axis=2)
    draws = rng.uniform(size=(n_samples, p_cnv, 1))
    index = np.minimum((np.cumsum(probabilities, axis=2) < draws).sum(axis=2), n_states - 1)
    cnv = states[index].astype(np.float64)


    frames = {
        "mRNA":     pd.DataFrame(mrna.T, index=[f"Gene_{i:03}" for i in range(p_mrna)], columns=samples),
        "mutation": pd.DataFrame(mutation.T, index=[f"Mutation_{i:03}" for i in range(p_mutation)], columns=samples),
        "CNV":      pd.DataFrame(cnv.T, index=[f"CNV_{i:03}" for i in range(p_cnv)], columns=samples),
    }
    omic_blocks = OmicBlockSet.from_frames(frames, ["continuous", "binary", "categorical"])
    covariates = CovariateTable(pd.Series(np.where(cluster == 0, "A", "B"), index=samples, name="cluster"))

    logging.info(f"Simulated {omic_blocks}")
    return omic_blocks, covariates
