# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _nmf.py
# Date: 2025/04/06 16:02:40
# Description: Joint NMF of the stacked omics layers under a shared basis
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
from tqdm import tqdm
import numpy as np
import pandas as pd
import warnings
import logging
import mlflow

from ._data import OmicBlockSet, Embedding, LoadingSet, ConvergenceState, latent_columns
from ._errors import DegenerateBlockError, NonConvergenceWarning



class JointNMFEngine:
    """
        Joint non-negative matrix factorization of the omics layers under a shared basis.
        The (normalized, non-negative) layers are stacked on the feature axis, X = [X_1; X_2; ...; X_D], and
        factored as X ~ W @ H with W >= 0 of shape (M, k) and H >= 0 of shape (k, N)

        Data:
        - `omic_blocks`: OmicBlockSet
            Non-negative omic blocks, typically the output of `BlockNormalizer`

        Hyperparameters:
        - `k`: int
            Rank of the factorization, i.e. number of latent variables

        Control parameters:
        - `max_iter`: int
            The maximum number of iterations per restart
        - `tol`: float
            Stop when the relative decrease of the reconstruction error is under this tolerance
        - `n_restarts`: int
            Number of random initializations. The lowest-error factorization is kept
        - `random_state`: Union[int, None]
            Seed of the initializations
        - `verbose`: bool
            Whether to print the debug information or not
        - `mlflow_enable`: bool
            Whether to log the parameters and metrics to MLFlow
    """

    engine_name = "JointNMF"

    # Data - Directly from the input
    omic_blocks: OmicBlockSet
    X: np.ndarray                                               # Stacked omics layers of shape (M, N)

    # Hyperparameters - Directly from the input
    k: int

    # Control parameters - Directly from the input
    max_iter: int
    tol: float
    n_restarts: int
    random_state: Union[int, None]
    verbose: bool
    mlflow_enable: bool

    # Internal state
    state: ConvergenceState


    def __init__(
        self,
        omic_blocks:    OmicBlockSet,
        k:              int = 2,
        max_iter:       int = 1000,
        tol:            float = 1e-6,
        n_restarts:     int = 1,
        random_state:   Union[int, None] = None,
        verbose:        bool = False,
        mlflow_enable:  bool = False,
    ):
        if k < 1: raise ValueError(f"Rank k must be positive, got {k}")
        if k > min(omic_blocks.M, omic_blocks.N): raise ValueError(f"Rank k={k} exceeds min(features, samples) = {min(omic_blocks.M, omic_blocks.N)}")
        if n_restarts < 1: raise ValueError(f"Number of restarts must be at least 1, got {n_restarts}")
        if max_iter < 1: raise ValueError(f"Maximum number of iterations must be at least 1, got {max_iter}")

        self.omic_blocks = omic_blocks
        self.k = k
        self.max_iter = max_iter
        self.tol = tol
        self.n_restarts = n_restarts
        self.random_state = random_state
        self.verbose = verbose
        self.mlflow_enable = mlflow_enable
        self.state = ConvergenceState.INITIALIZED

        # Non-negativity is a hard requirement of the factorization
        for block in omic_blocks:
            X = block.values()
            self.nullityCheck(X, f"Omic layer {block.name}")
            self.negativeCheck(X, f"Omic layer {block.name}")
            if not np.any(X > 0): raise DegenerateBlockError(f"Omic layer {block.name} is identically zero")
        self.X = omic_blocks.stacked()

        logging.info(f"Initialized JointNMF with {omic_blocks.D} omics layers, {omic_blocks.N} samples, {omic_blocks.M} features, k={k}, max_iter={max_iter}, tol={tol}, n_restarts={n_restarts}")
        if self.mlflow_enable:
            mlflow.log_param("k", k)
            mlflow.log_param("max_iter", max_iter)
            mlflow.log_param("tol", tol)
            mlflow.log_param("n_restarts", n_restarts)
            mlflow.log_param("Omics layers feature size", omic_blocks.m)


    from ._math import IterativeSolveWAndH

    from ._debug import debug
    from ._debug import nullityCheck
    from ._debug import negativeCheck


    def InitializeWH(self, rng: np.random.Generator) -> Tuple[np.ndarray, np.ndarray]:
        """
            Random non-negative initialization scaled so that W @ H has the magnitude of X
        """
        scale = np.sqrt(self.X.mean() / self.k)
        W = scale * rng.uniform(0.1, 1.0, size=(self.omic_blocks.M, self.k))
        H = scale * rng.uniform(0.1, 1.0, size=(self.k, self.omic_blocks.N))
        return W, H


    def solve(
        self,
        additional_tasks:           Union[None, Callable, List[Callable]] = None,
        additional_tasks_interval:  int = 50,
    ) -> Tuple[Embedding, LoadingSet]:
        seeds = np.random.SeedSequence(self.random_state).spawn(self.n_restarts)

        best = None
        for restart, seed in enumerate(tqdm(seeds, desc="NMF restarts", disable=not self.verbose)):
            W, H = self.InitializeWH(np.random.default_rng(seed))
            W, H, history, state = self.IterativeSolveWAndH(W, H, additional_tasks, additional_tasks_interval)
            logging.info(f"Restart #{restart}: reconstruction error {history[0]:.6e} -> {np.nanmin(history):.6e} ({state.value})")

            if best is None or np.nanmin(history) < np.nanmin(best[2]): best = (W, H, history, state, restart)

        W, H, history, state, restart = best
        self.state = state
        message = None
        if not np.isfinite(history[-1]): message = f"JointNMF objective became NaN/Inf at iteration {len(history) - 1} of restart #{restart}. The best finite factorization before the divergence is returned"
        elif state == ConvergenceState.MAX_ITER_REACHED: message = f"JointNMF reached max_iter={self.max_iter} before the tolerance {self.tol}. The best factorization found is returned"
        if message is not None:
            logging.warning(message)
            warnings.warn(message, NonConvergenceWarning)


        columns = latent_columns(self.k)
        loadings = {
            block.name: pd.DataFrame(Wd, index=block.data.index, columns=columns)
            for block, Wd in zip(self.omic_blocks, np.vsplit(W, self.omic_blocks.split_indices()))
        }
        embedding = Embedding(
            scores = pd.DataFrame(H.T, index=self.omic_blocks.samples, columns=columns),
            engine = self.engine_name,
            hyperparameters = {
                "k":                self.k,
                "max_iter":         self.max_iter,
                "tol":              self.tol,
                "n_restarts":       self.n_restarts,
                "random_state":     self.random_state,
                "best_restart":     restart,
            },
            state = state,
            n_iter = len(history) - 1,
            objective_history = tuple(history),
        )
        return embedding, LoadingSet(self.engine_name, loadings)
