# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _latent.py
# Date: 2025/04/10 13:05:58
# Description: Joint latent factor model over mixed likelihoods with L1 sparsity
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
import warnings
import logging
import mlflow

from ._data import OmicBlockSet, Embedding, LoadingSet, ConvergenceState, latent_columns
from ._errors import NonConvergenceWarning
from ._likelihood import LikelihoodStrategy, likelihood_func_selection



class MixedLikelihoodLatentModel:
    """
        Joint latent factor model over omics layers with heterogeneous noise models

        Every block b is modeled through natural parameters Theta_b = Z @ W_b^T + mu_b, with a Gaussian
        (continuous), Bernoulli (binary) or multinomial (categorical) likelihood. The model maximizes

            J(Z, W) = sum_b [ weight_b * loglik_b(Z W_b^T + mu_b) - l1_b * |W_b|_1 ] - 1/2 |Z|_F^2

        by alternating (1) loadings fitting with Z fixed and (2) a gradient ascent step on Z with backtracking
        line search, since the mixed likelihoods admit no closed-form update of Z.

        Data:
        - `omic_blocks`: OmicBlockSet
            The aligned omic blocks. The noise model tag of each block selects its likelihood

        Hyperparameters:
        - `k`: int
            Number of latent dimensions
        - `l1_penalties`: Union[float, List[float]]
            L1 penalty on the loadings of each block. A single value is broadcasted to all blocks
        - `weights`: Union[float, List[float]]
            Mixing weight of each block likelihood. A single value is broadcasted to all blocks

        Control parameters:
        - `max_iter`: int
            The maximum number of alternations
        - `tol`: float
            Stop when the relative improvement of J is under this tolerance
        - `latent_steps`: int
            Number of line-searched gradient steps on Z per alternation
        - `init`: Literal["svd", "random"]
            'svd' starts from the leading singular vectors of the block-weighted design; 'random' from a standard normal draw
        - `random_state`: Union[int, None]
            Seed of the random initialization
        - `noise_models`: Union[Dict[str, str], None]
            Per-block override of the declared noise model tags
        - `verbose`: bool
            Whether to print the debug information or not
        - `mlflow_enable`: bool
            Whether to log the parameters and metrics to MLFlow
    """

    engine_name = "MixedLikelihood"

    # Data - Directly from the input
    omic_blocks: OmicBlockSet

    # Hyperparameters - Directly from the input
    k: int
    l1_penalties: List[float]
    weights: List[float]

    # Control parameters - Directly from the input
    max_iter: int
    tol: float
    latent_steps: int
    init: Literal["svd", "random"]
    random_state: Union[int, None]
    verbose: bool
    mlflow_enable: bool

    # Internal variables
    noise_models: List[str]
    strategies: List[LikelihoodStrategy]
    state: ConvergenceState
    step: float                                                 # Current step size of the Z updates


    def __init__(
        self,
        omic_blocks:    OmicBlockSet,
        k:              int = 2,
        l1_penalties:   Union[float, List[float]] = 1.0,
        weights:        Union[float, List[float]] = 1.0,
        max_iter:       int = 200,
        tol:            float = 1e-6,
        latent_steps:   int = 5,
        init:           Literal["svd", "random"] = "svd",
        random_state:   Union[int, None] = None,
        noise_models:   Union[Dict[str, str], None] = None,
        verbose:        bool = False,
        mlflow_enable:  bool = False,
    ):
        if k < 1: raise ValueError(f"Number of latent dimensions must be positive, got {k}")
        if k > omic_blocks.N: raise ValueError(f"Number of latent dimensions k={k} exceeds the sample size {omic_blocks.N}")
        if max_iter < 1: raise ValueError(f"Maximum number of iterations must be at least 1, got {max_iter}")
        if init not in ("svd", "random"): raise ValueError(f"Invalid initialization method: {init}")

        self.omic_blocks = omic_blocks
        self.k = k
        self.max_iter = max_iter
        self.tol = tol
        self.latent_steps = latent_steps
        self.init = init
        self.random_state = random_state
        self.verbose = verbose
        self.mlflow_enable = mlflow_enable
        self.state = ConvergenceState.INITIALIZED
        self.step = 1.0

        # Auto-broadcasting hyperparameters
        self.l1_penalties = [float(l1_penalties)] * omic_blocks.D if isinstance(l1_penalties, (int, float)) else [float(x) for x in l1_penalties]
        self.weights = [float(weights)] * omic_blocks.D if isinstance(weights, (int, float)) else [float(x) for x in weights]

        # Raise unmatched length error if the length of penalties and weights is not matched
        if len(self.l1_penalties) != omic_blocks.D: raise ValueError(f"Length of l1_penalties is not matched with the number of omics layers. Expected {omic_blocks.D} but got {len(self.l1_penalties)}")
        if len(self.weights) != omic_blocks.D: raise ValueError(f"Length of weights is not matched with the number of omics layers. Expected {omic_blocks.D} but got {len(self.weights)}")
        if any(x < 0 for x in self.l1_penalties): raise ValueError(f"L1 penalties must be non-negative, got {self.l1_penalties}")
        if any(x <= 0 for x in self.weights): raise ValueError(f"Mixing weights must be positive, got {self.weights}")

        # Likelihood strategy of each block
        overrides = noise_models or {}
        self.noise_models = [overrides.get(block.name, block.noise_model) for block in omic_blocks]
        self.strategies = self.InitializeStrategies()

        logging.info(f"Initialized MixedLikelihoodLatentModel with {omic_blocks.D} omics layers {self.noise_models}, {omic_blocks.N} samples, k={k}, l1_penalties={self.l1_penalties}, weights={self.weights}, max_iter={max_iter}, tol={tol}")
        if self.mlflow_enable:
            mlflow.log_param("k", k)
            mlflow.log_param("l1_penalties", self.l1_penalties)
            mlflow.log_param("weights", self.weights)
            mlflow.log_param("noise_models", self.noise_models)
            mlflow.log_param("max_iter", max_iter)
            mlflow.log_param("tol", tol)


    from ._debug import debug
    from ._debug import nullityCheck


    def InitializeStrategies(self) -> List[LikelihoodStrategy]:
        # Fresh strategies hold zero loadings and the marginal intercepts
        return [
            likelihood_func_selection(tag)(block, self.k, l1, weight)
            for block, tag, l1, weight in zip(self.omic_blocks, self.noise_models, self.l1_penalties, self.weights)
        ]


    def objective_function(self, Z: np.ndarray) -> float:
        return float(sum(strategy.penalized_log_likelihood(Z) for strategy in self.strategies) - 0.5 * np.sum(Z ** 2))


    def InitializeLatent(self) -> np.ndarray:
        N = self.omic_blocks.N
        if self.init == "random":
            return np.random.default_rng(self.random_state).standard_normal((N, self.k))

        # Leading principal scores of the block-weighted design, the first one scaled to unit variance
        designs = []
        for strategy in self.strategies:
            design = strategy.design_matrix()
            first_singular_value = np.linalg.svd(design, compute_uv=False)[0]
            if first_singular_value > 0: designs.append(design / first_singular_value)
        if len(designs) == 0: return np.random.default_rng(self.random_state).standard_normal((N, self.k))

        U, S, _ = np.linalg.svd(np.concatenate(designs, axis=1), full_matrices=False)
        Z = np.zeros((N, self.k))
        usable = min(self.k, U.shape[1])
        Z[:, :usable] = U[:, :usable] * (S[:usable] / S[0]) * np.sqrt(N)
        return Z


    def UpdateLatent(self, Z: np.ndarray) -> np.ndarray:
        """
            Gradient ascent on J w.r.t. Z with Armijo backtracking, loadings fixed
        """
        objective = self.objective_function(Z)
        for _ in range(self.latent_steps):
            gradient = np.sum([strategy.gradient_wrt_latent(Z) for strategy in self.strategies], axis=0) - Z
            squared_norm = np.sum(gradient ** 2)
            if squared_norm <= 0: break

            accepted = False
            for _ in range(60):
                candidate = Z + self.step * gradient
                candidate_objective = self.objective_function(candidate)
                if candidate_objective >= objective + 0.5 * self.step * squared_norm:
                    accepted = True
                    break
                self.step *= 0.5
            if not accepted: break

            Z, objective = candidate, candidate_objective
            self.step = min(self.step * 2.0, 1.0)
        return Z


    def solve(self) -> Tuple[Embedding, LoadingSet]:
        self.state = ConvergenceState.INITIALIZED
        self.step = 1.0
        self.strategies = self.InitializeStrategies()
        Z = self.InitializeLatent()
        for strategy in self.strategies: strategy.fit_loadings_given_latent(Z)

        iteration = 0
        curr_obj = self.objective_function(Z)
        history = [curr_obj]
        if self.mlflow_enable: mlflow.log_metric("objective_function", curr_obj, step=iteration)


        self.state = ConvergenceState.ITERATING
        while True:
            iteration += 1
            Z = self.UpdateLatent(Z)
            for strategy in self.strategies: strategy.fit_loadings_given_latent(Z)

            # Compute the objective function
            next_obj = self.objective_function(Z)
            history.append(next_obj)
            self.nullityCheck(Z, f"Latent factors at iteration {iteration}")
            relative_delta = (next_obj - curr_obj) / max(np.abs(curr_obj), 1.0)
            self.debug(f"Iteration {iteration}: Objective function = {next_obj}, relative delta = {relative_delta}")

            if self.mlflow_enable:
                mlflow.log_metric("objective_function", next_obj, step=iteration)
                mlflow.log_metric("delta", np.abs(relative_delta), step=iteration)

            # Break condition
            if np.abs(relative_delta) < self.tol:
                logging.info(f"Converged!")
                self.state = ConvergenceState.CONVERGED
                break
            if iteration >= self.max_iter:
                self.state = ConvergenceState.MAX_ITER_REACHED
                break
            curr_obj = next_obj


        logging.info(f"Finished after {iteration} iterations.")
        if self.mlflow_enable: mlflow.log_metric("Iterations to converge", iteration)
        if self.state == ConvergenceState.MAX_ITER_REACHED:
            message = f"MixedLikelihoodLatentModel reached max_iter={self.max_iter} before the tolerance {self.tol}. Check the convergence state before trusting the embedding"
            logging.warning(message)
            warnings.warn(message, NonConvergenceWarning)


        # Report latent dimensions by decreasing variance
        order = np.argsort(-Z.var(axis=0), kind="stable")
        columns = latent_columns(self.k)
        loadings = {strategy.block_name: strategy.loadings_frame(order, columns) for strategy in self.strategies}
        embedding = Embedding(
            scores = pd.DataFrame(Z[:, order], index=self.omic_blocks.samples, columns=columns),
            engine = self.engine_name,
            hyperparameters = {
                "k":                self.k,
                "l1_penalties":     dict(zip(self.omic_blocks.names, self.l1_penalties)),
                "weights":          dict(zip(self.omic_blocks.names, self.weights)),
                "noise_models":     dict(zip(self.omic_blocks.names, self.noise_models)),
                "max_iter":         self.max_iter,
                "tol":              self.tol,
                "init":             self.init,
                "random_state":     self.random_state,
            },
            state = self.state,
            n_iter = iteration,
            objective_history = tuple(history),
        )
        return embedding, LoadingSet(self.engine_name, loadings)
