# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _likelihood.py
# Date: 2025/04/09 21:37:12
# Description: Per-block likelihood strategies of the mixed-likelihood latent model
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


from typing import List, Tuple, Union, Literal, Any, Callable, Dict, Protocol
from sklearn.linear_model import Lasso, LinearRegression
from scipy.special import expit, logit, log_softmax, softmax
import numpy as np
import pandas as pd
import logging

from ._data import OmicBlock
from ._errors import InvalidNoiseModelError



class LikelihoodStrategy(Protocol):
    """
        Per-block likelihood capability used by `MixedLikelihoodLatentModel`.
        Every block b models its natural parameters as Theta_b = Z @ W_b^T + mu_b with Z of shape (N, k)

        - `gradient_wrt_latent(Z)`: gradient of the weighted block log-likelihood w.r.t. Z, shape (N, k)
        - `fit_loadings_given_latent(Z)`: increase the penalized block log-likelihood over (W_b, mu_b) with Z fixed
        - `penalized_log_likelihood(Z)`: weight * loglik_b(Z) - l1_penalty * |W_b|_1
        - `design_matrix()`: numeric (N, .) version of the block, used for the SVD initialization
        - `loadings_frame(order, columns)`: the loadings as a DataFrame with latent dimensions in `order`
    """
    block_name: str
    noise_model: str

    def gradient_wrt_latent(self, Z: np.ndarray) -> np.ndarray: ...
    def fit_loadings_given_latent(self, Z: np.ndarray) -> None: ...
    def penalized_log_likelihood(self, Z: np.ndarray) -> float: ...
    def design_matrix(self) -> np.ndarray: ...
    def loadings_frame(self, order: np.ndarray, columns: List[str]) -> pd.DataFrame: ...



def soft_threshold(x: np.ndarray, threshold: float) -> np.ndarray:
    return np.sign(x) * np.maximum(np.abs(x) - threshold, 0.0)



def with_intercept(Z: np.ndarray) -> np.ndarray:
    return np.hstack([Z, np.ones((Z.shape[0], 1))])





# -----------------------------------------------------------------------------------------------
# Continuous: Gaussian
# -----------------------------------------------------------------------------------------------
class GaussianLikelihood:
    """
        Gaussian likelihood with one noise variance per feature.
        Loadings are fitted by L1-penalized least squares (Lasso, unpenalized intercept), then the variances
        are re-estimated from the residuals
    """
    noise_model = "continuous"

    def __init__(
        self,
        block:              OmicBlock,
        k:                  int,
        l1_penalty:         float,
        weight:             float,
        variance_floor:     float = 1e-3,
        lasso_max_iter:     int = 5000,
    ):
        self.block_name = block.name
        self.features = block.data.index
        self.l1_penalty = l1_penalty
        self.weight = weight
        self.lasso_max_iter = lasso_max_iter

        self.Y = block.values().T                                   # (N, p)
        self.W = np.zeros((self.Y.shape[1], k))                     # (p, k)
        self.mu = self.Y.mean(axis=0)                               # (p,)

        marginal_variance = self.Y.var(axis=0)
        self.min_variance = np.maximum(variance_floor * marginal_variance, 1e-8)
        self.sigma2 = np.maximum(marginal_variance, self.min_variance)


    def natural_parameters(self, Z: np.ndarray) -> np.ndarray:
        return Z @ self.W.T + self.mu

    def log_likelihood(self, Z: np.ndarray) -> float:
        residuals = self.Y - self.natural_parameters(Z)
        N = self.Y.shape[0]
        return float(-0.5 * np.sum(N * np.log(2 * np.pi * self.sigma2) + np.sum(residuals ** 2, axis=0) / self.sigma2))

    def penalized_log_likelihood(self, Z: np.ndarray) -> float:
        return self.weight * self.log_likelihood(Z) - self.l1_penalty * np.abs(self.W).sum()

    def gradient_wrt_latent(self, Z: np.ndarray) -> np.ndarray:
        residuals = self.Y - self.natural_parameters(Z)
        return self.weight * (residuals / self.sigma2) @ self.W


    def fit_loadings_given_latent(self, Z: np.ndarray) -> None:
        N = Z.shape[0]
        for j in range(self.Y.shape[1]):
            # weight * loglik_j - l1 * |w_j|, rescaled to the Lasso objective 1/(2N) |y - Zw|^2 + alpha |w|
            if self.l1_penalty > 0:
                regression = Lasso(
                    alpha = self.l1_penalty * self.sigma2[j] / (self.weight * N),
                    fit_intercept = True,
                    max_iter = self.lasso_max_iter,
                )
            else:
                regression = LinearRegression(fit_intercept=True)
            regression.fit(Z, self.Y[:, j])
            self.W[j] = regression.coef_
            self.mu[j] = regression.intercept_

        residuals = self.Y - self.natural_parameters(Z)
        self.sigma2 = np.maximum(np.mean(residuals ** 2, axis=0), self.min_variance)


    def design_matrix(self) -> np.ndarray:
        return (self.Y - self.Y.mean(axis=0)) / np.sqrt(np.maximum(self.Y.var(axis=0), self.min_variance))

    def loadings_frame(self, order: np.ndarray, columns: List[str]) -> pd.DataFrame:
        return pd.DataFrame(self.W[:, order], index=self.features, columns=columns)





# -----------------------------------------------------------------------------------------------
# Binary: Bernoulli / logistic
# -----------------------------------------------------------------------------------------------
class BernoulliLikelihood:
    """
        Bernoulli likelihood with logistic link.
        Loadings are fitted by L1-penalized logistic regression with proximal gradient steps; the step size
        is the inverse of the curvature bound 1/4 * weight * ||[Z, 1]||_2^2, so every step increases the
        penalized log-likelihood
    """
    noise_model = "binary"

    def __init__(
        self,
        block:          OmicBlock,
        k:              int,
        l1_penalty:     float,
        weight:         float,
        loading_steps:  int = 50,
    ):
        self.block_name = block.name
        self.features = block.data.index
        self.l1_penalty = l1_penalty
        self.weight = weight
        self.loading_steps = loading_steps

        self.Y = block.values().T                                   # (N, p)
        if not np.all(np.isin(self.Y, (0.0, 1.0))):
            raise ValueError(f"Binary omic block {block.name} must only hold 0/1 values")

        self.W = np.zeros((self.Y.shape[1], k))                     # (p, k)
        self.mu = logit(np.clip(self.Y.mean(axis=0), 1e-3, 1 - 1e-3))


    def natural_parameters(self, Z: np.ndarray) -> np.ndarray:
        return Z @ self.W.T + self.mu

    def log_likelihood(self, Z: np.ndarray) -> float:
        theta = self.natural_parameters(Z)
        return float(np.sum(self.Y * theta - np.logaddexp(0.0, theta)))

    def penalized_log_likelihood(self, Z: np.ndarray) -> float:
        return self.weight * self.log_likelihood(Z) - self.l1_penalty * np.abs(self.W).sum()

    def gradient_wrt_latent(self, Z: np.ndarray) -> np.ndarray:
        return self.weight * (self.Y - expit(self.natural_parameters(Z))) @ self.W


    def fit_loadings_given_latent(self, Z: np.ndarray) -> None:
        step = 1.0 / (0.25 * self.weight * np.linalg.norm(with_intercept(Z), ord=2) ** 2)
        for _ in range(self.loading_steps):
            G = self.weight * (self.Y - expit(self.natural_parameters(Z)))
            self.W = soft_threshold(self.W + step * G.T @ Z, step * self.l1_penalty)
            self.mu = self.mu + step * G.sum(axis=0)


    def design_matrix(self) -> np.ndarray:
        return self.Y - self.Y.mean(axis=0)

    def loadings_frame(self, order: np.ndarray, columns: List[str]) -> pd.DataFrame:
        return pd.DataFrame(self.W[:, order], index=self.features, columns=columns)





# -----------------------------------------------------------------------------------------------
# Categorical: multinomial / softmax
# -----------------------------------------------------------------------------------------------
class MultinomialLikelihood:
    """
        Multinomial likelihood with softmax link over the states observed in the block (e.g. copy-number
        states -2..2). Every feature has one loading row per state, W of shape (p, C, k).
        Loadings are fitted by L1-penalized multinomial regression with proximal gradient steps, step size
        from the curvature bound 1/2 * weight * ||[Z, 1]||_2^2
    """
    noise_model = "categorical"

    def __init__(
        self,
        block:          OmicBlock,
        k:              int,
        l1_penalty:     float,
        weight:         float,
        loading_steps:  int = 50,
    ):
        self.block_name = block.name
        self.features = block.data.index
        self.l1_penalty = l1_penalty
        self.weight = weight
        self.loading_steps = loading_steps

        values = block.values().T                                   # (N, p)
        if not np.all(np.mod(values, 1) == 0):
            raise ValueError(f"Categorical omic block {block.name} must hold integer-coded states")
        self.states = np.unique(values)
        if len(self.states) < 2:
            raise ValueError(f"Categorical omic block {block.name} needs at least 2 states, got {self.states.tolist()}")

        C = len(self.states)
        index = np.searchsorted(self.states, values)
        self.Y = (index[:, :, None] == np.arange(C)[None, None, :]).astype(np.float64)   # (N, p, C)

        self.W = np.zeros((self.Y.shape[1], C, k))                  # (p, C, k)
        log_frequency = np.log(np.clip(self.Y.mean(axis=0), 1e-3, None))
        self.mu = log_frequency - log_frequency.mean(axis=1, keepdims=True)      # (p, C)


    def natural_parameters(self, Z: np.ndarray) -> np.ndarray:
        return np.einsum("nk,pck->npc", Z, self.W) + self.mu[None, :, :]

    def log_likelihood(self, Z: np.ndarray) -> float:
        return float(np.sum(self.Y * log_softmax(self.natural_parameters(Z), axis=2)))

    def penalized_log_likelihood(self, Z: np.ndarray) -> float:
        return self.weight * self.log_likelihood(Z) - self.l1_penalty * np.abs(self.W).sum()

    def gradient_wrt_latent(self, Z: np.ndarray) -> np.ndarray:
        G = self.Y - softmax(self.natural_parameters(Z), axis=2)
        return self.weight * np.einsum("npc,pck->nk", G, self.W)


    def fit_loadings_given_latent(self, Z: np.ndarray) -> None:
        step = 1.0 / (0.5 * self.weight * np.linalg.norm(with_intercept(Z), ord=2) ** 2)
        for _ in range(self.loading_steps):
            G = self.weight * (self.Y - softmax(self.natural_parameters(Z), axis=2))
            self.W = soft_threshold(self.W + step * np.einsum("npc,nk->pck", G, Z), step * self.l1_penalty)
            self.mu = self.mu + step * G.sum(axis=0)


    def design_matrix(self) -> np.ndarray:
        N, p, C = self.Y.shape
        return (self.Y - self.Y.mean(axis=0)).reshape(N, p * C)

    def loadings_frame(self, order: np.ndarray, columns: List[str]) -> pd.DataFrame:
        p, C, k = self.W.shape
        index = pd.MultiIndex.from_product([self.features, self.states.tolist()], names=["feature", "state"])
        return pd.DataFrame(self.W.reshape(p * C, k)[:, order], index=index, columns=columns)





LIKELIHOOD_STRATEGIES: Dict[str, Callable[..., LikelihoodStrategy]] = {
    "continuous":   GaussianLikelihood,
    "binary":       BernoulliLikelihood,
    "categorical":  MultinomialLikelihood,
}


def likelihood_func_selection(noise_model: str) -> Callable[..., LikelihoodStrategy]:
    """
        Select the likelihood strategy of a noise model tag
    """
    if noise_model not in LIKELIHOOD_STRATEGIES:
        raise InvalidNoiseModelError(f"Invalid noise model '{noise_model}'. Expected one of {tuple(LIKELIHOOD_STRATEGIES)}")
    return LIKELIHOOD_STRATEGIES[noise_model]
