# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _math.py
# Date: 2024/09/22 13:42:21
# Description: File contains the objective and iterative functions of the joint NMF
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
import mlflow

from ._data import ConvergenceState



def objective_function(
    X:                  np.ndarray,
    W:                  np.ndarray,
    H:                  np.ndarray,

    iteration:          int,
    mlflow_enabled:     bool = False,
) -> np.float64:
    # Calculate the reconstruction error
    reconstruction_error = np.linalg.norm(X - W @ H, ord="fro") ** 2

    if mlflow_enabled:
        mlflow.log_metric("Reconstruction error", reconstruction_error, step=iteration)

    return reconstruction_error



def update(
    X:                  np.ndarray,
    W:                  np.ndarray,
    H:                  np.ndarray,
    eps:                float = 1e-16,
) -> Tuple[np.ndarray, np.ndarray]:
    """
        Lee-Seung multiplicative update of the Frobenius NMF. Non-negativity is kept since every factor is non-negative
    """
    Ariel = X @ H.T
    Belle = W @ H @ H.T + eps
    next_W = Ariel / Belle * W

    Ariel = next_W.T @ X
    Cindy = next_W.T @ next_W @ H + eps
    next_H = Ariel / Cindy * H

    return next_W, next_H





def IterativeSolveWAndH(
    self,
    initialized_W:              np.ndarray,
    initialized_H:              np.ndarray,
    additional_tasks:           Union[None, Callable, List[Callable]] = None,
    additional_tasks_interval:  int = 50,
) -> Tuple[np.ndarray, np.ndarray, List[float], ConvergenceState]:
    """
        Iteratively solve the shared basis W and the coefficients H

        Input
        -----
        `initialized_W`: np.ndarray
            The initialized basis of shape (M, k)
        `initialized_H`: np.ndarray
            The initialized coefficients of shape (k, N)
        `additional_tasks`: Callable, optional
            A function to execute during the iteration. The function should take the current W matrix, H matrix and the iteration as input, and is called every `additional_tasks_interval` iterations.
        `additional_tasks_interval`: int
            The interval to execute the additional tasks. Default is 50

        Output
        ------
        W: np.ndarray
            The best basis of shape (M, k)
        H: np.ndarray
            The best coefficients of shape (k, N)
        history: List[float]
            Reconstruction error at initialization and after every iteration
        state: ConvergenceState
            CONVERGED or MAX_ITER_REACHED. A NaN/Inf objective stops the loop as MAX_ITER_REACHED and is left as the last history entry
    """
    X = self.X
    W = initialized_W
    H = initialized_H
    iteration = 0
    self.state = ConvergenceState.INITIALIZED

    curr_obj = objective_function(X, W, H, iteration, self.mlflow_enable)
    history = [float(curr_obj)]
    best_W, best_H, best_obj = W, H, curr_obj

    if additional_tasks is not None:
        if callable(additional_tasks): additional_tasks(W, H, iteration)
        else: _ = [task(W, H, iteration) for task in additional_tasks]


    self.state = ConvergenceState.ITERATING
    while True:
        iteration += 1
        W, H = update(X, W, H)

        # Compute the objective function
        next_obj = objective_function(X, W, H, iteration, self.mlflow_enable)
        history.append(float(next_obj))
        if np.isnan(next_obj) or np.isinf(next_obj):
            logging.error(f"Objective function is NaN/Inf at iteration {iteration}, stopping on divergence.")
            self.state = ConvergenceState.MAX_ITER_REACHED
            break

        if next_obj <= best_obj: best_W, best_H, best_obj = W, H, next_obj
        relative_delta = (curr_obj - next_obj) / max(curr_obj, np.finfo(np.float64).tiny)
        self.debug(f"Iteration {iteration}: Objective function = {next_obj}, relative delta = {relative_delta}")


        # Evaluate metrics if provided
        if additional_tasks is not None and iteration % additional_tasks_interval == 0:
            if callable(additional_tasks): additional_tasks(W, H, iteration)
            else: _ = [task(W, H, iteration) for task in additional_tasks]


        # Log the objective function and delta to MLFlow
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

    return best_W, best_H, history, self.state
