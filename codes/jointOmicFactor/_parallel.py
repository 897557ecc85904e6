# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _parallel.py
# Date: 2025/04/12 14:02:36
# Description: Engine construction and sequential/pooled solving
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
import multiprocessing
import logging

from ._data import OmicBlockSet, Embedding, LoadingSet
from ._normalize import BlockNormalizer
from ._mfa import MFAEngine
from ._nmf import JointNMFEngine
from ._latent import MixedLikelihoodLatentModel


METHODS = ("mfa", "nmf", "mixed")



def _solve_engine(engine: Any) -> Tuple[Embedding, LoadingSet]:
    logging.info(f"Solving {engine.engine_name}")
    return engine.solve()



def run_engines(
    engines:    Dict[str, Any],
    parallel:   bool = False,
    processes:  Union[int, None] = None,
) -> Dict[str, Tuple[Embedding, LoadingSet]]:
    """
        Solve independent engines, sequentially or in a worker pool

        Input
        -----
        `engines`: Dict[str, Any]
            Run name -> constructed engine exposing `solve()`
        `parallel`: bool
            Solve the engines in a `multiprocessing.Pool`. Every worker receives a copy of its engine and returns its own result
        `processes`: int, optional
            Number of workers, defaults to min(number of engines, CPU count)

        Output
        ------
        Run name -> (Embedding, LoadingSet)
    """
    names = list(engines.keys())
    if not parallel or len(names) <= 1:
        results = [_solve_engine(engines[name]) for name in names]
    else:
        processes = processes or min(len(names), multiprocessing.cpu_count())
        logging.info(f"Solving {len(names)} engines with {processes} processes")
        with multiprocessing.Pool(processes=processes) as pool:
            results = pool.map(_solve_engine, [engines[name] for name in names])

    return dict(zip(names, results))



def default_engines(
    omic_blocks:    OmicBlockSet,
    k:              int = 2,
    methods:        Tuple[str, ...] = METHODS,
    random_state:   Union[int, None] = None,
    l1_penalties:   Union[float, List[float]] = 1.0,
    max_iter:       Union[int, None] = None,
    tol:            Union[float, None] = None,
    n_restarts:     int = 1,
    verbose:        bool = False,
    mlflow_enable:  bool = False,
) -> Dict[str, Any]:
    """
        The three engines with their usual preprocessing:
        - `mfa`: MFA on the aligned blocks
        - `nmf`: joint NMF on the sign-split, normalized blocks
        - `mixed`: mixed-likelihood latent model on the aligned blocks, with their declared noise models
    """
    engines = {}
    for method in methods:
        if method == "mfa":
            engines[method] = MFAEngine(omic_blocks, n_components=k, verbose=verbose, mlflow_enable=mlflow_enable)
        elif method == "nmf":
            normalized = BlockNormalizer(sign_policy="split", verbose=verbose).normalize(omic_blocks)
            engines[method] = JointNMFEngine(normalized, k=k, max_iter=max_iter or 1000, tol=1e-6 if tol is None else tol, n_restarts=n_restarts, random_state=random_state, verbose=verbose, mlflow_enable=mlflow_enable)
        elif method == "mixed":
            engines[method] = MixedLikelihoodLatentModel(omic_blocks, k=k, l1_penalties=l1_penalties, max_iter=max_iter or 200, tol=1e-6 if tol is None else tol, random_state=random_state, verbose=verbose, mlflow_enable=mlflow_enable)
        else:
            raise ValueError(f"Invalid method: {method}")
    return engines
