# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: jointOmicFactor-run.py
# Date: 2025/04/13 11:26:50
# Description: Command line runner of the joint dimension reduction engines
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


import os
import logging
import numpy as np
import pandas as pd
import mlflow
from typing import List, Dict, Any, Tuple, Union, Literal


from codes.utils.files import autoread_file, strip_filename, autosave_file
from codes.utils.log_config import initialize_logging
from codes.utils.arg_parsing import parse_args
from codes.jointOmicFactor import (
    MatrixAligner,
    EmbeddingEvaluator,
    default_engines,
    run_engines,
    simulate_planted_clusters,
)



if __name__ == '__main__':
    args = parse_args()
    initialize_logging(log_filename=args.log_file)
    # -----------------------------------------------------------------------------------------------
    # Input Processing
    # -----------------------------------------------------------------------------------------------
    if args.simulate:
        omic_blocks, covariates = simulate_planted_clusters(random_state=0 if args.seed is None else args.seed)
    else:
        # Dataset
        omics_data = {strip_filename(path): autoread_file(path) for path in args.omics_input}
        if len(omics_data) != len(args.omics_input): raise ValueError(f"Omics file names must be unique without their extension, got {args.omics_input}")

        # Covariates
        covariates = None
        if args.covariates is not None:
            covariate_table = autoread_file(args.covariates)
            label_column = args.label_column or covariate_table.columns[0]
            if label_column not in covariate_table.columns: raise ValueError(f"Label column {label_column} not found in {args.covariates}. Available columns: {covariate_table.columns.tolist()}")
            covariates = covariate_table[label_column].dropna()

        omic_blocks, covariates = MatrixAligner(how=args.align).align(omics_data, args.noise_models, covariates)



    # -----------------------------------------------------------------------------------------------
    # Parameters & Settings
    # -----------------------------------------------------------------------------------------------
    k = args.num_components
    l1_penalties = args.l1_penalties[0] if len(args.l1_penalties) == 1 else args.l1_penalties
    max_iter = args.num_iterations
    tol = args.tolerance
    seed = args.seed
    mlflow_enable = len(args.mlflow_uri) > 0
    parallel = args.parallel

    out_format = args.output_format
    out_dir = args.output_dir
    if parallel and mlflow_enable:
        logging.warning("MLFlow logging runs the engines sequentially, ignoring --parallel")
        parallel = False



    # -----------------------------------------------------------------------------------------------
    # Engines
    # -----------------------------------------------------------------------------------------------
    engine_options = dict(k=k, random_state=seed, l1_penalties=l1_penalties, max_iter=max_iter, tol=tol, n_restarts=args.num_restarts, verbose=args.verbose)
    if mlflow_enable:
        mlflow.set_tracking_uri(args.mlflow_uri)
        mlflow.set_experiment(args.mlflow_experiment_name)

        results = {}
        with mlflow.start_run(run_name=f"jointOmicFactor-components={k}-l1={l1_penalties}"):
            for method in args.methods:
                with mlflow.start_run(run_name=method, nested=True):
                    engines = default_engines(omic_blocks, methods=[method], mlflow_enable=True, **engine_options)
                    results.update(run_engines(engines))
    else:
        engines = default_engines(omic_blocks, methods=args.methods, **engine_options)
        results = run_engines(engines, parallel=parallel)



    # -----------------------------------------------------------------------------------------------
    # Output
    # -----------------------------------------------------------------------------------------------
    # Check output directory
    if out_dir.endswith("/"): out_dir = out_dir[:-1]
    if not os.path.exists(out_dir):
        logging.info(f"Output directory {out_dir} does not exist. Creating...")
        os.makedirs(out_dir, exist_ok=True)

    for method, (embedding, loadings) in results.items():
        if not embedding.converged: logging.warning(f"{method}: {embedding.engine} did not converge ({embedding.state.value}) after {embedding.n_iter} iterations")

        # Save loadings
        for omic in loadings:
            path = f"{out_dir}/{method}_{omic}_factor.{out_format}"
            autosave_file(loadings[omic], out_format, path)
            logging.info(f"Saved {method} {omic} output factor to: {path}")

        # Save embedding
        path = f"{out_dir}/{method}_sample_factor.{out_format}"
        autosave_file(embedding.scores, out_format, path)
        logging.info(f"Saved {method} sample output factor to: {path}")



    # -----------------------------------------------------------------------------------------------
    # Evaluation
    # -----------------------------------------------------------------------------------------------
    if covariates is not None:
        evaluator = EmbeddingEvaluator()
        positive_label = covariates.resolve_label(args.positive_label)
        for method, (embedding, _) in results.items():
            if embedding.n_components < 2:
                logging.warning(f"{method}: embedding has {embedding.n_components} dimension, skipping the separator search")
                continue
            report = evaluator.search(embedding, covariates, positive_label=positive_label)
            logging.info(f"{method}: separator {report.separator} for class {report.positive_label!r} has FP = {report.false_positives}, FN = {report.false_negatives} ({report.error_rate:.2%} misclassified)")







# Content and code by bu1th4nh. Written with dedication in the University of Central Florida, EPCOT and the Magic Kingdom.
