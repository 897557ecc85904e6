# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: arg_parsing.py
# Date: 2025/03/17 22:51:30
# Description: Command line arguments of the runner
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


import argparse
from typing import List, Union

from codes.jointOmicFactor import METHODS



def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog = "jointOmicFactor-run.py",
        description = "Joint dimension reduction of multi-omics layers with MFA, joint NMF and a mixed-likelihood latent model",
    )

    # Input
    parser.add_argument("--omics_input", type=str, nargs="+", required=False, default=[], help="Omics tables of shape (feature, sample). The file name without extension is the omic name")
    parser.add_argument("--noise_models", type=str, nargs="+", required=False, default=None, choices=["continuous", "binary", "categorical"], help="Noise model of each omics table, in the same order. Default: all continuous")
    parser.add_argument("--covariates", type=str, required=False, default=None, help="Table of sample labels, indexed by sample")
    parser.add_argument("--label_column", type=str, required=False, default=None, help="Label column of the covariate table. Default: the first column")
    parser.add_argument("--positive_label", type=str, required=False, default=None, help="Class evaluated as positive by the separator search")
    parser.add_argument("--align", type=str, required=False, default="strict", choices=["strict", "intersect"], help="Sample alignment mode")
    parser.add_argument("--simulate", action="store_true", help="Run on a simulated planted-cluster cohort instead of the input files")

    # Methods & hyperparameters
    parser.add_argument("--methods", type=str, nargs="+", required=False, default=list(METHODS), choices=METHODS)
    parser.add_argument("--num_components", type=int, required=False, default=2)
    parser.add_argument("--l1_penalties", type=float, nargs="+", required=False, default=[1.0], help="L1 penalty of the mixed-likelihood loadings. One value is broadcasted to all omics")
    parser.add_argument("--num_iterations", type=int, required=False, default=None, help="Maximum number of iterations of the iterative engines")
    parser.add_argument("--tolerance", type=float, required=False, default=None, help="Convergence tolerance of the iterative engines. Default: engine specific")
    parser.add_argument("--num_restarts", type=int, required=False, default=1, help="Random restarts of the joint NMF")
    parser.add_argument("--seed", type=int, required=False, default=None)
    parser.add_argument("--parallel", action="store_true", help="Solve the engines in a process pool")

    # Output & tracking
    parser.add_argument("--output_dir", type=str, required=False, default="./output")
    parser.add_argument("--output_format", type=str, required=False, default="parquet", choices=["parquet", "csv", "tsv"])
    parser.add_argument("--log_file", type=str, required=False, default=None)
    parser.add_argument("--mlflow_uri", type=str, required=False, default="")
    parser.add_argument("--mlflow_experiment_name", type=str, required=False, default="jointOmicFactor")
    parser.add_argument("--verbose", action="store_true")
    return parser



def parse_args(argv: Union[List[str], None] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.simulate and len(args.omics_input) == 0:
        parser.error("--omics_input is required unless --simulate is given")
    if args.noise_models is not None and not args.simulate and len(args.noise_models) != len(args.omics_input):
        parser.error(f"Got {len(args.noise_models)} noise models for {len(args.omics_input)} omics tables")
    return args
