# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _align.py
# Date: 2025/04/02 11:02:19
# Description: Sample axis alignment of omic tables and covariates
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

from ._data import OmicBlockSet, OmicBlock, CovariateTable
from ._errors import SampleAlignmentError



class MatrixAligner:
    """
        Build an `OmicBlockSet` (and the matching `CovariateTable`) with one shared, ordered sample axis

        Control parameters:
        - `how`: Literal["strict", "intersect"]
            - 'strict': every omic table must hold exactly the same samples, the covariate table must contain all of them
            - 'intersect': keep the samples common to every table (and to the covariates when given)
            In both modes the sample order is the one of the first omic table
    """

    how: Literal["strict", "intersect"]


    def __init__(self, how: Literal["strict", "intersect"] = "strict"):
        if how not in ("strict", "intersect"): raise ValueError(f"Invalid value for how parameter: {how}")
        self.how = how


    def align(
        self,
        frames:         Dict[str, pd.DataFrame],                        # Omic name -> table of shape (feature, sample)
        noise_models:   Union[Dict[str, str], List[str], None] = None,  # Omic name -> noise model tag
        covariates:     Union[pd.Series, CovariateTable, None] = None,  # Sample -> label
    ) -> Tuple[OmicBlockSet, Union[CovariateTable, None]]:
        if len(frames) == 0: raise ValueError("No omic table to align")

        for name, frame in frames.items():
            if not frame.columns.is_unique:
                raise SampleAlignmentError(f"Omic table {name} has duplicated sample identifiers")
        if isinstance(covariates, pd.Series): covariates = CovariateTable(covariates)


        # Common sample axis, in the order of the first table
        names = list(frames.keys())
        reference = frames[names[0]].columns.tolist()
        if self.how == "strict":
            for name in names[1:]:
                if set(frames[name].columns) != set(reference):
                    only_ref = len(set(reference) - set(frames[name].columns))
                    only_cur = len(set(frames[name].columns) - set(reference))
                    raise SampleAlignmentError(f"Omic table {name} does not hold the samples of {names[0]} ({only_ref} missing, {only_cur} extra)")
            common_samples = reference
        else:
            shared = set(reference)
            for name in names[1:]: shared = shared.intersection(frames[name].columns)
            if covariates is not None: shared = shared.intersection(covariates.samples)
            common_samples = [sample for sample in reference if sample in shared]

            if len(common_samples) == 0: raise SampleAlignmentError("No sample is shared by all tables")
            for name in names:
                dropped = frames[name].shape[1] - len(common_samples)
                if dropped > 0: logging.warning(f"Dropped {dropped} sample(s) of {name} not shared by all tables")


        block_set = OmicBlockSet.from_frames(
            {name: frames[name].loc[:, common_samples] for name in names},
            noise_models
        )
        aligned_covariates = None if covariates is None else covariates.reindex(common_samples)

        logging.info(f"Aligned {block_set}")
        return block_set, aligned_covariates
