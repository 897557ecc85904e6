# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _debug.py
# Date: 2024/09/24 16:18:06
# Description: Component for debugging the package
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

from ._errors import SignConstraintError



def debug(self, message: str):
    if self.verbose: logging.info(message)



def nullityCheck(
    self,
    matrix: np.ndarray = None,
    additional_info: Any = None,
):
    if np.any(~np.isfinite(matrix)):
        # List the NaN/Inf positions
        nan_list = [tuple(int(i) for i in idx) for idx in np.argwhere(~np.isfinite(matrix))]
        err_str = f"{additional_info} has {len(nan_list)} NaN/Inf value(s) (size: {matrix.size} - {(len(nan_list) / matrix.size * 100):.2f}%). Listed of 10 NaN/Inf positions: {nan_list[:10]}"

        # Log the error
        logging.error(err_str)

        # Raise an error
        raise ValueError(f"{additional_info} has NaN/Inf values")



def negativeCheck(
    self,
    matrix: np.ndarray = None,
    additional_info: Any = None,
):
    if np.any(matrix < 0):
        # List the negative positions
        neg_list = [tuple(int(i) for i in idx) for idx in np.argwhere(matrix < 0)]
        err_str = f"{additional_info} has {len(neg_list)} negative value(s) (size: {matrix.size} - {(len(neg_list) / matrix.size * 100):.2f}%). Listed of 10 negative positions: {neg_list[:10]}"

        # Log the error
        logging.error(err_str)

        # Raise an error
        raise SignConstraintError(f"{additional_info} has negative values")
