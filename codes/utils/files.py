# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: files.py
# Date: 2025/03/17 22:40:09
# Description: Read/write omics tables by file extension
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
import pandas as pd
from typing import Literal


SUPPORTED_FORMATS = ("parquet", "csv", "tsv")


def strip_filename(path: str) -> str:
    """`/data/brca/mRNA.parquet` -> `mRNA`"""
    return os.path.splitext(os.path.basename(path))[0]



def autoread_file(path: str) -> pd.DataFrame:
    """
        Read a (feature, sample) table, the first column being the row identifiers. Format follows the extension
    """
    extension = os.path.splitext(path)[1].lower().lstrip(".")
    if extension == "parquet": return pd.read_parquet(path)
    elif extension == "csv": return pd.read_csv(path, index_col=0)
    elif extension in ("tsv", "txt"): return pd.read_csv(path, sep="\t", index_col=0)
    else: raise ValueError(f"Unsupported file extension '{extension}' of {path}. Expected one of {SUPPORTED_FORMATS}")



def autosave_file(df: pd.DataFrame, format: Literal["parquet", "csv", "tsv"], path: str):
    if format == "parquet":
        # Parquet needs string column labels
        df = df.copy()
        df.columns = [str(column) for column in df.columns]
        df.to_parquet(path)
    elif format == "csv": df.to_csv(path)
    elif format == "tsv": df.to_csv(path, sep="\t")
    else: raise ValueError(f"Unsupported output format '{format}'. Expected one of {SUPPORTED_FORMATS}")
    logging.debug(f"Saved table of shape {df.shape} to {path}")
