# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: __init__.py
# Date: 2025/04/02 10:12:44
# Description: Joint dimension reduction of multi-omics layers
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


from ._errors import (
    JointOmicFactorError,
    SampleAlignmentError,
    DegenerateFeatureError,
    DegenerateBlockError,
    SignConstraintError,
    RankDeficiencyError,
    InvalidNoiseModelError,
    NonConvergenceWarning,
)
from ._data import (
    NOISE_MODELS,
    ConvergenceState,
    OmicBlock,
    OmicBlockSet,
    CovariateTable,
    Embedding,
    LoadingSet,
    latent_columns,
)
from ._align import MatrixAligner
from ._normalize import BlockNormalizer
from ._mfa import MFAEngine
from ._nmf import JointNMFEngine
from ._likelihood import (
    LikelihoodStrategy,
    GaussianLikelihood,
    BernoulliLikelihood,
    MultinomialLikelihood,
    likelihood_func_selection,
)
from ._latent import MixedLikelihoodLatentModel
from ._evaluate import LinearSeparator, SeparationReport, EmbeddingEvaluator
from ._parallel import run_engines, default_engines, METHODS
from ._simulate import simulate_planted_clusters
