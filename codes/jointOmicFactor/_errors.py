# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _errors.py
# Date: 2025/04/02 10:12:47
# Description: Error taxonomy of the joint omic factor package
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


class JointOmicFactorError(ValueError):
    """Base class of every error raised by the jointOmicFactor package"""


class SampleAlignmentError(JointOmicFactorError):
    """The omic blocks (or the covariate table) do not share the same sample axis"""


class DegenerateFeatureError(JointOmicFactorError):
    """A feature (row) sums to zero and cannot be feature-sum normalized"""


class DegenerateBlockError(JointOmicFactorError):
    """A whole block has zero Frobenius norm / zero leading singular value"""


class SignConstraintError(JointOmicFactorError):
    """Negative entries where a non-negative matrix is required"""


class RankDeficiencyError(JointOmicFactorError):
    """Fewer than two usable latent dimensions"""


class InvalidNoiseModelError(JointOmicFactorError):
    """Unrecognized noise model tag on an omic block"""


class NonConvergenceWarning(UserWarning):
    """
        Iterative engine exhausted `max_iter` before reaching the tolerance.
        The result is still returned, flagged with `ConvergenceState.MAX_ITER_REACHED`
    """
