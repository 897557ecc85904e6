# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _evaluate.py
# Date: 2025/04/11 16:20:41
# Description: Linear-separator evaluation of 2D embeddings against sample labels
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


from typing import List, Tuple, Union, Literal, Any, Callable, Dict, Sequence
from dataclasses import dataclass
from tqdm import tqdm
import numpy as np
import pandas as pd
import logging

from ._data import Embedding, CovariateTable
from ._errors import SampleAlignmentError



@dataclass(frozen=True)
class LinearSeparator:
    """
        Line a*x + b*y = c in the plane of two embedding dimensions.
        A point is on the positive side iff a*x + b*y > c
    """
    normal: Tuple[float, float]
    offset: float

    @classmethod
    def from_slope_intercept(cls, slope: float, intercept: float, above: bool = True) -> "LinearSeparator":
        """Positive side is y > slope * x + intercept, or below the line if `above` is False"""
        if above: return cls((-float(slope), 1.0), float(intercept))
        return cls((float(slope), -1.0), -float(intercept))

    @classmethod
    def vertical(cls, x0: float, right: bool = True) -> "LinearSeparator":
        """Positive side is x > x0, or x < x0 if `right` is False"""
        if right: return cls((1.0, 0.0), float(x0))
        return cls((-1.0, 0.0), -float(x0))

    @property
    def slope(self) -> float:
        a, b = self.normal
        return np.inf if b == 0 else -a / b

    @property
    def intercept(self) -> float:
        a, b = self.normal
        return np.nan if b == 0 else self.offset / b

    def predict(self, points: np.ndarray) -> np.ndarray:
        """Boolean mask of the points on the positive side, points of shape (n, 2)"""
        return np.asarray(points, dtype=np.float64) @ np.asarray(self.normal) > self.offset

    def __str__(self) -> str:
        a, b = self.normal
        return f"{a:+.4f} * x {b:+.4f} * y > {self.offset:.4f}"




@dataclass(frozen=True)
class SeparationReport:
    separator:          LinearSeparator
    positive_label:     Any
    false_positives:    int
    false_negatives:    int
    n_samples:          int

    @property
    def misclassified(self) -> int:
        return self.false_positives + self.false_negatives

    @property
    def error_rate(self) -> float:
        return self.misclassified / self.n_samples if self.n_samples > 0 else 0.0





class EmbeddingEvaluator:
    """
        Counts how well a linear separator in two embedding dimensions recovers a labeled class.
        A sample is predicted as the positive class iff it lies on the positive side of the separator

        Hyperparameters:
        - `n_directions`: int
            Number of line directions of the search grid, evenly spaced on [0, 2pi). Must be a multiple of 4
            so the grid holds the vertical and horizontal lines with both orientations
        - `dims`: Tuple[int, int]
            Positions of the two embedding columns to evaluate on

        Control parameters:
        - `verbose`: bool
            Whether to show the progress of the grid search
    """

    def __init__(
        self,
        n_directions:   int = 72,
        dims:           Tuple[int, int] = (0, 1),
        verbose:        bool = False,
    ):
        if n_directions < 4 or n_directions % 4 != 0: raise ValueError(f"Number of directions must be a positive multiple of 4, got {n_directions}")
        if len(dims) != 2: raise ValueError(f"Exactly 2 embedding dimensions are evaluated, got {dims}")

        self.n_directions = n_directions
        self.dims = tuple(dims)
        self.verbose = verbose


    def prepare(
        self,
        embedding:      Union[Embedding, pd.DataFrame, np.ndarray],
        labels:         Union[pd.Series, CovariateTable, Sequence[Any]],
        positive_label: Any = None,
    ) -> Tuple[np.ndarray, np.ndarray, Any]:
        """
            Resolve the (n, 2) points, the boolean positive-class mask and the positive label
        """
        if isinstance(embedding, Embedding): scores = embedding.scores
        elif isinstance(embedding, pd.DataFrame): scores = embedding
        else: scores = pd.DataFrame(np.asarray(embedding, dtype=np.float64))

        if scores.shape[1] <= max(self.dims): raise ValueError(f"Embedding has {scores.shape[1]} column(s), cannot evaluate dimensions {self.dims}")
        points = scores.iloc[:, list(self.dims)].to_numpy(np.float64)


        # Labels are aligned on sample identifiers, plain sequences by position
        if isinstance(labels, CovariateTable): y = labels.reindex(scores.index.tolist()).labels.to_numpy()
        elif isinstance(labels, pd.Series): y = CovariateTable(labels).reindex(scores.index.tolist()).labels.to_numpy()
        else:
            y = np.asarray(list(labels), dtype=object)
            if len(y) != len(points): raise SampleAlignmentError(f"Got {len(y)} labels for {len(points)} samples")


        classes = sorted(pd.unique(pd.Series(y)).tolist())
        if positive_label is None:
            if all(c in (0, 1) for c in classes): positive_label = 1
            elif len(classes) <= 2: positive_label = classes[0]
            else: raise ValueError(f"Labels have {len(classes)} classes {classes[:10]}, a positive label is required")
        elif positive_label not in classes:
            raise ValueError(f"Positive label {positive_label!r} is not one of the labels {classes[:10]}")

        return points, np.asarray([label == positive_label for label in y], dtype=bool), positive_label


    def evaluate(
        self,
        embedding:      Union[Embedding, pd.DataFrame, np.ndarray],
        labels:         Union[pd.Series, CovariateTable, Sequence[Any]],
        separator:      LinearSeparator,
        positive_label: Any = None,
    ) -> SeparationReport:
        points, truth, positive_label = self.prepare(embedding, labels, positive_label)
        predicted = separator.predict(points)
        return SeparationReport(
            separator = separator,
            positive_label = positive_label,
            false_positives = int(np.sum(predicted & ~truth)),
            false_negatives = int(np.sum(~predicted & truth)),
            n_samples = len(truth),
        )


    def search(
        self,
        embedding:      Union[Embedding, pd.DataFrame, np.ndarray],
        labels:         Union[pd.Series, CovariateTable, Sequence[Any]],
        positive_label: Any = None,
    ) -> SeparationReport:
        """
            Grid search of the separator minimizing FP + FN. Per direction, offsets are the midpoints of
            consecutive projected samples plus one offset on each outer end. Ties keep the first one in grid order
        """
        points, truth, positive_label = self.prepare(embedding, labels, positive_label)

        best = None
        for i in tqdm(range(self.n_directions), desc="Separator directions", disable=not self.verbose):
            theta = 2 * np.pi * i / self.n_directions
            normal = (float(np.round(np.cos(theta), 12)), float(np.round(np.sin(theta), 12)))

            projection = points @ np.asarray(normal)
            levels = np.unique(projection)
            offsets = np.concatenate([[levels[0] - 1.0], (levels[:-1] + levels[1:]) / 2, [levels[-1] + 1.0]])

            predicted = projection[None, :] > offsets[:, None]
            false_positives = np.sum(predicted & ~truth[None, :], axis=1)
            false_negatives = np.sum(~predicted & truth[None, :], axis=1)
            j = int(np.argmin(false_positives + false_negatives))

            if best is None or false_positives[j] + false_negatives[j] < best[2] + best[3]:
                best = (normal, float(offsets[j]), int(false_positives[j]), int(false_negatives[j]))

        normal, offset, false_positives, false_negatives = best
        report = SeparationReport(
            separator = LinearSeparator(normal, offset),
            positive_label = positive_label,
            false_positives = false_positives,
            false_negatives = false_negatives,
            n_samples = len(truth),
        )
        logging.info(f"Best separator {report.separator} for class {positive_label!r}: FP = {false_positives}, FN = {false_negatives}")
        return report
