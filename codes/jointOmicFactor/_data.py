# /*==========================================================================================*\
# **                        _           _ _   _     _  _         _                            **
# **                       | |__  _   _/ | |_| |__ | || |  _ __ | |__                         **
# **                       | '_ \| | | | | __| '_ \| || |_| '_ \| '_ \                        **
# **                       | |_) | |_| | | |_| | | |__   _| | | | | | |                       **
# **                       |_.__/ \__,_|_|\__|_| |_|  |_| |_| |_|_| |_|                       **
# \*==========================================================================================*/


# -----------------------------------------------------------------------------------------------
# Author: Bùi Tiến Thành (@bu1th4nh)
# Title: _data.py
# Date: 2025/04/02 10:31:05
# Description: Data model: omic blocks, covariates, embeddings and loadings
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


from typing import List, Tuple, Union, Literal, Any, Callable, Dict, Iterator
from dataclasses import dataclass, field
from enum import Enum
import numpy as np
import pandas as pd
import logging

from ._errors import InvalidNoiseModelError, SampleAlignmentError



NOISE_MODELS = ("continuous", "binary", "categorical")


def latent_columns(k: int) -> List[str]:
    return [f"Latent_{i:03}" for i in range(k)]



class ConvergenceState(Enum):
    """
        State machine of the iterative engines:
        `INITIALIZED -> ITERATING -> CONVERGED | MAX_ITER_REACHED`
    """
    INITIALIZED         = "initialized"
    ITERATING           = "iterating"
    CONVERGED           = "converged"
    MAX_ITER_REACHED    = "max_iter_reached"





# -----------------------------------------------------------------------------------------------
# Omic blocks
# -----------------------------------------------------------------------------------------------
@dataclass(frozen=True, eq=False)
class OmicBlock:
    """
        One measurement modality of the cohort

        Data:
        - `name`: str
            Name of the omic layer, e.g. `mRNA`, `mutation`, `CNV`
        - `data`: pd.DataFrame
            Matrix of shape (feature, sample), or (m_d, N). Column labels are the sample identifiers
        - `noise_model`: Literal["continuous", "binary", "categorical"]
            Declared noise model of the block. Decides which likelihood the mixed-likelihood model uses
    """
    name:           str
    data:           pd.DataFrame
    noise_model:    str = "continuous"

    def __post_init__(self):
        if self.noise_model not in NOISE_MODELS:
            raise InvalidNoiseModelError(f"Invalid noise model '{self.noise_model}' for omic block {self.name}. Expected one of {NOISE_MODELS}")
        if not self.data.columns.is_unique:
            duplicated = self.data.columns[self.data.columns.duplicated()].tolist()
            raise SampleAlignmentError(f"Omic block {self.name} has duplicated sample identifiers: {duplicated[:10]}")
        if not self.data.index.is_unique:
            raise ValueError(f"Omic block {self.name} has duplicated feature identifiers")

        data = self.data.astype(np.float64).copy()
        if not np.all(np.isfinite(data.to_numpy())):
            raise ValueError(f"Omic block {self.name} has NaN/Inf values")
        object.__setattr__(self, "data", data)


    @property
    def n_features(self) -> int:
        return self.data.shape[0]

    @property
    def samples(self) -> List[str]:
        return self.data.columns.tolist()

    @property
    def features(self) -> List[str]:
        return self.data.index.tolist()

    def values(self) -> np.ndarray:
        """Copy of the (feature, sample) matrix"""
        return self.data.to_numpy(np.float64, copy=True)

    def with_data(self, data: pd.DataFrame) -> "OmicBlock":
        return OmicBlock(name=self.name, data=data, noise_model=self.noise_model)




class OmicBlockSet:
    """
        Ordered collection of omic blocks sharing an identical, ordered sample axis
    """

    # Internal variables, inferred from input
    D: int                                                      # Number of omics layers
    N: int                                                      # Number of samples
    M: int                                                      # Number of features in all omics layers
    m: List[int]                                                # Number of features in each omics layer


    def __init__(self, blocks: List[OmicBlock]):
        blocks = list(blocks)
        if len(blocks) == 0: raise ValueError("An omic block set needs at least one block")

        names = [block.name for block in blocks]
        if len(set(names)) != len(names): raise ValueError(f"Omic block names must be unique, got {names}")

        reference = blocks[0].data.columns
        for block in blocks[1:]:
            if not block.data.columns.equals(reference):
                raise SampleAlignmentError(f"Omic block {block.name} does not share the sample axis of {blocks[0].name}. Align the blocks first")

        self._blocks = tuple(blocks)
        self.D = len(blocks)
        self.N = len(reference)
        self.m = [block.n_features for block in blocks]
        self.M = sum(self.m)


    @classmethod
    def from_frames(
        cls,
        frames: Dict[str, pd.DataFrame],
        noise_models: Union[Dict[str, str], List[str], None] = None,
    ) -> "OmicBlockSet":
        names = list(frames.keys())
        if noise_models is None: noise_models = ["continuous"] * len(names)
        elif isinstance(noise_models, dict): noise_models = [noise_models.get(name, "continuous") for name in names]
        if len(noise_models) != len(names): raise ValueError(f"Length of noise models is not matched with the number of omics layers. Expected {len(names)} but got {len(noise_models)}")

        return cls([OmicBlock(name, frames[name], tag) for name, tag in zip(names, noise_models)])


    def __len__(self) -> int:
        return self.D

    def __iter__(self) -> Iterator[OmicBlock]:
        return iter(self._blocks)

    def __getitem__(self, key: Union[int, str]) -> OmicBlock:
        if isinstance(key, str):
            for block in self._blocks:
                if block.name == key: return block
            raise KeyError(f"No omic block named {key}")
        return self._blocks[key]

    def __repr__(self) -> str:
        layers = ", ".join(f"{block.name}[{block.noise_model}]: {block.n_features}" for block in self._blocks)
        return f"OmicBlockSet({self.N} samples; {layers})"


    @property
    def names(self) -> List[str]:
        return [block.name for block in self._blocks]

    @property
    def samples(self) -> List[str]:
        return self._blocks[0].samples

    @property
    def noise_models(self) -> List[str]:
        return [block.noise_model for block in self._blocks]

    def stacked(self) -> np.ndarray:
        """Blocks concatenated on the feature axis, aka big_X = [X_1; X_2; ...; X_D] with shape (M, N)"""
        return np.concatenate([block.values() for block in self._blocks], axis=0)

    def split_indices(self) -> np.ndarray:
        """Row indices to split a stacked (M, .) matrix back into blocks"""
        return np.cumsum(self.m)[:-1]





# -----------------------------------------------------------------------------------------------
# Covariates
# -----------------------------------------------------------------------------------------------
@dataclass(frozen=True, eq=False)
class CovariateTable:
    """
        Sample identifier -> categorical label (e.g. cancer subtype)
    """
    labels: pd.Series

    def __post_init__(self):
        if not self.labels.index.is_unique:
            raise SampleAlignmentError("Covariate table has duplicated sample identifiers")
        object.__setattr__(self, "labels", self.labels.copy(deep=True))

    @property
    def samples(self) -> List[str]:
        return self.labels.index.tolist()

    @property
    def categories(self) -> List[Any]:
        return sorted(pd.unique(self.labels).tolist())

    def reindex(self, samples: List[str]) -> "CovariateTable":
        """Subset and reorder to the given sample axis"""
        missing = [sample for sample in samples if sample not in self.labels.index]
        if len(missing) > 0:
            raise SampleAlignmentError(f"Covariate table is missing {len(missing)} sample(s), e.g. {missing[:10]}")
        return CovariateTable(self.labels.loc[list(samples)])

    def resolve_label(self, value: Any) -> Any:
        """
            Label of the table equal to `value` or to its text form, e.g. `"1"` -> 1 for integer-coded subtypes.
            Unmatched values are returned unchanged
        """
        if value is None or value in self.categories: return value
        for label in self.categories:
            if str(label) == str(value): return label
        try:
            number = float(value)
        except (TypeError, ValueError):
            return value
        for label in self.categories:
            if isinstance(label, (int, float)) and not isinstance(label, bool) and label == number: return label
        return value





# -----------------------------------------------------------------------------------------------
# Engine outputs
# -----------------------------------------------------------------------------------------------
@dataclass(frozen=True, eq=False)
class Embedding:
    """
        Sample embedding produced by exactly one engine

        - `scores`: pd.DataFrame of shape (sample, latent)
        - `engine`, `hyperparameters`: provenance of the run
        - `state`: convergence state of iterative engines, None for exact ones
        - `n_iter`, `objective_history`: iteration count and objective trace of iterative engines
    """
    scores:             pd.DataFrame
    engine:             str
    hyperparameters:    Dict[str, Any] = field(default_factory=dict)
    state:              Union[ConvergenceState, None] = None
    n_iter:             int = 0
    objective_history:  Tuple[float, ...] = ()

    @property
    def samples(self) -> List[str]:
        return self.scores.index.tolist()

    @property
    def n_components(self) -> int:
        return self.scores.shape[1]

    @property
    def converged(self) -> bool:
        return self.state is None or self.state == ConvergenceState.CONVERGED

    def to_numpy(self) -> np.ndarray:
        return self.scores.to_numpy(np.float64, copy=True)




@dataclass(frozen=True, eq=False)
class LoadingSet:
    """
        Per-block loadings, i.e. (feature, latent) matrices, owned by the engine which produced them.
        Access returns copies so the stored loadings are never mutated
    """
    engine:     str
    loadings:   Dict[str, pd.DataFrame]

    def __post_init__(self):
        object.__setattr__(self, "loadings", {name: frame.copy(deep=True) for name, frame in self.loadings.items()})

    def __getitem__(self, name: str) -> pd.DataFrame:
        return self.loadings[name].copy(deep=True)

    def __iter__(self) -> Iterator[str]:
        return iter(self.loadings)

    def __len__(self) -> int:
        return len(self.loadings)

    @property
    def names(self) -> List[str]:
        return list(self.loadings.keys())

    def stacked(self) -> pd.DataFrame:
        """All blocks concatenated on the feature axis with a (block, feature) index"""
        return pd.concat([self.loadings[name] for name in self.names], axis=0, keys=self.names)
