"""
Read-only gram probability table shared by detection sessions.

A ProbabilityTable is the compiled form of a registry at one point in
time: a matrix with one row per gram and one column per language, plus
the gram -> row index. The matrix is marked read-only and the index is a
read-only mapping, so one table can be shared by any number of detectors
on any number of threads without locking.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np


class ProbabilityTable:
    """
    Immutable gram x language probability matrix.

    Attributes:
        languages (Tuple[str, ...]): Column order; column i is languages[i]
        matrix (np.ndarray): Read-only array of shape (grams, languages)
    """

    __slots__ = ("_languages", "_index", "_matrix")

    def __init__(
        self,
        languages: Sequence[str],
        index: Dict[str, int],
        matrix: np.ndarray,
    ):
        if matrix.shape != (len(index), len(languages)):
            raise ValueError(
                f"matrix shape {matrix.shape} does not match "
                f"{len(index)} grams x {len(languages)} languages"
            )
        matrix.flags.writeable = False
        self._languages: Tuple[str, ...] = tuple(languages)
        self._index: Mapping[str, int] = MappingProxyType(dict(index))
        self._matrix = matrix

    @property
    def languages(self) -> Tuple[str, ...]:
        return self._languages

    @property
    def num_languages(self) -> int:
        return len(self._languages)

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, gram: object) -> bool:
        return gram in self._index

    def row(self, gram: str) -> np.ndarray:
        """Per-language probabilities of ``gram``; zeros if never observed."""
        i = self._index.get(gram)
        if i is None:
            return np.zeros(self.num_languages)
        return self._matrix[i]

    def row_indices(self, grams: Iterable[str]) -> np.ndarray:
        """Row indices of the grams present in the table, in input order."""
        indices: List[int] = []
        for gram in grams:
            i = self._index.get(gram)
            if i is not None:
                indices.append(i)
        return np.asarray(indices, dtype=np.intp)

    def __repr__(self) -> str:
        return (
            f"ProbabilityTable(languages={len(self._languages)}, "
            f"grams={len(self._index)})"
        )
