"""
Language profile registry.

A Registry compiles language profiles into gram probabilities and hands
out detection sessions bound to them. Before detecting anything a registry
must be loaded with at least one profile (in practice two or more, since a
single language cannot be told apart from anything).

Loading:
    - add_profile(): one profile into an explicit column
    - load_from_records(): a batch of LangProfile records (or plain dicts)
    - load_from_json(): a batch of JSON documents
    - load_from_directory(): one profile file per language

Columns are assigned in load order and never move. Loading serializes on
the registry's lock; several threads may load into and create detectors
from one registry.

Snapshots:
    create() compiles the current state into a read-only ProbabilityTable
    and binds the new Detector to it. The compiled table is cached until
    the next load or clear(). A detector keeps the table it was created
    with, so later loads never change the results of existing sessions.

Failure Semantics:
    A load error aborts the call. Profiles of the same batch that were
    added before the failing one stay loaded; call clear() before retrying
    with corrected input.

Example:
    >>> registry = Registry("news")
    >>> registry.load_from_directory("/opt/profiles")
    >>> detector = registry.create(seed=0)
    >>> detector.append("Der schnelle braune Fuchs")
    >>> detector.detect()
    'de'
"""

import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np
from pydantic import ValidationError

from linguasync.core.exceptions.custom_exceptions import (
    DuplicateLanguageError,
    FormatError,
    InsufficientProfilesError,
    NotReadyError,
)
from linguasync.core.logging.logger import bind_registry
from linguasync.detection.detector import Detector
from linguasync.detection.table import ProbabilityTable
from linguasync.profiles.loader import iter_profile_files, parse_profile, read_profile
from linguasync.profiles.model import MAX_GRAM_LENGTH, LangProfile

ProfileInput = Union[LangProfile, Mapping[str, Any]]


class Registry:
    """
    Named collection of language profiles compiled into one table.

    Attributes:
        name (str): Registry name, used in logs and errors
        lock (threading.RLock): Serializes loads; held by callers that
            need a check-then-load step to be atomic
    """

    def __init__(self, name: str = "custom"):
        self.name = name
        self.lock = threading.RLock()
        self.logger = bind_registry(name)
        self._rows: Dict[str, np.ndarray] = {}
        self._languages: List[str] = []
        self._snapshot: Optional[ProbabilityTable] = None
        self._seed: Optional[int] = None

    @property
    def languages(self) -> Tuple[str, ...]:
        """Loaded language names in column order"""
        with self.lock:
            return tuple(self._languages)

    @property
    def is_empty(self) -> bool:
        with self.lock:
            return not self._languages

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def set_seed(self, seed: Optional[int]) -> None:
        """Seed applied to detectors created without an explicit seed"""
        self._seed = seed

    def __len__(self) -> int:
        return len(self.languages)

    def __repr__(self) -> str:
        return f"Registry(name={self.name!r}, languages={len(self)})"

    def add_profile(
        self,
        profile: LangProfile,
        index: Optional[int] = None,
        total_languages: Optional[int] = None,
    ) -> None:
        """
        Add one profile as column ``index`` of the table.

        For every gram of length 1-3, ``freq / n_words[len - 1]`` is written
        into the gram's row; rows are created zero-filled with
        ``total_languages`` columns (widened if an earlier batch created
        them narrower).

        Args:
            profile: Profile to add
            index: Column for this language; defaults to the next free
                column and must equal it when given
            total_languages: Expected column count after the current batch

        Raises:
            DuplicateLanguageError: If the language is already loaded
            ValueError: If ``index`` is not the next free column
        """
        with self.lock:
            if profile.name in self._languages:
                raise DuplicateLanguageError(
                    "duplicate the same language profile",
                    details={"registry": self.name, "language": profile.name},
                )

            expected = len(self._languages)
            if index is None:
                index = expected
            if index != expected:
                raise ValueError(
                    f"column {index} requested but the next free column is {expected}"
                )
            width = max(total_languages or 0, index + 1)

            self._languages.append(profile.name)
            self._snapshot = None

            for gram, count in profile.freq.items():
                length = len(gram)
                if not 1 <= length <= MAX_GRAM_LENGTH:
                    continue
                row = self._rows.get(gram)
                if row is None:
                    row = np.zeros(width)
                    self._rows[gram] = row
                elif row.shape[0] <= index:
                    row = np.pad(row, (0, width - row.shape[0]))
                    self._rows[gram] = row
                row[index] = count / profile.n_words[length - 1]

    def _add_batch(self, profiles: Iterable[LangProfile], size: int) -> None:
        base = len(self._languages)
        for offset, profile in enumerate(profiles):
            self.add_profile(profile, base + offset, base + size)

    def load_from_records(self, records: Iterable[ProfileInput]) -> None:
        """
        Load a batch of profile records.

        Raises:
            InsufficientProfilesError: If fewer than two records are given
            FormatError: If a plain mapping is not a valid profile
            DuplicateLanguageError: If a language is already loaded
        """
        records = list(records)
        if len(records) < 2:
            raise InsufficientProfilesError(
                "Need more than 2 profiles",
                details={"registry": self.name, "received": len(records)},
            )

        with self.lock:
            self._add_batch(
                (self._coerce(record, i) for i, record in enumerate(records)),
                len(records),
            )
            self.logger.info(
                "Profiles loaded", source="records", languages=len(self._languages)
            )

    def load_from_json(self, documents: Iterable[Union[str, bytes]]) -> None:
        """Load a batch of JSON profile documents"""
        documents = list(documents)
        if len(documents) < 2:
            raise InsufficientProfilesError(
                "Need more than 2 profiles",
                details={"registry": self.name, "received": len(documents)},
            )

        with self.lock:
            self._add_batch(
                (
                    parse_profile(document, source=f"document[{i}]")
                    for i, document in enumerate(documents)
                ),
                len(documents),
            )
            self.logger.info(
                "Profiles loaded", source="json", languages=len(self._languages)
            )

    def load_from_directory(self, directory: Union[str, Path]) -> None:
        """
        Load one profile per regular, non-hidden file of ``directory``.

        Columns follow the directory iteration order.

        Raises:
            SourceUnavailableError: If the directory or a file can't be read
            FormatError: If a file is not a valid profile
            DuplicateLanguageError: If a language is already loaded
        """
        with self.lock:
            files = iter_profile_files(directory)
            if not files:
                self.logger.warning("No profile files found", source=str(directory))
                return
            self._add_batch((read_profile(path) for path in files), len(files))
            self.logger.info(
                "Profiles loaded",
                source=str(directory),
                languages=len(self._languages),
            )

    def clear(self) -> None:
        """Remove every loaded profile so the registry can be reloaded"""
        with self.lock:
            self._languages.clear()
            self._rows.clear()
            self._snapshot = None
            self.logger.info("Registry cleared")

    def snapshot(self) -> ProbabilityTable:
        """
        Compile the current state into a read-only table.

        Raises:
            NotReadyError: If no language is loaded
        """
        with self.lock:
            if not self._languages:
                raise NotReadyError(
                    f"Registry '{self.name}' has no language profiles loaded",
                    error_code="NEED_LOAD_PROFILE",
                    details={"registry": self.name},
                )
            if self._snapshot is None:
                width = len(self._languages)
                index: Dict[str, int] = {}
                matrix = np.zeros((len(self._rows), width))
                for i, (gram, row) in enumerate(self._rows.items()):
                    index[gram] = i
                    n = min(width, row.shape[0])
                    matrix[i, :n] = row[:n]
                self._snapshot = ProbabilityTable(self._languages, index, matrix)
            return self._snapshot

    def create(self, alpha: Optional[float] = None, **options: Any) -> Detector:
        """
        Construct a detection session bound to the current table.

        Args:
            alpha: Smoothing parameter; the configured default when None
            **options: Further DetectorConfig options (seed,
                max_text_length, priority_map, priority_mode, ...)

        Raises:
            NotReadyError: If no language is loaded
            ConfigurationError: If an option is invalid
        """
        table = self.snapshot()
        if alpha is not None:
            options["alpha"] = alpha
        if "seed" not in options and self._seed is not None:
            options["seed"] = self._seed
        return Detector(table, **options)

    def _coerce(self, record: ProfileInput, position: int) -> LangProfile:
        if isinstance(record, LangProfile):
            return record
        try:
            return LangProfile.model_validate(record)
        except ValidationError as e:
            raise FormatError(
                f"profile format error in record {position}",
                error_code="PROFILE_SCHEMA_ERROR",
                details={"registry": self.name, "position": position},
            ) from e
