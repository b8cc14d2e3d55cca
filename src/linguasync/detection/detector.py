"""
Language detection sessions.

A Detector accumulates text and estimates which of its table's languages
the text is written in. Detectors are created by a Registry, one per
detection request, and are meant to be used from a single thread.

Lifecycle:
    FRESH         no text appended yet
    ACCUMULATING  text appended since the last estimate
    ESTIMATED     probabilities computed and cached; a further append()
                  drops the cache and returns to ACCUMULATING

Estimation:
    The grams of the accumulated text that occur in the table form the
    evidence. Starting from a uniform distribution, every gram updates the
    distribution with Bayes' rule

        p[i] <- p[i] * ((1 - alpha) * P(gram | language i) + alpha / n)

    followed by renormalization. The smoothing term keeps grams that a
    language never produced from zeroing it out. The result depends on the
    order of the grams and on alpha, so the estimate averages several
    trials, each with a shuffled gram order and a slightly jittered alpha.
    A trial ends once one language exceeds the convergence threshold or
    after a fixed number of updates.

    A priority map can then favour some languages: in ``additive`` mode
    each weight is added to its language's probability before the whole
    vector is renormalized; in ``replace`` mode the result is restricted to
    the mapped languages and renormalized over them, and the weights play
    no part.

Randomness:
    Every session owns its random generator. With a seed the generator is
    re-created from the seed for every estimate, so identical text always
    produces bit-identical probabilities.

Example:
    >>> detector = registry.create(seed=42)
    >>> detector.append("El veloz murciélago hindú comía feliz cardillo")
    >>> detector.detect()
    'es'
    >>> detector.get_probabilities()
    [Language(lang='es', prob=0.9999...)]
"""

import time
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from linguasync.core.config.validation import (
    ConfigValidator,
    DetectorConfig,
    PriorityMode,
)
from linguasync.core.exceptions.custom_exceptions import ConfigurationError
from linguasync.core.logging.logger import get_logger
from linguasync.detection.table import ProbabilityTable
from linguasync.processing.base import PreprocessingPipeline
from linguasync.processing.preprocessing.cleaners import (
    LinkCleaner,
    MinorityLatinFilter,
    UnicodeComposer,
)
from linguasync.processing.preprocessing.ngram import TextNormalizer, extract_ngrams

logger = get_logger(__name__)

UNKNOWN_LANG = "unknown"


class DetectorState(str, Enum):
    FRESH = "fresh"
    ACCUMULATING = "accumulating"
    ESTIMATED = "estimated"


@dataclass(frozen=True)
class Language:
    """A language and its estimated probability"""

    lang: str
    prob: float

    def __str__(self) -> str:
        return f"{self.lang}:{self.prob}"


class Detector:
    """
    Stateful language detection session.

    Args:
        table: Read-only probability table to score against
        config: Validated options; built from ``options`` when omitted
        **options: DetectorConfig fields overriding ``config``

    Raises:
        ConfigurationError: If an option is invalid, or a priority map
            names no language of the table
    """

    def __init__(
        self,
        table: ProbabilityTable,
        config: Optional[DetectorConfig] = None,
        **options: Any,
    ):
        self._table = table
        self._config = self._merge(config, options)
        self._preprocess = PreprocessingPipeline([LinkCleaner(), UnicodeComposer()])
        self._latin_filter = MinorityLatinFilter()
        self._normalizer = TextNormalizer(self._config.max_repeat)
        self._rng = np.random.default_rng(self._config.seed)

        self._chunks: List[str] = []
        self._length = 0
        self._truncated = False
        self._state = DetectorState.FRESH
        self._evidence: Optional[Counter] = None
        self._probabilities: Optional[np.ndarray] = None
        self._priority = self._priority_weights(self._config)

    @staticmethod
    def _merge(
        config: Optional[DetectorConfig], options: Dict[str, Any]
    ) -> DetectorConfig:
        if config is None:
            return ConfigValidator.validate_config(options)
        if not options:
            return config
        return ConfigValidator.validate_config({**config.model_dump(), **options})

    def _update_config(self, **changes: Any) -> None:
        config = self._merge(self._config, changes)
        priority = self._priority_weights(config)
        self._config = config
        self._priority = priority
        self._invalidate()

    # -- configuration -------------------------------------------------

    @property
    def config(self) -> DetectorConfig:
        return self._config

    @property
    def languages(self) -> Tuple[str, ...]:
        return self._table.languages

    def set_alpha(self, alpha: float) -> None:
        """Change the smoothing parameter"""
        self._update_config(alpha=alpha)

    def set_max_text_length(self, max_text_length: int) -> None:
        """
        Change the maximum number of normalized characters kept.

        Text already accumulated beyond the new bound is cut off.
        """
        self._update_config(max_text_length=max_text_length)
        if self._length > max_text_length:
            text = self.text[:max_text_length]
            self._chunks = [text]
            self._length = len(text)
            self._truncated = True

    def set_priority_map(
        self,
        priority_map: Optional[Dict[str, float]],
        mode: Optional[PriorityMode] = None,
    ) -> None:
        """
        Set (or with None, remove) the per-language priority weights.

        Args:
            priority_map: Language -> non-negative weight; in ``replace``
                mode only the keys matter
            mode: ``additive`` or ``replace``; unchanged when None
        """
        changes: Dict[str, Any] = {"priority_map": priority_map}
        if mode is not None:
            changes["priority_mode"] = mode
        self._update_config(**changes)

    def _priority_weights(
        self, config: DetectorConfig
    ) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        priority_map = config.priority_map
        if not priority_map:
            return None

        languages = self._table.languages
        unknown = sorted(set(priority_map) - set(languages))
        if unknown:
            logger.warning("Priority map names unknown languages", languages=unknown)
        if len(unknown) == len(priority_map):
            raise ConfigurationError(
                "Priority map names no loaded language",
                error_code="PRIORITY_MAP_ERROR",
                details={"priority_map": sorted(priority_map)},
            )

        weights = np.zeros(len(languages))
        mask = np.zeros(len(languages), dtype=bool)
        for i, lang in enumerate(languages):
            if lang in priority_map:
                weights[i] = priority_map[lang]
                mask[i] = True
        return weights, mask

    # -- accumulation --------------------------------------------------

    @property
    def state(self) -> DetectorState:
        return self._state

    @property
    def text(self) -> str:
        """Normalized text accumulated so far"""
        return "".join(self._chunks)

    @property
    def is_truncated(self) -> bool:
        """True once appended text was dropped at max_text_length"""
        return self._truncated

    def append(self, text: str) -> None:
        """
        Append text to the session.

        URLs and e-mail addresses are removed, then the text is normalized.
        Once ``max_text_length`` normalized characters are held, further
        text is dropped without error and is_truncated becomes True.
        """
        self._invalidate()
        self._state = DetectorState.ACCUMULATING

        normalized = self._normalizer.normalize(self._preprocess(text))
        remaining = self._config.max_text_length - self._length
        if len(normalized) > remaining:
            normalized = normalized[: max(remaining, 0)]
            if not self._truncated:
                logger.debug(
                    "Text truncated", max_text_length=self._config.max_text_length
                )
            self._truncated = True
        if normalized:
            self._chunks.append(normalized)
            self._length += len(normalized)

    def _invalidate(self) -> None:
        self._evidence = None
        self._probabilities = None
        if self._state is DetectorState.ESTIMATED:
            self._state = DetectorState.ACCUMULATING

    @property
    def evidence(self) -> Counter:
        """Counts of the accumulated grams that occur in the table"""
        if self._evidence is None:
            text = self._latin_filter(self.text)
            self._evidence = Counter(
                gram for gram in extract_ngrams(text) if gram in self._table
            )
        return Counter(self._evidence)

    # -- estimation ----------------------------------------------------

    def _estimate(self) -> Optional[np.ndarray]:
        if self._state is DetectorState.ESTIMATED:
            return self._probabilities

        evidence = self.evidence
        probabilities = None
        if evidence:
            probabilities = self._run_trials(evidence)
            if self._priority is not None:
                probabilities = self._apply_priority(probabilities)
            logger.debug(
                "Estimation finished",
                evidence=sum(evidence.values()),
                top=self._table.languages[int(probabilities.argmax())],
            )
        else:
            logger.debug("No features in text", length=self._length)

        self._probabilities = probabilities
        self._state = DetectorState.ESTIMATED
        return probabilities

    def _run_trials(self, evidence: Counter) -> np.ndarray:
        config = self._config
        n = self._table.num_languages
        if config.seed is not None:
            rng = np.random.default_rng(config.seed)
        else:
            rng = self._rng

        rows = self._table.matrix[self._table.row_indices(evidence.elements())]
        deadline = None
        if config.time_budget is not None:
            deadline = time.monotonic() + config.time_budget

        trials = []
        expired = False
        for trial in range(config.n_trial):
            jitter = rng.uniform(-config.alpha_width, config.alpha_width)
            alpha = min(max(config.alpha + jitter, 0.0), 1.0)
            order = rng.permutation(len(rows))[: config.iteration_limit]
            factors = (1.0 - alpha) * rows[order] + alpha / n

            prob = np.full(n, 1.0 / n)
            iterations = 0
            for factor in factors:
                iterations += 1
                updated = prob * factor
                total = updated.sum()
                if total > 0.0 and np.isfinite(total):
                    prob = np.clip(updated / total, 0.0, 1.0)
                if prob.max() > config.conv_threshold:
                    break
                if deadline is not None and time.monotonic() > deadline:
                    expired = True
                    break

            trials.append(prob)
            logger.debug(
                "Trial finished",
                trial=trial,
                alpha=round(alpha, 5),
                iterations=iterations,
                top=self._table.languages[int(prob.argmax())],
            )
            if expired:
                logger.warning(
                    "Time budget exhausted",
                    trials=len(trials),
                    budget=config.time_budget,
                )
                break

        result = np.mean(trials, axis=0)
        return result / result.sum()

    def _apply_priority(self, probabilities: np.ndarray) -> np.ndarray:
        weights, mask = self._priority
        if self._replacing():
            adjusted = np.where(mask, probabilities, 0.0)
            if adjusted.sum() <= 0.0:
                adjusted = mask.astype(float)
        else:
            adjusted = probabilities + weights
        return adjusted / adjusted.sum()

    def _ranked(self, probabilities: np.ndarray, indices) -> List[Language]:
        ordered = sorted(indices, key=lambda i: (-probabilities[i], i))
        languages = self._table.languages
        return [Language(languages[i], float(probabilities[i])) for i in ordered]

    def get_probability_vector(self) -> Optional[np.ndarray]:
        """Probabilities in column order, or None without evidence"""
        probabilities = self._estimate()
        if probabilities is None:
            return None
        return probabilities.copy()

    def distribution(self) -> List[Language]:
        """Every language with its probability, most probable first"""
        probabilities = self._estimate()
        if probabilities is None:
            return []
        return self._ranked(probabilities, range(len(probabilities)))

    def get_probabilities(self) -> List[Language]:
        """
        Languages above the reporting threshold, most probable first.

        Ties keep the registry's column order. In ``replace`` priority mode
        every mapped language is reported.
        """
        probabilities = self._estimate()
        if probabilities is None:
            return []

        if self._replacing():
            indices = np.flatnonzero(self._priority[1])
        else:
            indices = np.flatnonzero(probabilities > self._config.prob_threshold)
        return self._ranked(probabilities, indices)

    def _replacing(self) -> bool:
        return (
            self._priority is not None
            and self._config.priority_mode is PriorityMode.REPLACE
        )

    def detect(self) -> str:
        """
        Return the most probable language.

        Returns UNKNOWN_LANG when the text holds no usable grams or when
        the leading probability does not exceed ``min_confidence``.
        """
        ranked = self.get_probabilities()
        if ranked and ranked[0].prob > self._config.min_confidence:
            return ranked[0].lang
        return UNKNOWN_LANG
