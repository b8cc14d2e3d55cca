"""
Language profile model.

A language profile is the precomputed n-gram statistics of one language:
how often every character gram of length 1 to 3 occurred in a training
corpus, and how many grams of each length the corpus held in total. The
registry divides the two to obtain per-language gram probabilities.

Profiles are consumed, never built or updated, by LinguaSync. The model is
frozen once constructed so that a profile shared between registries cannot
change underneath them.

Example:
    >>> profile = LangProfile(
    ...     name="en",
    ...     freq={"t": 120, "th": 40, "the": 25},
    ...     n_words=[1000, 800, 600],
    ... )
    >>> profile.probability("th")
    0.05
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MAX_GRAM_LENGTH = 3


class LangProfile(BaseModel):
    """
    Immutable per-language n-gram frequency record.

    Attributes:
        name (str): Language identifier, unique within one registry
        freq (Dict[str, int]): Gram to occurrence count
        n_words (Tuple[int, int, int]): Total grams per length; index 0 for
            unigrams, 1 for bigrams, 2 for trigrams

    Grams longer than three characters are accepted, since profile
    files produced by other tools sometimes carry them, but they have no
    denominator and are skipped by the registry.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    freq: Dict[str, int]
    n_words: Tuple[int, int, int]

    @field_validator("freq")
    @classmethod
    def validate_counts(cls, v: Dict[str, int]) -> Dict[str, int]:
        for gram, count in v.items():
            if not gram:
                raise ValueError("freq cannot contain an empty gram")
            if count < 0:
                raise ValueError(f"negative count for gram '{gram}'")
        return v

    @field_validator("n_words")
    @classmethod
    def validate_totals(cls, v: Tuple[int, int, int]) -> Tuple[int, int, int]:
        if any(total < 0 for total in v):
            raise ValueError("n_words totals must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_denominators(self) -> "LangProfile":
        # Every gram length in use needs a non-zero total to divide by.
        used = {len(gram) for gram in self.freq if len(gram) <= MAX_GRAM_LENGTH}
        for length in sorted(used):
            if self.n_words[length - 1] == 0:
                raise ValueError(
                    f"n_words[{length - 1}] is 0 but {length}-grams are present"
                )
        return self

    def probability(self, gram: str) -> Optional[float]:
        """
        Relative frequency of ``gram`` within grams of the same length.

        Returns None for grams outside the 1-3 length range and 0.0 for
        grams the profile never observed.
        """
        length = len(gram)
        if not 1 <= length <= MAX_GRAM_LENGTH:
            return None
        count = self.freq.get(gram, 0)
        if count == 0:
            return 0.0
        return count / self.n_words[length - 1]
