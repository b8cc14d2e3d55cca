"""
LinguaSync - Statistical language identification with character n-grams

LinguaSync identifies the natural language of a text by comparing its
character grams (1 to 3 characters) with precomputed per-language
frequency profiles. Probabilities are estimated with repeated randomized
Bayesian update trials, which keeps results stable for short and long
text alike without a machine-learning framework.

Modules:
    core: Configuration, logging and exceptions
    profiles: Language profile records and loaders
    processing: Text cleaning, normalization and n-gram extraction
    detection: Registries and detection sessions
    cli: Command-line interface

Example:
    >>> from linguasync import RegistryManager
    >>> manager = RegistryManager()
    >>> detector = manager.get_default().create(seed=0)
    >>> detector.append("This is a short English sentence.")
    >>> detector.detect()
    'en'
"""

__version__ = "0.1.0"
__author__ = "LinguaSync"
__description__ = (
    "Character n-gram language identification with a shared profile "
    "registry and randomized-trial Bayesian estimation."
)

from linguasync.core.config.settings import Settings
from linguasync.core.logging.logger import get_logger
from linguasync.detection import (
    UNKNOWN_LANG,
    Detector,
    Language,
    Registry,
    RegistryManager,
)
from linguasync.profiles import LangProfile

__all__ = [
    "Detector",
    "LangProfile",
    "Language",
    "Registry",
    "RegistryManager",
    "Settings",
    "UNKNOWN_LANG",
    "get_logger",
]
