"""
Base classes for the text processing phase.

Classes:
    BasePreprocessor: Abstract base class for text preprocessing operations
    PreprocessingPipeline: Ordered chain of preprocessors

Detection sessions run raw text through a short pipeline before the text
is normalized character by character. Each step is a BasePreprocessor so
that steps can be reordered, replaced or reused outside of detection.

Example:
    >>> from linguasync.processing.base import PreprocessingPipeline
    >>> from linguasync.processing.preprocessing.cleaners import (
    ...     LinkCleaner, UnicodeComposer
    ... )
    >>> pipeline = PreprocessingPipeline([LinkCleaner(), UnicodeComposer()])
    >>> pipeline("see https://example.com now")
    'see   now'
"""

from abc import ABC, abstractmethod
from typing import Iterable, List


class BasePreprocessor(ABC):
    """
    Abstract base class for all content preprocessors.

    Subclasses must implement the process() method to define specific
    preprocessing logic. The __call__ method provides a convenient
    interface for using preprocessors as callable objects.
    """

    @abstractmethod
    def process(self, content: str) -> str:
        """
        Process raw content and return the cleaned version.

        Args:
            content (str): Raw text content to be processed

        Returns:
            str: Cleaned text content
        """
        pass

    def __call__(self, content: str) -> str:
        return self.process(content)


class PreprocessingPipeline(BasePreprocessor):
    """Applies a sequence of preprocessors in order"""

    def __init__(self, steps: Iterable[BasePreprocessor]):
        self.steps: List[BasePreprocessor] = list(steps)

    def process(self, content: str) -> str:
        for step in self.steps:
            content = step.process(content)
        return content
