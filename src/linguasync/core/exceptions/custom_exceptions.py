"""
Custom exception hierarchy for LinguaSync error handling.

This module defines a structured exception hierarchy that carries error
codes and contextual details through the registry and detection layers.

Exception Hierarchy:
    LinguaSyncError (base)
    ├── ConfigurationError: Invalid settings or detector options
    │   └── ReservedNameError: Reserved registry name requested directly
    ├── RegistryError: Registry state problems
    │   └── NotReadyError: Detector requested from an empty registry
    └── ProfileLoadError: Failures while loading language profiles
        ├── DuplicateLanguageError: Profile name already loaded
        ├── FormatError: Malformed profile record
        ├── SourceUnavailableError: Profile source cannot be opened
        └── InsufficientProfilesError: Batch with fewer than 2 profiles

Load errors abort the load call in progress. Profiles processed earlier in
the same batch stay in the registry; callers should clear() the registry
(or use a fresh one) before retrying.

Detection never raises for text without evidence or without a confident
match; those cases produce the ``"unknown"`` sentinel instead.

Example:
    >>> try:
    ...     registry.load_from_directory("/opt/profiles")
    ... except SourceUnavailableError as e:
    ...     logger.error("Profiles missing",
    ...                  error_code=e.error_code,
    ...                  details=e.details)
    >>>
    >>> raise FormatError(
    ...     "Profile is not valid JSON",
    ...     error_code="PROFILE_JSON_ERROR",
    ...     details={"source": "profiles/en"}
    ... )
"""

from typing import Any, Dict, Optional


class LinguaSyncError(Exception):
    """
    Base exception class for all LinguaSync errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        details (Dict[str, Any]): Additional contextual information

    The error_code defaults to the class name when not given, so that
    monitoring can group errors without parsing messages.

    Example:
        >>> raise LinguaSyncError(
        ...     "Registry could not be built",
        ...     error_code="REGISTRY_BUILD_ERROR",
        ...     details={"registry": "custom", "languages": 0}
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(LinguaSyncError):
    """
    Raised when configuration validation or setup fails.

    Common scenarios:
        - Detector option outside its valid range (e.g. alpha > 1)
        - Unknown priority mode
        - Unreadable or malformed detector option file

    Example:
        >>> raise ConfigurationError(
        ...     "Detector options are invalid",
        ...     error_code="DETECTOR_CONFIG_ERROR",
        ...     details={"alpha": 1.5}
        ... )
    """

    pass


class ReservedNameError(ConfigurationError):
    """
    Raised when a reserved registry name is requested through the generic
    accessor instead of the dedicated default-registry accessors.
    """

    pass


class RegistryError(LinguaSyncError):
    """Raised when a registry is in a state that does not allow the operation"""

    pass


class NotReadyError(RegistryError):
    """
    Raised when a detector is requested from a registry holding no languages.

    Example:
        >>> registry = Registry("empty")
        >>> registry.create()
        Traceback (most recent call last):
        ...
        NotReadyError: Registry 'empty' has no language profiles loaded
    """

    pass


class ProfileLoadError(LinguaSyncError):
    """
    Raised when language profiles cannot be loaded into a registry.

    This is the common parent of every load-time failure, so callers that
    only need to know "the registry is not usable" can catch it once.
    """

    pass


class DuplicateLanguageError(ProfileLoadError):
    """Raised when a profile's language name is already loaded in the registry"""

    pass


class FormatError(ProfileLoadError):
    """
    Raised when a profile record is malformed.

    Common scenarios:
        - Source is not valid JSON
        - Required fields (name, freq, n_words) missing
        - Negative counts or a zero total for a gram length in use
    """

    pass


class SourceUnavailableError(ProfileLoadError):
    """Raised when a profile file or directory cannot be opened"""

    pass


class InsufficientProfilesError(ProfileLoadError):
    """Raised when a batch load receives fewer than two profiles"""

    pass
