"""
Named registry management.

RegistryManager owns a set of independently loadable registries keyed by
name. Applications usually create one manager at startup and pass it to
the code that needs detectors; nothing here is process-global.

Reserved Registries:
    DEFAULT: populated from the bundled standard profile set
    SHORT: populated from the bundled short-text profile set

The reserved registries can only be obtained through get_default() and
get_default_short_text(). Each populates itself on first access; the check
and the load happen under the registry's lock, so concurrent first
requests load the profiles exactly once.

Example:
    >>> manager = RegistryManager()
    >>> detector = manager.get_default().create(seed=0)
    >>> detector.append("Ceci est un petit texte en français.")
    >>> detector.detect()
    'fr'
    >>>
    >>> custom = manager.get_or_create("support-tickets")
    >>> custom.load_from_directory("/srv/profiles/tickets")
"""

import threading
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from linguasync.core.exceptions.custom_exceptions import (
    LinguaSyncError,
    ReservedNameError,
)
from linguasync.core.logging.logger import get_logger
from linguasync.detection.registry import Registry
from linguasync.profiles.loader import ProfileSet, bundled_profile_dir

logger = get_logger(__name__)

DEFAULT_REGISTRY = "DEFAULT"
SHORT_TEXT_REGISTRY = "SHORT"
RESERVED_NAMES = frozenset({DEFAULT_REGISTRY, SHORT_TEXT_REGISTRY})


class RegistryManager:
    """
    Registry-of-registries with create-or-get access.

    Args:
        profile_dirs: Optional override of the directory each bundled
            profile set is read from, keyed by ProfileSet
    """

    def __init__(
        self, profile_dirs: Optional[Mapping[ProfileSet, Union[str, Path]]] = None
    ):
        self._registries: Dict[str, Registry] = {}
        self._lock = threading.Lock()
        self._profile_dirs = dict(profile_dirs or {})

    def get_or_create(self, name: str) -> Registry:
        """
        Return the registry called ``name``, creating an empty one if needed.

        Raises:
            ReservedNameError: If ``name`` is one of the reserved names
        """
        if name in RESERVED_NAMES:
            raise ReservedNameError(
                "Profile name is a reserved name",
                details={"name": name, "reserved": sorted(RESERVED_NAMES)},
            )
        return self._get(name)

    def get_default(self) -> Registry:
        """Registry loaded with the bundled standard profile set"""
        return self._populated(DEFAULT_REGISTRY, ProfileSet.STANDARD)

    def get_default_short_text(self) -> Registry:
        """Registry loaded with the bundled short-text profile set"""
        return self._populated(SHORT_TEXT_REGISTRY, ProfileSet.SHORT_TEXT)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._registries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._registries

    def remove(self, name: str) -> Optional[Registry]:
        """Forget a registry; detectors created from it keep working"""
        with self._lock:
            return self._registries.pop(name, None)

    def clear(self) -> None:
        """Drop every registry, reserved ones included"""
        with self._lock:
            registries = list(self._registries.values())
            self._registries.clear()
        for registry in registries:
            registry.clear()
        logger.info("Registry manager cleared", registries=len(registries))

    def _get(self, name: str) -> Registry:
        with self._lock:
            registry = self._registries.get(name)
            if registry is None:
                registry = Registry(name)
                self._registries[name] = registry
                logger.debug("Registry created", registry=name)
            return registry

    def _profile_dir(self, profile_set: ProfileSet) -> Path:
        override = self._profile_dirs.get(profile_set)
        if override is not None:
            return Path(override)
        return bundled_profile_dir(profile_set)

    def _populated(self, name: str, profile_set: ProfileSet) -> Registry:
        registry = self._get(name)
        with registry.lock:
            if registry.is_empty:
                source = self._profile_dir(profile_set)
                logger.info(
                    "Loading bundled profiles",
                    registry=name,
                    profile_set=profile_set.value,
                    source=str(source),
                )
                try:
                    registry.load_from_directory(source)
                except LinguaSyncError:
                    # A half-loaded default registry is never usable.
                    registry.clear()
                    raise
        return registry
