"""
Dependency Container

Registry the application factory fills and the routes resolve from.
"""

import logging
import threading
from typing import Any, Callable, Dict, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class DependencyNotFoundError(Exception):
    """Raised when a type was never registered."""
    pass


class DependencyContainer:
    """
    Maps a type to a shared instance or to a factory.

    Singletons hold long-lived services (ConfigurationHolder,
    SecureDownloadService). Transients are rebuilt on every resolve, which
    is how SecDownloadConfig always yields the snapshot active at that moment.
    """

    def __init__(self):
        self._singletons: Dict[Type, Any] = {}
        self._transients: Dict[Type, Callable[[], Any]] = {}
        self._lock = threading.Lock()

    def register_singleton(self, interface: Type[T], implementation: T) -> None:
        with self._lock:
            self._singletons[interface] = implementation
        logger.debug(f"Registered singleton: {interface.__name__}")

    def register_transient(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """
        Register a factory called on each resolve.

        Example:
            container.register_transient(SecDownloadConfig, lambda: holder.current)
        """
        with self._lock:
            self._transients[interface] = factory
        logger.debug(f"Registered transient: {interface.__name__}")

    def resolve(self, interface: Type[T]) -> T:
        """
        Return the instance registered for a type.

        Raises:
            DependencyNotFoundError: If the type was never registered
        """
        with self._lock:
            if interface in self._singletons:
                return self._singletons[interface]
            factory = self._transients.get(interface)

        if factory is None:
            raise DependencyNotFoundError(
                f"No registration found for type: {interface.__name__}"
            )
        # Outside the lock so factories may resolve other types
        return factory()
