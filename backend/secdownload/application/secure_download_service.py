"""
Secure Download Service

Application service handling one download request end to end:
validate, notify observers, dispatch to the outcome handler.
"""

import logging
import time
from typing import Callable, Iterable, Optional, Protocol

from secdownload.domain.secure_download.storage_repository import IFileStorageRepository
from secdownload.domain.secure_download.validator import SecureDownloadValidator
from secdownload.domain.secure_download.value_objects import SignedRequest, ValidationOutcome

from .configuration_holder import ConfigurationHolder
from .outcome_dispatcher import OutcomeDispatcher

logger = logging.getLogger(__name__)


class OutcomeObserver(Protocol):
    def handle(self, outcome: ValidationOutcome) -> None: ...


class SecureDownloadService:
    """
    Orchestrates request validation and outcome dispatch.

    Each request validates against the configuration that is current when
    it arrives; a reconfiguration during the request does not affect it.
    """

    def __init__(
        self,
        config_holder: ConfigurationHolder,
        dispatcher: OutcomeDispatcher,
        storage_factory: Callable[[str], IFileStorageRepository],
        observers: Optional[Iterable[OutcomeObserver]] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            config_holder: Source of the active configuration
            dispatcher: Outcome handlers
            storage_factory: Builds a storage repository for a root path
            observers: Notified of every outcome before dispatch (e.g. logging)
            clock: Returns the current Unix time
        """
        self._config_holder = config_holder
        self._dispatcher = dispatcher
        self._storage_factory = storage_factory
        self._observers = list(observers or [])
        self._clock = clock

    def validate(self, request: SignedRequest) -> ValidationOutcome:
        """Validate a request against the current configuration snapshot."""
        config = self._config_holder.current
        validator = SecureDownloadValidator(
            config, self._storage_factory(config.root_path), clock=self._clock
        )
        return validator.validate(request)

    def handle(self, request_url: str):
        """
        Validate a request URL and return the matching handler's result.

        Args:
            request_url: Raw request target (path plus query)
        """
        outcome = self.validate(SignedRequest(url=request_url))
        self._notify(outcome)
        return self._dispatcher.dispatch(outcome)

    def _notify(self, outcome: ValidationOutcome) -> None:
        for observer in self._observers:
            try:
                observer.handle(outcome)
            except Exception as e:
                # Observers must not change the response
                logger.error(
                    f"Error in outcome observer {observer.__class__.__name__}: {e}",
                    exc_info=True,
                )
