"""
Outcome Dispatcher

Routes a ValidationOutcome to the handler registered for its kind.
"""

from typing import Callable, Dict, Generic, Mapping, Optional, TypeVar

from secdownload.domain.errors import HandlerNotRegisteredError
from secdownload.domain.secure_download.value_objects import OutcomeKind, ValidationOutcome

R = TypeVar("R")


class OutcomeDispatcher(Generic[R]):
    """
    Explicit outcome-kind to handler table.

    Exactly one handler runs per dispatch. Handlers produce whatever the
    caller needs (e.g. an HTTP response).
    """

    def __init__(
        self,
        handlers: Optional[Mapping[OutcomeKind, Callable[[ValidationOutcome], R]]] = None,
    ):
        self._handlers: Dict[OutcomeKind, Callable[[ValidationOutcome], R]] = dict(
            handlers or {}
        )

    def register(
        self, kind: OutcomeKind, handler: Callable[[ValidationOutcome], R]
    ) -> "OutcomeDispatcher[R]":
        """Register a handler, replacing any previous one for the kind."""
        self._handlers[kind] = handler
        return self

    def dispatch(self, outcome: ValidationOutcome) -> R:
        """
        Call the handler for the outcome's kind.

        Raises:
            HandlerNotRegisteredError: If no handler is registered for the kind
        """
        handler = self._handlers.get(outcome.kind)
        if handler is None:
            raise HandlerNotRegisteredError(
                f"No handler registered for outcome: {outcome.kind.value}"
            )
        return handler(outcome)
