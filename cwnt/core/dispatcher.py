"""Collect, compare and notify: the parameter change dispatcher."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np

from .events import ListenerRegistry, StageEvent
from .parameters import PARAMETER_COUNT, ParameterCollectionError, as_vector, collect_parameters

LOGGER = logging.getLogger(__name__)

TextSource = Callable[[], str]


class ChangeDispatcher:
    """Re-collects the parameter vector on stage activity and notifies once per change.

    The dispatcher owns the live vector handed out to consumers and the
    snapshot of the last notified vector.  Both are only written here.
    """

    def __init__(
        self,
        parameters: np.ndarray,
        text_sources: Sequence[TextSource],
        registry: ListenerRegistry,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if len(text_sources) != PARAMETER_COUNT:
            raise ValueError(f"expected {PARAMETER_COUNT} text sources, got {len(text_sources)}")
        self._parameters = parameters
        self._snapshot = as_vector(parameters)
        self._text_sources = tuple(text_sources)
        self._registry = registry
        self._logger = logger or LOGGER

    @property
    def parameters(self) -> np.ndarray:
        """The live committed vector; mutated in place on every change."""

        return self._parameters

    @property
    def snapshot(self) -> np.ndarray:
        return self._snapshot.copy()

    def dispatch(self, event: StageEvent) -> bool:
        """Handle activity for ``event`` and return whether listeners ran."""

        if not event.is_stage:
            self._registry.fan_out(event)
            return True

        try:
            collected = collect_parameters([source() for source in self._text_sources])
        except ParameterCollectionError as exc:
            self._logger.debug(
                "Ignoring %s: %s",
                event.command,
                exc,
                extra={"component": "ChangeDispatcher"},
            )
            return False

        if np.array_equal(collected, self._snapshot):
            return False

        self._parameters[:] = collected
        self._snapshot = collected.copy()
        self._logger.debug(
            "%s: %s",
            event.command,
            collected.tolist(),
            extra={"component": "ChangeDispatcher"},
        )
        self._registry.fan_out(event)
        return True

    def reset(self, values: Sequence[float]) -> None:
        """Overwrite the live vector without notifying or touching the snapshot."""

        self._parameters[:] = as_vector(values)


__all__ = ["ChangeDispatcher", "TextSource"]
