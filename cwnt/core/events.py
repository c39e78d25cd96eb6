"""Change-event identities and the listener registry they are fanned out to."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional

LOGGER = logging.getLogger(__name__)


class StageEvent(Enum):
    """The six notifications emitted by the parameter panel.

    The first four identify a pipeline stage whose parameters changed; the
    last two are plain UI events that never touch the parameter vector.
    """

    FILTERING = (0, "GaussianFilteringParameterChanged")
    DIFFUSION = (1, "AnisotropicDiffusionParameterChanged")
    DERIVATIVES = (2, "DerivativesParameterChanged")
    MASKING = (3, "MaskingParameterChanged")
    GO_PRESSED = (4, "GoButtonPressed")
    SELECTION_CHANGED = (5, "TabChanged")

    def __init__(self, event_id: int, command: str) -> None:
        self.event_id = event_id
        self.command = command

    @property
    def is_stage(self) -> bool:
        """``True`` for the four parameter-stage identities."""

        return self.event_id < 4

    @classmethod
    def stages(cls) -> tuple["StageEvent", ...]:
        return tuple(event for event in cls if event.is_stage)


Listener = Callable[[StageEvent], None]


class ListenerRegistry:
    """Ordered collection of event listeners with synchronous fan-out."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._listeners: List[Listener] = []
        self._logger = logger or LOGGER

    def add(self, listener: Listener) -> None:
        """Append ``listener``; it is notified after every earlier one."""

        self._listeners.append(listener)

    def remove(self, listener: Listener) -> bool:
        """Remove the first registration of ``listener`` if present."""

        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def list(self) -> List[Listener]:
        return list(self._listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners

    def fan_out(self, event: StageEvent) -> None:
        """Invoke every listener with ``event`` in registration order."""

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                self._logger.exception(
                    "Listener %r failed while handling %s",
                    listener,
                    event.command,
                    extra={"component": "ListenerRegistry"},
                )


__all__ = ["Listener", "ListenerRegistry", "StageEvent"]
