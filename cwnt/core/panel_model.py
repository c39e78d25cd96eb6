"""Headless state of the CWNT parameter panel."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

import numpy as np

from .dispatcher import ChangeDispatcher
from .events import Listener, ListenerRegistry, StageEvent
from .masking import DURATION_PLACEHOLDER, MaskingParameterCodec, format_duration_estimate
from .parameters import PARAMETER_SLOTS, ParameterSlot, get_slot
from .scaled_control import ScaledControl

LOGGER = logging.getLogger(__name__)

INTRO_TAB_INDEX = 0
PARAMETER_SET_1_TAB_INDEX = 1
PARAMETER_SET_2_TAB_INDEX = 2


def _text_source(control: ScaledControl) -> Callable[[], str]:
    return lambda: control.text


class ParameterPanelModel:
    """Nine paired controls, the change dispatcher and the listener registry.

    Every input method mirrors one kind of operator activity: dragging a
    slider, typing in a text field, switching tabs or pressing *Go*.  The
    return value tells whether listeners were notified.
    """

    def __init__(self, codec: Optional[MaskingParameterCodec] = None) -> None:
        self.codec = codec or MaskingParameterCodec()
        parameters = self.codec.default_parameters()
        self._controls: Dict[str, ScaledControl] = {
            slot.name: ScaledControl(slot.minimum, slot.maximum, slot.scale, value=parameters[slot.index])
            for slot in PARAMETER_SLOTS
        }
        self.registry = ListenerRegistry()
        sources = [_text_source(self._controls[slot.name]) for slot in PARAMETER_SLOTS]
        self.dispatcher = ChangeDispatcher(parameters, sources, self.registry)
        self._selected_index = INTRO_TAB_INDEX
        self._duration_text = DURATION_PLACEHOLDER

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: Listener) -> None:
        self.registry.add(listener)

    def remove_listener(self, listener: Listener) -> bool:
        return self.registry.remove(listener)

    def get_listeners(self) -> List[Listener]:
        return self.registry.list()

    # ------------------------------------------------------------------
    # Parameters and settings
    # ------------------------------------------------------------------
    def get_parameters(self) -> np.ndarray:
        """Return the live parameter vector.

        The array is updated in place whenever a change is committed, so
        callers holding on to it always see the current values.
        """

        return self.dispatcher.parameters

    def get_settings(self) -> Dict[str, Any]:
        return self.codec.encode(self.get_parameters(), self.codec.default_settings())

    def set_settings(self, settings: Mapping[str, Any]) -> None:
        """Load the masking parameters from ``settings`` without notifying.

        The load is all-or-nothing: a missing or non-finite value raises
        before either the vector or the controls change.
        """

        values = self.codec.decode(settings)
        for slot in PARAMETER_SLOTS:
            self._controls[slot.name].set_value(values[slot.index])
        self.dispatcher.reset(values)
        LOGGER.debug(
            "Settings loaded: %s",
            values.tolist(),
            extra={"component": "ParameterPanelModel"},
        )

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    @property
    def controls(self) -> Dict[str, ScaledControl]:
        return dict(self._controls)

    def control(self, name: str) -> ScaledControl:
        return self._controls[name]

    def slot(self, name: str) -> ParameterSlot:
        if name not in self._controls:
            raise KeyError(name)
        return get_slot(name)

    def move_slider(self, name: str, position: int) -> bool:
        slot = self.slot(name)
        self._controls[name].set_from_bounded(position)
        return self.dispatcher.dispatch(slot.stage)

    def edit_text(self, name: str, raw: str) -> bool:
        slot = self.slot(name)
        self._controls[name].edit_text(raw)
        return self.dispatcher.dispatch(slot.stage)

    # ------------------------------------------------------------------
    # UI-level events
    # ------------------------------------------------------------------
    @property
    def selected_index(self) -> int:
        return self._selected_index

    def select_tab(self, index: int) -> bool:
        self._selected_index = int(index)
        return self.dispatcher.dispatch(StageEvent.SELECTION_CHANGED)

    def press_go(self) -> bool:
        return self.dispatcher.dispatch(StageEvent.GO_PRESSED)

    # ------------------------------------------------------------------
    @property
    def duration_text(self) -> str:
        return self._duration_text

    def set_duration_estimate(self, minutes: float) -> None:
        self._duration_text = format_duration_estimate(minutes)


__all__ = [
    "INTRO_TAB_INDEX",
    "PARAMETER_SET_1_TAB_INDEX",
    "PARAMETER_SET_2_TAB_INDEX",
    "ParameterPanelModel",
]
