from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest


# Ensure the project root is on ``sys.path`` so tests can import ``cwnt``
# without requiring the package to be installed in the environment.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from cwnt.core.events import StageEvent  # noqa: E402
from cwnt.core.panel_model import ParameterPanelModel  # noqa: E402


class EventRecorder:
    """Listener that remembers every event together with the vector it saw."""

    def __init__(self, model: ParameterPanelModel | None = None) -> None:
        self.events: List[StageEvent] = []
        self.vectors: List[list[float]] = []
        self._model = model

    def __call__(self, event: StageEvent) -> None:
        self.events.append(event)
        if self._model is not None:
            self.vectors.append(self._model.get_parameters().tolist())


@pytest.fixture()
def model() -> ParameterPanelModel:
    return ParameterPanelModel()


@pytest.fixture()
def recorder(model: ParameterPanelModel) -> EventRecorder:
    listener = EventRecorder(model)
    model.add_listener(listener)
    return listener
