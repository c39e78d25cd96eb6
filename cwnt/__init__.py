"""Top level package for the CWNT parameter panel."""

from __future__ import annotations

from importlib import metadata as _importlib_metadata

from .core.events import ListenerRegistry, StageEvent
from .core.panel_model import ParameterPanelModel


def _resolve_distribution_version() -> str:
    """Best-effort retrieval of the installed package version."""

    candidates = ("cwnt-panel", "cwnt_panel", "cwnt")
    for name in candidates:
        try:
            return _importlib_metadata.version(name)
        except _importlib_metadata.PackageNotFoundError:  # pragma: no cover - metadata lookup
            continue
    return "0.0.0"


__version__ = _resolve_distribution_version()


def get_version() -> str:
    """Return the discovered package version."""

    return __version__


__all__ = [
    "ListenerRegistry",
    "ParameterPanelModel",
    "StageEvent",
    "__version__",
    "get_version",
]
