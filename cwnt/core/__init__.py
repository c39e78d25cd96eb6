"""Core services for the CWNT parameter panel."""
from .config import PanelConfiguration
from .dispatcher import ChangeDispatcher
from .events import Listener, ListenerRegistry, StageEvent
from .logging_config import LoggingConfigurator, PanelLogFormatter
from .masking import (
    DEFAULT_MASKING_PARAMETERS,
    MaskingParameterCodec,
    format_duration_estimate,
    from_settings_map,
    to_settings_map,
)
from .panel_model import ParameterPanelModel
from .parameters import (
    PARAMETER_SLOTS,
    ParameterCollectionError,
    ParameterIndex,
    ParameterSlot,
    collect_parameters,
    format_value,
)
from .scaled_control import ScaledControl

__all__ = [
    "ChangeDispatcher",
    "DEFAULT_MASKING_PARAMETERS",
    "Listener",
    "ListenerRegistry",
    "LoggingConfigurator",
    "MaskingParameterCodec",
    "PARAMETER_SLOTS",
    "PanelConfiguration",
    "PanelLogFormatter",
    "ParameterCollectionError",
    "ParameterIndex",
    "ParameterPanelModel",
    "ParameterSlot",
    "ScaledControl",
    "StageEvent",
    "collect_parameters",
    "format_duration_estimate",
    "format_value",
    "from_settings_map",
    "to_settings_map",
]
