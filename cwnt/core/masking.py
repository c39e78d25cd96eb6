"""Default masking parameters and their settings-map codec."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, MutableMapping, Optional, Sequence

import numpy as np

from .parameters import PARAMETER_COUNT, ParameterIndex, as_vector

DEFAULT_MASKING_PARAMETERS: tuple[float, ...] = (
    2.0,  # gaussian filter sigma
    3.0,  # anisotropic diffusion iterations
    50.0,  # anisotropic diffusion kappa
    2.0,  # gaussian gradient sigma
    0.0,  # gamma
    5.0,  # alpha
    2.0,  # beta
    2.0,  # epsilon
    1.0,  # delta
)

KEY_TARGET_CHANNEL = "TARGET_CHANNEL"
KEY_THRESHOLD_FACTOR = "THRESHOLD_FACTOR"

MASKING_PARAMETER_KEYS: Dict[ParameterIndex, str] = {
    ParameterIndex.SIGMA_FILTER: "GAUSSIAN_FILTER_SIGMA",
    ParameterIndex.N_ITER_DIFFUSION: "N_ANISOTROPIC_FILTERING",
    ParameterIndex.KAPPA_DIFFUSION: "ANISOTROPIC_FILTERING_KAPPA",
    ParameterIndex.SIGMA_GRADIENT: "GAUSSIAN_GRADIENT_SIGMA",
    ParameterIndex.GAMMA: "GAMMA",
    ParameterIndex.ALPHA: "ALPHA",
    ParameterIndex.BETA: "BETA",
    ParameterIndex.EPSILON: "EPSILON",
    ParameterIndex.DELTA: "DELTA",
}

DURATION_PLACEHOLDER = "Tune parameters to get a duration estimate"


class MaskingParameterCodec:
    """Supplies the default vector and maps it to and from a settings mapping.

    The mapping also carries segmenter settings the panel does not edit;
    :meth:`encode` only ever touches the nine masking keys.
    """

    def __init__(
        self,
        defaults: Sequence[float] = DEFAULT_MASKING_PARAMETERS,
        *,
        target_channel: int = 1,
        threshold_factor: float = 1.6,
    ) -> None:
        self._defaults = as_vector(defaults)
        self.target_channel = target_channel
        self.threshold_factor = threshold_factor

    def default_parameters(self) -> np.ndarray:
        return self._defaults.copy()

    def default_settings(self) -> Dict[str, Any]:
        settings: Dict[str, Any] = {
            KEY_TARGET_CHANNEL: self.target_channel,
            KEY_THRESHOLD_FACTOR: self.threshold_factor,
        }
        return self.encode(self._defaults, settings)

    def encode(
        self,
        vector: Sequence[float],
        settings: Optional[MutableMapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Write ``vector`` into ``settings`` (or a new dict) and return it."""

        values = as_vector(vector)
        target: Dict[str, Any] = dict(settings) if settings is not None else {}
        for index, key in MASKING_PARAMETER_KEYS.items():
            target[key] = float(values[index])
        return target

    def decode(self, settings: Mapping[str, Any]) -> np.ndarray:
        """Extract the nine masking values from ``settings``.

        Raises ``KeyError`` for a missing key and ``ValueError`` for a value
        that is not a finite number.
        """

        vector = np.empty(PARAMETER_COUNT, dtype=np.float64)
        for index, key in MASKING_PARAMETER_KEYS.items():
            if key not in settings:
                raise KeyError(f"Settings are missing the masking parameter {key!r}")
            try:
                vector[index] = float(settings[key])
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Masking parameter {key!r} is not numeric: {settings[key]!r}") from exc
            if not math.isfinite(vector[index]):
                raise ValueError(f"Masking parameter {key!r} is not finite: {settings[key]!r}")
        return vector


_DEFAULT_CODEC = MaskingParameterCodec()


def to_settings_map(vector: Sequence[float], codec: MaskingParameterCodec = _DEFAULT_CODEC) -> Dict[str, Any]:
    """Encode ``vector`` on top of the segmenter default settings."""

    return codec.encode(vector, codec.default_settings())


def from_settings_map(settings: Mapping[str, Any], codec: MaskingParameterCodec = _DEFAULT_CODEC) -> np.ndarray:
    return codec.decode(settings)


def format_duration_estimate(minutes: float) -> str:
    return f"Processing duration estimate: {minutes:.0f} min."


__all__ = [
    "DEFAULT_MASKING_PARAMETERS",
    "DURATION_PLACEHOLDER",
    "KEY_TARGET_CHANNEL",
    "KEY_THRESHOLD_FACTOR",
    "MASKING_PARAMETER_KEYS",
    "MaskingParameterCodec",
    "format_duration_estimate",
    "from_settings_map",
    "to_settings_map",
]
