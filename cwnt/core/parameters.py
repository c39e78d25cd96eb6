"""The nine-slot masking parameter vector and its slot metadata."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence

import numpy as np

from .events import StageEvent

PARAMETER_COUNT = 9

_DOUBLE_LITERAL = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*", re.ASCII)


class ParameterIndex(IntEnum):
    """Position of each semantic role inside the parameter vector."""

    SIGMA_FILTER = 0
    N_ITER_DIFFUSION = 1
    KAPPA_DIFFUSION = 2
    SIGMA_GRADIENT = 3
    GAMMA = 4
    ALPHA = 5
    BETA = 6
    EPSILON = 7
    DELTA = 8

    @property
    def slot_name(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class ParameterSlot:
    """Declarative description of one vector slot and its paired control."""

    index: ParameterIndex
    label: str
    description: str
    minimum: int
    maximum: int
    scale: int
    stage: StageEvent

    @property
    def name(self) -> str:
        return self.index.slot_name

    @property
    def value_range(self) -> tuple[float, float]:
        """Range reachable through the bounded control."""

        return self.minimum / self.scale, self.maximum / self.scale

    def tooltip_text(self) -> str:
        low, high = self.value_range
        return f"{self.description}\nRange: {format_value(low)} to {format_value(high)}"


PARAMETER_SLOTS: tuple[ParameterSlot, ...] = (
    ParameterSlot(
        ParameterIndex.SIGMA_FILTER,
        "Gaussian filter σ:",
        "Standard deviation of the gaussian filter applied in step 1.",
        0,
        50,
        10,
        StageEvent.FILTERING,
    ),
    ParameterSlot(
        ParameterIndex.N_ITER_DIFFUSION,
        "Number of iterations:",
        "Number of anisotropic diffusion iterations in step 2.",
        1,
        10,
        1,
        StageEvent.DIFFUSION,
    ),
    ParameterSlot(
        ParameterIndex.KAPPA_DIFFUSION,
        "Gradient diffusion threshold κ:",
        "Gradient threshold of the anisotropic diffusion in step 2.",
        1,
        100,
        1,
        StageEvent.DIFFUSION,
    ),
    ParameterSlot(
        ParameterIndex.SIGMA_GRADIENT,
        "Gaussian gradient σ:",
        "Standard deviation of the gaussian derivatives computed in step 3.",
        0,
        50,
        10,
        StageEvent.DERIVATIVES,
    ),
    ParameterSlot(
        ParameterIndex.GAMMA,
        "γ: tanh shift",
        "Shift of the tanh applied to the combined mask in step 4.",
        -50,
        50,
        10,
        StageEvent.MASKING,
    ),
    ParameterSlot(
        ParameterIndex.ALPHA,
        "α: gradient prefactor",
        "Prefactor of the gradient magnitude in step 4.",
        0,
        200,
        10,
        StageEvent.MASKING,
    ),
    ParameterSlot(
        ParameterIndex.BETA,
        "β: positive laplacian magnitude prefactor",
        "Prefactor of the positive laplacian magnitude in step 4.",
        0,
        200,
        10,
        StageEvent.MASKING,
    ),
    ParameterSlot(
        ParameterIndex.EPSILON,
        "ε: negative hessian magnitude",
        "Prefactor of the negative hessian magnitude in step 4.",
        0,
        200,
        10,
        StageEvent.MASKING,
    ),
    ParameterSlot(
        ParameterIndex.DELTA,
        "δ: derivatives sum scale",
        "Scale of the derivatives sum in step 4.",
        0,
        50,
        10,
        StageEvent.MASKING,
    ),
)


class ParameterCollectionError(ValueError):
    """Raised when a text field cannot be read back as a number."""

    def __init__(self, index: ParameterIndex, text: str) -> None:
        super().__init__(f"Cannot parse {index.slot_name} from {text!r}")
        self.index = index
        self.text = text


def get_slot(name: str) -> ParameterSlot:
    """Look up slot metadata by role name, e.g. ``"sigma_filter"``."""

    return PARAMETER_SLOTS[ParameterIndex[name.upper()]]


def slots_for_stage(stage: StageEvent) -> tuple[ParameterSlot, ...]:
    return tuple(slot for slot in PARAMETER_SLOTS if slot.stage is stage)


def format_value(value: float) -> str:
    """Render ``value`` with at most four decimals and no trailing zeros."""

    text = f"{float(value):.4f}".rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def parse_number(text: str) -> float:
    """Parse a decimal literal, optionally signed and with an exponent.

    NaN, infinities and other spellings accepted by :func:`float` but not
    by a plain numeric field raise :class:`ValueError`.
    """

    if not isinstance(text, str) or _DOUBLE_LITERAL.fullmatch(text) is None:
        raise ValueError(f"not a number: {text!r}")
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"number out of range: {text!r}")
    return number


def as_vector(values: Iterable[float]) -> np.ndarray:
    """Copy ``values`` into a fresh float vector, checking its length."""

    vector = np.array([float(value) for value in values], dtype=np.float64)
    if vector.shape != (PARAMETER_COUNT,):
        raise ValueError(f"expected {PARAMETER_COUNT} parameters, got {vector.size}")
    return vector


def collect_parameters(texts: Sequence[str]) -> np.ndarray:
    """Read the nine field texts back into a new parameter vector.

    The iteration count is truncated toward zero.  The first unreadable
    field aborts the whole collection with :class:`ParameterCollectionError`.
    """

    if len(texts) != PARAMETER_COUNT:
        raise ValueError(f"expected {PARAMETER_COUNT} text fields, got {len(texts)}")
    vector = np.empty(PARAMETER_COUNT, dtype=np.float64)
    for index, text in zip(ParameterIndex, texts):
        try:
            number = parse_number(text)
        except ValueError as exc:
            raise ParameterCollectionError(index, text) from exc
        if index is ParameterIndex.N_ITER_DIFFUSION:
            number = float(int(number))
        vector[index] = number
    return vector


__all__ = [
    "PARAMETER_COUNT",
    "PARAMETER_SLOTS",
    "ParameterCollectionError",
    "ParameterIndex",
    "ParameterSlot",
    "as_vector",
    "collect_parameters",
    "format_value",
    "get_slot",
    "parse_number",
    "slots_for_stage",
]
