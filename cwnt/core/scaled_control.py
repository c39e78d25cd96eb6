"""Two-way binding between a bounded slider position and a text field."""

from __future__ import annotations

import math
import re

from .parameters import format_value

_PLAIN_DECIMAL = re.compile(r"(?:\d+(?:\.\d+)?|\.\d+)", re.ASCII)


def quantize(value: float, scale: int) -> int:
    """Return the integer position for ``value``, rounding halves up."""

    return int(math.floor(value * scale + 0.5))


class ScaledControl:
    """A continuous value shown both as a bounded integer and as text.

    The bounded side is an integer ``position`` confined to
    ``[minimum, maximum]``; the value it represents is ``position / scale``.
    The text side accepts any plain decimal string regardless of bounds,
    however large, and silently ignores anything else.  Neither side is
    authoritative: a write to one re-derives the other.
    """

    def __init__(self, minimum: int, maximum: int, scale: int = 1, value: float | None = None) -> None:
        if minimum > maximum:
            raise ValueError(f"minimum {minimum} is greater than maximum {maximum}")
        if scale <= 0:
            raise ValueError("scale must be a positive integer")
        self.minimum = int(minimum)
        self.maximum = int(maximum)
        self.scale = int(scale)
        self._position = self.minimum
        self._text = format_value(self._position / self.scale)
        if value is not None:
            self.set_value(value)

    # ------------------------------------------------------------------
    @property
    def position(self) -> int:
        return self._position

    @property
    def text(self) -> str:
        return self._text

    @property
    def value(self) -> float:
        """The continuous value represented by the bounded side."""

        return self._position / self.scale

    # ------------------------------------------------------------------
    def set_from_bounded(self, position: int) -> None:
        """Move the bounded side and re-render the text side."""

        self._position = self._clamp(int(position))
        self._text = format_value(self.value)

    def set_from_text(self, raw: str) -> bool:
        """Push a typed decimal string to the bounded side.

        Returns ``False`` and leaves the control untouched when ``raw`` is
        not a plain unsigned decimal number.  The text side is only
        re-rendered when the bounded position actually moves.
        """

        if not isinstance(raw, str) or _PLAIN_DECIMAL.fullmatch(raw) is None:
            return False
        # digit strings too long for a double parse to inf and pin to maximum
        position = self._position_for(float(raw))
        if position != self._position:
            self.set_from_bounded(position)
        return True

    def edit_text(self, raw: str) -> bool:
        """Replace the text side as typed by the operator.

        Malformed text stays visible as typed while the bounded side keeps
        its previous position.
        """

        self._text = raw
        return self.set_from_text(raw)

    def set_value(self, value: float) -> None:
        """Load ``value`` programmatically.

        The text side renders ``value`` itself, which may lie outside the
        bounded range or between two quantization steps.  Raises
        ``ValueError`` for NaN or infinite values.
        """

        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"cannot load non-finite value {value!r}")
        self._position = self._position_for(value)
        self._text = format_value(value)

    def _position_for(self, value: float) -> int:
        # compare in float space so huge values never reach int()
        scaled = value * self.scale
        if scaled >= self.maximum:
            return self.maximum
        if scaled <= self.minimum:
            return self.minimum
        return self._clamp(quantize(value, self.scale))

    def _clamp(self, position: int) -> int:
        return max(self.minimum, min(self.maximum, position))

    def __repr__(self) -> str:
        return (
            f"ScaledControl(position={self._position}, range=[{self.minimum}, {self.maximum}], "
            f"scale={self.scale}, text={self._text!r})"
        )


__all__ = ["ScaledControl", "quantize"]
