from __future__ import annotations

import pytest

from cwnt.core.scaled_control import ScaledControl, quantize


def _sigma_control() -> ScaledControl:
    return ScaledControl(0, 50, 10, value=2.0)


def test_initial_value_renders_both_sides() -> None:
    control = _sigma_control()

    assert control.position == 20
    assert control.value == 2.0
    assert control.text == "2"


def test_set_from_bounded_rerenders_text() -> None:
    control = _sigma_control()

    control.set_from_bounded(37)

    assert control.position == 37
    assert control.value == pytest.approx(3.7)
    assert control.text == "3.7"


def test_set_from_bounded_clamps_position() -> None:
    control = _sigma_control()

    control.set_from_bounded(500)
    assert control.position == 50
    assert control.text == "5"

    control.set_from_bounded(-3)
    assert control.position == 0
    assert control.text == "0"


@pytest.mark.parametrize(
    "raw, expected_position",
    [
        ("2.5", 25),
        ("0.25", 3),
        ("4", 40),
        (".7", 7),
        ("1.04", 10),
        ("1.06", 11),
    ],
)
def test_set_from_text_quantizes_to_scale(raw: str, expected_position: int) -> None:
    control = _sigma_control()

    assert control.set_from_text(raw) is True

    assert control.position == expected_position
    assert control.value == expected_position / 10


def test_set_from_text_clamps_but_accepts_out_of_range_text() -> None:
    control = _sigma_control()

    assert control.set_from_text("12.5") is True

    assert control.position == 50
    assert control.value == 5.0
    assert control.text == "5"


@pytest.mark.parametrize("raw", ["abc", "1.2.3", "-1", "", "1e3", " 2", "2.", "+1", "nan", "٣"])
def test_set_from_text_ignores_malformed_input(raw: str) -> None:
    control = _sigma_control()
    control.set_from_bounded(33)

    assert control.set_from_text(raw) is False

    assert control.position == 33
    assert control.value == pytest.approx(3.3)
    assert control.text == "3.3"


@pytest.mark.parametrize("raw", ["1" + "0" * 308, "9" * 400, "1" + "0" * 400 + ".5"])
def test_set_from_text_pins_huge_numbers_to_maximum(raw: str) -> None:
    control = _sigma_control()
    control.set_from_bounded(33)

    assert control.set_from_text(raw) is True

    assert control.position == 50
    assert control.text == "5"


def test_edit_text_with_huge_number_at_maximum_keeps_typed_text() -> None:
    control = ScaledControl(0, 200, 10, value=20.0)
    raw = "1" + "0" * 308

    assert control.edit_text(raw) is True

    assert control.position == 200
    assert control.text == raw


def test_set_value_pins_huge_values_and_rejects_non_finite() -> None:
    control = ScaledControl(-50, 50, 10, value=1.0)

    control.set_value(-1e308)
    assert control.position == -50

    for bad in (float("nan"), float("inf")):
        with pytest.raises(ValueError):
            control.set_value(bad)
    assert control.position == -50


def test_edit_text_keeps_malformed_text_visible() -> None:
    control = _sigma_control()

    assert control.edit_text("xyz") is False

    assert control.text == "xyz"
    assert control.position == 20


def test_edit_text_with_valid_text_resyncs_text_side() -> None:
    control = _sigma_control()

    assert control.edit_text("2.50") is True

    assert control.position == 25
    assert control.text == "2.5"


def test_edit_text_keeps_typed_text_when_position_does_not_move() -> None:
    control = ScaledControl(0, 200, 10, value=20.0)

    assert control.edit_text("35") is True

    assert control.position == 200
    assert control.text == "35"


def test_set_value_keeps_exact_text_and_quantized_position() -> None:
    control = ScaledControl(0, 200, 10)

    control.set_value(25.123)

    assert control.position == 200
    assert control.text == "25.123"


def test_unit_scale_control_holds_integers() -> None:
    control = ScaledControl(1, 10, 1, value=3)

    assert control.set_from_text("7.4") is True
    assert control.position == 7
    assert control.text == "7"


def test_quantize_rounds_halves_up() -> None:
    assert quantize(0.25, 10) == 3
    assert quantize(2.5, 1) == 3
    assert quantize(-0.25, 10) == -2


def test_invalid_bounds_are_rejected() -> None:
    with pytest.raises(ValueError):
        ScaledControl(10, 1, 1)
    with pytest.raises(ValueError):
        ScaledControl(0, 10, 0)
