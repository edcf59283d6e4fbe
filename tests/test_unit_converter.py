from __future__ import annotations

import math

import pytest

from calc_core.unit_converter import ParseError, parse_field, to_si


def test_to_si_converts_mm_and_hz() -> None:
    si = to_si("50", "20", "5", "10")
    assert si.piston_m == pytest.approx(0.05)
    assert si.rod_m == pytest.approx(0.02)
    assert si.amplitude_m == pytest.approx(0.005)
    assert si.frequency_rad_s == pytest.approx(2 * math.pi * 10)


def test_negative_frequency_is_not_rejected() -> None:
    si = to_si("50", "20", "5", "-0.5")
    assert si.frequency_rad_s == pytest.approx(-math.pi)


@pytest.mark.parametrize(
    "args, field",
    [
        (("", "20", "5", "10"), "piston_diameter"),
        (("50", "x", "5", "10"), "rod_diameter"),
        (("50", "20", "-5", "10"), "amplitude"),
        (("50", "20", "5", "1e"), "frequency"),
    ],
)
def test_parse_error_names_failing_field(args: tuple[str, ...], field: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        to_si(*args)
    assert excinfo.value.field == field
    assert field.replace("_", " ") in str(excinfo.value)


def test_first_failing_field_wins() -> None:
    with pytest.raises(ParseError) as excinfo:
        to_si("", "", "", "")
    assert excinfo.value.field == "piston_diameter"


def test_overflowing_frequency_is_a_parse_error() -> None:
    with pytest.raises(ParseError):
        parse_field("frequency", "1e999")


def test_parse_error_is_a_value_error() -> None:
    assert issubclass(ParseError, ValueError)


@pytest.mark.parametrize(
    "piston",
    [
        "9" * 400,  # int fits, float(int) overflows
        "9" * 5000,  # beyond int() digit limit
        "1" + "0" * 300,  # finite, but its square in m^2 is not
    ],
)
def test_oversized_piston_is_a_parse_error(piston: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        to_si(piston, "20", "5", "10")
    assert excinfo.value.field == "piston_diameter"


def test_oversized_rod_and_amplitude_name_their_fields() -> None:
    with pytest.raises(ParseError) as excinfo:
        to_si("50", "1" + "0" * 300, "5", "10")
    assert excinfo.value.field == "rod_diameter"
    with pytest.raises(ParseError) as excinfo:
        to_si("50", "20", "9" * 400, "10")
    assert excinfo.value.field == "amplitude"


def test_oversized_piston_is_reported_before_later_empty_fields() -> None:
    with pytest.raises(ParseError) as excinfo:
        to_si("9" * 400, "20", "5", "")
    assert excinfo.value.field == "piston_diameter"
