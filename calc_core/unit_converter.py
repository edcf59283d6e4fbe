from __future__ import annotations

import math
from dataclasses import dataclass

from .field_validator import (
    FIELD_AMPLITUDE,
    FIELD_FREQUENCY,
    FIELD_PISTON_DIAMETER,
    FIELD_ROD_DIAMETER,
    KIND_UNSIGNED_INT,
    kind_for_field,
    matches_kind,
)

MM_PER_M = 1000.0

FIELD_LABELS = {
    FIELD_PISTON_DIAMETER: "piston diameter",
    FIELD_ROD_DIAMETER: "rod diameter",
    FIELD_AMPLITUDE: "amplitude",
    FIELD_FREQUENCY: "frequency",
}


class ParseError(ValueError):
    """Raw field text does not parse as its numeric kind."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{FIELD_LABELS.get(field, field)}: invalid value")


@dataclass(frozen=True)
class SiInputs:
    piston_m: float
    rod_m: float
    amplitude_m: float
    frequency_rad_s: float


def parse_field(field_id: str, raw: str) -> float:
    kind = kind_for_field(field_id)
    text = raw if isinstance(raw, str) else ""
    if not matches_kind(kind, text):
        raise ParseError(field_id)
    try:
        value = float(int(text)) if kind == KIND_UNSIGNED_INT else float(text)
    except (OverflowError, ValueError):
        # digit strings too long for int() or for a float
        raise ParseError(field_id) from None
    # "1e999" matches the grammar but overflows to inf
    if not math.isfinite(value):
        raise ParseError(field_id)
    return value


def _length_m(field_id: str, value_mm: float) -> float:
    # diameters are squared for the working area; that square must stay finite
    value_m = value_mm / MM_PER_M
    if not math.isfinite(value_m * value_m):
        raise ParseError(field_id)
    return value_m


def to_si(piston_mm: str, rod_mm: str, amplitude_mm: str, frequency_hz: str) -> SiInputs:
    """
    Parse the four raw fields (in this order) and convert to SI:
    mm -> m for lengths, Hz -> rad/s for frequency. No clamping.
    """
    piston_m = _length_m(FIELD_PISTON_DIAMETER, parse_field(FIELD_PISTON_DIAMETER, piston_mm))
    rod_m = _length_m(FIELD_ROD_DIAMETER, parse_field(FIELD_ROD_DIAMETER, rod_mm))
    amplitude = parse_field(FIELD_AMPLITUDE, amplitude_mm)
    frequency = parse_field(FIELD_FREQUENCY, frequency_hz)

    return SiInputs(
        piston_m=piston_m,
        rod_m=rod_m,
        amplitude_m=amplitude / MM_PER_M,
        frequency_rad_s=2.0 * math.pi * frequency,
    )
