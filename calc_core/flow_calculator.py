from __future__ import annotations

import math
from dataclasses import dataclass

from .unit_converter import SiInputs, to_si

LPM_PER_M3S = 1000.0 * 60.0


@dataclass(frozen=True)
class CalculationResult:
    q_lpm: float
    q_m3s: float


def working_area(piston_m: float, rod_m: float) -> float:
    # negative when the rod is wider than the piston; propagated as is
    return (math.pi / 4.0) * (piston_m * piston_m - rod_m * rod_m)


def compute(si: SiInputs) -> CalculationResult:
    """Q = ω·A·S, reported in m^3/s and L/min."""
    area = working_area(si.piston_m, si.rod_m)
    q_m3s = si.frequency_rad_s * si.amplitude_m * area
    return CalculationResult(q_lpm=q_m3s * LPM_PER_M3S, q_m3s=q_m3s)


def format_value(value: float) -> str:
    return str(float(value))


def calc_q(piston_mm: str, rod_mm: str, amplitude_mm: str, frequency_hz: str) -> CalculationResult:
    """Raw field text to result; raises ParseError for the first bad field."""
    return compute(to_si(piston_mm, rod_mm, amplitude_mm, frequency_hz))
