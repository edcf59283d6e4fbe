"""
calc_core: расчётное ядро Q calc.

- проверка ввода по нажатию клавиши (field_validator)
- перевод в СИ (unit_converter)
- расход Q через рабочую площадь цилиндра (flow_calculator)
- пакетный расчёт по таблице (batch)

Хранение сессии и буфер обмена живут в app/: ядро не делает I/O.
"""

from .field_validator import validate, validate_field
from .flow_calculator import CalculationResult, calc_q, compute, format_value
from .unit_converter import ParseError, SiInputs, to_si

__all__ = [
    "CalculationResult",
    "ParseError",
    "SiInputs",
    "calc_q",
    "compute",
    "format_value",
    "to_si",
    "validate",
    "validate_field",
]
