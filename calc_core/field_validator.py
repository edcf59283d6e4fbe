from __future__ import annotations

import re

KIND_UNSIGNED_INT = "UNSIGNED_INT"
KIND_DECIMAL = "DECIMAL"

FIELD_PISTON_DIAMETER = "piston_diameter"
FIELD_ROD_DIAMETER = "rod_diameter"
FIELD_AMPLITUDE = "amplitude"
FIELD_FREQUENCY = "frequency"

# Order matters: parse errors are reported for the first failing field.
INPUT_FIELDS = (
    FIELD_PISTON_DIAMETER,
    FIELD_ROD_DIAMETER,
    FIELD_AMPLITUDE,
    FIELD_FREQUENCY,
)

FIELD_KINDS = {
    FIELD_PISTON_DIAMETER: KIND_UNSIGNED_INT,
    FIELD_ROD_DIAMETER: KIND_UNSIGNED_INT,
    FIELD_AMPLITUDE: KIND_UNSIGNED_INT,
    FIELD_FREQUENCY: KIND_DECIMAL,
}

_UNSIGNED_INT_RE = re.compile(r"[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_GRAMMARS = {
    KIND_UNSIGNED_INT: _UNSIGNED_INT_RE,
    KIND_DECIMAL: _DECIMAL_RE,
}


def matches_kind(kind: str, text: str) -> bool:
    """Strict full-string match, empty string included (and rejected)."""
    grammar = _GRAMMARS.get(kind)
    if grammar is None:
        raise ValueError(f"Unsupported field kind: {kind}")
    return grammar.fullmatch(text) is not None


def validate(kind: str, candidate: str) -> bool:
    """
    Keystroke gate for a raw input field.

    - "" is always accepted (the operator may clear a field)
    - UNSIGNED_INT: ASCII digits only, no sign, no fraction, no spaces
    - DECIMAL: optional sign, digits with optional fraction, optional exponent;
      finite literals only ("1e5" ok, "1e" / "-" / "." / "inf" rejected)
    """
    if not isinstance(candidate, str):
        raise TypeError("candidate must be a string")
    if candidate == "":
        if kind not in _GRAMMARS:
            raise ValueError(f"Unsupported field kind: {kind}")
        return True
    return matches_kind(kind, candidate)


def kind_for_field(field_id: str) -> str:
    kind = FIELD_KINDS.get(field_id)
    if kind is None:
        raise ValueError(f"Unsupported field: {field_id}")
    return kind


def validate_field(field_id: str, candidate: str) -> bool:
    return validate(kind_for_field(field_id), candidate)
