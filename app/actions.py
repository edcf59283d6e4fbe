"""
Operator actions: field edit, compute, export.

Each handler takes the one Session it mutates, resolves the action fully
and returns the outcome together with a snapshot for re-rendering.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from calc_core.field_validator import (
    FIELD_AMPLITUDE,
    FIELD_FREQUENCY,
    FIELD_PISTON_DIAMETER,
    FIELD_ROD_DIAMETER,
    validate_field,
)
from calc_core.flow_calculator import calc_q
from calc_core.unit_converter import ParseError

from app.clipboard import Clipboard, export
from app.session import (
    PersistenceFailure,
    Session,
    SessionStore,
    SessionView,
    record_failure,
    record_success,
)

logger = logging.getLogger(__name__)

Translator = Callable[..., str]

OUTCOME_ACCEPTED = "ACCEPTED"
OUTCOME_FIELD_REJECTED = "FIELD_REJECTED"
OUTCOME_COMPUTED = "COMPUTED"
OUTCOME_REJECTED = "REJECTED"
OUTCOME_EXPORTED = "EXPORTED"

PARSE_ERROR_KEYS = {
    FIELD_PISTON_DIAMETER: "errors.piston_diameter_invalid",
    FIELD_ROD_DIAMETER: "errors.rod_diameter_invalid",
    FIELD_AMPLITUDE: "errors.amplitude_invalid",
    FIELD_FREQUENCY: "errors.frequency_invalid",
}

# Default English strings when no translator is provided.
_MESSAGES_EN = {
    "errors.piston_diameter_invalid": "Piston diameter: invalid value",
    "errors.rod_diameter_invalid": "Rod diameter: invalid value",
    "errors.amplitude_invalid": "Signal amplitude: invalid value",
    "errors.frequency_invalid": "Signal frequency: invalid value",
}


def _tr(translator: Translator | None, key: str, **kwargs: Any) -> str:
    if translator is None:
        raw = _MESSAGES_EN.get(key, key)
        return raw.format(**kwargs) if kwargs else raw
    return translator(key, **kwargs)


@dataclass(frozen=True)
class ActionResult:
    outcome: str
    view: SessionView
    persistence_failure: PersistenceFailure | None = None

    @property
    def ok(self) -> bool:
        return self.outcome in (OUTCOME_ACCEPTED, OUTCOME_COMPUTED, OUTCOME_EXPORTED)


def parse_error_message(exc: ParseError, *, translator: Translator | None = None) -> str:
    return _tr(translator, PARSE_ERROR_KEYS[exc.field])


def on_field_changed(session: Session, field_id: str, text: str) -> ActionResult:
    """Write text into the field only if it passes the keystroke gate."""
    if not validate_field(field_id, text):
        return ActionResult(outcome=OUTCOME_FIELD_REJECTED, view=session.view())
    setattr(session, field_id, text)
    return ActionResult(outcome=OUTCOME_ACCEPTED, view=session.view())


def on_compute(
    session: Session,
    *,
    store: SessionStore,
    namespace: str,
    translator: Translator | None = None,
) -> ActionResult:
    try:
        result = calc_q(*session.raw_fields())
    except ParseError as exc:
        record_failure(session, parse_error_message(exc, translator=translator))
        logger.debug("Compute rejected: %s", exc)
        return ActionResult(outcome=OUTCOME_REJECTED, view=session.view())

    failure = record_success(session, result, store=store, namespace=namespace)
    logger.debug("Computed Q: %s L/min, %s m3/s", session.main_result, session.secondary_result)
    return ActionResult(outcome=OUTCOME_COMPUTED, view=session.view(), persistence_failure=failure)


def on_export(session: Session, result_id: str, clipboard: Clipboard) -> ActionResult:
    export(session.result_text(result_id), clipboard)
    return ActionResult(outcome=OUTCOME_EXPORTED, view=session.view())


def on_submit(
    session: Session,
    texts: dict[str, str],
    *,
    store: SessionStore,
    namespace: str,
    translator: Translator | None = None,
) -> ActionResult:
    """
    Enter pressed in an input: apply the edited field texts through the
    keystroke gate (rejected ones keep their Session value), then compute.
    """
    for field_id, text in texts.items():
        on_field_changed(session, field_id, text)
    return on_compute(session, store=store, namespace=namespace, translator=translator)
