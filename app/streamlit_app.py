from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.actions import on_export, on_submit  # noqa: E402
from app.clipboard import ClipboardFailure, TkClipboard  # noqa: E402
from app.config import APP_NAMESPACE, SUPPORTED_LANGS, load_settings  # noqa: E402
from app.i18n import t  # noqa: E402
from app.logging_config import setup_logging  # noqa: E402
from app.session import (  # noqa: E402
    RESULT_MAIN,
    RESULT_SECONDARY,
    JsonSessionStore,
    load_session,
)
from app.ui_components import error_region, field_row, result_row  # noqa: E402
from calc_core.field_validator import INPUT_FIELDS  # noqa: E402

SESSION_KEY = "q_session"
FLASH_KEY = "q_flash"

_FIELD_LABELS = {
    "piston_diameter": ("input.piston_diameter", "units.mm"),
    "rod_diameter": ("input.rod_diameter", "units.mm"),
    "amplitude": ("input.amplitude", "units.mm"),
    "frequency": ("input.frequency", "units.hz"),
}


def _widget_key(field_id: str) -> str:
    return f"input_{field_id}"


def _store() -> JsonSessionStore:
    return JsonSessionStore(st.session_state["config_dir"])


def _init_state() -> None:
    state = st.session_state
    if SESSION_KEY in state:
        return
    settings = load_settings()
    setup_logging(settings.log_level)
    state["config_dir"] = str(settings.config_dir)
    state.setdefault("lang", settings.lang)
    session = load_session(JsonSessionStore(settings.config_dir), APP_NAMESPACE)
    state[SESSION_KEY] = session
    for field_id in INPUT_FIELDS:
        state[_widget_key(field_id)] = getattr(session, field_id)
    state[FLASH_KEY] = None


def _on_submit() -> None:
    # Enter in any input or the compute button submits the whole form
    state = st.session_state
    state[FLASH_KEY] = None
    session = state[SESSION_KEY]
    texts = {field_id: state[_widget_key(field_id)] for field_id in INPUT_FIELDS}
    on_submit(session, texts, store=_store(), namespace=APP_NAMESPACE, translator=t)
    for field_id in INPUT_FIELDS:
        # rejected edits are discarded: show the last accepted text again
        state[_widget_key(field_id)] = getattr(session, field_id)


def _on_copy(result_id: str) -> None:
    state = st.session_state
    session = state[SESSION_KEY]
    try:
        on_export(session, result_id, TkClipboard())
    except ClipboardFailure as exc:
        state[FLASH_KEY] = ("error", t("clipboard.failed", error=str(exc)))
        return
    state[FLASH_KEY] = ("success", t("clipboard.copied", text=session.result_text(result_id)))


def main() -> None:
    st.set_page_config(page_title=t("app.title"), layout="centered")
    _init_state()
    state = st.session_state

    with st.sidebar:
        st.title(t("app.title"))
        st.radio(t("sidebar.language"), list(SUPPORTED_LANGS), key="lang", horizontal=True)

    session = state[SESSION_KEY]
    input_col, result_col = st.columns(2, gap="large")

    with input_col:
        st.subheader(t("input.header"))
        with st.form("inputs", border=False):
            for field_id in INPUT_FIELDS:
                label_key, unit_key = _FIELD_LABELS[field_id]
                field_row(t(label_key), t(unit_key), key=_widget_key(field_id))
            st.form_submit_button(t("actions.compute"), type="primary", on_click=_on_submit)
        error_region(session.last_error)

    with result_col:
        result_row(
            t("result.main_label"),
            session.main_result,
            copy_label=t("actions.copy"),
            key="copy_main",
            on_copy=_on_copy,
            args=(RESULT_MAIN,),
        )
        result_row(
            t("result.secondary_label"),
            session.secondary_result,
            copy_label=t("actions.copy"),
            key="copy_secondary",
            on_copy=_on_copy,
            args=(RESULT_SECONDARY,),
        )
        flash = state.get(FLASH_KEY)
        if flash:
            kind, message = flash
            if kind == "error":
                st.error(message)
            else:
                st.success(message)


if __name__ == "__main__":
    main()
