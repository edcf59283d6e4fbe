"""
i18n core: load_lang (cached JSON), t(key, **kwargs) and translator(lang).
t() uses st.session_state["lang"] (RU/EN), RU default.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import streamlit as st

from app.config import DEFAULT_LANG, normalize_lang

_I18N_DIR = Path(__file__).resolve().parent
_CACHE: dict[str, dict[str, str]] = {}


def load_lang(lang: str) -> dict[str, str]:
    """Load locale JSON for lang (RU/EN). Cached."""
    if lang not in _CACHE:
        path = _I18N_DIR / f"{lang.lower()}.json"
        if path.exists():
            with path.open(encoding="utf-8") as f:
                _CACHE[lang] = json.load(f)
        else:
            _CACHE[lang] = {}
    return _CACHE[lang]


def _render(strings: dict[str, str], key: str, kwargs: dict) -> str:
    raw = strings.get(key, key)
    if not kwargs:
        return raw
    try:
        return raw.format(**kwargs)
    except (KeyError, ValueError):
        return raw


def translator(lang: str) -> Callable[..., str]:
    """Plain translate callable for a fixed language (CLI, tests)."""
    strings = load_lang(normalize_lang(lang))

    def _t(key: str, **kwargs) -> str:
        return _render(strings, key, kwargs)

    return _t


def t(key: str, **kwargs) -> str:
    """
    Translate key using session_state["lang"] (RU/EN).
    Supports .format(**kwargs). Fallback: return key if missing.
    """
    try:
        lang = st.session_state.get("lang", DEFAULT_LANG)
    except Exception:
        lang = DEFAULT_LANG
    return _render(load_lang(normalize_lang(lang)), key, kwargs)
