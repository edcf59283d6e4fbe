"""
Launch-time settings: where the session store lives, UI language, log level.

Only the launchers (Streamlit app, tools/q_calc.py) read these; the
calculation core and the session functions take everything as arguments.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

APP_NAMESPACE = "q_calc"
DEFAULT_LANG = "RU"
SUPPORTED_LANGS = ("RU", "EN")
DEFAULT_LOG_LEVEL = "INFO"

ENV_CONFIG_DIR = "Q_CALC_CONFIG_DIR"
ENV_LANG = "Q_CALC_LANG"
ENV_LOG_LEVEL = "Q_CALC_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    config_dir: Path
    lang: str = DEFAULT_LANG
    log_level: str = DEFAULT_LOG_LEVEL


def default_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    if sys.platform.startswith("win") and env.get("APPDATA"):
        return Path(env["APPDATA"])
    xdg = env.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def normalize_lang(lang: str | None) -> str:
    value = str(lang or "").strip().upper()
    return value if value in SUPPORTED_LANGS else DEFAULT_LANG


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    config_dir = env.get(ENV_CONFIG_DIR)
    return Settings(
        config_dir=Path(config_dir) if config_dir else default_config_dir(env),
        lang=normalize_lang(env.get(ENV_LANG)),
        log_level=str(env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper(),
    )
