from __future__ import annotations

from pathlib import Path

from app.config import DEFAULT_LANG, load_settings, normalize_lang


def test_env_overrides(tmp_path: Path) -> None:
    settings = load_settings(
        {
            "Q_CALC_CONFIG_DIR": str(tmp_path),
            "Q_CALC_LANG": "en",
            "Q_CALC_LOG_LEVEL": "debug",
        }
    )
    assert settings.config_dir == tmp_path
    assert settings.lang == "EN"
    assert settings.log_level == "DEBUG"


def test_defaults_follow_xdg(tmp_path: Path) -> None:
    settings = load_settings({"XDG_CONFIG_HOME": str(tmp_path)})
    assert settings.config_dir == tmp_path
    assert settings.lang == DEFAULT_LANG
    assert settings.log_level == "INFO"


def test_unknown_lang_falls_back() -> None:
    assert normalize_lang("de") == DEFAULT_LANG
    assert normalize_lang(None) == DEFAULT_LANG
    assert normalize_lang(" ru ") == "RU"
