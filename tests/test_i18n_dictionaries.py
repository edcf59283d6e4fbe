"""i18n dictionary symmetry: RU/EN keys match and required keys exist."""
from __future__ import annotations

import json
import string
from pathlib import Path

from app.actions import PARSE_ERROR_KEYS

REPO_ROOT = Path(__file__).resolve().parents[1]


def _load_json(path: Path) -> dict:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def _placeholders(text: str) -> set[str]:
    return {name for _, name, _, _ in string.Formatter().parse(text) if name}


def test_ru_en_keys_symmetric() -> None:
    """RU and EN dictionaries have identical key sets."""
    ru = _load_json(REPO_ROOT / "app" / "i18n" / "ru.json")
    en = _load_json(REPO_ROOT / "app" / "i18n" / "en.json")
    assert set(ru.keys()) == set(en.keys()), (
        f"Key mismatch: RU has {set(ru.keys()) - set(en.keys())!r} not in EN; "
        f"EN has {set(en.keys()) - set(ru.keys())!r} not in RU"
    )


def test_placeholders_match() -> None:
    """Same {placeholders} in both languages for every key."""
    ru = _load_json(REPO_ROOT / "app" / "i18n" / "ru.json")
    en = _load_json(REPO_ROOT / "app" / "i18n" / "en.json")
    for key in ru:
        assert _placeholders(ru[key]) == _placeholders(en[key]), key


def test_required_keys_present() -> None:
    """Parse-error messages and core UI keys exist in both RU and EN."""
    ru = _load_json(REPO_ROOT / "app" / "i18n" / "ru.json")
    en = _load_json(REPO_ROOT / "app" / "i18n" / "en.json")
    required = {
        "app.title",
        "sidebar.language",
        "actions.compute",
        "result.main_label",
        "result.secondary_label",
        *PARSE_ERROR_KEYS.values(),
    }
    missing_ru = required - set(ru.keys())
    missing_en = required - set(en.keys())
    assert not missing_ru, f"RU missing keys: {missing_ru}"
    assert not missing_en, f"EN missing keys: {missing_en}"


def test_ru_parse_errors_match_operator_wording() -> None:
    ru = _load_json(REPO_ROOT / "app" / "i18n" / "ru.json")
    assert ru["errors.piston_diameter_invalid"] == "Диаметр поршня: неверное значение"
    assert ru["errors.frequency_invalid"] == "Частота сигнала: неверное значение"
