from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Protocol

from calc_core.field_validator import INPUT_FIELDS, validate_field
from calc_core.flow_calculator import CalculationResult, format_value

logger = logging.getLogger(__name__)

ZERO_RESULT = "0"
# Space, not "": the presentation layer keeps the error region laid out.
BLANK_ERROR = " "

RESULT_MAIN = "main_result"
RESULT_SECONDARY = "secondary_result"
RESULT_FIELDS = (RESULT_MAIN, RESULT_SECONDARY)

PERSISTED_FIELDS = INPUT_FIELDS + RESULT_FIELDS

SESSION_FILENAME = "session.json"


class SessionStoreError(Exception):
    pass


class SessionNotFound(SessionStoreError):
    pass


class SessionCorrupt(SessionStoreError):
    pass


@dataclass(frozen=True)
class PersistenceFailure:
    namespace: str
    reason: str


@dataclass(frozen=True)
class SessionView:
    piston_diameter: str
    rod_diameter: str
    amplitude: str
    frequency: str
    main_result: str
    secondary_result: str
    last_error: str

    @property
    def has_error(self) -> bool:
        return bool(self.last_error.strip())


@dataclass
class Session:
    piston_diameter: str = ""
    rod_diameter: str = ""
    amplitude: str = ""
    frequency: str = ""
    main_result: str = ZERO_RESULT
    secondary_result: str = ZERO_RESULT
    last_error: str = field(default=BLANK_ERROR, compare=False)

    def raw_fields(self) -> tuple[str, str, str, str]:
        return (self.piston_diameter, self.rod_diameter, self.amplitude, self.frequency)

    def result_text(self, result_id: str) -> str:
        if result_id not in RESULT_FIELDS:
            raise ValueError(f"Unsupported result: {result_id}")
        return getattr(self, result_id)

    def to_record(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in PERSISTED_FIELDS}

    @classmethod
    def from_record(cls, record: Any) -> "Session":
        """
        Rebuild a Session from a persisted flat record.

        Extra keys are ignored. Missing keys, non-string values, or raw
        fields the validator would not have let through raise SessionCorrupt.
        """
        if not isinstance(record, dict):
            raise SessionCorrupt("session record must be an object")
        values: dict[str, str] = {}
        for name in PERSISTED_FIELDS:
            if name not in record:
                raise SessionCorrupt(f"missing key: {name}")
            val = record[name]
            if not isinstance(val, str):
                raise SessionCorrupt(f"{name} must be a string")
            values[name] = val
        for name in INPUT_FIELDS:
            if not validate_field(name, values[name]):
                raise SessionCorrupt(f"{name} holds an invalid value: {values[name]!r}")
        return cls(**values)

    def view(self) -> SessionView:
        return SessionView(**{f.name: getattr(self, f.name) for f in fields(self)})


class SessionStore(Protocol):
    def load(self, namespace: str) -> dict[str, str]:
        ...

    def store(self, namespace: str, record: dict[str, str]) -> None:
        ...


class JsonSessionStore:
    """One flat JSON object per namespace: <base_dir>/<namespace>/session.json."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def path_for(self, namespace: str) -> Path:
        if not namespace or "/" in namespace or "\\" in namespace or namespace in (".", ".."):
            raise ValueError(f"Invalid namespace: {namespace!r}")
        return self.base_dir / namespace / SESSION_FILENAME

    def load(self, namespace: str) -> dict[str, str]:
        path = self.path_for(namespace)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SessionNotFound(str(path)) from exc
        except UnicodeDecodeError as exc:
            raise SessionCorrupt(f"{path}: {exc}") from exc
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SessionCorrupt(f"{path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SessionCorrupt(f"{path}: top-level value must be an object")
        return data

    def store(self, namespace: str, record: dict[str, str]) -> None:
        path = self.path_for(namespace)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(record, ensure_ascii=False, indent=2) + "\n"
        fd, tmp_name = tempfile.mkstemp(prefix=".session-", suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except Exception:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise


class MemorySessionStore:
    def __init__(self, records: dict[str, dict[str, str]] | None = None) -> None:
        self.records: dict[str, dict[str, str]] = dict(records or {})

    def load(self, namespace: str) -> dict[str, str]:
        if namespace not in self.records:
            raise SessionNotFound(namespace)
        return dict(self.records[namespace])

    def store(self, namespace: str, record: dict[str, str]) -> None:
        self.records[namespace] = dict(record)


def load_session(store: SessionStore, namespace: str) -> Session:
    """Persisted Session, or the default one when absent/unreadable/malformed."""
    try:
        record = store.load(namespace)
        session = Session.from_record(record)
    except SessionNotFound:
        logger.info("No saved session for %s, starting with defaults", namespace)
        return Session()
    except SessionCorrupt as exc:
        logger.warning("Saved session for %s is corrupt, using defaults: %s", namespace, exc)
        return Session()
    except OSError as exc:
        logger.warning("Saved session for %s is unreadable, using defaults: %s", namespace, exc)
        return Session()
    logger.debug("Loaded session for %s", namespace)
    return session


def save_session(store: SessionStore, namespace: str, session: Session) -> PersistenceFailure | None:
    """Best-effort save; a failure is returned (and logged), never raised."""
    try:
        store.store(namespace, session.to_record())
    except (OSError, SessionStoreError, TypeError, ValueError) as exc:
        logger.warning("Could not save session for %s: %s", namespace, exc)
        return PersistenceFailure(namespace=namespace, reason=str(exc))
    logger.debug("Saved session for %s", namespace)
    return None


def record_success(
    session: Session,
    result: CalculationResult,
    *,
    store: SessionStore,
    namespace: str,
) -> PersistenceFailure | None:
    session.main_result = format_value(result.q_lpm)
    session.secondary_result = format_value(result.q_m3s)
    session.last_error = BLANK_ERROR
    return save_session(store, namespace, session)


def record_failure(session: Session, message: str) -> None:
    session.last_error = message
