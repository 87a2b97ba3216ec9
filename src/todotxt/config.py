# src/todotxt/config.py

"""Settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app, built lazily by get_settings().
- The plain TODO_FILE / DONE_FILE names are honoured as fallbacks for the
  prefixed TODO_TXT_* variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO_TXT"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_path(*names: str, default: Path) -> Path:
    raw = _first_env(*names)
    if raw is None:
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Files ----
    todo_file: Path
    done_file: Path

    # ---- Logging ----
    log_level: str
    log_dir: Path | None

    @staticmethod
    def from_env(*, use_dotenv: bool = True) -> Settings:
        if use_dotenv:
            load_dotenv(override=False)

        home = Path.home()
        todo_file = _env_path(_k("TODO_FILE"), "TODO_FILE", default=home / "todo.txt")
        done_file = _env_path(_k("DONE_FILE"), "DONE_FILE", default=home / "done.txt")
        log_dir = _first_env(_k("LOG_DIR"))

        return Settings(
            todo_file=todo_file,
            done_file=done_file,
            log_level=_env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING",
            log_dir=Path(log_dir).expanduser() if log_dir else None,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
