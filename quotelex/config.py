#!/usr/bin/env python3
# quotelex/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, quotelex.toml
  3) Environment variables prefixed with QUOTELEX_

Validation:
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH: None or normalized path
  - HISTORY_FILE_PATH: normalized path
  - LENIENT / ENABLE_COMPLETION: bool
  - PROMPT: str
  - MAX_HISTORY_TOKENS: int >= 1
"""

import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

ENV_PREFIX = "QUOTELEX_"

DEFAULTS: dict[str, Any] = {
    "LOG_LEVEL": None,
    "LOG_FILE_PATH": None,
    "HISTORY_FILE_PATH": str(Path.home() / ".quotelex_history"),
    "LENIENT": False,
    "ENABLE_COMPLETION": True,
    "PROMPT": "> ",
    "MAX_HISTORY_TOKENS": 1000,
}


# ---------- data model ----------

@dataclass(frozen=True)
class AppConfig:
    log_level: str | None
    log_file_path: Path | None
    history_file_path: Path

    lenient: bool
    enable_completion: bool
    prompt: str
    max_history_tokens: int

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if len(v) >= 2 and v[0] == v[-1] and v[0] in "'\"":
            v = v[1:-1]
        out[k] = v
    return out


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[key.upper()] = v
    return flat


def _strip_prefix(d: Mapping[str, Any]) -> dict[str, Any]:
    """Keep QUOTELEX_* keys only, without the prefix."""
    return {k[len(ENV_PREFIX):]: v for k, v in d.items()
            if k.upper().startswith(ENV_PREFIX) and len(k) > len(ENV_PREFIX)}


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"Expected boolean, got: {val!r}")


def _as_int(val: Any) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    try:
        return int(str(val).strip())
    except ValueError as exc:
        raise ValueError(f"Expected integer, got: {val!r}") from exc


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_path(val: Any) -> Path:
    s = os.path.expandvars(os.path.expanduser(str(val)))
    return Path(s).resolve()


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    return None if v is None else _as_path(v)


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _merge_sources(cwd: Path | None = None, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    base = cwd or Path.cwd()
    env = os.environ if environ is None else environ

    merged: dict[str, Any] = dict(DEFAULTS)
    merged.update(_normalize_keys(_strip_prefix(_load_env_file(base / ".env"))))
    merged.update(_normalize_keys(_flatten_mapping(_load_toml_file(base / "quotelex.toml"))))
    # Environment variables override all
    merged.update(_normalize_keys(_strip_prefix(env)))
    return merged


def _validate_and_build(config: dict[str, Any]) -> AppConfig:
    max_history_tokens = _as_int(config.get("MAX_HISTORY_TOKENS", DEFAULTS["MAX_HISTORY_TOKENS"]))
    if max_history_tokens < 1:
        raise ValueError("MAX_HISTORY_TOKENS must be >= 1")

    prompt = config.get("PROMPT", DEFAULTS["PROMPT"])
    if prompt is None:
        prompt = DEFAULTS["PROMPT"]

    extra = {k: v for k, v in config.items() if k not in DEFAULTS}

    return AppConfig(
        log_level=_as_log_level(config.get("LOG_LEVEL", DEFAULTS["LOG_LEVEL"])),
        log_file_path=_as_opt_path(config.get("LOG_FILE_PATH", DEFAULTS["LOG_FILE_PATH"])),
        history_file_path=_as_path(config.get("HISTORY_FILE_PATH", DEFAULTS["HISTORY_FILE_PATH"])),
        lenient=_as_bool(config.get("LENIENT", DEFAULTS["LENIENT"])),
        enable_completion=_as_bool(config.get("ENABLE_COMPLETION", DEFAULTS["ENABLE_COMPLETION"])),
        prompt=str(prompt),
        max_history_tokens=max_history_tokens,
        extra=extra,
    )


# ---------- public API ----------

def load_config(*, cwd: Path | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects. Raises ValueError on invalid values.
    """
    return _validate_and_build(_merge_sources(cwd, environ))
