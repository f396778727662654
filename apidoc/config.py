"""
Extraction configuration.

Verbosity is decided once, when the config is built, and read-only after
that. Strategies receive the config at construction time.

Environment variables:
    APIDOC_VERBOSE     : "1" / "true" / "yes" turns on full exception output.
    APIDOC_CONFIG_FILE : optional JSON or YAML mapping:

        verbose: true
        type_aliases:
          User: myapp.models.User
          UserResource: myapp.resources.UserResource
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

_log = logging.getLogger("apidoc.config")

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


@dataclass(frozen=True)
class ExtractionConfig:
    verbose: bool = False
    type_aliases: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "ExtractionConfig":
        """
        Accepts:
          - None
          - {"verbose": true, "type_aliases": {"User": "myapp.models.User"}}
        Unknown keys and badly-typed values are ignored.
        """
        if not isinstance(payload, dict):
            return cls()

        verbose = payload.get("verbose", False)
        if isinstance(verbose, str):
            verbose = verbose.strip().lower() in _TRUTHY

        aliases = payload.get("type_aliases", {})
        if not isinstance(aliases, dict):
            aliases = {}

        return cls(
            verbose=bool(verbose),
            type_aliases={str(k): str(v) for k, v in aliases.items() if isinstance(v, str) and v.strip()},
        )

    @classmethod
    def from_env(cls, *, verbose: Optional[bool] = None) -> "ExtractionConfig":
        """
        File settings first, then APIDOC_VERBOSE, then the explicit argument
        (a CLI --verbose flag wins over everything).
        """
        base = cls.from_payload(load_config_file())
        resolved_verbose = _env_flag("APIDOC_VERBOSE", default=base.verbose)
        if verbose is not None:
            resolved_verbose = verbose
        return cls(verbose=resolved_verbose, type_aliases=dict(base.type_aliases))


def load_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load a JSON or YAML config mapping.

    Returns an empty dict if the file is absent, unreadable or malformed.
    """
    resolved = _resolve_path(path)
    if resolved is None or not resolved.exists():
        return {}

    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read config file %s: %s", resolved, exc)
        return {}

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            import yaml  # type: ignore[import]
            data = yaml.safe_load(raw_text)
        except Exception as exc:
            _log.warning("Failed to parse config file %s as JSON or YAML: %s", resolved, exc)
            return {}

    if not isinstance(data, dict):
        _log.warning("Config file %s must be a mapping, got %s", resolved, type(data).__name__)
        return {}

    _log.debug("Loaded config from %s", resolved)
    return data


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_path = os.getenv("APIDOC_CONFIG_FILE", "").strip()
    if env_path:
        return Path(env_path)
    return None
