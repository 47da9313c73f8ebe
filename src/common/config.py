"""Helpers for loading runtime configuration profiles."""
from __future__ import annotations

import codecs
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import BackendError, ErrorCode
from .models import TOKENIZER_STRATEGIES, GlobalSettings, ProfileSettings, RuntimeConfig

DEFAULT_CONFIG_PATH = Path("config/defaults.json")
DEFAULT_PROFILE = "reference"
ALLOWED_ERROR_POLICIES = {"fail-fast", "strict", "replace"}


@dataclass(slots=True)
class ConfigDocument:
    source: Optional[Path]
    version: int
    global_settings: GlobalSettings
    profiles: Dict[str, ProfileSettings]


def load_runtime_config(
    profile: str = DEFAULT_PROFILE,
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Dict[str, Any]]] = None,
) -> RuntimeConfig:
    """Load configuration JSON, validate it, and resolve a specific profile."""

    document = load_config_document(
        profile_name=profile,
        config_path=config_path,
        overrides=overrides,
    )
    return RuntimeConfig(global_settings=document.global_settings, profile=document.profiles[profile])


def load_config_document(
    *,
    profile_name: Optional[str] = None,
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Dict[str, Any]]] = None,
) -> ConfigDocument:
    if config_path is None and not DEFAULT_CONFIG_PATH.exists():
        raw = builtin_config()
        source = None
    else:
        source = config_path or DEFAULT_CONFIG_PATH
        raw = _read_config_json(source)

    version = _require_positive_int(raw.get("version"), "version", source)
    global_section = raw.get("global")
    if not isinstance(global_section, Mapping):
        raise BackendError(ErrorCode.CONFIG_ERROR, f"'global' section missing in {_label(source)}")

    overrides = overrides or {}
    global_data = {**global_section, **(overrides.get("global") or {})}
    global_settings = _build_global_settings(global_data, source)

    profiles_section = raw.get("profiles")
    if not isinstance(profiles_section, Mapping) or not profiles_section:
        raise BackendError(ErrorCode.CONFIG_ERROR, f"'profiles' section missing in {_label(source)}")

    profile_overrides = overrides.get("profile") or {}
    profiles: Dict[str, ProfileSettings] = {}
    for name, profile_data in profiles_section.items():
        if not isinstance(profile_data, Mapping):
            raise BackendError(
                ErrorCode.CONFIG_ERROR,
                f"Profile '{name}' must be an object in {_label(source)}",
            )
        merged = dict(profile_data)
        if profile_name and name == profile_name and profile_overrides:
            merged = {**merged, **profile_overrides}
        profiles[name] = _build_profile_settings(name, merged, source)

    if profile_name and profile_name not in profiles:
        raise BackendError(
            ErrorCode.CONFIG_ERROR,
            f"Profile '{profile_name}' not found in {_label(source)}",
        )

    return ConfigDocument(
        source=source,
        version=version,
        global_settings=global_settings,
        profiles=profiles,
    )


def builtin_config() -> Dict[str, Any]:
    """Configuration used when no defaults file is present."""

    return {
        "version": 1,
        "global": {"encoding": "locale", "error_policy": "fail-fast"},
        "profiles": {
            DEFAULT_PROFILE: {
                "description": "Character-by-character rescan (slow reference)",
                "strategy": "rescan",
                "chunk_size": 65536,
                "progress_interval": 1000,
            },
        },
    }


def error_mode_from_policy(policy: str) -> str:
    """Translate human-friendly error policy into Python's encoding error handler."""

    return "strict" if policy.lower() in {"fail-fast", "strict"} else "replace"


# ---------------------------------------------------------------------------
# Internal helpers


def _label(source: Optional[Path]) -> str:
    return str(source) if source else "built-in defaults"


def _read_config_json(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise BackendError(ErrorCode.CONFIG_ERROR, f"Config file '{path}' not found") from exc
    except json.JSONDecodeError as exc:
        raise BackendError(ErrorCode.CONFIG_ERROR, f"Config file '{path}' is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise BackendError(ErrorCode.CONFIG_ERROR, f"Config file '{path}' must contain an object")
    return data


def _build_global_settings(data: Mapping[str, Any], source: Optional[Path]) -> GlobalSettings:
    encoding = _require_encoding(data.get("encoding", GlobalSettings().encoding), "global.encoding", source)
    error_policy = _normalize_error_policy(
        data.get("error_policy", GlobalSettings().error_policy),
        source,
    )
    return GlobalSettings(encoding=encoding, error_policy=error_policy)


def _require_encoding(value: Any, field: str, source: Optional[Path]) -> str:
    encoding = _require_string(value, field, source)
    if encoding == "locale":
        return encoding
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise BackendError(
            ErrorCode.CONFIG_ERROR,
            f"Unknown {field} '{encoding}' in {_label(source)}",
        ) from exc
    return encoding


def _build_profile_settings(name: str, data: Mapping[str, Any], source: Optional[Path]) -> ProfileSettings:
    prefix = f"profiles.{name}"
    required_fields = ("description", "strategy")
    missing = [field for field in required_fields if field not in data]
    if missing:
        raise BackendError(
            ErrorCode.CONFIG_ERROR,
            f"Profile '{name}' missing fields {missing} in {_label(source)}",
        )

    description = _require_string(data.get("description"), f"{prefix}.description", source)
    strategy = _require_strategy(data.get("strategy"), f"{prefix}.strategy", source)
    defaults = ProfileSettings(description=description)
    chunk_size = _require_positive_int(
        data.get("chunk_size", defaults.chunk_size), f"{prefix}.chunk_size", source
    )
    progress_interval = _require_positive_int(
        data.get("progress_interval", defaults.progress_interval), f"{prefix}.progress_interval", source
    )

    return ProfileSettings(
        description=description,
        strategy=strategy,
        chunk_size=chunk_size,
        progress_interval=progress_interval,
    )


def _normalize_error_policy(value: Any, source: Optional[Path]) -> str:
    policy = _require_string(value, "global.error_policy", source).lower()
    if policy not in ALLOWED_ERROR_POLICIES:
        allowed = ", ".join(sorted(ALLOWED_ERROR_POLICIES))
        raise BackendError(
            ErrorCode.CONFIG_ERROR,
            f"Unsupported error_policy '{value}' in {_label(source)}. Allowed: {allowed}",
        )
    return "fail-fast" if policy in {"fail-fast", "strict"} else "replace"


def _require_strategy(value: Any, field: str, source: Optional[Path]) -> str:
    strategy = _require_string(value, field, source).lower()
    if strategy not in TOKENIZER_STRATEGIES:
        allowed = ", ".join(TOKENIZER_STRATEGIES)
        raise BackendError(
            ErrorCode.CONFIG_ERROR,
            f"Unsupported {field} '{value}' in {_label(source)}. Allowed: {allowed}",
        )
    return strategy


def _require_string(value: Any, field: str, source: Optional[Path]) -> str:
    if not isinstance(value, str):
        raise BackendError(ErrorCode.CONFIG_ERROR, f"{field} must be a string in {_label(source)}")
    text = value.strip()
    if not text:
        raise BackendError(ErrorCode.CONFIG_ERROR, f"{field} must be non-empty in {_label(source)}")
    return text


def _require_positive_int(value: Any, field: str, source: Optional[Path]) -> int:
    if isinstance(value, bool):
        raise BackendError(ErrorCode.CONFIG_ERROR, f"{field} must be an integer in {_label(source)}")
    try:
        num = int(value)
    except (TypeError, ValueError) as exc:
        raise BackendError(
            ErrorCode.CONFIG_ERROR,
            f"{field} must be an integer in {_label(source)}",
        ) from exc
    if num <= 0:
        raise BackendError(
            ErrorCode.CONFIG_ERROR,
            f"{field} must be greater than zero in {_label(source)}",
        )
    return num
