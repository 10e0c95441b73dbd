"""Configuration model and loaders for WhatExec.

Responsibilities:
- Define resolver and scanner settings as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.
- Layer sources deterministically: YAML file values over environment values over defaults.

Key types:
- `WhatExecConfig`: normalized settings used to assemble resolvers and locators.
- `ConfigLoader`: static construction helpers for `WhatExecConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .locators.scanner import DEFAULT_MAX_WORKERS
from .models.datatypes import SearchOption
from .parsing import (
    normalize_optional_string,
    parse_int,
    parse_permissive_boolean,
    parse_positive_number,
)
from .resolvers.cached_resolver import DEFAULT_CACHE_TTL_SECONDS


@dataclass(frozen=True, slots=True)
class WhatExecConfig:
    """Settings for one resolver/locator assembly.

    Attributes:
        use_caching: Whether `PATH` lookups go through the TTL-cached resolver.
        path_cache_ttl_seconds: Lifetime of the cached `PATH` directory list.
        extension_cache_ttl_seconds: Lifetime of the cached extension list.
        fallback_search: Search option used by the system-wide fallback scan.
        max_workers: Worker threads used to fan out directory scans.
        max_depth: Optional recursion cap below each scan root.
        follow_symlinks: Whether directory symlinks are descended into.
        priority_locations: Extra path prefixes mapped to priority scores.
    """

    use_caching: bool = False
    path_cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    extension_cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    fallback_search: SearchOption = SearchOption.ALL_DIRECTORIES
    max_workers: int = DEFAULT_MAX_WORKERS
    max_depth: int | None = None
    follow_symlinks: bool = False
    priority_locations: Mapping[str, int] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate settings before any resolver is assembled."""

        if self.path_cache_ttl_seconds <= 0:
            raise ValueError("`path_cache_ttl_seconds` must be a positive number.")
        if self.extension_cache_ttl_seconds <= 0:
            raise ValueError("`extension_cache_ttl_seconds` must be a positive number.")
        if self.max_workers <= 0:
            raise ValueError("`max_workers` must be a positive integer.")
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("`max_depth` must be a non-negative integer.")
        if not isinstance(self.fallback_search, SearchOption):
            raise ValueError("`fallback_search` must be `top` or `all`.")
        for location, score in self.priority_locations.items():
            if not location.strip():
                raise ValueError("`priority_locations` contains a blank path.")
            if isinstance(score, bool) or not isinstance(score, int):
                raise ValueError(
                    f"`priority_locations` score for `{location}` must be an integer."
                )

    def with_overrides(self, **overrides: object) -> WhatExecConfig:
        """Return a validated copy with non-`None` overrides applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        updated = replace(self, **changes)
        updated.validate()
        return updated


class ConfigLoader:
    """Factory methods for creating `WhatExecConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "use_caching",
            "path_cache_ttl_seconds",
            "extension_cache_ttl_seconds",
            "fallback_search",
            "max_workers",
            "max_depth",
            "follow_symlinks",
            "priority_locations",
        }
    )

    @staticmethod
    def load(
        path: Path | None = None, env: Mapping[str, str] | None = None
    ) -> WhatExecConfig:
        """Create a config from the environment, then layer an optional YAML file on top."""

        base = ConfigLoader.from_env(env)
        if path is None:
            return base
        return ConfigLoader.from_yaml(path, base=base)

    @staticmethod
    def from_yaml(path: Path, base: WhatExecConfig | None = None) -> WhatExecConfig:
        """Create a validated config from a YAML file.

        Keys absent from the file keep the value from `base` (defaults when omitted).
        """

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)

        return ConfigLoader._build_config_from_mapping(
            payload, source_label=f"YAML `{path}`", base=base or WhatExecConfig()
        )

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> WhatExecConfig:
        """Create a validated config from `WHATEXEC_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        defaults = WhatExecConfig()

        use_caching = ConfigLoader._optional_env_boolean(env_map, "WHATEXEC_USE_CACHING")
        path_ttl = ConfigLoader._optional_env_positive_number(
            env_map, "WHATEXEC_CACHE_TTL_SECONDS"
        )
        extension_ttl = ConfigLoader._optional_env_positive_number(
            env_map, "WHATEXEC_EXTENSION_CACHE_TTL_SECONDS"
        )
        fallback = ConfigLoader._optional_env_string(env_map, "WHATEXEC_FALLBACK_SEARCH")
        max_workers = ConfigLoader._optional_env_int(env_map, "WHATEXEC_MAX_WORKERS", minimum=1)
        max_depth = ConfigLoader._optional_env_int(env_map, "WHATEXEC_MAX_DEPTH", minimum=0)
        follow_symlinks = ConfigLoader._optional_env_boolean(env_map, "WHATEXEC_FOLLOW_SYMLINKS")

        config = WhatExecConfig(
            use_caching=defaults.use_caching if use_caching is None else use_caching,
            path_cache_ttl_seconds=path_ttl or defaults.path_cache_ttl_seconds,
            extension_cache_ttl_seconds=extension_ttl or defaults.extension_cache_ttl_seconds,
            fallback_search=ConfigLoader._parse_search_option(
                fallback, "Environment variable `WHATEXEC_FALLBACK_SEARCH`"
            )
            if fallback is not None
            else defaults.fallback_search,
            max_workers=max_workers or defaults.max_workers,
            max_depth=max_depth,
            follow_symlinks=(
                defaults.follow_symlinks if follow_symlinks is None else follow_symlinks
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str, base: WhatExecConfig
    ) -> WhatExecConfig:
        """Build a validated config from a mapping, falling back to `base` per key."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        use_caching = ConfigLoader._optional_boolean(
            payload, "use_caching", source_label, default=base.use_caching
        )
        path_ttl = ConfigLoader._optional_positive_number(
            payload,
            "path_cache_ttl_seconds",
            source_label,
            default=base.path_cache_ttl_seconds,
        )
        extension_ttl = ConfigLoader._optional_positive_number(
            payload,
            "extension_cache_ttl_seconds",
            source_label,
            default=base.extension_cache_ttl_seconds,
        )
        fallback_search = base.fallback_search
        fallback_text = ConfigLoader._optional_non_empty_string(payload, "fallback_search")
        if fallback_text is not None:
            fallback_search = ConfigLoader._parse_search_option(
                fallback_text, f"{source_label} field `fallback_search`"
            )
        max_workers = ConfigLoader._optional_int(
            payload, "max_workers", source_label, default=base.max_workers, minimum=1
        )
        max_depth = base.max_depth
        if payload.get("max_depth") is not None:
            max_depth = ConfigLoader._optional_int(
                payload, "max_depth", source_label, default=0, minimum=0
            )
        follow_symlinks = ConfigLoader._optional_boolean(
            payload, "follow_symlinks", source_label, default=base.follow_symlinks
        )
        priority_locations = dict(base.priority_locations)
        priority_locations.update(
            ConfigLoader._optional_score_map(payload, "priority_locations", source_label)
        )

        config = WhatExecConfig(
            use_caching=use_caching,
            path_cache_ttl_seconds=path_ttl,
            extension_cache_ttl_seconds=extension_ttl,
            fallback_search=fallback_search,
            max_workers=max_workers,
            max_depth=max_depth,
            follow_symlinks=follow_symlinks,
            priority_locations=priority_locations,
        )
        config.validate()
        return config

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Reject keys the config model does not know."""

        unknown = sorted(str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

    @staticmethod
    def _parse_search_option(value: str, source_label: str) -> SearchOption:
        try:
            return SearchOption.parse(value)
        except ValueError as exc:
            raise ValueError(f"{source_label} must be `top` or `all`, got `{value}`.") from exc

    @staticmethod
    def _optional_non_empty_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if key not in payload:
            return None
        return normalize_optional_string(payload[key])

    @staticmethod
    def _optional_positive_number(
        payload: Mapping[str, Any], key: str, source_label: str, default: float
    ) -> float:
        """Read and validate a positive numeric payload field."""

        if key not in payload or payload[key] is None:
            return default
        try:
            return parse_positive_number(payload[key], key)
        except ValueError as exc:
            raise ValueError(f"{source_label} field `{key}` must be a positive number.") from exc

    @staticmethod
    def _optional_int(
        payload: Mapping[str, Any],
        key: str,
        source_label: str,
        default: int,
        minimum: int,
    ) -> int:
        """Read and validate an integer payload field with a lower bound."""

        if key not in payload or payload[key] is None:
            return default
        try:
            return parse_int(payload[key], key, minimum=minimum)
        except ValueError as exc:
            raise ValueError(
                f"{source_label} field `{key}` must be an integer >= {minimum}."
            ) from exc

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _optional_score_map(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> dict[str, int]:
        """Read an optional mapping of non-empty path prefixes to integer scores."""

        if key not in payload:
            return {}

        raw = payload[key]
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `{key}` must be a mapping/object.")

        normalized: dict[str, int] = {}
        for raw_location, raw_score in raw.items():
            location = normalize_optional_string(raw_location)
            if location is None:
                raise ValueError(f"{source_label} field `{key}` contains a blank path.")
            try:
                normalized[location] = parse_int(raw_score, key, minimum=0)
            except ValueError as exc:
                raise ValueError(
                    f"{source_label} field `{key}` needs a non-negative integer score "
                    f"for `{location}`."
                ) from exc
        return normalized

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))

    @staticmethod
    def _optional_env_positive_number(env: Mapping[str, str], key: str) -> float | None:
        """Read an optional positive number from environment mapping."""

        raw_value = ConfigLoader._optional_env_string(env, key)
        if raw_value is None:
            return None
        try:
            return parse_positive_number(raw_value, key)
        except ValueError as exc:
            raise ValueError(f"Environment variable `{key}` must be a positive number.") from exc

    @staticmethod
    def _optional_env_int(env: Mapping[str, str], key: str, minimum: int) -> int | None:
        """Read an optional bounded integer from environment mapping."""

        raw_value = ConfigLoader._optional_env_string(env, key)
        if raw_value is None:
            return None
        try:
            return parse_int(raw_value, key, minimum=minimum)
        except ValueError as exc:
            raise ValueError(
                f"Environment variable `{key}` must be an integer >= {minimum}."
            ) from exc

    @staticmethod
    def _optional_env_boolean(env: Mapping[str, str], key: str) -> bool | None:
        """Read an optional boolean from environment mapping."""

        if key not in env:
            return None
        parsed = parse_permissive_boolean(env.get(key))
        if parsed is None:
            raise ValueError(
                f"Environment variable `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed
