"""Unit tests for YAML/environment configuration loader behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

from whatexec.config import ConfigLoader, WhatExecConfig
from whatexec.models.datatypes import SearchOption


def test_config_loader_from_yaml_loads_valid_config_and_normalizes_values(
    tmp_path: Path,
) -> None:
    """YAML loader should parse valid payloads and normalize typed/blank values."""

    config_path = tmp_path / "whatexec.yml"
    config_path.write_text(
        """
use_caching: " yes "
path_cache_ttl_seconds: 120
extension_cache_ttl_seconds: " 30.5 "
fallback_search: " TOP "
max_workers: "4"
max_depth: 6
follow_symlinks: false
priority_locations:
  " /srv/tools ": 0
  /opt/legacy: "7"
""".strip(),
        encoding="utf-8",
    )

    config = ConfigLoader.from_yaml(config_path)

    assert config.use_caching is True
    assert config.path_cache_ttl_seconds == 120.0
    assert config.extension_cache_ttl_seconds == 30.5
    assert config.fallback_search is SearchOption.TOP_DIRECTORY_ONLY
    assert config.max_workers == 4
    assert config.max_depth == 6
    assert config.follow_symlinks is False
    assert config.priority_locations == {"/srv/tools": 0, "/opt/legacy": 7}


def test_config_loader_from_yaml_empty_file_uses_defaults(tmp_path: Path) -> None:
    """An empty YAML document should produce default settings."""

    config_path = tmp_path / "empty.yml"
    config_path.write_text("", encoding="utf-8")

    assert ConfigLoader.from_yaml(config_path) == WhatExecConfig()


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ("- a\n- b\n", "top-level mapping"),
        ("unknown_key: 1\n", "unsupported key"),
        ("use_caching: maybe\n", "must be a boolean"),
        ("path_cache_ttl_seconds: 0\n", "positive number"),
        ("max_workers: 0\n", "integer >= 1"),
        ("fallback_search: sideways\n", "`top` or `all`"),
        ("priority_locations: [1, 2]\n", "mapping/object"),
        ("use_caching: [unclosed\n", "could not be parsed"),
    ],
)
def test_config_loader_from_yaml_rejects_invalid_payloads(
    tmp_path: Path, payload: str, message: str
) -> None:
    """Invalid YAML structure or values should fail with a descriptive `ValueError`."""

    config_path = tmp_path / "invalid.yml"
    config_path.write_text(payload, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_from_env_reads_whatexec_variables() -> None:
    """Environment loader should parse every supported `WHATEXEC_*` variable."""

    config = ConfigLoader.from_env(
        {
            "WHATEXEC_USE_CACHING": "on",
            "WHATEXEC_CACHE_TTL_SECONDS": "90",
            "WHATEXEC_EXTENSION_CACHE_TTL_SECONDS": "45",
            "WHATEXEC_FALLBACK_SEARCH": "top",
            "WHATEXEC_MAX_WORKERS": "2",
            "WHATEXEC_MAX_DEPTH": "0",
            "WHATEXEC_FOLLOW_SYMLINKS": "1",
            "UNRELATED": "ignored",
        }
    )

    assert config == WhatExecConfig(
        use_caching=True,
        path_cache_ttl_seconds=90.0,
        extension_cache_ttl_seconds=45.0,
        fallback_search=SearchOption.TOP_DIRECTORY_ONLY,
        max_workers=2,
        max_depth=0,
        follow_symlinks=True,
    )


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("WHATEXEC_USE_CACHING", "perhaps"),
        ("WHATEXEC_CACHE_TTL_SECONDS", "-5"),
        ("WHATEXEC_MAX_WORKERS", "many"),
        ("WHATEXEC_FALLBACK_SEARCH", "deep"),
    ],
)
def test_config_loader_from_env_rejects_invalid_values(key: str, value: str) -> None:
    """Invalid environment values should name the offending variable."""

    with pytest.raises(ValueError, match=key):
        ConfigLoader.from_env({key: value})


def test_config_loader_load_layers_yaml_over_environment(tmp_path: Path) -> None:
    """Keys present in YAML win; absent keys keep environment values."""

    config_path = tmp_path / "whatexec.yml"
    config_path.write_text("max_workers: 3\n", encoding="utf-8")

    config = ConfigLoader.load(
        config_path,
        env={"WHATEXEC_MAX_WORKERS": "16", "WHATEXEC_USE_CACHING": "true"},
    )

    assert config.max_workers == 3
    assert config.use_caching is True


def test_with_overrides_ignores_none_and_validates() -> None:
    """CLI overrides apply only when given and are validated like loaded values."""

    base = WhatExecConfig()

    assert base.with_overrides(use_caching=None) is base
    assert base.with_overrides(use_caching=True).use_caching is True
    with pytest.raises(ValueError, match="path_cache_ttl_seconds"):
        base.with_overrides(path_cache_ttl_seconds=0.0)
