"""Graph configuration loaded from the vault's meta/graph.yml."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from .dot import DEFAULT_URL_PREFIX, StyleConfig, validate_style_pairs
from .errors import ConfigError
from .selector import resolve_exclusion

SHORTEN_MODES = ("truncate", None)

_STR_KEYS = ("executable", "filetype", "viewer", "url_prefix")


@dataclass(frozen=True)
class GraphConfig:
    executable: str = "dot"
    filetype: str = "svg"
    viewer: str | None = None
    max_title_length: int = 100
    shorten_titles: str | None = "truncate"
    exclude: str | tuple[str, ...] | None = None
    url_prefix: str = DEFAULT_URL_PREFIX
    style: StyleConfig = field(default_factory=lambda: StyleConfig(cite_edge=(("color", "red"),)))

    @property
    def title_limit(self) -> int | None:
        return self.max_title_length if self.shorten_titles == "truncate" else None

    def with_exclude(self, exclude: str | list[str] | tuple[str, ...] | None) -> GraphConfig:
        resolve_exclusion(exclude)
        if isinstance(exclude, list):
            exclude = tuple(exclude)
        return replace(self, exclude=exclude)


def default_config_path(vault_path: Path) -> Path:
    return (vault_path / "meta" / "graph.yml").resolve()


def load_config(vault_path: Path | None = None, *, path: Path | None = None) -> GraphConfig:
    """Load graph settings from `path` or `<vault>/meta/graph.yml`.

    A missing default file yields defaults; a missing explicit file is an error.
    """
    if path is None:
        if vault_path is None:
            return GraphConfig()
        path = default_config_path(vault_path)
        if not path.exists():
            return GraphConfig()
    elif not path.exists():
        raise ConfigError(f"Graph config not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    section = data.get("graph", data)
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: 'graph' must be a mapping")
    return config_from_dict(section)


def config_from_dict(raw: dict[str, Any]) -> GraphConfig:
    """Validate a raw settings mapping into a GraphConfig."""
    config = GraphConfig()
    updates: dict[str, Any] = {}

    for key in _STR_KEYS:
        if key not in raw or raw[key] is None:
            continue
        value = raw[key]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"'{key}' must be a non-empty string, got {value!r}")
        updates[key] = value.strip()

    if "max_title_length" in raw:
        length = raw["max_title_length"]
        if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
            raise ConfigError(f"'max_title_length' must be a positive integer, got {length!r}")
        updates["max_title_length"] = length

    if "shorten_titles" in raw:
        mode = raw["shorten_titles"]
        if mode not in SHORTEN_MODES:
            raise ConfigError(f"'shorten_titles' must be one of {SHORTEN_MODES}, got {mode!r}")
        updates["shorten_titles"] = mode

    if "exclude" in raw:
        config = config.with_exclude(raw["exclude"])

    style_raw = raw.get("style")
    if style_raw is not None:
        if not isinstance(style_raw, dict):
            raise ConfigError("'style' must be a mapping with graph/node/edge/cite_edge entries")
        unknown = set(style_raw) - {"graph", "node", "edge", "cite_edge"}
        if unknown:
            raise ConfigError(f"Unknown style sections: {sorted(map(str, unknown))}")
        base = config.style
        updates["style"] = StyleConfig(
            graph=_pairs(style_raw, "graph", base.graph),
            node=_pairs(style_raw, "node", base.node),
            edge=_pairs(style_raw, "edge", base.edge),
            cite_edge=_pairs(style_raw, "cite_edge", base.cite_edge),
        )

    return replace(config, **updates)


def _pairs(style_raw: dict, section: str, default: tuple) -> tuple:
    if section not in style_raw:
        return default
    value = style_raw[section]
    if value is None:
        return ()
    return validate_style_pairs(value, where=section)
