"""Graph command - select notes, serialize to DOT, render and view."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console

from ..config import load_config
from ..dot import to_dot
from ..errors import ConfigError, EmptyOrigin
from ..render import find_executable, render, view
from ..selector import fetch, resolve_exclusion, select_all, select_component
from ..vault.loader import load_vault

logger = logging.getLogger(__name__)


def run_graph(
    vault_path: Path,
    *,
    origin: str | None = None,
    component: bool = False,
    max_hops: int | None = None,
    exclude: list[str] | None = None,
    fmt: str | None = None,
    out: Path | None = None,
    show: bool = True,
    config_path: Path | None = None,
) -> int:
    """Build the vault graph (or one note's component) and write or display it.

    All configuration and precondition checks run before the vault is queried
    or any external program is started.
    """
    console = Console(stderr=True)

    config = load_config(vault_path, path=config_path)
    if exclude:
        config = config.with_exclude(list(exclude))
    exclude_matches = resolve_exclusion(config.exclude)

    wants_component = component or origin is not None or max_hops is not None
    if wants_component and not origin:
        raise EmptyOrigin("No origin note given. Pass a NOTE to graph its connected component.")
    if max_hops is not None and max_hops < 0:
        raise ConfigError(f"--max-hops must be zero or positive, got {max_hops}")

    fmt = fmt or config.filetype
    if fmt != "dot":
        find_executable(config.executable)

    store = load_vault(vault_path)

    if wants_component:
        identifier = store.resolve(origin)
        if identifier is None:
            raise EmptyOrigin(f"Note '{origin}' not found in vault {vault_path}")
        if config.exclude:
            logger.info("Exclude rule %r is not applied to the component of %s", config.exclude, origin)
        query = select_component(store, identifier, max_hops)
    else:
        query = select_all(exclude_matches)

    data = fetch(store, query)
    text = to_dot(
        data,
        style=config.style,
        max_title_length=config.title_limit,
        label_fallback=store.label_fallback,
        url_prefix=config.url_prefix,
    )

    if fmt == "dot":
        if out:
            out.write_text(text, encoding="utf-8")
            console.print(f"Wrote graph output to {out}", style="green")
        else:
            print(text, end="")
        return 0

    logger.debug("Rendering %d nodes with %s -T %s", len(data.nodes), config.executable, fmt)
    image = render(text, executable=config.executable, filetype=fmt, out=out)
    console.print(f"Wrote graph output to {image}", style="green")
    if show:
        view(image, config.viewer)
    return 0
