"""CLI entrypoint for vaultgraph."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .errors import ConfigError, EmptyOrigin, RenderFailed, ToolMissing


def _auto_detect_vault(start: Path) -> Path | None:
    """Find a ./content vault folder by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if p.is_dir() and p.name.lower() == "content":
            return p
        candidate = p / "content"
        if candidate.is_dir():
            return candidate
    return None


@click.group()
@click.version_option(__version__, prog_name="vaultgraph")
@click.option(
    "--vault",
    "-v",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Path to vault content directory (defaults to auto-detected ./content)",
)
@click.option("--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, vault: Path | None, verbose: bool) -> None:
    """vaultgraph - Graphviz views of a note vault's link graph."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )

    ctx.ensure_object(dict)
    if vault is None:
        detected = _auto_detect_vault(Path.cwd())
        if detected is None:
            raise click.ClickException("Vault not found. Pass --vault /path/to/content or run from inside the repo.")
        vault = detected

    if not vault.exists() or not vault.is_dir():
        raise click.BadParameter(f"Directory '{vault}' does not exist.", param_hint="--vault / -v")

    ctx.obj["vault"] = vault.resolve()


@cli.command()
@click.argument("note", required=False)
@click.option(
    "--component",
    "-c",
    is_flag=True,
    help="Only graph the connected component of NOTE",
)
@click.option(
    "--max-hops",
    type=click.IntRange(min=0),
    default=None,
    help="Limit the component to notes within N link hops of NOTE (0 = NOTE only)",
)
@click.option(
    "--exclude",
    "-x",
    multiple=True,
    metavar="PATTERN",
    help="Exclude notes whose path contains PATTERN (repeatable; overrides config; ignored when NOTE is given)",
)
@click.option(
    "--format",
    "fmt",
    type=str,
    default=None,
    help="Output format: 'dot' for DOT text, otherwise a Graphviz filetype (default from config: svg)",
)
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write output to a file")
@click.option("--no-view", is_flag=True, help="Build the graph without opening a viewer")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Graph config file (defaults to <vault>/meta/graph.yml)",
)
@click.pass_context
def graph(
    ctx: click.Context,
    note: str | None,
    component: bool,
    max_hops: int | None,
    exclude: tuple[str, ...],
    fmt: str | None,
    out: Path | None,
    no_view: bool,
    config_path: Path | None,
) -> None:
    """Render the vault link graph, or the component around NOTE.

    Without NOTE every note is drawn, minus excluded paths. With NOTE only
    notes connected to it are drawn; --max-hops bounds the distance.
    """
    from .commands.graph_cmd import run_graph

    try:
        exit_code = run_graph(
            ctx.obj["vault"],
            origin=note,
            component=component,
            max_hops=max_hops,
            exclude=list(exclude) or None,
            fmt=fmt,
            out=out,
            show=not no_view,
            config_path=config_path,
        )
    except (ConfigError, EmptyOrigin, ToolMissing, RenderFailed) as e:
        raise click.ClickException(str(e)) from e
    sys.exit(exit_code)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
