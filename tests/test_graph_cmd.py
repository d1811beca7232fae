import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from vaultgraph import render as render_mod
from vaultgraph.cli import cli
from vaultgraph.commands import graph_cmd
from vaultgraph.commands.graph_cmd import run_graph
from vaultgraph.errors import ConfigError, EmptyOrigin, ToolMissing


def _edges(dot: str) -> list[str]:
    return [line.strip() for line in dot.splitlines() if "->" in line]


def test_run_graph_writes_whole_vault_dot(vault_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "g.dot"
    assert run_graph(vault_path, fmt="dot", out=out) == 0

    dot = out.read_text(encoding="utf-8")
    assert dot.startswith('digraph "vaultgraph" {\n')
    assert 'label="Alpha"' in dot
    assert 'label="notes/c"' in dot
    assert ' edge [color="red"];' in dot
    assert dot.index(' edge [color="red"];') < dot.index("literate.md\" -> ")
    assert len(_edges(dot)) == 5


def test_run_graph_applies_exclude_from_config(vault_path: Path, tmp_path: Path) -> None:
    (vault_path / "meta").mkdir()
    (vault_path / "meta" / "graph.yml").write_text("graph:\n  exclude: draft\n", encoding="utf-8")
    out = tmp_path / "g.dot"
    run_graph(vault_path, fmt="dot", out=out)
    assert "draft-ideas" not in out.read_text(encoding="utf-8")


def test_run_graph_component_with_hops(vault_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "g.dot"
    run_graph(vault_path, origin="a", max_hops=0, fmt="dot", out=out)
    dot = out.read_text(encoding="utf-8")
    assert 'label="Alpha"' in dot
    assert 'label="Beta"' not in dot
    assert _edges(dot) == []


def test_run_graph_component_requires_origin(vault_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(graph_cmd, "load_vault", lambda path: pytest.fail("vault should not be queried"))
    with pytest.raises(EmptyOrigin):
        run_graph(vault_path, component=True, fmt="dot")
    with pytest.raises(EmptyOrigin):
        run_graph(vault_path, max_hops=2, fmt="dot")


def test_run_graph_unknown_origin(vault_path: Path) -> None:
    with pytest.raises(EmptyOrigin, match="nowhere"):
        run_graph(vault_path, origin="nowhere", fmt="dot")


def test_run_graph_checks_config_before_querying(vault_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (vault_path / "meta").mkdir()
    (vault_path / "meta" / "graph.yml").write_text("graph:\n  exclude: 12\n", encoding="utf-8")
    monkeypatch.setattr(graph_cmd, "load_vault", lambda path: pytest.fail("vault should not be queried"))
    with pytest.raises(ConfigError):
        run_graph(vault_path, fmt="dot")


def test_run_graph_missing_renderer_fails_before_querying(vault_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(render_mod.shutil, "which", lambda name: None)
    monkeypatch.setattr(graph_cmd, "load_vault", lambda path: pytest.fail("vault should not be queried"))
    with pytest.raises(ToolMissing):
        run_graph(vault_path, fmt="svg")


def test_run_graph_renders_and_views(vault_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    rendered = {}
    viewed = []

    def fake_render(text, *, executable, filetype, out):
        rendered.update(text=text, executable=executable, filetype=filetype)
        return tmp_path / "g.svg"

    monkeypatch.setattr(render_mod.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(graph_cmd, "render", fake_render)
    monkeypatch.setattr(graph_cmd, "view", lambda path, viewer: viewed.append((path, viewer)))

    assert run_graph(vault_path) == 0
    assert rendered["executable"] == "dot"
    assert rendered["filetype"] == "svg"
    assert rendered["text"].startswith('digraph "vaultgraph"')
    assert viewed == [(tmp_path / "g.svg", None)]

    viewed.clear()
    run_graph(vault_path, show=False)
    assert viewed == []


def test_cli_graph_prints_dot(vault_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--vault", str(vault_path), "graph", "b", "--max-hops", "1", "--format", "dot"])
    assert result.exit_code == 0, result.output
    assert 'label="Beta"' in result.output
    assert 'label="Alpha"' in result.output
    assert 'label="Draft"' not in result.output


def test_cli_graph_exclude_option(vault_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--vault", str(vault_path), "graph", "-x", "draft", "-x", "lonely", "--format", "dot"])
    assert result.exit_code == 0, result.output
    assert "draft-ideas" not in result.output
    assert "lonely" not in result.output


def test_cli_graph_reports_errors(vault_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--vault", str(vault_path), "graph", "--component", "--format", "dot"])
    assert result.exit_code == 1
    assert "No origin note" in result.output

    result = runner.invoke(cli, ["--vault", str(vault_path), "graph", "a", "--max-hops", "-1"])
    assert result.exit_code == 2


def test_run_graph_component_logs_dropped_exclude(
    vault_path: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="vaultgraph.commands.graph_cmd")
    out = tmp_path / "g.dot"
    run_graph(vault_path, origin="a", exclude=["draft"], fmt="dot", out=out)

    assert "draft-ideas" in out.read_text(encoding="utf-8")
    assert "not applied to the component" in caplog.text
