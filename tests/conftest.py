"""Pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from vaultgraph.models import Edge, Note
from vaultgraph.vault.loader import load_vault
from vaultgraph.vault.store import VaultStore


def write_note(
    path: Path,
    *,
    title: str | None = None,
    links: list[str] | None = None,
    refs: list[str] | None = None,
    aliases: list[str] | None = None,
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fm: list[str] = []
    if refs:
        fm.append("refs:")
        fm.extend(f"  - {r}" for r in refs)
    if aliases:
        fm.append("aliases:")
        fm.extend(f"  - {a}" for a in aliases)
    if fm:
        fm = ["---", *fm, "---", ""]
    body = [f"# {title}"] if title else []
    body.append("")
    body.extend(f"- [[{l}]]" for l in links or [])
    path.write_text("\n".join(fm + body + [""]), encoding="utf-8")


class FakeStore:
    """In-memory NoteStore with explicit rows, for selector tests."""

    def __init__(
        self,
        notes: list[Note],
        edges: list[tuple[str, str]] | None = None,
        cite_edges: list[tuple[str, str]] | None = None,
        components: dict[str, set[str]] | None = None,
    ):
        self.notes = notes
        self.edges = [Edge(s, t, "plain") for s, t in edges or []]
        self.cite_edges = [Edge(s, t, "citation") for s, t in cite_edges or []]
        self.components = components or {}
        self.reachability_calls: list[tuple[str, int | None]] = []

    def query_nodes(self, selection) -> list[Note]:
        return [n for n in self.notes if selection.matches(n.identifier)]

    def query_edges(self, selected: set[str]) -> list[Edge]:
        return list(self.edges)

    def query_cite_edges(self, selected: set[str]) -> list[Edge]:
        return list(self.cite_edges)

    def reachable_from(self, origin: str, max_hops: int | None = None) -> set[str]:
        self.reachability_calls.append((origin, max_hops))
        if max_hops == 0:
            return {origin} if origin in self.components else set()
        return set(self.components.get(origin, set()))

    def label_fallback(self, identifier: str) -> str:
        return identifier.rsplit(".", 1)[0]


@pytest.fixture
def vault_path(tmp_path: Path) -> Path:
    """A small vault: a chain a -> b -> c, an isolated note, a draft, and a citation."""
    vault = tmp_path / "content"
    write_note(vault / "a.md", title="Alpha", links=["b", "missing"])
    write_note(vault / "b.md", title="Beta", links=["c", "cite:knuth84"])
    write_note(vault / "notes" / "c.md", links=["b"])
    write_note(vault / "lonely.md", title="Lonely")
    write_note(vault / "draft-ideas.md", title="Draft", links=["a"])
    write_note(vault / "literate.md", title="Literate Programming", refs=["knuth84"])
    return vault


@pytest.fixture
def vault_store(vault_path: Path) -> VaultStore:
    return load_vault(vault_path)
