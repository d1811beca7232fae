"""Note store: the queryable index the graph selector runs against."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ..models import LINK_CITE, LINK_FILE, Edge, Link, Note

if TYPE_CHECKING:
    from ..selector import NodeQuery


class NoteStore(Protocol):
    """Read-only query surface consumed by the selector."""

    def query_nodes(self, selection: NodeQuery) -> list[Note]: ...

    def query_edges(self, selected: set[str]) -> list[Edge]: ...

    def query_cite_edges(self, selected: set[str]) -> list[Edge]: ...

    def reachable_from(self, origin: str, max_hops: int | None = None) -> set[str]: ...

    def label_fallback(self, identifier: str) -> str: ...


@dataclass
class VaultStore:
    """In-memory index of notes, links, and reference keys for one vault.

    Default ordering: notes by identifier, links in insertion order.
    """

    path: Path
    notes: dict[str, Note] = field(default_factory=dict)  # identifier -> Note
    links: list[Link] = field(default_factory=list)
    refs: dict[str, str] = field(default_factory=dict)  # reference key -> owning identifier
    names: dict[str, str] = field(default_factory=dict)  # lowercase name/alias -> identifier

    def add_note(self, note: Note, *, names: list[str] | None = None, refs: list[str] | None = None) -> None:
        self.notes[note.identifier] = note
        for name in names or []:
            self.names.setdefault(name.lower(), note.identifier)
        for key in refs or []:
            self.refs.setdefault(key, note.identifier)

    def add_link(self, source: str, target: str, kind: str = LINK_FILE) -> None:
        self.links.append(Link(source=source, target=target, kind=kind))

    def resolve(self, name: str) -> str | None:
        """Resolve a link target, alias, or path to a note identifier."""
        name = name.strip()
        if not name:
            return None
        if name in self.notes:
            return name
        candidate = Path(name)
        if not candidate.is_absolute():
            candidate = self.path / candidate
        resolved = candidate.resolve().as_posix()
        if resolved in self.notes:
            return resolved
        key = name.lower()
        if key.endswith(".md"):
            key = key[: -len(".md")]
        return self.names.get(key)

    def query_nodes(self, selection: NodeQuery) -> list[Note]:
        return [self.notes[ident] for ident in sorted(self.notes) if selection.matches(ident)]

    def query_edges(self, selected: set[str]) -> list[Edge]:
        out: dict[tuple[str, str], Edge] = {}
        for link in self.links:
            if link.kind != LINK_FILE:
                continue
            if link.source in selected and link.target in selected:
                out.setdefault((link.source, link.target), Edge(link.source, link.target, "plain"))
        return list(out.values())

    def query_cite_edges(self, selected: set[str]) -> list[Edge]:
        """Edges from the note owning a reference to each note citing it."""
        out: dict[tuple[str, str], Edge] = {}
        for link in self.links:
            if link.kind != LINK_CITE:
                continue
            owner = self.refs.get(link.target)
            if owner in selected and link.source in selected:
                out.setdefault((owner, link.source), Edge(owner, link.source, "citation"))
        return list(out.values())

    def neighbors_undirected(self) -> dict[str, set[str]]:
        adjacency: dict[str, set[str]] = {}
        for link in self.links:
            if link.kind != LINK_FILE:
                continue
            adjacency.setdefault(link.source, set()).add(link.target)
            adjacency.setdefault(link.target, set()).add(link.source)
        return adjacency

    def reachable_from(self, origin: str, max_hops: int | None = None) -> set[str]:
        """Notes connected to `origin` through links in either direction.

        `max_hops=None` walks the whole connected component. Returns an empty
        set when `origin` has no links at all.
        """
        adjacency = self.neighbors_undirected()
        if origin not in adjacency:
            return set()

        visited = {origin}
        frontier = [origin]
        hops = 0
        while frontier and (max_hops is None or hops < max_hops):
            next_frontier = []
            for current in frontier:
                for neighbor in sorted(adjacency.get(current, set())):
                    if neighbor not in visited:
                        visited.add(neighbor)
                        next_frontier.append(neighbor)
            frontier = next_frontier
            hops += 1

        return visited

    def label_fallback(self, identifier: str) -> str:
        """Vault-relative path without extension."""
        path = Path(identifier)
        try:
            rel = path.relative_to(self.path.resolve())
        except ValueError:
            rel = Path(path.name)
        return rel.with_suffix("").as_posix()
