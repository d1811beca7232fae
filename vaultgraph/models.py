"""Data models for graph nodes and edges."""

from dataclasses import dataclass
from typing import Literal

EdgeKind = Literal["plain", "citation"]

# Link kinds as stored by the vault
LINK_FILE = "file"
LINK_CITE = "cite"


@dataclass(frozen=True)
class Note:
    """A note as seen by the graph: canonical path plus optional title."""

    identifier: str  # canonical file path, unique per render
    title: str | None = None


@dataclass(frozen=True)
class Link:
    """A raw link recorded in the store.

    For citation links `target` is a reference key rather than a note identifier.
    """

    source: str
    target: str
    kind: str = LINK_FILE


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    kind: EdgeKind = "plain"


@dataclass(frozen=True)
class GraphData:
    """Snapshot of one render request: nodes, plain edges, citation edges."""

    nodes: tuple[Note, ...] = ()
    edges: tuple[Edge, ...] = ()
    cite_edges: tuple[Edge, ...] = ()

    @property
    def identifiers(self) -> set[str]:
        return {n.identifier for n in self.nodes}
