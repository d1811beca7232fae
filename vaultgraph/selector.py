"""Node selection: turn a selection criterion into nodes and edges from a store.

Two criteria are supported:

- all notes, minus those matched by the exclusion rule
- the connected component of an origin note, optionally bounded by a hop count

`max_hops` keeps three distinct meanings: ``None`` walks the full component,
``0`` selects the origin only, and ``N > 0`` stops after N hops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from .errors import ConfigError, EmptyOrigin
from .models import Edge, GraphData
from .vault.store import NoteStore

logger = logging.getLogger(__name__)

ExcludePredicate = Callable[[str], bool]


def _exclude_nothing(identifier: str) -> bool:
    return False


def resolve_exclusion(rule: str | list[str] | tuple[str, ...] | None) -> ExcludePredicate:
    """Build an exclusion predicate from a substring rule.

    `rule` may be None (exclude nothing), a single pattern, or a list of
    patterns (excluded if any pattern is a substring of the identifier).
    """
    if rule is None:
        return _exclude_nothing
    if isinstance(rule, str):
        pattern = rule
        return lambda identifier: pattern in identifier
    if isinstance(rule, (list, tuple)):
        if not all(isinstance(p, str) for p in rule):
            raise ConfigError(f"exclude patterns must be strings, got {list(rule)!r}")
        patterns = tuple(rule)
        if not patterns:
            return _exclude_nothing
        return lambda identifier: any(p in identifier for p in patterns)
    raise ConfigError(f"exclude must be a pattern or a list of patterns, got {type(rule).__name__}")


@dataclass(frozen=True)
class NodeQuery:
    """A node selection to run against a NoteStore."""

    exclude: ExcludePredicate = _exclude_nothing
    within: frozenset[str] | None = None  # None means every note in the store

    def matches(self, identifier: str) -> bool:
        if self.within is not None and identifier not in self.within:
            return False
        return not self.exclude(identifier)


def select_all(exclude: ExcludePredicate = _exclude_nothing) -> NodeQuery:
    """Select all notes not matched by `exclude`."""
    return NodeQuery(exclude=exclude)


def select_component(store: NoteStore, origin: str | None, max_hops: int | None = None) -> NodeQuery:
    """Select the notes connected to `origin`, within `max_hops` if given.

    The origin is always selected, even when it has no links.
    """
    if not origin:
        raise EmptyOrigin("No origin note to build a connected component from.")
    if max_hops is not None and (isinstance(max_hops, bool) or not isinstance(max_hops, int) or max_hops < 0):
        raise ConfigError(f"max_hops must be a non-negative integer, got {max_hops!r}")

    reachable = store.reachable_from(origin, max_hops)
    if not reachable:
        reachable = {origin}
    logger.debug("Component of %s (max_hops=%s): %d notes", origin, max_hops, len(reachable))
    return NodeQuery(within=frozenset(reachable))


def _distinct(edges: Iterable[Edge], selected: set[str]) -> tuple[Edge, ...]:
    out: dict[tuple[str, str], Edge] = {}
    for edge in edges:
        if edge.source in selected and edge.target in selected:
            out.setdefault((edge.source, edge.target), edge)
    return tuple(out.values())


def fetch(store: NoteStore, query: NodeQuery) -> GraphData:
    """Run `query` and collect the edges between the selected notes.

    The selected identifier set is computed once and restricts both edge
    queries, so no returned edge points outside the node set.
    """
    nodes = tuple(store.query_nodes(query))
    selected = {note.identifier for note in nodes}

    edges = _distinct(store.query_edges(selected), selected)
    cite_edges = _distinct(store.query_cite_edges(selected), selected)

    logger.debug("Selected %d nodes, %d edges, %d citation edges", len(nodes), len(edges), len(cite_edges))
    return GraphData(nodes=nodes, edges=edges, cite_edges=cite_edges)
