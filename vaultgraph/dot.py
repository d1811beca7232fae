"""Graphviz DOT serialization of a selected vault graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable
from urllib.parse import quote
from xml.sax.saxutils import escape, unescape

from .errors import ConfigError
from .models import Edge, GraphData

GRAPH_NAME = "vaultgraph"
DEFAULT_URL_PREFIX = "vaultgraph://open?file="

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}
_XML_UNENTITIES = {v: k for k, v in _XML_ENTITIES.items()}

StylePairs = tuple[tuple[str, str], ...]


def xml_escape(s: str) -> str:
    """Escape & < > " ' as XML entities."""
    return escape(s, _XML_ENTITIES)


def xml_unescape(s: str) -> str:
    return unescape(s, _XML_UNENTITIES)


def esc(s: str) -> str:
    return s.replace("\\", "\\\\").replace('"', '\\"')


def truncate_title(title: str, max_length: int | None) -> str:
    """Cut `title` to at most `max_length` characters."""
    if max_length is None or len(title) <= max_length:
        return title
    return title[:max_length]


def validate_style_pairs(pairs: Iterable, *, where: str) -> StylePairs:
    """Normalize style pairs to a tuple, raising ConfigError on any non-string."""
    if isinstance(pairs, dict):
        pairs = pairs.items()
    out: list[tuple[str, str]] = []
    try:
        items = list(pairs)
    except TypeError:
        raise ConfigError(f"{where} style must be a mapping or a list of pairs") from None
    for item in items:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ConfigError(f"{where} style entries must be (key, value) pairs, got {item!r}")
        key, value = item
        if not isinstance(key, str) or not isinstance(value, str):
            raise ConfigError(f"{where} style key and value must be strings, got {key!r}={value!r}")
        out.append((key, value))
    return tuple(out)


@dataclass(frozen=True)
class StyleConfig:
    """Ordered DOT attributes for the graph, nodes, plain edges, and citation edges."""

    graph: StylePairs = ()
    node: StylePairs = ()
    edge: StylePairs = ()
    cite_edge: StylePairs = ()

    def validated(self) -> "StyleConfig":
        return StyleConfig(
            graph=validate_style_pairs(self.graph, where="graph"),
            node=validate_style_pairs(self.node, where="node"),
            edge=validate_style_pairs(self.edge, where="edge"),
            cite_edge=validate_style_pairs(self.cite_edge, where="cite_edge"),
        )


def _attr_list(pairs: StylePairs) -> str:
    return ",".join(f'{k}="{esc(v)}"' for k, v in pairs)


def _edge_line(edge: Edge) -> str:
    return f'  "{esc(xml_escape(edge.source))}" -> "{esc(xml_escape(edge.target))}";'


def to_dot(
    data: GraphData,
    *,
    style: StyleConfig | None = None,
    max_title_length: int | None = 100,
    label_fallback: Callable[[str], str] | None = None,
    url_prefix: str = DEFAULT_URL_PREFIX,
) -> str:
    """Serialize nodes and edges to DOT text.

    Emission order is fixed: graph attributes, node defaults, edge defaults,
    nodes, plain edges, citation edge defaults, citation edges. The second
    edge default block only applies to the citation edges emitted after it.
    Edges with an endpoint outside `data.nodes` are skipped.
    """
    style = (style or StyleConfig()).validated()
    if max_title_length is not None and (
        isinstance(max_title_length, bool) or not isinstance(max_title_length, int) or max_title_length <= 0
    ):
        raise ConfigError(f"max_title_length must be a positive integer, got {max_title_length!r}")
    fallback = label_fallback or (lambda identifier: identifier)

    node_ids = data.identifiers

    lines = [f'digraph "{GRAPH_NAME}" {{']
    for key, value in style.graph:
        lines.append(f"{key}={value};")
    lines.append(f" node [{_attr_list(style.node)}];")
    lines.append(f" edge [{_attr_list(style.edge)}];")

    for note in data.nodes:
        title = note.title or fallback(note.identifier)
        attrs = (
            ("label", esc(truncate_title(title, max_title_length))),
            ("URL", url_prefix + quote(note.identifier, safe="")),
            ("tooltip", esc(xml_escape(title))),
        )
        attr_str = ",".join(f'{k}="{v}"' for k, v in attrs)
        lines.append(f'  "{esc(xml_escape(note.identifier))}" [{attr_str}];')

    for edge in data.edges:
        if edge.source in node_ids and edge.target in node_ids:
            lines.append(_edge_line(edge))

    lines.append(f" edge [{_attr_list(style.cite_edge)}];")
    for edge in data.cite_edges:
        if edge.source in node_ids and edge.target in node_ids:
            lines.append(_edge_line(edge))

    lines.append("}")
    return "\n".join(lines) + "\n"
