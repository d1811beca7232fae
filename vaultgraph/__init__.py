"""vaultgraph - render the link graph of a note vault as Graphviz DOT."""

__version__ = "0.1.0"
