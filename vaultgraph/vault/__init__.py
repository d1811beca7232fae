"""Vault loading and note store."""

from .loader import load_vault
from .parser import extract_links, extract_title, split_citations
from .store import NoteStore, VaultStore

__all__ = [
    "load_vault",
    "extract_links",
    "extract_title",
    "split_citations",
    "NoteStore",
    "VaultStore",
]
