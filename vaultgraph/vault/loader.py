"""Vault loading: markdown files into a queryable note store."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import frontmatter

from ..models import LINK_CITE, LINK_FILE, Note
from .parser import as_str_list, extract_links, extract_title, split_citations
from .store import VaultStore

logger = logging.getLogger(__name__)


@dataclass
class ParsedNote:
    """A note file after frontmatter parsing, before link resolution."""

    path: Path
    identifier: str
    title: str | None
    aliases: list[str] = field(default_factory=list)
    refs: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)  # unresolved note targets
    cites: list[str] = field(default_factory=list)  # reference keys


def load_note(path: Path) -> ParsedNote:
    """Load a single markdown file and parse its frontmatter."""
    post = frontmatter.load(path)

    content = post.content
    fm = post.metadata

    targets, cites = split_citations(extract_links(content))

    return ParsedNote(
        path=path,
        identifier=path.resolve().as_posix(),
        title=extract_title(content, fm),
        aliases=as_str_list(fm.get("aliases")),
        refs=as_str_list(fm.get("refs")),
        links=targets,
        cites=cites,
    )


def _is_hidden(path: Path, vault_path: Path) -> bool:
    try:
        parts = path.relative_to(vault_path).parts
    except ValueError:
        parts = path.parts
    return any(part.startswith(".") for part in parts)


def load_vault(vault_path: Path) -> VaultStore:
    """Load all markdown files from the vault into a VaultStore.

    Args:
        vault_path: Path to the vault content directory

    Returns:
        VaultStore with notes, resolved links, and citation references
    """
    vault_path = vault_path.resolve()
    store = VaultStore(path=vault_path)

    parsed: list[ParsedNote] = []
    for md_file in sorted(vault_path.rglob("*.md")):
        if _is_hidden(md_file, vault_path):
            continue
        try:
            parsed.append(load_note(md_file))
        except Exception as e:
            # Log error but continue loading
            logger.warning("Failed to load %s: %s", md_file, e)

    parsed.sort(key=lambda p: p.identifier)

    for note in parsed:
        rel = note.path.relative_to(vault_path).with_suffix("")
        names = [note.path.stem, rel.as_posix(), *note.aliases]
        store.add_note(Note(identifier=note.identifier, title=note.title), names=names, refs=note.refs)

    unresolved = 0
    for note in parsed:
        for target in note.links:
            dst = store.resolve(target)
            if dst is None:
                unresolved += 1
                continue
            store.add_link(note.identifier, dst, LINK_FILE)
        for key in note.cites:
            store.add_link(note.identifier, key, LINK_CITE)

    logger.debug(
        "Loaded %d notes, %d links (%d unresolved) from %s",
        len(store.notes),
        len(store.links),
        unresolved,
        vault_path,
    )
    return store
