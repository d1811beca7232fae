"""Markdown parsing utilities for wiki-links, citations, and titles."""

import re

# Match [[target]], [[target|display]], [[target#section]], [[target#section|display]]
WIKILINK_PATTERN = re.compile(r"\[\[([^\]|#]+)(?:#[^\]|]+)?(?:\|[^\]]+)?\]\]")

H1_PATTERN = re.compile(r"^# (.+)$", re.MULTILINE)

CITE_PREFIX = "cite:"


def extract_links(content: str) -> list[str]:
    """Extract all wiki-link targets from content.

    Returns stripped link targets, deduplicated in document order.
    Citation targets (``cite:key``) are included verbatim.
    """
    seen = set()
    result = []
    for match in WIKILINK_PATTERN.findall(content):
        target = match.strip()
        if target and target not in seen:
            seen.add(target)
            result.append(target)
    return result


def split_citations(targets: list[str]) -> tuple[list[str], list[str]]:
    """Split link targets into (note targets, citation keys)."""
    notes: list[str] = []
    keys: list[str] = []
    for target in targets:
        if target.lower().startswith(CITE_PREFIX):
            key = target[len(CITE_PREFIX):].strip()
            if key:
                keys.append(key)
        else:
            notes.append(target)
    return notes, keys


def extract_title(content: str, frontmatter: dict) -> str | None:
    """Title from frontmatter, else the first H1 header, else None."""
    title = frontmatter.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    match = H1_PATTERN.search(content)
    if match:
        return match.group(1).strip()
    return None


def as_str_list(value) -> list[str]:
    """Coerce a frontmatter value (string or list) to a list of strings."""
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    return [str(v).strip() for v in value if str(v).strip()]
