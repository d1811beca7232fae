"""Run Graphviz on DOT text and open the resulting image."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

import click

from .errors import RenderFailed, ToolMissing

logger = logging.getLogger(__name__)


def find_executable(program: str) -> str:
    """Absolute path of `program`, or ToolMissing."""
    found = shutil.which(program)
    if found is None:
        raise ToolMissing(program)
    return found


def render(text: str, *, executable: str = "dot", filetype: str = "svg", out: Path | None = None) -> Path:
    """Render DOT `text` to an image with `executable` and return its path."""
    exe = find_executable(executable)

    with tempfile.NamedTemporaryFile("w", suffix=".dot", prefix="graph.", delete=False, encoding="utf-8") as fh:
        fh.write(text)
        dot_path = Path(fh.name)

    created_out = out is None
    if created_out:
        with tempfile.NamedTemporaryFile(suffix=f".{filetype}", prefix="graph.", delete=False) as fh:
            out = Path(fh.name)

    cmd = [exe, str(dot_path), "-T", filetype, "-o", str(out)]
    logger.debug("Running %s", " ".join(cmd))
    result = subprocess.run(cmd, capture_output=True, text=True)
    if result.returncode != 0:
        if created_out:
            out.unlink(missing_ok=True)
        raise RenderFailed(f"{executable} exited with {result.returncode}: {result.stderr.strip()}")

    dot_path.unlink(missing_ok=True)
    return out


def view(path: Path, viewer: str | None = None) -> None:
    """Open `path` in `viewer`, falling back to the system file viewer."""
    if viewer:
        exe = shutil.which(viewer)
        if exe is not None:
            subprocess.Popen([exe, str(path)])
            return
        logger.info("Viewer '%s' not found, falling back to the default viewer", viewer)
    click.launch(str(path))
