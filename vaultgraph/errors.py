"""Errors raised while selecting, serializing, and rendering a vault graph."""


class ConfigError(ValueError):
    """Malformed exclusion rule or style configuration."""


class EmptyOrigin(ValueError):
    """Component selection was requested without an identifiable origin note."""


class ToolMissing(RuntimeError):
    """A required external program could not be found on PATH."""

    def __init__(self, program: str):
        super().__init__(f"Can't find '{program}' executable. Install it or set 'executable' in the graph config.")
        self.program = program


class RenderFailed(RuntimeError):
    """The renderer ran but exited with an error."""
