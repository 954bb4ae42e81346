"""Exception hierarchy for json2zig."""


class Json2ZigError(Exception):
    """Base exception for json2zig."""


class ConfigError(Json2ZigError):
    """Raised when renderer options or CLI parameters are invalid."""


class MalformedJsonError(Json2ZigError):
    """Raised when an input document is not valid JSON."""

    def __init__(self, source: str, detail: str):
        super().__init__(f"failed to parse json from {source}: {detail}")
        self.source = source
        self.detail = detail


class InferenceError(Json2ZigError):
    """Raised when a value tree cannot be turned into a type."""


class RenderError(Json2ZigError):
    """Raised when a type tree cannot be rendered."""


class OutputError(Json2ZigError):
    """Raised when writing rendered output fails."""
