"""Error taxonomy for pipeline validation.

Every structural check signals its own error kind. The fast path raises the
first one it meets; the comprehensive path records them as issues instead.
"""


class PipelineValidationError(Exception):
    """Base class for validation failures of a pipeline document."""

    kind = "ValidationError"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PipelineSyntaxError(PipelineValidationError):
    """Input is not parseable as JSON."""

    kind = "SyntaxError"

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        super().__init__(message)


class MissingRequiredField(PipelineValidationError):
    """A mandatory top-level field is absent."""

    kind = "MissingRequiredField"

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Missing required field: {field}")


class MissingDiscriminator(MissingRequiredField):
    """The pipeline class_id is absent or carries the wrong value."""

    kind = "MissingDiscriminator"

    def __init__(self, field: str, expected: str, found: str | None = None, present: bool = False):
        self.expected = expected
        self.found = found
        if present:
            message = f"Pipeline {field} is {found!r}, expected: {expected}"
        else:
            message = f"Missing pipeline {field}: {expected}"
        super().__init__(field, message)


class NoNodesFound(PipelineValidationError):
    """The snap section declares no snaps."""

    kind = "NoNodesFound"

    def __init__(self, message: str = "No snaps found in pipeline"):
        super().__init__(message)


class LinkCountMismatch(PipelineValidationError):
    """Link count does not satisfy the N snaps / N-1 links relationship."""

    kind = "LinkCountMismatch"

    def __init__(self, expected: int, found: int, node_count: int):
        self.expected = expected
        self.found = found
        self.node_count = node_count
        super().__init__(
            f"Snap/link count mismatch: {node_count} snaps should have "
            f"{expected} links, found {found}"
        )


class IdentifierCountMismatch(PipelineValidationError):
    """Distinct snap identifiers disagree with the number of snap entries."""

    kind = "IdentifierCountMismatch"

    def __init__(self, expected: int, found: int, detail: str = ""):
        self.expected = expected
        self.found = found
        message = (
            f"Snap identifier count mismatch: {expected} snap entries, "
            f"{found} distinct UUIDs"
        )
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class DanglingReference(PipelineValidationError):
    """A link endpoint does not resolve to a snap."""

    kind = "DanglingReference"

    def __init__(self, node_id: str | None, link_id: str, endpoint: str):
        self.node_id = node_id
        self.link_id = link_id
        self.endpoint = endpoint
        if node_id is None:
            message = f"Link {link_id} has no {endpoint}"
        else:
            message = f"UUID {node_id} referenced in link_map but not found in snap_map"
        super().__init__(message)


class ConfigError(ValueError):
    """Configuration file could not be loaded."""


class CatalogError(Exception):
    """Schema catalog lookup failed."""
