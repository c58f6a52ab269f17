"""Exceptions raised inside the tagging pipeline.

Only source adapters raise these; the orchestrator catches them per source.
"""


class TaggingError(Exception):
    """Base class for tagging errors."""


class ExtractionSourceFailure(TaggingError):
    """A candidate source errored or returned malformed data."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
