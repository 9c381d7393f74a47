"""Domain-specific exceptions."""


class SearchError(Exception):
    pass


class IndexUnavailable(SearchError):
    """The term index could not be queried; fatal to the attempt."""


class ResolutionFailure(SearchError):
    """A single summary lookup failed; the identifier is dropped."""

    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"Summary lookup for {identifier!r} failed: {reason}")
        self.identifier = identifier
        self.reason = reason
