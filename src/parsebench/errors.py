"""Exceptions raised by the parse pipeline"""


class ParsebenchError(Exception):
    """Base class for all parsebench errors."""


class DiscoveryError(ParsebenchError):
    """Walking a root directory failed. Fatal to the whole run."""

    def __init__(self, root: str, cause: OSError):
        self.root = root
        self.cause = cause
        super().__init__(f'{root}: {cause}')


class ReadError(ParsebenchError):
    """A discovered file could not be read."""


class ParseError(ParsebenchError):
    """The parser rejected a file or produced no tree."""


class QueueSealedError(ParsebenchError):
    """Submission to a queue that has already been sealed."""


class QueueExhausted(ParsebenchError):
    """A sealed queue has no items left."""
