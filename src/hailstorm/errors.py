class HailstormError(Exception):
    """Base class for failures that abort a whole load run."""


class IncompleteRunError(HailstormError):
    """A run could not account for every request it was asked to make."""


class CollectorClosedError(HailstormError):
    """A result was delivered after the collector stopped accepting them."""
