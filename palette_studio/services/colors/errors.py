"""Error types raised by the color core."""


class InvalidInputError(ValueError):
    """A precondition violation: absent pixel buffer, malformed hex, bad count."""
