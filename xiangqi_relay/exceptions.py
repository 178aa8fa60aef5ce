class RelayError(Exception):
    """Base class for errors raised by the relay."""


class ProtocolError(RelayError):
    """An inbound payload is not a well-formed protocol message."""


class InvalidMoveError(RelayError, ValueError):
    """A move references a square outside the board."""
