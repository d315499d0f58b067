"""Error contracts and bundled JSON schemas for crimelog."""

from .error import (
    BadInputError,
    EnvelopeError,
    ErrorEnvelope,
    Exit,
    InvalidIdentifierError,
    InvariantError,
    IOErrorEnvelope,
    PolicyError,
    die,
    guard_cli,
)

__all__ = [
    "BadInputError",
    "EnvelopeError",
    "ErrorEnvelope",
    "Exit",
    "InvalidIdentifierError",
    "InvariantError",
    "IOErrorEnvelope",
    "PolicyError",
    "die",
    "guard_cli",
]
