"""
Engine error taxonomy.

Every failure raised by the learner-modeling engine derives from EngineError
so callers can catch engine problems without catching unrelated bugs.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for learner-modeling engine errors."""


class UnknownDomainError(EngineError, KeyError):
    """Raised when an operation names a domain absent from the registry or profile."""

    def __init__(self, domain: str, known: tuple[str, ...] = ()):
        self.domain = domain
        self.known = known
        message = f"Unknown domain: {domain!r}"
        if known:
            message += f" (known: {', '.join(known)})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class InvalidDifficultyError(EngineError, ValueError):
    """Raised when a difficulty label is not one of easy, medium, hard."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid difficulty level: {value!r}")


class RegistryError(EngineError, ValueError):
    """Raised when a domain registry is empty or lists a domain twice."""
