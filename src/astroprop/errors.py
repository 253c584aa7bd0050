"""Exception types raised by astroprop.

Each exception subclasses the builtin that describes the same situation,
so callers that already catch ``ValueError`` / ``RuntimeError`` keep
working:

- :class:`UndefinedError` -- a required sub-model (gravitational model,
  body definition) is not usable.
- :class:`UnsupportedConfigurationError` -- the requested physics
  combination is not implemented.
- :class:`ConstructionPreconditionError` -- an object was constructed from
  arguments that violate its preconditions (e.g. an empty list of child
  conditions).
"""

from __future__ import annotations


class UndefinedError(ValueError):
    """A required capability is undefined.

    Args:
        capability: Human-readable name of the missing capability, e.g.
            ``"Gravitational Model"``.
    """

    def __init__(self, capability: str) -> None:
        self.capability = capability
        super().__init__(f"{{{capability}}} is undefined.")


class UnsupportedConfigurationError(RuntimeError):
    """The requested configuration is not (yet) supported."""


class ConstructionPreconditionError(ValueError):
    """Constructor arguments violate a precondition."""
