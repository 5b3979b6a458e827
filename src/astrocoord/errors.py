"""Exception types raised by astrocoord.

``InvalidArgumentError`` subclasses :class:`ValueError` and
``NumericDomainError`` subclasses :class:`ArithmeticError`, so callers that
already catch the built-in types keep working.
"""


class AstroCoordError(Exception):
    """Base class for all astrocoord errors."""


class InvalidArgumentError(AstroCoordError, ValueError):
    """An argument lies outside its domain (latitude, declination, distance, ...)."""


class TransformationError(AstroCoordError):
    """A coordinate transformation cannot be carried out with the given inputs."""


class NumericDomainError(AstroCoordError, ArithmeticError):
    """A trigonometric argument fell outside its domain by more than rounding error."""
