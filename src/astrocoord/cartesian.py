"""Cartesian position and velocity of a body in a reference frame.

Positions are in AU and velocities in AU/day.  ``add`` and ``subtract``
modify the receiver and return it, so they can be chained; the ``+`` and
``-`` operators return new instances.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from .config import get_dtype
from .coordinates.spherical import (
    position_cartesian_to_spherical,
    position_spherical_to_cartesian,
)
from .epoch import Epoch
from .errors import InvalidArgumentError, TransformationError
from .frame import Frame


def _as_vector(value: ArrayLike, what: str) -> Array:
    vector = jnp.asarray(value, dtype=get_dtype())
    if vector.shape != (3,):
        raise InvalidArgumentError(
            f"{what} must have exactly 3 components, got shape {vector.shape}"
        )
    if not bool(jnp.all(jnp.isfinite(vector))):
        raise InvalidArgumentError(f"{what} must be finite")
    return vector


def _combine(a, b, op):
    if a is None:
        return None
    if b is None:
        return a
    return op(a, b)


class Cartesian:
    """Position (and optionally velocity) of a body.

    Args:
        frame: Reference frame of the vectors.
        epoch: Epoch of the state.
        position: ``[x, y, z]`` [AU].
        velocity: ``[vx, vy, vz]`` [AU/day], or ``None``.

    Raises:
        InvalidArgumentError: If a vector does not have exactly three finite
            components.

    Examples:
        ```python
        from astrocoord import Cartesian, Epoch, Frame
        c = Cartesian(Frame.ICRF(), Epoch.J2000(), [1.0, 0.0, 0.0])
        c.to_equatorial().ra  # 0.0
        ```
    """

    __slots__ = ("_frame", "_epoch", "_position", "_velocity")

    def __init__(
        self,
        frame: Frame,
        epoch: Epoch,
        position: ArrayLike,
        velocity: ArrayLike | None = None,
    ) -> None:
        if not isinstance(frame, Frame):
            raise InvalidArgumentError(f"frame must be a Frame, got {type(frame).__name__}")
        if not isinstance(epoch, Epoch):
            raise InvalidArgumentError(f"epoch must be an Epoch, got {type(epoch).__name__}")
        self._frame = frame
        self._epoch = epoch
        self._position = _as_vector(position, "Position")
        self._velocity = None if velocity is None else _as_vector(velocity, "Velocity")

    @classmethod
    def from_equatorial(cls, eq) -> Cartesian:
        """Build the Cartesian position of an equatorial place.

        Args:
            eq: :class:`~astrocoord.equatorial.Equatorial` with a distance.

        Returns:
            Cartesian: Position in the frame and epoch of ``eq``, no velocity.

        Raises:
            TransformationError: If ``eq`` has no distance.
        """
        if eq.dist is None:
            raise TransformationError("A distance is required to build a Cartesian position")
        position = position_spherical_to_cartesian(jnp.array([eq.ra, eq.dec, eq.dist]))
        return cls(eq.frame, eq.epoch, position)

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def epoch(self) -> Epoch:
        return self._epoch

    @property
    def position(self) -> Array:
        """Position ``[x, y, z]`` [AU]."""
        return self._position

    @property
    def velocity(self) -> Array | None:
        """Velocity ``[vx, vy, vz]`` [AU/day] or ``None``."""
        return self._velocity

    @property
    def x(self) -> float:
        return float(self._position[0])

    @property
    def y(self) -> float:
        return float(self._position[1])

    @property
    def z(self) -> float:
        return float(self._position[2])

    @property
    def vx(self) -> float | None:
        return None if self._velocity is None else float(self._velocity[0])

    @property
    def vy(self) -> float | None:
        return None if self._velocity is None else float(self._velocity[1])

    @property
    def vz(self) -> float | None:
        return None if self._velocity is None else float(self._velocity[2])

    @property
    def r(self) -> float:
        """Distance from the origin [AU]."""
        return float(jnp.linalg.norm(self._position))

    @property
    def vr(self) -> float | None:
        """Magnitude of the velocity [AU/day], or ``None`` without velocity."""
        if self._velocity is None:
            return None
        return float(jnp.linalg.norm(self._velocity))

    def add(self, other: Cartesian) -> Cartesian:
        """Add another state to this one in place.

        Velocities are added when both states carry one.  When only this
        state has a velocity it is kept unchanged; without one of its own
        the result has no velocity.

        Args:
            other: State to add.

        Returns:
            Cartesian: ``self``.
        """
        self._position = self._position + other._position
        self._velocity = _combine(self._velocity, other._velocity, jnp.add)
        return self

    def subtract(self, other: Cartesian) -> Cartesian:
        """Subtract another state from this one in place.

        Velocities follow the same rule as :meth:`add`.

        Args:
            other: State to subtract.

        Returns:
            Cartesian: ``self``.
        """
        self._position = self._position - other._position
        self._velocity = _combine(self._velocity, other._velocity, jnp.subtract)
        return self

    def __add__(self, other):
        if not isinstance(other, Cartesian):
            return NotImplemented
        return self.copy().add(other)

    def __sub__(self, other):
        if not isinstance(other, Cartesian):
            return NotImplemented
        return self.copy().subtract(other)

    def copy(self) -> Cartesian:
        return Cartesian(self._frame, self._epoch, self._position, self._velocity)

    def to_equatorial(self):
        """Convert the position to right ascension, declination and distance.

        Returns:
            Equatorial: Astrometric place in the same frame and epoch.

        Raises:
            InvalidArgumentError: If the position is the zero vector.
        """
        from .equatorial import Equatorial

        ra, dec, r = (float(v) for v in position_cartesian_to_spherical(self._position))
        if r == 0.0:
            raise InvalidArgumentError("Cannot convert a zero-length position to spherical")
        return Equatorial(self._frame, self._epoch, ra, dec, dist=r)

    def __repr__(self):
        velocity = None if self._velocity is None else [float(v) for v in self._velocity]
        return (
            f"Cartesian(frame={self._frame!s}, epoch={self._epoch!s}, "
            f"position={[float(p) for p in self._position]}, velocity={velocity})"
        )
