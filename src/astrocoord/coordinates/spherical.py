"""Cartesian <-> spherical (right ascension, declination, distance) conversion.

The spherical triple is ``[ra, dec, r]`` with ``ra`` in ``[0, 2pi)`` and
``dec`` in ``[-pi/2, pi/2]``.  Both functions are ``jax.jit`` and
``jax.vmap`` compatible.  A zero-length vector has no direction; its
spherical form is returned as NaN angles and ``r = 0`` so that batched
callers can mask it.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astrocoord.config import get_dtype
from astrocoord.utils import from_radians, normalize_angle, to_radians


def position_cartesian_to_spherical(
    x: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert a Cartesian position to right ascension, declination and distance.

    Args:
        x: Position ``[x, y, z]``, any length unit.
        use_degrees: If ``True``, return angles in degrees.

    Returns:
        jax.Array: ``[ra, dec, r]`` with ``r`` in the unit of ``x``.

    Example:
        >>> import jax.numpy as jnp
        >>> from astrocoord.coordinates import position_cartesian_to_spherical
        >>> position_cartesian_to_spherical(jnp.array([0.0, 1.0, 0.0]), use_degrees=True)
        Array([90.,  0.,  1.], dtype=float64)
    """
    x = jnp.asarray(x, dtype=get_dtype())
    rxy = jnp.sqrt(x[0] * x[0] + x[1] * x[1])
    r = jnp.sqrt(rxy * rxy + x[2] * x[2])

    ra = normalize_angle(jnp.arctan2(x[1], x[0]))
    dec = jnp.arctan2(x[2], rxy)

    ra = jnp.where(r > 0.0, ra, jnp.nan)
    dec = jnp.where(r > 0.0, dec, jnp.nan)

    return jnp.array(
        [from_radians(ra, use_degrees), from_radians(dec, use_degrees), r]
    )


def position_spherical_to_cartesian(
    x_sph: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert right ascension, declination and distance to Cartesian.

    Args:
        x_sph: ``[ra, dec, r]``. Angles in *rad* (or *deg*).
        use_degrees: If ``True``, interpret angles as degrees.

    Returns:
        jax.Array: Position ``[x, y, z]`` in the unit of ``r``.
    """
    x_sph = jnp.asarray(x_sph, dtype=get_dtype())
    ra = to_radians(x_sph[0], use_degrees)
    dec = to_radians(x_sph[1], use_degrees)
    r = x_sph[2]

    cos_dec = jnp.cos(dec)
    return jnp.array(
        [r * cos_dec * jnp.cos(ra), r * cos_dec * jnp.sin(ra), r * jnp.sin(dec)]
    )
