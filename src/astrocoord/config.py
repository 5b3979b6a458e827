"""Package-wide settings: float precision and the default EOP dataset.

Importing astrocoord turns on ``jax_enable_x64`` and selects
``jnp.float64``.  A Julian Date stored in float32 only resolves to about a
quarter of a day, so single precision is opt-in via ``set_dtype`` and only
sensible for large vectorised batches where arcsecond-level errors are
acceptable.  Change the dtype before anything is jitted; the value read
by ``get_dtype`` during tracing is compiled into the program.

Transformations that are not handed an ``eop=`` argument read the dataset
registered with ``set_default_eop``.  Until one is registered they use an
all-zero table, i.e. UT1 = UTC and no polar motion.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

# Supported dtypes mapped to the Epoch equality tolerance in seconds.
_EPOCH_TOLERANCE = {
    jnp.float64: 1e-6,
    jnp.float32: 1e-3,
}

jax.config.update("jax_enable_x64", True)
_dtype = jnp.float64

_default_eop = None


def set_dtype(dtype) -> None:
    """Select the float dtype for arrays created by astrocoord.

    Args:
        dtype: ``jnp.float64`` (default) or ``jnp.float32``.  Choosing
            float64 also re-enables ``jax_enable_x64``.

    Raises:
        ValueError: For any other dtype.
    """
    global _dtype
    if dtype not in _EPOCH_TOLERANCE:
        raise ValueError(
            f"Unsupported dtype {dtype}; use jnp.float64 or jnp.float32"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """The float dtype currently in effect."""
    return _dtype


def get_epoch_eq_tolerance() -> float:
    """Seconds within which two Epochs compare equal at the current dtype."""
    return _EPOCH_TOLERANCE[_dtype]


def set_default_eop(eop) -> None:
    """Register *eop* as the fallback Earth orientation dataset.

    Passing ``None`` goes back to the all-zero table.
    """
    global _default_eop
    _default_eop = eop


def get_default_eop():
    """The registered EOP dataset, or :func:`~astrocoord.eop.zero_eop`."""
    if _default_eop is None:
        from astrocoord.eop import zero_eop

        return zero_eop()
    return _default_eop
