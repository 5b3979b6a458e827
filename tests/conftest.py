import jax.numpy as jnp
import pytest

from astrocoord.config import set_default_eop, set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision and the all-zero default EOP before every test.

    Tests that need another dtype or EOP dataset set it themselves; the
    fixture restores the defaults afterwards so no state leaks between tests.
    """
    set_dtype(jnp.float64)
    set_default_eop(None)
    yield
    set_dtype(jnp.float64)
    set_default_eop(None)
