import jax.numpy as jnp
import pytest

from vsopjax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Restore the float64 default before every test.

    Some tests opt down to narrower floats; the reference positions are
    checked to better than 1e-6, which float32 cannot resolve.
    """
    set_dtype(jnp.float64)
