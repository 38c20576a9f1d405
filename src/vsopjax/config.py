"""Module-wide floating-point precision configuration.

Positions are computed in IEEE double precision by default: importing
vsopjax enables JAX's 64-bit mode (``jax_enable_x64``) and sets the active
dtype to ``jnp.float64``.  ``set_dtype`` lets a caller opt down to a
narrower float for GPU/TPU throughput when arcsecond accuracy is not needed.

Coefficient tables are stored as float64 NumPy arrays and cast to the active
dtype when a series is evaluated, so the dtype may be changed after the
tables have been loaded.  Under JIT, ``get_dtype()`` runs during tracing and
its result is baked into the compiled program.

Note:
    The VSOP87 longitude series grow linearly with time (the mean motion
    term of Mercury alone is about 26088 rad per millennium).  float32
    limits the angular accuracy to roughly 1e-4 rad a few decades away from
    J2000, well short of the theory's own precision.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

jax.config.update("jax_enable_x64", True)
_dtype = jnp.float64


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for vsopjax.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.

    Selecting ``jnp.float64`` (the default) re-enables JAX's 64-bit mode in
    case it was switched off after import.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype
