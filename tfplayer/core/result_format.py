"""Locale-independent text for output scalars."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from tfplayer.core.errors import InferenceError


def first_row(output: Any) -> NDArray[Any]:
    """Return the first row of an output tensor as a flat array."""
    values = np.asarray(output)
    if values.ndim == 0:
        raise InferenceError("Output tensor is a scalar; expected at least one dimension.")
    return values[0].reshape(-1)


def format_scalar(value: Any) -> str:
    """Format one scalar as shortest round-trip decimal text.

    The result never depends on the host locale: no grouping separators, a
    ``.`` decimal point, and no exponent notation, so very large values are
    written out in full (``1e20`` prints as ``100000000000000000000``).
    Non-finite values print as ``NaN``, ``Infinity`` and ``-Infinity``.
    """
    scalar = np.asarray(value)
    if scalar.shape != ():
        raise ValueError("format_scalar expects a single value.")
    if np.issubdtype(scalar.dtype, np.floating):
        if np.isnan(scalar):
            return "NaN"
        if np.isinf(scalar):
            return "Infinity" if scalar > 0 else "-Infinity"
        return np.format_float_positional(scalar[()], unique=True, trim="-")
    if np.issubdtype(scalar.dtype, np.integer) or scalar.dtype == np.bool_:
        return str(int(scalar))
    raise InferenceError(f"Cannot print output values of dtype {scalar.dtype}.")


def format_first_row(output: Any) -> list[str]:
    """Format each scalar of the output's first row."""
    return [format_scalar(value) for value in first_row(output)]
