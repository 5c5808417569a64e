"""Runtime helpers for the optional TensorFlow dependency."""

from __future__ import annotations

import importlib
from typing import Any


def require_tensorflow() -> Any:
    """Load tensorflow lazily and fail with a clear installation message."""
    try:
        return importlib.import_module("tensorflow")
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "TensorFlow is required to load and run graphs. Install it with `pip install tensorflow`."
        ) from exc


def require_tf_v1() -> Any:
    """Return the graph-mode ``tf.compat.v1`` namespace."""
    return require_tensorflow().compat.v1
