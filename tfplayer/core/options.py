"""Immutable run configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlayerOptions:
    """Everything one load-infer-print cycle needs.

    ``output_path`` is accepted from the command line but not written to;
    results always go to standard output.
    """

    input_path: str
    model_path: str
    input_placeholder_name: str
    fetch_from: str
    output_path: str | None = None
    force_gpu: bool = False
    verbose: bool = False
