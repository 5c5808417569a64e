"""Capability contracts for the external inference runtime."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

# Serialized session ConfigProto requesting GPU execution. Passed through as-is.
GPU_SESSION_CONFIG = bytes([0x32, 0x02, 0x20, 0x01])


@dataclass(frozen=True)
class GraphNode:
    """One operation in a loaded graph."""

    op_type: str
    name: str


class GraphHandle(Protocol):
    """Loaded, immutable computational graph."""

    def operations(self) -> list[GraphNode]:
        """Return every operation in graph order."""

    def operation(self, name: str) -> GraphNode:
        """Return the named operation or raise NodeNotFoundError."""

    def close(self) -> None:
        """Release runtime resources held by the graph."""

    def __enter__(self) -> GraphHandle: ...

    def __exit__(self, *exc_info: object) -> None: ...


class SessionHandle(Protocol):
    """Execution context bound to one graph."""

    def run(self, feeds: Mapping[str, Any], fetches: Sequence[str]) -> list[Any]:
        """Execute once, feeding tensors by name and returning one value per fetch."""

    def close(self) -> None:
        """Release runtime resources held by the session."""

    def __enter__(self) -> SessionHandle: ...

    def __exit__(self, *exc_info: object) -> None: ...


class InferenceRuntime(Protocol):
    """Factory for graphs and sessions."""

    def load_graph(self, graph_bytes: bytes) -> GraphHandle:
        """Parse a serialized graph or raise GraphFormatError."""

    def create_session(self, graph: GraphHandle, config: bytes | None = None) -> SessionHandle:
        """Open a session; ``config`` is an opaque runtime-specific blob."""


def session_config_for(force_gpu: bool) -> bytes | None:
    """Return the session config blob, or None for the runtime default."""
    return GPU_SESSION_CONFIG if force_gpu else None


def output_slot(node_name: str, index: int = 0) -> str:
    """Name a node's output tensor, e.g. ``input:0``."""
    return f"{node_name}:{index}"
