from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import struct
import zlib
from pathlib import Path
from typing import Any

import numpy as np
import pytest
from PIL import Image

from tfplayer.core.errors import NodeNotFoundError
from tfplayer.core.runtime import GraphNode

DEFAULT_NODES = [
    GraphNode(op_type="Placeholder", name="input"),
    GraphNode(op_type="Const", name="weights"),
    GraphNode(op_type="MatMul", name="logits"),
]


class FakeGraph:
    """In-memory graph that records whether it was closed."""

    def __init__(self, nodes: list[GraphNode]) -> None:
        self.nodes = nodes
        self.closed = False

    def operations(self) -> list[GraphNode]:
        return list(self.nodes)

    def operation(self, name: str) -> GraphNode:
        for node in self.nodes:
            if node.name == name:
                return node
        raise NodeNotFoundError(name)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeGraph:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class FakeSession:
    def __init__(self, graph: FakeGraph, config: bytes | None, compute: Callable[[Any], Any]) -> None:
        self.graph = graph
        self.config = config
        self.compute = compute
        self.calls: list[tuple[dict[str, Any], list[str]]] = []
        self.closed = False

    def run(self, feeds: Mapping[str, Any], fetches: Sequence[str]) -> list[Any]:
        self.calls.append((dict(feeds), list(fetches)))
        (tensor,) = feeds.values()
        return [self.compute(tensor) for _ in fetches]

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class FakeRuntime:
    """Runtime double that sums the tensor over its height axis."""

    def __init__(
        self,
        nodes: list[GraphNode] | None = None,
        compute: Callable[[Any], Any] | None = None,
    ) -> None:
        self.nodes = list(DEFAULT_NODES if nodes is None else nodes)
        self.compute = compute or (lambda tensor: tensor.sum(axis=(2, 3)))
        self.loaded_bytes: list[bytes] = []
        self.graphs: list[FakeGraph] = []
        self.sessions: list[FakeSession] = []

    def load_graph(self, graph_bytes: bytes) -> FakeGraph:
        self.loaded_bytes.append(graph_bytes)
        graph = FakeGraph(self.nodes)
        self.graphs.append(graph)
        return graph

    def create_session(self, graph: FakeGraph, config: bytes | None = None) -> FakeSession:
        session = FakeSession(graph, config, self.compute)
        self.sessions.append(session)
        return session


@pytest.fixture
def fake_runtime() -> FakeRuntime:
    return FakeRuntime()


@pytest.fixture
def make_runtime() -> Callable[..., FakeRuntime]:
    return FakeRuntime


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    path = tmp_path / "model.pb"
    path.write_bytes(b"serialized-graph")
    return path


@pytest.fixture
def write_image(tmp_path: Path) -> Callable[..., Path]:
    """Write a PNG whose green channel is ``green`` (rows are y, columns x)."""

    def _write(name: str, green: list[list[int]], channels: int = 4) -> Path:
        green_array = np.asarray(green, dtype=np.uint8)
        height, width = green_array.shape
        if channels == 1:
            pixels = green_array
        else:
            pixels = np.zeros((height, width, channels), dtype=np.uint8)
            pixels[:, :, 0] = 7
            pixels[:, :, 1] = green_array
            pixels[:, :, 2] = 200
            if channels == 4:
                pixels[:, :, 3] = 255
        path = tmp_path / name
        Image.fromarray(pixels).save(path, format="PNG")
        return path

    return _write


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data) & 0xFFFFFFFF)


@pytest.fixture
def write_rgba16_image(tmp_path: Path) -> Callable[..., Path]:
    """Write a 16-bit-per-sample RGBA PNG; Pillow cannot save this layout itself."""

    def _write(name: str, green: list[list[int]]) -> Path:
        height, width = len(green), len(green[0])
        rows = b""
        for row in green:
            rows += b"\x00" + b"".join(struct.pack(">HHHH", 0x0100, value, 0x0300, 0xFFFF) for value in row)
        header = struct.pack(">IIBBBBB", width, height, 16, 6, 0, 0, 0)
        path = tmp_path / name
        path.write_bytes(
            b"\x89PNG\r\n\x1a\n"
            + _png_chunk(b"IHDR", header)
            + _png_chunk(b"IDAT", zlib.compress(rows))
            + _png_chunk(b"IEND", b"")
        )
        return path

    return _write
