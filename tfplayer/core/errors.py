"""Error types raised along the load-infer-print pipeline."""

from __future__ import annotations


class TfPlayerError(RuntimeError):
    """Base class for every failure the player reports."""


class GraphFormatError(TfPlayerError):
    """Model bytes do not describe a valid serialized graph."""


class NodeNotFoundError(TfPlayerError, KeyError):
    """A node name given on the command line is absent from the graph."""

    def __init__(self, node_name: str) -> None:
        super().__init__(f"Graph has no node named {node_name!r}.")
        self.node_name = node_name

    def __str__(self) -> str:
        # KeyError would otherwise quote the whole message.
        return str(self.args[0])


class ImageDecodeError(TfPlayerError):
    """Input image could not be decoded."""


class UnsupportedPixelFormatError(TfPlayerError, NotImplementedError):
    """Decoded image uses a pixel layout with no tensor assembly path."""

    def __init__(self, mode: str) -> None:
        super().__init__(f"Pixel format {mode!r} is not implemented; only 8-bit RGBA is supported.")
        self.mode = mode


class InferenceError(TfPlayerError):
    """The runtime failed to execute the graph or returned an unusable result."""
