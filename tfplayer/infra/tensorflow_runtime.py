"""TensorFlow implementation of the inference runtime contracts."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from google.protobuf.message import DecodeError

from tfplayer.core.errors import GraphFormatError, InferenceError, NodeNotFoundError
from tfplayer.core.runtime import GraphHandle, GraphNode
from tfplayer.shared.tf_runtime import require_tf_v1

logger = logging.getLogger(__name__)


class TensorFlowGraph:
    """Frozen ``GraphDef`` imported into its own ``tf.Graph``."""

    def __init__(self, graph: Any) -> None:
        self._graph = graph

    @property
    def tf_graph(self) -> Any:
        if self._graph is None:
            raise RuntimeError("Graph has been closed.")
        return self._graph

    def operations(self) -> list[GraphNode]:
        return [GraphNode(op_type=op.type, name=op.name) for op in self.tf_graph.get_operations()]

    def operation(self, name: str) -> GraphNode:
        try:
            op = self.tf_graph.get_operation_by_name(name)
        except (KeyError, ValueError) as exc:
            raise NodeNotFoundError(name) from exc
        return GraphNode(op_type=op.type, name=op.name)

    def tensor(self, slot_name: str) -> Any:
        """Resolve ``node:index`` to a graph tensor."""
        try:
            return self.tf_graph.get_tensor_by_name(slot_name)
        except (KeyError, ValueError) as exc:
            raise NodeNotFoundError(slot_name) from exc

    def close(self) -> None:
        self._graph = None

    def __enter__(self) -> TensorFlowGraph:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class TensorFlowSession:
    """``tf.compat.v1.Session`` bound to one imported graph."""

    def __init__(self, tf_v1: Any, graph: TensorFlowGraph, config: Any | None) -> None:
        self._tf_v1 = tf_v1
        self._graph = graph
        self._session = tf_v1.Session(graph=graph.tf_graph, config=config)

    def run(self, feeds: Mapping[str, Any], fetches: Sequence[str]) -> list[Any]:
        feed_dict = {self._graph.tensor(name): value for name, value in feeds.items()}
        fetch_tensors = [self._graph.tensor(name) for name in fetches]
        try:
            return list(self._session.run(fetch_tensors, feed_dict=feed_dict))
        except (self._tf_v1.errors.OpError, ValueError, TypeError) as exc:
            raise InferenceError(f"Graph execution failed: {exc}") from exc

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> TensorFlowSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class TensorFlowRuntime:
    """Loads frozen graphs and opens sessions through ``tf.compat.v1``."""

    def __init__(self, tf_v1: Any | None = None) -> None:
        self._tf_v1 = tf_v1 if tf_v1 is not None else require_tf_v1()

    def load_graph(self, graph_bytes: bytes) -> TensorFlowGraph:
        graph_def = self._tf_v1.GraphDef()
        try:
            graph_def.ParseFromString(graph_bytes)
        except DecodeError as exc:
            raise GraphFormatError(f"Model is not a serialized GraphDef: {exc}") from exc

        graph = self._tf_v1.Graph()
        with graph.as_default():
            try:
                self._tf_v1.import_graph_def(graph_def, name="")
            except ValueError as exc:
                raise GraphFormatError(f"Model graph cannot be imported: {exc}") from exc
        logger.info("Imported graph with %d nodes", len(graph_def.node))
        return TensorFlowGraph(graph)

    def create_session(self, graph: GraphHandle, config: bytes | None = None) -> TensorFlowSession:
        if not isinstance(graph, TensorFlowGraph):
            raise TypeError("TensorFlowRuntime sessions require a TensorFlowGraph.")
        session_config = None
        if config is not None:
            try:
                session_config = self._tf_v1.ConfigProto.FromString(config)
            except DecodeError as exc:
                raise InferenceError(f"Runtime rejected session config: {exc}") from exc
            logger.info("Using %d-byte session config", len(config))
        return TensorFlowSession(self._tf_v1, graph, session_config)
