"""Use-case orchestration for one load-infer-print cycle."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from tfplayer.config.settings import Settings, load_settings_from_env
from tfplayer.core.errors import InferenceError
from tfplayer.core.options import PlayerOptions
from tfplayer.core.pixels import PixelBuffer
from tfplayer.core.result_format import format_first_row
from tfplayer.core.runtime import GraphNode, InferenceRuntime, output_slot, session_config_for
from tfplayer.core.tensor_assembly import assemble_input_tensor
from tfplayer.infra.image_decoder import decode_image, is_supported_image_path
from tfplayer.infra.tensorflow_runtime import TensorFlowRuntime

logger = logging.getLogger(__name__)

ImageDecoder = Callable[[str], PixelBuffer]


@dataclass(frozen=True)
class PlayerResult:
    """What one run listed and printed."""

    nodes: list[GraphNode] = field(default_factory=list)
    input_shape: tuple[int, ...] | None = None
    values: list[str] = field(default_factory=list)
    skipped: bool = False


def run_player(
    options: PlayerOptions,
    runtime: InferenceRuntime | None = None,
    decoder: ImageDecoder = decode_image,
    output: TextIO | None = None,
    settings: Settings | None = None,
) -> PlayerResult:
    """Load the graph, run it once on the input image and print the first output row.

    Lines are written to ``output`` as soon as they are known, so the verbose
    node listing is visible even when inference later fails. Graph and
    session are closed on every exit path.
    """
    stream = output if output is not None else sys.stdout
    active_settings = settings or load_settings_from_env()
    if options.output_path:
        logger.debug("Output path %s is accepted but not used", options.output_path)

    graph_bytes = Path(options.model_path).read_bytes()
    logger.info("Read %d bytes from %s", len(graph_bytes), options.model_path)
    if runtime is None:
        runtime = TensorFlowRuntime()

    with runtime.load_graph(graph_bytes) as graph:
        config = session_config_for(options.force_gpu)
        with runtime.create_session(graph, config) as session:
            nodes: list[GraphNode] = []
            if options.verbose:
                nodes = graph.operations()
                for node in nodes:
                    _write_line(stream, format_graph_node(node))

            if not is_supported_image_path(options.input_path, active_settings.image_extension):
                logger.warning(
                    "Skipping %s: only %s inputs are processed",
                    options.input_path,
                    active_settings.image_extension,
                )
                return PlayerResult(nodes=nodes, skipped=True)

            pixels = decoder(options.input_path)
            graph.operation(options.input_placeholder_name)
            graph.operation(options.fetch_from)

            tensor = assemble_input_tensor(pixels)
            logger.info("Assembled input tensor with shape %s", tensor.shape)

            outputs = session.run(
                {output_slot(options.input_placeholder_name): tensor},
                [output_slot(options.fetch_from)],
            )
            if len(outputs) != 1:
                raise InferenceError(f"Expected exactly one output tensor, got {len(outputs)}.")

            values = format_first_row(outputs[0])
            for value in values:
                _write_line(stream, value)

    return PlayerResult(nodes=nodes, input_shape=tuple(tensor.shape), values=values)


def format_graph_node(node: GraphNode) -> str:
    """Render one node for the verbose listing."""
    return f"OT: {node.op_type} {node.name}"


def _write_line(stream: TextIO, line: str) -> None:
    stream.write(line + "\n")
