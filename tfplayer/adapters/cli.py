"""Command-line adapter for running a frozen graph on one image."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from tfplayer.app.player import run_player
from tfplayer.config.settings import Settings, load_settings_from_env
from tfplayer.core.options import PlayerOptions


def build_argument_parser() -> argparse.ArgumentParser:
    """Create CLI parser."""
    parser = argparse.ArgumentParser(
        prog="tfplayer",
        description="Feed one image to a frozen TensorFlow graph and print the fetched values.",
    )
    parser.add_argument("input", help="Input image; only .png files are processed.")
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output path. Accepted for compatibility; results are printed to stdout.",
    )
    parser.add_argument("-m", "--model", required=True, help="path to model file")
    parser.add_argument(
        "-g",
        "--forceGPU",
        dest="force_gpu",
        action="store_true",
        help="force GPU through TF flags",
    )
    parser.add_argument(
        "-p",
        "--inputPlaceholderName",
        dest="input_placeholder_name",
        required=True,
        help="Input placeholder name",
    )
    parser.add_argument("-r", "--fetchFrom", dest="fetch_from", required=True, help="Fetch result from")
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose info")
    return parser


def parse_options(argv: Sequence[str] | None = None) -> PlayerOptions:
    """Parse command-line tokens; argparse exits with usage on failure."""
    arguments = build_argument_parser().parse_args(argv)
    return PlayerOptions(
        input_path=arguments.input,
        output_path=arguments.output,
        model_path=arguments.model,
        input_placeholder_name=arguments.input_placeholder_name,
        fetch_from=arguments.fetch_from,
        force_gpu=arguments.force_gpu,
        verbose=arguments.verbose,
    )


def configure_logging(settings: Settings) -> None:
    """Send diagnostics to stderr so stdout carries only results."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Run one load-infer-print cycle from command line."""
    options = parse_options(argv)
    try:
        settings = load_settings_from_env()
        configure_logging(settings)
        run_player(options, settings=settings)
    except (RuntimeError, OSError, ValueError) as exc:
        raise SystemExit(f"tfplayer: {exc}") from exc


if __name__ == "__main__":
    main()
