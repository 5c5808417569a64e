"""Entrypoint script for running a frozen graph on one image."""

from tfplayer.adapters.cli import main


if __name__ == "__main__":
    main()
