"""Allow `python -m dirtag`."""

from .cli import run

run()
