"""dirtag - tag directories and find them again by tag."""

__version__ = "0.1.0"
