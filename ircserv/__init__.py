"""A small single-process IRC server with its parser, command handling and event loop."""

__version__ = "0.1.0"