"""Taskwarrior API: a REST interface over the Taskwarrior CLI."""

__version__ = "1.0.0"
