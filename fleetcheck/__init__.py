"""Audit a directory of git clones for work that has not reached the remote."""

__version__ = "1.1.1"
