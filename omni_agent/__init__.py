"""Omni agent: container lifecycle management over HTTP."""

__version__ = "0.1.1"
