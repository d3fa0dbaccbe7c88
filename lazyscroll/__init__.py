"""Public package surface for lazyscroll.

Exports the viewport engine types and ``main`` for programmatic CLI use.
"""

from __future__ import annotations

from .viewport import ScrollCommand, ViewportEngine, ViewportFrame, ViewportOptions


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["ScrollCommand", "ViewportEngine", "ViewportFrame", "ViewportOptions", "main"]
