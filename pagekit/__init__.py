"""Section content model and static HTML export for no-code sites.

This package exposes the ``pagekit`` CLI used to export a site file as a
single HTML document and to edit its sections from the command line.

Exports
-------
- ``app``: Cyclopts application holding the subcommands.
- ``main``: Convenience function that invokes the app with logging set up.

Examples
--------
>>> from pagekit import app
>>> app.name[0]
'pagekit'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
