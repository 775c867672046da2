"""Layout and pagination engine for quotations, invoices, receipts and bills.

The package turns a semantic business document plus a company profile into a
paginated A4 PDF.  :func:`render` is the main entry point; the ``billpress``
command line tool wraps it for JSON/YAML inputs.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .layout.engine import render, render_document

__all__ = ["__version__", "render", "render_document"]
