"""Typer-based command line interface for rendering documents.

``render`` reads a document and a company profile (``.json``/``.yml``), lays
the document out and writes the PDF.  ``plan`` performs the same layout with
the recording backend and prints where page breaks fall, without producing a
PDF.  ``totals`` prints the computed totals as JSON.

Exit codes
----------
0 success
3 I/O error (missing file, unsupported extension, unreadable content)
4 configuration error
5 document validation error
6 render error (height computation failure or other layout error)
7 negative grand total in strict mode
"""

from __future__ import annotations

import json
import os
import sys
from decimal import Decimal
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .document.loader import read_company, read_document
from .document.models import CompanyProfile, Estimate, Transaction
from .document.normalizer import NormalizedView, normalize
from .io import write_file
from .utils.errors import DocumentValidationError, RenderError, UnsupportedFormatError
from .utils.logging import configure_logging
from .utils.money import round_money

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

app = typer.Typer(
    name="billpress",
    help="Render quotations, invoices, receipts and bills to PDF.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


def _load_cfg(config_path: Path | None, verbose: bool) -> ConfigModel:
    configure_logging(verbose)
    try:
        cfg = load_config(config_path)
    except (ValidationError, yaml.YAMLError, OSError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    if verbose:
        typer.echo("Loaded config", err=True)
    return cfg


def _load_inputs(
    in_path: Path, company_path: Path, verbose: bool
) -> tuple[Estimate | Transaction, CompanyProfile]:
    try:
        document = read_document(in_path)
        company = read_company(company_path)
    except DocumentValidationError as exc:
        _safe_exit(5, str(exc))
    except (FileNotFoundError, UnsupportedFormatError, OSError) as exc:
        _safe_exit(3, str(exc))
    except (ValueError, yaml.YAMLError) as exc:
        _safe_exit(3, f"cannot parse input: {str(exc).splitlines()[0]}")
    if verbose:
        typer.echo(f"Read {document.kind} {document.number} ({len(document.items)} items)", err=True)
    return document, company


def _normalize(
    document: Estimate | Transaction, company: CompanyProfile, cfg: ConfigModel, strict: bool
) -> NormalizedView:
    try:
        view = normalize(document, company, cfg)
    except DocumentValidationError as exc:
        _safe_exit(5, str(exc))
    if strict and view.negative_total:
        _safe_exit(7, f"Grand total is negative: {round_money(view.totals.grand_total)}")
    return view


def _money(value: Decimal | None) -> str | None:
    return None if value is None else str(round_money(value))


@app.callback()
def main() -> None:
    """Entry point for the billpress command group."""
    pass


@app.command()
def render(  # noqa: PLR0913
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Document file (.json/.yml)"
    ),
    company_path: Path = typer.Option(  # noqa: B008
        ..., "--company", help="Company profile file (.json/.yml)"
    ),
    out_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--out", help="Output PDF path; overrides --out-dir"
    ),
    out_dir: Path = typer.Option(  # noqa: B008
        Path("."), "--out-dir", help="Directory for <DOCTYPE>-<number>.pdf"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
    strict: bool = typer.Option(  # noqa: B008
        False,
        "--strict/--no-strict",
        help="Exit non-zero when the grand total is negative",
    ),
) -> dict[str, str]:
    """Render a document to PDF."""

    from .layout.engine import render_view

    cfg = _load_cfg(config_path, verbose)
    document, company = _load_inputs(in_path, company_path, verbose)
    view = _normalize(document, company, cfg, strict)

    try:
        with Timing() as t_render:
            rendered = render_view(view, cfg)
    except RenderError as exc:
        _safe_exit(6, f"Render failed: {exc}")
    if verbose:
        typer.echo(f"Rendered {rendered.page_count} page(s) in {t_render.ms:.1f} ms", err=True)

    target = out_path if out_path is not None else out_dir / rendered.filename
    try:
        write_file(target, rendered.data)
    except (UnsupportedFormatError, OSError) as exc:
        _safe_exit(3, str(exc))
    typer.echo(str(target))
    return {"out": str(target), "pages": str(rendered.page_count)}


@app.command()
def plan(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Document file (.json/.yml)"
    ),
    company_path: Path = typer.Option(  # noqa: B008
        ..., "--company", help="Company profile file (.json/.yml)"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Lay a document out without writing a PDF and list its pages."""

    from .backends.recording import RecordingCanvas, RecordingTableRenderer
    from .layout.engine import lay_out

    cfg = _load_cfg(config_path, verbose)
    document, company = _load_inputs(in_path, company_path, verbose)
    view = _normalize(document, company, cfg, strict=False)

    canvas = RecordingCanvas(cfg)
    table = RecordingTableRenderer(cfg)
    try:
        controller = lay_out(canvas, table, view, cfg)
    except RenderError as exc:
        _safe_exit(6, f"Layout failed: {exc}")

    typer.echo(f"{view.filename}: {canvas.page_count} page(s)")
    reasons = {brk.page_index: brk.reason for brk in controller.breaks}
    for page in range(canvas.page_count):
        rows = [p.row for p in table.placements if p.page == page]
        span = f"rows {rows[0]}-{rows[-1]}" if rows else "no rows"
        reason = reasons.get(page, "first page")
        typer.echo(f"page {page + 1}: {reason}; {span}")


@app.command()
def totals(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Document file (.json/.yml)"
    ),
    company_path: Path = typer.Option(  # noqa: B008
        ..., "--company", help="Company profile file (.json/.yml)"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    strict: bool = typer.Option(  # noqa: B008
        False,
        "--strict/--no-strict",
        help="Exit non-zero when the grand total is negative",
    ),
) -> None:
    """Print the computed totals of a document as JSON."""

    cfg = _load_cfg(config_path, verbose=False)
    document, company = _load_inputs(in_path, company_path, verbose=False)
    view = _normalize(document, company, cfg, strict)
    t = view.totals
    payload = {
        "document": view.filename,
        "subtotal": _money(t.subtotal),
        "discount": _money(t.discount),
        "discounted_subtotal": _money(t.discounted_subtotal),
        "tax_percentage": None if t.tax_percentage is None else str(t.tax_percentage),
        "tax_amount": _money(t.tax_amount),
        "grand_total": _money(t.grand_total),
        "amount_in_words": view.amount_in_words,
        "negative_total": view.negative_total,
    }
    typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
