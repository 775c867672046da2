"""Build documents and company profiles from plain mappings or files.

Loading is where upstream data meets the engine, so schema problems are
reported here as :class:`~billpress.utils.errors.DocumentValidationError`
rather than surfacing as pydantic errors mid-render.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from billpress.io import read_file
from billpress.utils.errors import DocumentValidationError

from .models import CompanyProfile, Document, Estimate, Transaction

__all__ = ["load_company", "load_document", "read_company", "read_document"]

_DOCUMENT_ADAPTER: TypeAdapter[Estimate | Transaction] = TypeAdapter(Document)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    where = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
    return f"{where}: {err.get('msg', 'invalid value')}"


def load_document(data: Mapping[str, Any]) -> Estimate | Transaction:
    """Validate ``data`` into an :class:`Estimate` or :class:`Transaction`."""

    try:
        return _DOCUMENT_ADAPTER.validate_python(dict(data))
    except ValidationError as exc:
        raise DocumentValidationError(f"invalid document: {_first_error(exc)}") from exc


def load_company(data: Mapping[str, Any]) -> CompanyProfile:
    """Validate ``data`` into a :class:`CompanyProfile`."""

    try:
        return CompanyProfile.model_validate(dict(data))
    except ValidationError as exc:
        raise DocumentValidationError(f"invalid company profile: {_first_error(exc)}") from exc


def _read_mapping(path: str | os.PathLike[str]) -> Mapping[str, Any]:
    data = read_file(path)
    if not isinstance(data, Mapping):
        raise DocumentValidationError(f"{os.fspath(path)}: expected a mapping at the top level")
    return data


def read_document(path: str | os.PathLike[str]) -> Estimate | Transaction:
    """Read and validate a document from a ``.json``/``.yml`` file."""

    return load_document(_read_mapping(path))


def read_company(path: str | os.PathLike[str]) -> CompanyProfile:
    """Read and validate a company profile from a ``.json``/``.yml`` file."""

    return load_company(_read_mapping(path))
