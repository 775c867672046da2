"""Extension based registry for file I/O.

Readers for ``.json``, ``.yml`` and ``.yaml`` load structured input (documents
and company profiles) and return the parsed value.  A ``.pdf`` writer persists
rendered bytes.  The registry dispatches based on the file extension and
performs no validation of the content; that is the job of
:mod:`billpress.document.loader`.

``UnsupportedFormatError`` is raised when attempting to read or write a file
whose extension has no registered handler.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

from ..utils.errors import UnsupportedFormatError
from .readers.json_reader import read_json
from .readers.yaml_reader import read_yaml
from .writers.pdf_writer import write_pdf

ReaderFunc = Callable[[str | os.PathLike[str]], Any]
WriterFunc = Callable[[str | os.PathLike[str], bytes], None]

_READERS: dict[str, Callable[..., Any]] = {}
_WRITERS: dict[str, Callable[..., None]] = {}


def register_reader(ext: str, func: Callable[..., Any]) -> None:
    """Register a reader for files ending with ``ext``.

    Parameters
    ----------
    ext:
        File extension including the dot (e.g. ``".json"``).  Matching is
        case-insensitive.
    func:
        Callable that reads a file and returns the parsed value.
    """

    _READERS[ext.lower()] = func


def register_writer(ext: str, func: Callable[..., None]) -> None:
    """Register a writer for files ending with ``ext``."""

    _WRITERS[ext.lower()] = func


def get_extension(path: str | os.PathLike[str]) -> str:
    """Return the lower-cased file extension of ``path`` (including the dot).

    Returns an empty string when the path has no extension.
    """

    suffix = Path(path).suffix
    return suffix.lower() if suffix else ""


def read_file(path: str | os.PathLike[str], **kwargs: Any) -> Any:
    """Read ``path`` using the registered reader for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no reader is registered for the file extension.
    """

    ext = get_extension(path)
    reader = _READERS.get(ext)
    if reader is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    return reader(path, **kwargs)


def write_file(path: str | os.PathLike[str], data: bytes, **kwargs: Any) -> None:
    """Write ``data`` to ``path`` using the registered writer for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no writer is registered for the file extension.
    """

    ext = get_extension(path)
    writer = _WRITERS.get(ext)
    if writer is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    writer(path, data, **kwargs)


register_reader(".json", read_json)
register_reader(".yml", read_yaml)
register_reader(".yaml", read_yaml)
register_writer(".pdf", write_pdf)

__all__ = [
    "ReaderFunc",
    "WriterFunc",
    "register_reader",
    "register_writer",
    "get_extension",
    "read_file",
    "write_file",
]
