"""PDF file writer.

The :func:`write_pdf` helper persists already-rendered PDF bytes.  Directories
required to store the file are created automatically.  The bytes are written
exactly as provided; encoding happens in the rendering backend.
"""

from __future__ import annotations

import os
from pathlib import Path

PathLikeStr = os.PathLike[str]


def write_pdf(path: str | PathLikeStr, data: bytes) -> None:
    """Write ``data`` to ``path``.

    Parameters
    ----------
    path:
        Destination file path.
    data:
        Complete PDF byte stream.

    Notes
    -----
    Parent directories are created with ``exist_ok=True``.
    """

    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("write_pdf expects bytes")
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "wb") as f:
        f.write(data)


__all__ = ["write_pdf"]
