"""JSON reader.

:func:`read_json` loads a UTF-8 JSON file.  Numbers with a fractional part are
parsed as :class:`~decimal.Decimal` so monetary values keep the exact digits
written in the file.  ``FileNotFoundError`` and ``json.JSONDecodeError``
propagate to the caller.
"""

from __future__ import annotations

import json
import os
from decimal import Decimal
from typing import Any

PathLikeStr = os.PathLike[str]


def read_json(path: str | PathLikeStr, *, encoding: str = "utf-8-sig") -> Any:
    """Read and parse the JSON file at ``path``."""

    with open(path, "r", encoding=encoding) as f:
        return json.load(f, parse_float=Decimal)


__all__ = ["read_json"]
