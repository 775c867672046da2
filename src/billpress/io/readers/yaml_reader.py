"""YAML reader for documents and company profiles."""

from __future__ import annotations

import os
from typing import Any

import yaml

PathLikeStr = os.PathLike[str]


def read_yaml(path: str | PathLikeStr, *, encoding: str = "utf-8-sig") -> Any:
    """Read ``path`` with :func:`yaml.safe_load`; empty files yield ``{}``."""

    with open(path, "r", encoding=encoding) as f:
        return yaml.safe_load(f) or {}


__all__ = ["read_yaml"]
