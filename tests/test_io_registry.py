"""Tests for the extension-based I/O registry."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from billpress.io import get_extension, read_file, write_file
from billpress.utils.errors import UnsupportedFormatError


def test_unknown_extension_raises(tmp_path: Path) -> None:
    path = tmp_path / "file.unknown"
    with pytest.raises(UnsupportedFormatError):
        read_file(path)
    with pytest.raises(UnsupportedFormatError):
        write_file(path, b"data")


def test_json_reader_keeps_decimal_digits(tmp_path: Path) -> None:
    path = tmp_path / "doc.json"
    path.write_text('{"unit_price": 10.10, "quantity": 3}', encoding="utf-8")
    data = read_file(path)
    assert data["unit_price"] == Decimal("10.10")
    assert data["quantity"] == 3


def test_yaml_reader_and_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "doc.yml"
    path.write_text("number: Q-1\nitems: []\n", encoding="utf-8")
    assert read_file(path) == {"number": "Q-1", "items": []}
    empty = tmp_path / "EMPTY.YAML"
    empty.write_text("", encoding="utf-8")
    assert read_file(empty) == {}


def test_pdf_writer_creates_parents(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "out.pdf"
    write_file(path, b"%PDF-1.4\n")
    assert path.read_bytes() == b"%PDF-1.4\n"


def test_pdf_writer_rejects_text(tmp_path: Path) -> None:
    with pytest.raises(TypeError):
        write_file(tmp_path / "out.pdf", "not bytes")  # type: ignore[arg-type]


def test_extension_case_insensitive() -> None:
    assert get_extension("SAMPLE.JSON") == ".json"
    assert get_extension("noext") == ""
