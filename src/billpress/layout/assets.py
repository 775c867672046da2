"""Embedded image assets.

Logos and signatures arrive as ``data:`` URLs (or bare base64).  Decoding is
pure; no file or network access happens here.
"""

from __future__ import annotations

import base64
import binascii

from billpress.utils.errors import AssetError

__all__ = ["decode_image_data"]


def decode_image_data(value: str) -> bytes:
    """Return the raw bytes of a ``data:`` URL or bare base64 string.

    Raises :class:`AssetError` when ``value`` is blank, is a non-base64 data
    URL, or does not decode.
    """

    text = value.strip()
    if not text:
        raise AssetError("image data is empty")
    if text.startswith("data:"):
        header, sep, payload = text.partition(",")
        if not sep:
            raise AssetError("malformed data URL")
        if not header.endswith(";base64"):
            raise AssetError("only base64 data URLs are supported")
        text = payload
    try:
        raw = base64.b64decode("".join(text.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AssetError(f"image data is not valid base64: {exc}") from exc
    if not raw:
        raise AssetError("image data is empty")
    return raw
