"""Typed exceptions for document validation, rendering and I/O formats."""


class RenderError(Exception):
    """Base class for errors raised while rendering a document."""


class DocumentValidationError(RenderError, ValueError):
    """Raised when a document cannot be rendered as supplied.

    Covers empty item lists, unknown document kinds and schema errors found
    while loading a document or company profile.  Always raised before any
    drawing starts.
    """


class AssetError(RenderError):
    """Raised when an embedded image (logo, signature) cannot be decoded."""


class OverflowComputationError(RenderError, ArithmeticError):
    """Raised when a height estimate is negative or undefined."""


class IOFormatError(ValueError):
    """Base class for I/O format related errors."""


class UnsupportedFormatError(IOFormatError):
    """Raised when no reader or writer is registered for a file format."""
