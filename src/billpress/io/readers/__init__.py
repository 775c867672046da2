"""File readers for structured document input."""
