"""Shared helpers: typed errors, logging, date and money formatting."""
