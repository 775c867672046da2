"""File writers for rendered output."""
