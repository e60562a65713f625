"""Multi-tenant note-taking API."""

__version__ = "1.0.0"
