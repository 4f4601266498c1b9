from __future__ import annotations


class ConfigurationError(ValueError):
    """The question bank and filters cannot produce a session."""
