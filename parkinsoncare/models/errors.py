from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when a scorer or parser receives input it cannot use."""
