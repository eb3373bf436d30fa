from __future__ import annotations


class InvalidInput(ValueError):
    """
    Raised when a process set or quantum cannot be simulated.

    Always raised before any scheduling work starts, so a caller never sees a
    partial timeline.
    """
